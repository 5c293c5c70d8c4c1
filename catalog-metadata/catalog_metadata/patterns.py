# (C) 2021 GoodData Corporation
import re
from enum import Enum
from typing import Callable, Optional

ESCAPE_CHAR = "\\"
_ANY_RUN = "%"
_ANY_CHAR = "_"
_SPECIAL_CHARS = frozenset([ESCAPE_CHAR, _ANY_RUN, _ANY_CHAR])
_ALL_PATTERN = "%"


class ConditionType(Enum):
    """
    Kind of condition a metadata pattern compiles to.
    """

    NONE = "none"
    """no condition at all; everything matches, including null"""

    EQUALS = "equals"
    """pattern without wildcards; compared for equality"""

    STARTS_WITH = "starts-with"
    """pattern with a single trailing '%'; compared as prefix"""

    LIKE = "like"
    """any other pattern with wildcards"""

    IS_NULL = "is-null"
    """value must be null; never produced from a pattern string"""


def escape_wildcards(name: Optional[str]) -> Optional[str]:
    """
    Escapes the pattern special characters so that the name can be used as a pattern that matches just itself.

    :param name: object name to escape, may be None
    :return: escaped name or None
    """
    if name is None:
        return None

    return "".join(ESCAPE_CHAR + ch if ch in _SPECIAL_CHARS else ch for ch in name)


def _scan(pattern: str):
    """
    Splits pattern into tokens. Yields tuples (is_wildcard, char). Escaped special characters and a backslash
    that escapes nothing are yielded as literals.
    """
    idx = 0
    length = len(pattern)

    while idx < length:
        ch = pattern[idx]

        if ch == ESCAPE_CHAR:
            if idx + 1 < length and pattern[idx + 1] in _SPECIAL_CHARS:
                yield False, pattern[idx + 1]
                idx += 2
                continue

            yield False, ch
        elif ch in (_ANY_RUN, _ANY_CHAR):
            yield True, ch
        else:
            yield False, ch

        idx += 1


class MetadataPattern:
    """
    Compiled form of a JDBC metadata search pattern. Pattern syntax: '%' matches any run of characters, '_' matches
    one character and backslash escapes '%', '_' and itself.

    Patterns are classified so that the cheapest SQL condition can be used: equality for literal patterns,
    'starting with' for simple prefixes and LIKE only for anything else.
    """

    def __init__(self, condition_type: ConditionType, condition_value: Optional[str] = None):
        self._condition_type = condition_type
        self._condition_value = condition_value

    @staticmethod
    def compile(pattern: Optional[str]) -> "MetadataPattern":
        """
        Compiles metadata pattern.

        :param pattern: pattern to compile; None or '%' mean no condition; empty string is a real condition
        :return: compiled pattern
        """
        if pattern is None or pattern == _ALL_PATTERN:
            return _MATCH_ALL

        tokens = list(_scan(pattern))
        wildcard_positions = [idx for idx, (is_wildcard, _) in enumerate(tokens) if is_wildcard]

        if not wildcard_positions:
            return MetadataPattern(ConditionType.EQUALS, "".join(ch for _, ch in tokens))

        if wildcard_positions == [len(tokens) - 1] and tokens[-1][1] == _ANY_RUN:
            return MetadataPattern(ConditionType.STARTS_WITH, "".join(ch for _, ch in tokens[:-1]))

        like_value = "".join(
            ch if is_wildcard else (ESCAPE_CHAR + ch if ch in _SPECIAL_CHARS else ch) for is_wildcard, ch in tokens
        )

        return MetadataPattern(ConditionType.LIKE, like_value)

    @staticmethod
    def is_null_pattern() -> "MetadataPattern":
        return _MATCH_NULL

    @staticmethod
    def equals(value: str) -> "MetadataPattern":
        """
        Creates pattern comparing for equality with the value; wildcards in the value are not interpreted.
        """
        return MetadataPattern(ConditionType.EQUALS, value)

    @property
    def condition_type(self) -> ConditionType:
        return self._condition_type

    @property
    def condition_value(self) -> Optional[str]:
        """
        Literal for EQUALS, prefix for STARTS_WITH and the pattern with canonical escapes for LIKE. None for
        NONE and IS_NULL.
        """
        return self._condition_value

    def to_matcher(self) -> Callable[[Optional[str]], bool]:
        """
        Creates function matching values against this pattern in memory with the same semantics as the SQL
        condition the pattern compiles to.

        :return: function taking value (may be None) and returning True if it matches
        """
        if self._condition_type == ConditionType.NONE:
            return _match_all
        elif self._condition_type == ConditionType.IS_NULL:
            return _match_null
        elif self._condition_type == ConditionType.EQUALS:
            literal = self._condition_value

            return lambda value: value is not None and value == literal
        elif self._condition_type == ConditionType.STARTS_WITH:
            prefix = self._condition_value

            return lambda value: value is not None and value.startswith(prefix)

        regex = _like_to_regex(self._condition_value)

        return lambda value: value is not None and regex.fullmatch(value) is not None

    def __eq__(self, other):
        if not isinstance(other, MetadataPattern):
            return NotImplemented

        return self._condition_type == other._condition_type and self._condition_value == other._condition_value

    def __hash__(self):
        return hash((self._condition_type, self._condition_value))

    def __repr__(self):
        return f"MetadataPattern({self._condition_type.name}, {self._condition_value!r})"


def _match_all(_value: Optional[str]) -> bool:
    return True


def _match_null(value: Optional[str]) -> bool:
    return value is None


def _like_to_regex(like_pattern: str) -> "re.Pattern":
    parts = []
    pending = []

    def _flush():
        if pending:
            parts.append(re.escape("".join(pending)))
            pending.clear()

    idx = 0
    length = len(like_pattern)
    while idx < length:
        ch = like_pattern[idx]

        if ch == _ANY_CHAR:
            _flush()
            parts.append(".")
        elif ch == _ANY_RUN:
            _flush()
            parts.append(".*")
        elif ch == ESCAPE_CHAR and idx + 1 < length and like_pattern[idx + 1] in _SPECIAL_CHARS:
            pending.append(like_pattern[idx + 1])
            idx += 1
        else:
            # includes a backslash escaping nothing
            pending.append(ch)

        idx += 1

    _flush()

    return re.compile("".join(parts), re.DOTALL)


_MATCH_ALL = MetadataPattern(ConditionType.NONE)
_MATCH_NULL = MetadataPattern(ConditionType.IS_NULL)
