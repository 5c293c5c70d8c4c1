# (C) 2021 GoodData Corporation
from typing import Iterable, Optional

from catalog_metadata.patterns import ESCAPE_CHAR, ConditionType, MetadataPattern


def _sql_string_literal(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


class Clause:
    """
    Condition on a single column expression of a metadata query, created from a metadata pattern.

    EQUALS and STARTS_WITH conditions bind their value through a '?' parameter. LIKE conditions embed the pattern
    as a string literal: the pattern is re-rendered with canonical escapes when compiled and quotes are doubled
    here, so no caller input ends up in the SQL text unescaped.
    """

    def __init__(
        self, column_name: str, pattern: Optional[str] = None, metadata_pattern: Optional[MetadataPattern] = None
    ):
        self._column_name = column_name
        self._pattern = metadata_pattern if metadata_pattern is not None else MetadataPattern.compile(pattern)
        self._condition, self._value = self._render()

    @staticmethod
    def equals_clause(column_name: str, value: Optional[str]) -> "Clause":
        """
        Creates clause requiring exact match with the value; None means no condition.
        """
        if value is None:
            return Clause(column_name, None)

        return Clause(column_name, metadata_pattern=MetadataPattern.equals(value))

    @staticmethod
    def is_null_clause(column_name: str) -> "Clause":
        return Clause(column_name, metadata_pattern=MetadataPattern.is_null_pattern())

    @staticmethod
    def raw(condition: str) -> "Clause":
        """
        Creates clause with constant condition; the condition must not contain any parameter placeholders.
        """
        clause = Clause(condition, None)
        clause._condition = condition

        return clause

    def _render(self):
        condition_type = self._pattern.condition_type
        value = self._pattern.condition_value

        if condition_type == ConditionType.EQUALS:
            return f"{self._column_name} = ?", value
        elif condition_type == ConditionType.STARTS_WITH:
            return f"{self._column_name} starting with ?", value
        elif condition_type == ConditionType.LIKE:
            return (
                f"trim(trailing from {self._column_name}) like {_sql_string_literal(value)} "
                f"escape {_sql_string_literal(ESCAPE_CHAR)}",
                None,
            )
        elif condition_type == ConditionType.IS_NULL:
            return f"{self._column_name} is null", None

        return "", None

    @property
    def column_name(self) -> str:
        return self._column_name

    @property
    def pattern(self) -> MetadataPattern:
        return self._pattern

    @property
    def value(self) -> Optional[str]:
        return self._value

    def has_condition(self) -> bool:
        return self._condition != ""

    def has_value(self) -> bool:
        return self._value is not None

    def get_condition(self, include_and: bool = True) -> str:
        """
        :param include_and: append ' and ' after the condition
        :return: condition, empty string if this clause has no condition
        """
        if not self.has_condition():
            return ""

        if include_and:
            return self._condition + " and "

        return self._condition

    def get_condition_wrapped(self, prefix: str, suffix: str) -> str:
        if not self.has_condition():
            return ""

        return prefix + self._condition + suffix

    def __repr__(self):
        return f"Clause({self._condition!r}, {self._value!r})"


def any_condition(clauses: Iterable[Clause]) -> bool:
    return any(clause.has_condition() for clause in clauses)


def parameters(clauses: Iterable[Clause]) -> list[str]:
    """
    Values to bind for the conjunction of the clauses, in the order of their placeholders.
    """
    return [clause.value for clause in clauses if clause.has_condition() and clause.has_value()]


def conjunction(clauses: Iterable[Clause]) -> str:
    return "\nand ".join(clause.get_condition(include_and=False) for clause in clauses if clause.has_condition())
