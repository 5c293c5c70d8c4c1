# (C) 2021 GoodData Corporation
from typing import Any, Optional

_DEFAULT_KEYWORD = "DEFAULT"
_TRUE_FLAGS = frozenset(["T", "Y", "YES", "TRUE", "1"])


def _trim_name(val: Optional[str]) -> Optional[str]:
    """
    Object names stored in CHAR columns are padded with spaces; engines before 3.0 return them untrimmed.

    :param val: name to trim
    :return: name without trailing spaces; None stays None
    """
    if val is None:
        return None

    return val.rstrip(" ")


def _to_bool(val: Any) -> bool:
    """
    Converts flag read from the system tables to bool. Older engines have no boolean type and the queries return
    'T'/'F' strings or 0/1 integers instead.

    :param val: flag value, None is false
    :return: bool
    """
    if val is None:
        return False
    elif isinstance(val, str):
        return val.strip().upper() in _TRUE_FLAGS

    return bool(val)


def _extract_default(default_source: Optional[str]) -> Optional[str]:
    """
    Extracts the default value from the source of the DEFAULT clause as stored in RDB$DEFAULT_SOURCE.

    :param default_source: source of the default clause, e.g. "DEFAULT 'abc'" (may be None)
    :return: default value expression, e.g. "'abc'"; None if there is no default
    """
    if not default_source:
        return None

    prefix = default_source[: len(_DEFAULT_KEYWORD)]

    if len(default_source) > len(_DEFAULT_KEYWORD) and prefix.upper() == _DEFAULT_KEYWORD:
        return default_source[len(_DEFAULT_KEYWORD) :].strip()

    return default_source.strip()


def _quote_identifier(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def _to_specific_name(catalog: Optional[str], name: Optional[str]) -> Optional[str]:
    """
    Creates name uniquely identifying a routine. Routines outside packages are identified by their name, packaged
    routines by the quoted package and routine name.

    :param catalog: package name; None or empty string for routines outside packages
    :param name: routine name
    :return: specific name
    """
    if not catalog or name is None:
        return name

    return _quote_identifier(catalog) + "." + _quote_identifier(name)
