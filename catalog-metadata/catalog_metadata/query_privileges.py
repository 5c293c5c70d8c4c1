# (C) 2021 GoodData Corporation
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import MetadataColumnPrivilegeRow, MetadataTablePrivilegeRow
from catalog_metadata.query_base import StrategyTable, VersionedQueryStrategy
from catalog_metadata.rows import RowAssembler
from catalog_metadata.utils import _to_bool, _trim_name

PRIVILEGE_NAMES = {
    "A": "ALL",
    "S": "SELECT",
    "D": "DELETE",
    "I": "INSERT",
    "U": "UPDATE",
    "R": "REFERENCES",
    "M": "MEMBEROF",
}
"""one-letter privilege codes of RDB$USER_PRIVILEGES.RDB$PRIVILEGE"""

_TABLE_PRIVILEGE_CONDITION = "RDB$OBJECT_TYPE = 0 and RDB$FIELD_NAME is null"

_TABLE_PRIVILEGES_2_5 = """select
  RDB$RELATION_NAME as TABLE_NAME,
  RDB$GRANTOR as GRANTOR,
  RDB$USER as GRANTEE,
  RDB$PRIVILEGE as PRIVILEGE,
  RDB$GRANT_OPTION as IS_GRANTABLE
from RDB$USER_PRIVILEGES"""

_TABLE_PRIVILEGES_3 = """select
  trim(trailing from RDB$RELATION_NAME) as TABLE_NAME,
  trim(trailing from RDB$GRANTOR) as GRANTOR,
  trim(trailing from RDB$USER) as GRANTEE,
  RDB$PRIVILEGE as PRIVILEGE,
  RDB$GRANT_OPTION as IS_GRANTABLE
from RDB$USER_PRIVILEGES"""

_TABLE_PRIVILEGES_6 = """select
  trim(trailing from RDB$RELATION_NAME) as TABLE_NAME,
  trim(trailing from RDB$GRANTOR) as GRANTOR,
  trim(trailing from RDB$USER) as GRANTEE,
  RDB$PRIVILEGE as PRIVILEGE,
  RDB$GRANT_OPTION as IS_GRANTABLE,
  trim(trailing from RDB$RELATION_SCHEMA_NAME) as TABLE_SCHEM
from RDB$USER_PRIVILEGES"""

_COLUMN_PRIVILEGES_2_5 = """select
  RF.RDB$RELATION_NAME as TABLE_NAME,
  RF.RDB$FIELD_NAME as COLUMN_NAME,
  UP.RDB$GRANTOR as GRANTOR,
  UP.RDB$USER as GRANTEE,
  UP.RDB$PRIVILEGE as PRIVILEGE,
  UP.RDB$GRANT_OPTION as IS_GRANTABLE
from RDB$RELATION_FIELDS RF
inner join RDB$USER_PRIVILEGES UP
  on UP.RDB$RELATION_NAME = RF.RDB$RELATION_NAME
    and (UP.RDB$FIELD_NAME is null or UP.RDB$FIELD_NAME = RF.RDB$FIELD_NAME)"""

_COLUMN_PRIVILEGES_3 = """select
  trim(trailing from RF.RDB$RELATION_NAME) as TABLE_NAME,
  trim(trailing from RF.RDB$FIELD_NAME) as COLUMN_NAME,
  trim(trailing from UP.RDB$GRANTOR) as GRANTOR,
  trim(trailing from UP.RDB$USER) as GRANTEE,
  UP.RDB$PRIVILEGE as PRIVILEGE,
  UP.RDB$GRANT_OPTION as IS_GRANTABLE
from RDB$RELATION_FIELDS RF
inner join RDB$USER_PRIVILEGES UP
  on UP.RDB$RELATION_NAME = RF.RDB$RELATION_NAME
    and (UP.RDB$FIELD_NAME is null or UP.RDB$FIELD_NAME = RF.RDB$FIELD_NAME)"""

_COLUMN_PRIVILEGES_6 = """select
  trim(trailing from RF.RDB$RELATION_NAME) as TABLE_NAME,
  trim(trailing from RF.RDB$FIELD_NAME) as COLUMN_NAME,
  trim(trailing from UP.RDB$GRANTOR) as GRANTOR,
  trim(trailing from UP.RDB$USER) as GRANTEE,
  UP.RDB$PRIVILEGE as PRIVILEGE,
  UP.RDB$GRANT_OPTION as IS_GRANTABLE,
  trim(trailing from RF.RDB$SCHEMA_NAME) as TABLE_SCHEM
from RDB$RELATION_FIELDS RF
inner join RDB$USER_PRIVILEGES UP
  on UP.RDB$RELATION_SCHEMA_NAME = RF.RDB$SCHEMA_NAME and UP.RDB$RELATION_NAME = RF.RDB$RELATION_NAME
    and (UP.RDB$FIELD_NAME is null or UP.RDB$FIELD_NAME = RF.RDB$FIELD_NAME)"""


def _privilege_name(code: Optional[str]) -> Optional[str]:
    if code is None:
        return None

    code = code.strip()

    return PRIVILEGE_NAMES.get(code, code)


def _map_table_privilege_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    return (
        assembler.at(1)
        .set_string(_trim_name(record.get("TABLE_SCHEM")))
        .at(2)
        .set_string(_trim_name(record["TABLE_NAME"]))
        .at(3)
        .set_string(_trim_name(record["GRANTOR"]))
        .at(4)
        .set_string(_trim_name(record["GRANTEE"]))
        .at(5)
        .set_string(_privilege_name(record["PRIVILEGE"]))
        .at(6)
        .set_string("YES" if _to_bool(record["IS_GRANTABLE"]) else "NO")
        .finalize()
    )


def _map_column_privilege_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    return (
        assembler.at(1)
        .set_string(_trim_name(record.get("TABLE_SCHEM")))
        .at(2)
        .set_string(_trim_name(record["TABLE_NAME"]))
        .at(3)
        .set_string(_trim_name(record["COLUMN_NAME"]))
        .at(4)
        .set_string(_trim_name(record["GRANTOR"]))
        .at(5)
        .set_string(_trim_name(record["GRANTEE"]))
        .at(6)
        .set_string(_privilege_name(record["PRIVILEGE"]))
        .at(7)
        .set_string("YES" if _to_bool(record["IS_GRANTABLE"]) else "NO")
        .finalize()
    )


def _table_privilege_clauses(schema_pattern: Optional[str], table_name_pattern: Optional[str]):
    return [Clause.raw(_TABLE_PRIVILEGE_CONDITION), Clause("RDB$RELATION_NAME", table_name_pattern)]


def _table_privilege_clauses_6(schema_pattern: Optional[str], table_name_pattern: Optional[str]):
    return _table_privilege_clauses(None, table_name_pattern) + [Clause("RDB$RELATION_SCHEMA_NAME", schema_pattern)]


def _column_privilege_clauses(
    table: Optional[str], column_name_pattern: Optional[str] = None, schema: Optional[str] = None
):
    return [
        Clause.raw("UP.RDB$OBJECT_TYPE = 0"),
        Clause.equals_clause("RF.RDB$RELATION_NAME", table),
        Clause("RF.RDB$FIELD_NAME", column_name_pattern),
    ]


def _column_privilege_clauses_6(
    table: Optional[str], column_name_pattern: Optional[str] = None, schema: Optional[str] = None
):
    return [Clause.equals_clause("RF.RDB$SCHEMA_NAME", schema)] + _column_privilege_clauses(table, column_name_pattern)


def _table_privileges(generation: Generation, select: str, order_by: str, clauses):
    return VersionedQueryStrategy(
        name="table privileges",
        generation=generation,
        row_type=MetadataTablePrivilegeRow,
        select=select,
        order_by=order_by,
        clauses=clauses,
        map_row=_map_table_privilege_row,
    )


def _column_privileges(generation: Generation, select: str, order_by: str, clauses):
    return VersionedQueryStrategy(
        name="column privileges",
        generation=generation,
        row_type=MetadataColumnPrivilegeRow,
        select=select,
        order_by=order_by,
        clauses=clauses,
        map_row=_map_column_privilege_row,
    )


TABLE_PRIVILEGES = StrategyTable(
    "table privileges",
    {
        (Generation.FB2_5, False): lambda: _table_privileges(
            Generation.FB2_5, _TABLE_PRIVILEGES_2_5, "1, 4", _table_privilege_clauses
        ),
        (Generation.FB3, False): lambda: _table_privileges(
            Generation.FB3, _TABLE_PRIVILEGES_3, "1, 4", _table_privilege_clauses
        ),
        (Generation.FB6, False): lambda: _table_privileges(
            Generation.FB6, _TABLE_PRIVILEGES_6, "6, 1, 4", _table_privilege_clauses_6
        ),
    },
)

COLUMN_PRIVILEGES = StrategyTable(
    "column privileges",
    {
        (Generation.FB2_5, False): lambda: _column_privileges(
            Generation.FB2_5, _COLUMN_PRIVILEGES_2_5, "2, 5", _column_privilege_clauses
        ),
        (Generation.FB3, False): lambda: _column_privileges(
            Generation.FB3, _COLUMN_PRIVILEGES_3, "2, 5", _column_privilege_clauses
        ),
        (Generation.FB6, False): lambda: _column_privileges(
            Generation.FB6, _COLUMN_PRIVILEGES_6, "7, 2, 5", _column_privilege_clauses_6
        ),
    },
)
