# (C) 2021 GoodData Corporation
from typing import Any, Mapping, Optional, Sequence

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import MetadataTableRow
from catalog_metadata.query_base import StrategyTable, VersionedQueryStrategy
from catalog_metadata.rows import RowAssembler
from catalog_metadata.utils import _trim_name

TABLE = "TABLE"
SYSTEM_TABLE = "SYSTEM TABLE"
VIEW = "VIEW"
GLOBAL_TEMPORARY = "GLOBAL TEMPORARY"

TABLE_TYPES_2_1 = (SYSTEM_TABLE, TABLE, VIEW)
TABLE_TYPES_2_5 = (GLOBAL_TEMPORARY, SYSTEM_TABLE, TABLE, VIEW)

_NO_MATCH = "1 = 0"

_TABLES_2_1 = f"""select
  RDB$RELATION_NAME as TABLE_NAME,
  case
    when RDB$VIEW_BLR is not null then '{VIEW}'
    when RDB$SYSTEM_FLAG = 1 then '{SYSTEM_TABLE}'
    else '{TABLE}'
  end as TABLE_TYPE,
  RDB$DESCRIPTION as REMARKS,
  RDB$OWNER_NAME as OWNER_NAME
from RDB$RELATIONS"""

_TYPE_CONDITIONS_2_1 = {
    TABLE: "RDB$SYSTEM_FLAG = 0 and RDB$VIEW_BLR is null",
    SYSTEM_TABLE: "RDB$SYSTEM_FLAG = 1 and RDB$VIEW_BLR is null",
    VIEW: "RDB$VIEW_BLR is not null",
}

_LEGACY_IS_TABLE = "RDB$RELATION_TYPE is null and RDB$VIEW_BLR is null"
_LEGACY_IS_VIEW = "RDB$RELATION_TYPE is null and RDB$VIEW_BLR is not null"

# external tables are reported as tables, virtual (monitoring) tables as system tables
_TABLE_TYPE_2_5 = f"""trim(trailing from case
    when RDB$RELATION_TYPE = 0 or {_LEGACY_IS_TABLE} then
      case when RDB$SYSTEM_FLAG = 1 then '{SYSTEM_TABLE}' else '{TABLE}' end
    when RDB$RELATION_TYPE = 1 or {_LEGACY_IS_VIEW} then '{VIEW}'
    when RDB$RELATION_TYPE = 2 then '{TABLE}'
    when RDB$RELATION_TYPE = 3 then '{SYSTEM_TABLE}'
    when RDB$RELATION_TYPE in (4, 5) then '{GLOBAL_TEMPORARY}'
  end)"""

_TABLES_2_5 = f"""select
  trim(trailing from RDB$RELATION_NAME) as TABLE_NAME,
  {_TABLE_TYPE_2_5} as TABLE_TYPE,
  RDB$DESCRIPTION as REMARKS,
  trim(trailing from RDB$OWNER_NAME) as OWNER_NAME
from RDB$RELATIONS"""

_TABLES_6 = f"""select
  trim(trailing from RDB$RELATION_NAME) as TABLE_NAME,
  {_TABLE_TYPE_2_5} as TABLE_TYPE,
  RDB$DESCRIPTION as REMARKS,
  trim(trailing from RDB$OWNER_NAME) as OWNER_NAME,
  trim(trailing from RDB$SCHEMA_NAME) as TABLE_SCHEM
from RDB$RELATIONS"""


def _type_condition_2_1(types: Optional[Sequence[str]]) -> str:
    requested = TABLE_TYPES_2_1 if types is None else [t for t in TABLE_TYPES_2_1 if t in types]

    if not requested:
        return _NO_MATCH

    return "(" + " or ".join(f"({_TYPE_CONDITIONS_2_1[t]})" for t in requested) + ")"


def _type_condition_2_5(types: Sequence[str]) -> str:
    conditions = []

    if SYSTEM_TABLE in types and TABLE in types:
        conditions.append(f"(RDB$RELATION_TYPE in (0, 2, 3) or {_LEGACY_IS_TABLE})")
    elif SYSTEM_TABLE in types:
        conditions.append(f"((RDB$RELATION_TYPE in (0, 3) or {_LEGACY_IS_TABLE}) and RDB$SYSTEM_FLAG = 1)")
    elif TABLE in types:
        conditions.append(f"((RDB$RELATION_TYPE in (0, 2) or {_LEGACY_IS_TABLE}) and RDB$SYSTEM_FLAG = 0)")

    if VIEW in types:
        conditions.append(f"(RDB$RELATION_TYPE = 1 or {_LEGACY_IS_VIEW})")

    if GLOBAL_TEMPORARY in types:
        conditions.append("RDB$RELATION_TYPE in (4, 5)")

    if not conditions:
        return _NO_MATCH

    return "(" + " or ".join(conditions) + ")"


def _clauses_2_1(schema_pattern: Optional[str], table_name_pattern: Optional[str], types: Optional[Sequence[str]]):
    return [Clause("RDB$RELATION_NAME", table_name_pattern), Clause.raw(_type_condition_2_1(types))]


def _clauses_2_5(schema_pattern: Optional[str], table_name_pattern: Optional[str], types: Optional[Sequence[str]]):
    clauses = [Clause("RDB$RELATION_NAME", table_name_pattern)]

    if types is not None:
        clauses.append(Clause.raw(_type_condition_2_5(types)))

    return clauses


def _clauses_6(schema_pattern: Optional[str], table_name_pattern: Optional[str], types: Optional[Sequence[str]]):
    return [Clause("RDB$SCHEMA_NAME", schema_pattern)] + _clauses_2_5(None, table_name_pattern, types)


def _map_table_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    return (
        assembler.at(1)
        .set_string(_trim_name(record.get("TABLE_SCHEM")))
        .at(2)
        .set_string(_trim_name(record["TABLE_NAME"]))
        .at(3)
        .set_string(_trim_name(record["TABLE_TYPE"]))
        .at(4)
        .set_string(record["REMARKS"])
        .at(10)
        .set_string(_trim_name(record["OWNER_NAME"]))
        .finalize()
    )


def _tables_2_1() -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="tables",
        generation=Generation.FB2_1,
        row_type=MetadataTableRow,
        select=_TABLES_2_1,
        order_by="2, 1",
        clauses=_clauses_2_1,
        map_row=_map_table_row,
    )


def _tables_2_5() -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="tables",
        generation=Generation.FB2_5,
        row_type=MetadataTableRow,
        select=_TABLES_2_5,
        order_by="2, 1",
        clauses=_clauses_2_5,
        map_row=_map_table_row,
    )


def _tables_6() -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="tables",
        generation=Generation.FB6,
        row_type=MetadataTableRow,
        select=_TABLES_6,
        order_by="2, 5, 1",
        clauses=_clauses_6,
        map_row=_map_table_row,
    )


TABLES = StrategyTable(
    "tables",
    {
        (Generation.FB2_1, False): _tables_2_1,
        (Generation.FB2_5, False): _tables_2_5,
        (Generation.FB6, False): _tables_6,
    },
)


def table_types(capabilities: CapabilitySnapshot) -> Sequence[str]:
    """
    Table types the engine knows, in alphabetical order.
    """
    if TABLES.select(capabilities).generation >= Generation.FB2_5:
        return TABLE_TYPES_2_5

    return TABLE_TYPES_2_1
