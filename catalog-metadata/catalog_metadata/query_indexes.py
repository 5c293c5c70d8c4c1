# (C) 2021 GoodData Corporation
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import JDBC_CONSTANTS, MetadataIndexInfoRow
from catalog_metadata.query_base import StrategyTable, VersionedQueryStrategy
from catalog_metadata.rows import RowAssembler
from catalog_metadata.utils import _to_bool, _trim_name

_DESCENDING = 1
"""RDB$INDICES.RDB$INDEX_TYPE of descending indexes; null and 0 mean ascending"""

_INDEX_INFO_2_5 = """select
  IND.RDB$RELATION_NAME as TABLE_NAME,
  IND.RDB$UNIQUE_FLAG as UNIQUE_FLAG,
  IND.RDB$INDEX_NAME as INDEX_NAME,
  ISE.RDB$FIELD_POSITION + 1 as ORDINAL_POSITION,
  ISE.RDB$FIELD_NAME as COLUMN_NAME,
  IND.RDB$EXPRESSION_SOURCE as EXPRESSION_SOURCE,
  IND.RDB$INDEX_TYPE as ASC_OR_DESC
from RDB$INDICES IND
left join RDB$INDEX_SEGMENTS ISE on IND.RDB$INDEX_NAME = ISE.RDB$INDEX_NAME"""

_INDEX_INFO_LIST_3 = """  trim(trailing from IND.RDB$RELATION_NAME) as TABLE_NAME,
  IND.RDB$UNIQUE_FLAG as UNIQUE_FLAG,
  trim(trailing from IND.RDB$INDEX_NAME) as INDEX_NAME,
  ISE.RDB$FIELD_POSITION + 1 as ORDINAL_POSITION,
  trim(trailing from ISE.RDB$FIELD_NAME) as COLUMN_NAME,
  IND.RDB$EXPRESSION_SOURCE as EXPRESSION_SOURCE,
  IND.RDB$INDEX_TYPE as ASC_OR_DESC"""

_INDEX_INFO_FROM_3 = """from RDB$INDICES IND
left join RDB$INDEX_SEGMENTS ISE on IND.RDB$INDEX_NAME = ISE.RDB$INDEX_NAME"""

_INDEX_INFO_3 = f"""select
{_INDEX_INFO_LIST_3}
{_INDEX_INFO_FROM_3}"""

_INDEX_INFO_5 = f"""select
{_INDEX_INFO_LIST_3},
  IND.RDB$CONDITION_SOURCE as FILTER_CONDITION
{_INDEX_INFO_FROM_3}"""

_INDEX_INFO_6 = f"""select
{_INDEX_INFO_LIST_3},
  IND.RDB$CONDITION_SOURCE as FILTER_CONDITION,
  trim(trailing from IND.RDB$SCHEMA_NAME) as TABLE_SCHEM
from RDB$INDICES IND
left join RDB$INDEX_SEGMENTS ISE
  on IND.RDB$SCHEMA_NAME = ISE.RDB$SCHEMA_NAME and IND.RDB$INDEX_NAME = ISE.RDB$INDEX_NAME"""


def _map_index_info_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    """
    Expression indexes have no segments; they are reported as a single column named by the source of the
    expression.
    """
    column_name = _trim_name(record["COLUMN_NAME"])

    if column_name is None:
        ordinal_position = 1
        column_name = record["EXPRESSION_SOURCE"]
    else:
        ordinal_position = record["ORDINAL_POSITION"]

    return (
        assembler.at(1)
        .set_string(_trim_name(record.get("TABLE_SCHEM")))
        .at(2)
        .set_string(_trim_name(record["TABLE_NAME"]))
        .at(3)
        .set(not _to_bool(record["UNIQUE_FLAG"]))
        .at(5)
        .set_string(_trim_name(record["INDEX_NAME"]))
        .at(6)
        .set_short(JDBC_CONSTANTS.tableIndexOther)
        .at(7)
        .set_short(ordinal_position)
        .at(8)
        .set_string(column_name)
        .at(9)
        .set_string("D" if record["ASC_OR_DESC"] == _DESCENDING else "A")
        .at(12)
        .set_string(record.get("FILTER_CONDITION"))
        .finalize()
    )


def _clauses(table: Optional[str], unique: bool = False, schema: Optional[str] = None):
    clauses = [Clause.equals_clause("IND.RDB$RELATION_NAME", table)]

    if unique:
        clauses.append(Clause.raw("IND.RDB$UNIQUE_FLAG = 1"))

    return clauses


def _clauses_6(table: Optional[str], unique: bool = False, schema: Optional[str] = None):
    return [Clause.equals_clause("IND.RDB$SCHEMA_NAME", schema)] + _clauses(table, unique)


def _index_info(generation: Generation, select: str, order_by: str, clauses) -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="index info",
        generation=generation,
        row_type=MetadataIndexInfoRow,
        select=select,
        order_by=order_by,
        clauses=clauses,
        map_row=_map_index_info_row,
    )


INDEX_INFO = StrategyTable(
    "index info",
    {
        (Generation.FB2_5, False): lambda: _index_info(Generation.FB2_5, _INDEX_INFO_2_5, "2, 3, 4", _clauses),
        (Generation.FB3, False): lambda: _index_info(Generation.FB3, _INDEX_INFO_3, "2, 3, 4", _clauses),
        (Generation.FB5, False): lambda: _index_info(Generation.FB5, _INDEX_INFO_5, "2, 3, 4", _clauses),
        (Generation.FB6, False): lambda: _index_info(Generation.FB6, _INDEX_INFO_6, "9, 2, 3, 4", _clauses_6),
    },
)
