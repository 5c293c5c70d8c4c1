# (C) 2021 GoodData Corporation
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import JDBC_CONSTANTS, MetadataColumnRow
from catalog_metadata.query_base import StrategyTable, VersionedQueryStrategy
from catalog_metadata.rows import RowAssembler
from catalog_metadata.type_codes import FieldType, JdbcType
from catalog_metadata.type_metadata import TypeMetadata
from catalog_metadata.utils import _extract_default, _to_bool, _trim_name

_TYPE_COLUMNS = """  F.RDB$FIELD_TYPE as FIELD_TYPE,
  F.RDB$FIELD_SUB_TYPE as FIELD_SUB_TYPE,
  F.RDB$FIELD_PRECISION as FIELD_PRECISION,
  F.RDB$FIELD_SCALE as FIELD_SCALE,
  F.RDB$FIELD_LENGTH as FIELD_LENGTH,
  F.RDB$CHARACTER_LENGTH as CHAR_LEN,
  F.RDB$CHARACTER_SET_ID as CHARACTER_SET_ID,"""

_COLUMNS_2_5 = f"""select
  RF.RDB$RELATION_NAME as RELATION_NAME,
  RF.RDB$FIELD_NAME as FIELD_NAME,
{_TYPE_COLUMNS}
  RF.RDB$DESCRIPTION as REMARKS,
  coalesce(RF.RDB$DEFAULT_SOURCE, F.RDB$DEFAULT_SOURCE) as DEFAULT_SOURCE,
  RF.RDB$FIELD_POSITION + 1 as FIELD_POSITION,
  iif(coalesce(RF.RDB$NULL_FLAG, 0) + coalesce(F.RDB$NULL_FLAG, 0) = 0, 'T', 'F') as IS_NULLABLE,
  iif(F.RDB$COMPUTED_BLR is not null, 'T', 'F') as IS_COMPUTED,
  'F' as IS_IDENTITY,
  cast(null as varchar(10)) as JB_IDENTITY_TYPE
from RDB$RELATION_FIELDS RF
inner join RDB$FIELDS F on RF.RDB$FIELD_SOURCE = F.RDB$FIELD_NAME"""

_COLUMNS_3 = f"""select
  trim(trailing from RF.RDB$RELATION_NAME) as RELATION_NAME,
  trim(trailing from RF.RDB$FIELD_NAME) as FIELD_NAME,
{_TYPE_COLUMNS}
  RF.RDB$DESCRIPTION as REMARKS,
  coalesce(RF.RDB$DEFAULT_SOURCE, F.RDB$DEFAULT_SOURCE) as DEFAULT_SOURCE,
  RF.RDB$FIELD_POSITION + 1 as FIELD_POSITION,
  (coalesce(RF.RDB$NULL_FLAG, 0) + coalesce(F.RDB$NULL_FLAG, 0) = 0) as IS_NULLABLE,
  (F.RDB$COMPUTED_BLR is not null) as IS_COMPUTED,
  (RF.RDB$IDENTITY_TYPE is not null) as IS_IDENTITY,
  trim(trailing from decode(RF.RDB$IDENTITY_TYPE, 0, 'ALWAYS', 1, 'BY DEFAULT')) as JB_IDENTITY_TYPE
from RDB$RELATION_FIELDS RF
inner join RDB$FIELDS F on RF.RDB$FIELD_SOURCE = F.RDB$FIELD_NAME"""

_COLUMNS_6 = f"""select
  trim(trailing from RF.RDB$SCHEMA_NAME) as TABLE_SCHEM,
  trim(trailing from RF.RDB$RELATION_NAME) as RELATION_NAME,
  trim(trailing from RF.RDB$FIELD_NAME) as FIELD_NAME,
{_TYPE_COLUMNS}
  RF.RDB$DESCRIPTION as REMARKS,
  coalesce(RF.RDB$DEFAULT_SOURCE, F.RDB$DEFAULT_SOURCE) as DEFAULT_SOURCE,
  RF.RDB$FIELD_POSITION + 1 as FIELD_POSITION,
  (coalesce(RF.RDB$NULL_FLAG, 0) + coalesce(F.RDB$NULL_FLAG, 0) = 0) as IS_NULLABLE,
  (F.RDB$COMPUTED_BLR is not null) as IS_COMPUTED,
  (RF.RDB$IDENTITY_TYPE is not null) as IS_IDENTITY,
  trim(trailing from decode(RF.RDB$IDENTITY_TYPE, 0, 'ALWAYS', 1, 'BY DEFAULT')) as JB_IDENTITY_TYPE
from RDB$RELATION_FIELDS RF
inner join RDB$FIELDS F
  on RF.RDB$FIELD_SOURCE_SCHEMA_NAME = F.RDB$SCHEMA_NAME and RF.RDB$FIELD_SOURCE = F.RDB$FIELD_NAME"""


def _is_autoincrement(is_identity: bool, type_metadata: TypeMetadata) -> str:
    if is_identity:
        return "YES"

    jdbc_type = type_metadata.jdbc_type

    if jdbc_type in (JdbcType.SMALLINT, JdbcType.INTEGER, JdbcType.BIGINT):
        # may be populated by a trigger, can't tell
        return ""
    elif jdbc_type in (JdbcType.NUMERIC, JdbcType.DECIMAL):
        if type_metadata.decimal_digits == 0 and type_metadata.type != FieldType.INT128:
            return ""

    return "NO"


def _map_column_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    type_metadata = TypeMetadata.builder(capabilities).from_row(record).build()
    is_nullable = _to_bool(record["IS_NULLABLE"])
    is_computed = _to_bool(record["IS_COMPUTED"])
    is_identity = _to_bool(record["IS_IDENTITY"])

    return (
        assembler.at(1)
        .set_string(_trim_name(record.get("TABLE_SCHEM")))
        .at(2)
        .set_string(_trim_name(record["RELATION_NAME"]))
        .at(3)
        .set_string(_trim_name(record["FIELD_NAME"]))
        .at(4)
        .set_int(type_metadata.jdbc_type)
        .at(5)
        .set_string(type_metadata.sql_type_name)
        .at(6)
        .set_int(type_metadata.column_size)
        .at(8)
        .set_int(type_metadata.decimal_digits)
        .at(9)
        .set_int(type_metadata.radix)
        .at(10)
        .set_int(JDBC_CONSTANTS.columnNullable if is_nullable else JDBC_CONSTANTS.columnNoNulls)
        .at(11)
        .set_string(record["REMARKS"])
        .at(12)
        .set_string(_extract_default(record["DEFAULT_SOURCE"]))
        .at(15)
        .set_int(type_metadata.char_octet_length)
        .at(16)
        .set_int(record["FIELD_POSITION"])
        .at(17)
        .set_string("YES" if is_nullable else "NO")
        .at(22)
        .set_string(_is_autoincrement(is_identity, type_metadata))
        .at(23)
        .set_string("YES" if is_computed or is_identity else "NO")
        .at(24)
        .set_string("YES" if is_identity else "NO")
        .at(25)
        .set_string(_trim_name(record["JB_IDENTITY_TYPE"]))
        .finalize()
    )


def _clauses(schema_pattern: Optional[str], table_name_pattern: Optional[str], column_name_pattern: Optional[str]):
    return [Clause("RF.RDB$RELATION_NAME", table_name_pattern), Clause("RF.RDB$FIELD_NAME", column_name_pattern)]


def _clauses_6(schema_pattern: Optional[str], table_name_pattern: Optional[str], column_name_pattern: Optional[str]):
    return [Clause("RF.RDB$SCHEMA_NAME", schema_pattern)] + _clauses(None, table_name_pattern, column_name_pattern)


def _columns_2_5() -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="columns",
        generation=Generation.FB2_5,
        row_type=MetadataColumnRow,
        select=_COLUMNS_2_5,
        order_by="RF.RDB$RELATION_NAME, RF.RDB$FIELD_POSITION",
        clauses=_clauses,
        map_row=_map_column_row,
    )


def _columns_3() -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="columns",
        generation=Generation.FB3,
        row_type=MetadataColumnRow,
        select=_COLUMNS_3,
        order_by="RF.RDB$RELATION_NAME, RF.RDB$FIELD_POSITION",
        clauses=_clauses,
        map_row=_map_column_row,
    )


def _columns_6() -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="columns",
        generation=Generation.FB6,
        row_type=MetadataColumnRow,
        select=_COLUMNS_6,
        order_by="RF.RDB$SCHEMA_NAME, RF.RDB$RELATION_NAME, RF.RDB$FIELD_POSITION",
        clauses=_clauses_6,
        map_row=_map_column_row,
    )


COLUMNS = StrategyTable(
    "columns",
    {
        (Generation.FB2_5, False): _columns_2_5,
        (Generation.FB3, False): _columns_3,
        (Generation.FB6, False): _columns_6,
    },
)
