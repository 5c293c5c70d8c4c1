# (C) 2021 GoodData Corporation
import logging
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import MetadataPseudoColumnRow
from catalog_metadata.patterns import MetadataPattern
from catalog_metadata.query_base import MetadataQueryRunner, StrategyTable, VersionedQueryStrategy, run_strategy
from catalog_metadata.rows import RowAssembler
from catalog_metadata.type_codes import BIGINT_PRECISION, RADIX_DECIMAL, JdbcType
from catalog_metadata.utils import _trim_name

logger = logging.getLogger(__name__)

DB_KEY = "RDB$DB_KEY"
RECORD_VERSION = "RDB$RECORD_VERSION"
NO_USAGE_RESTRICTIONS = "NO_USAGE_RESTRICTIONS"

DB_KEY_REMARKS = (
    "The RDB$DB_KEY column in a select list will be renamed by the engine to DB_KEY in the result set (both as "
    "column name and label). Identification as ROWID only works in a select list, not for parameters."
)

_PSEUDO_COLUMNS_2_5 = """select
  RDB$RELATION_NAME as RELATION_NAME,
  RDB$DBKEY_LENGTH as DBKEY_LENGTH,
  'F' as HAS_RECORD_VERSION,
  '' as RECORD_VERSION_NULLABLE
from RDB$RELATIONS"""

# tables, views and GTTs never have null record version, external and virtual tables always do
_PSEUDO_COLUMNS_3 = """select
  trim(trailing from RDB$RELATION_NAME) as RELATION_NAME,
  RDB$DBKEY_LENGTH as DBKEY_LENGTH,
  RDB$DBKEY_LENGTH = 8 as HAS_RECORD_VERSION,
  case
    when RDB$RELATION_TYPE in (0, 1, 4, 5) then 'NO'
    when RDB$RELATION_TYPE in (2, 3) then 'YES'
    else ''
  end as RECORD_VERSION_NULLABLE
from RDB$RELATIONS"""

_PSEUDO_COLUMNS_6 = """select
  trim(trailing from RDB$RELATION_NAME) as RELATION_NAME,
  RDB$DBKEY_LENGTH as DBKEY_LENGTH,
  RDB$DBKEY_LENGTH = 8 as HAS_RECORD_VERSION,
  case
    when RDB$RELATION_TYPE in (0, 1, 4, 5) then 'NO'
    when RDB$RELATION_TYPE in (2, 3) then 'YES'
    else ''
  end as RECORD_VERSION_NULLABLE,
  trim(trailing from RDB$SCHEMA_NAME) as TABLE_SCHEM
from RDB$RELATIONS"""


def _map_pseudo_column_rows(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    """
    Expands one relation into rows of its pseudo columns: RDB$DB_KEY always, RDB$RECORD_VERSION where the engine
    has it and the relation carries it.
    """
    table_schem = _trim_name(record.get("TABLE_SCHEM"))
    table_name = _trim_name(record["RELATION_NAME"])
    db_key_length = record["DBKEY_LENGTH"]

    rows = [
        assembler.at(1)
        .set_string(table_schem)
        .at(2)
        .set_string(table_name)
        .at(3)
        .set_string(DB_KEY)
        .at(4)
        .set_int(JdbcType.ROWID)
        .at(5)
        .set_int(db_key_length)
        .at(7)
        .set_int(RADIX_DECIMAL)
        .at(8)
        .set_string(NO_USAGE_RESTRICTIONS)
        .at(9)
        .set_string(DB_KEY_REMARKS)
        .at(10)
        .set_int(db_key_length)
        .at(11)
        .set_string("NO")
        .finalize()
    ]

    if capabilities.supports_record_version_pseudo_column and _has_record_version(record["HAS_RECORD_VERSION"]):
        rows.append(
            assembler.at(1)
            .set_string(table_schem)
            .at(2)
            .set_string(table_name)
            .at(3)
            .set_string(RECORD_VERSION)
            .at(4)
            .set_int(JdbcType.BIGINT)
            .at(5)
            .set_int(BIGINT_PRECISION)
            .at(6)
            .set_int(0)
            .at(7)
            .set_int(RADIX_DECIMAL)
            .at(8)
            .set_string(NO_USAGE_RESTRICTIONS)
            .at(11)
            .set_string(record["RECORD_VERSION_NULLABLE"])
            .finalize()
        )

    return rows


def _has_record_version(val: Any) -> bool:
    if isinstance(val, str):
        return val.strip().upper() == "T"

    return bool(val)


def _clauses(table_name_pattern: Optional[str], schema_pattern: Optional[str] = None):
    return [Clause("RDB$RELATION_NAME", table_name_pattern)]


def _clauses_6(table_name_pattern: Optional[str], schema_pattern: Optional[str] = None):
    return [Clause("RDB$SCHEMA_NAME", schema_pattern), Clause("RDB$RELATION_NAME", table_name_pattern)]


def _pseudo_columns(generation: Generation, select: str, order_by: str, clauses) -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="pseudo columns",
        generation=generation,
        row_type=MetadataPseudoColumnRow,
        select=select,
        order_by=order_by,
        clauses=clauses,
        map_row=_map_pseudo_column_rows,
    )


PSEUDO_COLUMNS = StrategyTable(
    "pseudo columns",
    {
        (Generation.FB2_5, False): lambda: _pseudo_columns(
            Generation.FB2_5, _PSEUDO_COLUMNS_2_5, "RDB$RELATION_NAME", _clauses
        ),
        (Generation.FB3, False): lambda: _pseudo_columns(
            Generation.FB3, _PSEUDO_COLUMNS_3, "RDB$RELATION_NAME", _clauses
        ),
        (Generation.FB6, False): lambda: _pseudo_columns(
            Generation.FB6, _PSEUDO_COLUMNS_6, "RDB$SCHEMA_NAME, RDB$RELATION_NAME", _clauses_6
        ),
    },
)


def pseudo_columns(
    runner: MetadataQueryRunner,
    capabilities: CapabilitySnapshot,
    assembler: RowAssembler,
    table_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
) -> list:
    """
    Lists pseudo columns of the matching tables. The column name pattern is not part of the query, it is matched
    in memory against the pseudo column names; when it can match none of them, no query is executed.

    :param runner: runner to execute the query with
    :param capabilities: capabilities of the engine
    :param assembler: assembler for MetadataPseudoColumnRow
    :param table_name_pattern: pattern for table names
    :param column_name_pattern: pattern for pseudo column names
    :param schema_pattern: pattern for schema names; ignored by engines without schemas
    :return: list of MetadataPseudoColumnRow, ordered by schema, table name and column
    """
    matches = MetadataPattern.compile(column_name_pattern).to_matcher()
    include_db_key = matches(DB_KEY)
    include_record_version = capabilities.supports_record_version_pseudo_column and matches(RECORD_VERSION)

    if not (include_db_key or include_record_version):
        logger.debug("pattern '%s' matches no pseudo column; not querying", column_name_pattern)

        return []

    strategy = PSEUDO_COLUMNS.select(capabilities)
    expanded = run_strategy(runner, strategy, capabilities, assembler, table_name_pattern, schema_pattern)

    return [row for rows in expanded for row in rows if matches(row.column_name)]
