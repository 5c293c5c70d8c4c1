# (C) 2021 GoodData Corporation
import logging
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import (
    JDBC_CONSTANTS,
    MetadataBestRowIdentifierRow,
    MetadataPseudoColumnRow,
    MetadataVersionColumnRow,
)
from catalog_metadata.patterns import escape_wildcards
from catalog_metadata.query_base import MetadataQueryRunner, StrategyTable, VersionedQueryStrategy, run_strategy
from catalog_metadata.query_pseudo_columns import DB_KEY, RECORD_VERSION, pseudo_columns
from catalog_metadata.rows import RowAssembler
from catalog_metadata.type_codes import FieldType, JdbcType
from catalog_metadata.type_metadata import TypeMetadata, get_data_type_name
from catalog_metadata.utils import _trim_name

logger = logging.getLogger(__name__)

_BIGINT_OCTET_LENGTH = 8

_PRIMARY_KEY_COLUMNS_LIST = """  F.RDB$FIELD_TYPE as FIELD_TYPE,
  F.RDB$FIELD_SUB_TYPE as FIELD_SUB_TYPE,
  F.RDB$FIELD_PRECISION as FIELD_PRECISION,
  F.RDB$FIELD_SCALE as FIELD_SCALE,
  F.RDB$FIELD_LENGTH as FIELD_LENGTH,
  F.RDB$CHARACTER_LENGTH as CHAR_LEN,
  F.RDB$CHARACTER_SET_ID as CHARACTER_SET_ID"""

_PRIMARY_KEY_COLUMNS_FROM = """from RDB$RELATION_CONSTRAINTS RC
inner join RDB$INDEX_SEGMENTS IDX on IDX.RDB$INDEX_NAME = RC.RDB$INDEX_NAME
inner join RDB$RELATION_FIELDS RF
  on RF.RDB$FIELD_NAME = IDX.RDB$FIELD_NAME and RF.RDB$RELATION_NAME = RC.RDB$RELATION_NAME
inner join RDB$FIELDS F on F.RDB$FIELD_NAME = RF.RDB$FIELD_SOURCE"""

_PRIMARY_KEY_COLUMNS_2_5 = f"""select
  RF.RDB$FIELD_NAME as COLUMN_NAME,
{_PRIMARY_KEY_COLUMNS_LIST}
{_PRIMARY_KEY_COLUMNS_FROM}"""

_PRIMARY_KEY_COLUMNS_3 = f"""select
  trim(trailing from RF.RDB$FIELD_NAME) as COLUMN_NAME,
{_PRIMARY_KEY_COLUMNS_LIST}
{_PRIMARY_KEY_COLUMNS_FROM}"""

_PRIMARY_KEY_COLUMNS_6 = f"""select
  trim(trailing from RF.RDB$FIELD_NAME) as COLUMN_NAME,
{_PRIMARY_KEY_COLUMNS_LIST}
from RDB$RELATION_CONSTRAINTS RC
inner join RDB$INDEX_SEGMENTS IDX
  on IDX.RDB$SCHEMA_NAME = RC.RDB$SCHEMA_NAME and IDX.RDB$INDEX_NAME = RC.RDB$INDEX_NAME
inner join RDB$RELATION_FIELDS RF
  on RF.RDB$SCHEMA_NAME = RC.RDB$SCHEMA_NAME and RF.RDB$RELATION_NAME = RC.RDB$RELATION_NAME
    and RF.RDB$FIELD_NAME = IDX.RDB$FIELD_NAME
inner join RDB$FIELDS F
  on F.RDB$SCHEMA_NAME = RF.RDB$FIELD_SOURCE_SCHEMA_NAME and F.RDB$FIELD_NAME = RF.RDB$FIELD_SOURCE"""


def _map_primary_key_identifier_row(
    record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot
):
    type_metadata = TypeMetadata.builder(capabilities).from_row(record).build()

    return (
        assembler.at(0)
        .set_short(JDBC_CONSTANTS.bestRowSession)
        .at(1)
        .set_string(_trim_name(record["COLUMN_NAME"]))
        .at(2)
        .set_int(type_metadata.jdbc_type)
        .at(3)
        .set_string(type_metadata.sql_type_name)
        .at(4)
        .set_int(type_metadata.column_size)
        .at(6)
        .set_short(type_metadata.decimal_digits)
        .at(7)
        .set_short(JDBC_CONSTANTS.bestRowNotPseudo)
        .finalize()
    )


def _clauses(table: Optional[str], schema: Optional[str] = None):
    return [
        Clause.equals_clause("RC.RDB$RELATION_NAME", table),
        Clause.raw("RC.RDB$CONSTRAINT_TYPE = 'PRIMARY KEY'"),
    ]


def _clauses_6(table: Optional[str], schema: Optional[str] = None):
    return [Clause.equals_clause("RC.RDB$SCHEMA_NAME", schema)] + _clauses(table)


def _best_row_identifier(generation: Generation, select: str, clauses) -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="best row identifier",
        generation=generation,
        row_type=MetadataBestRowIdentifierRow,
        select=select,
        order_by="IDX.RDB$FIELD_POSITION",
        clauses=clauses,
        map_row=_map_primary_key_identifier_row,
    )


BEST_ROW_IDENTIFIER = StrategyTable(
    "best row identifier",
    {
        (Generation.FB2_5, False): lambda: _best_row_identifier(
            Generation.FB2_5, _PRIMARY_KEY_COLUMNS_2_5, _clauses
        ),
        (Generation.FB3, False): lambda: _best_row_identifier(Generation.FB3, _PRIMARY_KEY_COLUMNS_3, _clauses),
        (Generation.FB6, False): lambda: _best_row_identifier(Generation.FB6, _PRIMARY_KEY_COLUMNS_6, _clauses_6),
    },
)


def _table_pseudo_columns(
    runner: MetadataQueryRunner,
    capabilities: CapabilitySnapshot,
    table: str,
    column_name_pattern: Optional[str],
    schema: Optional[str],
) -> list:
    # values are copied into the target assembler which does the encoding
    return pseudo_columns(
        runner,
        capabilities,
        RowAssembler(MetadataPseudoColumnRow),
        escape_wildcards(table),
        column_name_pattern,
        escape_wildcards(schema),
    )


def best_row_identifier(
    runner: MetadataQueryRunner,
    capabilities: CapabilitySnapshot,
    assembler: RowAssembler,
    table: str,
    scope: int,
    schema: Optional[str] = None,
) -> list:
    """
    Finds the optimal set of columns identifying a row. Columns of the primary key are the best identifier for all
    scopes. Without a primary key, RDB$DB_KEY is the alternative; it is valid only within a transaction and so it is
    not reported when session scope is requested.

    :param runner: runner to execute the queries with
    :param capabilities: capabilities of the engine
    :param assembler: assembler for MetadataBestRowIdentifierRow
    :param table: exact name of the table
    :param scope: one of bestRowTemporary, bestRowTransaction, bestRowSession
    :param schema: exact name of the schema; None for any schema
    :return: list of MetadataBestRowIdentifierRow
    """
    strategy = BEST_ROW_IDENTIFIER.select(capabilities)
    rows = run_strategy(runner, strategy, capabilities, assembler, table, schema)

    if rows:
        return rows
    elif scope == JDBC_CONSTANTS.bestRowSession:
        logger.debug("table '%s' has no primary key and db key does not survive the transaction", table)

        return []

    return [
        assembler.at(0)
        .set_short(JDBC_CONSTANTS.bestRowTransaction)
        .at(1)
        .set_string(DB_KEY)
        .at(2)
        .set_int(JdbcType.ROWID)
        .at(3)
        .set_string(get_data_type_name(FieldType.TEXT, 0, 0))
        .at(4)
        .set_int(pseudo_column.column_size)
        .at(7)
        .set_short(JDBC_CONSTANTS.bestRowPseudo)
        .finalize()
        for pseudo_column in _table_pseudo_columns(runner, capabilities, table, escape_wildcards(DB_KEY), schema)
    ]


def version_columns(
    runner: MetadataQueryRunner,
    capabilities: CapabilitySnapshot,
    assembler: RowAssembler,
    table: str,
    schema: Optional[str] = None,
) -> list:
    """
    Lists columns that change whenever a row is updated. Only the pseudo columns are reported: RDB$DB_KEY and, on
    engines that have it, RDB$RECORD_VERSION.

    :param runner: runner to execute the query with
    :param capabilities: capabilities of the engine
    :param assembler: assembler for MetadataVersionColumnRow
    :param table: exact name of the table
    :param schema: exact name of the schema; None for any schema
    :return: list of MetadataVersionColumnRow
    """
    rows = []

    for pseudo_column in _table_pseudo_columns(runner, capabilities, table, None, schema):
        if pseudo_column.column_name == DB_KEY:
            assembler.at(3).set_string(get_data_type_name(FieldType.TEXT, 0, 0)).at(5).set_int(
                pseudo_column.char_octet_length
            )
        elif pseudo_column.column_name == RECORD_VERSION:
            assembler.at(3).set_string(get_data_type_name(FieldType.INT64, 0, 0)).at(5).set_int(
                _BIGINT_OCTET_LENGTH
            ).at(6).set_short(0)
        else:
            continue

        rows.append(
            assembler.at(1)
            .set_string(pseudo_column.column_name)
            .at(2)
            .set_int(pseudo_column.data_type)
            .at(4)
            .set_int(pseudo_column.column_size)
            .at(7)
            .set_short(JDBC_CONSTANTS.versionColumnPseudo)
            .finalize()
        )

    return rows
