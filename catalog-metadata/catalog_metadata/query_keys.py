# (C) 2021 GoodData Corporation
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import JDBC_CONSTANTS, MetadataForeignKeyRow, MetadataPrimaryKeyRow
from catalog_metadata.query_base import StrategyTable, VersionedQueryStrategy
from catalog_metadata.rows import RowAssembler
from catalog_metadata.utils import _trim_name

# RESTRICT behaves as NO ACTION in Firebird
KEY_RULES = {
    "CASCADE": JDBC_CONSTANTS.importedKeyCascade,
    "RESTRICT": JDBC_CONSTANTS.importedKeyNoAction,
    "NO ACTION": JDBC_CONSTANTS.importedKeyNoAction,
    "SET NULL": JDBC_CONSTANTS.importedKeySetNull,
    "SET DEFAULT": JDBC_CONSTANTS.importedKeySetDefault,
}

_PRIMARY_KEYS_2_5 = """select
  RC.RDB$RELATION_NAME as TABLE_NAME,
  ISGMT.RDB$FIELD_NAME as COLUMN_NAME,
  cast((ISGMT.RDB$FIELD_POSITION + 1) as smallint) as KEY_SEQ,
  RC.RDB$CONSTRAINT_NAME as PK_NAME
from RDB$RELATION_CONSTRAINTS RC
inner join RDB$INDEX_SEGMENTS ISGMT on RC.RDB$INDEX_NAME = ISGMT.RDB$INDEX_NAME"""

_PRIMARY_KEYS_3 = """select
  trim(trailing from RC.RDB$RELATION_NAME) as TABLE_NAME,
  trim(trailing from ISGMT.RDB$FIELD_NAME) as COLUMN_NAME,
  cast((ISGMT.RDB$FIELD_POSITION + 1) as smallint) as KEY_SEQ,
  trim(trailing from RC.RDB$CONSTRAINT_NAME) as PK_NAME
from RDB$RELATION_CONSTRAINTS RC
inner join RDB$INDEX_SEGMENTS ISGMT on RC.RDB$INDEX_NAME = ISGMT.RDB$INDEX_NAME"""

_FOREIGN_KEYS_JOINS = """from RDB$RELATION_CONSTRAINTS PK
inner join RDB$REF_CONSTRAINTS RC on PK.RDB$CONSTRAINT_NAME = RC.RDB$CONST_NAME_UQ
inner join RDB$RELATION_CONSTRAINTS FK on FK.RDB$CONSTRAINT_NAME = RC.RDB$CONSTRAINT_NAME
inner join RDB$INDEX_SEGMENTS ISP on ISP.RDB$INDEX_NAME = PK.RDB$INDEX_NAME
inner join RDB$INDEX_SEGMENTS ISF
  on ISF.RDB$INDEX_NAME = FK.RDB$INDEX_NAME and ISP.RDB$FIELD_POSITION = ISF.RDB$FIELD_POSITION"""

_FOREIGN_KEYS_2_5 = f"""select
  PK.RDB$RELATION_NAME as PKTABLE_NAME,
  ISP.RDB$FIELD_NAME as PKCOLUMN_NAME,
  FK.RDB$RELATION_NAME as FKTABLE_NAME,
  ISF.RDB$FIELD_NAME as FKCOLUMN_NAME,
  cast((ISP.RDB$FIELD_POSITION + 1) as smallint) as KEY_SEQ,
  RC.RDB$UPDATE_RULE as UPDATE_RULE,
  RC.RDB$DELETE_RULE as DELETE_RULE,
  PK.RDB$CONSTRAINT_NAME as PK_NAME,
  FK.RDB$CONSTRAINT_NAME as FK_NAME
{_FOREIGN_KEYS_JOINS}"""

_FOREIGN_KEYS_3 = f"""select
  trim(trailing from PK.RDB$RELATION_NAME) as PKTABLE_NAME,
  trim(trailing from ISP.RDB$FIELD_NAME) as PKCOLUMN_NAME,
  trim(trailing from FK.RDB$RELATION_NAME) as FKTABLE_NAME,
  trim(trailing from ISF.RDB$FIELD_NAME) as FKCOLUMN_NAME,
  cast((ISP.RDB$FIELD_POSITION + 1) as smallint) as KEY_SEQ,
  trim(trailing from RC.RDB$UPDATE_RULE) as UPDATE_RULE,
  trim(trailing from RC.RDB$DELETE_RULE) as DELETE_RULE,
  trim(trailing from PK.RDB$CONSTRAINT_NAME) as PK_NAME,
  trim(trailing from FK.RDB$CONSTRAINT_NAME) as FK_NAME
{_FOREIGN_KEYS_JOINS}"""

_PRIMARY_KEYS_6 = """select
  trim(trailing from RC.RDB$RELATION_NAME) as TABLE_NAME,
  trim(trailing from ISGMT.RDB$FIELD_NAME) as COLUMN_NAME,
  cast((ISGMT.RDB$FIELD_POSITION + 1) as smallint) as KEY_SEQ,
  trim(trailing from RC.RDB$CONSTRAINT_NAME) as PK_NAME,
  trim(trailing from RC.RDB$SCHEMA_NAME) as TABLE_SCHEM
from RDB$RELATION_CONSTRAINTS RC
inner join RDB$INDEX_SEGMENTS ISGMT
  on RC.RDB$SCHEMA_NAME = ISGMT.RDB$SCHEMA_NAME and RC.RDB$INDEX_NAME = ISGMT.RDB$INDEX_NAME"""

# constraints and their indexes share the schema of the table
_FOREIGN_KEYS_JOINS_6 = """from RDB$RELATION_CONSTRAINTS PK
inner join RDB$REF_CONSTRAINTS RC
  on PK.RDB$SCHEMA_NAME = RC.RDB$CONST_SCHEMA_NAME_UQ and PK.RDB$CONSTRAINT_NAME = RC.RDB$CONST_NAME_UQ
inner join RDB$RELATION_CONSTRAINTS FK
  on FK.RDB$SCHEMA_NAME = RC.RDB$SCHEMA_NAME and FK.RDB$CONSTRAINT_NAME = RC.RDB$CONSTRAINT_NAME
inner join RDB$INDEX_SEGMENTS ISP
  on ISP.RDB$SCHEMA_NAME = PK.RDB$SCHEMA_NAME and ISP.RDB$INDEX_NAME = PK.RDB$INDEX_NAME
inner join RDB$INDEX_SEGMENTS ISF
  on ISF.RDB$SCHEMA_NAME = FK.RDB$SCHEMA_NAME and ISF.RDB$INDEX_NAME = FK.RDB$INDEX_NAME
    and ISP.RDB$FIELD_POSITION = ISF.RDB$FIELD_POSITION"""

_FOREIGN_KEYS_6 = f"""select
  trim(trailing from PK.RDB$RELATION_NAME) as PKTABLE_NAME,
  trim(trailing from ISP.RDB$FIELD_NAME) as PKCOLUMN_NAME,
  trim(trailing from FK.RDB$RELATION_NAME) as FKTABLE_NAME,
  trim(trailing from ISF.RDB$FIELD_NAME) as FKCOLUMN_NAME,
  cast((ISP.RDB$FIELD_POSITION + 1) as smallint) as KEY_SEQ,
  trim(trailing from RC.RDB$UPDATE_RULE) as UPDATE_RULE,
  trim(trailing from RC.RDB$DELETE_RULE) as DELETE_RULE,
  trim(trailing from PK.RDB$CONSTRAINT_NAME) as PK_NAME,
  trim(trailing from FK.RDB$CONSTRAINT_NAME) as FK_NAME,
  trim(trailing from PK.RDB$SCHEMA_NAME) as PKTABLE_SCHEM,
  trim(trailing from FK.RDB$SCHEMA_NAME) as FKTABLE_SCHEM
{_FOREIGN_KEYS_JOINS_6}"""


def _key_rule(rule: Optional[str]) -> Optional[int]:
    if rule is None:
        return None

    return KEY_RULES.get(rule.strip().upper())


def _map_primary_key_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    return (
        assembler.at(1)
        .set_string(_trim_name(record.get("TABLE_SCHEM")))
        .at(2)
        .set_string(_trim_name(record["TABLE_NAME"]))
        .at(3)
        .set_string(_trim_name(record["COLUMN_NAME"]))
        .at(4)
        .set_short(record["KEY_SEQ"])
        .at(5)
        .set_string(_trim_name(record["PK_NAME"]))
        .finalize()
    )


def _map_foreign_key_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    return (
        assembler.at(1)
        .set_string(_trim_name(record.get("PKTABLE_SCHEM")))
        .at(2)
        .set_string(_trim_name(record["PKTABLE_NAME"]))
        .at(3)
        .set_string(_trim_name(record["PKCOLUMN_NAME"]))
        .at(5)
        .set_string(_trim_name(record.get("FKTABLE_SCHEM")))
        .at(6)
        .set_string(_trim_name(record["FKTABLE_NAME"]))
        .at(7)
        .set_string(_trim_name(record["FKCOLUMN_NAME"]))
        .at(8)
        .set_short(record["KEY_SEQ"])
        .at(9)
        .set_short(_key_rule(record["UPDATE_RULE"]))
        .at(10)
        .set_short(_key_rule(record["DELETE_RULE"]))
        .at(11)
        .set_string(_trim_name(record["FK_NAME"]))
        .at(12)
        .set_string(_trim_name(record["PK_NAME"]))
        .at(13)
        .set_short(JDBC_CONSTANTS.importedKeyNotDeferrable)
        .finalize()
    )


def _primary_key_clauses(table: Optional[str], schema: Optional[str] = None):
    return [
        Clause.equals_clause("RC.RDB$RELATION_NAME", table),
        Clause.raw("RC.RDB$CONSTRAINT_TYPE = 'PRIMARY KEY'"),
    ]


def _primary_key_clauses_6(table: Optional[str], schema: Optional[str] = None):
    return [Clause.equals_clause("RC.RDB$SCHEMA_NAME", schema)] + _primary_key_clauses(table)


def _imported_key_clauses(table: Optional[str], schema: Optional[str] = None):
    return [Clause.equals_clause("FK.RDB$RELATION_NAME", table)]


def _imported_key_clauses_6(table: Optional[str], schema: Optional[str] = None):
    return [Clause.equals_clause("FK.RDB$SCHEMA_NAME", schema), Clause.equals_clause("FK.RDB$RELATION_NAME", table)]


def _exported_key_clauses(table: Optional[str], schema: Optional[str] = None):
    return [Clause.equals_clause("PK.RDB$RELATION_NAME", table)]


def _exported_key_clauses_6(table: Optional[str], schema: Optional[str] = None):
    return [Clause.equals_clause("PK.RDB$SCHEMA_NAME", schema), Clause.equals_clause("PK.RDB$RELATION_NAME", table)]


def _cross_reference_clauses(
    primary_table: Optional[str],
    foreign_table: Optional[str],
    primary_schema: Optional[str] = None,
    foreign_schema: Optional[str] = None,
):
    return _exported_key_clauses(primary_table) + _imported_key_clauses(foreign_table)


def _cross_reference_clauses_6(
    primary_table: Optional[str],
    foreign_table: Optional[str],
    primary_schema: Optional[str] = None,
    foreign_schema: Optional[str] = None,
):
    return _exported_key_clauses_6(primary_table, primary_schema) + _imported_key_clauses_6(
        foreign_table, foreign_schema
    )


def _primary_keys(generation: Generation, select: str, order_by: str, clauses) -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="primary keys",
        generation=generation,
        row_type=MetadataPrimaryKeyRow,
        select=select,
        order_by=order_by,
        clauses=clauses,
        map_row=_map_primary_key_row,
    )


def _foreign_keys(name: str, generation: Generation, select: str, order_by: str, clauses) -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name=name,
        generation=generation,
        row_type=MetadataForeignKeyRow,
        select=select,
        order_by=order_by,
        clauses=clauses,
        map_row=_map_foreign_key_row,
    )


PRIMARY_KEYS = StrategyTable(
    "primary keys",
    {
        (Generation.FB2_5, False): lambda: _primary_keys(
            Generation.FB2_5, _PRIMARY_KEYS_2_5, "ISGMT.RDB$FIELD_NAME", _primary_key_clauses
        ),
        (Generation.FB3, False): lambda: _primary_keys(
            Generation.FB3, _PRIMARY_KEYS_3, "ISGMT.RDB$FIELD_NAME", _primary_key_clauses
        ),
        (Generation.FB6, False): lambda: _primary_keys(
            Generation.FB6, _PRIMARY_KEYS_6, "RC.RDB$SCHEMA_NAME, ISGMT.RDB$FIELD_NAME", _primary_key_clauses_6
        ),
    },
)

IMPORTED_KEYS = StrategyTable(
    "imported keys",
    {
        (Generation.FB2_5, False): lambda: _foreign_keys(
            "imported keys", Generation.FB2_5, _FOREIGN_KEYS_2_5, "1, 5", _imported_key_clauses
        ),
        (Generation.FB3, False): lambda: _foreign_keys(
            "imported keys", Generation.FB3, _FOREIGN_KEYS_3, "1, 5", _imported_key_clauses
        ),
        (Generation.FB6, False): lambda: _foreign_keys(
            "imported keys", Generation.FB6, _FOREIGN_KEYS_6, "10, 1, 5", _imported_key_clauses_6
        ),
    },
)

EXPORTED_KEYS = StrategyTable(
    "exported keys",
    {
        (Generation.FB2_5, False): lambda: _foreign_keys(
            "exported keys", Generation.FB2_5, _FOREIGN_KEYS_2_5, "3, 5", _exported_key_clauses
        ),
        (Generation.FB3, False): lambda: _foreign_keys(
            "exported keys", Generation.FB3, _FOREIGN_KEYS_3, "3, 5", _exported_key_clauses
        ),
        (Generation.FB6, False): lambda: _foreign_keys(
            "exported keys", Generation.FB6, _FOREIGN_KEYS_6, "11, 3, 5", _exported_key_clauses_6
        ),
    },
)

CROSS_REFERENCE = StrategyTable(
    "cross reference",
    {
        (Generation.FB2_5, False): lambda: _foreign_keys(
            "cross reference", Generation.FB2_5, _FOREIGN_KEYS_2_5, "3, 5", _cross_reference_clauses
        ),
        (Generation.FB3, False): lambda: _foreign_keys(
            "cross reference", Generation.FB3, _FOREIGN_KEYS_3, "3, 5", _cross_reference_clauses
        ),
        (Generation.FB6, False): lambda: _foreign_keys(
            "cross reference", Generation.FB6, _FOREIGN_KEYS_6, "11, 3, 5", _cross_reference_clauses_6
        ),
    },
)
