# (C) 2021 GoodData Corporation
import pytest

from catalog_metadata import (
    CapabilitySnapshot,
    CatalogMetadataError,
    Generation,
    MetadataBestRowIdentifierRow,
    MetadataCatalogRow,
    MetadataColumnPrivilegeRow,
    MetadataColumnRow,
    MetadataForeignKeyRow,
    MetadataFunctionColumnRow,
    MetadataFunctionRow,
    MetadataIndexInfoRow,
    MetadataPrimaryKeyRow,
    MetadataProcedureColumnRow,
    MetadataProcedureRow,
    MetadataPseudoColumnRow,
    MetadataSchemaRow,
    MetadataTablePrivilegeRow,
    MetadataTableRow,
    RowAssembler,
    StrategyTable,
    escape_wildcards,
)
from catalog_metadata.query_columns import COLUMNS
from catalog_metadata.query_functions import FUNCTIONS
from catalog_metadata.query_indexes import INDEX_INFO
from catalog_metadata.query_keys import CROSS_REFERENCE, EXPORTED_KEYS, IMPORTED_KEYS, PRIMARY_KEYS
from catalog_metadata.query_privileges import COLUMN_PRIVILEGES, TABLE_PRIVILEGES
from catalog_metadata.query_procedures import PROCEDURES
from catalog_metadata.query_pseudo_columns import PSEUDO_COLUMNS
from catalog_metadata.query_routines import FUNCTION_COLUMNS, PROCEDURE_COLUMNS
from catalog_metadata.query_row_identifiers import BEST_ROW_IDENTIFIER
from catalog_metadata.query_schemas import CATALOGS, SCHEMAS
from catalog_metadata.query_tables import TABLES

_ALL_TABLES = [
    TABLES,
    COLUMNS,
    TABLE_PRIVILEGES,
    COLUMN_PRIVILEGES,
    PRIMARY_KEYS,
    IMPORTED_KEYS,
    EXPORTED_KEYS,
    CROSS_REFERENCE,
    INDEX_INFO,
    BEST_ROW_IDENTIFIER,
    PROCEDURES,
    FUNCTIONS,
    FUNCTION_COLUMNS,
    PROCEDURE_COLUMNS,
    PSEUDO_COLUMNS,
]

_ALL_SNAPSHOTS = [
    CapabilitySnapshot.for_version(2, 1),
    CapabilitySnapshot.for_version(2, 5),
    CapabilitySnapshot.for_version(3, 0),
    CapabilitySnapshot.for_version(3, 0, catalog_as_package=True),
    CapabilitySnapshot.for_version(4, 0),
    CapabilitySnapshot.for_version(5, 0, catalog_as_package=True),
    CapabilitySnapshot.for_version(6, 0),
]


def _map(strategy, record, capabilities):
    return strategy.map_row(record, RowAssembler(strategy.row_type), capabilities)


@pytest.mark.parametrize("table", _ALL_TABLES, ids=lambda t: t.name)
def test_selection_is_deterministic(table):
    for capabilities in _ALL_SNAPSHOTS:
        first = table.select(capabilities)
        same = CapabilitySnapshot.for_version(
            capabilities.version_major, capabilities.version_minor, capabilities.catalog_as_package
        )

        assert table.select(capabilities) is first
        assert table.select(same) is first
        assert first.generation <= max(capabilities.generation, Generation.FB2_5)


@pytest.mark.parametrize("table", _ALL_TABLES, ids=lambda t: t.name)
def test_row_shape_is_same_for_all_generations(table):
    row_types = {table.select(capabilities).row_type for capabilities in _ALL_SNAPSHOTS}

    assert len(row_types) == 1


@pytest.mark.parametrize(
    "version,expected",
    [
        ((2, 1), Generation.FB2_1),
        ((2, 5), Generation.FB2_5),
        ((3, 0), Generation.FB2_5),
        ((4, 0), Generation.FB2_5),
        ((5, 0), Generation.FB2_5),
        ((6, 0), Generation.FB6),
    ],
)
def test_tables_strategy_selection(version, expected):
    assert TABLES.select(CapabilitySnapshot.for_version(*version)).generation == expected


def test_engine_older_than_any_strategy_uses_oldest(fb21):
    assert COLUMNS.select(fb21).generation == Generation.FB2_5
    assert PRIMARY_KEYS.select(fb21).generation == Generation.FB2_5


def test_catalog_as_package_switches_strategy(fb3, fb3_packages):
    assert FUNCTION_COLUMNS.select(fb3) is not FUNCTION_COLUMNS.select(fb3_packages)
    assert not FUNCTION_COLUMNS.select(fb3).catalog_as_package
    assert FUNCTION_COLUMNS.select(fb3_packages).catalog_as_package
    assert PROCEDURE_COLUMNS.select(fb3_packages).catalog_as_package


def test_catalog_as_package_ignored_where_irrelevant(fb25, fb3, fb3_packages):
    assert TABLES.select(fb3) is TABLES.select(fb3_packages)
    assert COLUMNS.select(fb3) is COLUMNS.select(fb3_packages)

    # engine without packages
    old = CapabilitySnapshot.for_version(2, 5, catalog_as_package=True)
    assert FUNCTION_COLUMNS.select(old) is FUNCTION_COLUMNS.select(fb25)
    assert not FUNCTION_COLUMNS.select(old).catalog_as_package


def test_table_without_strategy_for_package_mode_fails(fb3_packages):
    table = StrategyTable("packages only", {(Generation.FB3, True): lambda: None})

    with pytest.raises(CatalogMetadataError):
        table.select(CapabilitySnapshot.for_version(3, 0))

    assert table.key_for(fb3_packages) == (Generation.FB3, True)


def test_tables_query_2_1(fb21):
    query = TABLES.select(fb21).build_query(None, "EMP%", ["TABLE", "VIEW"])

    assert query.sql.startswith("select\n  RDB$RELATION_NAME as TABLE_NAME")
    assert query.sql.endswith(
        "\nwhere RDB$RELATION_NAME starting with ?"
        "\nand ((RDB$SYSTEM_FLAG = 0 and RDB$VIEW_BLR is null) or (RDB$VIEW_BLR is not null))"
        "\norder by 2, 1"
    )
    assert query.parameters == ["EMP"]


def test_tables_query_2_1_unknown_types(fb21):
    query = TABLES.select(fb21).build_query(None, None, ["GLOBAL TEMPORARY"])

    assert query.sql.endswith("\nwhere 1 = 0\norder by 2, 1")
    assert query.parameters == []


def test_tables_query_2_5(fb3):
    strategy = TABLES.select(fb3)

    unfiltered = strategy.build_query(None, None, None)
    assert "\nwhere " not in unfiltered.sql
    assert unfiltered.sql.endswith("from RDB$RELATIONS\norder by 2, 1")
    assert unfiltered.parameters == []

    query = strategy.build_query("IGNORED", "EMPLOYEE", ["VIEW"])
    assert query.sql.endswith(
        "\nwhere RDB$RELATION_NAME = ?"
        "\nand ((RDB$RELATION_TYPE = 1 or RDB$RELATION_TYPE is null and RDB$VIEW_BLR is not null))"
        "\norder by 2, 1"
    )
    assert query.parameters == ["EMPLOYEE"]

    assert strategy.build_query(None, None, ["UNKNOWN"]).sql.endswith("\nwhere 1 = 0\norder by 2, 1")


def test_tables_query_6(fb6):
    query = TABLES.select(fb6).build_query("PUBLIC", "EMP%", None)

    assert query.sql.endswith(
        "\nwhere RDB$SCHEMA_NAME = ?\nand RDB$RELATION_NAME starting with ?\norder by 2, 5, 1"
    )
    assert query.parameters == ["PUBLIC", "EMP"]


def test_map_table_row(fb25):
    record = {"TABLE_NAME": "EMPLOYEE   ", "TABLE_TYPE": "TABLE", "REMARKS": "staff", "OWNER_NAME": "SYSDBA   "}

    assert _map(TABLES.select(fb25), record, fb25) == MetadataTableRow(
        None, None, "EMPLOYEE", "TABLE", "staff", None, None, None, None, None, "SYSDBA"
    )


def test_columns_query(fb25, fb3, fb6):
    query = COLUMNS.select(fb3).build_query("IGNORED", "EMP%", "%NAME")

    assert query.sql.endswith(
        "\nwhere RF.RDB$RELATION_NAME starting with ?"
        "\nand trim(trailing from RF.RDB$FIELD_NAME) like '%NAME' escape '\\'"
        "\norder by RF.RDB$RELATION_NAME, RF.RDB$FIELD_POSITION"
    )
    assert query.parameters == ["EMP"]
    assert "trim(trailing from RF.RDB$RELATION_NAME) as RELATION_NAME" in query.sql
    assert "RF.RDB$RELATION_NAME as RELATION_NAME" in COLUMNS.select(fb25).build_query(None, None, None).sql

    query = COLUMNS.select(fb6).build_query("PUBLIC", "EMPLOYEE", None)
    assert query.parameters == ["PUBLIC", "EMPLOYEE"]
    assert query.sql.endswith("order by RF.RDB$SCHEMA_NAME, RF.RDB$RELATION_NAME, RF.RDB$FIELD_POSITION")


def _column_record(**overrides):
    record = {
        "RELATION_NAME": "EMPLOYEE",
        "FIELD_NAME": "FIRST_NAME",
        "FIELD_TYPE": 37,
        "FIELD_SUB_TYPE": 0,
        "FIELD_PRECISION": None,
        "FIELD_SCALE": 0,
        "FIELD_LENGTH": 60,
        "CHAR_LEN": 15,
        "CHARACTER_SET_ID": 4,
        "REMARKS": None,
        "DEFAULT_SOURCE": "DEFAULT 'x'",
        "FIELD_POSITION": 2,
        "IS_NULLABLE": False,
        "IS_COMPUTED": False,
        "IS_IDENTITY": False,
        "JB_IDENTITY_TYPE": None,
    }
    record.update(overrides)

    return record


def test_map_column_row(fb3):
    row = _map(COLUMNS.select(fb3), _column_record(), fb3)

    assert len(row) == len(MetadataColumnRow._fields)
    assert row == MetadataColumnRow(
        table_cat=None,
        table_schem=None,
        table_name="EMPLOYEE",
        column_name="FIRST_NAME",
        data_type=12,
        type_name="VARCHAR",
        column_size=15,
        buffer_length=None,
        decimal_digits=None,
        num_prec_radix=10,
        nullable=0,
        remarks=None,
        column_def="'x'",
        sql_data_type=None,
        sql_datetime_sub=None,
        char_octet_length=60,
        ordinal_position=2,
        is_nullable="NO",
        scope_catalog=None,
        scope_schema=None,
        scope_table=None,
        source_data_type=None,
        is_autoincrement="NO",
        is_generatedcolumn="NO",
        jb_is_identity="NO",
        jb_identity_type=None,
    )


def test_map_column_row_legacy_flags(fb25):
    row = _map(
        COLUMNS.select(fb25),
        _column_record(
            RELATION_NAME="EMPLOYEE    ",
            FIELD_NAME="SALARY    ",
            FIELD_TYPE=16,
            FIELD_SUB_TYPE=2,
            FIELD_PRECISION=10,
            FIELD_SCALE=-2,
            FIELD_LENGTH=8,
            CHAR_LEN=None,
            CHARACTER_SET_ID=None,
            DEFAULT_SOURCE=None,
            IS_NULLABLE="T",
            IS_COMPUTED="F",
            IS_IDENTITY="F",
        ),
        fb25,
    )

    assert (row.table_name, row.column_name) == ("EMPLOYEE", "SALARY")
    assert (row.data_type, row.type_name, row.column_size, row.decimal_digits) == (3, "DECIMAL", 10, 2)
    assert (row.nullable, row.is_nullable, row.column_def, row.char_octet_length) == (1, "YES", None, None)
    assert row.is_autoincrement == "NO"


@pytest.mark.parametrize(
    "overrides,expected",
    [
        (dict(FIELD_TYPE=8, IS_IDENTITY=True, JB_IDENTITY_TYPE="BY DEFAULT"), ("YES", "YES", "YES", "BY DEFAULT")),
        (dict(FIELD_TYPE=8), ("", "NO", "NO", None)),
        (dict(FIELD_TYPE=16, FIELD_SUB_TYPE=1, FIELD_SCALE=0), ("", "NO", "NO", None)),
        (dict(FIELD_TYPE=16, FIELD_SUB_TYPE=1, FIELD_SCALE=-2), ("NO", "NO", "NO", None)),
        (dict(FIELD_TYPE=8, IS_COMPUTED=True), ("", "YES", "NO", None)),
    ],
)
def test_map_column_row_identity(fb3, overrides, expected):
    row = _map(COLUMNS.select(fb3), _column_record(**overrides), fb3)

    assert (row.is_autoincrement, row.is_generatedcolumn, row.jb_is_identity, row.jb_identity_type) == expected


def test_table_privileges_query(fb25, fb6):
    query = TABLE_PRIVILEGES.select(fb25).build_query(None, "EMP%")

    assert query.sql.endswith(
        "\nwhere RDB$OBJECT_TYPE = 0 and RDB$FIELD_NAME is null\nand RDB$RELATION_NAME starting with ?\norder by 1, 4"
    )
    assert query.parameters == ["EMP"]

    query = TABLE_PRIVILEGES.select(fb6).build_query("PUBLIC", "EMPLOYEE")
    assert query.sql.endswith(
        "\nand RDB$RELATION_NAME = ?\nand RDB$RELATION_SCHEMA_NAME = ?\norder by 6, 1, 4"
    )
    assert query.parameters == ["EMPLOYEE", "PUBLIC"]


@pytest.mark.parametrize(
    "privilege,grantable,expected_privilege,expected_grantable",
    [
        ("S", 0, "SELECT", "NO"),
        ("I", 1, "INSERT", "YES"),
        ("U     ", 2, "UPDATE", "YES"),
        ("D", None, "DELETE", "NO"),
        ("R", 1, "REFERENCES", "YES"),
        ("A", 0, "ALL", "NO"),
        ("M", 0, "MEMBEROF", "NO"),
        ("X", 0, "X", "NO"),
    ],
)
def test_map_table_privilege_row(fb3, privilege, grantable, expected_privilege, expected_grantable):
    record = {
        "TABLE_NAME": "EMPLOYEE",
        "GRANTOR": "SYSDBA",
        "GRANTEE": "PUBLIC  ",
        "PRIVILEGE": privilege,
        "IS_GRANTABLE": grantable,
    }

    assert _map(TABLE_PRIVILEGES.select(fb3), record, fb3) == MetadataTablePrivilegeRow(
        None, None, "EMPLOYEE", "SYSDBA", "PUBLIC", expected_privilege, expected_grantable
    )


def test_column_privileges(fb3):
    strategy = COLUMN_PRIVILEGES.select(fb3)
    query = strategy.build_query("EMPLOYEE", None)

    assert query.sql.endswith("\nwhere UP.RDB$OBJECT_TYPE = 0\nand RF.RDB$RELATION_NAME = ?\norder by 2, 5")
    assert query.parameters == ["EMPLOYEE"]

    record = {
        "TABLE_NAME": "EMPLOYEE",
        "COLUMN_NAME": "EMP_NO",
        "GRANTOR": "SYSDBA",
        "GRANTEE": "PUBLIC",
        "PRIVILEGE": "U",
        "IS_GRANTABLE": 0,
    }
    assert _map(strategy, record, fb3) == MetadataColumnPrivilegeRow(
        None, None, "EMPLOYEE", "EMP_NO", "SYSDBA", "PUBLIC", "UPDATE", "NO"
    )


def test_primary_keys_query_uses_exact_name(fb3):
    query = PRIMARY_KEYS.select(fb3).build_query("EMP%")

    assert query.sql.endswith(
        "\nwhere RC.RDB$RELATION_NAME = ?\nand RC.RDB$CONSTRAINT_TYPE = 'PRIMARY KEY'\norder by ISGMT.RDB$FIELD_NAME"
    )
    assert query.parameters == ["EMP%"]

    query = PRIMARY_KEYS.select(fb3).build_query(None)
    assert query.sql.endswith("\nwhere RC.RDB$CONSTRAINT_TYPE = 'PRIMARY KEY'\norder by ISGMT.RDB$FIELD_NAME")
    assert query.parameters == []


def test_foreign_keys_queries(fb3):
    imported = IMPORTED_KEYS.select(fb3).build_query("EMPLOYEE")
    exported = EXPORTED_KEYS.select(fb3).build_query("DEPARTMENT")

    assert imported.sql.endswith("\nwhere FK.RDB$RELATION_NAME = ?\norder by 1, 5")
    assert imported.parameters == ["EMPLOYEE"]
    assert exported.sql.endswith("\nwhere PK.RDB$RELATION_NAME = ?\norder by 3, 5")
    assert exported.parameters == ["DEPARTMENT"]


@pytest.mark.parametrize(
    "update_rule,delete_rule,expected",
    [
        ("RESTRICT   ", "CASCADE", (3, 0)),
        ("NO ACTION", "SET NULL", (3, 2)),
        ("SET DEFAULT", "RESTRICT", (4, 3)),
        (None, None, (None, None)),
    ],
)
def test_map_foreign_key_row(fb25, update_rule, delete_rule, expected):
    record = {
        "PKTABLE_NAME": "DEPARTMENT ",
        "PKCOLUMN_NAME": "DEPT_NO ",
        "FKTABLE_NAME": "EMPLOYEE ",
        "FKCOLUMN_NAME": "DEPT_NO ",
        "KEY_SEQ": 1,
        "UPDATE_RULE": update_rule,
        "DELETE_RULE": delete_rule,
        "PK_NAME": "PK_DEPARTMENT ",
        "FK_NAME": "FK_EMPLOYEE ",
    }
    update, delete = expected

    assert _map(IMPORTED_KEYS.select(fb25), record, fb25) == MetadataForeignKeyRow(
        None,
        None,
        "DEPARTMENT",
        "DEPT_NO",
        None,
        None,
        "EMPLOYEE",
        "DEPT_NO",
        1,
        update,
        delete,
        "FK_EMPLOYEE",
        "PK_DEPARTMENT",
        7,
    )


def test_function_columns_query_2_5(fb25):
    query = FUNCTION_COLUMNS.select(fb25).build_query("PKG", "F%", escape_wildcards("PARAM_1"))

    assert "\nwhere FUN.RDB$FUNCTION_NAME starting with ?\nand 'PARAM_' || FUNA.RDB$ARGUMENT_POSITION = ?" in query.sql
    assert query.parameters == ["F", "PARAM_1"]
    assert "order by FUN.RDB$FUNCTION_NAME," in query.sql


def test_function_columns_query_2_5_unescaped_parameter_name(fb25):
    # '_' in the generated parameter names is a wildcard unless escaped
    query = FUNCTION_COLUMNS.select(fb25).build_query("PKG", "F%", "PARAM_1")

    assert (
        "\nand trim(trailing from 'PARAM_' || FUNA.RDB$ARGUMENT_POSITION) like 'PARAM_1' escape '\\'\norder by"
        in query.sql
    )
    assert query.parameters == ["F"]


def test_function_columns_query_3(fb3):
    query = FUNCTION_COLUMNS.select(fb3).build_query("PKG", "F%", None)

    assert "\nwhere FUN.RDB$PACKAGE_NAME is null\nand FUN.RDB$FUNCTION_NAME starting with ?" in query.sql
    assert "cast(null as varchar(63)) as FUNCTION_CAT" in query.sql
    assert query.parameters == ["F"]


@pytest.mark.parametrize(
    "catalog,condition,params",
    [
        (None, None, []),
        ("", "\nwhere FUN.RDB$PACKAGE_NAME is null\norder by", []),
        ("PKG", "\nwhere FUN.RDB$PACKAGE_NAME = ?\norder by", ["PKG"]),
    ],
)
def test_function_columns_query_packages(fb3_packages, catalog, condition, params):
    query = FUNCTION_COLUMNS.select(fb3_packages).build_query(catalog, None, None)

    if condition is None:
        assert "\nwhere " not in query.sql
    else:
        assert condition in query.sql

    assert "coalesce(trim(trailing from FUN.RDB$PACKAGE_NAME), '') as FUNCTION_CAT" in query.sql
    assert "order by FUN.RDB$PACKAGE_NAME nulls first" in query.sql
    assert query.parameters == params


def _function_record(**overrides):
    record = {
        "FUNCTION_CAT": None,
        "FUNCTION_NAME": "F",
        "COLUMN_NAME": "PARAM_0",
        "FIELD_TYPE": 8,
        "FIELD_SUB_TYPE": 0,
        "FIELD_PRECISION": 0,
        "FIELD_SCALE": 0,
        "FIELD_LENGTH": 4,
        "CHAR_LEN": None,
        "CHARACTER_SET_ID": None,
        "ORDINAL_POSITION": 0,
        "IS_NULLABLE": True,
    }
    record.update(overrides)

    return record


def test_map_function_column_row(fb3_packages):
    row = _map(FUNCTION_COLUMNS.select(fb3_packages), _function_record(FUNCTION_CAT="PKG"), fb3_packages)

    assert row == MetadataFunctionColumnRow(
        function_cat="PKG",
        function_schem=None,
        function_name="F",
        column_name="PARAM_0",
        column_type=4,
        data_type=4,
        type_name="INTEGER",
        precision=10,
        length=4,
        scale=0,
        radix=10,
        nullable=1,
        remarks=None,
        char_octet_length=None,
        ordinal_position=0,
        is_nullable="YES",
        specific_name='"PKG"."F"',
    )


def test_map_function_column_row_parameter(fb25):
    row = _map(
        FUNCTION_COLUMNS.select(fb25),
        _function_record(
            FUNCTION_NAME="F   ",
            COLUMN_NAME="PARAM_1",
            FIELD_TYPE=37,
            FIELD_LENGTH=20,
            CHAR_LEN=20,
            ORDINAL_POSITION=1,
            IS_NULLABLE="F",
        ),
        fb25,
    )

    assert (row.function_cat, row.function_name, row.specific_name) == (None, "F", "F")
    assert (row.column_type, row.data_type, row.precision, row.char_octet_length) == (1, 12, 20, 20)
    assert (row.nullable, row.is_nullable) == (0, "NO")


def test_procedure_columns_queries(fb25, fb3, fb3_packages):
    query = PROCEDURE_COLUMNS.select(fb25).build_query(None, "P", "X%")

    assert query.sql.endswith(
        "\nwhere PP.RDB$PROCEDURE_NAME = ?\nand PP.RDB$PARAMETER_NAME starting with ?"
        "\norder by PP.RDB$PROCEDURE_NAME, PP.RDB$PARAMETER_TYPE desc, PP.RDB$PARAMETER_NUMBER"
    )
    assert query.parameters == ["P", "X"]

    query = PROCEDURE_COLUMNS.select(fb3).build_query("IGNORED", "P", None)
    assert "\nwhere PP.RDB$PACKAGE_NAME is null\nand PP.RDB$PROCEDURE_NAME = ?" in query.sql
    assert query.parameters == ["P"]

    query = PROCEDURE_COLUMNS.select(fb3_packages).build_query("PKG", "P", None)
    assert "\nwhere PP.RDB$PACKAGE_NAME = ?\nand PP.RDB$PROCEDURE_NAME = ?" in query.sql
    assert query.parameters == ["PKG", "P"]


def test_map_procedure_column_row(fb3):
    record = {
        "PROCEDURE_CAT": None,
        "PROCEDURE_NAME": "P",
        "COLUMN_NAME": "X",
        "COLUMN_TYPE": 1,
        "FIELD_TYPE": 37,
        "FIELD_SUB_TYPE": 0,
        "FIELD_PRECISION": None,
        "FIELD_SCALE": 0,
        "FIELD_LENGTH": 10,
        "CHAR_LEN": 10,
        "CHARACTER_SET_ID": 0,
        "NULL_FLAG": 1,
        "REMARKS": None,
        "PARAMETER_NUMBER": 1,
    }

    assert _map(PROCEDURE_COLUMNS.select(fb3), record, fb3) == MetadataProcedureColumnRow(
        procedure_cat=None,
        procedure_schem=None,
        procedure_name="P",
        column_name="X",
        column_type=4,
        data_type=12,
        type_name="VARCHAR",
        precision=10,
        length=10,
        scale=None,
        radix=10,
        nullable=0,
        remarks=None,
        column_def=None,
        sql_data_type=None,
        sql_datetime_sub=None,
        char_octet_length=10,
        ordinal_position=1,
        is_nullable="NO",
        specific_name="P",
    )


def test_map_procedure_input_parameter(fb3_packages):
    record = {
        "PROCEDURE_CAT": "PKG",
        "PROCEDURE_NAME": "P",
        "COLUMN_NAME": "ID",
        "COLUMN_TYPE": 0,
        "FIELD_TYPE": 16,
        "FIELD_SUB_TYPE": 0,
        "FIELD_PRECISION": 0,
        "FIELD_SCALE": 0,
        "FIELD_LENGTH": 8,
        "CHAR_LEN": None,
        "CHARACTER_SET_ID": None,
        "NULL_FLAG": None,
        "REMARKS": "identifier",
        "PARAMETER_NUMBER": 1,
    }
    row = _map(PROCEDURE_COLUMNS.select(fb3_packages), record, fb3_packages)

    assert (row.column_type, row.data_type, row.precision, row.scale) == (1, -5, 19, 0)
    assert (row.nullable, row.is_nullable, row.remarks) == (1, "YES", "identifier")
    assert row.specific_name == '"PKG"."P"'


def test_pseudo_columns_query(fb3):
    query = PSEUDO_COLUMNS.select(fb3).build_query("EMP%")

    assert query.sql.endswith("\nwhere RDB$RELATION_NAME starting with ?\norder by RDB$RELATION_NAME")
    assert query.parameters == ["EMP"]


def test_map_pseudo_column_rows(fb25, fb3):
    record = {
        "RELATION_NAME": "EMPLOYEE  ",
        "DBKEY_LENGTH": 8,
        "HAS_RECORD_VERSION": True,
        "RECORD_VERSION_NULLABLE": "NO",
    }
    rows = _map(PSEUDO_COLUMNS.select(fb3), record, fb3)

    assert [row.column_name for row in rows] == ["RDB$DB_KEY", "RDB$RECORD_VERSION"]
    assert all(isinstance(row, MetadataPseudoColumnRow) for row in rows)
    db_key, record_version = rows
    assert (db_key.table_name, db_key.data_type, db_key.column_size, db_key.decimal_digits) == ("EMPLOYEE", -8, 8, None)
    assert (db_key.char_octet_length, db_key.is_nullable, db_key.column_usage) == (8, "NO", "NO_USAGE_RESTRICTIONS")
    assert (record_version.data_type, record_version.column_size, record_version.decimal_digits) == (-5, 19, 0)
    assert (record_version.remarks, record_version.char_octet_length, record_version.is_nullable) == (None, None, "NO")

    legacy = dict(record, HAS_RECORD_VERSION="F", RECORD_VERSION_NULLABLE="")
    assert [row.column_name for row in _map(PSEUDO_COLUMNS.select(fb25), legacy, fb25)] == ["RDB$DB_KEY"]


def test_view_without_record_version(fb3):
    record = {
        "RELATION_NAME": "V_EMPLOYEE",
        "DBKEY_LENGTH": 16,
        "HAS_RECORD_VERSION": False,
        "RECORD_VERSION_NULLABLE": "NO",
    }
    rows = _map(PSEUDO_COLUMNS.select(fb3), record, fb3)

    assert [(row.column_name, row.column_size) for row in rows] == [("RDB$DB_KEY", 16)]


@pytest.mark.parametrize(
    "version,expected",
    [
        ((2, 5), Generation.FB2_5),
        ((3, 0), Generation.FB3),
        ((4, 0), Generation.FB3),
        ((5, 0), Generation.FB5),
        ((6, 0), Generation.FB6),
    ],
)
def test_index_info_strategy_selection(version, expected):
    assert INDEX_INFO.select(CapabilitySnapshot.for_version(*version)).generation == expected


def test_primary_keys_query_6(fb3, fb6):
    query = PRIMARY_KEYS.select(fb6).build_query("EMPLOYEE", "PUBLIC")

    assert "trim(trailing from RC.RDB$SCHEMA_NAME) as TABLE_SCHEM" in query.sql
    assert "on RC.RDB$SCHEMA_NAME = ISGMT.RDB$SCHEMA_NAME and RC.RDB$INDEX_NAME = ISGMT.RDB$INDEX_NAME" in query.sql
    assert query.sql.endswith(
        "\nwhere RC.RDB$SCHEMA_NAME = ?\nand RC.RDB$RELATION_NAME = ?\nand RC.RDB$CONSTRAINT_TYPE = 'PRIMARY KEY'"
        "\norder by RC.RDB$SCHEMA_NAME, ISGMT.RDB$FIELD_NAME"
    )
    assert query.parameters == ["PUBLIC", "EMPLOYEE"]

    # engines without schemas ignore the schema
    query = PRIMARY_KEYS.select(fb3).build_query("EMPLOYEE", "PUBLIC")
    assert "SCHEMA_NAME" not in query.sql
    assert query.parameters == ["EMPLOYEE"]


def test_map_primary_key_row_6(fb6):
    record = {
        "TABLE_SCHEM": "PUBLIC  ",
        "TABLE_NAME": "EMPLOYEE ",
        "COLUMN_NAME": "EMP_NO ",
        "KEY_SEQ": 1,
        "PK_NAME": "PK_EMPLOYEE ",
    }

    assert _map(PRIMARY_KEYS.select(fb6), record, fb6) == MetadataPrimaryKeyRow(
        None, "PUBLIC", "EMPLOYEE", "EMP_NO", 1, "PK_EMPLOYEE"
    )


def test_foreign_keys_queries_6(fb6):
    imported = IMPORTED_KEYS.select(fb6).build_query("EMPLOYEE", "PUBLIC")
    exported = EXPORTED_KEYS.select(fb6).build_query("DEPARTMENT", None)

    assert "on PK.RDB$SCHEMA_NAME = RC.RDB$CONST_SCHEMA_NAME_UQ" in imported.sql
    assert imported.sql.endswith("\nwhere FK.RDB$SCHEMA_NAME = ?\nand FK.RDB$RELATION_NAME = ?\norder by 10, 1, 5")
    assert imported.parameters == ["PUBLIC", "EMPLOYEE"]
    assert exported.sql.endswith("\nwhere PK.RDB$RELATION_NAME = ?\norder by 11, 3, 5")
    assert exported.parameters == ["DEPARTMENT"]


def test_cross_reference_queries(fb3, fb6):
    query = CROSS_REFERENCE.select(fb3).build_query("DEPARTMENT", "EMPLOYEE")

    assert query.sql.endswith("\nwhere PK.RDB$RELATION_NAME = ?\nand FK.RDB$RELATION_NAME = ?\norder by 3, 5")
    assert query.parameters == ["DEPARTMENT", "EMPLOYEE"]

    query = CROSS_REFERENCE.select(fb6).build_query("DEPARTMENT", "EMPLOYEE", "PUBLIC", "HR")
    assert query.sql.endswith(
        "\nwhere PK.RDB$SCHEMA_NAME = ?\nand PK.RDB$RELATION_NAME = ?"
        "\nand FK.RDB$SCHEMA_NAME = ?\nand FK.RDB$RELATION_NAME = ?\norder by 11, 3, 5"
    )
    assert query.parameters == ["PUBLIC", "DEPARTMENT", "HR", "EMPLOYEE"]


def test_map_foreign_key_row_6(fb6):
    record = {
        "PKTABLE_SCHEM": "PUBLIC ",
        "PKTABLE_NAME": "DEPARTMENT",
        "PKCOLUMN_NAME": "DEPT_NO",
        "FKTABLE_SCHEM": "HR ",
        "FKTABLE_NAME": "EMPLOYEE",
        "FKCOLUMN_NAME": "DEPT_NO",
        "KEY_SEQ": 1,
        "UPDATE_RULE": "CASCADE",
        "DELETE_RULE": "RESTRICT",
        "PK_NAME": "PK_DEPARTMENT",
        "FK_NAME": "FK_EMPLOYEE",
    }
    row = _map(IMPORTED_KEYS.select(fb6), record, fb6)

    assert (row.pktable_schem, row.pktable_name, row.fktable_schem, row.fktable_name) == (
        "PUBLIC",
        "DEPARTMENT",
        "HR",
        "EMPLOYEE",
    )
    assert (row.update_rule, row.delete_rule) == (0, 3)


def test_column_privileges_6(fb6):
    strategy = COLUMN_PRIVILEGES.select(fb6)
    query = strategy.build_query("EMPLOYEE", "EMP%", "PUBLIC")

    assert "on UP.RDB$RELATION_SCHEMA_NAME = RF.RDB$SCHEMA_NAME and UP.RDB$RELATION_NAME = RF.RDB$RELATION_NAME" in (
        query.sql
    )
    assert query.sql.endswith(
        "\nwhere RF.RDB$SCHEMA_NAME = ?\nand UP.RDB$OBJECT_TYPE = 0\nand RF.RDB$RELATION_NAME = ?"
        "\nand RF.RDB$FIELD_NAME starting with ?\norder by 7, 2, 5"
    )
    assert query.parameters == ["PUBLIC", "EMPLOYEE", "EMP"]

    record = {
        "TABLE_NAME": "EMPLOYEE",
        "COLUMN_NAME": "EMP_NO",
        "GRANTOR": "SYSDBA",
        "GRANTEE": "PUBLIC",
        "PRIVILEGE": "R",
        "IS_GRANTABLE": 1,
        "TABLE_SCHEM": "PUBLIC  ",
    }
    assert _map(strategy, record, fb6) == MetadataColumnPrivilegeRow(
        None, "PUBLIC", "EMPLOYEE", "EMP_NO", "SYSDBA", "PUBLIC", "REFERENCES", "YES"
    )


def test_function_columns_query_6(fb6, fb6_packages):
    query = FUNCTION_COLUMNS.select(fb6).build_query(None, "F", None, "PUBLIC")

    assert "trim(trailing from FUN.RDB$SCHEMA_NAME) as FUNCTION_SCHEM" in query.sql
    assert "on F.RDB$SCHEMA_NAME = FUNA.RDB$FIELD_SOURCE_SCHEMA_NAME" in query.sql
    assert (
        "\nwhere FUN.RDB$SCHEMA_NAME = ?\nand FUN.RDB$PACKAGE_NAME is null\nand FUN.RDB$FUNCTION_NAME = ?" in query.sql
    )
    assert "\norder by FUN.RDB$SCHEMA_NAME, FUN.RDB$PACKAGE_NAME, FUN.RDB$FUNCTION_NAME,\n  case" in query.sql
    assert query.parameters == ["PUBLIC", "F"]

    query = FUNCTION_COLUMNS.select(fb6_packages).build_query("PKG", None, None, "PUB%")
    assert "\nwhere FUN.RDB$SCHEMA_NAME starting with ?\nand FUN.RDB$PACKAGE_NAME = ?" in query.sql
    assert "\norder by FUN.RDB$PACKAGE_NAME nulls first, FUN.RDB$SCHEMA_NAME, FUN.RDB$FUNCTION_NAME," in query.sql
    assert query.parameters == ["PUB", "PKG"]


def test_map_function_column_row_6(fb6):
    row = _map(FUNCTION_COLUMNS.select(fb6), _function_record(FUNCTION_SCHEM="PUBLIC  "), fb6)

    assert (row.function_cat, row.function_schem, row.function_name, row.specific_name) == (None, "PUBLIC", "F", "F")


def test_procedure_columns_queries_6(fb6, fb6_packages):
    query = PROCEDURE_COLUMNS.select(fb6).build_query(None, "P", None, "PUBLIC")

    assert "trim(trailing from PP.RDB$SCHEMA_NAME) as PROCEDURE_SCHEM" in query.sql
    assert "on PP.RDB$FIELD_SOURCE_SCHEMA_NAME = F.RDB$SCHEMA_NAME" in query.sql
    assert query.sql.endswith(
        "\nwhere PP.RDB$SCHEMA_NAME = ?\nand PP.RDB$PACKAGE_NAME is null\nand PP.RDB$PROCEDURE_NAME = ?"
        "\norder by PP.RDB$SCHEMA_NAME, PP.RDB$PACKAGE_NAME, PP.RDB$PROCEDURE_NAME,"
        " PP.RDB$PARAMETER_TYPE desc, PP.RDB$PARAMETER_NUMBER"
    )
    assert query.parameters == ["PUBLIC", "P"]

    query = PROCEDURE_COLUMNS.select(fb6_packages).build_query("PKG", "P", None, "PUBLIC")
    assert query.sql.endswith(
        "\nwhere PP.RDB$SCHEMA_NAME = ?\nand PP.RDB$PACKAGE_NAME = ?\nand PP.RDB$PROCEDURE_NAME = ?"
        "\norder by PP.RDB$PACKAGE_NAME nulls first, PP.RDB$SCHEMA_NAME, PP.RDB$PROCEDURE_NAME,"
        " PP.RDB$PARAMETER_TYPE desc, PP.RDB$PARAMETER_NUMBER"
    )
    assert query.parameters == ["PUBLIC", "PKG", "P"]


def test_map_procedure_column_row_6(fb6):
    record = {
        "PROCEDURE_CAT": None,
        "PROCEDURE_SCHEM": "PUBLIC ",
        "PROCEDURE_NAME": "P",
        "COLUMN_NAME": "X",
        "COLUMN_TYPE": 1,
        "FIELD_TYPE": 37,
        "FIELD_SUB_TYPE": 0,
        "FIELD_PRECISION": None,
        "FIELD_SCALE": 0,
        "FIELD_LENGTH": 10,
        "CHAR_LEN": 10,
        "CHARACTER_SET_ID": 0,
        "NULL_FLAG": 1,
        "REMARKS": None,
        "PARAMETER_NUMBER": 1,
    }
    row = _map(PROCEDURE_COLUMNS.select(fb6), record, fb6)

    assert (row.procedure_schem, row.procedure_name, row.column_name) == ("PUBLIC", "P", "X")


def test_pseudo_columns_query_6(fb6):
    query = PSEUDO_COLUMNS.select(fb6).build_query("EMP%", "PUB%")

    assert "trim(trailing from RDB$SCHEMA_NAME) as TABLE_SCHEM" in query.sql
    assert query.sql.endswith(
        "\nwhere RDB$SCHEMA_NAME starting with ?\nand RDB$RELATION_NAME starting with ?"
        "\norder by RDB$SCHEMA_NAME, RDB$RELATION_NAME"
    )
    assert query.parameters == ["PUB", "EMP"]


def test_map_pseudo_column_rows_6(fb6):
    record = {
        "RELATION_NAME": "EMPLOYEE",
        "DBKEY_LENGTH": 8,
        "HAS_RECORD_VERSION": True,
        "RECORD_VERSION_NULLABLE": "NO",
        "TABLE_SCHEM": "PUBLIC  ",
    }
    rows = _map(PSEUDO_COLUMNS.select(fb6), record, fb6)

    assert [(row.table_schem, row.column_name) for row in rows] == [
        ("PUBLIC", "RDB$DB_KEY"),
        ("PUBLIC", "RDB$RECORD_VERSION"),
    ]


def test_procedures_queries(fb25, fb3, fb6_packages):
    query = PROCEDURES.select(fb25).build_query(None, "ORG_CHART")

    assert query.sql.endswith("\nfrom RDB$PROCEDURES\nwhere RDB$PROCEDURE_NAME = ?\norder by RDB$PROCEDURE_NAME")
    assert query.parameters == ["ORG_CHART"]

    query = PROCEDURES.select(fb3).build_query("IGNORED", "ORG%")
    assert query.sql.endswith(
        "\nwhere RDB$PACKAGE_NAME is null\nand RDB$PROCEDURE_NAME starting with ?"
        "\norder by RDB$PACKAGE_NAME, RDB$PROCEDURE_NAME"
    )
    assert query.parameters == ["ORG"]

    query = PROCEDURES.select(fb6_packages).build_query("", None, "PUBLIC")
    assert "trim(trailing from RDB$SCHEMA_NAME) as PROCEDURE_SCHEM" in query.sql
    assert query.sql.endswith(
        "\nwhere RDB$SCHEMA_NAME = ?\nand RDB$PACKAGE_NAME is null"
        "\norder by RDB$PACKAGE_NAME nulls first, RDB$SCHEMA_NAME, RDB$PROCEDURE_NAME"
    )
    assert query.parameters == ["PUBLIC"]


@pytest.mark.parametrize("outputs,expected", [(2, 2), (0, 1), (None, 1)])
def test_map_procedure_row(fb6_packages, outputs, expected):
    record = {
        "PROCEDURE_CAT": "PKG",
        "PROCEDURE_SCHEM": "PUBLIC ",
        "PROCEDURE_NAME": "ORG_CHART ",
        "REMARKS": "organization chart",
        "PROCEDURE_TYPE": outputs,
    }

    assert _map(PROCEDURES.select(fb6_packages), record, fb6_packages) == MetadataProcedureRow(
        "PKG", "PUBLIC", "ORG_CHART", None, None, None, "organization chart", expected, '"PKG"."ORG_CHART"'
    )


def test_functions_queries(fb25, fb3, fb6):
    query = FUNCTIONS.select(fb25).build_query(None, "F%")

    assert "'UDF' as JB_FUNCTION_KIND" in query.sql
    assert query.sql.endswith("\nwhere RDB$FUNCTION_NAME starting with ?\norder by RDB$FUNCTION_NAME")
    assert query.parameters == ["F"]

    query = FUNCTIONS.select(fb3).build_query(None, None)
    assert "when RDB$ENGINE_NAME is not null then 'UDR'" in query.sql
    assert query.sql.endswith("\nwhere RDB$PACKAGE_NAME is null\norder by RDB$PACKAGE_NAME, RDB$FUNCTION_NAME")
    assert query.parameters == []

    query = FUNCTIONS.select(fb6).build_query(None, "F", "PUBLIC")
    assert query.sql.endswith(
        "\nwhere RDB$SCHEMA_NAME = ?\nand RDB$PACKAGE_NAME is null\nand RDB$FUNCTION_NAME = ?"
        "\norder by RDB$SCHEMA_NAME, RDB$PACKAGE_NAME, RDB$FUNCTION_NAME"
    )
    assert query.parameters == ["PUBLIC", "F"]


def test_map_function_row(fb25, fb6):
    record = {
        "FUNCTION_CAT": None,
        "FUNCTION_NAME": "ABS  ",
        "REMARKS": None,
        "JB_FUNCTION_SOURCE": None,
        "JB_FUNCTION_KIND": "UDF",
        "JB_MODULE_NAME": "ib_udf ",
        "JB_ENTRYPOINT": "IB_UDF_abs ",
        "JB_ENGINE_NAME": None,
    }

    assert _map(FUNCTIONS.select(fb25), record, fb25) == MetadataFunctionRow(
        None, None, "ABS", None, 1, "ABS", None, "UDF", "ib_udf", "IB_UDF_abs", None
    )

    record = dict(
        record,
        FUNCTION_SCHEM="PUBLIC",
        JB_FUNCTION_SOURCE="begin return x; end",
        JB_FUNCTION_KIND="PSQL",
        JB_MODULE_NAME=None,
        JB_ENTRYPOINT=None,
    )
    row = _map(FUNCTIONS.select(fb6), record, fb6)
    assert (row.function_schem, row.jb_function_kind, row.jb_function_source) == (
        "PUBLIC",
        "PSQL",
        "begin return x; end",
    )


def test_index_info_queries(fb3, fb5, fb6):
    query = INDEX_INFO.select(fb3).build_query("EMPLOYEE")

    assert "FILTER_CONDITION" not in query.sql
    assert query.sql.endswith("\nwhere IND.RDB$RELATION_NAME = ?\norder by 2, 3, 4")
    assert query.parameters == ["EMPLOYEE"]

    query = INDEX_INFO.select(fb5).build_query("EMPLOYEE", True)
    assert "IND.RDB$CONDITION_SOURCE as FILTER_CONDITION" in query.sql
    assert query.sql.endswith("\nwhere IND.RDB$RELATION_NAME = ?\nand IND.RDB$UNIQUE_FLAG = 1\norder by 2, 3, 4")
    assert query.parameters == ["EMPLOYEE"]

    query = INDEX_INFO.select(fb6).build_query("EMPLOYEE", False, "PUBLIC")
    assert "on IND.RDB$SCHEMA_NAME = ISE.RDB$SCHEMA_NAME and IND.RDB$INDEX_NAME = ISE.RDB$INDEX_NAME" in query.sql
    assert query.sql.endswith(
        "\nwhere IND.RDB$SCHEMA_NAME = ?\nand IND.RDB$RELATION_NAME = ?\norder by 9, 2, 3, 4"
    )
    assert query.parameters == ["PUBLIC", "EMPLOYEE"]


def test_map_index_info_row(fb3):
    record = {
        "TABLE_NAME": "EMPLOYEE ",
        "UNIQUE_FLAG": 1,
        "INDEX_NAME": "RDB$PRIMARY7 ",
        "ORDINAL_POSITION": 1,
        "COLUMN_NAME": "EMP_NO ",
        "EXPRESSION_SOURCE": None,
        "ASC_OR_DESC": None,
    }

    assert _map(INDEX_INFO.select(fb3), record, fb3) == MetadataIndexInfoRow(
        None, None, "EMPLOYEE", False, None, "RDB$PRIMARY7", 3, 1, "EMP_NO", "A", None, None, None
    )


def test_map_expression_index_row(fb5):
    record = {
        "TABLE_NAME": "EMPLOYEE",
        "UNIQUE_FLAG": None,
        "INDEX_NAME": "IDX_UPPER_NAME",
        "ORDINAL_POSITION": None,
        "COLUMN_NAME": None,
        "EXPRESSION_SOURCE": "computed by (upper(last_name))",
        "ASC_OR_DESC": 1,
        "FILTER_CONDITION": "where last_name is not null",
    }
    row = _map(INDEX_INFO.select(fb5), record, fb5)

    assert (row.non_unique, row.ordinal_position, row.column_name) == (True, 1, "computed by (upper(last_name))")
    assert (row.asc_or_desc, row.filter_condition) == ("D", "where last_name is not null")


def test_best_row_identifier_queries(fb3, fb6):
    query = BEST_ROW_IDENTIFIER.select(fb3).build_query("EMPLOYEE")

    assert query.sql.endswith(
        "\nwhere RC.RDB$RELATION_NAME = ?\nand RC.RDB$CONSTRAINT_TYPE = 'PRIMARY KEY'\norder by IDX.RDB$FIELD_POSITION"
    )
    assert query.parameters == ["EMPLOYEE"]

    query = BEST_ROW_IDENTIFIER.select(fb6).build_query("EMPLOYEE", "PUBLIC")
    assert "on F.RDB$SCHEMA_NAME = RF.RDB$FIELD_SOURCE_SCHEMA_NAME" in query.sql
    assert "\nwhere RC.RDB$SCHEMA_NAME = ?\nand RC.RDB$RELATION_NAME = ?" in query.sql
    assert query.parameters == ["PUBLIC", "EMPLOYEE"]


def test_map_best_row_identifier_row(fb3):
    record = {
        "COLUMN_NAME": "DEPT_NO ",
        "FIELD_TYPE": 37,
        "FIELD_SUB_TYPE": 0,
        "FIELD_PRECISION": None,
        "FIELD_SCALE": 0,
        "FIELD_LENGTH": 3,
        "CHAR_LEN": 3,
        "CHARACTER_SET_ID": 0,
    }

    assert _map(BEST_ROW_IDENTIFIER.select(fb3), record, fb3) == MetadataBestRowIdentifierRow(
        2, "DEPT_NO", 12, "VARCHAR", 3, None, None, 1
    )


def test_schemas_and_catalogs_queries(fb6, fb3_packages):
    strategy = SCHEMAS.select(fb6)
    query = strategy.build_query("P%")

    assert query.sql.endswith("\nfrom RDB$SCHEMAS\nwhere RDB$SCHEMA_NAME starting with ?\norder by 1")
    assert query.parameters == ["P"]
    assert _map(strategy, {"TABLE_SCHEM": "PUBLIC "}, fb6) == MetadataSchemaRow("PUBLIC", None)

    strategy = CATALOGS.select(fb3_packages)
    query = strategy.build_query()

    assert query.sql.startswith("select distinct")
    assert query.sql.endswith("\nfrom RDB$PACKAGES\norder by 1")
    assert query.parameters == []
    assert _map(strategy, {"TABLE_CAT": "PKG "}, fb3_packages) == MetadataCatalogRow("PKG")
