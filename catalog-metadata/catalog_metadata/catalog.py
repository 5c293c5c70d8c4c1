# (C) 2021 GoodData Corporation
import logging
from typing import Any, Callable, Optional, Sequence

from catalog_metadata.capabilities import CapabilitySnapshot
from catalog_metadata.metadata import (
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
    MetadataRowTransformer,
    MetadataSchemaRow,
    MetadataTablePrivilegeRow,
    MetadataTableRow,
    MetadataTableTypeRow,
    MetadataTypeInfoRow,
    MetadataVersionColumnRow,
)
from catalog_metadata.query_base import MetadataQueryRunner, StrategyTable, run_strategy
from catalog_metadata.query_columns import COLUMNS
from catalog_metadata.query_functions import FUNCTIONS
from catalog_metadata.query_indexes import INDEX_INFO
from catalog_metadata.query_keys import CROSS_REFERENCE, EXPORTED_KEYS, IMPORTED_KEYS, PRIMARY_KEYS
from catalog_metadata.query_privileges import COLUMN_PRIVILEGES, TABLE_PRIVILEGES
from catalog_metadata.query_procedures import PROCEDURES
from catalog_metadata.query_pseudo_columns import pseudo_columns
from catalog_metadata.query_routines import FUNCTION_COLUMNS, PROCEDURE_COLUMNS
from catalog_metadata.query_row_identifiers import best_row_identifier, version_columns
from catalog_metadata.query_schemas import CATALOGS, SCHEMAS
from catalog_metadata.query_tables import TABLES, table_types
from catalog_metadata.rows import DEFAULT_ENCODED_STRING_CACHE_SIZE, RowAssembler
from catalog_metadata.type_info import type_info

logger = logging.getLogger(__name__)


def _is_empty(operation: str, **patterns: Optional[str]) -> bool:
    """
    Empty string never matches a name; operations given one return no rows without running a query.
    """
    for name, pattern in patterns.items():
        if pattern == "":
            logger.debug("%s: %s is empty string, nothing can match", operation, name)

            return True

    return False


class CatalogMetadata:
    """
    Catalog metadata of a connected database in canonical, engine version independent shape.

    Queries are executed through the provided runner; the strategy for each operation is chosen from the
    capability snapshot so that all supported engine generations produce rows of the same shape and values.

    Patterns follow the JDBC conventions: '%' matches any sequence of characters, '_' any single character and
    '\\' escapes them. None means no filtering; empty string matches nothing.
    """

    def __init__(
        self,
        query_runner: MetadataQueryRunner,
        capabilities: CapabilitySnapshot,
        row_transformer: MetadataRowTransformer = MetadataRowTransformer(),
        string_encoder: Optional[Callable[[str], Any]] = None,
        cache_size: int = DEFAULT_ENCODED_STRING_CACHE_SIZE,
    ):
        """
        :param query_runner: runner that executes the metadata queries
        :param capabilities: capabilities of the connected engine
        :param row_transformer: optionally specify row transformer to post-process rows of all results
        :param string_encoder: optionally specify function to encode string values in rows
        :param cache_size: size of cache of encoded string values, used together with string_encoder
        """
        self._runner = query_runner
        self._capabilities = capabilities
        self._t = row_transformer
        self._string_encoder = string_encoder
        self._cache_size = cache_size

    @property
    def capabilities(self) -> CapabilitySnapshot:
        return self._capabilities

    def _assembler(self, row_type: type) -> RowAssembler:
        return RowAssembler(row_type, encoder=self._string_encoder, cache_size=self._cache_size)

    def _run(self, table: StrategyTable, *args) -> list:
        strategy = table.select(self._capabilities)
        rows = run_strategy(self._runner, strategy, self._capabilities, self._assembler(strategy.row_type), *args)

        return self._transform(rows)

    def _transform(self, rows: list) -> list:
        return [self._t.transform(row) for row in rows]

    def _is_empty(self, operation: str, schema: Optional[str], **patterns: Optional[str]) -> bool:
        """
        Same as the module level check; empty schema only counts on engines with schemas, the others ignore it.
        """
        if self._capabilities.supports_schemas and _is_empty(operation, schema=schema):
            return True

        return _is_empty(operation, **patterns)

    def get_tables(
        self,
        schema_pattern: Optional[str] = None,
        table_name_pattern: Optional[str] = None,
        types: Optional[Sequence[str]] = None,
    ) -> list[MetadataTableRow]:
        """
        Lists tables and views. Equivalent of JDBC getTables().

        :param schema_pattern: pattern for schema names; ignored by engines without schemas
        :param table_name_pattern: pattern for table names
        :param types: table types to include (see get_table_types()); None for all types, empty list for none
        :return: rows ordered by table type and name
        """
        if self._is_empty("tables", schema_pattern, table_name_pattern=table_name_pattern):
            return []
        elif types is not None and len(types) == 0:
            logger.debug("tables: no table types requested")

            return []

        return self._run(TABLES, schema_pattern, table_name_pattern, types)

    def get_table_types(self) -> list[MetadataTableTypeRow]:
        """
        Lists table types known to the engine, in alphabetical order.
        """
        return self._transform([MetadataTableTypeRow(table_type) for table_type in table_types(self._capabilities)])

    def get_columns(
        self,
        schema_pattern: Optional[str] = None,
        table_name_pattern: Optional[str] = None,
        column_name_pattern: Optional[str] = None,
    ) -> list[MetadataColumnRow]:
        """
        Lists table and view columns. Equivalent of JDBC getColumns().

        :param schema_pattern: pattern for schema names; ignored by engines without schemas
        :param table_name_pattern: pattern for table names
        :param column_name_pattern: pattern for column names
        :return: rows ordered by table name and position of column
        """
        if self._is_empty(
            "columns", schema_pattern, table_name_pattern=table_name_pattern, column_name_pattern=column_name_pattern
        ):
            return []

        return self._run(COLUMNS, schema_pattern, table_name_pattern, column_name_pattern)

    def get_table_privileges(
        self, schema_pattern: Optional[str] = None, table_name_pattern: Optional[str] = None
    ) -> list[MetadataTablePrivilegeRow]:
        if self._is_empty("table privileges", schema_pattern, table_name_pattern=table_name_pattern):
            return []

        return self._run(TABLE_PRIVILEGES, schema_pattern, table_name_pattern)

    def get_column_privileges(
        self, table: Optional[str], column_name_pattern: Optional[str] = None, schema: Optional[str] = None
    ) -> list[MetadataColumnPrivilegeRow]:
        """
        Lists privileges on columns of a table. Equivalent of JDBC getColumnPrivileges().

        :param table: exact name of the table
        :param column_name_pattern: pattern for column names
        :param schema: exact name of the schema; None for any schema, ignored by engines without schemas
        :return: rows ordered by schema, column name and privilege
        """
        if self._is_empty("column privileges", schema, table=table, column_name_pattern=column_name_pattern):
            return []

        return self._run(COLUMN_PRIVILEGES, table, column_name_pattern, schema)

    def get_primary_keys(self, table: Optional[str], schema: Optional[str] = None) -> list[MetadataPrimaryKeyRow]:
        """
        Lists columns of primary key of a table. Equivalent of JDBC getPrimaryKeys().

        :param table: exact name of the table
        :param schema: exact name of the schema; None for any schema, ignored by engines without schemas
        :return: rows ordered by schema and column name
        """
        if self._is_empty("primary keys", schema, table=table):
            return []

        return self._run(PRIMARY_KEYS, table, schema)

    def get_imported_keys(self, table: Optional[str], schema: Optional[str] = None) -> list[MetadataForeignKeyRow]:
        """
        Lists primary key columns referenced by foreign keys of a table. Equivalent of JDBC getImportedKeys().

        :param table: exact name of the table with foreign keys
        :param schema: exact name of the schema of the table; None for any schema, ignored by engines without schemas
        :return: rows ordered by primary key table schema, name and key sequence
        """
        if self._is_empty("imported keys", schema, table=table):
            return []

        return self._run(IMPORTED_KEYS, table, schema)

    def get_exported_keys(self, table: Optional[str], schema: Optional[str] = None) -> list[MetadataForeignKeyRow]:
        """
        Lists foreign key columns referencing primary key of a table. Equivalent of JDBC getExportedKeys().

        :param table: exact name of the table with primary key
        :param schema: exact name of the schema of the table; None for any schema, ignored by engines without schemas
        :return: rows ordered by foreign key table schema, name and key sequence
        """
        if self._is_empty("exported keys", schema, table=table):
            return []

        return self._run(EXPORTED_KEYS, table, schema)

    def get_cross_reference(
        self,
        primary_table: Optional[str],
        foreign_table: Optional[str],
        primary_schema: Optional[str] = None,
        foreign_schema: Optional[str] = None,
    ) -> list[MetadataForeignKeyRow]:
        """
        Lists foreign key columns of one table that reference primary key of another table. Equivalent of JDBC
        getCrossReference().

        :param primary_table: exact name of the table with primary key
        :param foreign_table: exact name of the table with foreign keys
        :param primary_schema: exact name of the schema of the primary table; None for any schema
        :param foreign_schema: exact name of the schema of the foreign table; None for any schema
        :return: rows ordered by foreign key table schema, name and key sequence
        """
        if self._is_empty(
            "cross reference", primary_schema, primary_table=primary_table, foreign_table=foreign_table
        ) or self._is_empty("cross reference", foreign_schema):
            return []

        return self._run(CROSS_REFERENCE, primary_table, foreign_table, primary_schema, foreign_schema)

    def get_index_info(
        self, table: Optional[str], unique: bool = False, approximate: bool = True, schema: Optional[str] = None
    ) -> list[MetadataIndexInfoRow]:
        """
        Lists indexes of a table and their columns. Equivalent of JDBC getIndexInfo(). Statistics are not available,
        CARDINALITY and PAGES are always null and so `approximate` makes no difference.

        :param table: exact name of the table
        :param unique: when true, only unique indexes are listed
        :param approximate: accepted for compatibility
        :param schema: exact name of the schema; None for any schema, ignored by engines without schemas
        :return: rows ordered by uniqueness, index name and position of column
        """
        if self._is_empty("index info", schema, table=table):
            return []

        return self._run(INDEX_INFO, table, unique, schema)

    def get_best_row_identifier(
        self, table: Optional[str], scope: int, nullable: bool = True, schema: Optional[str] = None
    ) -> list[MetadataBestRowIdentifierRow]:
        """
        Describes the optimal set of columns that uniquely identifies a row. Equivalent of JDBC
        getBestRowIdentifier(). Primary key columns are preferred for all scopes; tables without primary key are
        identified by RDB$DB_KEY, which is not valid beyond a transaction.

        :param table: exact name of the table
        :param scope: one of bestRowTemporary, bestRowTransaction, bestRowSession (see JDBC_CONSTANTS)
        :param nullable: accepted for compatibility; primary key columns are never nullable
        :param schema: exact name of the schema; None for any schema, ignored by engines without schemas
        :return: rows of primary key columns in key order, or a single RDB$DB_KEY row
        """
        if not table or self._is_empty("best row identifier", schema):
            return []

        rows = best_row_identifier(
            self._runner,
            self._capabilities,
            self._assembler(MetadataBestRowIdentifierRow),
            table,
            scope,
            schema,
        )

        return self._transform(rows)

    def get_version_columns(
        self, table: Optional[str], schema: Optional[str] = None
    ) -> list[MetadataVersionColumnRow]:
        """
        Lists columns updated whenever a row is updated. Equivalent of JDBC getVersionColumns(); only the pseudo
        columns RDB$DB_KEY and RDB$RECORD_VERSION are reported.

        :param table: exact name of the table
        :param schema: exact name of the schema; None for any schema, ignored by engines without schemas
        :return: rows of the pseudo columns of the table
        """
        if not table or self._is_empty("version columns", schema):
            return []

        rows = version_columns(
            self._runner, self._capabilities, self._assembler(MetadataVersionColumnRow), table, schema
        )

        return self._transform(rows)

    def get_procedures(
        self,
        catalog: Optional[str] = None,
        schema_pattern: Optional[str] = None,
        procedure_name_pattern: Optional[str] = None,
    ) -> list[MetadataProcedureRow]:
        """
        Lists stored procedures. Equivalent of JDBC getProcedures().

        :param catalog: same semantics as in get_function_columns()
        :param schema_pattern: pattern for schema names; ignored by engines without schemas
        :param procedure_name_pattern: pattern for procedure names
        :return: rows ordered by package, schema and procedure name
        """
        if self._is_empty("procedures", schema_pattern, procedure_name_pattern=procedure_name_pattern):
            return []

        return self._run(PROCEDURES, catalog, procedure_name_pattern, schema_pattern)

    def get_functions(
        self,
        catalog: Optional[str] = None,
        schema_pattern: Optional[str] = None,
        function_name_pattern: Optional[str] = None,
    ) -> list[MetadataFunctionRow]:
        """
        Lists stored functions, both PSQL and external ones. Equivalent of JDBC getFunctions().

        :param catalog: same semantics as in get_function_columns()
        :param schema_pattern: pattern for schema names; ignored by engines without schemas
        :param function_name_pattern: pattern for function names
        :return: rows ordered by package, schema and function name
        """
        if self._is_empty("functions", schema_pattern, function_name_pattern=function_name_pattern):
            return []

        return self._run(FUNCTIONS, catalog, function_name_pattern, schema_pattern)

    def get_function_columns(
        self,
        catalog: Optional[str] = None,
        schema_pattern: Optional[str] = None,
        function_name_pattern: Optional[str] = None,
        column_name_pattern: Optional[str] = None,
    ) -> list[MetadataFunctionColumnRow]:
        """
        Lists parameters and return values of functions. Equivalent of JDBC getFunctionColumns().

        :param catalog: when packages are reported as catalogs: None for all functions, empty string for functions
         outside packages, otherwise exact package name; ignored otherwise and only functions outside packages are
         listed
        :param schema_pattern: pattern for schema names; ignored by engines without schemas
        :param function_name_pattern: pattern for function names
        :param column_name_pattern: pattern for parameter names
        :return: rows ordered by package, schema, function name and position; return value comes first
        """
        if self._is_empty(
            "function columns",
            schema_pattern,
            function_name_pattern=function_name_pattern,
            column_name_pattern=column_name_pattern,
        ):
            return []

        return self._run(FUNCTION_COLUMNS, catalog, function_name_pattern, column_name_pattern, schema_pattern)

    def get_procedure_columns(
        self,
        catalog: Optional[str] = None,
        schema_pattern: Optional[str] = None,
        procedure_name_pattern: Optional[str] = None,
        column_name_pattern: Optional[str] = None,
    ) -> list[MetadataProcedureColumnRow]:
        """
        Lists input and output parameters of stored procedures. Equivalent of JDBC getProcedureColumns().

        :param catalog: same semantics as in get_function_columns()
        :param schema_pattern: pattern for schema names; ignored by engines without schemas
        :param procedure_name_pattern: pattern for procedure names
        :param column_name_pattern: pattern for parameter names
        :return: rows ordered by package, schema and procedure name, then output parameters before input parameters,
         each by position
        """
        if self._is_empty(
            "procedure columns",
            schema_pattern,
            procedure_name_pattern=procedure_name_pattern,
            column_name_pattern=column_name_pattern,
        ):
            return []

        return self._run(PROCEDURE_COLUMNS, catalog, procedure_name_pattern, column_name_pattern, schema_pattern)

    def get_pseudo_columns(
        self,
        schema_pattern: Optional[str] = None,
        table_name_pattern: Optional[str] = None,
        column_name_pattern: Optional[str] = None,
    ) -> list[MetadataPseudoColumnRow]:
        """
        Lists pseudo columns RDB$DB_KEY and RDB$RECORD_VERSION of tables. Equivalent of JDBC getPseudoColumns().

        :param schema_pattern: pattern for schema names; ignored by engines without schemas
        :param table_name_pattern: pattern for table names
        :param column_name_pattern: pattern for pseudo column names
        :return: rows ordered by schema and table name
        """
        if self._is_empty(
            "pseudo columns",
            schema_pattern,
            table_name_pattern=table_name_pattern,
            column_name_pattern=column_name_pattern,
        ):
            return []

        rows = pseudo_columns(
            self._runner,
            self._capabilities,
            self._assembler(MetadataPseudoColumnRow),
            table_name_pattern,
            column_name_pattern,
            schema_pattern,
        )

        return self._transform(rows)

    def get_schemas(
        self, catalog: Optional[str] = None, schema_pattern: Optional[str] = None
    ) -> list[MetadataSchemaRow]:
        """
        Lists schemas. Equivalent of JDBC getSchemas(); engines without schemas have none and no query is executed.

        :param catalog: accepted for compatibility; schemas do not belong to catalogs
        :param schema_pattern: pattern for schema names
        :return: rows ordered by schema name
        """
        if not self._capabilities.supports_schemas:
            logger.debug("schemas: engine has no schemas")

            return []
        elif _is_empty("schemas", schema_pattern=schema_pattern):
            return []

        return self._run(SCHEMAS, schema_pattern)

    def get_catalogs(self) -> list[MetadataCatalogRow]:
        """
        Lists catalogs. Equivalent of JDBC getCatalogs(). Catalogs only exist when packages are reported as
        catalogs; the names of packages are listed then.
        """
        if not self._capabilities.uses_catalog_as_package:
            return []

        return self._run(CATALOGS)

    def get_type_info(self) -> list[MetadataTypeInfoRow]:
        """
        Describes data types supported by the engine. Equivalent of JDBC getTypeInfo(); no query is executed.

        :return: rows ordered by data type
        """
        return self._transform(type_info(self._capabilities, self._assembler(MetadataTypeInfoRow)))
