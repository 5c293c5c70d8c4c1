# (C) 2021 GoodData Corporation
# there are some links here that make the lines too long so skipping this particular lint for the entire file
# flake8: noqa: E501
from collections import namedtuple

MetadataProductInfo = namedtuple(
    "MetadataProductInfo",
    ["product_name", "product_version", "major_version", "minor_version"],
)
"""
Information about the database product as reported by the driver:

- product_name = getDatabaseProductName()
- product_version = getDatabaseProductVersion()
- major_version = getDatabaseMajorVersion()
- minor_version = getDatabaseMinorVersion()
"""

MetadataTableRow = namedtuple(
    "MetadataTableRow",
    [
        "table_cat",
        "table_schem",
        "table_name",
        "table_type",
        "remarks",
        "type_cat",
        "type_schem",
        "type_name",
        "self_referencing_col_name",
        "ref_generation",
        "owner_name",
    ],
)
"""
One row in the results of get_tables(); same shape as JDBC Metadata getTables() with one extra column.

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getTables(java.lang.String,java.lang.String,java.lang.String,java.lang.String%5B%5D)

- TABLE_CAT String => always null
- TABLE_SCHEM String => table schema; null for engines without schemas
- TABLE_NAME String => table name
- TABLE_TYPE String => table type: "TABLE", "SYSTEM TABLE", "VIEW" or "GLOBAL TEMPORARY"
- REMARKS String => explanatory comment on the table
- TYPE_CAT, TYPE_SCHEM, TYPE_NAME, SELF_REFERENCING_COL_NAME, REF_GENERATION => always null
- OWNER_NAME String => name of the owner of the table
"""

MetadataTableTypeRow = namedtuple("MetadataTableTypeRow", ["table_type"])
"""
One row in the results of get_table_types().

- TABLE_TYPE String => table type
"""

MetadataColumnRow = namedtuple(
    "MetadataColumnRow",
    [
        "table_cat",
        "table_schem",
        "table_name",
        "column_name",
        "data_type",
        "type_name",
        "column_size",
        "buffer_length",
        "decimal_digits",
        "num_prec_radix",
        "nullable",
        "remarks",
        "column_def",
        "sql_data_type",
        "sql_datetime_sub",
        "char_octet_length",
        "ordinal_position",
        "is_nullable",
        "scope_catalog",
        "scope_schema",
        "scope_table",
        "source_data_type",
        "is_autoincrement",
        "is_generatedcolumn",
        "jb_is_identity",
        "jb_identity_type",
    ],
)
"""
One row in the results of get_columns(); same shape as JDBC Metadata getColumns() with two extra columns.

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getColumns(java.lang.String,java.lang.String,java.lang.String,java.lang.String)

- TABLE_CAT String => always null
- TABLE_SCHEM String => table schema; null for engines without schemas
- TABLE_NAME String => table name
- COLUMN_NAME String => column name
- DATA_TYPE int => SQL type from java.sql.Types
- TYPE_NAME String => Data source dependent type name
- COLUMN_SIZE int => column size.
- BUFFER_LENGTH is not used.
- DECIMAL_DIGITS int => the number of fractional digits. Null is returned for data types where DECIMAL_DIGITS is not applicable.
- NUM_PREC_RADIX int => Radix (typically either 10 or 2)
- NULLABLE int => is NULL allowed.
    - columnNoNulls - might not allow NULL values
    - columnNullable - definitely allows NULL values
- REMARKS String => comment describing column (may be null)
- COLUMN_DEF String => default value for the column, which should be interpreted as a string when the value is enclosed in single quotes (may be null)
- SQL_DATA_TYPE int => unused
- SQL_DATETIME_SUB int => unused
- CHAR_OCTET_LENGTH int => for char types the maximum number of bytes in the column
- ORDINAL_POSITION int => index of column in table (starting at 1)
- IS_NULLABLE String => "YES" or "NO"
- SCOPE_CATALOG, SCOPE_SCHEMA, SCOPE_TABLE, SOURCE_DATA_TYPE => always null
- IS_AUTOINCREMENT String => Indicates whether this column is auto incremented
    - YES --- identity column
    - NO --- column cannot be auto incremented
    - empty string --- integral column that may be populated by a trigger
- IS_GENERATEDCOLUMN String => "YES" for computed and identity columns, otherwise "NO"
- JB_IS_IDENTITY String => "YES" for identity columns, otherwise "NO"
- JB_IDENTITY_TYPE String => "ALWAYS", "BY DEFAULT" or null
"""

MetadataTablePrivilegeRow = namedtuple(
    "MetadataTablePrivilegeRow",
    ["table_cat", "table_schem", "table_name", "grantor", "grantee", "privilege", "is_grantable"],
)
"""
One row in the results of get_table_privileges().

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getTablePrivileges(java.lang.String,java.lang.String,java.lang.String)

- TABLE_CAT String => always null
- TABLE_SCHEM String => table schema; null for engines without schemas
- TABLE_NAME String => table name
- GRANTOR String => grantor of access (may be null)
- GRANTEE String => grantee of access
- PRIVILEGE String => name of access (SELECT, INSERT, UPDATE, DELETE, REFERENCES, ...)
- IS_GRANTABLE String => "YES" if grantee is permitted to grant to others; "NO" if not
"""

MetadataColumnPrivilegeRow = namedtuple(
    "MetadataColumnPrivilegeRow",
    ["table_cat", "table_schem", "table_name", "column_name", "grantor", "grantee", "privilege", "is_grantable"],
)
"""
One row in the results of get_column_privileges(); same as the table privilege row with COLUMN_NAME after
TABLE_NAME.

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getColumnPrivileges(java.lang.String,java.lang.String,java.lang.String,java.lang.String)
"""

MetadataPrimaryKeyRow = namedtuple(
    "MetadataPrimaryKeyRow",
    ["table_cat", "table_schem", "table_name", "column_name", "key_seq", "pk_name"],
)
"""
One row in the results of get_primary_keys().

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getPrimaryKeys(java.lang.String,java.lang.String,java.lang.String)

- TABLE_CAT String => always null
- TABLE_SCHEM String => table schema; null for engines without schemas
- TABLE_NAME String => table name
- COLUMN_NAME String => column name
- KEY_SEQ short => sequence number within primary key( a value of 1 represents the first column of the primary key, a value of 2 would represent the second column within the primary key).
- PK_NAME String => primary key name
"""

MetadataForeignKeyRow = namedtuple(
    "MetadataForeignKeyRow",
    [
        "pktable_cat",
        "pktable_schem",
        "pktable_name",
        "pkcolumn_name",
        "fktable_cat",
        "fktable_schem",
        "fktable_name",
        "fkcolumn_name",
        "key_seq",
        "update_rule",
        "delete_rule",
        "fk_name",
        "pk_name",
        "deferrability",
    ],
)
"""
One row in the results of get_imported_keys(), get_exported_keys() and get_cross_reference().

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getImportedKeys(java.lang.String,java.lang.String,java.lang.String)

- PKTABLE_CAT String => always null
- PKTABLE_SCHEM String => primary key table schema; null for engines without schemas
- PKTABLE_NAME String => primary key table name being imported
- PKCOLUMN_NAME String => primary key column name being imported
- FKTABLE_CAT String => always null
- FKTABLE_SCHEM String => foreign key table schema; null for engines without schemas
- FKTABLE_NAME String => foreign key table name
- FKCOLUMN_NAME String => foreign key column name
- KEY_SEQ short => sequence number within a foreign key (starting at 1)
- UPDATE_RULE short => importedKeyNoAction, importedKeyCascade, importedKeySetNull, importedKeySetDefault or importedKeyRestrict
- DELETE_RULE short => same values as UPDATE_RULE
- FK_NAME String => foreign key name
- PK_NAME String => name of the primary or unique key the foreign key references
- DEFERRABILITY short => always importedKeyNotDeferrable
"""

MetadataFunctionColumnRow = namedtuple(
    "MetadataFunctionColumnRow",
    [
        "function_cat",
        "function_schem",
        "function_name",
        "column_name",
        "column_type",
        "data_type",
        "type_name",
        "precision",
        "length",
        "scale",
        "radix",
        "nullable",
        "remarks",
        "char_octet_length",
        "ordinal_position",
        "is_nullable",
        "specific_name",
    ],
)
"""
One row in the results of get_function_columns().

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getFunctionColumns(java.lang.String,java.lang.String,java.lang.String,java.lang.String)

- FUNCTION_CAT String => package name when packages are reported as catalogs ("" outside packages), otherwise null
- FUNCTION_SCHEM String => function schema; null for engines without schemas
- FUNCTION_NAME String => function name
- COLUMN_NAME String => parameter name; PARAM_<position> for parameters without a name
- COLUMN_TYPE short => functionReturn for the return value, functionColumnIn for parameters
- DATA_TYPE int => SQL type from java.sql.Types
- TYPE_NAME String => type name
- PRECISION int => column size of the parameter type
- LENGTH int => length in bytes of data
- SCALE short => scale, null where not applicable
- RADIX short => radix
- NULLABLE short => functionNoNulls or functionNullable
- REMARKS String => always null
- CHAR_OCTET_LENGTH int => maximum length in bytes of character parameters, null for other types
- ORDINAL_POSITION int => 0 for the return value, otherwise position of the parameter starting at 1
- IS_NULLABLE String => "YES" or "NO"
- SPECIFIC_NAME String => name uniquely identifying the function: the function name, or quoted package and function name
"""

MetadataProcedureColumnRow = namedtuple(
    "MetadataProcedureColumnRow",
    [
        "procedure_cat",
        "procedure_schem",
        "procedure_name",
        "column_name",
        "column_type",
        "data_type",
        "type_name",
        "precision",
        "length",
        "scale",
        "radix",
        "nullable",
        "remarks",
        "column_def",
        "sql_data_type",
        "sql_datetime_sub",
        "char_octet_length",
        "ordinal_position",
        "is_nullable",
        "specific_name",
    ],
)
"""
One row in the results of get_procedure_columns().

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getProcedureColumns(java.lang.String,java.lang.String,java.lang.String,java.lang.String)

- PROCEDURE_CAT String => package name when packages are reported as catalogs ("" outside packages), otherwise null
- PROCEDURE_SCHEM String => procedure schema; null for engines without schemas
- PROCEDURE_NAME String => procedure name
- COLUMN_NAME String => parameter name
- COLUMN_TYPE short => procedureColumnIn for input parameters, procedureColumnOut for output parameters
- DATA_TYPE int => SQL type from java.sql.Types
- TYPE_NAME String => type name
- PRECISION int => column size of the parameter type
- LENGTH int => length in bytes of data
- SCALE short => scale, null where not applicable
- RADIX short => radix
- NULLABLE short => procedureNoNulls or procedureNullable
- REMARKS String => description of the parameter
- COLUMN_DEF, SQL_DATA_TYPE, SQL_DATETIME_SUB => always null
- CHAR_OCTET_LENGTH int => maximum length in bytes of character parameters, null for other types
- ORDINAL_POSITION int => position of the parameter within its kind (input or output), starting at 1
- IS_NULLABLE String => "YES" or "NO"
- SPECIFIC_NAME String => name uniquely identifying the procedure
"""

MetadataPseudoColumnRow = namedtuple(
    "MetadataPseudoColumnRow",
    [
        "table_cat",
        "table_schem",
        "table_name",
        "column_name",
        "data_type",
        "column_size",
        "decimal_digits",
        "num_prec_radix",
        "column_usage",
        "remarks",
        "char_octet_length",
        "is_nullable",
    ],
)
"""
One row in the results of get_pseudo_columns().

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getPseudoColumns(java.lang.String,java.lang.String,java.lang.String,java.lang.String)

- TABLE_CAT String => always null
- TABLE_SCHEM String => table schema; null for engines without schemas
- TABLE_NAME String => table name
- COLUMN_NAME String => RDB$DB_KEY or RDB$RECORD_VERSION
- DATA_TYPE int => ROWID for RDB$DB_KEY, BIGINT for RDB$RECORD_VERSION
- COLUMN_SIZE int => length of the db key, or precision of bigint
- DECIMAL_DIGITS int => null for RDB$DB_KEY, 0 for RDB$RECORD_VERSION
- NUM_PREC_RADIX int => 10
- COLUMN_USAGE String => always "NO_USAGE_RESTRICTIONS"
- REMARKS String => explanatory comment
- CHAR_OCTET_LENGTH int => length of the db key, null for RDB$RECORD_VERSION
- IS_NULLABLE String => "YES" or "NO"
"""

MetadataProcedureRow = namedtuple(
    "MetadataProcedureRow",
    [
        "procedure_cat",
        "procedure_schem",
        "procedure_name",
        "future1",
        "future2",
        "future3",
        "remarks",
        "procedure_type",
        "specific_name",
    ],
)
"""
One row in the results of get_procedures().

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getProcedures(java.lang.String,java.lang.String,java.lang.String)

- PROCEDURE_CAT String => package name when packages are reported as catalogs ("" outside packages), otherwise null
- PROCEDURE_SCHEM String => procedure schema; null for engines without schemas
- PROCEDURE_NAME String => procedure name
- FUTURE1, FUTURE2, FUTURE3 => reserved, always null
- REMARKS String => description of the procedure
- PROCEDURE_TYPE short => procedureReturnsResult for procedures with output parameters, otherwise procedureNoResult
- SPECIFIC_NAME String => name uniquely identifying the procedure within its schema
"""

MetadataFunctionRow = namedtuple(
    "MetadataFunctionRow",
    [
        "function_cat",
        "function_schem",
        "function_name",
        "remarks",
        "function_type",
        "specific_name",
        "jb_function_source",
        "jb_function_kind",
        "jb_module_name",
        "jb_entrypoint",
        "jb_engine_name",
    ],
)
"""
One row in the results of get_functions(); same shape as JDBC Metadata getFunctions() with five extra columns.

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getFunctions(java.lang.String,java.lang.String,java.lang.String)

- FUNCTION_CAT String => package name when packages are reported as catalogs ("" outside packages), otherwise null
- FUNCTION_SCHEM String => function schema; null for engines without schemas
- FUNCTION_NAME String => function name
- REMARKS String => description of the function
- FUNCTION_TYPE short => always functionNoTable
- SPECIFIC_NAME String => name uniquely identifying the function within its schema
- JB_FUNCTION_SOURCE String => source of PSQL functions, otherwise null
- JB_FUNCTION_KIND String => "UDF", "PSQL" or "UDR"
- JB_MODULE_NAME String => module of UDF and UDR functions, null for PSQL
- JB_ENTRYPOINT String => entry point of UDF and UDR functions, null for PSQL
- JB_ENGINE_NAME String => engine of UDR functions, otherwise null
"""

MetadataIndexInfoRow = namedtuple(
    "MetadataIndexInfoRow",
    [
        "table_cat",
        "table_schem",
        "table_name",
        "non_unique",
        "index_qualifier",
        "index_name",
        "type",
        "ordinal_position",
        "column_name",
        "asc_or_desc",
        "cardinality",
        "pages",
        "filter_condition",
    ],
)
"""
One row in the results of get_index_info().

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getIndexInfo(java.lang.String,java.lang.String,java.lang.String,boolean,boolean)

- TABLE_CAT String => always null
- TABLE_SCHEM String => table schema; null for engines without schemas
- TABLE_NAME String => table name
- NON_UNIQUE boolean => can index values be non-unique
- INDEX_QUALIFIER String => always null
- INDEX_NAME String => index name
- TYPE short => always tableIndexOther
- ORDINAL_POSITION short => column sequence number within index; 1 for expression indexes
- COLUMN_NAME String => column name; source of the expression for expression indexes
- ASC_OR_DESC String => "A" for ascending, "D" for descending
- CARDINALITY, PAGES => always null
- FILTER_CONDITION String => condition of partial indexes, otherwise null
"""

MetadataBestRowIdentifierRow = namedtuple(
    "MetadataBestRowIdentifierRow",
    [
        "scope",
        "column_name",
        "data_type",
        "type_name",
        "column_size",
        "buffer_length",
        "decimal_digits",
        "pseudo_column",
    ],
)
"""
One row in the results of get_best_row_identifier().

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getBestRowIdentifier(java.lang.String,java.lang.String,java.lang.String,int,boolean)

- SCOPE short => bestRowSession for primary key columns, bestRowTransaction for RDB$DB_KEY
- COLUMN_NAME String => column name
- DATA_TYPE int => SQL data type from java.sql.Types
- TYPE_NAME String => type name
- COLUMN_SIZE int => precision
- BUFFER_LENGTH => always null
- DECIMAL_DIGITS short => scale, null where not applicable
- PSEUDO_COLUMN short => bestRowNotPseudo for primary key columns, bestRowPseudo for RDB$DB_KEY
"""

MetadataVersionColumnRow = namedtuple(
    "MetadataVersionColumnRow",
    [
        "scope",
        "column_name",
        "data_type",
        "type_name",
        "column_size",
        "buffer_length",
        "decimal_digits",
        "pseudo_column",
    ],
)
"""
One row in the results of get_version_columns(). Only pseudo columns are reported as version columns.

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getVersionColumns(java.lang.String,java.lang.String,java.lang.String)

- SCOPE short => always null
- COLUMN_NAME String => RDB$DB_KEY or RDB$RECORD_VERSION
- DATA_TYPE int => ROWID for RDB$DB_KEY, BIGINT for RDB$RECORD_VERSION
- TYPE_NAME String => "CHAR" for RDB$DB_KEY, "BIGINT" for RDB$RECORD_VERSION
- COLUMN_SIZE int => length of the db key, or precision of bigint
- BUFFER_LENGTH int => length of the value in bytes
- DECIMAL_DIGITS short => null for RDB$DB_KEY, 0 for RDB$RECORD_VERSION
- PSEUDO_COLUMN short => always versionColumnPseudo
"""

MetadataSchemaRow = namedtuple("MetadataSchemaRow", ["table_schem", "table_catalog"])
"""
One row in the results of get_schemas().

- TABLE_SCHEM String => schema name
- TABLE_CATALOG String => always null
"""

MetadataCatalogRow = namedtuple("MetadataCatalogRow", ["table_cat"])
"""
One row in the results of get_catalogs().

- TABLE_CAT String => package name; catalogs are only reported when packages are reported as catalogs
"""

MetadataTypeInfoRow = namedtuple(
    "MetadataTypeInfoRow",
    [
        "type_name",
        "data_type",
        "precision",
        "literal_prefix",
        "literal_suffix",
        "create_params",
        "nullable",
        "case_sensitive",
        "searchable",
        "unsigned_attribute",
        "fixed_prec_scale",
        "auto_increment",
        "local_type_name",
        "minimum_scale",
        "maximum_scale",
        "sql_data_type",
        "sql_datetime_sub",
        "num_prec_radix",
    ],
)
"""
One row in the results of get_type_info(). Rows are ordered by DATA_TYPE.

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html#getTypeInfo()

- TYPE_NAME String => Type name
- DATA_TYPE int => SQL data type from java.sql.Types
- PRECISION int => maximum precision
- LITERAL_PREFIX String => prefix used to quote a literal (may be null)
- LITERAL_SUFFIX String => suffix used to quote a literal (may be null)
- CREATE_PARAMS String => parameters used in creating the type (may be null)
- NULLABLE short => always typeNullable
- CASE_SENSITIVE boolean=> is it case sensitive.
- SEARCHABLE short => typePredNone for ARRAY and blobs with negative sub type, typePredBasic for BOOLEAN, typeSearchable otherwise
- UNSIGNED_ATTRIBUTE boolean => is it unsigned.
- FIXED_PREC_SCALE boolean => can it be a money value.
- AUTO_INCREMENT boolean => can it be used for an auto-increment value.
- LOCAL_TYPE_NAME String => always null
- MINIMUM_SCALE short => minimum scale supported
- MAXIMUM_SCALE short => maximum scale supported
- SQL_DATA_TYPE int => unused
- SQL_DATETIME_SUB int => unused
- NUM_PREC_RADIX int => usually 2 or 10
"""

MetadataConstants = namedtuple(
    "MetadataConstants",
    [
        "bestRowNotPseudo",
        "bestRowPseudo",
        "bestRowSession",
        "bestRowTemporary",
        "bestRowTransaction",
        "columnNoNulls",
        "columnNullable",
        "functionColumnIn",
        "functionNoNulls",
        "functionNoTable",
        "functionNullable",
        "functionResultUnknown",
        "functionReturn",
        "functionReturnsTable",
        "importedKeyCascade",
        "importedKeyNoAction",
        "importedKeyNotDeferrable",
        "importedKeyRestrict",
        "importedKeySetDefault",
        "importedKeySetNull",
        "procedureColumnIn",
        "procedureColumnOut",
        "procedureNoNulls",
        "procedureNoResult",
        "procedureNullable",
        "procedureResultUnknown",
        "procedureReturnsResult",
        "tableIndexClustered",
        "tableIndexHashed",
        "tableIndexOther",
        "tableIndexStatistic",
        "typeNullable",
        "typePredBasic",
        "typePredNone",
        "typeSearchable",
        "versionColumnNotPseudo",
        "versionColumnPseudo",
    ],
)
"""
Values of static constants defined on the JDBC DatabaseMetaData object that are used as enumerators in the
metadata results.

See: https://docs.oracle.com/en/java/javase/11/docs/api/java.sql/java/sql/DatabaseMetaData.html
"""

JDBC_CONSTANTS = MetadataConstants(
    bestRowNotPseudo=1,
    bestRowPseudo=2,
    bestRowSession=2,
    bestRowTemporary=0,
    bestRowTransaction=1,
    columnNoNulls=0,
    columnNullable=1,
    functionColumnIn=1,
    functionNoNulls=0,
    functionNoTable=1,
    functionNullable=1,
    functionResultUnknown=0,
    functionReturn=4,
    functionReturnsTable=2,
    importedKeyCascade=0,
    importedKeyNoAction=3,
    importedKeyNotDeferrable=7,
    importedKeyRestrict=1,
    importedKeySetDefault=4,
    importedKeySetNull=2,
    procedureColumnIn=1,
    procedureColumnOut=4,
    procedureNoNulls=0,
    procedureNoResult=1,
    procedureNullable=1,
    procedureResultUnknown=0,
    procedureReturnsResult=2,
    tableIndexClustered=1,
    tableIndexHashed=2,
    tableIndexOther=3,
    tableIndexStatistic=0,
    typeNullable=1,
    typePredBasic=2,
    typePredNone=0,
    typeSearchable=3,
    versionColumnNotPseudo=1,
    versionColumnPseudo=2,
)


class MetadataRowTransformer:
    """
    Hook for post-processing of canonical metadata rows. Every row produced by CatalogMetadata passes through the
    transformer method matching its type before it is returned to the caller.
    """

    def __init__(self):
        pass

    def transform(self, row):
        """
        Dispatches row to the transformer method for its type.

        :param row: canonical row
        :return: transformed row
        """
        method = _TRANSFORMER_METHODS.get(type(row))

        if method is None:
            return row

        return getattr(self, method)(row)

    def metadata_table_row_transformer(self, row: MetadataTableRow) -> MetadataTableRow:
        """
        Transform a row of get_tables() result. Subclasses may override this in order to perform sanitization of
        the data. Default implementation returns the row as-is.

        Rows are namedtuples; use `row._replace()` to derive a modified row.

        :param row: row to transform
        :return: transformed row; may be the same instance as on input or may be a new instance
        """
        return row

    def metadata_table_type_row_transformer(self, row: MetadataTableTypeRow) -> MetadataTableTypeRow:
        return row

    def metadata_column_row_transformer(self, row: MetadataColumnRow) -> MetadataColumnRow:
        """
        Transform a row of get_columns() result. Default implementation returns the row as-is.

        :param row: row to transform
        :return: transformed row; may be the same instance as on input or may be a new instance
        """
        return row

    def metadata_table_privilege_row_transformer(self, row: MetadataTablePrivilegeRow) -> MetadataTablePrivilegeRow:
        return row

    def metadata_column_privilege_row_transformer(
        self, row: MetadataColumnPrivilegeRow
    ) -> MetadataColumnPrivilegeRow:
        return row

    def metadata_pk_row_transformer(self, row: MetadataPrimaryKeyRow) -> MetadataPrimaryKeyRow:
        """
        Transform a row of get_primary_keys() result. Default implementation returns the row as-is.

        :param row: row to transform
        :return: transformed row; may be the same instance as on input or may be a new instance
        """
        return row

    def metadata_fk_row_transformer(self, row: MetadataForeignKeyRow) -> MetadataForeignKeyRow:
        """
        Transform a row of get_imported_keys(), get_exported_keys() and get_cross_reference() results. Default
        implementation returns the row as-is.

        :param row: row to transform
        :return: transformed row; may be the same instance as on input or may be a new instance
        """
        return row

    def metadata_function_column_row_transformer(self, row: MetadataFunctionColumnRow) -> MetadataFunctionColumnRow:
        return row

    def metadata_procedure_column_row_transformer(
        self, row: MetadataProcedureColumnRow
    ) -> MetadataProcedureColumnRow:
        return row

    def metadata_pseudo_column_row_transformer(self, row: MetadataPseudoColumnRow) -> MetadataPseudoColumnRow:
        return row

    def metadata_type_info_row_transformer(self, row: MetadataTypeInfoRow) -> MetadataTypeInfoRow:
        """
        Transform a row of get_type_info() result. Default implementation returns the row as-is.

        :param row: row to transform
        :return: transformed row; may be the same instance as on input or may be a new instance
        """
        return row

    def metadata_procedure_row_transformer(self, row: MetadataProcedureRow) -> MetadataProcedureRow:
        return row

    def metadata_function_row_transformer(self, row: MetadataFunctionRow) -> MetadataFunctionRow:
        return row

    def metadata_index_info_row_transformer(self, row: MetadataIndexInfoRow) -> MetadataIndexInfoRow:
        """
        Transform a row of get_index_info() result. Default implementation returns the row as-is.

        :param row: row to transform
        :return: transformed row; may be the same instance as on input or may be a new instance
        """
        return row

    def metadata_best_row_identifier_row_transformer(
        self, row: MetadataBestRowIdentifierRow
    ) -> MetadataBestRowIdentifierRow:
        return row

    def metadata_version_column_row_transformer(self, row: MetadataVersionColumnRow) -> MetadataVersionColumnRow:
        return row

    def metadata_schema_row_transformer(self, row: MetadataSchemaRow) -> MetadataSchemaRow:
        return row

    def metadata_catalog_row_transformer(self, row: MetadataCatalogRow) -> MetadataCatalogRow:
        return row


_TRANSFORMER_METHODS = {
    MetadataTableRow: "metadata_table_row_transformer",
    MetadataTableTypeRow: "metadata_table_type_row_transformer",
    MetadataColumnRow: "metadata_column_row_transformer",
    MetadataTablePrivilegeRow: "metadata_table_privilege_row_transformer",
    MetadataColumnPrivilegeRow: "metadata_column_privilege_row_transformer",
    MetadataPrimaryKeyRow: "metadata_pk_row_transformer",
    MetadataForeignKeyRow: "metadata_fk_row_transformer",
    MetadataFunctionColumnRow: "metadata_function_column_row_transformer",
    MetadataProcedureColumnRow: "metadata_procedure_column_row_transformer",
    MetadataPseudoColumnRow: "metadata_pseudo_column_row_transformer",
    MetadataTypeInfoRow: "metadata_type_info_row_transformer",
    MetadataProcedureRow: "metadata_procedure_row_transformer",
    MetadataFunctionRow: "metadata_function_row_transformer",
    MetadataIndexInfoRow: "metadata_index_info_row_transformer",
    MetadataBestRowIdentifierRow: "metadata_best_row_identifier_row_transformer",
    MetadataVersionColumnRow: "metadata_version_column_row_transformer",
    MetadataSchemaRow: "metadata_schema_row_transformer",
    MetadataCatalogRow: "metadata_catalog_row_transformer",
}
