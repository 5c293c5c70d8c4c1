# (C) 2021 GoodData Corporation
from catalog_metadata.metadata import (
    MetadataProductInfo,
    MetadataTableRow,
    MetadataTableTypeRow,
    MetadataColumnRow,
    MetadataTablePrivilegeRow,
    MetadataColumnPrivilegeRow,
    MetadataPrimaryKeyRow,
    MetadataForeignKeyRow,
    MetadataFunctionColumnRow,
    MetadataProcedureColumnRow,
    MetadataPseudoColumnRow,
    MetadataTypeInfoRow,
    MetadataProcedureRow,
    MetadataFunctionRow,
    MetadataIndexInfoRow,
    MetadataBestRowIdentifierRow,
    MetadataVersionColumnRow,
    MetadataSchemaRow,
    MetadataCatalogRow,
    MetadataConstants,
    MetadataRowTransformer,
    JDBC_CONSTANTS,
)
from catalog_metadata.errors import CatalogMetadataError, TypeLadderError, RowAssemblyError, RowBoundsError
from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.patterns import ConditionType, MetadataPattern, escape_wildcards
from catalog_metadata.clause import Clause, any_condition, conjunction, parameters
from catalog_metadata.type_codes import FieldType, FieldSubType, JdbcType
from catalog_metadata.type_metadata import TypeMetadata, TypeMetadataBuilder, get_data_type, get_data_type_name
from catalog_metadata.rows import RowAssembler
from catalog_metadata.query_base import MetadataQuery, MetadataQueryRunner, StrategyTable, VersionedQueryStrategy
from catalog_metadata.catalog import CatalogMetadata
from catalog_metadata.connector import DbConnector, DbMetadata, DbApiQueryRunner, read_capabilities
from catalog_metadata.firebird import FirebirdConnector
from catalog_metadata.result_convertor import metadata_rows_to_dataframe
