# (C) 2021 GoodData Corporation
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import MetadataCatalogRow, MetadataSchemaRow
from catalog_metadata.query_base import StrategyTable, VersionedQueryStrategy
from catalog_metadata.rows import RowAssembler
from catalog_metadata.utils import _trim_name

_SCHEMAS_6 = """select
  trim(trailing from RDB$SCHEMA_NAME) as TABLE_SCHEM
from RDB$SCHEMAS"""

# the same package name may exist in several schemas
_CATALOGS_3 = """select distinct
  trim(trailing from RDB$PACKAGE_NAME) as TABLE_CAT
from RDB$PACKAGES"""


def _map_schema_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    return assembler.at(0).set_string(_trim_name(record["TABLE_SCHEM"])).finalize()


def _map_catalog_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    return assembler.at(0).set_string(_trim_name(record["TABLE_CAT"])).finalize()


def _schema_clauses(schema_pattern: Optional[str]):
    return [Clause("RDB$SCHEMA_NAME", schema_pattern)]


def _catalog_clauses():
    return []


SCHEMAS = StrategyTable(
    "schemas",
    {
        (Generation.FB6, False): lambda: VersionedQueryStrategy(
            name="schemas",
            generation=Generation.FB6,
            row_type=MetadataSchemaRow,
            select=_SCHEMAS_6,
            order_by="1",
            clauses=_schema_clauses,
            map_row=_map_schema_row,
        ),
    },
)

CATALOGS = StrategyTable(
    "catalogs",
    {
        (Generation.FB3, True): lambda: VersionedQueryStrategy(
            name="catalogs",
            generation=Generation.FB3,
            row_type=MetadataCatalogRow,
            select=_CATALOGS_3,
            order_by="1",
            clauses=_catalog_clauses,
            map_row=_map_catalog_row,
            catalog_as_package=True,
        ),
    },
)
