# (C) 2021 GoodData Corporation
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import JDBC_CONSTANTS, MetadataFunctionRow
from catalog_metadata.query_base import StrategyTable, VersionedQueryStrategy
from catalog_metadata.query_routines import _package_clauses
from catalog_metadata.rows import RowAssembler
from catalog_metadata.utils import _to_specific_name, _trim_name

# before 3.0 every function is an external UDF
_FUNCTIONS_2_5 = """select
  cast(null as varchar(63)) as FUNCTION_CAT,
  RDB$FUNCTION_NAME as FUNCTION_NAME,
  RDB$DESCRIPTION as REMARKS,
  cast(null as blob sub_type text) as JB_FUNCTION_SOURCE,
  'UDF' as JB_FUNCTION_KIND,
  trim(trailing from RDB$MODULE_NAME) as JB_MODULE_NAME,
  trim(trailing from RDB$ENTRYPOINT) as JB_ENTRYPOINT,
  cast(null as varchar(63)) as JB_ENGINE_NAME
from RDB$FUNCTIONS"""

_FUNCTIONS_LIST_3 = """  trim(trailing from RDB$FUNCTION_NAME) as FUNCTION_NAME,
  RDB$DESCRIPTION as REMARKS,
  RDB$FUNCTION_SOURCE as JB_FUNCTION_SOURCE,
  case
    when RDB$LEGACY_FLAG = 1 then 'UDF'
    when RDB$ENGINE_NAME is not null then 'UDR'
    else 'PSQL'
  end as JB_FUNCTION_KIND,
  trim(trailing from RDB$MODULE_NAME) as JB_MODULE_NAME,
  trim(trailing from RDB$ENTRYPOINT) as JB_ENTRYPOINT,
  trim(trailing from RDB$ENGINE_NAME) as JB_ENGINE_NAME
from RDB$FUNCTIONS"""

_FUNCTION_CAT = "  cast(null as varchar(63)) as FUNCTION_CAT,"
_FUNCTION_CAT_PACKAGE = "  coalesce(trim(trailing from RDB$PACKAGE_NAME), '') as FUNCTION_CAT,"
_FUNCTION_SCHEM = "  trim(trailing from RDB$SCHEMA_NAME) as FUNCTION_SCHEM,"

_FUNCTIONS_3 = f"""select
{_FUNCTION_CAT}
{_FUNCTIONS_LIST_3}"""

_FUNCTIONS_3_PACKAGE = f"""select
{_FUNCTION_CAT_PACKAGE}
{_FUNCTIONS_LIST_3}"""

_FUNCTIONS_6 = f"""select
{_FUNCTION_CAT}
{_FUNCTION_SCHEM}
{_FUNCTIONS_LIST_3}"""

_FUNCTIONS_6_PACKAGE = f"""select
{_FUNCTION_CAT_PACKAGE}
{_FUNCTION_SCHEM}
{_FUNCTIONS_LIST_3}"""


def _map_function_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    catalog = record.get("FUNCTION_CAT")
    function_name = _trim_name(record["FUNCTION_NAME"])

    return (
        assembler.at(0)
        .set_string(catalog)
        .at(1)
        .set_string(_trim_name(record.get("FUNCTION_SCHEM")))
        .at(2)
        .set_string(function_name)
        .at(3)
        .set_string(record["REMARKS"])
        .at(4)
        .set_short(JDBC_CONSTANTS.functionNoTable)
        .at(5)
        .set_string(_to_specific_name(catalog, function_name))
        .at(6)
        .set_string(record["JB_FUNCTION_SOURCE"])
        .at(7)
        .set_string(record["JB_FUNCTION_KIND"])
        .at(8)
        .set_string(_trim_name(record["JB_MODULE_NAME"]))
        .at(9)
        .set_string(_trim_name(record["JB_ENTRYPOINT"]))
        .at(10)
        .set_string(_trim_name(record["JB_ENGINE_NAME"]))
        .finalize()
    )


def _clauses_2_5(catalog: Optional[str], function_name_pattern: Optional[str], schema_pattern: Optional[str] = None):
    return [Clause("RDB$FUNCTION_NAME", function_name_pattern)]


def _clauses_3(catalog: Optional[str], function_name_pattern: Optional[str], schema_pattern: Optional[str] = None):
    return [Clause.is_null_clause("RDB$PACKAGE_NAME"), Clause("RDB$FUNCTION_NAME", function_name_pattern)]


def _clauses_3_package(
    catalog: Optional[str], function_name_pattern: Optional[str], schema_pattern: Optional[str] = None
):
    return _package_clauses("RDB$PACKAGE_NAME", catalog) + [Clause("RDB$FUNCTION_NAME", function_name_pattern)]


def _clauses_6(catalog: Optional[str], function_name_pattern: Optional[str], schema_pattern: Optional[str] = None):
    return [Clause("RDB$SCHEMA_NAME", schema_pattern)] + _clauses_3(catalog, function_name_pattern)


def _clauses_6_package(
    catalog: Optional[str], function_name_pattern: Optional[str], schema_pattern: Optional[str] = None
):
    return [Clause("RDB$SCHEMA_NAME", schema_pattern)] + _clauses_3_package(catalog, function_name_pattern)


def _functions(
    generation: Generation, select: str, order_by: str, clauses, catalog_as_package: bool = False
) -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="functions",
        generation=generation,
        row_type=MetadataFunctionRow,
        select=select,
        order_by=order_by,
        clauses=clauses,
        map_row=_map_function_row,
        catalog_as_package=catalog_as_package,
    )


FUNCTIONS = StrategyTable(
    "functions",
    {
        (Generation.FB2_5, False): lambda: _functions(
            Generation.FB2_5, _FUNCTIONS_2_5, "RDB$FUNCTION_NAME", _clauses_2_5
        ),
        (Generation.FB3, False): lambda: _functions(
            Generation.FB3, _FUNCTIONS_3, "RDB$PACKAGE_NAME, RDB$FUNCTION_NAME", _clauses_3
        ),
        (Generation.FB3, True): lambda: _functions(
            Generation.FB3,
            _FUNCTIONS_3_PACKAGE,
            "RDB$PACKAGE_NAME nulls first, RDB$FUNCTION_NAME",
            _clauses_3_package,
            catalog_as_package=True,
        ),
        (Generation.FB6, False): lambda: _functions(
            Generation.FB6, _FUNCTIONS_6, "RDB$SCHEMA_NAME, RDB$PACKAGE_NAME, RDB$FUNCTION_NAME", _clauses_6
        ),
        (Generation.FB6, True): lambda: _functions(
            Generation.FB6,
            _FUNCTIONS_6_PACKAGE,
            "RDB$PACKAGE_NAME nulls first, RDB$SCHEMA_NAME, RDB$FUNCTION_NAME",
            _clauses_6_package,
            catalog_as_package=True,
        ),
    },
)
