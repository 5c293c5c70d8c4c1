# (C) 2021 GoodData Corporation
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import JDBC_CONSTANTS, MetadataProcedureRow
from catalog_metadata.query_base import StrategyTable, VersionedQueryStrategy
from catalog_metadata.query_routines import _package_clauses
from catalog_metadata.rows import RowAssembler
from catalog_metadata.utils import _to_specific_name, _trim_name

_PROCEDURES_2_5 = """select
  cast(null as varchar(63)) as PROCEDURE_CAT,
  RDB$PROCEDURE_NAME as PROCEDURE_NAME,
  RDB$DESCRIPTION as REMARKS,
  RDB$PROCEDURE_OUTPUTS as PROCEDURE_TYPE
from RDB$PROCEDURES"""

_PROCEDURES_3 = """select
  cast(null as varchar(63)) as PROCEDURE_CAT,
  trim(trailing from RDB$PROCEDURE_NAME) as PROCEDURE_NAME,
  RDB$DESCRIPTION as REMARKS,
  RDB$PROCEDURE_OUTPUTS as PROCEDURE_TYPE
from RDB$PROCEDURES"""

_PROCEDURES_3_PACKAGE = """select
  coalesce(trim(trailing from RDB$PACKAGE_NAME), '') as PROCEDURE_CAT,
  trim(trailing from RDB$PROCEDURE_NAME) as PROCEDURE_NAME,
  RDB$DESCRIPTION as REMARKS,
  RDB$PROCEDURE_OUTPUTS as PROCEDURE_TYPE
from RDB$PROCEDURES"""

_PROCEDURES_6 = """select
  cast(null as varchar(63)) as PROCEDURE_CAT,
  trim(trailing from RDB$SCHEMA_NAME) as PROCEDURE_SCHEM,
  trim(trailing from RDB$PROCEDURE_NAME) as PROCEDURE_NAME,
  RDB$DESCRIPTION as REMARKS,
  RDB$PROCEDURE_OUTPUTS as PROCEDURE_TYPE
from RDB$PROCEDURES"""

_PROCEDURES_6_PACKAGE = """select
  coalesce(trim(trailing from RDB$PACKAGE_NAME), '') as PROCEDURE_CAT,
  trim(trailing from RDB$SCHEMA_NAME) as PROCEDURE_SCHEM,
  trim(trailing from RDB$PROCEDURE_NAME) as PROCEDURE_NAME,
  RDB$DESCRIPTION as REMARKS,
  RDB$PROCEDURE_OUTPUTS as PROCEDURE_TYPE
from RDB$PROCEDURES"""


def _procedure_type(outputs: Optional[int]) -> int:
    # selectable and executable procedures alike return a result when they have output parameters
    if not outputs:
        return JDBC_CONSTANTS.procedureNoResult

    return JDBC_CONSTANTS.procedureReturnsResult


def _map_procedure_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    catalog = record.get("PROCEDURE_CAT")
    procedure_name = _trim_name(record["PROCEDURE_NAME"])

    return (
        assembler.at(0)
        .set_string(catalog)
        .at(1)
        .set_string(_trim_name(record.get("PROCEDURE_SCHEM")))
        .at(2)
        .set_string(procedure_name)
        .at(6)
        .set_string(record["REMARKS"])
        .at(7)
        .set_short(_procedure_type(record["PROCEDURE_TYPE"]))
        .at(8)
        .set_string(_to_specific_name(catalog, procedure_name))
        .finalize()
    )


def _clauses_2_5(catalog: Optional[str], procedure_name_pattern: Optional[str], schema_pattern: Optional[str] = None):
    return [Clause("RDB$PROCEDURE_NAME", procedure_name_pattern)]


def _clauses_3(catalog: Optional[str], procedure_name_pattern: Optional[str], schema_pattern: Optional[str] = None):
    return [Clause.is_null_clause("RDB$PACKAGE_NAME"), Clause("RDB$PROCEDURE_NAME", procedure_name_pattern)]


def _clauses_3_package(
    catalog: Optional[str], procedure_name_pattern: Optional[str], schema_pattern: Optional[str] = None
):
    return _package_clauses("RDB$PACKAGE_NAME", catalog) + [Clause("RDB$PROCEDURE_NAME", procedure_name_pattern)]


def _clauses_6(catalog: Optional[str], procedure_name_pattern: Optional[str], schema_pattern: Optional[str] = None):
    return [Clause("RDB$SCHEMA_NAME", schema_pattern)] + _clauses_3(catalog, procedure_name_pattern)


def _clauses_6_package(
    catalog: Optional[str], procedure_name_pattern: Optional[str], schema_pattern: Optional[str] = None
):
    return [Clause("RDB$SCHEMA_NAME", schema_pattern)] + _clauses_3_package(catalog, procedure_name_pattern)


def _procedures(
    generation: Generation, select: str, order_by: str, clauses, catalog_as_package: bool = False
) -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="procedures",
        generation=generation,
        row_type=MetadataProcedureRow,
        select=select,
        order_by=order_by,
        clauses=clauses,
        map_row=_map_procedure_row,
        catalog_as_package=catalog_as_package,
    )


PROCEDURES = StrategyTable(
    "procedures",
    {
        (Generation.FB2_5, False): lambda: _procedures(
            Generation.FB2_5, _PROCEDURES_2_5, "RDB$PROCEDURE_NAME", _clauses_2_5
        ),
        (Generation.FB3, False): lambda: _procedures(
            Generation.FB3, _PROCEDURES_3, "RDB$PACKAGE_NAME, RDB$PROCEDURE_NAME", _clauses_3
        ),
        (Generation.FB3, True): lambda: _procedures(
            Generation.FB3,
            _PROCEDURES_3_PACKAGE,
            "RDB$PACKAGE_NAME nulls first, RDB$PROCEDURE_NAME",
            _clauses_3_package,
            catalog_as_package=True,
        ),
        (Generation.FB6, False): lambda: _procedures(
            Generation.FB6, _PROCEDURES_6, "RDB$SCHEMA_NAME, RDB$PACKAGE_NAME, RDB$PROCEDURE_NAME", _clauses_6
        ),
        (Generation.FB6, True): lambda: _procedures(
            Generation.FB6,
            _PROCEDURES_6_PACKAGE,
            "RDB$PACKAGE_NAME nulls first, RDB$SCHEMA_NAME, RDB$PROCEDURE_NAME",
            _clauses_6_package,
            catalog_as_package=True,
        ),
    },
)
