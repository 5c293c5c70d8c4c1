# (C) 2021 GoodData Corporation
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot, Generation
from catalog_metadata.clause import Clause
from catalog_metadata.metadata import JDBC_CONSTANTS, MetadataFunctionColumnRow, MetadataProcedureColumnRow
from catalog_metadata.query_base import StrategyTable, VersionedQueryStrategy
from catalog_metadata.rows import RowAssembler
from catalog_metadata.type_metadata import TypeMetadata
from catalog_metadata.utils import _to_bool, _to_specific_name, _trim_name

_FUNCTION_COLUMNS_2_5 = """select
  cast(null as varchar(63)) as FUNCTION_CAT,
  FUN.RDB$FUNCTION_NAME as FUNCTION_NAME,
  'PARAM_' || FUNA.RDB$ARGUMENT_POSITION as COLUMN_NAME,
  FUNA.RDB$FIELD_TYPE as FIELD_TYPE,
  FUNA.RDB$FIELD_SUB_TYPE as FIELD_SUB_TYPE,
  FUNA.RDB$FIELD_PRECISION as FIELD_PRECISION,
  FUNA.RDB$FIELD_SCALE as FIELD_SCALE,
  FUNA.RDB$FIELD_LENGTH as FIELD_LENGTH,
  FUNA.RDB$CHARACTER_LENGTH as CHAR_LEN,
  FUNA.RDB$CHARACTER_SET_ID as CHARACTER_SET_ID,
  case
    when FUN.RDB$RETURN_ARGUMENT = FUNA.RDB$ARGUMENT_POSITION then 0
    else FUNA.RDB$ARGUMENT_POSITION
  end as ORDINAL_POSITION,
  case FUNA.RDB$MECHANISM
    when 0 then 'F'
    when 1 then 'F'
    else 'T'
  end as IS_NULLABLE
from RDB$FUNCTIONS FUN
inner join RDB$FUNCTION_ARGUMENTS FUNA
  on FUNA.RDB$FUNCTION_NAME = FUN.RDB$FUNCTION_NAME"""

_FUNCTION_COLUMNS_LIST_3 = """  trim(trailing from FUN.RDB$FUNCTION_NAME) as FUNCTION_NAME,
  coalesce(FUNA.RDB$ARGUMENT_NAME, 'PARAM_' || FUNA.RDB$ARGUMENT_POSITION) as COLUMN_NAME,
  coalesce(FUNA.RDB$FIELD_TYPE, F.RDB$FIELD_TYPE) as FIELD_TYPE,
  coalesce(FUNA.RDB$FIELD_SUB_TYPE, F.RDB$FIELD_SUB_TYPE) as FIELD_SUB_TYPE,
  coalesce(FUNA.RDB$FIELD_PRECISION, F.RDB$FIELD_PRECISION) as FIELD_PRECISION,
  coalesce(FUNA.RDB$FIELD_SCALE, F.RDB$FIELD_SCALE) as FIELD_SCALE,
  coalesce(FUNA.RDB$FIELD_LENGTH, F.RDB$FIELD_LENGTH) as FIELD_LENGTH,
  coalesce(FUNA.RDB$CHARACTER_LENGTH, F.RDB$CHARACTER_LENGTH) as CHAR_LEN,
  coalesce(FUNA.RDB$CHARACTER_SET_ID, F.RDB$CHARACTER_SET_ID) as CHARACTER_SET_ID,
  case
    when FUN.RDB$RETURN_ARGUMENT = FUNA.RDB$ARGUMENT_POSITION then 0
    else FUNA.RDB$ARGUMENT_POSITION
  end as ORDINAL_POSITION,
  case
    when coalesce(FUNA.RDB$NULL_FLAG, F.RDB$NULL_FLAG) = 1 then false
    when FUNA.RDB$MECHANISM = 0 then false
    when FUNA.RDB$MECHANISM = 1 then false
    else true
  end as IS_NULLABLE"""

_FUNCTION_COLUMNS_FROM_3 = """from RDB$FUNCTIONS FUN
inner join RDB$FUNCTION_ARGUMENTS FUNA
  on FUNA.RDB$FUNCTION_NAME = FUN.RDB$FUNCTION_NAME
    and FUNA.RDB$PACKAGE_NAME is not distinct from FUN.RDB$PACKAGE_NAME
left join RDB$FIELDS F
  on F.RDB$FIELD_NAME = FUNA.RDB$FIELD_SOURCE"""

_FUNCTION_COLUMNS_FROM_6 = """from RDB$FUNCTIONS FUN
inner join RDB$FUNCTION_ARGUMENTS FUNA
  on FUNA.RDB$SCHEMA_NAME = FUN.RDB$SCHEMA_NAME and FUNA.RDB$FUNCTION_NAME = FUN.RDB$FUNCTION_NAME
    and FUNA.RDB$PACKAGE_NAME is not distinct from FUN.RDB$PACKAGE_NAME
left join RDB$FIELDS F
  on F.RDB$SCHEMA_NAME = FUNA.RDB$FIELD_SOURCE_SCHEMA_NAME and F.RDB$FIELD_NAME = FUNA.RDB$FIELD_SOURCE"""

_FUNCTION_CAT = "  cast(null as varchar(63)) as FUNCTION_CAT,"
_FUNCTION_CAT_PACKAGE = "  coalesce(trim(trailing from FUN.RDB$PACKAGE_NAME), '') as FUNCTION_CAT,"
_FUNCTION_SCHEM = "  trim(trailing from FUN.RDB$SCHEMA_NAME) as FUNCTION_SCHEM,"

_FUNCTION_COLUMNS_3 = f"""select
{_FUNCTION_CAT}
{_FUNCTION_COLUMNS_LIST_3}
{_FUNCTION_COLUMNS_FROM_3}"""

_FUNCTION_COLUMNS_3_PACKAGE = f"""select
{_FUNCTION_CAT_PACKAGE}
{_FUNCTION_COLUMNS_LIST_3}
{_FUNCTION_COLUMNS_FROM_3}"""

_FUNCTION_COLUMNS_6 = f"""select
{_FUNCTION_CAT}
{_FUNCTION_SCHEM}
{_FUNCTION_COLUMNS_LIST_3}
{_FUNCTION_COLUMNS_FROM_6}"""

_FUNCTION_COLUMNS_6_PACKAGE = f"""select
{_FUNCTION_CAT_PACKAGE}
{_FUNCTION_SCHEM}
{_FUNCTION_COLUMNS_LIST_3}
{_FUNCTION_COLUMNS_FROM_6}"""

_ARGUMENT_ORDER = """case
    when FUN.RDB$RETURN_ARGUMENT = FUNA.RDB$ARGUMENT_POSITION then -1
    else FUNA.RDB$ARGUMENT_POSITION
  end"""

_FUNCTION_COLUMN_NAME_3 = "coalesce(FUNA.RDB$ARGUMENT_NAME, 'PARAM_' || FUNA.RDB$ARGUMENT_POSITION)"

_PROCEDURE_COLUMNS_2_5 = """select
  cast(null as varchar(63)) as PROCEDURE_CAT,
  PP.RDB$PROCEDURE_NAME as PROCEDURE_NAME,
  PP.RDB$PARAMETER_NAME as COLUMN_NAME,
  PP.RDB$PARAMETER_TYPE as COLUMN_TYPE,
  F.RDB$FIELD_TYPE as FIELD_TYPE,
  F.RDB$FIELD_SUB_TYPE as FIELD_SUB_TYPE,
  F.RDB$FIELD_PRECISION as FIELD_PRECISION,
  F.RDB$FIELD_SCALE as FIELD_SCALE,
  F.RDB$FIELD_LENGTH as FIELD_LENGTH,
  F.RDB$CHARACTER_LENGTH as CHAR_LEN,
  F.RDB$CHARACTER_SET_ID as CHARACTER_SET_ID,
  F.RDB$NULL_FLAG as NULL_FLAG,
  PP.RDB$DESCRIPTION as REMARKS,
  PP.RDB$PARAMETER_NUMBER + 1 as PARAMETER_NUMBER
from RDB$PROCEDURE_PARAMETERS PP
inner join RDB$FIELDS F on PP.RDB$FIELD_SOURCE = F.RDB$FIELD_NAME"""

_PROCEDURE_COLUMNS_LIST_3 = """  trim(trailing from PP.RDB$PROCEDURE_NAME) as PROCEDURE_NAME,
  trim(trailing from PP.RDB$PARAMETER_NAME) as COLUMN_NAME,
  PP.RDB$PARAMETER_TYPE as COLUMN_TYPE,
  F.RDB$FIELD_TYPE as FIELD_TYPE,
  F.RDB$FIELD_SUB_TYPE as FIELD_SUB_TYPE,
  F.RDB$FIELD_PRECISION as FIELD_PRECISION,
  F.RDB$FIELD_SCALE as FIELD_SCALE,
  F.RDB$FIELD_LENGTH as FIELD_LENGTH,
  F.RDB$CHARACTER_LENGTH as CHAR_LEN,
  F.RDB$CHARACTER_SET_ID as CHARACTER_SET_ID,
  F.RDB$NULL_FLAG as NULL_FLAG,
  PP.RDB$DESCRIPTION as REMARKS,
  PP.RDB$PARAMETER_NUMBER + 1 as PARAMETER_NUMBER"""

_PROCEDURE_COLUMNS_FROM_3 = """from RDB$PROCEDURE_PARAMETERS PP
inner join RDB$FIELDS F on PP.RDB$FIELD_SOURCE = F.RDB$FIELD_NAME"""

_PROCEDURE_COLUMNS_FROM_6 = """from RDB$PROCEDURE_PARAMETERS PP
inner join RDB$FIELDS F
  on PP.RDB$FIELD_SOURCE_SCHEMA_NAME = F.RDB$SCHEMA_NAME and PP.RDB$FIELD_SOURCE = F.RDB$FIELD_NAME"""

_PROCEDURE_CAT = "  cast(null as varchar(63)) as PROCEDURE_CAT,"
_PROCEDURE_CAT_PACKAGE = "  coalesce(trim(trailing from PP.RDB$PACKAGE_NAME), '') as PROCEDURE_CAT,"
_PROCEDURE_SCHEM = "  trim(trailing from PP.RDB$SCHEMA_NAME) as PROCEDURE_SCHEM,"

_PROCEDURE_COLUMNS_3 = f"""select
{_PROCEDURE_CAT}
{_PROCEDURE_COLUMNS_LIST_3}
{_PROCEDURE_COLUMNS_FROM_3}"""

_PROCEDURE_COLUMNS_3_PACKAGE = f"""select
{_PROCEDURE_CAT_PACKAGE}
{_PROCEDURE_COLUMNS_LIST_3}
{_PROCEDURE_COLUMNS_FROM_3}"""

_PROCEDURE_COLUMNS_6 = f"""select
{_PROCEDURE_CAT}
{_PROCEDURE_SCHEM}
{_PROCEDURE_COLUMNS_LIST_3}
{_PROCEDURE_COLUMNS_FROM_6}"""

_PROCEDURE_COLUMNS_6_PACKAGE = f"""select
{_PROCEDURE_CAT_PACKAGE}
{_PROCEDURE_SCHEM}
{_PROCEDURE_COLUMNS_LIST_3}
{_PROCEDURE_COLUMNS_FROM_6}"""

_PROCEDURE_PARAMETER_ORDER = "PP.RDB$PARAMETER_TYPE desc, PP.RDB$PARAMETER_NUMBER"


def _package_clauses(package_column: str, catalog: Optional[str]) -> list:
    """
    Clauses selecting routines by package when packages are reported as catalogs.

    :param package_column: column holding the package name
    :param catalog: None to not filter by package, empty string for routines outside packages, otherwise exact
     package name
    :return: list with zero or one clause
    """
    if catalog is None:
        return []
    elif catalog == "":
        return [Clause.is_null_clause(package_column)]

    return [Clause.equals_clause(package_column, catalog)]


def _map_function_column_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    type_metadata = TypeMetadata.builder(capabilities).from_row(record).build()
    catalog = record.get("FUNCTION_CAT")
    function_name = _trim_name(record["FUNCTION_NAME"])
    ordinal_position = record["ORDINAL_POSITION"]
    nullable = _to_bool(record["IS_NULLABLE"])

    return (
        assembler.at(0)
        .set_string(catalog)
        .at(1)
        .set_string(_trim_name(record.get("FUNCTION_SCHEM")))
        .at(2)
        .set_string(function_name)
        .at(3)
        .set_string(_trim_name(record["COLUMN_NAME"]))
        .at(4)
        .set_short(JDBC_CONSTANTS.functionReturn if ordinal_position == 0 else JDBC_CONSTANTS.functionColumnIn)
        .at(5)
        .set_int(type_metadata.jdbc_type)
        .at(6)
        .set_string(type_metadata.sql_type_name)
        .at(7)
        .set_int(type_metadata.column_size)
        .at(8)
        .set_int(type_metadata.length)
        .at(9)
        .set_short(type_metadata.decimal_digits)
        .at(10)
        .set_short(type_metadata.radix)
        .at(11)
        .set_short(JDBC_CONSTANTS.functionNullable if nullable else JDBC_CONSTANTS.functionNoNulls)
        .at(12)
        .set(None)
        .at(13)
        .set_int(type_metadata.char_octet_length)
        .at(14)
        .set_int(ordinal_position)
        .at(15)
        .set_string("YES" if nullable else "NO")
        .at(16)
        .set_string(_to_specific_name(catalog, function_name))
        .finalize(initialize_remaining=False)
    )


def _map_procedure_column_row(record: Mapping[str, Any], assembler: RowAssembler, capabilities: CapabilitySnapshot):
    type_metadata = TypeMetadata.builder(capabilities).from_row(record).build()
    catalog = record.get("PROCEDURE_CAT")
    procedure_name = _trim_name(record["PROCEDURE_NAME"])
    not_null = record["NULL_FLAG"] == 1

    return (
        assembler.at(0)
        .set_string(catalog)
        .at(1)
        .set_string(_trim_name(record.get("PROCEDURE_SCHEM")))
        .at(2)
        .set_string(procedure_name)
        .at(3)
        .set_string(_trim_name(record["COLUMN_NAME"]))
        .at(4)
        .set_short(
            JDBC_CONSTANTS.procedureColumnIn if record["COLUMN_TYPE"] == 0 else JDBC_CONSTANTS.procedureColumnOut
        )
        .at(5)
        .set_int(type_metadata.jdbc_type)
        .at(6)
        .set_string(type_metadata.sql_type_name)
        .at(7)
        .set_int(type_metadata.column_size)
        .at(8)
        .set_int(type_metadata.length)
        .at(9)
        .set_short(type_metadata.decimal_digits)
        .at(10)
        .set_short(type_metadata.radix)
        .at(11)
        .set_short(JDBC_CONSTANTS.procedureNoNulls if not_null else JDBC_CONSTANTS.procedureNullable)
        .at(12)
        .set_string(record["REMARKS"])
        .at(13)
        .set(None)
        .at(14)
        .set(None)
        .at(15)
        .set(None)
        .at(16)
        .set_int(type_metadata.char_octet_length)
        .at(17)
        .set_int(record["PARAMETER_NUMBER"])
        .at(18)
        .set_string("NO" if not_null else "YES")
        .at(19)
        .set_string(_to_specific_name(catalog, procedure_name))
        .finalize(initialize_remaining=False)
    )


def _function_clauses_2_5(
    catalog: Optional[str],
    function_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
):
    return [
        Clause("FUN.RDB$FUNCTION_NAME", function_name_pattern),
        Clause("'PARAM_' || FUNA.RDB$ARGUMENT_POSITION", column_name_pattern),
    ]


def _function_clauses_3(
    catalog: Optional[str],
    function_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
):
    return [
        Clause.is_null_clause("FUN.RDB$PACKAGE_NAME"),
        Clause("FUN.RDB$FUNCTION_NAME", function_name_pattern),
        Clause(_FUNCTION_COLUMN_NAME_3, column_name_pattern),
    ]


def _function_clauses_3_package(
    catalog: Optional[str],
    function_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
):
    return _package_clauses("FUN.RDB$PACKAGE_NAME", catalog) + [
        Clause("FUN.RDB$FUNCTION_NAME", function_name_pattern),
        Clause(_FUNCTION_COLUMN_NAME_3, column_name_pattern),
    ]


def _function_clauses_6(
    catalog: Optional[str],
    function_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
):
    return [Clause("FUN.RDB$SCHEMA_NAME", schema_pattern)] + _function_clauses_3(
        catalog, function_name_pattern, column_name_pattern
    )


def _function_clauses_6_package(
    catalog: Optional[str],
    function_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
):
    return [Clause("FUN.RDB$SCHEMA_NAME", schema_pattern)] + _function_clauses_3_package(
        catalog, function_name_pattern, column_name_pattern
    )


def _procedure_clauses_2_5(
    catalog: Optional[str],
    procedure_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
):
    return [
        Clause("PP.RDB$PROCEDURE_NAME", procedure_name_pattern),
        Clause("PP.RDB$PARAMETER_NAME", column_name_pattern),
    ]


def _procedure_clauses_3(
    catalog: Optional[str],
    procedure_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
):
    return [Clause.is_null_clause("PP.RDB$PACKAGE_NAME")] + _procedure_clauses_2_5(
        None, procedure_name_pattern, column_name_pattern
    )


def _procedure_clauses_3_package(
    catalog: Optional[str],
    procedure_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
):
    return _package_clauses("PP.RDB$PACKAGE_NAME", catalog) + _procedure_clauses_2_5(
        None, procedure_name_pattern, column_name_pattern
    )


def _procedure_clauses_6(
    catalog: Optional[str],
    procedure_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
):
    return [Clause("PP.RDB$SCHEMA_NAME", schema_pattern)] + _procedure_clauses_3(
        catalog, procedure_name_pattern, column_name_pattern
    )


def _procedure_clauses_6_package(
    catalog: Optional[str],
    procedure_name_pattern: Optional[str],
    column_name_pattern: Optional[str],
    schema_pattern: Optional[str] = None,
):
    return [Clause("PP.RDB$SCHEMA_NAME", schema_pattern)] + _procedure_clauses_3_package(
        catalog, procedure_name_pattern, column_name_pattern
    )


def _function_columns(
    generation: Generation, select: str, order_by: str, clauses, catalog_as_package: bool = False
) -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="function columns",
        generation=generation,
        row_type=MetadataFunctionColumnRow,
        select=select,
        order_by=f"{order_by},\n  {_ARGUMENT_ORDER}",
        clauses=clauses,
        map_row=_map_function_column_row,
        catalog_as_package=catalog_as_package,
    )


def _procedure_columns(
    generation: Generation, select: str, order_by: str, clauses, catalog_as_package: bool = False
) -> VersionedQueryStrategy:
    return VersionedQueryStrategy(
        name="procedure columns",
        generation=generation,
        row_type=MetadataProcedureColumnRow,
        select=select,
        order_by=f"{order_by}, {_PROCEDURE_PARAMETER_ORDER}",
        clauses=clauses,
        map_row=_map_procedure_column_row,
        catalog_as_package=catalog_as_package,
    )


FUNCTION_COLUMNS = StrategyTable(
    "function columns",
    {
        (Generation.FB2_5, False): lambda: _function_columns(
            Generation.FB2_5, _FUNCTION_COLUMNS_2_5, "FUN.RDB$FUNCTION_NAME", _function_clauses_2_5
        ),
        (Generation.FB3, False): lambda: _function_columns(
            Generation.FB3,
            _FUNCTION_COLUMNS_3,
            "FUN.RDB$PACKAGE_NAME, FUN.RDB$FUNCTION_NAME",
            _function_clauses_3,
        ),
        (Generation.FB3, True): lambda: _function_columns(
            Generation.FB3,
            _FUNCTION_COLUMNS_3_PACKAGE,
            "FUN.RDB$PACKAGE_NAME nulls first, FUN.RDB$FUNCTION_NAME",
            _function_clauses_3_package,
            catalog_as_package=True,
        ),
        (Generation.FB6, False): lambda: _function_columns(
            Generation.FB6,
            _FUNCTION_COLUMNS_6,
            "FUN.RDB$SCHEMA_NAME, FUN.RDB$PACKAGE_NAME, FUN.RDB$FUNCTION_NAME",
            _function_clauses_6,
        ),
        (Generation.FB6, True): lambda: _function_columns(
            Generation.FB6,
            _FUNCTION_COLUMNS_6_PACKAGE,
            "FUN.RDB$PACKAGE_NAME nulls first, FUN.RDB$SCHEMA_NAME, FUN.RDB$FUNCTION_NAME",
            _function_clauses_6_package,
            catalog_as_package=True,
        ),
    },
)

PROCEDURE_COLUMNS = StrategyTable(
    "procedure columns",
    {
        (Generation.FB2_5, False): lambda: _procedure_columns(
            Generation.FB2_5, _PROCEDURE_COLUMNS_2_5, "PP.RDB$PROCEDURE_NAME", _procedure_clauses_2_5
        ),
        (Generation.FB3, False): lambda: _procedure_columns(
            Generation.FB3,
            _PROCEDURE_COLUMNS_3,
            "PP.RDB$PACKAGE_NAME, PP.RDB$PROCEDURE_NAME",
            _procedure_clauses_3,
        ),
        (Generation.FB3, True): lambda: _procedure_columns(
            Generation.FB3,
            _PROCEDURE_COLUMNS_3_PACKAGE,
            "PP.RDB$PACKAGE_NAME nulls first, PP.RDB$PROCEDURE_NAME",
            _procedure_clauses_3_package,
            catalog_as_package=True,
        ),
        (Generation.FB6, False): lambda: _procedure_columns(
            Generation.FB6,
            _PROCEDURE_COLUMNS_6,
            "PP.RDB$SCHEMA_NAME, PP.RDB$PACKAGE_NAME, PP.RDB$PROCEDURE_NAME",
            _procedure_clauses_6,
        ),
        (Generation.FB6, True): lambda: _procedure_columns(
            Generation.FB6,
            _PROCEDURE_COLUMNS_6_PACKAGE,
            "PP.RDB$PACKAGE_NAME nulls first, PP.RDB$SCHEMA_NAME, PP.RDB$PROCEDURE_NAME",
            _procedure_clauses_6_package,
            catalog_as_package=True,
        ),
    },
)
