# (C) 2021 GoodData Corporation
from collections import namedtuple
from typing import Optional

from catalog_metadata.capabilities import CapabilitySnapshot
from catalog_metadata.metadata import JDBC_CONSTANTS, MetadataTypeInfoRow
from catalog_metadata.rows import RowAssembler
from catalog_metadata.type_codes import (
    NUMERIC_BIGINT_PRECISION,
    NUMERIC_INT128_PRECISION,
    FieldSubType,
    FieldType,
    JdbcType,
)
from catalog_metadata.type_metadata import TypeMetadata

MAX_CHAR_LENGTH = 32767
MAX_VARCHAR_LENGTH = 32765

_TypeInfo = namedtuple(
    "_TypeInfo",
    [
        "type_name",
        "data_type",
        "field_type",
        "sub_type",
        "precision",
        "literal_prefix",
        "literal_suffix",
        "create_params",
        "case_sensitive",
        "searchable",
        "unsigned",
        "fixed_prec_scale",
        "decimal",
        "requires",
    ],
)
"""
Declaration of one supported type.

- field_type, sub_type - storage type used to derive precision and radix; None for types with fixed precision
- precision - fixed precision, used when there is no storage type
- decimal - maximum scale equals maximum precision
- requires - name of the CapabilitySnapshot property that must be true for the type to be reported
"""


def _type(
    type_name: str,
    data_type: JdbcType,
    field_type: Optional[FieldType] = None,
    sub_type: Optional[int] = None,
    precision: Optional[int] = None,
    literal_prefix: Optional[str] = None,
    literal_suffix: Optional[str] = None,
    create_params: Optional[str] = None,
    case_sensitive: bool = False,
    searchable: int = JDBC_CONSTANTS.typeSearchable,
    unsigned: bool = False,
    fixed_prec_scale: bool = True,
    decimal: bool = False,
    requires: Optional[str] = None,
) -> _TypeInfo:
    return _TypeInfo(
        type_name,
        data_type,
        field_type,
        sub_type,
        precision,
        literal_prefix,
        literal_suffix,
        create_params,
        case_sensitive,
        searchable,
        unsigned,
        fixed_prec_scale,
        decimal,
        requires,
    )


_TYPES = [
    _type(
        "DECFLOAT",
        JdbcType.DECFLOAT,
        field_type=FieldType.DEC34,
        create_params="precision",
        fixed_prec_scale=False,
        requires="supports_decfloat",
    ),
    _type("BIGINT", JdbcType.BIGINT, field_type=FieldType.INT64),
    _type(
        "BLOB SUB_TYPE BINARY",
        JdbcType.LONGVARBINARY,
        precision=0,
        literal_prefix="x'",
        literal_suffix="'",
        case_sensitive=True,
        unsigned=True,
    ),
    _type(
        "VARCHAR",
        JdbcType.VARBINARY,
        precision=MAX_VARCHAR_LENGTH,
        literal_prefix="x'",
        literal_suffix="'",
        create_params="length",
        case_sensitive=True,
        unsigned=True,
    ),
    _type(
        "CHAR",
        JdbcType.BINARY,
        precision=MAX_CHAR_LENGTH,
        literal_prefix="x'",
        literal_suffix="'",
        create_params="length",
        case_sensitive=True,
        unsigned=True,
    ),
    _type(
        "BLOB SUB_TYPE TEXT",
        JdbcType.LONGVARCHAR,
        precision=0,
        literal_prefix="'",
        literal_suffix="'",
        case_sensitive=True,
        unsigned=True,
    ),
    _type(
        "CHAR",
        JdbcType.CHAR,
        precision=MAX_CHAR_LENGTH,
        literal_prefix="'",
        literal_suffix="'",
        create_params="length",
        case_sensitive=True,
        unsigned=True,
    ),
    _type("NUMERIC", JdbcType.NUMERIC, create_params="precision,scale", decimal=True),
    _type("INT128", JdbcType.NUMERIC, field_type=FieldType.INT128, requires="supports_int128"),
    _type("DECIMAL", JdbcType.DECIMAL, create_params="precision,scale", decimal=True),
    _type("INTEGER", JdbcType.INTEGER, field_type=FieldType.LONG),
    _type("SMALLINT", JdbcType.SMALLINT, field_type=FieldType.SHORT),
    _type("FLOAT", JdbcType.FLOAT, field_type=FieldType.FLOAT, fixed_prec_scale=False),
    _type("DOUBLE PRECISION", JdbcType.DOUBLE, field_type=FieldType.DOUBLE, fixed_prec_scale=False),
    _type(
        "VARCHAR",
        JdbcType.VARCHAR,
        precision=MAX_VARCHAR_LENGTH,
        literal_prefix="'",
        literal_suffix="'",
        create_params="length",
        case_sensitive=True,
        unsigned=True,
    ),
    _type(
        "BOOLEAN",
        JdbcType.BOOLEAN,
        field_type=FieldType.BOOLEAN,
        searchable=JDBC_CONSTANTS.typePredBasic,
        unsigned=True,
        requires="supports_boolean",
    ),
    _type("DATE", JdbcType.DATE, field_type=FieldType.DATE, literal_prefix="date'", literal_suffix="'", unsigned=True),
    _type("TIME", JdbcType.TIME, field_type=FieldType.TIME, literal_prefix="time'", literal_suffix="'", unsigned=True),
    _type(
        "TIMESTAMP",
        JdbcType.TIMESTAMP,
        field_type=FieldType.TIMESTAMP,
        literal_prefix="timestamp'",
        literal_suffix="'",
        unsigned=True,
    ),
    _type(
        "ARRAY",
        JdbcType.OTHER,
        precision=0,
        case_sensitive=True,
        searchable=JDBC_CONSTANTS.typePredNone,
        unsigned=True,
    ),
    _type(
        "BLOB SUB_TYPE <0",
        JdbcType.BLOB,
        precision=0,
        case_sensitive=True,
        searchable=JDBC_CONSTANTS.typePredNone,
        unsigned=True,
    ),
    _type(
        "TIME WITH TIME ZONE",
        JdbcType.TIME_WITH_TIMEZONE,
        field_type=FieldType.TIME_TZ,
        literal_prefix="time'",
        literal_suffix="'",
        unsigned=True,
        requires="supports_time_zones",
    ),
    _type(
        "TIMESTAMP WITH TIME ZONE",
        JdbcType.TIMESTAMP_WITH_TIMEZONE,
        field_type=FieldType.TIMESTAMP_TZ,
        literal_prefix="timestamp'",
        literal_suffix="'",
        unsigned=True,
        requires="supports_time_zones",
    ),
]


def max_decimal_precision(capabilities: CapabilitySnapshot) -> int:
    return NUMERIC_INT128_PRECISION if capabilities.supports_int128 else NUMERIC_BIGINT_PRECISION


def _precision_and_radix(type_info: _TypeInfo, capabilities: CapabilitySnapshot):
    if type_info.decimal:
        return max_decimal_precision(capabilities), 10
    elif type_info.field_type is None:
        return type_info.precision, 10

    type_metadata = (
        TypeMetadata.builder(capabilities)
        .with_type(type_info.field_type)
        .with_sub_type(type_info.sub_type if type_info.sub_type is not None else FieldSubType.NONE)
        .with_scale(0)
        .build()
    )

    return type_metadata.column_size, type_metadata.radix


def type_info(capabilities: CapabilitySnapshot, assembler: Optional[RowAssembler] = None) -> list:
    """
    Describes data types supported by the engine; types introduced in later engine versions are omitted when the
    engine does not support them.

    :param capabilities: capabilities of the engine
    :param assembler: optionally specify assembler for MetadataTypeInfoRow to use
    :return: list of MetadataTypeInfoRow sorted by data_type
    """
    assembler = assembler or RowAssembler(MetadataTypeInfoRow)
    rows = []

    for info in _TYPES:
        if info.requires is not None and not getattr(capabilities, info.requires):
            continue

        precision, radix = _precision_and_radix(info, capabilities)
        maximum_scale = precision if info.decimal else 0

        rows.append(
            assembler.at(0)
            .set_string(info.type_name)
            .at(1)
            .set_int(info.data_type)
            .at(2)
            .set_int(precision)
            .at(3)
            .set_string(info.literal_prefix)
            .at(4)
            .set_string(info.literal_suffix)
            .at(5)
            .set_string(info.create_params)
            .at(6)
            .set_short(JDBC_CONSTANTS.typeNullable)
            .at(7)
            .set(info.case_sensitive)
            .at(8)
            .set_short(info.searchable)
            .at(9)
            .set(info.unsigned)
            .at(10)
            .set(info.fixed_prec_scale)
            .at(11)
            .set(False)
            .at(13)
            .set_short(0)
            .at(14)
            .set_short(maximum_scale)
            .at(17)
            .set_int(radix)
            .finalize()
        )

    # stable, keeps NUMERIC before INT128
    return sorted(rows, key=lambda row: row.data_type)
