# (C) 2021 GoodData Corporation
from typing import Any, Mapping, Optional

from catalog_metadata.capabilities import CapabilitySnapshot
from catalog_metadata.errors import TypeLadderError
from catalog_metadata.type_codes import (
    BIGINT_PRECISION,
    BOOLEAN_PRECISION,
    CS_BINARY,
    DATE_PRECISION,
    DECFLOAT_16_PRECISION,
    DECFLOAT_34_PRECISION,
    DOUBLE_BINARY_PRECISION,
    DOUBLE_DECIMAL_PRECISION,
    FLOAT_BINARY_PRECISION,
    FLOAT_DECIMAL_PRECISION,
    INTEGER_PRECISION,
    NUMERIC_BIGINT_PRECISION,
    NUMERIC_INT128_PRECISION,
    NUMERIC_INTEGER_PRECISION,
    NUMERIC_SMALLINT_PRECISION,
    RADIX_BINARY,
    RADIX_DECIMAL,
    SMALLINT_PRECISION,
    TIME_PRECISION,
    TIME_WITH_TIMEZONE_PRECISION,
    TIMESTAMP_PRECISION,
    TIMESTAMP_WITH_TIMEZONE_PRECISION,
    FieldSubType,
    FieldType,
    JdbcType,
)

_CHARACTER_TYPES = frozenset([FieldType.TEXT, FieldType.VARYING, FieldType.CSTRING])

_EXACT_NUMERIC_TYPES = frozenset([FieldType.SHORT, FieldType.LONG, FieldType.INT64, FieldType.INT128])

_APPROXIMATE_NUMERIC_TYPES = frozenset([FieldType.DOUBLE, FieldType.D_FLOAT])

_NUMERIC_PRECISION_LADDER = {
    FieldType.SHORT: NUMERIC_SMALLINT_PRECISION,
    FieldType.LONG: NUMERIC_INTEGER_PRECISION,
    FieldType.INT64: NUMERIC_BIGINT_PRECISION,
    FieldType.DOUBLE: NUMERIC_BIGINT_PRECISION,
    FieldType.D_FLOAT: NUMERIC_BIGINT_PRECISION,
    FieldType.INT128: NUMERIC_INT128_PRECISION,
}

_DECFLOAT_PRECISION_LADDER = {
    FieldType.DEC16: DECFLOAT_16_PRECISION,
    FieldType.DEC34: DECFLOAT_34_PRECISION,
}

_FIXED_COLUMN_SIZES = {
    JdbcType.SMALLINT: SMALLINT_PRECISION,
    JdbcType.INTEGER: INTEGER_PRECISION,
    JdbcType.BIGINT: BIGINT_PRECISION,
    JdbcType.BOOLEAN: BOOLEAN_PRECISION,
    JdbcType.DATE: DATE_PRECISION,
    JdbcType.TIME: TIME_PRECISION,
    JdbcType.TIMESTAMP: TIMESTAMP_PRECISION,
    JdbcType.TIME_WITH_TIMEZONE: TIME_WITH_TIMEZONE_PRECISION,
    JdbcType.TIMESTAMP_WITH_TIMEZONE: TIMESTAMP_WITH_TIMEZONE_PRECISION,
}

_SIMPLE_TYPES = {
    FieldType.FLOAT: (JdbcType.FLOAT, "FLOAT"),
    FieldType.TEXT: (JdbcType.CHAR, "CHAR"),
    FieldType.VARYING: (JdbcType.VARCHAR, "VARCHAR"),
    FieldType.CSTRING: (JdbcType.VARCHAR, "VARCHAR"),
    FieldType.DATE: (JdbcType.DATE, "DATE"),
    FieldType.TIME: (JdbcType.TIME, "TIME"),
    FieldType.TIMESTAMP: (JdbcType.TIMESTAMP, "TIMESTAMP"),
    FieldType.TIME_TZ: (JdbcType.TIME_WITH_TIMEZONE, "TIME WITH TIME ZONE"),
    FieldType.TIME_TZ_EX: (JdbcType.TIME_WITH_TIMEZONE, "TIME WITH TIME ZONE"),
    FieldType.TIMESTAMP_TZ: (JdbcType.TIMESTAMP_WITH_TIMEZONE, "TIMESTAMP WITH TIME ZONE"),
    FieldType.TIMESTAMP_TZ_EX: (JdbcType.TIMESTAMP_WITH_TIMEZONE, "TIMESTAMP WITH TIME ZONE"),
    FieldType.BOOLEAN: (JdbcType.BOOLEAN, "BOOLEAN"),
    FieldType.DEC16: (JdbcType.DECFLOAT, "DECFLOAT"),
    FieldType.DEC34: (JdbcType.DECFLOAT, "DECFLOAT"),
}

_EXACT_NUMERIC_NAMES = {
    FieldType.SHORT: (JdbcType.SMALLINT, "SMALLINT"),
    FieldType.LONG: (JdbcType.INTEGER, "INTEGER"),
    FieldType.INT64: (JdbcType.BIGINT, "BIGINT"),
    FieldType.INT128: (JdbcType.NUMERIC, "INT128"),
}


def _scaled_numeric(sub_type: Optional[int], scale: Optional[int]) -> Optional[tuple[JdbcType, str]]:
    if sub_type == FieldSubType.NUMERIC or (not sub_type and (scale or 0) < 0):
        return JdbcType.NUMERIC, "NUMERIC"
    elif sub_type == FieldSubType.DECIMAL:
        return JdbcType.DECIMAL, "DECIMAL"

    return None


def _lookup(field_type: int, sub_type: Optional[int], scale: Optional[int]) -> tuple[JdbcType, str]:
    if field_type in _EXACT_NUMERIC_TYPES:
        return _scaled_numeric(sub_type, scale) or _EXACT_NUMERIC_NAMES[field_type]
    elif field_type in _APPROXIMATE_NUMERIC_TYPES:
        # dialect 1 stores NUMERIC and DECIMAL with precision above 9 as double
        return _scaled_numeric(sub_type, scale) or (JdbcType.DOUBLE, "DOUBLE PRECISION")
    elif field_type == FieldType.BLOB:
        blob_sub_type = sub_type or 0
        if blob_sub_type < 0:
            return JdbcType.BLOB, f"BLOB SUB_TYPE {blob_sub_type}"
        elif blob_sub_type == FieldSubType.BLOB_BINARY:
            return JdbcType.LONGVARBINARY, "BLOB SUB_TYPE BINARY"
        elif blob_sub_type == FieldSubType.BLOB_TEXT:
            return JdbcType.LONGVARCHAR, "BLOB SUB_TYPE TEXT"

        return JdbcType.OTHER, f"BLOB SUB_TYPE {blob_sub_type}"

    return _SIMPLE_TYPES.get(field_type, (JdbcType.NULL, "NULL"))


def get_data_type(
    field_type: int, sub_type: Optional[int], scale: Optional[int], character_set_id: Optional[int] = None
) -> JdbcType:
    """
    Maps engine type description onto java.sql.Types code.

    :param field_type: RDB$FIELD_TYPE
    :param sub_type: RDB$FIELD_SUB_TYPE (may be None)
    :param scale: RDB$FIELD_SCALE (may be None)
    :param character_set_id: RDB$CHARACTER_SET_ID (may be None); OCTETS turns character types into binary types
    :return: java.sql.Types code
    """
    jdbc_type, _ = _lookup(field_type, sub_type, scale)

    if character_set_id == CS_BINARY:
        if jdbc_type == JdbcType.CHAR:
            return JdbcType.BINARY
        elif jdbc_type == JdbcType.VARCHAR:
            return JdbcType.VARBINARY

    return jdbc_type


def get_data_type_name(field_type: int, sub_type: Optional[int], scale: Optional[int]) -> str:
    _, name = _lookup(field_type, sub_type, scale)

    return name


class TypeMetadata:
    """
    Canonical description of a column, parameter or domain type derived from the raw type information stored in
    the system tables. Instances are immutable; use `TypeMetadata.builder()` to create them.
    """

    def __init__(
        self,
        field_type: int,
        sub_type: Optional[int],
        precision: Optional[int],
        scale: Optional[int],
        character_set_id: Optional[int],
        field_length: Optional[int],
        character_length: Optional[int],
        float_binary_precision: bool,
    ):
        self._type = field_type
        self._sub_type = sub_type
        self._precision = precision
        self._scale = scale
        self._character_set_id = character_set_id
        self._field_length = field_length
        if character_length is None and field_type in _CHARACTER_TYPES:
            character_length = field_length
        self._character_length = character_length
        self._float_binary_precision = float_binary_precision

    @staticmethod
    def builder(capabilities: Optional[CapabilitySnapshot] = None) -> "TypeMetadataBuilder":
        return TypeMetadataBuilder(
            float_binary_precision=capabilities is not None and capabilities.supports_float_binary_precision
        )

    @property
    def type(self) -> int:
        return self._type

    @property
    def sub_type(self) -> Optional[int]:
        return self._sub_type

    @property
    def length(self) -> Optional[int]:
        return self._field_length

    @property
    def character_length(self) -> Optional[int]:
        return self._character_length

    @property
    def jdbc_type(self) -> JdbcType:
        return get_data_type(self._type, self._sub_type, self._scale, self._character_set_id)

    @property
    def sql_type_name(self) -> str:
        return get_data_type_name(self._type, self._sub_type, self._scale)

    @property
    def column_size(self) -> Optional[int]:
        """
        Column size as defined for COLUMN_SIZE in JDBC metadata: maximum precision of numeric types, length in
        characters of character types and length of the textual representation of temporal types.

        :return: column size, None if not applicable
        """
        jdbc_type = self.jdbc_type

        if jdbc_type == JdbcType.FLOAT:
            return FLOAT_BINARY_PRECISION if self._float_binary_precision else FLOAT_DECIMAL_PRECISION
        elif jdbc_type == JdbcType.DOUBLE:
            return DOUBLE_BINARY_PRECISION if self._float_binary_precision else DOUBLE_DECIMAL_PRECISION
        elif jdbc_type in (JdbcType.CHAR, JdbcType.VARCHAR, JdbcType.BINARY, JdbcType.VARBINARY):
            return self._character_length
        elif jdbc_type in (JdbcType.NUMERIC, JdbcType.DECIMAL):
            return self._numeric_precision()
        elif jdbc_type == JdbcType.DECFLOAT:
            if self._type not in _DECFLOAT_PRECISION_LADDER:
                raise TypeLadderError(f"no DECFLOAT precision for storage type {self._type}")

            return _DECFLOAT_PRECISION_LADDER[self._type]
        elif jdbc_type in _FIXED_COLUMN_SIZES:
            return _FIXED_COLUMN_SIZES[jdbc_type]

        return self._precision or None

    def _numeric_precision(self) -> int:
        if self._type not in _NUMERIC_PRECISION_LADDER:
            raise TypeLadderError(f"no NUMERIC/DECIMAL precision for storage type {self._type}")

        # plain INT128 is stored with precision 0
        return self._precision or _NUMERIC_PRECISION_LADDER[self._type]

    @property
    def decimal_digits(self) -> Optional[int]:
        jdbc_type = self.jdbc_type

        if jdbc_type in (JdbcType.SMALLINT, JdbcType.INTEGER, JdbcType.BIGINT):
            return 0
        elif jdbc_type in (JdbcType.NUMERIC, JdbcType.DECIMAL):
            # engine stores scale as negative exponent
            return -(self._scale or 0)

        return self._scale or None

    @property
    def radix(self) -> int:
        jdbc_type = self.jdbc_type

        if jdbc_type in (JdbcType.FLOAT, JdbcType.DOUBLE):
            return RADIX_BINARY if self._float_binary_precision else RADIX_DECIMAL
        elif jdbc_type == JdbcType.BOOLEAN:
            return RADIX_BINARY

        return RADIX_DECIMAL

    @property
    def char_octet_length(self) -> Optional[int]:
        if self._type in _CHARACTER_TYPES:
            return self._field_length

        return None

    def __repr__(self):
        return (
            f"TypeMetadata(type={self._type}, sub_type={self._sub_type}, precision={self._precision}, "
            f"scale={self._scale}, character_set_id={self._character_set_id})"
        )


class TypeMetadataBuilder:
    def __init__(self, float_binary_precision: bool = False):
        self._float_binary_precision = float_binary_precision
        self._type = None
        self._sub_type = None
        self._precision = None
        self._scale = None
        self._character_set_id = None
        self._field_length = None
        self._character_length = None

    def with_type(self, field_type: Optional[int]) -> "TypeMetadataBuilder":
        self._type = field_type
        return self

    def with_sub_type(self, sub_type: Optional[int]) -> "TypeMetadataBuilder":
        self._sub_type = sub_type
        return self

    def with_precision(self, precision: Optional[int]) -> "TypeMetadataBuilder":
        self._precision = precision
        return self

    def with_scale(self, scale: Optional[int]) -> "TypeMetadataBuilder":
        self._scale = scale
        return self

    def with_character_set_id(self, character_set_id: Optional[int]) -> "TypeMetadataBuilder":
        self._character_set_id = character_set_id
        return self

    def with_field_length(self, field_length: Optional[int]) -> "TypeMetadataBuilder":
        self._field_length = field_length
        return self

    def with_character_length(self, character_length: Optional[int]) -> "TypeMetadataBuilder":
        self._character_length = character_length
        return self

    def from_row(self, row: Mapping[str, Any]) -> "TypeMetadataBuilder":
        """
        Reads raw type information from a row of a metadata query. The query is expected to project the
        columns FIELD_TYPE, FIELD_SUB_TYPE, FIELD_PRECISION, FIELD_SCALE, FIELD_LENGTH, CHAR_LEN and
        CHARACTER_SET_ID; missing columns are treated as null.

        :param row: row to read from
        :return: this builder
        """
        return (
            self.with_type(row.get("FIELD_TYPE"))
            .with_sub_type(row.get("FIELD_SUB_TYPE"))
            .with_precision(row.get("FIELD_PRECISION"))
            .with_scale(row.get("FIELD_SCALE"))
            .with_field_length(row.get("FIELD_LENGTH"))
            .with_character_length(row.get("CHAR_LEN"))
            .with_character_set_id(row.get("CHARACTER_SET_ID"))
        )

    def build(self) -> TypeMetadata:
        if not self._type:
            raise ValueError("type must be set to a non-zero type code")

        return TypeMetadata(
            field_type=self._type,
            sub_type=self._sub_type,
            precision=self._precision,
            scale=self._scale,
            character_set_id=self._character_set_id,
            field_length=self._field_length,
            character_length=self._character_length,
            float_binary_precision=self._float_binary_precision,
        )
