# (C) 2021 GoodData Corporation
from enum import IntEnum


class FieldType(IntEnum):
    """
    Type codes stored in RDB$FIELDS.RDB$FIELD_TYPE.
    """

    SHORT = 7
    LONG = 8
    QUAD = 9
    FLOAT = 10
    D_FLOAT = 11
    DATE = 12
    TIME = 13
    TEXT = 14
    INT64 = 16
    BOOLEAN = 23
    DEC16 = 24
    DEC34 = 25
    INT128 = 26
    DOUBLE = 27
    TIME_TZ = 28
    TIMESTAMP_TZ = 29
    TIME_TZ_EX = 30
    TIMESTAMP_TZ_EX = 31
    TIMESTAMP = 35
    VARYING = 37
    CSTRING = 40
    BLOB_ID = 45
    BLOB = 261


class FieldSubType(IntEnum):
    """
    Sub types stored in RDB$FIELDS.RDB$FIELD_SUB_TYPE. The meaning depends on the field type: exact numerics
    use NUMERIC and DECIMAL, blobs use BINARY and TEXT.
    """

    NONE = 0
    NUMERIC = 1
    DECIMAL = 2
    BLOB_BINARY = 0
    BLOB_TEXT = 1


class JdbcType(IntEnum):
    """
    Type codes as defined by java.sql.Types; reported in the DATA_TYPE column of the metadata results.
    """

    NULL = 0
    CHAR = 1
    NUMERIC = 2
    DECIMAL = 3
    INTEGER = 4
    SMALLINT = 5
    FLOAT = 6
    REAL = 7
    DOUBLE = 8
    VARCHAR = 12
    BOOLEAN = 16
    DATE = 91
    TIME = 92
    TIMESTAMP = 93
    LONGVARCHAR = -1
    BINARY = -2
    VARBINARY = -3
    LONGVARBINARY = -4
    BIGINT = -5
    ROWID = -8
    OTHER = 1111
    ARRAY = 2003
    BLOB = 2004
    TIME_WITH_TIMEZONE = 2013
    TIMESTAMP_WITH_TIMEZONE = 2014
    DECFLOAT = -6001
    """vendor specific code, java.sql.Types has no decfloat"""


CS_BINARY = 1
"""character set id of OCTETS; character columns in this set are reported as binary"""

RADIX_BINARY = 2
RADIX_DECIMAL = 10

FLOAT_BINARY_PRECISION = 24
FLOAT_DECIMAL_PRECISION = 7
DOUBLE_BINARY_PRECISION = 53
DOUBLE_DECIMAL_PRECISION = 15

SMALLINT_PRECISION = 5
INTEGER_PRECISION = 10
BIGINT_PRECISION = 19
BOOLEAN_PRECISION = 1

NUMERIC_SMALLINT_PRECISION = 4
NUMERIC_INTEGER_PRECISION = 9
NUMERIC_BIGINT_PRECISION = 18
NUMERIC_INT128_PRECISION = 38

DECFLOAT_16_PRECISION = 16
DECFLOAT_34_PRECISION = 34

# display length of the textual representation, fractions use four digits
DATE_PRECISION = 10
TIME_PRECISION = 13
TIMESTAMP_PRECISION = 24
TIME_WITH_TIMEZONE_PRECISION = 19
TIMESTAMP_WITH_TIMEZONE_PRECISION = 30

OBJECT_NAME_LENGTH_BEFORE_V4_0 = 31
OBJECT_NAME_LENGTH_V4_0 = 63

DB_KEY_LENGTH = 8
