# (C) 2021 GoodData Corporation
import re
from dataclasses import dataclass
from enum import IntEnum

from catalog_metadata.type_codes import OBJECT_NAME_LENGTH_BEFORE_V4_0, OBJECT_NAME_LENGTH_V4_0

_ENGINE_VERSION = re.compile(r"(\d+)\.(\d+)")


class Generation(IntEnum):
    """
    Generations of the system table layout. Each generation is identified by the engine version that introduced it;
    catalog queries are implemented once per generation.
    """

    FB2_1 = 21
    """no RDB$RELATION_TYPE; names are CHAR padded, flags are 'T'/'F' or 0/1"""

    FB2_5 = 25
    """RDB$RELATION_TYPE available, global temporary tables"""

    FB3 = 30
    """boolean type, identity columns, packages; names trimmed in the queries"""

    FB5 = 50
    """partial indices"""

    FB6 = 60
    """objects live in schemas"""


@dataclass(frozen=True)
class CapabilitySnapshot:
    """
    Immutable snapshot of engine capabilities captured once per connection. All the feature flags are derived
    from the engine version; `catalog_as_package` reflects the connection setting that makes packages available
    as catalogs in routine metadata.
    """

    version_major: int
    version_minor: int = 0
    catalog_as_package: bool = False

    @classmethod
    def for_version(cls, major: int, minor: int = 0, catalog_as_package: bool = False) -> "CapabilitySnapshot":
        return cls(version_major=major, version_minor=minor, catalog_as_package=catalog_as_package)

    @classmethod
    def from_engine_version(cls, engine_version: str, catalog_as_package: bool = False) -> "CapabilitySnapshot":
        """
        Creates snapshot from engine version string such as '3.0.10' or 'WI-V4.0.2.2816 Firebird 4.0'.

        :param engine_version: version string as reported by the engine
        :param catalog_as_package: whether the connection reports packages as catalogs
        :return: new snapshot
        """
        match = _ENGINE_VERSION.search(engine_version or "")

        if match is None:
            raise ValueError(f"unable to parse engine version '{engine_version}'")

        return cls(
            version_major=int(match.group(1)),
            version_minor=int(match.group(2)),
            catalog_as_package=catalog_as_package,
        )

    def is_version_equal_or_above(self, major: int, minor: int = 0) -> bool:
        return (self.version_major, self.version_minor) >= (major, minor)

    @property
    def generation(self) -> Generation:
        if self.is_version_equal_or_above(6):
            return Generation.FB6
        if self.is_version_equal_or_above(5):
            return Generation.FB5
        if self.is_version_equal_or_above(3):
            return Generation.FB3
        if self.is_version_equal_or_above(2, 5):
            return Generation.FB2_5

        return Generation.FB2_1

    @property
    def supports_packages(self) -> bool:
        return self.is_version_equal_or_above(3)

    @property
    def supports_identity_columns(self) -> bool:
        return self.is_version_equal_or_above(3)

    @property
    def supports_boolean(self) -> bool:
        return self.is_version_equal_or_above(3)

    @property
    def supports_record_version_pseudo_column(self) -> bool:
        return self.is_version_equal_or_above(3)

    @property
    def supports_float_binary_precision(self) -> bool:
        """
        Since 4.0 the engine reports precision of FLOAT and DOUBLE PRECISION in binary digits.
        """
        return self.is_version_equal_or_above(4)

    @property
    def supports_int128(self) -> bool:
        return self.is_version_equal_or_above(4)

    @property
    def supports_decfloat(self) -> bool:
        return self.is_version_equal_or_above(4)

    @property
    def supports_time_zones(self) -> bool:
        return self.is_version_equal_or_above(4)

    @property
    def supports_schemas(self) -> bool:
        return self.is_version_equal_or_above(6)

    @property
    def uses_catalog_as_package(self) -> bool:
        """
        Packages are reported as catalogs only if requested and if the engine has packages at all.
        """
        return self.catalog_as_package and self.supports_packages

    @property
    def object_name_length(self) -> int:
        if self.is_version_equal_or_above(4):
            return OBJECT_NAME_LENGTH_V4_0

        return OBJECT_NAME_LENGTH_BEFORE_V4_0
