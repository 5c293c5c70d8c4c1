# (C) 2021 GoodData Corporation
import functools
from typing import Any, Callable, Optional

from catalog_metadata.errors import RowAssemblyError, RowBoundsError

_UNSET = object()

_SHORT_MIN = -(2**15)
_SHORT_MAX = 2**15 - 1

DEFAULT_ENCODED_STRING_CACHE_SIZE = 128


class RowAssembler:
    """
    Builds rows of one canonical shape. The shape is given by a namedtuple type; each slot is set by first selecting
    it with `at()` (or `by_name()`) and then calling one of the setters:

    >>> assembler = RowAssembler(MetadataPrimaryKeyRow)
    >>> row = assembler.at(2).set_string("EMPLOYEE").at(3).set_string("EMP_NO").finalize()

    The assembler is reset by `finalize()` so that a single instance can build all rows of one result. Instances are
    not thread safe.
    """

    def __init__(
        self,
        row_type: type,
        encoder: Optional[Callable[[str], Any]] = None,
        cache_size: int = DEFAULT_ENCODED_STRING_CACHE_SIZE,
    ):
        """
        :param row_type: namedtuple type of the rows
        :param encoder: optionally specify function to encode string values; results are kept in LRU cache because
         the same literals repeat across rows
        :param cache_size: size of the cache of encoded strings
        """
        self._row_type = row_type
        self._size = len(row_type._fields)
        self._values = [_UNSET] * self._size
        self._index = None
        self._encode = functools.lru_cache(maxsize=cache_size)(encoder) if encoder is not None else None

    @property
    def row_type(self) -> type:
        return self._row_type

    @property
    def size(self) -> int:
        return self._size

    def at(self, index: int) -> "RowAssembler":
        if not 0 <= index < self._size:
            raise RowBoundsError(f"index {index} out of range for {self._row_type.__name__} of size {self._size}")

        self._index = index
        return self

    def by_name(self, field: str) -> "RowAssembler":
        try:
            return self.at(self._row_type._fields.index(field))
        except ValueError:
            raise RowBoundsError(f"{self._row_type.__name__} has no field {field}")

    def _set_current(self, value: Any) -> "RowAssembler":
        if self._index is None:
            raise RowAssemblyError("no field selected; call at() before setting a value")

        self._values[self._index] = value
        return self

    def set(self, value: Any) -> "RowAssembler":
        return self._set_current(value)

    def set_string(self, value: Optional[str]) -> "RowAssembler":
        if value is not None and self._encode is not None:
            value = self._encode(value)

        return self._set_current(value)

    def set_int(self, value: Optional[int]) -> "RowAssembler":
        return self._set_current(int(value) if value is not None else None)

    def set_short(self, value: Optional[int]) -> "RowAssembler":
        if value is not None:
            value = int(value)

            if not _SHORT_MIN <= value <= _SHORT_MAX:
                raise ValueError(f"value {value} does not fit into short")

        return self._set_current(value)

    def get(self, index: int) -> Any:
        """
        Reads value already set in the row being built; unset slots read as None.
        """
        if not 0 <= index < self._size:
            raise RowBoundsError(f"index {index} out of range for {self._row_type.__name__} of size {self._size}")

        value = self._values[index]

        return None if value is _UNSET else value

    def reset(self) -> None:
        self._values = [_UNSET] * self._size
        self._index = None

    def finalize(self, initialize_remaining: bool = True):
        """
        Creates row from the values set so far and resets the assembler.

        :param initialize_remaining: when true, slots that were not set are null in the row; when false, all slots
         must have been set
        :return: new instance of the row type
        """
        if not initialize_remaining and any(value is _UNSET for value in self._values):
            unset = [self._row_type._fields[idx] for idx, value in enumerate(self._values) if value is _UNSET]
            self.reset()

            raise RowAssemblyError(f"{self._row_type.__name__} has unset fields: {', '.join(unset)}")

        row = self._row_type(*(None if value is _UNSET else value for value in self._values))
        self.reset()

        return row
