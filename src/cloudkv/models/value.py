"""
StoredValue — one typed value, scalar or array, with exactly one active kind.
"""

import math
import struct
from typing import Any, Iterable

from cloudkv.errors import InvalidValueShape, UnknownValueType
from cloudkv.models.types import RESERVED_TYPES, ValueType

INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1
FLOAT32_MAX = 3.4028234663852886e38


def type_name(v: Any) -> str:
    return type(v).__name__


def _to_int(v: Any, lo: int, hi: int, kind: str) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise InvalidValueShape(f"{kind} value must be an int, got {type_name(v)}")
    if not lo <= v <= hi:
        raise InvalidValueShape(f"{v} is out of range for {kind}")
    return v


def _to_bool(v: Any) -> bool:
    if not isinstance(v, bool):
        raise InvalidValueShape(f"Boolean value must be a bool, got {type_name(v)}")
    return v


def _to_double(v: Any) -> float:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise InvalidValueShape(f"Double value must be a number, got {type_name(v)}")
    return float(v)


def _to_float32(v: Any) -> float:
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise InvalidValueShape(f"Float value must be a number, got {type_name(v)}")
    if math.isnan(v) or math.isinf(v):
        return float(v)
    try:
        return struct.unpack("<f", struct.pack("<f", v))[0]
    except OverflowError:
        raise InvalidValueShape(f"{v} is out of range for Float")


def _to_str(v: Any) -> str:
    if not isinstance(v, str):
        raise InvalidValueShape(f"String value must be a str, got {type_name(v)}")
    return v


def _to_bytes(v: Any) -> bytes:
    if not isinstance(v, (bytes, bytearray, memoryview)):
        raise InvalidValueShape(f"Bytes value must be bytes, got {type_name(v)}")
    return bytes(v)


_CONVERTERS = {
    ValueType.INT32: lambda v: _to_int(v, INT32_MIN, INT32_MAX, "Int32"),
    ValueType.INT64: lambda v: _to_int(v, INT64_MIN, INT64_MAX, "Int64"),
    ValueType.BOOLEAN: _to_bool,
    ValueType.FLOAT: _to_float32,
    ValueType.DOUBLE: _to_double,
    ValueType.STRING: _to_str,
    ValueType.BYTES: _to_bytes,
}


class StoredValue:
    """A single stored item: its type, its shape and its data.

    Construction validates the data against the type, so an instance always
    has exactly one meaningful slot. Bytes cannot be stored as an array.
    """

    __slots__ = ("type", "is_array", "data")

    def __init__(self, type: ValueType, data: Any, is_array: bool = False):
        try:
            type = ValueType(type)
        except ValueError:
            raise UnknownValueType(type)
        if type in RESERVED_TYPES:
            raise UnknownValueType(int(type))
        if type is ValueType.BYTES and is_array:
            raise InvalidValueShape("Bytes values cannot be stored as an array")

        convert = _CONVERTERS[type]
        if is_array:
            if not isinstance(data, (list, tuple)):
                raise InvalidValueShape(f"Array value must be a list, got {type_name(data)}")
            data = [convert(item) for item in data]
        else:
            data = convert(data)

        self.type = type
        self.is_array = is_array
        self.data = data

    @classmethod
    def int32(cls, value: int) -> "StoredValue":
        return cls(ValueType.INT32, value)

    @classmethod
    def int64(cls, value: int) -> "StoredValue":
        return cls(ValueType.INT64, value)

    @classmethod
    def boolean(cls, value: bool) -> "StoredValue":
        return cls(ValueType.BOOLEAN, value)

    @classmethod
    def float32(cls, value: float) -> "StoredValue":
        return cls(ValueType.FLOAT, value)

    @classmethod
    def float64(cls, value: float) -> "StoredValue":
        return cls(ValueType.DOUBLE, value)

    @classmethod
    def string(cls, value: str) -> "StoredValue":
        return cls(ValueType.STRING, value)

    @classmethod
    def bytes_(cls, value: bytes) -> "StoredValue":
        return cls(ValueType.BYTES, value)

    @classmethod
    def array(cls, element_type: ValueType, values: Iterable[Any]) -> "StoredValue":
        if not isinstance(values, (list, tuple, str, bytes, bytearray)):
            values = list(values)
        return cls(element_type, values, is_array=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StoredValue):
            return NotImplemented
        return (self.type, self.is_array, self.data) == (other.type, other.is_array, other.data)

    def __hash__(self) -> int:
        data = tuple(self.data) if self.is_array else self.data
        return hash((self.type, self.is_array, data))

    def __repr__(self) -> str:
        shape = "[]" if self.is_array else ""
        return f"StoredValue({self.type.name}{shape}, {self.data!r})"
