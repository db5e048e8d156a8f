"""
Value type discriminator — the wire codes of valueTypeIndicator.
"""

from enum import IntEnum
from typing import Optional


class ValueType(IntEnum):
    INT32 = 0
    INT64 = 1
    # Reserved for unsigned 32/64-bit, never produced and rejected on read.
    UINT32 = 2
    UINT64 = 3
    BOOLEAN = 4
    FLOAT = 5
    DOUBLE = 6
    STRING = 7
    BYTES = 8


RESERVED_TYPES = frozenset({ValueType.UINT32, ValueType.UINT64})
SUPPORTED_TYPES = frozenset(ValueType) - RESERVED_TYPES

# type -> (scalar field, array field)
SLOTS: dict[ValueType, tuple[str, Optional[str]]] = {
    ValueType.INT32: ("int32_value", "int32_values"),
    ValueType.INT64: ("int64_value", "int64_values"),
    ValueType.BOOLEAN: ("boolean_value", "boolean_values"),
    ValueType.FLOAT: ("float_value", "float_values"),
    ValueType.DOUBLE: ("double_value", "double_values"),
    ValueType.STRING: ("string_value", "string_values"),
    ValueType.BYTES: ("byte_string_value", None),
}


def slot_for(value_type: ValueType, is_array: bool) -> Optional[str]:
    scalar, array = SLOTS[value_type]
    return array if is_array else scalar
