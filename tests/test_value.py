"""StoredValue construction rules."""

import pytest

from cloudkv import InvalidValueShape, StoredValue, UnknownValueType, ValueType


def test_scalar_constructors():
    assert StoredValue.int32(7).data == 7
    assert StoredValue.int64(2 ** 63 - 1).data == 2 ** 63 - 1
    assert StoredValue.boolean(False).data is False
    assert StoredValue.float32(1.5).data == 1.5
    assert StoredValue.float64(0.1).data == 0.1
    assert StoredValue.string("").data == ""
    assert StoredValue.bytes_(bytearray(b"\x01")).data == b"\x01"


def test_float32_rounds_to_single_precision():
    v = StoredValue.float32(0.1)
    assert v.data != 0.1
    assert abs(v.data - 0.1) < 1e-7


def test_array_normalizes_to_list():
    v = StoredValue.array(ValueType.INT32, (1, 2, 3))
    assert v.is_array
    assert v.data == [1, 2, 3]
    assert StoredValue.array(ValueType.STRING, iter(["a"])).data == ["a"]


@pytest.mark.parametrize("payload", [b"", b"\x00", b"abc"])
def test_bytes_array_is_rejected(payload):
    with pytest.raises(InvalidValueShape):
        StoredValue(ValueType.BYTES, [payload], is_array=True)


@pytest.mark.parametrize("code", [ValueType.UINT32, ValueType.UINT64, 2, 3, 9, -1])
def test_reserved_and_unmapped_types_are_rejected(code):
    with pytest.raises(UnknownValueType):
        StoredValue(code, 0)


@pytest.mark.parametrize(
    "value_type,data",
    [
        (ValueType.INT32, 2 ** 31),
        (ValueType.INT32, -(2 ** 31) - 1),
        (ValueType.INT64, 2 ** 63),
        (ValueType.INT32, True),
        (ValueType.INT32, 1.0),
        (ValueType.BOOLEAN, 1),
        (ValueType.DOUBLE, "1.0"),
        (ValueType.FLOAT, 1e39),
        (ValueType.STRING, b"bytes"),
        (ValueType.BYTES, "text"),
    ],
)
def test_wrong_data_is_rejected(value_type, data):
    with pytest.raises(InvalidValueShape):
        StoredValue(value_type, data)


def test_array_requires_a_list():
    with pytest.raises(InvalidValueShape):
        StoredValue(ValueType.STRING, "abc", is_array=True)
    with pytest.raises(InvalidValueShape):
        StoredValue(ValueType.INT32, [1, "2"], is_array=True)


def test_equality_and_repr():
    assert StoredValue.int32(1) == StoredValue(ValueType.INT32, 1)
    assert StoredValue.int32(1) != StoredValue.int64(1)
    assert StoredValue.int32(1) != StoredValue.array(ValueType.INT32, [1])
    assert hash(StoredValue.array(ValueType.INT32, [1])) == hash(StoredValue.array(ValueType.INT32, [1]))
    assert repr(StoredValue.array(ValueType.STRING, ["x"])) == "StoredValue(STRING[], ['x'])"
