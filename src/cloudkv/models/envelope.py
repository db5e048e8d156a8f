"""
DataEnvelope — the flat wire structure stored under one key.

Every slot is always present; valueTypeIndicator and isArray select the
one that carries meaning.
"""

import base64
import binascii
import math
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator

from cloudkv.errors import InvalidValueShape, UnknownValueType
from cloudkv.models.types import RESERVED_TYPES, SUPPORTED_TYPES, ValueType, slot_for
from cloudkv.models.value import FLOAT32_MAX, INT32_MAX, INT32_MIN, INT64_MAX, INT64_MIN, StoredValue


def _check_float32(v: float) -> float:
    if math.isfinite(v) and abs(v) > FLOAT32_MAX:
        raise ValueError(f"{v} is out of range for Float")
    return v


Int32 = Annotated[int, Field(ge=INT32_MIN, le=INT32_MAX)]
Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]
Float32 = Annotated[float, AfterValidator(_check_float32)]


class DataEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    is_array: bool = Field(alias="isArray")
    key_identifier: str = Field(alias="keyIdentifier", min_length=1)
    user_identifier: str = Field(alias="userIdentifier", min_length=1)

    int32_value: Int32 = Field(0, alias="int32Value")
    int64_value: Int64 = Field(0, alias="int64Value")
    boolean_value: bool = Field(False, alias="booleanValue")
    float_value: Float32 = Field(0.0, alias="floatValue")
    double_value: float = Field(0.0, alias="doubleValue")
    string_value: str = Field("", alias="stringValue")
    byte_string_value: str = Field("", alias="byteStringValue")  # base64

    int32_values: list[Int32] = Field(default_factory=list, alias="int32Values")
    int64_values: list[Int64] = Field(default_factory=list, alias="int64Values")
    boolean_values: list[bool] = Field(default_factory=list, alias="booleanValues")
    float_values: list[Float32] = Field(default_factory=list, alias="floatValues")
    double_values: list[float] = Field(default_factory=list, alias="doubleValues")
    string_values: list[str] = Field(default_factory=list, alias="stringValues")

    value_type_indicator: int = Field(0, alias="valueTypeIndicator")

    @field_validator("byte_string_value")
    @classmethod
    def _check_base64(cls, v: str) -> str:
        if v:
            try:
                base64.b64decode(v, validate=True)
            except (binascii.Error, ValueError):
                raise ValueError("byteStringValue is not valid base64")
        return v

    @classmethod
    def not_found(cls, key: str, user: str) -> "DataEnvelope":
        """The empty envelope standing in for a key the server could not return."""
        return cls(is_array=False, key_identifier=key, user_identifier=user)

    @classmethod
    def from_value(cls, key: str, user: str, value: StoredValue) -> "DataEnvelope":
        """Build the envelope for writing `value` under (key, user)."""
        envelope = cls(is_array=value.is_array, key_identifier=key, user_identifier=user)
        if value.type is ValueType.BYTES:
            envelope.encode_byte_string(value.data)
        else:
            setattr(envelope, slot_for(value.type, value.is_array), value.data)
            envelope.set_type(value.type)
        return envelope

    def get_type(self) -> ValueType:
        code = self.value_type_indicator
        if code not in SUPPORTED_TYPES:
            raise UnknownValueType(code)
        value_type = ValueType(code)
        if value_type is ValueType.BYTES and self.is_array:
            raise InvalidValueShape("Bytes values cannot be stored as an array")
        return value_type

    def set_type(self, value_type: ValueType) -> None:
        if value_type in RESERVED_TYPES or value_type not in SUPPORTED_TYPES:
            raise UnknownValueType(int(value_type))
        if value_type is ValueType.BYTES and self.is_array:
            raise InvalidValueShape("Bytes values cannot be stored as an array")
        self.value_type_indicator = int(value_type)

    def encode_byte_string(self, data: bytes) -> None:
        self.set_type(ValueType.BYTES)
        self.byte_string_value = base64.b64encode(bytes(data)).decode("ascii")

    def extract_byte_string(self) -> bytes:
        return base64.b64decode(self.byte_string_value)

    def to_value(self) -> StoredValue:
        """Read the active slot back into a StoredValue."""
        value_type = self.get_type()
        if value_type is ValueType.BYTES:
            return StoredValue(value_type, self.extract_byte_string())
        return StoredValue(value_type, getattr(self, slot_for(value_type, self.is_array)), self.is_array)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
