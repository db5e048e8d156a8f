"""
Envelope construction, parsing and extraction.
"""

import json
from typing import Any, Optional, Union

from pydantic import ValidationError

from cloudkv.errors import EnvelopeDecodeError, FetchError
from cloudkv.models.envelope import DataEnvelope
from cloudkv.models.types import ValueType
from cloudkv.models.value import StoredValue


class FetchResult:
    """Outcome of a read: the envelope to read from, and why it is synthetic if it is."""

    __slots__ = ("envelope", "error")

    def __init__(self, envelope: DataEnvelope, error: Optional[FetchError] = None):
        self.envelope = envelope
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def __repr__(self) -> str:
        if self.error is None:
            return f"FetchResult(ok, key={self.envelope.key_identifier!r})"
        return f"FetchResult(error={self.error.kind!r}, key={self.envelope.key_identifier!r})"


def build_envelope(key: str, user: str, value: StoredValue) -> dict[str, Any]:
    """Build the PUT body for storing `value` as a dict ready for JSON encoding."""
    return DataEnvelope.from_value(key, user, value).to_wire()


def parse_envelope(raw: Union[bytes, str, dict[str, Any]]) -> DataEnvelope:
    """Decode a GET response body. Unknown fields are dropped."""
    try:
        if isinstance(raw, (bytes, str)):
            raw = json.loads(raw)
        return DataEnvelope.model_validate(raw)
    except (ValueError, ValidationError) as e:
        raise EnvelopeDecodeError(f"Malformed envelope: {e}")


def extract(envelope: DataEnvelope, value_type: ValueType, is_array: bool = False) -> Optional[Any]:
    """Return the requested slot, or None when the envelope holds another type or shape.

    Unmapped discriminators still raise UnknownValueType.
    """
    actual = envelope.get_type()
    if envelope.is_array != is_array or actual != value_type:
        return None
    return envelope.to_value().data
