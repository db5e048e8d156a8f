"""
cloudkv — typed client for a per-user cloud key-value store.

Values of every supported type travel in one tagged JSON envelope over HTTP.
"""

from cloudkv.client import AsyncKVClient, KVClient
from cloudkv.errors import (
    CloudKVError,
    EnvelopeDecodeError,
    FetchError,
    HttpError,
    InvalidKey,
    InvalidValueShape,
    NotInitialized,
    UnknownValueType,
)
from cloudkv.models.envelope import DataEnvelope
from cloudkv.models.types import ValueType
from cloudkv.models.value import StoredValue
from cloudkv.transport.envelope import FetchResult

__version__ = "0.1.0"
__all__ = [
    "AsyncKVClient",
    "KVClient",
    "CloudKVError",
    "EnvelopeDecodeError",
    "FetchError",
    "HttpError",
    "InvalidKey",
    "InvalidValueShape",
    "NotInitialized",
    "UnknownValueType",
    "DataEnvelope",
    "ValueType",
    "StoredValue",
    "FetchResult",
]
