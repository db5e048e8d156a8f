"""
cloudkv error types.

InvalidValueShape, UnknownValueType, InvalidKey and NotInitialized always reach the caller.
HttpError, EnvelopeDecodeError and FetchError stay inside the read/write paths.
"""

from typing import Any, Optional


class CloudKVError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class InvalidValueShape(CloudKVError):
    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__("invalid_value_shape", message, details)


class UnknownValueType(CloudKVError):
    def __init__(self, code_value: Any):
        super().__init__("unknown_value_type", f"Unknown value type indicator: {code_value!r}")
        self.code_value = code_value


class InvalidKey(CloudKVError):
    def __init__(self, key: Any):
        super().__init__("invalid_key", f"Key must be a non-empty string, got {key!r}")
        self.key = key


class NotInitialized(CloudKVError):
    def __init__(self, message: str = "Client not initialized. Call init_client() first."):
        super().__init__("not_initialized", message)


class HttpError(CloudKVError):
    def __init__(self, status_code: int, message: str):
        super().__init__("http_error", message, {"status_code": status_code})
        self.status_code = status_code


class EnvelopeDecodeError(CloudKVError):
    def __init__(self, message: str):
        super().__init__("decode_error", message)


class FetchError(CloudKVError):
    """Why a read produced no usable envelope. kind: not_found | transport | decode."""

    NOT_FOUND = "not_found"
    TRANSPORT = "transport"
    DECODE = "decode"

    def __init__(self, kind: str, message: str, cause: Optional[BaseException] = None):
        super().__init__("fetch_error", message, {"kind": kind})
        self.kind = kind
        self.cause = cause
