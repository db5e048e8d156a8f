"""
AsyncKVClient / KVClient — typed access to the per-user key-value store.
"""

import asyncio
import logging
from typing import Any, Optional

import httpx

from cloudkv.errors import EnvelopeDecodeError, FetchError, HttpError, InvalidKey, NotInitialized
from cloudkv.models.envelope import DataEnvelope
from cloudkv.models.types import ValueType
from cloudkv.models.value import StoredValue
from cloudkv.transport.envelope import FetchResult, build_envelope, extract, parse_envelope
from cloudkv.transport.http import DATA_PATH, DEFAULT_BASE_URL, DEFAULT_TIMEOUT, HttpClient

logger = logging.getLogger(__name__)


class AsyncKVClient:
    """Async key-value client (primary).

    Reads never raise on network or decoding problems: the getter returns None.
    Writes and deletes log such failures and return normally. Invalid values,
    empty keys and unknown type indicators always raise.
    """

    def __init__(
        self,
        app_id: Optional[str] = None,
        app_key: Optional[str] = None,
        user_name: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._app_id: Optional[str] = None
        self._app_key: Optional[str] = None
        self._user_name: Optional[str] = None
        self.http = HttpClient(base_url=base_url, timeout=timeout, transport=transport)
        if app_id and app_key and user_name:
            self.init_client(app_id, app_key, user_name)

    def init_client(self, app_id: str, app_key: str, user_name: str) -> None:
        """Set the credentials and the user all later calls act for."""
        if not app_id or not app_key or not user_name:
            raise NotInitialized("app_id, app_key and user_name are all required.")
        self._app_id = app_id
        self._app_key = app_key
        self._user_name = user_name
        self.http.set_credentials(app_id, app_key)

    @property
    def initialized(self) -> bool:
        return bool(self._app_id and self._app_key and self._user_name)

    @property
    def user_name(self) -> Optional[str]:
        return self._user_name

    async def __aenter__(self) -> "AsyncKVClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        await self.http.close()

    # -- raw envelope operations --

    async def fetch(self, key: str) -> FetchResult:
        """GET one key. Failures come back as a not-found envelope plus the reason."""
        user = self._ensure_initialized(key)
        try:
            raw = await self.http.get(DATA_PATH, params={"key": key, "user": user})
            envelope = parse_envelope(raw)
        except HttpError as e:
            kind = FetchError.NOT_FOUND if e.status_code == 404 else FetchError.TRANSPORT
            return self._not_found(key, user, kind, e)
        except httpx.HTTPError as e:
            return self._not_found(key, user, FetchError.TRANSPORT, e)
        except (EnvelopeDecodeError, ValueError) as e:
            return self._not_found(key, user, FetchError.DECODE, e)
        logger.debug("Fetched %s (type=%s)", key, envelope.value_type_indicator)
        return FetchResult(envelope)

    async def get_value(self, key: str) -> Optional[StoredValue]:
        result = await self.fetch(key)
        if not result.ok:
            return None
        return result.envelope.to_value()

    async def put_value(self, key: str, value: StoredValue) -> None:
        """PUT one value. Transport failures are logged, not raised."""
        user = self._ensure_initialized(key)
        body = build_envelope(key, user, value)
        try:
            await self.http.put(DATA_PATH, body)
        except (HttpError, httpx.HTTPError) as e:
            logger.warning("KeyUpdateFailed: %s (%s)", key, e)
            return
        logger.debug("Stored %s as %r", key, value)

    async def delete_key(self, key: str) -> None:
        """DELETE one key. Transport failures are logged, not raised."""
        user = self._ensure_initialized(key)
        try:
            await self.http.delete(DATA_PATH, params={"key": key, "user": user})
        except (HttpError, httpx.HTTPError) as e:
            logger.warning("KeyDeleteFailed: %s (%s)", key, e)
            return
        logger.debug("Deleted %s", key)

    # -- scalars --

    async def get_int(self, key: str) -> Optional[int]:
        return await self._get(key, ValueType.INT32)

    async def set_int(self, key: str, value: int) -> None:
        await self.put_value(key, StoredValue.int32(value))

    async def get_long(self, key: str) -> Optional[int]:
        return await self._get(key, ValueType.INT64)

    async def set_long(self, key: str, value: int) -> None:
        await self.put_value(key, StoredValue.int64(value))

    async def get_boolean(self, key: str) -> Optional[bool]:
        return await self._get(key, ValueType.BOOLEAN)

    async def set_boolean(self, key: str, value: bool) -> None:
        await self.put_value(key, StoredValue.boolean(value))

    async def get_float(self, key: str) -> Optional[float]:
        return await self._get(key, ValueType.FLOAT)

    async def set_float(self, key: str, value: float) -> None:
        await self.put_value(key, StoredValue.float32(value))

    async def get_double(self, key: str) -> Optional[float]:
        return await self._get(key, ValueType.DOUBLE)

    async def set_double(self, key: str, value: float) -> None:
        await self.put_value(key, StoredValue.float64(value))

    async def get_string(self, key: str) -> Optional[str]:
        return await self._get(key, ValueType.STRING)

    async def set_string(self, key: str, value: str) -> None:
        await self.put_value(key, StoredValue.string(value))

    async def get_byte_array(self, key: str) -> Optional[bytes]:
        return await self._get(key, ValueType.BYTES)

    async def set_byte_array(self, key: str, value: bytes) -> None:
        await self.put_value(key, StoredValue.bytes_(value))

    # -- arrays (no byte-string arrays) --

    async def get_int_array(self, key: str) -> Optional[list[int]]:
        return await self._get(key, ValueType.INT32, is_array=True)

    async def set_int_array(self, key: str, value: list[int]) -> None:
        await self.put_value(key, StoredValue.array(ValueType.INT32, value))

    async def get_long_array(self, key: str) -> Optional[list[int]]:
        return await self._get(key, ValueType.INT64, is_array=True)

    async def set_long_array(self, key: str, value: list[int]) -> None:
        await self.put_value(key, StoredValue.array(ValueType.INT64, value))

    async def get_boolean_array(self, key: str) -> Optional[list[bool]]:
        return await self._get(key, ValueType.BOOLEAN, is_array=True)

    async def set_boolean_array(self, key: str, value: list[bool]) -> None:
        await self.put_value(key, StoredValue.array(ValueType.BOOLEAN, value))

    async def get_float_array(self, key: str) -> Optional[list[float]]:
        return await self._get(key, ValueType.FLOAT, is_array=True)

    async def set_float_array(self, key: str, value: list[float]) -> None:
        await self.put_value(key, StoredValue.array(ValueType.FLOAT, value))

    async def get_double_array(self, key: str) -> Optional[list[float]]:
        return await self._get(key, ValueType.DOUBLE, is_array=True)

    async def set_double_array(self, key: str, value: list[float]) -> None:
        await self.put_value(key, StoredValue.array(ValueType.DOUBLE, value))

    async def get_string_array(self, key: str) -> Optional[list[str]]:
        return await self._get(key, ValueType.STRING, is_array=True)

    async def set_string_array(self, key: str, value: list[str]) -> None:
        await self.put_value(key, StoredValue.array(ValueType.STRING, value))

    # -- internals --

    async def _get(self, key: str, value_type: ValueType, is_array: bool = False) -> Optional[Any]:
        result = await self.fetch(key)
        # A failed fetch is absent even for Int32, whose code the synthetic envelope carries.
        if not result.ok:
            return None
        return extract(result.envelope, value_type, is_array)

    def _not_found(self, key: str, user: str, kind: str, cause: Exception) -> FetchResult:
        logger.warning("KeyDoesNotExist: %s (%s: %s)", key, kind, cause)
        error = FetchError(kind, f"Fetch of {key!r} failed: {cause}", cause=cause)
        return FetchResult(DataEnvelope.not_found(key, user), error)

    def _ensure_initialized(self, key: str) -> str:
        if not self.initialized:
            raise NotInitialized()
        if not isinstance(key, str) or not key:
            raise InvalidKey(key)
        return self._user_name  # type: ignore[return-value]


class KVClient:
    """Sync wrapper around AsyncKVClient. Runs the event loop internally."""

    def __init__(self, **kwargs: Any):
        self._async = AsyncKVClient(**kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    def __enter__(self) -> "KVClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def initialized(self) -> bool:
        return self._async.initialized

    def init_client(self, app_id: str, app_key: str, user_name: str) -> None:
        self._async.init_client(app_id, app_key, user_name)

    def close(self) -> None:
        if not self._loop.is_closed():
            self._run(self._async.close())
            self._loop.close()

    def fetch(self, key: str) -> FetchResult:
        return self._run(self._async.fetch(key))

    def get_value(self, key: str) -> Optional[StoredValue]:
        return self._run(self._async.get_value(key))

    def put_value(self, key: str, value: StoredValue) -> None:
        self._run(self._async.put_value(key, value))

    def delete_key(self, key: str) -> None:
        self._run(self._async.delete_key(key))

    def get_int(self, key: str) -> Optional[int]:
        return self._run(self._async.get_int(key))

    def set_int(self, key: str, value: int) -> None:
        self._run(self._async.set_int(key, value))

    def get_long(self, key: str) -> Optional[int]:
        return self._run(self._async.get_long(key))

    def set_long(self, key: str, value: int) -> None:
        self._run(self._async.set_long(key, value))

    def get_boolean(self, key: str) -> Optional[bool]:
        return self._run(self._async.get_boolean(key))

    def set_boolean(self, key: str, value: bool) -> None:
        self._run(self._async.set_boolean(key, value))

    def get_float(self, key: str) -> Optional[float]:
        return self._run(self._async.get_float(key))

    def set_float(self, key: str, value: float) -> None:
        self._run(self._async.set_float(key, value))

    def get_double(self, key: str) -> Optional[float]:
        return self._run(self._async.get_double(key))

    def set_double(self, key: str, value: float) -> None:
        self._run(self._async.set_double(key, value))

    def get_string(self, key: str) -> Optional[str]:
        return self._run(self._async.get_string(key))

    def set_string(self, key: str, value: str) -> None:
        self._run(self._async.set_string(key, value))

    def get_byte_array(self, key: str) -> Optional[bytes]:
        return self._run(self._async.get_byte_array(key))

    def set_byte_array(self, key: str, value: bytes) -> None:
        self._run(self._async.set_byte_array(key, value))

    def get_int_array(self, key: str) -> Optional[list[int]]:
        return self._run(self._async.get_int_array(key))

    def set_int_array(self, key: str, value: list[int]) -> None:
        self._run(self._async.set_int_array(key, value))

    def get_long_array(self, key: str) -> Optional[list[int]]:
        return self._run(self._async.get_long_array(key))

    def set_long_array(self, key: str, value: list[int]) -> None:
        self._run(self._async.set_long_array(key, value))

    def get_boolean_array(self, key: str) -> Optional[list[bool]]:
        return self._run(self._async.get_boolean_array(key))

    def set_boolean_array(self, key: str, value: list[bool]) -> None:
        self._run(self._async.set_boolean_array(key, value))

    def get_float_array(self, key: str) -> Optional[list[float]]:
        return self._run(self._async.get_float_array(key))

    def set_float_array(self, key: str, value: list[float]) -> None:
        self._run(self._async.set_float_array(key, value))

    def get_double_array(self, key: str) -> Optional[list[float]]:
        return self._run(self._async.get_double_array(key))

    def set_double_array(self, key: str, value: list[float]) -> None:
        self._run(self._async.set_double_array(key, value))

    def get_string_array(self, key: str) -> Optional[list[str]]:
        return self._run(self._async.get_string_array(key))

    def set_string_array(self, key: str, value: list[str]) -> None:
        self._run(self._async.set_string_array(key, value))
