"""
REST HTTP client for the key-value service.
"""

from typing import Any, Optional

import httpx

from cloudkv.errors import HttpError

DEFAULT_BASE_URL = "https://kv.kevinc.ltd"
DATA_PATH = "/data/manageData"
DEFAULT_TIMEOUT = 10.0


class HttpClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        app_id: Optional[str] = None,
        app_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._app_id = app_id
        self._app_key = app_key
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"User-Agent": "cloudkv-sdk/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            trust_env=False,
            transport=transport,
        )

    def set_credentials(self, app_id: str, app_key: str) -> None:
        self._app_id = app_id
        self._app_key = app_key

    def _auth_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self._app_id is not None:
            headers["X-AppId"] = self._app_id
        if self._app_key is not None:
            headers["X-AppKey"] = self._app_key
        return headers

    @staticmethod
    def _check(resp: httpx.Response) -> httpx.Response:
        if not resp.is_success:
            raise HttpError(resp.status_code, f"HTTP {resp.status_code}: {resp.text[:200]}")
        return resp

    async def get(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        resp = await self._client.get(path, params=params, headers=self._auth_headers())
        return self._check(resp).json()

    async def put(self, path: str, body: Optional[dict[str, Any]] = None) -> None:
        resp = await self._client.put(path, json=body, headers=self._auth_headers())
        self._check(resp)

    async def delete(self, path: str, params: Optional[dict[str, str]] = None) -> None:
        resp = await self._client.delete(path, params=params, headers=self._auth_headers())
        self._check(resp)

    async def close(self) -> None:
        await self._client.aclose()
