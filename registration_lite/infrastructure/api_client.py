"""
Async client for the ordering API.

Every call resolves to an explicit result instead of raising:
  ApiSuccess(body)                         - 2xx
  ApiFailure(status_code, body, timeout)   - anything else

Classification of failures is left to the calling service, since the same
status means different things at different call sites.
"""

import time
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx

from registration_lite.core.config import get_settings
from registration_lite.core.logging import get_logger
from registration_lite.core.metrics import record_api_request

logger = get_logger(__name__)


@dataclass(frozen=True)
class ApiSuccess:
    body: Any = None
    status_code: int = 200


@dataclass(frozen=True)
class ApiFailure:
    status_code: Optional[int] = None
    body: Any = None
    timeout: bool = False

    @property
    def message(self) -> str:
        """Server-provided human readable message, verbatim."""
        if isinstance(self.body, dict):
            return str(self.body.get("message") or "")
        return ""


ApiResult = Union[ApiSuccess, ApiFailure]


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return {"message": response.text}


class ApiClient:
    """Thin wrapper over httpx.AsyncClient bound to the ordering API base URL."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.REQUEST_TIMEOUT,
            transport=transport,
        )

    async def get(self, url: str, params: Optional[dict] = None) -> ApiResult:
        return await self._request("GET", url, params=params)

    async def post(self, url: str, body: Any = None, params: Optional[dict] = None) -> ApiResult:
        return await self._request("POST", url, params=params, json=body)

    async def put(self, url: str, body: Any = None, params: Optional[dict] = None) -> ApiResult:
        return await self._request("PUT", url, params=params, json=body)

    async def delete(self, url: str, params: Optional[dict] = None) -> ApiResult:
        return await self._request("DELETE", url, params=params)

    async def _request(self, method: str, url: str, **kwargs) -> ApiResult:
        start_time = time.perf_counter()
        try:
            response = await self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            record_api_request(method, "timeout", time.perf_counter() - start_time)
            logger.warning("api_request_timeout", method=method, url=url, error=str(e))
            return ApiFailure(timeout=True)
        except httpx.TransportError as e:
            record_api_request(method, "failure", time.perf_counter() - start_time)
            logger.error("api_request_transport_error", method=method, url=url, error=str(e))
            return ApiFailure(body={"message": str(e)})

        duration = time.perf_counter() - start_time
        body = _decode(response)

        if response.is_success:
            record_api_request(method, "success", duration)
            logger.debug("api_request_completed", method=method, url=url, status_code=response.status_code)
            return ApiSuccess(body=body, status_code=response.status_code)

        record_api_request(method, "failure", duration)
        logger.info("api_request_failed", method=method, url=url, status_code=response.status_code)
        return ApiFailure(status_code=response.status_code, body=body)

    async def aclose(self) -> None:
        await self._client.aclose()
