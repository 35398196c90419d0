from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import httpx

from ..core.constants import DEFAULT_REQUEST_TIMEOUT_SECONDS, STORE_UNAVAILABLE_CODE, STORE_UNAVAILABLE_MARKER
from ..core.enums import FailureKind
from ..core.exceptions import NetworkUnreachableError, RemoteProtocolError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteResponse:
    status_code: int
    payload: Any = None
    text: str = ""
    is_json: bool = True

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class Transport(Protocol):
    async def request(
        self,
        method: str,
        path: str,
        *,
        token: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> RemoteResponse:
        raise NotImplementedError

    async def aclose(self) -> None:
        raise NotImplementedError


class HttpxTransport:
    """Transport over ``httpx.AsyncClient``.

    Network-level failures (no response) are raised as NetworkUnreachableError,
    unreadable responses as RemoteProtocolError;
    every HTTP response, error or not, is returned as a RemoteResponse.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout)

    async def request(
        self,
        method: str,
        path: str,
        *,
        token: str,
        params: Optional[dict] = None,
        json: Optional[dict] = None,
    ) -> RemoteResponse:
        headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}
        try:
            resp = await self._client.request(method, path, params=params, json=json, headers=headers)
        except httpx.TransportError as e:
            logger.debug("%s %s: no response (%s)", method, path, e.__class__.__name__)
            raise NetworkUnreachableError(str(e) or e.__class__.__name__) from e
        except httpx.HTTPError as e:
            logger.debug("%s %s: unreadable response (%s)", method, path, e.__class__.__name__)
            raise RemoteProtocolError(str(e) or e.__class__.__name__) from e

        try:
            payload, is_json = resp.json(), True
        except ValueError:
            payload, is_json = None, False
        return RemoteResponse(status_code=resp.status_code, payload=payload, text=resp.text, is_json=is_json)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def error_message(response: RemoteResponse) -> str:
    if isinstance(response.payload, dict) and response.payload.get("error"):
        return str(response.payload["error"])
    if response.text:
        return response.text
    return f"HTTP {response.status_code}"


def classify_failure(response: RemoteResponse) -> Optional[FailureKind]:
    """Return ``None`` for a success, else how the failure should be treated.

    The typed error code wins; the marker text is only a fallback for stores
    that do not send a code.
    """

    if response.ok:
        return None

    code = response.payload.get("code") if isinstance(response.payload, dict) else None
    if code == STORE_UNAVAILABLE_CODE:
        return FailureKind.TRANSIENT
    if STORE_UNAVAILABLE_MARKER in error_message(response).lower():
        return FailureKind.TRANSIENT
    return FailureKind.TERMINAL
