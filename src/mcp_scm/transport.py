"""HTTP transport used by the provider drivers."""

from __future__ import annotations

import logging
from typing import Any, Protocol

import httpx

from .config import ScmConfig
from .exceptions import ScmApiError, ScmAuthError, ScmDecodeError, ScmNotFoundError
from .models.common import Response
from .pagination import page_from_link_header

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Executes one request and returns ``(parsed_json, envelope)``.

    Implementations must be safe for concurrent in-flight calls.
    """

    async def do(
        self,
        method: str,
        path: str,
        *,
        json_data: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> tuple[Any, Response]: ...

    async def close(self) -> None: ...


def _auth_headers(config: ScmConfig) -> dict[str, str]:
    if config.driver == "github":
        return {
            "Authorization": f"token {config.token}",
            "Accept": "application/vnd.github+json",
        }
    return {"Authorization": f"Bearer {config.token}"}


class HttpTransport:
    """Async HTTP transport backed by a shared ``httpx.AsyncClient``."""

    def __init__(self, config: ScmConfig, client: httpx.AsyncClient | None = None) -> None:
        self.config = config
        self._client = client or httpx.AsyncClient(
            base_url=config.api_url.rstrip("/") + "/",
            headers={**_auth_headers(config), "Content-Type": "application/json"},
            timeout=config.timeout,
            verify=config.ssl_verify,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def do(
        self,
        method: str,
        path: str,
        *,
        json_data: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> tuple[Any, Response]:
        """Make an API request and return parsed JSON plus the response envelope."""
        kwargs: dict[str, Any] = {"params": params, "headers": headers or {}}
        if json_data is not None:
            kwargs["json"] = json_data

        logger.debug("%s %s", method, path)
        resp = await self._client.request(method, path.lstrip("/"), **kwargs)
        logger.debug("%s %s -> %d", method, path, resp.status_code)

        if resp.status_code in (401, 403):
            raise ScmAuthError(resp.status_code, resp.text)
        if resp.status_code == 404:
            raise ScmNotFoundError(resp.text)
        if not resp.is_success:
            raise ScmApiError(resp.status_code, resp.reason_phrase or "", resp.text)

        envelope = Response(
            status=resp.status_code,
            headers=dict(resp.headers),
            page=page_from_link_header(resp.headers.get("link")),
        )

        if resp.status_code == 204 or not resp.content:
            return None, envelope

        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            msg = "Unexpected HTML response — check URL and authentication"
            raise ScmApiError(resp.status_code, msg, resp.text[:500])

        try:
            return resp.json(), envelope
        except ValueError as e:
            msg = f"JSON parse error: {e}"
            raise ScmDecodeError(msg) from e
