"""HTTP client for the course-assistant admin REST backend.

Wraps ``httpx.AsyncClient`` with:
- base URL + API prefix construction
- mapping of transport failures and non-2xx responses onto
  :class:`~errors.NetworkError` / :class:`~errors.ValidationError`
- request timing logs
- connection-pool lifecycle tied to FastAPI lifespan

No retry and no response caching: failures reach the caller unmodified and
every call hits the backend.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from config.settings import get_settings
from errors import NetworkError, ValidationError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------
_client: AdminClient | None = None


class AdminClient:
    """Async HTTP client for the admin backend."""

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        settings = get_settings()
        self._base_url = f"{settings.admin_api_base_url.rstrip('/')}{settings.admin_api_prefix}"
        self._timeout = settings.admin_api_timeout
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    # -- lifecycle -----------------------------------------------------------

    async def start(self) -> None:
        """Create the underlying ``httpx.AsyncClient`` connection pool."""
        if self._http is not None:
            return
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            headers={"Content-Type": "application/json"},
            transport=self._transport,
            limits=httpx.Limits(
                max_connections=10,
                max_keepalive_connections=5,
                keepalive_expiry=30,
            ),
        )
        logger.info("AdminClient started — base_url=%s", self._base_url)

    async def close(self) -> None:
        """Gracefully close the connection pool."""
        if self._http is not None:
            await self._http.aclose()
            self._http = None
            logger.info("AdminClient closed")

    @property
    def started(self) -> bool:
        return self._http is not None

    # -- public API ----------------------------------------------------------

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Send a GET request and return the decoded JSON body."""
        response = await self._send("GET", path, params=params)
        return _decode(response)

    async def get_bytes(self, path: str, params: dict[str, Any] | None = None) -> bytes:
        """Send a GET request and return the raw body (file downloads)."""
        response = await self._send("GET", path, params=params)
        return response.content

    async def post(self, path: str, json_body: Any = None) -> Any:
        """Send a POST request with a JSON body."""
        response = await self._send("POST", path, json_body=json_body)
        return _decode(response)

    async def put(self, path: str, json_body: Any = None) -> Any:
        """Send a PUT request with a JSON body."""
        response = await self._send("PUT", path, json_body=json_body)
        return _decode(response)

    async def delete(self, path: str) -> None:
        """Send a DELETE request; the response body is ignored."""
        await self._send("DELETE", path)

    # -- internals -----------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
    ) -> httpx.Response:
        """Execute one HTTP request and map failures onto the error taxonomy.

        - ``httpx.TransportError`` → :class:`NetworkError` with no status
        - 4xx → :class:`ValidationError` carrying the response text
        - any other non-2xx (1xx, 3xx, 5xx) → :class:`NetworkError`
        """
        client = self._ensure_started()
        t0 = time.monotonic()
        try:
            response = await client.request(method, path, params=params, json=json_body)
        except httpx.TransportError as exc:
            elapsed_ms = (time.monotonic() - t0) * 1000
            logger.warning(
                "%s %s → network error (%.0fms): %s", method, path, elapsed_ms, exc,
            )
            raise NetworkError(None, str(exc) or type(exc).__name__, url=path) from exc

        elapsed_ms = (time.monotonic() - t0) * 1000
        logger.info(
            "%s %s → %d (%.0fms)", method, path, response.status_code, elapsed_ms,
        )

        if 400 <= response.status_code < 500:
            raise ValidationError(
                _error_detail(response),
                status_code=response.status_code,
                url=str(response.url),
            )
        if not 200 <= response.status_code < 300:
            raise NetworkError(
                response.status_code,
                _error_detail(response),
                url=str(response.url),
            )
        return response

    def _ensure_started(self) -> httpx.AsyncClient:
        if self._http is None:
            raise RuntimeError("AdminClient not started — call await client.start() first")
        return self._http


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise NetworkError(
            response.status_code, "malformed JSON body", url=str(response.url),
        ) from exc


def _error_detail(response: httpx.Response) -> str:
    """The backend reports errors as a bare JSON string; fall back to raw text."""
    if not response.content:
        return f"HTTP {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        return response.text[:500]
    if isinstance(body, str):
        return body
    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            if isinstance(body.get(key), str):
                return body[key]
    return response.text[:500]


# ---------------------------------------------------------------------------
# Singleton accessor
# ---------------------------------------------------------------------------

def get_admin_client() -> AdminClient:
    """Return the module-level AdminClient singleton (create if needed)."""
    global _client
    if _client is None:
        _client = AdminClient()
    return _client
