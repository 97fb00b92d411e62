"""Authenticated HTTP session shared by every resource group."""

from typing import Any, Optional

import httpx
from opentelemetry.trace import SpanKind

from mailosaur_client import __version__
from mailosaur_client.config import ClientSettings
from mailosaur_client.errors import TransportError, ValidationError, error_from_response
from mailosaur_client.utils.logger import get_logger
from mailosaur_client.utils.tracing import get_tracer

logger = get_logger("mailosaur_client.session")

USER_AGENT = f"mailosaur-client-python/{__version__}"


def require_id(value: str, what: str) -> str:
    """Reject empty ids locally so they never turn into a list-all or malformed path."""
    if not value or not str(value).strip():
        raise ValidationError(f"{what} must not be empty")
    return str(value).strip()


def _decode_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        request = response.request
        logger.warning("session.response.not_json", path=request.url.path, status=response.status_code)
        raise TransportError(
            f"{request.method} {request.url.path} returned a non-JSON body",
            status_code=response.status_code,
            details=response.text or None,
        ) from e


class ApiSession:
    """Wraps one ``httpx.AsyncClient`` configured with base URL, basic auth and timeouts.

    ``transport`` is passed straight to httpx; tests use it to plug in an
    ``httpx.MockTransport``.
    """

    def __init__(
        self,
        settings: ClientSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._settings = settings
        self._http = httpx.AsyncClient(
            base_url=settings.base_url,
            auth=httpx.BasicAuth(settings.api_key.get_secret_value(), ""),
            headers={"User-Agent": USER_AGENT, "Accept": "application/json"},
            timeout=httpx.Timeout(settings.request_timeout),
            limits=httpx.Limits(max_keepalive_connections=10, max_connections=20),
            transport=transport,
        )
        logger.debug("session.init", base_url=settings.base_url)

    @property
    def closed(self) -> bool:
        return self._http.is_closed

    async def close(self) -> None:
        await self._http.aclose()

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict[str, Any]] = None,
        json: Any = None,
    ) -> httpx.Response:
        """Send one request; return the response on 2xx, raise a MailosaurError otherwise."""
        tracer = get_tracer()
        with tracer.start_as_current_span(
            f"mailosaur.{method.lower()}",
            kind=SpanKind.CLIENT,
            attributes={"http.method": method, "mailosaur.path": path},
        ) as span:
            try:
                response = await self._http.request(method, path, params=params, json=json)
            except httpx.TimeoutException as e:
                logger.warning("session.request.timeout", method=method, path=path)
                raise TransportError(f"{method} {path} timed out") from e
            except httpx.RequestError as e:
                logger.warning(
                    "session.request.error",
                    method=method,
                    path=path,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise TransportError(f"{method} {path} failed: {e}") from e

            span.set_attribute("http.status_code", response.status_code)
            logger.debug("session.request", method=method, path=path, status=response.status_code)
            if response.is_success:
                return response
            raise error_from_response(response)

    async def get_json(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        response = await self.request("GET", path, params=params)
        return _decode_json(response)

    async def get_bytes(self, path: str) -> bytes:
        response = await self.request("GET", path)
        return response.content

    async def post_json(self, path: str, body: Any, params: Optional[dict[str, Any]] = None) -> Any:
        response = await self.request("POST", path, params=params, json=body)
        return _decode_json(response)

    async def delete(self, path: str, params: Optional[dict[str, Any]] = None) -> None:
        await self.request("DELETE", path, params=params)
