"""Async OneNote REST client: bearer auth, timeouts, retry and translation."""

import logging
import time
from dataclasses import replace
from collections.abc import Callable
from typing import Any

import aiohttp
from pydantic import BaseModel

from core.errors import OneNoteError, TransientError
from core.logging import log_exception, set_log_context
from core.oauth2 import AuthenticationFailedError, AuthFacade, AuthProvider
from core.resilience import DEFAULT_RETRY, RetryConfig, call_with_retry
from onenote.envelope import ApiResponseEnvelope
from onenote.translator import build_envelope, decode_body

logger = logging.getLogger(__name__)

JSON = "application/json"
HTML = "text/html"

# Methods safe to resend after an unclassified failure
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "PUT", "DELETE"})


class OneNoteClient:
    """
    Async client for the OneNote REST API.

    Every request gets a bearer token from the AuthFacade first, then is sent
    with a per-request timeout. Connection failures and timeouts are retried
    with backoff; HTTP statuses are never retried here. POST and PATCH are
    retried only on transient network failures, never on unclassified ones.
    The response is translated into an ApiResponseEnvelope. Only
    authentication failures and sends that never got a response produce an
    envelope with ``status_code=0``.

    Usage:
        async with OneNoteClient(facade, AuthProvider.O365, config.api.api_route) as client:
            envelope = await client.request("GET", "notebooks", 200, ODataCollection[GenericEntity])
    """

    def __init__(
        self,
        auth: AuthFacade,
        provider: AuthProvider | str,
        api_route: str,
        session: aiohttp.ClientSession | None = None,
        timeout_seconds: float = 30.0,
        retry: RetryConfig | None = None,
    ):
        if not api_route.startswith(("http://", "https://")):
            raise ValueError(f"api_route must start with http:// or https://, got: {api_route!r}")

        self.auth = auth
        self.provider = AuthProvider.parse(provider)
        self.api_route = api_route if api_route.endswith("/") else api_route + "/"
        self.timeout_seconds = timeout_seconds
        self.retry = retry or DEFAULT_RETRY

        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "OneNoteClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    @property
    def beta_route(self) -> str:
        return self.api_route.replace("/v1.0/", "/beta/")

    def url_for(self, resource: str, beta: bool = False) -> str:
        route = self.beta_route if beta else self.api_route
        return f"{route}{resource.lstrip('/')}"

    async def request(
        self,
        method: str,
        resource: str,
        expected_status: int,
        entity_shape: type[BaseModel] | None = None,
        params: dict[str, str] | None = None,
        json: Any = None,
        data: Any | Callable[[], Any] = None,
        content_type: str | None = None,
        accept: str = JSON,
        beta: bool = False,
    ) -> ApiResponseEnvelope:
        """
        Send one API request and translate the response.

        Args:
            method: HTTP method
            resource: Path below the API route, e.g. "notebooks"
            expected_status: Documented success status (200 GET, 201 create,
                202 copy, 204 PATCH/DELETE)
            entity_shape: Model for the success body, None for body-only calls
            params: Query string parameters
            json: JSON payload (sets Content-Type application/json)
            data: Raw payload, or a zero-argument callable building a fresh
                payload per attempt (multipart bodies cannot be resent)
            content_type: Content-Type for ``data``
            accept: Accept header (default application/json)
            beta: Send to the beta route instead of the configured one

        Returns:
            ApiResponseEnvelope
        """
        url = self.url_for(resource, beta=beta)
        set_log_context(provider=self.provider.value, operation=f"{method} {resource}")

        auth_result = await self.auth.get_auth_result(self.provider)
        if not auth_result.ok:
            error = auth_result.error or AuthenticationFailedError(
                f"No token for {self.provider.value}"
            )
            logger.warning(
                "Skipping API call, not authenticated",
                extra={"http_method": method, "resource": resource, "provider": self.provider.value},
            )
            return ApiResponseEnvelope(status_code=0, expected_status=expected_status, error=error)

        headers = {
            "Accept": accept,
            "Authorization": f"Bearer {auth_result.token}",
        }
        if content_type:
            headers["Content-Type"] = content_type

        retry = self.retry
        if method.upper() not in IDEMPOTENT_METHODS:
            retry = replace(retry, retry_unknown=False)

        start = time.monotonic()
        try:
            status, response_headers, body = await call_with_retry(
                self._send, method, url, headers, params, json, data, config=retry
            )
        except OneNoteError as e:
            log_exception(
                logger,
                e,
                "API request failed without a response",
                include_traceback=False,
                http_method=method,
                http_url=url,
                duration_ms=round((time.monotonic() - start) * 1000, 1),
            )
            return ApiResponseEnvelope(status_code=0, expected_status=expected_status, error=e)

        envelope = build_envelope(status, response_headers, body, expected_status, entity_shape)
        set_log_context(correlation_id=envelope.correlation_id)

        entity = envelope.entity
        logger.log(
            logging.INFO if envelope.ok else logging.WARNING,
            "API call complete" if envelope.ok else "API call returned unexpected status",
            extra={
                "http_method": method,
                "http_url": url,
                "http_status": status,
                "expected_status": expected_status,
                "correlation_id": envelope.correlation_id or None,
                "duration_ms": round((time.monotonic() - start) * 1000, 1),
                "entity_count": len(entity) if isinstance(entity, list) else None,
            },
        )
        return envelope

    async def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        params: dict[str, str] | None,
        json: Any,
        data: Any,
    ) -> tuple[int, dict[str, str], str]:
        session = await self._ensure_session()
        payload = data() if callable(data) else data
        try:
            async with session.request(
                method,
                url,
                params=params,
                json=json,
                data=payload,
                headers=headers,
                timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
            ) as response:
                body = decode_body(await response.read(), response.charset)
                return response.status, dict(response.headers), body
        except TimeoutError as e:
            raise TransientError(
                f"Timeout after {self.timeout_seconds}s: {method} {url}",
                cause=e,
                context={"error_type": "timeout"},
            ) from e
        except aiohttp.ClientError as e:
            raise TransientError(f"Connection error: {e}", cause=e) from e


__all__ = ["OneNoteClient", "JSON", "HTML", "IDEMPOTENT_METHODS"]
