"""Translate HTTP responses into ApiResponseEnvelope values."""

import json
import logging
from collections.abc import Mapping
from typing import Any

import aiohttp
from pydantic import BaseModel, ValidationError

from onenote.envelope import ApiResponseEnvelope
from onenote.exceptions import MalformedResponseBodyError, UnexpectedStatusError
from onenote.models import ODataCollection

logger = logging.getLogger(__name__)

CORRELATION_ID_HEADER = "X-CorrelationId"


def _header(headers: Mapping[str, str] | None, name: str) -> str:
    """Case-insensitive header lookup returning "" when absent."""
    if not headers:
        return ""
    value = headers.get(name)
    if value is None:
        lowered = name.lower()
        for key, candidate in headers.items():
            if key.lower() == lowered:
                value = candidate
                break
    return value or ""


def decode_body(raw: bytes, charset: str | None = None) -> str:
    """Decode a response body, replacing bytes that are invalid in its charset."""
    try:
        return raw.decode(charset or "utf-8", errors="replace")
    except LookupError:
        # Unknown charset name in Content-Type
        return raw.decode("utf-8", errors="replace")


def _parse_entity(body: str, entity_shape: type[BaseModel]) -> Any:
    data = json.loads(body)
    if isinstance(entity_shape, type) and issubclass(entity_shape, ODataCollection):
        return entity_shape.model_validate(data).value
    return entity_shape.model_validate(data)


def build_envelope(
    status_code: int,
    headers: Mapping[str, str] | None,
    body: str,
    expected_status: int,
    entity_shape: type[BaseModel] | None = None,
) -> ApiResponseEnvelope:
    """
    Build an envelope from the parts of an HTTP response.

    Args:
        status_code: Actual HTTP status
        headers: Response headers
        body: Full response body text
        expected_status: Documented success status for the call
        entity_shape: Model to parse the body into on success. An
            ODataCollection subclass yields the list of its ``value`` items.
            None keeps the body as text only.

    Returns:
        ApiResponseEnvelope. Never raises for a bad status or body.
    """
    correlation_id = _header(headers, CORRELATION_ID_HEADER)
    body = body or ""
    envelope = ApiResponseEnvelope(
        status_code=status_code,
        correlation_id=correlation_id,
        body=body,
        expected_status=expected_status,
    )

    if status_code != expected_status:
        envelope.error = UnexpectedStatusError(
            f"Expected HTTP {expected_status}, got {status_code}",
            status_code=status_code,
            expected_status=expected_status,
            correlation_id=correlation_id,
            body=body,
        )
        return envelope

    if entity_shape is None or not body.strip():
        return envelope

    try:
        envelope.entity = _parse_entity(body, entity_shape)
    except (ValueError, ValidationError) as e:
        # json.JSONDecodeError is a ValueError
        envelope.error = MalformedResponseBodyError(
            f"Response body is not a valid {entity_shape.__name__}",
            status_code=status_code,
            correlation_id=correlation_id,
            body=body,
            cause=e,
        )
        logger.warning(
            "Malformed response body",
            extra={
                "http_status": status_code,
                "correlation_id": correlation_id or None,
                "error_type": type(e).__name__,
            },
        )

    return envelope


async def translate_response(
    response: aiohttp.ClientResponse,
    expected_status: int,
    entity_shape: type[BaseModel] | None = None,
) -> ApiResponseEnvelope:
    """Read the response body once and build its envelope."""
    body = decode_body(await response.read(), response.charset)
    return build_envelope(response.status, response.headers, body, expected_status, entity_shape)


__all__ = ["CORRELATION_ID_HEADER", "build_envelope", "decode_body", "translate_response"]
