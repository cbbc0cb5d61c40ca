"""Outbound HTTP for notification backends."""

import logging
from dataclasses import dataclass, field
from typing import Optional, Union

import httpx

from opnotify.errors import DeliveryError

logger = logging.getLogger(__name__)


@dataclass
class ChannelPayload:
    """Represents the HTTP request a backend issues."""
    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None  # JSON string
    form: Optional[dict[str, str]] = None
    auth: Optional[tuple[str, str]] = None


async def send_payload(
    backend: str,
    payload: ChannelPayload,
    timeout: Optional[float] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.Response:
    """
    Issue exactly one HTTP request for a payload.

    Raises DeliveryError on transport errors and on any status >= 400.
    ``timeout=None`` leaves the call unbounded.
    """
    if not payload.url:
        raise DeliveryError(backend, "no destination URL configured")

    request_kwargs: dict[str, Union[str, dict, tuple]] = {"headers": payload.headers}
    if payload.body is not None:
        request_kwargs["content"] = payload.body
    if payload.form is not None:
        request_kwargs["data"] = payload.form
    if payload.auth is not None:
        request_kwargs["auth"] = payload.auth

    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.request(payload.method, payload.url, **request_kwargs)
    except httpx.HTTPError as e:
        raise DeliveryError(backend, f"{type(e).__name__}: {e}") from e

    if response.status_code >= 400:
        raise DeliveryError(backend, f"status {response.status_code}: {response.text[:200]}")

    logger.debug("%s accepted notification with status %s", backend, response.status_code)
    return response
