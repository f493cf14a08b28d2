"""
Event forwarder.

Serializes an event to JSON, sends it to the configured local endpoint in a
single request and maps the outcome to a ForwardResult:

- body parsed as JSON      -> ForwardSuccess(status=200)
- transport failure        -> ForwardFailure(status=500)
- body is not valid JSON   -> ForwardFailure(status=502)
"""

import json
import logging
from typing import Any

import httpx

from ..config import EndpointConfig
from .result import (
    INVALID_RESPONSE_STATUS,
    TRANSPORT_ERROR_STATUS,
    ForwardFailure,
    ForwardResult,
    ForwardSuccess,
)

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {"Content-Type": "application/json"}


def _error_message(error: Exception) -> str:
    """Exception text, falling back to the class name when it is empty."""
    message = str(error).strip()
    return message or type(error).__name__


class Forwarder:
    """Forwards events to a local HTTP endpoint."""

    def __init__(
        self,
        config: EndpointConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize forwarder.

        Args:
            config: Endpoint settings (defaults to POST http://localhost:8080/)
            transport: Optional httpx transport (used to stub the endpoint)
        """
        self.config = config or EndpointConfig()
        self._transport = transport

    @property
    def url(self) -> str:
        return self.config.url

    def _headers(self) -> dict[str, str]:
        headers = dict(DEFAULT_HEADERS)
        headers.update(self.config.parsed_headers())
        return headers

    def _client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {}
        if self.config.timeout_seconds is not None:
            kwargs["timeout"] = httpx.Timeout(self.config.timeout_seconds)
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.AsyncClient(**kwargs)

    async def forward(self, event: Any) -> ForwardResult:
        """
        Send one event and relay the endpoint's response.

        Args:
            event: JSON-serializable event (ignored when the method is GET)

        Returns:
            ForwardSuccess with the parsed body, or ForwardFailure

        Raises:
            TypeError: If the event is not JSON-serializable
        """
        # GET requests carry no body; the event is only sent with POST
        payload = json.dumps(event) if self.config.method == "POST" else None
        request_headers = self._headers()

        if self.config.verbose:
            _dump_request(self.config.method, self.url, request_headers, payload)

        try:
            async with self._client() as client:
                response = await client.request(
                    self.config.method,
                    self.url,
                    content=payload.encode("utf-8") if payload is not None else None,
                    headers=request_headers,
                )
        except httpx.DecodingError as e:
            message = f"Invalid response body from {self.url}: {_error_message(e)}"
            logger.warning(message)
            return ForwardFailure(message=message, status=INVALID_RESPONSE_STATUS)
        except httpx.TransportError as e:
            message = _error_message(e)
            logger.warning(f"Forward to {self.url} failed: {message}")
            return ForwardFailure(message=message, status=TRANSPORT_ERROR_STATUS)

        if self.config.verbose:
            _dump_response(response)

        try:
            body = json.loads(response.text)
        except json.JSONDecodeError as e:
            message = f"Invalid JSON in response from {self.url}: {e}"
            logger.warning(message)
            return ForwardFailure(message=message, status=INVALID_RESPONSE_STATUS)

        logger.debug(f"Forwarded event to {self.url} (upstream status {response.status_code})")
        return ForwardSuccess(body=body, upstream_status=response.status_code)


async def forward_event(event: Any, config: EndpointConfig | None = None) -> ForwardResult:
    """
    Forward a single event with a one-off Forwarder.

    Args:
        event: JSON-serializable event
        config: Endpoint settings (defaults to POST http://localhost:8080/)

    Returns:
        ForwardResult
    """
    return await Forwarder(config).forward(event)


def _dump_request(method: str, url: str, headers: dict[str, str], payload: str | None) -> None:
    lines = [f"{method} {url}"]
    lines.extend(f"{name}: {value}" for name, value in headers.items())
    lines.extend(["", payload or ""])
    dump = "\n".join(lines)
    logger.info(f"--- Request dump ---\n{dump}\n--- End of request dump ---")


def _dump_response(response: httpx.Response) -> None:
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    lines.extend(["", response.text])
    dump = "\n".join(lines)
    logger.info(f"--- Response dump ---\n{dump}\n--- End of response dump ---")
