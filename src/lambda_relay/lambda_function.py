"""
Serverless entry points.

`handler` is the async entry point; `lambda_handler` wraps it for runtimes
that call a synchronous `(event, context)` function.

Endpoint settings come from LAMBDA_RELAY_* environment variables on top of
the defaults (POST http://localhost:8080/).
"""

import asyncio
from typing import Any

from .config import EndpointConfig, default_config
from .relay import Forwarder, ForwardSuccess, to_response
from .utils.logging import StructuredLogger


async def handler(
    event: Any,
    config: EndpointConfig | None = None,
    request_id: str | None = None,
    function_name: str | None = None,
) -> dict[str, Any]:
    """
    Forward an event to the local endpoint and relay its response.

    Args:
        event: Event supplied by the host runtime
        config: Endpoint settings (defaults plus environment overrides)
        request_id: Invocation id for log context
        function_name: Function name for log context

    Returns:
        {"statusCode": int, "body": Any}
    """
    log = StructuredLogger(__name__, function_name=function_name, request_id=request_id)
    forwarder = Forwarder(config or default_config().endpoint)

    log.debug(f"Forwarding event to {forwarder.url}")
    result = await forwarder.forward(event)

    if isinstance(result, ForwardSuccess):
        log.info(f"Relayed response from {forwarder.url}")
    else:
        log.error(f"Forward failed ({result.status}): {result.message}")

    return to_response(result)


def lambda_handler(event: Any, context: Any = None) -> dict[str, Any]:
    """
    Synchronous wrapper for runtimes calling `handler(event, context)`.

    Args:
        event: Event supplied by the host runtime
        context: Runtime context object (aws_request_id and function_name
            are used for logging)

    Returns:
        {"statusCode": int, "body": Any}
    """
    return asyncio.run(
        handler(
            event,
            request_id=getattr(context, "aws_request_id", None),
            function_name=getattr(context, "function_name", None),
        )
    )
