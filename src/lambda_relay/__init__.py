"""
lambda-relay - Forward serverless events to a local HTTP endpoint.

The handler serializes the incoming event to JSON, POSTs it to
http://localhost:8080/ and relays the endpoint's JSON response.

Example:
    import asyncio
    from lambda_relay import Forwarder, ForwardSuccess

    async def main():
        result = await Forwarder().forward({"a": 1})
        if isinstance(result, ForwardSuccess):
            print(result.body)
        else:
            print(f"failed ({result.status}): {result.message}")

    asyncio.run(main())
"""

__version__ = "0.1.0"

from .config import EndpointConfig, RelayConfig, load_config
from .lambda_function import handler, lambda_handler
from .relay import ForwardFailure, Forwarder, ForwardResult, ForwardSuccess, forward_event

__all__ = [
    "__version__",
    "EndpointConfig",
    "RelayConfig",
    "load_config",
    "handler",
    "lambda_handler",
    "Forwarder",
    "forward_event",
    "ForwardSuccess",
    "ForwardFailure",
    "ForwardResult",
]
