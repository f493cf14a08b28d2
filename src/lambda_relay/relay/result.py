"""
Result types returned by the forwarder.

A forward either succeeds with a parsed JSON body or fails with a message.
Callers branch on `result.ok` (or isinstance) instead of inspecting status
codes, so an upstream payload that happens to look like an error is never
confused with a failed exchange.
"""

from dataclasses import dataclass
from typing import Any, Literal

SUCCESS_STATUS = 200
TRANSPORT_ERROR_STATUS = 500
INVALID_RESPONSE_STATUS = 502


@dataclass(frozen=True)
class ForwardSuccess:
    """Endpoint answered and its body parsed as JSON."""

    body: Any
    status: int = SUCCESS_STATUS
    upstream_status: int = SUCCESS_STATUS
    ok: Literal[True] = True


@dataclass(frozen=True)
class ForwardFailure:
    """Exchange failed or the endpoint's body could not be parsed."""

    message: str
    status: int = TRANSPORT_ERROR_STATUS
    ok: Literal[False] = False


ForwardResult = ForwardSuccess | ForwardFailure


def to_response(result: ForwardResult) -> dict[str, Any]:
    """
    Map a result to the response shape serverless runtimes expect.

    Args:
        result: Outcome of a forward

    Returns:
        {"statusCode": int, "body": Any}; a failure's body is its message
    """
    if isinstance(result, ForwardSuccess):
        return {"statusCode": result.status, "body": result.body}
    return {"statusCode": result.status, "body": result.message}
