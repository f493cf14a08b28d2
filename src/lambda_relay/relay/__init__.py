"""Event forwarding to a local HTTP endpoint."""

from .forwarder import Forwarder, forward_event
from .result import ForwardFailure, ForwardResult, ForwardSuccess, to_response

__all__ = [
    "Forwarder",
    "forward_event",
    "ForwardSuccess",
    "ForwardFailure",
    "ForwardResult",
    "to_response",
]
