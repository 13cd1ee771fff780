"""
Sisyphus - retried outbound HTTP requests

Repeats a request until a response is accepted or the attempt budget is
spent, collecting the evidence of every failed attempt.
"""

from sisyphus.api import (
    delete,
    get,
    head,
    options,
    patch,
    post,
    put,
    request,
)
from sisyphus.controller import RetryController
from sisyphus.core.exceptions import RetriesExhaustedError, SisyphusError
from sisyphus.protocols import TransportProtocol
from sisyphus.retry import RetryPolicy, backoff_hook
from sisyphus.transport import HttpxTransport

__version__ = "1.0.0"

__all__ = [
    "request",
    "get",
    "head",
    "options",
    "delete",
    "post",
    "put",
    "patch",
    "RetryController",
    "RetryPolicy",
    "backoff_hook",
    "HttpxTransport",
    "TransportProtocol",
    "SisyphusError",
    "RetriesExhaustedError",
]
