"""Module-level request shortcuts.

Each call opens a short-lived ``HttpxTransport``, runs a single retried
request and closes the client again. Applications issuing many requests
should build a ``RetryController`` around a shared transport instead.

Usage:
    import sisyphus

    response = await sisyphus.get(
        sisyphus.RetryPolicy(max_attempts=3),
        {"url": "https://example.com/health"},
    )
"""

from typing import Any, Optional

from sisyphus.controller import RequestSpec, RetryController, with_method
from sisyphus.retry import RetryPolicy
from sisyphus.transport import HttpxTransport


async def request(policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
    """Perform ``spec`` with retries over a fresh httpx client."""
    async with HttpxTransport() as transport:
        return await RetryController(transport).execute(policy, spec)


async def get(policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
    """Perform a retried GET request over a fresh httpx client."""
    return await request(policy, with_method(spec, "GET"))


async def head(policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
    """Perform a retried HEAD request over a fresh httpx client."""
    return await request(policy, with_method(spec, "HEAD"))


async def options(policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
    """Perform a retried OPTIONS request over a fresh httpx client."""
    return await request(policy, with_method(spec, "OPTIONS"))


async def delete(policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
    """Perform a retried DELETE request over a fresh httpx client."""
    return await request(policy, with_method(spec, "DELETE"))


async def post(policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
    """Perform a retried POST request over a fresh httpx client."""
    return await request(policy, with_method(spec, "POST"))


async def put(policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
    """Perform a retried PUT request over a fresh httpx client."""
    return await request(policy, with_method(spec, "PUT"))


async def patch(policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
    """Perform a retried PATCH request over a fresh httpx client."""
    return await request(policy, with_method(spec, "PATCH"))
