"""Retry controller around a single outbound request.

The controller issues attempts one after another until a response is
accepted or the policy's attempt budget is spent:

    transport.perform_request(spec)
        raised      -> evidence = the exception
        returned    -> response_failed_filter(response)
                           False -> return response
                           True  -> evidence = the response
    evidence -> log it, await on_failed_attempt(index),
                raise RetriesExhaustedError after the last attempt

Errors raised by the filter or by the failed-attempt callback are caller
errors and propagate as-is.
"""

from typing import Any, Mapping, Optional

import structlog

from sisyphus.core.exceptions import RetriesExhaustedError
from sisyphus.protocols import TransportProtocol
from sisyphus.retry import RetryPolicy

log = structlog.get_logger()

RequestSpec = Mapping[str, Any]


class RetryController:
    """Run requests through a transport with retries.

    The controller keeps no per-request state, so one instance can serve
    any number of concurrent ``execute`` calls.
    """

    def __init__(self, transport: TransportProtocol) -> None:
        """Initialize RetryController.

        Args:
            transport: Collaborator performing the actual requests.
        """
        self._transport = transport

    @property
    def transport(self) -> TransportProtocol:
        """Return the transport performing the requests."""
        return self._transport

    async def execute(
        self,
        policy: Optional[RetryPolicy] = None,
        spec: Optional[RequestSpec] = None,
    ) -> Any:
        """Perform ``spec`` until a response is accepted.

        Args:
            policy: Retry configuration. Defaults to a single attempt.
            spec: Request configuration handed to the transport unchanged.

        Returns:
            The first accepted response.

        Raises:
            RetriesExhaustedError: If every attempt failed.
        """
        policy = policy or RetryPolicy()
        spec = spec if spec is not None else {}
        url = spec.get("url")
        errors: list[Any] = []

        for attempt in range(policy.max_attempts):
            log.debug(
                "request_attempt",
                attempt=attempt,
                max_attempts=policy.max_attempts,
                method=spec.get("method"),
                url=url,
            )
            try:
                response = await self._transport.perform_request(spec)
            except Exception as e:
                evidence: Any = e
                reason = "transport_error"
            else:
                if not await policy.response_failed_filter(response):
                    log.debug(
                        "request_accepted",
                        attempt=attempt,
                        url=url,
                        status_code=getattr(response, "status_code", None),
                    )
                    return response
                evidence = response
                reason = "response_filtered"

            errors.append(evidence)
            log.warning(
                "request_attempt_failed",
                attempt=attempt,
                max_attempts=policy.max_attempts,
                url=url,
                reason=reason,
                error=str(evidence) if reason == "transport_error" else None,
                status_code=getattr(evidence, "status_code", None),
            )
            await policy.on_failed_attempt(attempt)

        error = RetriesExhaustedError(url=url, attempts=policy.max_attempts, errors=errors)
        log.error("request_retries_exhausted", **error.context)
        last = error.last_error
        raise error from (last if isinstance(last, BaseException) else None)

    async def get(self, policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
        """Run ``execute`` with the method forced to GET."""
        return await self.execute(policy, with_method(spec, "GET"))

    async def head(self, policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
        """Run ``execute`` with the method forced to HEAD."""
        return await self.execute(policy, with_method(spec, "HEAD"))

    async def options(self, policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
        """Run ``execute`` with the method forced to OPTIONS."""
        return await self.execute(policy, with_method(spec, "OPTIONS"))

    async def delete(self, policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
        """Run ``execute`` with the method forced to DELETE."""
        return await self.execute(policy, with_method(spec, "DELETE"))

    async def post(self, policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
        """Run ``execute`` with the method forced to POST."""
        return await self.execute(policy, with_method(spec, "POST"))

    async def put(self, policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
        """Run ``execute`` with the method forced to PUT."""
        return await self.execute(policy, with_method(spec, "PUT"))

    async def patch(self, policy: Optional[RetryPolicy] = None, spec: Optional[RequestSpec] = None) -> Any:
        """Run ``execute`` with the method forced to PATCH."""
        return await self.execute(policy, with_method(spec, "PATCH"))


def with_method(spec: Optional[RequestSpec], method: str) -> dict[str, Any]:
    """Return a copy of ``spec`` with ``method`` forced."""
    return {**(spec or {}), "method": method}
