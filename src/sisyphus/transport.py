"""httpx-backed transport for the retry controller."""

from typing import Any, Callable, Mapping, Optional

import httpx
import structlog

log = structlog.get_logger()

StatusValidator = Callable[[int], bool]


class HttpxTransport:
    """Perform requests through an ``httpx.AsyncClient``.

    By default non-2xx responses are raised as ``httpx.HTTPStatusError`` and
    network failures as ``httpx.RequestError``, so the retry controller sees
    every abnormal outcome as a transport error. A ``validate_status``
    callable changes which status codes count as transport success; the
    responses it accepts are handed to the policy's response filter instead.
    It can be set per transport or per request through the
    ``validate_status`` key of the request spec.

    A client passed in is borrowed and left open by ``aclose()``; without one
    the transport owns a client built from ``client_kwargs``.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        validate_status: Optional[StatusValidator] = None,
        **client_kwargs: Any,
    ) -> None:
        """Initialize HttpxTransport.

        Args:
            client: Existing client to borrow.
            validate_status: Predicate on the status code; True means the
                response is returned. Defaults to accepting 2xx only.
            **client_kwargs: Arguments for an owned ``httpx.AsyncClient``
                (base_url, timeout, headers, ...).

        Raises:
            ValueError: If both a client and client kwargs are given.
            TypeError: If validate_status is not callable.
        """
        if client is not None and client_kwargs:
            raise ValueError("client_kwargs cannot be combined with an existing client")
        if validate_status is not None and not callable(validate_status):
            raise TypeError("validate_status must be callable")

        self._validate_status = validate_status
        self._owns_client = client is None
        self._client = client if client is not None else httpx.AsyncClient(**client_kwargs)

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the underlying client."""
        return self._client

    async def perform_request(self, spec: Mapping[str, Any]) -> httpx.Response:
        """Send one request and raise on a status the validator rejects."""
        request_kwargs = dict(spec)
        validate_status = request_kwargs.pop("validate_status", self._validate_status)
        request_kwargs.setdefault("method", "GET")
        if "url" not in request_kwargs:
            raise ValueError("request spec must include a url")

        response = await self._client.request(**request_kwargs)
        if validate_status is None:
            response.raise_for_status()
        elif not validate_status(response.status_code):
            raise httpx.HTTPStatusError(
                f"Status {response.status_code} rejected for url '{response.url}'",
                request=response.request,
                response=response,
            )
        return response

    async def aclose(self) -> None:
        """Close the client if this transport owns it."""
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()
            log.debug("transport_closed")

    async def __aenter__(self) -> "HttpxTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
