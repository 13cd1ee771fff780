"""Transport protocol for Sisyphus.

This module defines the TransportProtocol interface that the retry
controller drives. Uses `typing.Protocol` for structural subtyping.

A transport performs exactly one HTTP request per call. It must surface
failures (network errors, non-2xx statuses) as raised exceptions rather
than normal returns; the retry controller records whatever it raises as
evidence for the failed attempt.

Usage:
    from sisyphus.protocols import TransportProtocol

    class RecordingTransport:
        async def perform_request(self, spec):
            ...

    assert isinstance(RecordingTransport(), TransportProtocol)
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable


@runtime_checkable
class TransportProtocol(Protocol):
    """Protocol for the transport collaborator.

    Note:
        Implementations do NOT need to inherit from this class.
    """

    async def perform_request(self, spec: Mapping[str, Any]) -> Any:
        """Perform one request described by ``spec``.

        Args:
            spec: Request configuration (method, url, headers, ...).
                Passed through untouched by the retry controller.

        Returns:
            The transport response.

        Raises:
            Exception: Any transport-level failure.
        """
        ...
