"""Protocol abstractions for Sisyphus.

Protocols:
    TransportProtocol: Interface for the request transport.
"""

from __future__ import annotations

from sisyphus.protocols.transport import TransportProtocol

__all__ = [
    "TransportProtocol",
]
