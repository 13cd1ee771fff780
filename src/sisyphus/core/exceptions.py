"""Sisyphus Exception Hierarchy.

This module defines the exceptions raised across the retry boundary.
All custom exceptions inherit from SisyphusError, enabling consistent
error handling by callers.

Error categories:
- Per-attempt failures (transport errors, filtered responses) → evidence,
  recorded internally and never raised on their own
- Exhausted retry sequences → RetriesExhaustedError, carrying the evidence

Usage:
    from sisyphus.core.exceptions import RetriesExhaustedError

    try:
        response = await controller.get(policy, {"url": url})
    except RetriesExhaustedError as e:
        for evidence in e.errors:
            ...
"""

from typing import Any, Optional, Sequence


class SisyphusError(Exception):
    """Root of the errors this library raises to its callers.

    Per-attempt failures never surface as SisyphusError; they are kept as
    evidence on the error that ends a retry sequence.
    """

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or "Retried request failed."
        super().__init__(self.message)

    @property
    def context(self) -> dict[str, Any]:
        """Fields to bind on a structured log event."""
        return {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class RetriesExhaustedError(SisyphusError):
    """Every attempt of a request failed.

    Raised exactly once per exhausted retry sequence. Each entry of
    ``errors`` is the evidence of one failed attempt, in attempt order:
    either the exception raised by the transport or the response that the
    policy's ``response_failed_filter`` flagged.

    Attributes:
        url: The requested URL, if the request spec carried one.
        attempts: Number of attempts made.
        errors: Evidence of every failed attempt.
    """

    def __init__(
        self,
        url: Any,
        attempts: int,
        errors: Sequence[Any],
        message: Optional[str] = None,
    ) -> None:
        """Initialize RetriesExhaustedError.

        Args:
            url: The requested URL.
            attempts: Number of attempts made.
            errors: Evidence list, one entry per failed attempt.
            message: Optional custom message.
        """
        self.url = url
        self.attempts = attempts
        self.errors = list(errors)

        if message is None:
            message = (
                f"Failed to successfully request {url} "
                f"within {attempts} attempts."
            )

        super().__init__(message)

    @property
    def last_error(self) -> Any:
        """Return the evidence of the final attempt, or None."""
        return self.errors[-1] if self.errors else None

    @property
    def context(self) -> dict[str, Any]:
        """Return context for exhausted retries."""
        return {
            "url": None if self.url is None else str(self.url),
            "attempts": self.attempts,
            "errors": [_describe(evidence) for evidence in self.errors],
        }

    def __repr__(self) -> str:
        """Return debug representation with attributes."""
        return (
            f"RetriesExhaustedError(url={self.url!r}, "
            f"attempts={self.attempts!r}, errors={len(self.errors)})"
        )


def _describe(evidence: Any) -> str:
    if isinstance(evidence, BaseException):
        return f"{type(evidence).__name__}: {evidence}"
    status_code = getattr(evidence, "status_code", None)
    if status_code is not None:
        return f"response status {status_code}"
    return repr(evidence)
