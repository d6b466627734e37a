"""Domain exception hierarchy.

Every failure coming out of the transport or the response decoder is
normalised into exactly one :class:`NetworkError` subclass before it reaches
the services layer.  ``str(exc)`` is the user-facing message; the interface
layer uses it verbatim.
"""

from __future__ import annotations

from typing import Any

_GENERIC_NETWORK_MESSAGE = "A network error occurred. Please try again."


class RepoViewerError(Exception):
    """Base exception for the entire application."""


class NetworkError(RepoViewerError):
    """A request failed.  Subclasses carry the payload of each failure kind.

    Two errors are equal when they are of the same kind and carry the same
    payload, so they can be compared in state snapshots and tests.
    """

    message = _GENERIC_NETWORK_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.message)

    def _payload(self) -> Any:
        return None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetworkError):
            return NotImplemented
        return type(self) is type(other) and self._payload() == other._payload()

    def __hash__(self) -> int:
        return hash((type(self), self._payload()))

    def __repr__(self) -> str:
        payload = self._payload()
        if payload is None:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({payload!r})"


# ── Request construction ────────────────────────────────────────────────────


class InvalidURLError(NetworkError):
    """The request URL could not be built or parsed."""


# ── Transport ───────────────────────────────────────────────────────────────


class UnderlyingError(NetworkError):
    """The transport failed before any response was received."""

    def __init__(self, cause: BaseException) -> None:
        self.cause = cause
        super().__init__(str(cause) or type(cause).__name__)

    def _payload(self) -> Any:
        return (type(self.cause).__name__, str(self.cause))


# ── Response classification ─────────────────────────────────────────────────


class InvalidResponseError(NetworkError):
    """A non-200 response whose body is not a ``{"message": ...}`` envelope."""


class NoDataError(NetworkError):
    """A 200 response arrived with an empty body."""


class DecodingError(NetworkError):
    """A 200 response could not be decoded into the expected shape."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(details)

    def _payload(self) -> Any:
        return self.details


class NotFoundError(NetworkError):
    """GitHub answered with ``{"message": "Not Found"}``."""

    message = "not Found"


class ServerError(NetworkError):
    """The server failed with the given status code."""

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(f"server error with {status_code} status code.")

    def _payload(self) -> Any:
        return self.status_code


class UnauthorizedAccessError(NetworkError):
    """The configured credential was rejected."""

    message = "unauthorized access to the GitHub API."


class RateLimitExceededError(NetworkError):
    """GitHub API rate limit exceeded."""

    message = "rate limit exceeded error."


class OtherError(NetworkError):
    """Any other failure; the message is shown verbatim."""

    def __init__(self, message: str) -> None:
        super().__init__(message)

    def _payload(self) -> Any:
        return str(self)


# ── Favorites ───────────────────────────────────────────────────────────────


class MissingRepositoryIdError(RepoViewerError):
    """A repository without an ``id`` cannot be stored as a favorite."""
