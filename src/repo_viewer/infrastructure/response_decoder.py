"""Response classifier & decoder — the single error-normalisation chokepoint.

Every endpoint goes through :func:`decode_json` or :func:`decode_text`, so a
given status/body pair always produces the same result or the same
:class:`~repo_viewer.domain.exceptions.NetworkError`.
"""

from __future__ import annotations

import logging
from typing import TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from repo_viewer.domain.entities import ErrorEnvelope
from repo_viewer.domain.exceptions import (
    DecodingError,
    InvalidResponseError,
    NetworkError,
    NotFoundError,
    OtherError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

_NOT_FOUND_MESSAGE = "Not Found"
_envelope_adapter = TypeAdapter(ErrorEnvelope)


def decode_json(response: httpx.Response, shape: TypeAdapter[T]) -> T:
    """Decode a 200 JSON body into *shape*, or raise the classified error."""
    if response.status_code != 200:
        raise classify_failure(response)

    try:
        return shape.validate_json(response.content)
    except ValidationError as exc:
        logger.warning("Could not decode response body: %s", exc)
        raise DecodingError(str(exc)) from exc


def decode_text(response: httpx.Response) -> str:
    """Decode a 200 body as UTF-8 text, or raise the classified error."""
    if response.status_code != 200:
        raise classify_failure(response)

    try:
        return response.content.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodingError(f"Response body is not valid UTF-8: {exc}") from exc


def classify_failure(response: httpx.Response) -> NetworkError:
    """Translate a non-200 response into a domain error via its envelope."""
    try:
        envelope = _envelope_adapter.validate_json(response.content)
    except ValidationError:
        logger.warning("HTTP %s without an error envelope", response.status_code)
        return InvalidResponseError()

    logger.debug("HTTP %s: %s", response.status_code, envelope.message)
    if envelope.message == _NOT_FOUND_MESSAGE:
        return NotFoundError()
    return OtherError(envelope.message)
