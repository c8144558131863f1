"""Exceptions raised by the translation client.

Input checks performed before a request is sent raise ValidationError.
Everything that goes wrong on the way to or from the service raises TranslationError.
"""

from __future__ import annotations

__all__: list[str] = ["TranslateClientError", "TranslationError", "ValidationError"]


class TranslateClientError(Exception):
    """Base class for all errors raised by the translation client."""


class ValidationError(TranslateClientError, ValueError):
    """An input constraint was violated before any request was sent."""


class TranslationError(TranslateClientError):
    """The translation service call failed.

    Attributes:
        status (int | None): HTTP status code, or None if no response was received.
        body (str): Raw response body as returned by the service.
    """

    def __init__(self, msg: str, *, status: int | None = None, body: str = "") -> None:
        self.status: int | None = status
        self.body: str = body

        if status is not None:
            msg = f"{msg}: status='{status}', body='{body}'"
        super().__init__(msg)
