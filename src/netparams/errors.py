"""Exception taxonomy for Touchstone parsing.

Every failure raised while decoding a Touchstone file derives from
:class:`TouchstoneError`, itself a ``ValueError`` so callers that only care
about "bad input" can catch the builtin. Each error is terminal for the
parse that raised it; no partial result is ever returned.
"""

from __future__ import annotations


class TouchstoneError(ValueError):
    """Base error for malformed or unsupported Touchstone input.

    Attributes:
        message: Human-readable description of the failure.
        line_number: 1-based physical line number, when known.
    """

    def __init__(self, message: str, *, line_number: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line_number = line_number

    def __str__(self) -> str:
        if self.line_number is None:
            return self.message
        return f"{self.message} (line {self.line_number})"


class UnsupportedFormatError(TouchstoneError):
    """File extension is neither ``s<N>p`` nor a recognized alternate."""


class NotImplementedFormatError(TouchstoneError, NotImplementedError):
    """Recognized alternate format that is not supported (``.ts``)."""


class InvalidUnitError(TouchstoneError):
    """Token is not one of Hz, kHz, MHz, GHz, THz."""


class InvalidParameterKindError(TouchstoneError):
    """Token is not one of S, Y, Z, G, H."""


class InvalidValueEncodingError(TouchstoneError):
    """Token is not one of DB, MA, RI."""


class MalformedOptionsLineError(TouchstoneError):
    """Reference resistance after ``R`` is missing or not numeric."""


class NumericParseError(TouchstoneError):
    """A data token is not a valid number."""


class TextDecodeError(TouchstoneError):
    """File bytes are not valid in the configured text encoding."""


class EmptySeriesError(TouchstoneError):
    """Frequency series constructed from zero samples."""


class ShapeMismatchError(TouchstoneError):
    """Accumulated data does not reshape into the declared tensor."""
