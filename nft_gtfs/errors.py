"""Errors raised when a feed value cannot be turned into a canonical value."""

from __future__ import annotations


class FatalDataError(Exception):
    """Base error for unrecoverable feed data problems.

    Raised when a raw value has no applicable derivation rule. Callers
    are expected to abort the run: a silent default would produce ids or
    colors that collide downstream.

    Attributes:
        raw_value: The offending raw feed value.
    """

    def __init__(self, raw_value: object, message: str) -> None:
        self.raw_value = raw_value
        super().__init__(message)


class UnknownStopCodeError(FatalDataError):
    """Raised when a stop code cannot be mapped to a numeric stop id.

    Attributes:
        raw_value: The stop code as read from the feed.
        stop_code: The working code after fallback and prefix stripping.
        reason: Which derivation step failed.
    """

    def __init__(self, raw_value: str, stop_code: str, reason: str) -> None:
        self.stop_code = stop_code
        self.reason = reason
        super().__init__(
            raw_value,
            f"Stop doesn't have an ID ({reason})! raw:{raw_value!r} stopCode:{stop_code!r}",
        )


class UnknownRouteColorError(FatalDataError):
    """Raised when a route short name has no pre-assigned color."""

    def __init__(self, raw_value: object) -> None:
        super().__init__(raw_value, f"Unexpected route color for {raw_value!r}!")
