"""Exceptions raised by the cost forecasting core."""


class ForecastError(Exception):
    """Base exception for all forecasting errors."""


class InsufficientDataError(ForecastError, ValueError):
    """Raised when a computation needs more samples than were supplied."""

    def __init__(self, required: int, actual: int, what: str = "samples") -> None:
        self.required = required
        self.actual = actual
        super().__init__(
            f"Insufficient data: need at least {required} {what}, got {actual}"
        )


class MalformedInputError(ForecastError, ValueError):
    """Raised when caller-supplied data is structurally invalid."""
