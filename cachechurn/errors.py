"""Exceptions raised by cachechurn."""


class CacheChurnError(Exception):
    """Base class for fatal analysis errors."""


class NumericOverflow(CacheChurnError, ValueError):
    """A captured number does not fit its integer width."""

    def __init__(self, field: str, value: str, source: str = ""):
        self.field = field
        self.value = value
        self.source = source
        message = f"{field} value {value} out of range"
        if source:
            message += f" in {source!r}"
        super().__init__(message)


class TimeArithmeticInvalid(CacheChurnError, ArithmeticError):
    """A duration was requested between timestamps in the wrong order."""


class SourceError(CacheChurnError, OSError):
    """An input location could not be read."""
