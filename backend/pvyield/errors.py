"""
Error kinds raised by the PV Yield engine.

All errors derive from ValueError so the API layer maps them to 422 the same
way it maps any other invalid-input failure.
"""


class PvYieldError(ValueError):
    """Base class for engine data errors."""


class MissingFieldError(PvYieldError):
    """A provider record lacks an irradiance field (or value) for a timestamp."""

    def __init__(self, key: str, field: str):
        super().__init__(f"Missing {field} for timestamp {key}")
        self.key = key
        self.field = field


class MalformedTimestampError(PvYieldError):
    """A provider date-hour key cannot be parsed."""

    def __init__(self, key: str, detail: str = ""):
        message = f"Malformed timestamp key {key!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.key = key


class MalformedPayloadError(PvYieldError):
    """A provider response lacks the structure needed to build a table."""


class EmptyTableError(PvYieldError):
    """No usable samples remain after filtering."""

    def __init__(self, message: str = "No data available for this location and period."):
        super().__init__(message)


class UpstreamFetchError(PvYieldError):
    """The upstream irradiance provider failed (network, HTTP or parse error)."""
