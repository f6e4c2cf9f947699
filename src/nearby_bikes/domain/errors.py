"""Error taxonomy.

Every failure surfaced to callers is a :class:`BikeFinderError` carrying a
machine-readable kind, a technical message for logs and a separate message that is
safe to show to users. The original exception, if any, is chained as ``__cause__``.
"""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from nearby_bikes.domain.models.error_details import ErrorDetails
from nearby_bikes.domain.models.geolocation import GeolocationFailure


class ErrorKind(StrEnum):
    """Machine-readable error classification."""

    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    NETWORK_ERROR = "NETWORK_ERROR"
    TIMEOUT = "TIMEOUT"
    GEOLOCATION = "GEOLOCATION"
    UNKNOWN = "UNKNOWN"


class BikeFinderError(Exception):
    """Base class for all typed errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    default_user_message = "Something went wrong. Please try again."

    def __init__(
        self,
        message: str,
        user_message: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.user_message = user_message or self.default_user_message
        self.context: dict[str, Any] = dict(context or {})
        self.timestamp = datetime.now(UTC).isoformat()

    @property
    def status_code(self) -> int | None:
        status = self.context.get("status_code")
        return status if isinstance(status, int) else None

    def to_details(self) -> ErrorDetails:
        """Project the error into a serializable value."""
        return ErrorDetails(
            kind=self.kind.value,
            message=self.message,
            user_message=self.user_message,
            status_code=self.status_code,
            timestamp=self.timestamp,
        )


class ValidationError(BikeFinderError):
    """Malformed or out-of-range input."""

    kind = ErrorKind.VALIDATION
    default_user_message = "The request contains invalid values."


class NotFoundError(BikeFinderError):
    """Nothing matches the given constraints."""

    kind = ErrorKind.NOT_FOUND
    default_user_message = "Nothing was found near your location."


class NetworkError(BikeFinderError):
    """Transport failure or non-2xx answer from a collaborator."""

    kind = ErrorKind.NETWORK_ERROR
    default_user_message = "Connection problem. Check your network and try again."


class RequestTimeoutError(BikeFinderError):
    """A collaborator did not answer in time."""

    kind = ErrorKind.TIMEOUT
    default_user_message = "The server is taking too long to respond. Please try again."


class UnknownError(BikeFinderError):
    """Unclassified failure."""

    kind = ErrorKind.UNKNOWN


_GEOLOCATION_USER_MESSAGES = {
    GeolocationFailure.PERMISSION_DENIED: "Please allow location access to find nearby stations.",
    GeolocationFailure.POSITION_UNAVAILABLE: "Your position could not be determined. Check that GPS is enabled.",
    GeolocationFailure.TIMEOUT: "Locating you is taking too long. Please try again.",
}


class GeolocationError(BikeFinderError):
    """The user's position could not be obtained."""

    kind = ErrorKind.GEOLOCATION

    def __init__(
        self,
        reason: GeolocationFailure,
        message: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message or f"Geolocation failed: {reason.value}",
            _GEOLOCATION_USER_MESSAGES[reason],
            {**(context or {}), "reason": reason.value},
        )
        self.reason = reason
