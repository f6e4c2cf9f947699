"""Tests for the error taxonomy."""

from nearby_bikes.domain.errors import (
    BikeFinderError,
    ErrorKind,
    GeolocationError,
    NetworkError,
    NotFoundError,
    RequestTimeoutError,
    UnknownError,
    ValidationError,
)
from nearby_bikes.domain.models import GeolocationFailure


def test_error_kinds() -> None:
    """Given each error class, when inspecting its kind, then it matches the taxonomy."""
    assert ValidationError("x").kind == ErrorKind.VALIDATION
    assert NotFoundError("x").kind == ErrorKind.NOT_FOUND
    assert NetworkError("x").kind == ErrorKind.NETWORK_ERROR
    assert RequestTimeoutError("x").kind == ErrorKind.TIMEOUT
    assert UnknownError("x").kind == ErrorKind.UNKNOWN
    assert isinstance(RequestTimeoutError("x"), BikeFinderError)


def test_user_message_is_separate_from_technical_message() -> None:
    """Given an error without a user message, when reading it, then a safe default is used."""
    error = NetworkError("ClientConnectorError: Cannot connect to host api.citybik.es:443")

    assert "api.citybik.es" in error.message
    assert "api.citybik.es" not in error.user_message
    assert str(error) == error.message


def test_to_details_carries_status_code() -> None:
    """Given an error with a status code in its context, when projecting, then details carry it."""
    error = NetworkError("API error 429", "Slow down", {"status_code": 429})

    details = error.to_details()

    assert details.kind == "NETWORK_ERROR"
    assert details.status_code == 429
    assert details.user_message == "Slow down"
    assert details.timestamp == error.timestamp


def test_status_code_absent_by_default() -> None:
    """Given an error without context, when reading the status code, then it is None."""
    assert ValidationError("bad").status_code is None


def test_geolocation_error_messages_per_reason() -> None:
    """Given each geolocation failure, when building the error, then a specific user message is set."""
    messages = {
        GeolocationError(reason).user_message for reason in GeolocationFailure
    }
    error = GeolocationError(GeolocationFailure.PERMISSION_DENIED)

    assert len(messages) == 3
    assert error.kind == ErrorKind.GEOLOCATION
    assert error.reason == GeolocationFailure.PERMISSION_DENIED
    assert error.context["reason"] == "permission_denied"
