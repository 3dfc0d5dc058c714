from __future__ import annotations

from fuzztester.models import ErrorKind


class FuzztesterError(Exception):
    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingUrlError(FuzztesterError):
    kind = ErrorKind.MISSING_URL

    def __init__(self, message: str = "Please enter a URL") -> None:
        super().__init__(message)


class TransportError(FuzztesterError):
    kind = ErrorKind.TRANSPORT_ERROR

    def __init__(self, message: str, error_type: str = "TransportError") -> None:
        super().__init__(message)
        self.error_type = error_type


class RequestTimeoutError(TransportError):
    kind = ErrorKind.TIMEOUT

    def __init__(self, message: str) -> None:
        super().__init__(message, error_type="Timeout")


class AttemptCancelledError(TransportError):
    kind = ErrorKind.CANCELLED

    def __init__(self, message: str = "Test cancelled") -> None:
        super().__init__(message, error_type="Cancelled")


def error_from_result(result: dict) -> TransportError:
    error_type = str(result.get("error_type") or "TransportError")
    message = str(result.get("error_message") or error_type)
    if error_type == "Timeout":
        return RequestTimeoutError(message)
    return TransportError(message, error_type=error_type)
