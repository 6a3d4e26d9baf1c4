"""Kebun errors — typed failures shared by services, adapters and the API."""


class KebunError(Exception):
    """Base class for every error raised by Kebun."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def public_message(self) -> str:
        """Text safe to return to API clients."""
        return self.message


class ValidationError(KebunError):
    """Rejected input. Raised before any mutation is attempted."""

    status_code = 400


class AuthError(KebunError):
    status_code = 401


class NotFoundError(KebunError):
    status_code = 404


class ConflictError(KebunError):
    status_code = 409


class StorageError(KebunError):
    """Persistence layer failure (database or remote store).

    The message carries driver or remote details for the logs only.
    """

    status_code = 502

    @property
    def public_message(self) -> str:
        return "Storage backend error"


class BackendUnavailableError(KebunError):
    status_code = 503
