"""Error taxonomy shared by services and the HTTP layer."""


class FitnessTrackerError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(FitnessTrackerError):
    """Required fields are missing or malformed."""

    status_code = 400


class Unauthorized(FitnessTrackerError):
    """Missing or invalid bearer token."""

    status_code = 401


class RateLimited(FitnessTrackerError):
    """Upstream throttling outlasted every retry."""

    status_code = 429


class UpstreamFailure(FitnessTrackerError):
    """The language model call failed for a non-retryable reason."""

    status_code = 500


class StorageError(FitnessTrackerError):
    """A persistence operation failed."""

    status_code = 500
