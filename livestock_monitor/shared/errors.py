class ApplicationError(Exception):
    """Base error for known application failures."""


class InfrastructureError(ApplicationError):
    """Raised when an infrastructure adapter fails."""


class LivestockApiError(InfrastructureError):
    """Raised when the inference service rejects or fails a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MapperNotReadyError(ApplicationError):
    """Raised when a coordinate mapping is requested before sizes are known."""
