"""
Service-layer exceptions.

Every error a service can raise on purpose carries the HTTP status the API
layer should answer with and a message that is safe to show to the user.
"""

from fastapi import HTTPException


class ServiceException(Exception):
    """Base exception for service layer errors."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidRequestError(ServiceException):
    """Raised when required fields are missing from a request."""
    status_code = 400
    default_message = "Invalid request"


class UnsupportedFileType(ServiceException):
    """Raised when an upload's MIME type is not accepted by the endpoint."""
    status_code = 400
    default_message = "Only PDF files are allowed."


class UploadTooLarge(ServiceException):
    status_code = 413
    default_message = "File exceeds the 10MB upload limit."


class PdfExtractionError(ServiceException):
    """Raised when a PDF cannot be read as text."""
    status_code = 400
    default_message = "Unable to parse PDF content. Please ensure it is a valid text-based PDF."


class AuthenticationError(ServiceException):
    status_code = 401
    default_message = "Invalid email or password"


class NotFoundError(ServiceException):
    status_code = 404
    default_message = "Not found"


class ConflictError(ServiceException):
    status_code = 409
    default_message = "Resource already exists"


class LLMFormatError(ServiceException):
    """Raised when a model reply is not valid JSON or does not match its schema."""
    status_code = 500
    default_message = "Failed to generate a properly formatted response."


class UpstreamUnavailableError(ServiceException):
    """Raised when the job-search or geocoding API cannot be reached."""
    status_code = 502
    default_message = "Upstream service unavailable"


def to_http_exception(exc: ServiceException) -> HTTPException:
    """Convert a service exception into the HTTPException the endpoint raises."""
    return HTTPException(status_code=exc.status_code, detail=exc.message)
