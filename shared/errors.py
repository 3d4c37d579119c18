"""
Shared error handling for the token gateway.
"""

from typing import Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    error: str
    details: Optional[Any] = None


class GatewayException(Exception):
    """Base exception for gateway services."""

    def __init__(self, code: str, message: str, status_code: int = 400, details: Optional[Any] = None):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(error=self.message, details=self.details)

    def to_content(self) -> dict:
        """Response body; `details` is omitted when absent."""
        return self.to_response().model_dump(exclude_none=True)


class InvalidTokenIdError(GatewayException):
    """Token identifier is not numeric."""

    def __init__(self, message: str = "Invalid tokenId. Must be a number."):
        super().__init__("INVALID_TOKEN_ID", message, 400)


class TokenNotFoundError(GatewayException):
    """A contract read reported failure."""

    def __init__(self, message: str = "Token not found"):
        super().__init__("TOKEN_NOT_FOUND", message, 404)


class TransferFailedError(GatewayException):
    """The contract rejected a transfer."""

    def __init__(self, details: Optional[Any] = None, message: str = "Transfer failed"):
        super().__init__("TRANSFER_FAILED", message, 400, details)


class InternalServerError(GatewayException):
    """Unexpected failure; the cause is only logged."""

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__("INTERNAL_ERROR", message, 500)
