"""
Shared error handling for the guild client.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class GuildClientException(Exception):
    """Base exception for the guild client."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            code=self.code,
            message=self.message,
            details=self.details
        )


class ValidationError(GuildClientException):
    """Input that cannot be translated to the wire format."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None,
                 code: str = "VALIDATION_ERROR"):
        super().__init__(code, message, details)


class ColorRangeError(ValidationError):
    """Colour outside the 24-bit range."""

    def __init__(self, color: Any):
        super().__init__("Color must be within the range 0 - 16777215 (0xFFFFFF).",
                         details={"color": repr(color)}, code="COLOR_RANGE")


class ColorConvertError(ValidationError):
    """Colour that cannot be parsed."""

    def __init__(self, color: Any):
        super().__init__("Unable to convert color to a number.",
                         details={"color": repr(color)}, code="COLOR_CONVERT")


class BitFieldInvalidError(ValidationError):
    """Bitfield flag or number that cannot be resolved."""

    def __init__(self, bit: Any, flags: str):
        super().__init__(f"Invalid bitfield flag or number: {bit!r}.",
                         details={"bit": repr(bit), "flags": flags}, code="BITFIELD_INVALID")


class EnumResolveError(ValidationError):
    """Symbolic enum name that does not exist."""

    def __init__(self, value: Any, enum_name: str):
        super().__init__(f"{value!r} is not a valid {enum_name}.",
                         details={"value": repr(value), "enum": enum_name}, code="ENUM_INVALID")


class DateResolveError(ValidationError):
    """Value that cannot be interpreted as a date."""

    def __init__(self, value: Any):
        super().__init__(f"Unable to resolve {value!r} to a date.",
                         details={"value": repr(value)}, code="DATE_INVALID")


class FileResolveError(ValidationError):
    """Value that cannot be resolved to file contents."""

    def __init__(self, value: Any):
        super().__init__("The resource must be a string, bytes, path, URL or file-like object.",
                         details={"type": type(value).__name__}, code="REQ_RESOURCE_TYPE")


class DiscordAPIError(GuildClientException):
    """Non-success response from the remote API."""

    def __init__(self, status: int, method: str, path: str, message: str = "Unknown error",
                 api_code: Optional[int] = None, details: Optional[Dict[str, Any]] = None):
        self.status = status
        self.method = method
        self.path = path
        self.api_code = api_code
        super().__init__(
            "DISCORD_API_ERROR",
            message,
            {"status": status, "method": method, "path": path, "api_code": api_code, **(details or {})}
        )


class HTTPError(GuildClientException):
    """Transport-level failure talking to the remote API."""

    def __init__(self, method: str, path: str, message: str = "Request failed",
                 details: Optional[Dict[str, Any]] = None):
        self.method = method
        self.path = path
        super().__init__("HTTP_ERROR", f"{method} {path}: {message}", details)
