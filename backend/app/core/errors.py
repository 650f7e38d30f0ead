"""
Error taxonomy for the carpool backend.

Token errors are raised by the token provider and left for the HTTP
boundary to translate; nothing in the core retries them.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned by the API."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class CarpoolError(Exception):
    """Base exception for the carpool backend."""

    status_code = 500

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(code=self.code, message=self.message, details=self.details)


class ConfigurationError(CarpoolError):
    """Missing or unusable configuration; the process cannot start."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class TokenError(CarpoolError):
    """Base class for errors raised while validating a presented token."""

    status_code = 401


class MalformedTokenError(TokenError):
    def __init__(self, message: str = "Malformed token", details: Optional[Dict[str, Any]] = None):
        super().__init__("MALFORMED_TOKEN", message, details)


class InvalidSignatureError(TokenError):
    def __init__(self, message: str = "Token signature is invalid", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_SIGNATURE", message, details)


class ExpiredTokenError(TokenError):
    def __init__(self, message: str = "Token has expired", details: Optional[Dict[str, Any]] = None):
        super().__init__("EXPIRED_TOKEN", message, details)


class UnknownIdentityError(CarpoolError):
    """The token subject does not resolve to a known identity."""

    status_code = 401

    def __init__(self, message: str = "Unknown identity", details: Optional[Dict[str, Any]] = None):
        super().__init__("UNKNOWN_IDENTITY", message, details)


class DuplicateRegistrationError(CarpoolError):
    status_code = 409

    def __init__(self, message: str = "Email already registered", details: Optional[Dict[str, Any]] = None):
        super().__init__("DUPLICATE_REGISTRATION", message, details)


class InvalidCredentialsError(CarpoolError):
    status_code = 401

    def __init__(self, message: str = "Incorrect email or password", details: Optional[Dict[str, Any]] = None):
        super().__init__("INVALID_CREDENTIALS", message, details)


class UnknownRefreshTokenError(CarpoolError):
    """The refresh token verifies but has no stored record (rotated or logged out)."""

    status_code = 401

    def __init__(self, message: str = "Refresh token not recognised", details: Optional[Dict[str, Any]] = None):
        super().__init__("UNKNOWN_REFRESH_TOKEN", message, details)
