from typing import Optional, Any

class ServiProError(Exception):
    """
    Base exception for ServiPro application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)

class ResourceNotFoundError(ServiProError):
    """
    Raised when a requested resource is not found.
    """
    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(message, code="NOT_FOUND", status_code=404, details=details)

class AccountNotFoundError(ServiProError):
    """
    Raised when a verification is attempted for an unknown phone.
    """
    def __init__(self, message: str = "Account not found", details: Optional[Any] = None):
        super().__init__(message, code="ACCOUNT_NOT_FOUND", status_code=404, details=details)

class AuthenticationError(ServiProError):
    """
    Raised when authentication fails.
    """
    def __init__(self, message: str = "Authentication failed", details: Optional[Any] = None):
        super().__init__(message, code="AUTHENTICATION_FAILED", status_code=401, details=details)

class ValidationError(ServiProError):
    """
    Raised when input validation fails.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)

class InvalidCodeError(ServiProError):
    """
    Raised when no code is pending or the supplied code does not match.
    """
    def __init__(self, message: str = "Incorrect verification code", details: Optional[Any] = None):
        super().__init__(message, code="INVALID_CODE", status_code=400, details=details)

class CodeExpiredError(ServiProError):
    """
    Raised when a matching code is past its verification window.
    """
    def __init__(self, message: str = "Verification code expired", details: Optional[Any] = None):
        super().__init__(message, code="CODE_EXPIRED", status_code=400, details=details)

class RateLimitedError(ServiProError):
    """
    Raised when a client exceeds the request ceiling of a guarded route.
    """
    def __init__(self, message: str = "Too many requests", retry_after: int = 1, details: Optional[Any] = None):
        self.retry_after = retry_after
        super().__init__(message, code="RATE_LIMITED", status_code=429, details=details)

class ConfigurationError(ServiProError):
    """
    Raised when required configuration (signing secret, SMS credentials) is missing.
    """
    def __init__(self, message: str = "Invalid configuration", details: Optional[Any] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", status_code=500, details=details)

class TransportError(ServiProError):
    """
    Raised when the SMS provider fails to accept a message.
    """
    def __init__(self, message: str = "SMS delivery failed", details: Optional[Any] = None):
        super().__init__(message, code="SMS_TRANSPORT_ERROR", status_code=502, details=details)
