"""
Custom exceptions for the waitlist service
"""

class BaseAppException(Exception):
    """Base application exception"""
    status_code = 500

    def __init__(self, message: str, details: str = None):
        self.message = message
        self.details = details
        super().__init__(self.message)


class ValidationError(BaseAppException):
    """Raised when the caller sent something we cannot accept (client fault)"""
    status_code = 400

    def __init__(self, message: str, details: str = None, status_code: int = None):
        super().__init__(message, details)
        if status_code is not None:
            self.status_code = status_code


class ConfigurationError(BaseAppException):
    """Raised when no usable storage backend could be activated"""
    NOT_CONFIGURED = "not_configured"
    READ_ONLY_TOKEN = "read_only_token"

    def __init__(self, message: str, details: str = None, error_code: str = NOT_CONFIGURED):
        super().__init__(message, details)
        self.error_code = error_code


class StorageError(BaseAppException):
    """Raised when an append to the active backend fails"""
    public_message = "Unable to save this submission."
