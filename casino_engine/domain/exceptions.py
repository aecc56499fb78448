"""Domain errors surfaced by the casino engine"""
from typing import Optional


class CasinoError(Exception):
    """Base error; carries a stable code and an HTTP-equivalent status"""

    code = "CASINO_ERROR"
    status_code = 400
    default_message = "Request could not be processed"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnknownGame(CasinoError):
    code = "UNKNOWN_GAME"
    default_message = "Invalid game type"


class InvalidPrediction(CasinoError):
    code = "INVALID_PREDICTION"
    default_message = "Invalid prediction"


class InvalidAmount(CasinoError):
    code = "INVALID_AMOUNT"
    default_message = "Invalid bet amount"


class InsufficientFunds(CasinoError):
    code = "INSUFFICIENT_FUNDS"
    default_message = "Insufficient balance for this bet"


class AccountNotFound(CasinoError):
    code = "NOT_FOUND"
    status_code = 404
    default_message = "User not found"


class PermissionDenied(CasinoError):
    code = "FORBIDDEN"
    status_code = 403
    default_message = "Access forbidden"


class RateLimited(CasinoError):
    code = "RATE_LIMIT_EXCEEDED"
    status_code = 429
    default_message = "Rate limit exceeded"


class StorageFailure(CasinoError):
    """A persistence call failed; `retryable` marks transient backend errors"""

    code = "STORAGE_FAILURE"
    status_code = 503
    default_message = "Service temporarily unavailable"

    def __init__(self, message: Optional[str] = None, stage: Optional[str] = None,
                 retryable: bool = False):
        super().__init__(message)
        self.stage = stage
        self.retryable = retryable


class NotificationFailure(CasinoError):
    code = "NOTIFICATION_FAILURE"
    status_code = 502
    default_message = "Notification could not be delivered"


class ConfigurationError(CasinoError):
    code = "CONFIGURATION_ERROR"
    status_code = 500
    default_message = "Invalid game configuration"


class NotAuthenticated(CasinoError):
    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "Authentication required"


class MalformedRequest(CasinoError):
    code = "BAD_REQUEST"
    default_message = "Malformed request body"
