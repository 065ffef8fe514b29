"""Error Hierarchy — typed, categorized exceptions for every directory failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; store errors (500-level) are critical
    - to_response() produces the flat REST envelope the client already parses
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ChurchDbError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - Login failures keep the {success, message} envelope the login page expects;
      everything else uses {error: <string>}
    - Zero matches is never an error: lookups return empty results or found=false
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


class ChurchDbError(Exception):
    """Base exception for all directory errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error envelope."""
        return {"error": self.message}


# ─── Request Errors (400-level) ─────────────────────────────────

class MissingParameterError(ChurchDbError):
    """Required query/body parameter absent or blank."""
    def __init__(self, parameter: str):
        super().__init__(
            f"missing {parameter}", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, 400,
        )
        self.parameter = parameter


class EndpointNotFoundError(ChurchDbError):
    """API-prefixed path with no matching route."""
    def __init__(self):
        super().__init__(
            "API endpoint not found", "ENDPOINT_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, 404,
        )


# ─── Auth Errors ────────────────────────────────────────────────

class AuthError(ChurchDbError):
    """Base for credential and session failures."""
    def __init__(self, message: str, code: str, http_status: int = 401):
        super().__init__(
            message, code, ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, http_status,
        )


class LoginError(AuthError):
    """Login rejected. Uses the login page envelope."""

    def to_response(self) -> dict:
        return {"success": False, "message": self.message}


class InvalidCredentialsError(LoginError):
    """Username or password missing from the login body."""
    def __init__(self):
        super().__init__(
            "Missing username or password", "INVALID_CREDENTIALS", 400,
        )


class UnauthorizedError(LoginError):
    """Username/password pair does not match."""
    def __init__(self):
        super().__init__("Invalid credentials", "UNAUTHORIZED", 401)


class NotAuthenticatedError(AuthError):
    """Protected API path reached without a valid session."""
    def __init__(self, expired: bool = False):
        super().__init__(
            "session expired" if expired else "not authenticated",
            "SESSION_EXPIRED" if expired else "NOT_AUTHENTICATED",
            401,
        )
        self.expired = expired


# ─── Store Errors (500-level) ───────────────────────────────────

class StoreUnavailableError(ChurchDbError):
    """Connection pool was never initialized (startup failure)."""
    def __init__(self):
        super().__init__(
            "DB not connected", "STORE_UNAVAILABLE",
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, 500,
        )


class StoreQueryError(ChurchDbError):
    """Query failed. The driver detail is logged, never returned."""
    def __init__(self, operation: str):
        super().__init__(
            "server error", "STORE_QUERY_FAILED",
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation
