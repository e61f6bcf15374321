# ============================================================================
# Custom Exceptions
# ============================================================================
from typing import Optional

class ArcadeException(Exception):
    """Base exception for Arcades4Friends"""
    def __init__(
        self,
        detail: str,
        status_code: int = 400,
        error_code: Optional[str] = None
    ):
        self.detail = detail
        self.status_code = status_code
        self.error_code = error_code or "ARCADE_ERROR"
        super().__init__(self.detail)

# ----------------------------------------------------------------------------
# Progression
# ----------------------------------------------------------------------------
class UserNotFound(ArcadeException):
    def __init__(self, user_id):
        super().__init__(
            detail=f"User not found: {user_id}",
            status_code=404,
            error_code="USER_NOT_FOUND"
        )
        self.user_id = user_id

class InvariantViolation(ArcadeException):
    def __init__(self, message: str):
        super().__init__(
            detail=message,
            status_code=422,
            error_code="INVARIANT_VIOLATION"
        )

class StorageError(ArcadeException):
    def __init__(self, message: str = "Progression store unavailable"):
        super().__init__(
            detail=message,
            status_code=503,
            error_code="STORAGE_ERROR"
        )

class ConflictError(ArcadeException):
    """Another writer changed the record between load and update"""
    def __init__(self, user_id):
        super().__init__(
            detail=f"Progression for user {user_id} was modified concurrently, retry the award",
            status_code=409,
            error_code="CONFLICT"
        )
        self.user_id = user_id

# ----------------------------------------------------------------------------
# Accounts & social
# ----------------------------------------------------------------------------
class InvalidCredentials(ArcadeException):
    def __init__(self):
        super().__init__(
            detail="Invalid email or password",
            status_code=401,
            error_code="INVALID_CREDENTIALS"
        )

class LoginTimeout(ArcadeException):
    def __init__(self, remaining_seconds: int = 0):
        super().__init__(
            detail=f"Too many failed log in attempts. Try again in {remaining_seconds} seconds.",
            status_code=429,
            error_code="LOGIN_TIMEOUT"
        )
        self.remaining_seconds = remaining_seconds

class AccountExists(ArcadeException):
    def __init__(self, field: str):
        super().__init__(
            detail=f"An account with that {field} already exists",
            status_code=400,
            error_code="ACCOUNT_EXISTS"
        )

class FollowError(ArcadeException):
    def __init__(self, message: str):
        super().__init__(
            detail=message,
            status_code=400,
            error_code="FOLLOW_ERROR"
        )

class OperatorRequired(ArcadeException):
    def __init__(self):
        super().__init__(
            detail="This action requires an operator account",
            status_code=403,
            error_code="OPERATOR_REQUIRED"
        )
