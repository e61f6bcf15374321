# ============================================================================
# Authentication Endpoints
# ============================================================================
"""
Account registration and login.

Failed logins are counted per email; after MAX_LOGIN_ATTEMPTS the email is
locked out for LOGIN_TIMEOUT_MINUTES and further attempts get a 429.
"""
from fastapi import APIRouter, Depends, status

from app.api.deps import get_account_service
from app.core.security import create_access_token
from app.config import get_settings
from app.schemas.user import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from app.services.accounts.account_service import AccountService

settings = get_settings()
router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    accounts: AccountService = Depends(get_account_service)
):
    """Create a new account"""
    return await accounts.register(request.username, request.email, request.password)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    accounts: AccountService = Depends(get_account_service)
):
    """Log in with email and password"""
    user = await accounts.authenticate(request.email, request.password)

    access_token = create_access_token({"sub": str(user.id)})
    return TokenResponse(
        access_token=access_token,
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        user_id=str(user.id),
    )
