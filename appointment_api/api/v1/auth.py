from fastapi import APIRouter, Depends, status

from ...api.deps import get_auth_service, get_current_user, rate_limit_check
from ...services.auth_service import AuthService
from ...schemas.auth import UserLogin, UserRegister, UserResponse, AuthResponse
from ...models.user import User

router = APIRouter(prefix="/auth", tags=["Authentication"])

@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit_check)],
)
async def register(
    user_data: UserRegister,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Register a new user and return an access token."""
    token, user = auth_service.register_user(user_data)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))

@router.post(
    "/login",
    response_model=AuthResponse,
    dependencies=[Depends(rate_limit_check)],
)
async def login(
    login_data: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Authenticate user and return an access token."""
    token, user = auth_service.authenticate_user(login_data)
    return AuthResponse(token=token, user=UserResponse.model_validate(user))

@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """Get current user information."""
    return UserResponse.model_validate(current_user)
