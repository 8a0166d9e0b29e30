import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth import create_access_token, get_current_user
from vidshare.config import settings
from vidshare.database import get_db
from vidshare.models.user import User
from vidshare.schemas.user import (
    AuthStatusResponse,
    AuthStatusUser,
    LoginResponse,
    UserCreate,
    UserLogin,
    UserResponse,
)
from vidshare.schemas.video import MessageResponse
from vidshare.services.auth_service import authenticate_user, register_user

# Initialize logger
logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(data: UserCreate, db: AsyncSession = Depends(get_db)) -> UserResponse:
    """
    Create an account. Email and username must both be unused.
    """
    user = await register_user(data.username, data.email, data.password, db)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse)
async def login(data: UserLogin, response: Response, db: AsyncSession = Depends(get_db)) -> LoginResponse:
    """
    Exchange credentials for an access token.

    The token is returned in the body and also set as an http-only cookie.
    """
    user = await authenticate_user(data.email, data.password, db)

    access_token = create_access_token(data={"sub": user.id})
    response.set_cookie(
        key=settings.access_token_cookie,
        value=access_token,
        httponly=True,
        samesite="lax",
        secure=settings.environment == "production",
        max_age=settings.access_token_expire_minutes * 60,
    )
    logger.info(f"Access token created for user: {user.id}")

    return LoginResponse(user=UserResponse.model_validate(user), token=access_token)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    response.delete_cookie(settings.access_token_cookie)
    return MessageResponse(message="Logged out successfully")


@router.get("/check/status", response_model=AuthStatusResponse)
async def check_status(current_user: User = Depends(get_current_user)) -> AuthStatusResponse:
    return AuthStatusResponse(
        success=True,
        message="User is authenticated",
        user=AuthStatusUser(id=current_user.id),
    )
