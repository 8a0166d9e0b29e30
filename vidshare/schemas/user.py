from datetime import datetime

from pydantic import EmailStr, Field

from vidshare.schemas.base import CamelModel


class UserCreate(CamelModel):
    username: str = Field(..., min_length=3, max_length=50, description="Username must be between 3 and 50 characters.")
    email: EmailStr = Field(..., description="A valid email address.")
    password: str = Field(..., min_length=6, max_length=72, description="Password must be between 6 and 72 characters.")


class UserLogin(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=72)


class UserResponse(CamelModel):
    id: str
    username: str
    email: str
    profile_pic: str = ""
    has_channel: bool = False
    created_at: datetime


class LoginResponse(CamelModel):
    user: UserResponse
    token: str


class AuthStatusUser(CamelModel):
    id: str


class AuthStatusResponse(CamelModel):
    success: bool
    message: str
    user: AuthStatusUser
