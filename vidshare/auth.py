import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config import settings
from vidshare.database import get_db
from vidshare.exceptions import AuthenticationError, InvalidTokenError, TokenExpiredError
from vidshare.models.user import User
from vidshare.utils.identity import is_valid_id

# Initialize logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# Function to hash a password
def hash_password(password: str) -> str:
    return pwd_context.hash(password)


# Function to verify a password
def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


# Function to create an access token with an expiration time
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=settings.access_token_expire_minutes)

    to_encode.update({"exp": expire})

    if "sub" not in to_encode:
        raise ValueError("Missing 'sub' claim (user id) in token data.")

    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


# Function to decode an access token into the user id it carries
def decode_access_token(token: str) -> str:
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except ExpiredSignatureError:
        logger.warning("Token expired")
        raise TokenExpiredError()
    except JWTError as e:
        logger.warning(f"JWT decoding failed: {str(e)}")
        raise InvalidTokenError()

    user_id = payload.get("sub")
    if user_id is None or not is_valid_id(user_id):
        logger.warning("Token is missing a usable 'sub' claim")
        raise InvalidTokenError("Token does not contain a valid subject")
    return str(user_id)


def extract_token(request: Request) -> str | None:
    """Read the bearer credential from the auth cookie or the Authorization header."""
    token = request.cookies.get(settings.access_token_cookie)
    if token:
        return token

    auth_header = request.headers.get("Authorization", "")
    scheme, _, credentials = auth_header.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the authenticated caller, or fail with 401."""
    token = extract_token(request)
    if not token:
        logger.debug("No access token on request")
        raise AuthenticationError()

    user_id = decode_access_token(token)

    user = await db.get(User, user_id)
    if user is None:
        logger.warning(f"Token subject {user_id} does not resolve to a user")
        raise InvalidTokenError("Could not validate credentials")

    request.state.user_id = user.id
    return user


async def get_optional_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User | None:
    """Resolve the caller if a valid credential is present; anonymous otherwise."""
    token = extract_token(request)
    if not token:
        return None

    try:
        user_id = decode_access_token(token)
    except AuthenticationError:
        return None

    user = await db.get(User, user_id)
    if user is not None:
        request.state.user_id = user.id
    return user
