import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth import hash_password, verify_password
from vidshare.exceptions import DuplicateResourceError, InvalidCredentialsError, UserNotFoundError
from vidshare.models.user import User

logger = logging.getLogger(__name__)


async def register_user(username: str, email: str, password: str, db: AsyncSession) -> User:
    result = await db.execute(select(User).where(or_(User.email == email, User.username == username)))
    existing = result.scalars().first()
    if existing:
        if existing.email == email:
            raise DuplicateResourceError("User", "email", email)
        raise DuplicateResourceError("User", "username", username)

    new_user = User(
        username=username,
        email=email,
        hashed_password=hash_password(password),
    )
    db.add(new_user)
    await db.commit()
    await db.refresh(new_user)

    logger.info(f"User registered: id={new_user.id}, username={username}")
    return new_user


async def authenticate_user(email: str, password: str, db: AsyncSession) -> User:
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalars().first()
    if user is None:
        logger.warning(f"Login failed for unknown email: {email}")
        raise UserNotFoundError()
    if not verify_password(password, user.hashed_password):
        logger.warning(f"Invalid password attempt for user: {user.id}")
        raise InvalidCredentialsError()
    return user
