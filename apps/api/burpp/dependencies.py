import re
from typing import Annotated, AsyncGenerator

from fastapi import Depends, HTTPException, Path, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from burpp.db.session import async_session
from burpp.db.models import UserProfile
from burpp.core.auth import decode_access_token
from burpp.core.constants import UUID_PATTERN

security = HTTPBearer(auto_error=False)

# Path ids that are not UUIDs are rejected with 422 instead of failing in the driver
PathId = Annotated[str, Path(pattern=UUID_PATTERN)]

_uuid_re = re.compile(UUID_PATTERN)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserProfile:
    if not credentials:
        raise _unauthorized("Not authenticated")
    user_id = decode_access_token(credentials.credentials)
    if not user_id or not _uuid_re.match(user_id):
        raise _unauthorized("Invalid or expired token")
    result = await db.execute(select(UserProfile).where(UserProfile.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise _unauthorized("User not found")
    if not user.is_active:
        raise _unauthorized("Account is inactive")
    return user


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserProfile | None:
    """Resolve the caller when a valid token is sent; anonymous otherwise."""
    if not credentials:
        return None
    user_id = decode_access_token(credentials.credentials)
    if not user_id or not _uuid_re.match(user_id):
        return None
    result = await db.execute(select(UserProfile).where(UserProfile.id == user_id))
    user = result.scalar_one_or_none()
    if user is None or not user.is_active:
        return None
    return user


async def require_admin(
    current_user: Annotated[UserProfile, Depends(get_current_user)],
) -> UserProfile:
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Unauthorized - Admin access required",
        )
    return current_user
