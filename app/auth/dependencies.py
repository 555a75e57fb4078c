from fastapi import Depends,HTTPException,status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from jose import JWTError
import uuid


from app.database import get_db
from app.models import User
from app.auth.jwt import verify_token
from app.schemas.user import AdminSession


bearer_scheme = HTTPBearer()


async def resolve_admin(token: str, db: AsyncSession) -> AdminSession:
    """
    Verify an access token and load the admin it belongs to.
    Raises 401 if the token is invalid, expired, revoked, or the user is gone.
    """
    try:
        payload = verify_token(token, expected_type="access")
        user_id_str: str = payload.get("user_id")
        if not user_id_str:
            raise HTTPException(status_code=401, detail="Invalid token payload")

        # Convert string back to UUID
        user_id = uuid.UUID(user_id_str)

    except (JWTError, ValueError):  # ValueError for invalid UUID string
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalars().first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="This account is disabled"
        )

    return AdminSession(id=user.id, email=user.email, name=user.name, token_id=payload.get("jti"))


async def is_admin(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db)
) -> AdminSession:
    """
    Allow only signed-in administrators.
    """
    return await resolve_admin(credentials.credentials, db)
