from fastapi import APIRouter,Depends,HTTPException,status
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime
from sqlalchemy import select
from jose import JWTError
import uuid


from app.database import get_db
from app.models import User
from app.auth.jwt import create_access_token,create_refresh_token,verify_token,revoke_token
from app.auth.password_security import verify_password
from app.auth.dependencies import bearer_scheme, is_admin
from app.schemas.user import TokenResponse, AccessTokenResponse, AdminSession
from app.schemas.admin_login import AdminLoginRequest, RefreshRequest
from app.helpers.logger import get_logger

logger = get_logger()

router=APIRouter(
    tags=["Admin Login"],
    prefix="/admin"
)

# ---------------------------
# Admin login route
# ---------------------------
@router.post("/login", response_model=TokenResponse)
async def admin_login(request: AdminLoginRequest, db: AsyncSession = Depends(get_db)):
    """
    Authenticate an admin using email and password.
    Returns access and refresh JWT tokens on success.
    Raises 401 if credentials are invalid.
    """
    result = await db.execute(select(User).where(User.email == request.email))
    admin = result.scalars().first()

    # Verify password (runs even for unknown emails)
    password_ok = verify_password(request.password, admin.password_hash if admin else None)

    if not admin or not admin.is_active or not password_ok:
        logger.info(f"Failed admin sign-in for {request.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password"
        )

    # Update last login
    admin.last_login = datetime.utcnow()
    db.add(admin)
    await db.commit()

    logger.info(f"Admin signed in: {admin.email}")

    # Generate tokens
    return TokenResponse(
        access_token=create_access_token({"user_id": str(admin.id)}),
        refresh_token=create_refresh_token({"user_id": str(admin.id)}),
    )


# ---------------------------
# Exchange refresh token
# ---------------------------
@router.post("/refresh", response_model=AccessTokenResponse)
async def refresh_access_token(request: RefreshRequest, db: AsyncSession = Depends(get_db)):
    try:
        payload = verify_token(request.refresh_token, expected_type="refresh")
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    try:
        user_id = uuid.UUID(payload.get("user_id") or "")
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid token payload")

    result = await db.execute(select(User).where(User.id == user_id))
    admin = result.scalars().first()
    if not admin or not admin.is_active:
        raise HTTPException(status_code=401, detail="User not found")

    return AccessTokenResponse(access_token=create_access_token({"user_id": str(admin.id)}))


# ---------------------------
# Current session
# ---------------------------
@router.get("/session", response_model=AdminSession)
async def get_session(current_admin: AdminSession = Depends(is_admin)):
    return current_admin


# ---------------------------
# Sign out
# ---------------------------
@router.post("/logout")
async def admin_logout(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    current_admin: AdminSession = Depends(is_admin),
):
    revoke_token(verify_token(credentials.credentials, expected_type="access"))
    logger.info(f"Admin signed out: {current_admin.email}")
    return {"detail": "Successfully signed out of admin panel."}
