from datetime import datetime, timedelta
from typing import Optional
import uuid
from jose import JWTError, jwt

from app.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES, REFRESH_TOKEN_EXPIRE_DAYS

# jti -> expiry of tokens revoked by sign-out
_revoked_tokens: dict[str, datetime] = {}


def _encode(data: dict, token_type: str, expire: datetime) -> str:
    to_encode = data.copy()
    to_encode.update({"exp": expire, "type": token_type, "jti": uuid.uuid4().hex})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


# ---------------------------
# Create access token
# ---------------------------
def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Create a short-lived JWT access token.

    Parameters:
        data (dict): Claims to embed, e.g. {"user_id": "<uuid str>"}.
        expires_delta (timedelta, optional): Custom expiration time. Defaults to ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        str: Encoded JWT access token.
    """
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    return _encode(data, "access", expire)


# ---------------------------
# Create refresh token
# ---------------------------
def create_refresh_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.utcnow() + (expires_delta or timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS))
    return _encode(data, "refresh", expire)


# ---------------------------
# Verify token
# ---------------------------
def verify_token(token: str, expected_type: str = "access") -> dict:
    """
    Verify a JWT token and return its payload.

    Raises:
        JWTError: If token is invalid, expired, revoked, or of the wrong type.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as e:
        raise JWTError("Invalid or expired token") from e

    if payload.get("type") != expected_type:
        raise JWTError(f"Invalid token type. Expected '{expected_type}'.")
    if payload.get("jti") in _revoked_tokens:
        raise JWTError("Token has been revoked")
    return payload


# ---------------------------
# Revoke token (sign-out)
# ---------------------------
def revoke_token(payload: dict) -> None:
    now = datetime.utcnow()
    # forget revocations whose tokens have expired anyway
    for jti, expires_at in list(_revoked_tokens.items()):
        if expires_at < now:
            del _revoked_tokens[jti]

    jti = payload.get("jti")
    if jti:
        _revoked_tokens[jti] = datetime.utcfromtimestamp(payload.get("exp", now.timestamp()))
