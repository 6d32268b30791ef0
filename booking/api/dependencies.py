# ============================================================================
# FILE: booking/api/dependencies.py
# Dashboard authentication: JWT access tokens and the explicit session context
# ============================================================================
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from typing import Optional
from datetime import datetime, timedelta, timezone
from jose import ExpiredSignatureError, JWTError, jwt
from uuid import UUID
import logging

from booking.config.database import get_db
from booking.config.settings import settings
from booking.models.user import User
from booking.schemas.scheduling import SessionContext
from booking.services.user.user_service import UserService

logger = logging.getLogger(__name__)

# Business owners send the token returned by /auth/login or /auth/signup
jwt_security = HTTPBearer(
    scheme_name="Dashboard Token",
    description="Access token from /api/v1/auth/login"
)

TOKEN_TYPE = "access"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# ============================================================================
# JWT Token Functions
# ============================================================================

def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Encode a signed access token.

    `data` must carry the user id as `sub`. Tokens expire after
    JWT_ACCESS_TOKEN_EXPIRE_MINUTES unless `expires_delta` is given.
    """
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

    claims = {**data, "iat": issued_at, "exp": issued_at + lifetime, "type": TOKEN_TYPE}
    return jwt.encode(claims, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def verify_access_token(token: str) -> dict:
    """Decode an access token, raising 401 when it is expired, forged or of another type."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
        raise _unauthorized("Could not validate credentials")

    if payload.get("type") != TOKEN_TYPE:
        raise _unauthorized("Invalid token type")

    return payload


# ============================================================================
# Authentication Dependencies
# ============================================================================

async def get_current_user(
        credentials: HTTPAuthorizationCredentials = Depends(jwt_security),
        db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to a stored user (401 otherwise)."""
    payload = verify_access_token(credentials.credentials)

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        raise _unauthorized("Invalid user ID in token")

    user = UserService.get_user_by_id(db, user_id)
    if user is None:
        raise _unauthorized("User not found")

    return user


async def get_current_active_user(
        current_user: User = Depends(get_current_user)
) -> User:
    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user account"
        )

    return current_user


async def get_session_context(
        current_user: User = Depends(get_current_active_user)
) -> SessionContext:
    """
    Identity handed to dashboard routes and from there into the service
    layer as a plain argument. Users without a business get 403.

    Usage in routes:
        @router.get("")
        async def list_services(session: SessionContext = Depends(get_session_context)):
            ...
    """
    if not current_user.business_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User not associated with a business"
        )

    return SessionContext(
        user_id=current_user.id,
        business_id=current_user.business_id,
        email=current_user.email,
    )
