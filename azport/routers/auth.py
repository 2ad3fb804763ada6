import logging
import math

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from azport.config import settings
from azport.core.rate_limiter import login_throttle
from azport.core.security import create_access_token, verify_password
from azport.database import get_db
from azport.dependencies import get_current_user, get_token_claims
from azport.models.user import User
from azport.repos.user_repo import get_by_username, set_password
from azport.schemas.auth import LoginRequest, PasswordChangeRequest, TokenResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["auth"])
MIN_PASSWORD_LENGTH = 8


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    return request.client.host if request.client else "unknown"


def _too_many_attempts(retry_after: int) -> HTTPException:
    minutes = math.ceil(retry_after / 60)
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=f"Too many failed login attempts. Please try again in {minutes} minutes.",
        headers={"Retry-After": str(retry_after)},
    )


@router.post("/auth", response_model=TokenResponse)
def login(data: LoginRequest, request: Request, db: Session = Depends(get_db)):
    ip = client_ip(request)
    retry_after = login_throttle.retry_after(ip)
    if retry_after:
        raise _too_many_attempts(retry_after)
    if not data.username or not data.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required",
        )
    try:
        user = get_by_username(db, data.username)
        # Same answer for unknown user and wrong password to avoid username enumeration
        if not user or not verify_password(data.password, user.password_hash):
            logger.info("Failed login for username=%s from %s", data.username, ip)
            blocked_for = login_throttle.register_failure(ip)
            if blocked_for:
                logger.warning("Blocking %s for %d seconds after repeated failed logins", ip, blocked_for)
                raise _too_many_attempts(blocked_for)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )
        login_throttle.reset(ip)
        logger.info("User logged in: %s", user.username)
        return TokenResponse(token=create_access_token(user.id, user.username))
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Login failed for username=%s: %s", data.username, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error") from e


@router.post("/auth/verify")
def verify_token(claims: dict = Depends(get_token_claims)):
    return {"message": "Token is valid", "user": claims}


@router.put("/user")
def change_password(
    data: PasswordChangeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Change a user's password after re-checking the current one."""
    if not data.username or not data.current_password or not data.new_password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username, current password, and new password are required",
        )
    if len(data.new_password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"New password must be at least {MIN_PASSWORD_LENGTH} characters",
        )
    try:
        user = get_by_username(db, data.username)
        if not user:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
        if not verify_password(data.current_password, user.password_hash):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Current password is incorrect",
            )
        set_password(db, user.id, data.new_password)
        logger.info("Password changed for %s by %s", user.username, current_user.username)
        return {"message": "Password updated successfully"}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Password change failed for username=%s: %s", data.username, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update password") from e
