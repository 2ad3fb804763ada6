import logging

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from azport.database import get_db
from azport.core.security import decode_access_token
from azport.models.user import User
from azport.repos.user_repo import get_by_id

logger = logging.getLogger(__name__)
security = HTTPBearer(auto_error=False)


def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    """Verify the bearer token's signature and expiry and return its claims."""
    if not credentials:
        logger.info("Auth failed: missing bearer credentials")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    claims = decode_access_token(credentials.credentials)
    if not claims:
        logger.info("Auth failed: invalid or expired token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    return claims


def get_current_user(
    db: Session = Depends(get_db),
    claims: dict = Depends(get_token_claims),
) -> User:
    """Require a valid token whose user still exists. Used by every mutating route."""
    try:
        user_id = int(claims.get("id", claims.get("sub")))
    except (TypeError, ValueError):
        user_id = None
    user = get_by_id(db, user_id) if user_id is not None else None
    if not user:
        logger.info("Auth failed: user from token not found")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return user
