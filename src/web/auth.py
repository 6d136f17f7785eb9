"""Bearer-token auth: HS256 JWTs signed with MOODLOG_JWT_SECRET."""

import os
from typing import Optional

import structlog
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from web.user_store import touch_user

logger = structlog.get_logger()

ALGORITHM = "HS256"
SECRET_ENV = "MOODLOG_JWT_SECRET"
# Optional: when set, tokens must carry a matching "aud" claim
AUDIENCE_ENV = "MOODLOG_JWT_AUDIENCE"

bearer = HTTPBearer()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def decode_claims(token: str, secret: str, audience: Optional[str] = None) -> dict:
    """Verify signature, expiry and audience; return the identity claims.

    Raises:
        HTTPException: 401 when the token is rejected or has no subject
    """
    try:
        payload = jwt.decode(
            token,
            secret,
            algorithms=[ALGORITHM],
            audience=audience,
            options={"verify_aud": audience is not None, "require_aud": audience is not None},
        )
    except JWTError as e:
        logger.info("auth.token_rejected", reason=str(e))
        raise _unauthorized("Invalid or expired token")

    subject = payload.get("sub")
    if not subject or not isinstance(subject, str):
        logger.info("auth.missing_subject")
        raise _unauthorized("Invalid token: missing sub")
    return {"id": subject, "email": payload.get("email"), "name": payload.get("name")}


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer),
) -> dict:
    """Resolve the caller; first-time subjects are registered in the account store."""
    secret = os.getenv(SECRET_ENV)
    if not secret:
        logger.error("auth.secret_missing", env=SECRET_ENV)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"{SECRET_ENV} not configured",
        )
    claims = decode_claims(credentials.credentials, secret, os.getenv(AUDIENCE_ENV) or None)
    touch_user(claims["id"], email=claims["email"], name=claims["name"])
    return claims
