"""Caller's own account: profile, entry count and recent activity."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query

from web.auth import get_current_user
from web.deps import get_store
from web.user_store import activity_counts, get_user

logger = structlog.get_logger()

router = APIRouter(prefix="/api/me", tags=["account"])


@router.get("")
async def get_account(
    days: int = Query(default=30, ge=1, le=365),
    user: dict = Depends(get_current_user),
):
    account = get_user(user["id"])
    if account is None:
        # get_current_user registers every caller
        logger.error("account.not_found", user_id=user["id"])
        raise HTTPException(status_code=404, detail="Account not found")
    return {
        **account,
        "entries": get_store().count(user["id"]),
        "activity": {"days": days, "counts": activity_counts(user["id"], days=days)},
    }
