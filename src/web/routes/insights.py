"""Mood analytics routes: full insights and dashboard cards."""

from datetime import datetime
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException

from shared_types import FrequencyWindow
from web.auth import get_current_user
from web.deps import get_config, get_engine, get_now, get_store

logger = structlog.get_logger()

router = APIRouter(prefix="/api/insights", tags=["insights"])


def _compute(user_id: str, as_of: Optional[datetime], window: FrequencyWindow):
    entries = get_store().list_entries(user_id)
    now = as_of or get_now()
    try:
        return get_engine().compute(entries, now, frequency_window=window)
    except Exception as e:
        logger.error("insights.compute_error", user_id=user_id, error=str(e))
        raise HTTPException(status_code=500, detail="Could not compute insights")


@router.get("")
async def get_insights(
    as_of: Optional[datetime] = None,
    user: dict = Depends(get_current_user),
):
    """Stats, weekday chart, monthly distribution, insights and recommendations."""
    window = get_config().analytics.insights_frequency_window
    return _compute(user["id"], as_of, window).to_dict()


@router.get("/dashboard")
async def get_dashboard(
    as_of: Optional[datetime] = None,
    user: dict = Depends(get_current_user),
):
    """Headline cards: weekly average, most frequent mood, entry counts, streaks."""
    window = get_config().analytics.dashboard_frequency_window
    return _compute(user["id"], as_of, window).to_dashboard_dict()
