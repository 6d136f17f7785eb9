"""Mood entry CRUD routes wrapping moods.storage (per-user)."""

from datetime import datetime
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, status

from moods.models import MoodEntry
from web.auth import get_current_user
from web.deps import get_store
from web.models import MoodEntryCreate, MoodEntryOut, MoodEntryUpdate
from web.user_store import record_activity

logger = structlog.get_logger()

router = APIRouter(prefix="/api/moods", tags=["moods"])


@router.get("", response_model=list[MoodEntryOut])
async def list_entries(
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    limit: Optional[int] = Query(default=None, ge=1, le=1000),
    user: dict = Depends(get_current_user),
):
    store = get_store()
    entries = store.list_entries(user["id"], start=start, end=end, limit=limit)
    return [MoodEntryOut.from_entry(e) for e in entries]


@router.get("/{entry_id}", response_model=MoodEntryOut)
async def get_entry(
    entry_id: str,
    user: dict = Depends(get_current_user),
):
    entry = get_store().get(user["id"], entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return MoodEntryOut.from_entry(entry)


@router.post("", response_model=MoodEntryOut, status_code=status.HTTP_201_CREATED)
async def create_entry(
    body: MoodEntryCreate,
    user: dict = Depends(get_current_user),
):
    store = get_store()
    entry = MoodEntry(
        user_id=user["id"],
        date=body.date,
        mood=body.mood.value,
        content=body.content,
        tags=tuple(body.tags),
    )
    try:
        entry_id = store.save(entry)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    record_activity(user["id"], "entry_created", {"mood": entry.mood})

    saved = store.get(user["id"], entry_id)
    if saved is None:
        logger.error("moods.create_not_persisted", entry_id=entry_id)
        raise HTTPException(status_code=500, detail="Entry could not be saved")
    return MoodEntryOut.from_entry(saved)


def _apply_update(user_id: str, entry_id: str, fields: dict) -> MoodEntryOut:
    fields = {k: v for k, v in fields.items() if v is not None}
    if "mood" in fields:
        fields["mood"] = fields["mood"].value
    try:
        updated = get_store().update(user_id, entry_id, **fields)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    if updated is None:
        raise HTTPException(status_code=404, detail="Entry not found")
    return MoodEntryOut.from_entry(updated)


@router.put("/{entry_id}", response_model=MoodEntryOut)
async def replace_entry(
    entry_id: str,
    body: MoodEntryCreate,
    user: dict = Depends(get_current_user),
):
    return _apply_update(user["id"], entry_id, body.model_dump())


@router.patch("/{entry_id}", response_model=MoodEntryOut)
async def patch_entry(
    entry_id: str,
    body: MoodEntryUpdate,
    user: dict = Depends(get_current_user),
):
    fields = body.model_dump(exclude_unset=True)
    if not fields:
        raise HTTPException(status_code=400, detail="No fields to update")
    return _apply_update(user["id"], entry_id, fields)


@router.delete("/{entry_id}")
async def delete_entry(
    entry_id: str,
    user: dict = Depends(get_current_user),
):
    if not get_store().delete(user["id"], entry_id):
        raise HTTPException(status_code=404, detail="Entry not found")
    record_activity(user["id"], "entry_deleted")
    return {"message": "Entry deleted successfully"}
