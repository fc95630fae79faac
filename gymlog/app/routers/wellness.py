"""Router for daily wellness logs."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, status

from gymlog.app.auth import require_editor, require_viewer
from gymlog.models.user import User
from gymlog.models.wellness import WellnessEntry, WellnessInput, WellnessUpdate
from gymlog.db.wellness import (
    create_wellness_entry,
    delete_wellness_entry,
    get_wellness_by_date,
    get_wellness_entries,
    update_wellness_entry,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wellness", tags=["wellness"])


@router.get("", response_model=list[WellnessEntry])
async def list_wellness(user: User = Depends(require_viewer)) -> list[WellnessEntry]:
    """Get the current user's wellness logs, newest first."""
    return get_wellness_entries(user.id)


@router.get("/{entry_date}", response_model=WellnessEntry)
async def read_wellness(
    entry_date: date,
    user: User = Depends(require_viewer),
) -> WellnessEntry:
    entry = get_wellness_by_date(user.id, entry_date)
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No wellness entry on {entry_date.isoformat()}",
        )
    return entry


@router.post("", response_model=WellnessEntry, status_code=status.HTTP_201_CREATED)
async def add_wellness(
    entry: WellnessInput,
    user: User = Depends(require_editor),
) -> WellnessEntry:
    return create_wellness_entry(user.id, entry)


@router.patch("/{entry_id}", response_model=WellnessEntry)
async def edit_wellness(
    entry_id: int,
    update: WellnessUpdate,
    user: User = Depends(require_editor),
) -> WellnessEntry:
    """Change some fields of a wellness log."""
    try:
        entry = update_wellness_entry(user.id, entry_id, update)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if entry is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Wellness entry {entry_id} not found",
        )
    return entry


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_wellness(
    entry_id: int,
    user: User = Depends(require_editor),
) -> None:
    if not delete_wellness_entry(user.id, entry_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Wellness entry {entry_id} not found",
        )
    logger.info(f"Deleted wellness entry {entry_id}")
