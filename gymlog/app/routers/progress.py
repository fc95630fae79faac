"""Router for body measurements (weight and height)."""

import logging
from uuid import UUID

import psycopg
from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from gymlog.app.auth import require_editor, require_viewer
from gymlog.models.user import User
from gymlog.models.progress import ProgressEntry, ProgressImportSummary, ProgressInput
from gymlog.db.progress import delete_progress, get_progress, upsert_progress
from gymlog.parsing.progress_text import format_progress_text, parse_progress_line

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/progress", tags=["progress"])

EXPORT_FILENAME = "progreso.txt"


class ProgressImportRequest(BaseModel):
    text: str


@router.get("", response_model=list[ProgressEntry])
async def list_progress(user: User = Depends(require_viewer)) -> list[ProgressEntry]:
    """Get the current user's measurements, newest first."""
    return get_progress(user.id)


@router.post("", response_model=ProgressEntry)
async def save_progress(
    entry: ProgressInput,
    user: User = Depends(require_editor),
) -> ProgressEntry:
    """Store a measurement, replacing any existing one on the same date."""
    return upsert_progress(user.id, entry)


@router.delete("/{progress_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_progress(
    progress_id: UUID,
    user: User = Depends(require_editor),
) -> None:
    if not delete_progress(user.id, progress_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Progress entry {progress_id} not found",
        )


@router.post("/import", response_model=ProgressImportSummary)
async def import_progress_text(
    request: ProgressImportRequest,
    user: User = Depends(require_editor),
) -> ProgressImportSummary:
    """Import one measurement per non-blank line.

    Bad lines are reported in `errorDetails` and don't stop the rest from being stored.
    """
    lines = [line.strip() for line in request.text.splitlines() if line.strip()]
    error_details: list[str] = []
    for line in lines:
        try:
            upsert_progress(user.id, parse_progress_line(line))
        except ValueError as e:
            error_details.append(f"{line}: {e}")
        except psycopg.Error as e:
            logger.warning(f"Failed to store progress line {line!r}: {e}")
            error_details.append(f"{line}: {e}")

    summary = ProgressImportSummary(
        total=len(lines),
        success=len(lines) - len(error_details),
        errors=len(error_details),
        error_details=error_details,
    )
    logger.info(
        f"Imported {summary.success}/{summary.total} progress lines for user {user.id}"
    )
    return summary


@router.get("/export")
async def export_progress_text(user: User = Depends(require_viewer)) -> Response:
    """Download all measurements as text, oldest first."""
    text = format_progress_text(get_progress(user.id))
    return Response(
        content=text,
        media_type="text/plain",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
