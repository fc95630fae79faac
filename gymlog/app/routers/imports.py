"""Router for importing workouts from the plain-text log format."""

import logging
from datetime import date
from typing import Literal, Union

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from gymlog.app.auth import require_editor
from gymlog.app.dependencies import workout_store
from gymlog.models.user import User
from gymlog.models.workout import (
    DuplicateAction,
    DuplicateConflict,
    ExerciseRef,
    ParseError,
    WorkoutRef,
)
from gymlog.load.workout_import import (
    DuplicatesOutcome,
    ParseErrorsOutcome,
    WorkoutImportError,
    WorkoutStore,
    import_workouts,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/import", tags=["import"])


# --- Request Models ---


class ImportRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    duplicate_action: DuplicateAction = Field(default="ask", alias="duplicateAction")


# --- Response Models ---


class ImportData(BaseModel):
    workouts: list[WorkoutRef]
    exercises: list[ExerciseRef]
    skipped: list[date]


class ImportSuccessResponse(BaseModel):
    success: Literal[True] = True
    data: ImportData
    message: str


class ImportErrorsResponse(BaseModel):
    """The text has syntax errors. Fix them and resubmit."""

    success: Literal[False] = False
    errors: list[ParseError]
    message: str


class ImportDuplicatesResponse(BaseModel):
    """Some dates already have workouts. Resubmit with an explicit duplicateAction."""

    success: Literal[False] = False
    duplicates: list[DuplicateConflict]
    message: str


ImportResponse = Union[
    ImportSuccessResponse, ImportErrorsResponse, ImportDuplicatesResponse
]


# --- Endpoints ---


@router.post("", response_model=ImportResponse)
async def import_workout_text(
    request: ImportRequest,
    store: WorkoutStore = Depends(workout_store),
    user: User = Depends(require_editor),
):
    """Import workouts from text for the current user.

    Nothing is stored if the text has errors, or if it has duplicate dates and
    `duplicateAction` is "ask". A storage failure part way through returns 500;
    workouts saved before the failure are kept.
    """
    logger.info(
        f"Importing workout text for user {user.id} "
        f"({len(request.text)} chars, duplicate_action={request.duplicate_action})"
    )
    try:
        outcome = import_workouts(
            store, user.id, request.text, request.duplicate_action
        )
    except WorkoutImportError as e:
        return JSONResponse(
            status_code=500,
            content={"success": False, "error": str(e)},
        )

    if isinstance(outcome, ParseErrorsOutcome):
        return ImportErrorsResponse(errors=outcome.errors, message=outcome.message)
    if isinstance(outcome, DuplicatesOutcome):
        return ImportDuplicatesResponse(
            duplicates=outcome.duplicates, message=outcome.message
        )
    return ImportSuccessResponse(
        data=ImportData(
            workouts=outcome.workouts,
            exercises=outcome.exercises,
            skipped=outcome.skipped,
        ),
        message=outcome.message,
    )
