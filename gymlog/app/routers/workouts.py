"""Router for reading and editing workouts and their exercises."""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, ConfigDict, Field

from gymlog.app.auth import require_editor, require_viewer
from gymlog.models.user import User
from gymlog.models.workout import (
    ExerciseHistoryItem,
    ExerciseInput,
    ExerciseLinkUpdate,
    ExerciseRef,
    ExerciseUpdate,
    SessionType,
    WorkoutDetail,
    WorkoutInput,
    WorkoutRef,
    WorkoutUpdate,
)
from gymlog.db.workouts import (
    add_exercise,
    delete_exercise,
    delete_workout,
    find_workout,
    get_exercise_log,
    get_workout_detail,
    get_workouts,
    insert_workout,
    reorder_exercises,
    set_exercise_link,
    set_exercise_links,
    update_exercise,
    update_workout,
)
from gymlog.agg import exercise_history

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/workouts", tags=["workouts"])


class ExerciseLinkRequest(BaseModel):
    """Mark an exercise as part of a superset with the one before it."""

    model_config = ConfigDict(populate_by_name=True)

    is_linked_to_previous: bool = Field(alias="isLinkedToPrevious")


class ExerciseOrderRequest(BaseModel):
    """Every exercise of a workout, in the new order."""

    model_config = ConfigDict(populate_by_name=True)

    exercise_ids: list[UUID] = Field(alias="exerciseIds")


@router.get("", response_model=list[WorkoutRef])
async def list_workouts(
    start_date: Optional[date] = Query(None, description="Only workouts on or after this date"),
    end_date: Optional[date] = Query(None, description="Only workouts on or before this date"),
    user: User = Depends(require_viewer),
) -> list[WorkoutRef]:
    """Get the current user's workouts, newest first."""
    if start_date and end_date and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date must be on or before end_date",
        )
    return get_workouts(user.id, start_date, end_date)


@router.get("/{workout_date}", response_model=WorkoutDetail)
async def read_workout(
    workout_date: date,
    user: User = Depends(require_viewer),
) -> WorkoutDetail:
    """Get the workout on a date with its exercises in order."""
    detail = get_workout_detail(user.id, workout_date)
    if detail is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No workout on {workout_date.isoformat()}",
        )
    return detail


@router.post("", response_model=WorkoutRef, status_code=status.HTTP_201_CREATED)
async def add_workout(
    workout: WorkoutInput,
    user: User = Depends(require_editor),
) -> WorkoutRef:
    """Create an empty workout by hand."""
    if find_workout(user.id, workout.date) is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"There is already a workout on {workout.date.isoformat()}",
        )
    created = insert_workout(user.id, workout.date, workout.session_type, workout.muscle_tags)
    logger.info(f"Created workout {created.id} on {workout.date}")
    return created


@router.patch("/{workout_date}", response_model=WorkoutRef)
async def edit_workout(
    workout_date: date,
    update: WorkoutUpdate,
    user: User = Depends(require_editor),
) -> WorkoutRef:
    """Change the session type or muscle tags of a workout."""
    workout = update_workout(user.id, workout_date, update)
    if workout is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No workout on {workout_date.isoformat()}",
        )
    return workout


@router.delete("/{workout_date}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_workout(
    workout_date: date,
    user: User = Depends(require_editor),
) -> None:
    """Delete the workout on a date along with its exercises."""
    workout = find_workout(user.id, workout_date)
    if workout is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No workout on {workout_date.isoformat()}",
        )
    delete_workout(workout.id)


@router.post(
    "/{workout_date}/exercises",
    response_model=ExerciseRef,
    status_code=status.HTTP_201_CREATED,
)
async def append_exercise(
    workout_date: date,
    exercise: ExerciseInput,
    user: User = Depends(require_editor),
) -> ExerciseRef:
    """Add an exercise at the end of a workout."""
    workout = find_workout(user.id, workout_date)
    if workout is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No workout on {workout_date.isoformat()}",
        )
    return add_exercise(workout.id, exercise)


@router.put("/{workout_date}/exercises/order", response_model=list[ExerciseRef])
async def order_exercises(
    workout_date: date,
    request: ExerciseOrderRequest,
    user: User = Depends(require_editor),
) -> list[ExerciseRef]:
    """Renumber a workout's exercises in the order given."""
    workout = find_workout(user.id, workout_date)
    if workout is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No workout on {workout_date.isoformat()}",
        )
    try:
        return reorder_exercises(workout.id, request.exercise_ids)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/exercises/history", response_model=list[ExerciseHistoryItem])
async def read_exercise_history(
    session_type: Optional[SessionType] = Query(
        None, description="Only exercises from workouts of this session type"
    ),
    user: User = Depends(require_viewer),
) -> list[ExerciseHistoryItem]:
    """Get how often each exercise has been done, most frequent first."""
    return exercise_history(get_exercise_log(user.id, session_type))


@router.patch("/exercises/links", response_model=list[ExerciseRef])
async def link_exercises(
    updates: list[ExerciseLinkUpdate],
    user: User = Depends(require_editor),
) -> list[ExerciseRef]:
    """Set the superset links of several exercises at once."""
    exercises = set_exercise_links(user.id, updates)
    if exercises is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="One or more exercises not found",
        )
    logger.info(f"Updated superset links on {len(exercises)} exercises")
    return exercises


@router.patch("/exercises/{exercise_id}", response_model=ExerciseRef)
async def edit_exercise(
    exercise_id: UUID,
    update: ExerciseUpdate,
    user: User = Depends(require_editor),
) -> ExerciseRef:
    try:
        exercise = update_exercise(user.id, exercise_id, update)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    if exercise is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Exercise {exercise_id} not found",
        )
    return exercise


@router.delete("/exercises/{exercise_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_exercise(
    exercise_id: UUID,
    user: User = Depends(require_editor),
) -> None:
    if not delete_exercise(user.id, exercise_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Exercise {exercise_id} not found",
        )
    logger.info(f"Deleted exercise {exercise_id}")


@router.patch("/exercises/{exercise_id}/link", response_model=ExerciseRef)
async def link_exercise(
    exercise_id: UUID,
    request: ExerciseLinkRequest,
    user: User = Depends(require_editor),
) -> ExerciseRef:
    """Link an exercise to the previous one, or break the link."""
    exercise = set_exercise_link(user.id, exercise_id, request.is_linked_to_previous)
    if exercise is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Exercise {exercise_id} not found",
        )
    logger.info(
        f"Set is_linked_to_previous={request.is_linked_to_previous} on exercise {exercise_id}"
    )
    return exercise
