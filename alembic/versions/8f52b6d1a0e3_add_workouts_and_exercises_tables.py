"""add_workouts_and_exercises_tables

Revision ID: 8f52b6d1a0e3
Revises: 3c1e9a07d2b4
Create Date: 2026-10-19 09:30:05.774120+00:00

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8f52b6d1a0e3"
down_revision: Union[str, Sequence[str], None] = "3c1e9a07d2b4"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create workouts and exercises tables."""
    # One workout per user per day
    op.execute("""
        CREATE TABLE workouts (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            date DATE NOT NULL,
            session_type VARCHAR(10) NOT NULL CHECK (session_type IN ('PUSH', 'PULL', 'LEG')),
            muscle_tags TEXT[] NOT NULL DEFAULT '{}',
            created_at TIMESTAMP NOT NULL DEFAULT NOW(),
            UNIQUE (user_id, date)
        )
    """)

    op.execute("""
        CREATE TABLE exercises (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            workout_id UUID NOT NULL REFERENCES workouts(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            sets TEXT NOT NULL,
            weights TEXT NOT NULL DEFAULT '',
            notes TEXT,
            position INTEGER NOT NULL,
            is_linked_to_previous BOOLEAN NOT NULL DEFAULT FALSE,
            created_at TIMESTAMP NOT NULL DEFAULT NOW()
        )
    """)

    op.execute("CREATE INDEX idx_exercises_workout_id ON exercises(workout_id, position)")


def downgrade() -> None:
    """Drop workouts and exercises tables."""
    op.execute("DROP INDEX IF EXISTS idx_exercises_workout_id")
    op.execute("DROP TABLE IF EXISTS exercises")
    op.execute("DROP TABLE IF EXISTS workouts")
