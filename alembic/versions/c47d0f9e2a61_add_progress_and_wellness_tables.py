"""add_progress_and_wellness_tables

Revision ID: c47d0f9e2a61
Revises: 8f52b6d1a0e3
Create Date: 2026-10-19 10:02:18.430561+00:00

"""

from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = "c47d0f9e2a61"
down_revision: Union[str, Sequence[str], None] = "8f52b6d1a0e3"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create physical_progress and wellness_tracking tables."""
    op.execute("""
        CREATE TABLE physical_progress (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            date DATE NOT NULL,
            weight NUMERIC(5, 2) CHECK (weight > 0),
            height NUMERIC(5, 2) CHECK (height > 0),
            created_at TIMESTAMP NOT NULL DEFAULT NOW(),
            UNIQUE (user_id, date),
            CHECK (weight IS NOT NULL OR height IS NOT NULL)
        )
    """)

    op.execute("""
        CREATE TABLE wellness_tracking (
            id SERIAL PRIMARY KEY,
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            date DATE NOT NULL,
            energy_level INTEGER NOT NULL CHECK (energy_level BETWEEN 1 AND 10),
            stress_level INTEGER NOT NULL CHECK (stress_level BETWEEN 1 AND 10),
            sleep_hours NUMERIC(4, 2) NOT NULL CHECK (sleep_hours BETWEEN 0 AND 14),
            sleep_quality INTEGER NOT NULL CHECK (sleep_quality BETWEEN 1 AND 10),
            muscle_soreness INTEGER NOT NULL CHECK (muscle_soreness BETWEEN 1 AND 10),
            motivation_level INTEGER NOT NULL CHECK (motivation_level BETWEEN 1 AND 10),
            notes TEXT,
            created_at TIMESTAMP NOT NULL DEFAULT NOW()
        )
    """)

    op.execute(
        "CREATE INDEX idx_wellness_tracking_user_date ON wellness_tracking(user_id, date)"
    )


def downgrade() -> None:
    """Drop physical_progress and wellness_tracking tables."""
    op.execute("DROP INDEX IF EXISTS idx_wellness_tracking_user_date")
    op.execute("DROP TABLE IF EXISTS wellness_tracking")
    op.execute("DROP TABLE IF EXISTS physical_progress")
