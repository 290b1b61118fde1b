"""Flag which activities gate the tour reward.

Revision ID: 0003
Revises: 0002
Create Date: 2026-10-19 14:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "0003"
down_revision: Union[str, None] = "0002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.add_column(
        "activities",
        sa.Column("counts_toward_reward", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )
    # Crossword points activity was created on demand before this flag existed
    op.execute("UPDATE activities SET counts_toward_reward = false WHERE name = 'Crossword Puzzle'")


def downgrade() -> None:
    op.drop_column("activities", "counts_toward_reward")
