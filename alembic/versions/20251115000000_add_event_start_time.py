"""Add events.start_time: 24-hour start time used to order events within a day.

Revision ID: 20251115000000
Revises: 20251101000000
Create Date: 2025-11-15

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from app.services.events import normalize_start_time

revision: str = "20251115000000"
down_revision: Union[str, None] = "20251101000000"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("events") as batch_op:
        batch_op.add_column(sa.Column("start_time", sa.String(length=5), nullable=True))

    events = sa.table(
        "events",
        sa.column("id", sa.Integer()),
        sa.column("time", sa.String()),
        sa.column("start_time", sa.String()),
    )
    conn = op.get_bind()
    rows = conn.execute(sa.select(events.c.id, events.c.time).where(events.c.time.isnot(None)))
    for event_id, time in rows.fetchall():
        conn.execute(
            events.update()
            .where(events.c.id == event_id)
            .values(start_time=normalize_start_time(time))
        )


def downgrade() -> None:
    with op.batch_alter_table("events") as batch_op:
        batch_op.drop_column("start_time")
