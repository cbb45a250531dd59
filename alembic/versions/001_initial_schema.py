"""Initial schema — tickets and the ticket id sequence.

Revision ID: 001
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Tickets
    op.create_table(
        "tickets",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("ticket_id", sa.String(20), unique=True, nullable=False),
        sa.Column("citizen_message", sa.Text, nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("location", sa.Text, nullable=False),
        sa.Column("priority", sa.String(10), nullable=False),
        sa.Column("summary", sa.Text, nullable=False, server_default=""),
        sa.Column("status", sa.String(20), nullable=False, server_default="Open"),
        sa.Column("assigned_team", sa.String(50), nullable=True),
        sa.Column("photo_ref", sa.String(255), nullable=True),
        sa.Column("photo_analysis", sa.Text, nullable=True),
        sa.Column("fallback_used", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("submitter_id", sa.String(100), nullable=True),
        sa.Column("lat", sa.Float, nullable=True),
        sa.Column("lng", sa.Float, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.create_index("idx_tickets_created_at", "tickets", ["created_at"])
    op.create_index("idx_tickets_status", "tickets", ["status"])
    op.create_index("idx_tickets_submitter", "tickets", ["submitter_id"])

    # Ticket id sequence (one row per counter)
    sequences = op.create_table(
        "ticket_sequences",
        sa.Column("name", sa.String(50), primary_key=True),
        sa.Column("value", sa.Integer, nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.now()),
    )
    op.bulk_insert(sequences, [{"name": "ticket_id", "value": 0}])


def downgrade() -> None:
    op.drop_table("ticket_sequences")
    op.drop_index("idx_tickets_submitter", table_name="tickets")
    op.drop_index("idx_tickets_status", table_name="tickets")
    op.drop_index("idx_tickets_created_at", table_name="tickets")
    op.drop_table("tickets")
