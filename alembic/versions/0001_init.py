"""init
Revision ID: 0001_init
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa

revision = "0001_init"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "events",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("organizer_name", sa.String(length=200), nullable=False, server_default=""),
        sa.Column("event_name", sa.String(length=300), nullable=False),
        sa.Column("has_tickets", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("city", sa.String(length=120), nullable=False),
        sa.Column("country", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("full_address", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("latitude", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("longitude", sa.String(length=40), nullable=False, server_default=""),
        sa.Column("state", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("street", sa.String(length=300), nullable=False, server_default=""),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("timezone", sa.String(length=64), nullable=False, server_default=""),
        sa.Column("event_url", sa.Text(), nullable=False, server_default=""),
        sa.Column("provider", sa.String(length=120), nullable=False, server_default=""),
        sa.Column("price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("image_url", sa.Text(), nullable=False, server_default=""),
        sa.Column("type", sa.String(length=60), nullable=False),
    )
    op.create_index("ix_events_created_at", "events", ["created_at"])
    op.create_index("ix_events_event_name", "events", ["event_name"])
    op.create_index("ix_events_city", "events", ["city"])
    op.create_index("ix_events_end_time", "events", ["end_time"])
    op.create_index("ix_events_type", "events", ["type"])
    op.create_index("ix_events_price_created_at_id", "events", ["price", "created_at", "id"])
    op.create_index("ix_events_start_time_id", "events", ["start_time", "id"])
    op.create_index("ix_events_type_created_at_id", "events", ["type", "created_at", "id"])

    op.create_table(
        "tracking_events",
        sa.Column("id", sa.String(length=64), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("action", sa.String(length=120), nullable=False),
        sa.Column("payload", sa.Text(), nullable=False, server_default=""),
        sa.Column("user_agent", sa.String(length=500), nullable=False, server_default=""),
        sa.Column("user_name", sa.String(length=200), nullable=False, server_default=""),
    )
    op.create_index("ix_tracking_events_created_at", "tracking_events", ["created_at"])
    op.create_index("ix_tracking_events_action", "tracking_events", ["action"])

def downgrade():
    op.drop_index("ix_tracking_events_action", table_name="tracking_events")
    op.drop_index("ix_tracking_events_created_at", table_name="tracking_events")
    op.drop_table("tracking_events")
    for name in (
        "ix_events_type_created_at_id",
        "ix_events_start_time_id",
        "ix_events_price_created_at_id",
        "ix_events_type",
        "ix_events_end_time",
        "ix_events_city",
        "ix_events_event_name",
        "ix_events_created_at",
    ):
        op.drop_index(name, table_name="events")
    op.drop_table("events")
