from datetime import datetime

from sqlalchemy import Boolean, Float, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from event_catalog.db.session import Base
from event_catalog.db.types import UTCDateTime
from event_catalog.models.common import DocumentIdMixin, CreatedAtMixin

class Event(Base, DocumentIdMixin, CreatedAtMixin):
    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_price_created_at_id", "price", "created_at", "id"),
        Index("ix_events_start_time_id", "start_time", "id"),
        Index("ix_events_type_created_at_id", "type", "created_at", "id"),
    )

    organizer_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    event_name: Mapped[str] = mapped_column(String(300), nullable=False, index=True)
    has_tickets: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    city: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    country: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    full_address: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    latitude: Mapped[str] = mapped_column(String(40), nullable=False, default="")
    longitude: Mapped[str] = mapped_column(String(40), nullable=False, default="")
    state: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    street: Mapped[str] = mapped_column(String(300), nullable=False, default="")
    start_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    end_time: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False, index=True)
    timezone: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    event_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    provider: Mapped[str] = mapped_column(String(120), nullable=False, default="")
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    image_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    type: Mapped[str] = mapped_column(String(60), nullable=False, index=True)
