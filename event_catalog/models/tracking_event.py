from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column
from event_catalog.db.session import Base
from event_catalog.models.common import DocumentIdMixin, CreatedAtMixin

class TrackingEvent(Base, DocumentIdMixin, CreatedAtMixin):
    __tablename__ = "tracking_events"
    action: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False, default="")
    user_agent: Mapped[str] = mapped_column(String(500), nullable=False, default="")
    user_name: Mapped[str] = mapped_column(String(200), nullable=False, default="")
