import uuid
from datetime import datetime, timezone
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from event_catalog.db.types import UTCDateTime

def utcnow():
    return datetime.now(timezone.utc)

def new_document_id() -> str:
    return str(uuid.uuid4())

class DocumentIdMixin:
    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=new_document_id)

class CreatedAtMixin:
    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), default=utcnow, nullable=False, index=True)
