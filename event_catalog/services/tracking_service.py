from __future__ import annotations

from typing import Any

from fastapi import HTTPException
from sqlalchemy.orm import Session

from event_catalog.models.common import new_document_id, utcnow
from event_catalog.models.tracking_event import TrackingEvent
from event_catalog.schemas.tracking import TrackingEventCreate, TrackingEventRead


def create_tracking_event_service(payload: TrackingEventCreate, db: Session, *, request_user_agent: str = "") -> dict[str, Any]:
    action = payload.action.strip()
    if not action:
        raise HTTPException(status_code=400, detail="action is required")
    row = TrackingEvent(
        id=new_document_id(),
        created_at=utcnow(),
        action=action,
        payload=payload.payload,
        user_agent=payload.user_agent or request_user_agent or "",
        user_name=payload.user_name,
    )
    db.add(row)
    db.commit()
    return {"data": row.id}


def list_tracking_events_service(db: Session) -> dict[str, Any]:
    rows = (
        db.query(TrackingEvent)
        .order_by(TrackingEvent.created_at.desc(), TrackingEvent.id.asc())
        .all()
    )
    return {"data": [TrackingEventRead.model_validate(row).model_dump(mode="json") for row in rows]}
