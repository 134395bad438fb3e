from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException
from sqlalchemy.orm import Session

from event_catalog.db.types import as_utc
from event_catalog.models.common import new_document_id, utcnow
from event_catalog.models.event import Event
from event_catalog.schemas.events import EventBatchCreate, EventCreate, EventRead, EventUpdate
from event_catalog.services.pagination.cursor import CursorPlanMismatch, InvalidCursor
from event_catalog.services.pagination.paginator import list_events
from event_catalog.services.pagination.planner import FilterSet, SortRequest
from event_catalog.services.pagination.store import SqlAlchemyEventStore

logger = logging.getLogger(__name__)


def _serialize_event(row: Event) -> dict[str, Any]:
    return EventRead.model_validate(row).model_dump(mode="json")


def _load_event_or_404(db: Session, event_id: str) -> Event:
    event_id = str(event_id or "").strip()
    if not event_id:
        raise HTTPException(status_code=400, detail="id is required")
    row = db.get(Event, event_id)
    if row is None:
        raise HTTPException(status_code=404, detail="event not found")
    return row


def _ensure_time_order_or_400(row: Event) -> None:
    if as_utc(row.end_time) < as_utc(row.start_time):
        raise HTTPException(status_code=400, detail="end_time cannot be before start_time")


def _event_from_payload(payload: EventCreate, *, created_at) -> Event:
    data = payload.model_dump(exclude={"start_time", "end_time"})
    start_time = as_utc(payload.start_time)
    # Events without a known end are treated as ending when they start.
    end_time = as_utc(payload.end_time) if payload.end_time is not None else start_time
    row = Event(id=new_document_id(), created_at=created_at, start_time=start_time, end_time=end_time, **data)
    _ensure_time_order_or_400(row)
    return row


def create_event_service(payload: EventCreate, db: Session) -> dict[str, Any]:
    row = _event_from_payload(payload, created_at=utcnow())
    db.add(row)
    db.commit()
    logger.info("event created id=%s", row.id)
    return {"data": row.id}


def batch_create_events_service(payload: EventBatchCreate, db: Session) -> dict[str, Any]:
    if not payload.events:
        raise HTTPException(status_code=400, detail="no events to create")
    now = utcnow()
    rows = []
    for index, item in enumerate(payload.events):
        try:
            rows.append(_event_from_payload(item, created_at=now))
        except HTTPException as exc:
            raise HTTPException(status_code=400, detail=f"Item {index}: {exc.detail}")
    db.add_all(rows)
    db.commit()
    logger.info("events batch created count=%s", len(rows))
    return {"data": f"Successfully created {len(rows)} events"}


def get_event_service(event_id: str, db: Session) -> dict[str, Any]:
    return {"data": _serialize_event(_load_event_or_404(db, event_id))}


def update_event_service(event_id: str, payload: EventUpdate, db: Session) -> dict[str, Any]:
    updates = payload.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise HTTPException(status_code=400, detail="no fields to update")
    row = _load_event_or_404(db, event_id)
    for key in ("start_time", "end_time"):
        if key in updates:
            updates[key] = as_utc(updates[key])
    for key, value in updates.items():
        setattr(row, key, value)
    _ensure_time_order_or_400(row)
    db.add(row)
    db.commit()
    return {"data": "Updated successfully"}


def delete_event_service(event_id: str, db: Session) -> dict[str, Any]:
    row = _load_event_or_404(db, event_id)
    db.delete(row)
    db.commit()
    logger.info("event deleted id=%s", event_id)
    return {"data": "Deleted successfully"}


def list_events_service(filters: FilterSet, sort: SortRequest, db: Session) -> dict[str, Any]:
    store = SqlAlchemyEventStore(db)
    try:
        records, next_page_token = list_events(store, filters, sort)
    except (InvalidCursor, CursorPlanMismatch) as exc:
        logger.info("page token rejected: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc))
    meta = {"nextPageToken": next_page_token} if next_page_token else {}
    return {"data": [_serialize_event(row) for row in records], "meta": meta}
