from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from event_catalog.core.config import settings
from event_catalog.core.deps import get_optional_principal, require_admin
from event_catalog.db.session import get_db
from event_catalog.db.types import as_utc
from event_catalog.schemas.events import EventBatchCreate, EventCreate, EventUpdate
from event_catalog.services.event_service import (
    batch_create_events_service,
    create_event_service,
    delete_event_service,
    get_event_service,
    list_events_service,
    update_event_service,
)
from event_catalog.services.pagination.planner import FilterSet, SortDirection, SortRequest
from event_catalog.services.pagination.sort_fields import IDENTIFIER_FIELD, sortable_field_names

router = APIRouter()

# The identifier is the fixed ascending tie-breaker, not a caller sort key.
LIST_SORT_KEYS = [name for name in sortable_field_names() if name != IDENTIFIER_FIELD.value]


def _clean(value: Optional[str]) -> Optional[str]:
    text = str(value or "").strip()
    return text or None


@router.get("")
def list_events(
    event_name: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    min_price: Optional[float] = Query(None, ge=0, allow_inf_nan=False),
    max_price: Optional[float] = Query(None, ge=0, allow_inf_nan=False),
    start_date: Optional[datetime] = Query(None),
    end_date: Optional[datetime] = Query(None),
    page_size: int = Query(settings.PAGE_SIZE_DEFAULT, ge=1, le=settings.PAGE_SIZE_MAX),
    page_token: str = Query(""),
    sort_key: str = Query("created_at"),
    sort_dir: Literal["asc", "desc"] = Query("asc"),
    db: Session = Depends(get_db),
    principal: dict | None = Depends(get_optional_principal),
):
    if min_price is not None and max_price is not None and min_price > max_price:
        raise HTTPException(status_code=400, detail="min_price cannot be greater than max_price")
    start_date = as_utc(start_date)
    end_date = as_utc(end_date)
    if start_date is not None and end_date is not None and end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date cannot be before start_date")
    sort_key = sort_key.strip() or "created_at"
    if sort_key not in LIST_SORT_KEYS:
        raise HTTPException(
            status_code=400,
            detail=f"sort_key must be one of: {', '.join(LIST_SORT_KEYS)}",
        )

    filters = FilterSet(
        event_type=_clean(type),
        event_name_prefix=_clean(event_name),
        city_prefix=_clean(city),
        min_price=min_price,
        max_price=max_price,
        start_date=start_date,
        end_date=end_date,
    )
    sort = SortRequest(
        sort_key=sort_key,
        direction=SortDirection(sort_dir),
        page_size=page_size,
        page_token=page_token.strip(),
    )
    return list_events_service(filters, sort, db)


@router.post("", status_code=201)
def create_event(payload: EventCreate, db: Session = Depends(get_db), admin: dict = Depends(require_admin)):
    return create_event_service(payload, db)


@router.post("/batch", status_code=201)
def batch_create_events(payload: EventBatchCreate, db: Session = Depends(get_db), admin: dict = Depends(require_admin)):
    return batch_create_events_service(payload, db)


@router.get("/{event_id}")
def get_event(
    event_id: str,
    db: Session = Depends(get_db),
    principal: dict | None = Depends(get_optional_principal),
):
    return get_event_service(event_id, db)


@router.put("/{event_id}")
def update_event(
    event_id: str,
    payload: EventUpdate,
    db: Session = Depends(get_db),
    admin: dict = Depends(require_admin),
):
    return update_event_service(event_id, payload, db)


@router.delete("/{event_id}")
def delete_event(event_id: str, db: Session = Depends(get_db), admin: dict = Depends(require_admin)):
    return delete_event_service(event_id, db)
