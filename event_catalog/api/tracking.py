from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from event_catalog.core.deps import get_current_principal
from event_catalog.db.session import get_db
from event_catalog.schemas.tracking import TrackingEventCreate
from event_catalog.services.tracking_service import create_tracking_event_service, list_tracking_events_service

router = APIRouter()

@router.post("", status_code=201)
def create_tracking_event(
    payload: TrackingEventCreate,
    request: Request,
    db: Session = Depends(get_db),
    principal: dict = Depends(get_current_principal),
):
    return create_tracking_event_service(payload, db, request_user_agent=request.headers.get("user-agent", ""))

@router.get("")
def list_tracking_events(db: Session = Depends(get_db), principal: dict = Depends(get_current_principal)):
    return list_tracking_events_service(db)
