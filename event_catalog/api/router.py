from fastapi import APIRouter
from event_catalog.api import events, tracking

router = APIRouter()
router.include_router(events.router, prefix="/events", tags=["Events"])
router.include_router(tracking.router, prefix="/tracking", tags=["Tracking"])
