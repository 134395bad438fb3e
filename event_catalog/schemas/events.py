from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class EventCreate(BaseModel):
    event_name: str = Field(min_length=1)
    city: str = Field(min_length=1)
    type: str = Field(min_length=1)
    price: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    start_time: datetime
    end_time: Optional[datetime] = None
    organizer_name: str = ""
    has_tickets: bool = False
    country: str = ""
    full_address: str = ""
    latitude: str = ""
    longitude: str = ""
    state: str = ""
    street: str = ""
    timezone: str = ""
    event_url: str = ""
    provider: str = ""
    image_url: str = ""


class EventBatchCreate(BaseModel):
    events: List[EventCreate] = Field(default_factory=list)


class EventUpdate(BaseModel):
    # Unknown keys (including "id") are dropped; the document id is immutable.
    model_config = ConfigDict(extra="ignore")

    event_name: Optional[str] = Field(default=None, min_length=1)
    city: Optional[str] = Field(default=None, min_length=1)
    type: Optional[str] = Field(default=None, min_length=1)
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    organizer_name: Optional[str] = None
    has_tickets: Optional[bool] = None
    country: Optional[str] = None
    full_address: Optional[str] = None
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    state: Optional[str] = None
    street: Optional[str] = None
    timezone: Optional[str] = None
    event_url: Optional[str] = None
    provider: Optional[str] = None
    image_url: Optional[str] = None


class EventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    organizer_name: str
    event_name: str
    has_tickets: bool
    city: str
    country: str
    full_address: str
    latitude: str
    longitude: str
    state: str
    street: str
    start_time: datetime
    end_time: datetime
    timezone: str
    event_url: str
    provider: str
    price: float
    image_url: str
    type: str
    created_at: datetime
