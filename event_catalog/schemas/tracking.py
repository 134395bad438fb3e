from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TrackingEventCreate(BaseModel):
    action: str = Field(min_length=1)
    payload: str = ""
    user_agent: str = ""
    user_name: str = ""


class TrackingEventRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    action: str
    payload: str
    user_agent: str
    user_name: str
    created_at: datetime
