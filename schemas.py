from pydantic import BaseModel, Field
from typing import Optional
from datetime import date as Date, datetime, time as Time

# Event schemas
class EventBase(BaseModel):
    date: Date  # Format: YYYY-MM-DD
    time: Time  # Format: HH:MM or HH:MM:SS
    title: str = Field(..., min_length=1)
    channel: Optional[str] = None
    platform: Optional[str] = None
    notes: Optional[str] = None

class EventCreate(EventBase):
    pass

class EventUpdate(EventBase):
    """Full replacement of the editable fields; omitted optionals are cleared."""
    pass

class Event(EventBase):
    id: int
    created_at: Optional[datetime] = None
    created_by: Optional[int] = None

    class Config:
        from_attributes = True

# Authentication schemas
class UserLogin(BaseModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

class SessionUser(BaseModel):
    """Projection of a user kept in the session cookie."""
    id: int
    email: str
    role: str

    class Config:
        from_attributes = True

# Generic responses
class Success(BaseModel):
    success: bool = True

class ErrorResponse(BaseModel):
    error: str
