# File: app/schemas/registration.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from app.models.registration import RegistrationStatus


class RegistrationCreate(BaseModel):
    event_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)


class RegistrationUpdate(BaseModel):
    """Full replacement of status and check-in time"""
    status: RegistrationStatus
    check_in: Optional[datetime] = None


class Registration(BaseModel):
    id: str
    event_id: str
    user_id: str
    check_in: Optional[datetime] = None
    status: RegistrationStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

    class Config:
        from_attributes = True
