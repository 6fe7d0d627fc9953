# File: app/models/registration.py
from sqlalchemy import Column, String, Enum
from sqlalchemy.orm import validates
from app.models.base import BaseModel, UTCDateTime
import enum


class RegistrationStatus(enum.Enum):
    CONFIRMED = "CONFIRMED"    # Initial state after a successful create
    CHECKED_IN = "CHECKED_IN"  # Attendance recorded
    CANCELED = "CANCELED"      # Does not block a new registration
    DELETED = "DELETED"        # Logically removed, never purged


class Registration(BaseModel):
    """A user's registration to an event.

    Rows are never physically removed: logical deletion sets ``status`` to
    DELETED and stamps ``deleted_at``, and every "active" query filters on
    ``deleted_at IS NULL``.
    """

    __tablename__ = "registrations"

    id = Column(String(36), primary_key=True, index=True)
    event_id = Column("events_id", String(255), nullable=False, index=True)
    user_id = Column("users_id", String(255), nullable=False, index=True)
    check_in = Column(UTCDateTime, nullable=True)
    status = Column(
        Enum(RegistrationStatus, name="registration_status", native_enum=False, length=20),
        nullable=False,
        default=RegistrationStatus.CONFIRMED,
    )
    deleted_at = Column(UTCDateTime, nullable=True)

    def __repr__(self):
        return f"<Registration {self.id} user={self.user_id} event={self.event_id} status={self.status.name if self.status else None}>"

    @validates("id", "event_id", "user_id")
    def _validate_immutable(self, key, value):
        current = getattr(self, key)
        if current is not None and current != value:
            raise ValueError(f"Registration.{key} cannot be changed once set")
        return value
