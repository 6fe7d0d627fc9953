# File: app/crud/registration.py
from typing import List, Optional
from sqlalchemy.orm import Session
from app.crud.base import CRUDBase
from app.models.registration import Registration, RegistrationStatus


class CRUDRegistration(CRUDBase[Registration]):

    def get_multi_active(self, db: Session) -> List[Registration]:
        return (
            db.query(Registration)
            .filter(Registration.deleted_at.is_(None))
            .order_by(Registration.created_at, Registration.id)
            .all()
        )

    def get_multi_active_by_user(self, db: Session, *, user_id: str) -> List[Registration]:
        return (
            db.query(Registration)
            .filter(Registration.user_id == user_id, Registration.deleted_at.is_(None))
            .order_by(Registration.created_at, Registration.id)
            .all()
        )

    def get_active_by_user_and_event(
        self, db: Session, *, user_id: str, event_id: str
    ) -> Optional[Registration]:
        # Prefer a blocking (non-canceled) row when canceled history exists for the pair
        rows = (
            db.query(Registration)
            .filter(
                Registration.user_id == user_id,
                Registration.event_id == event_id,
                Registration.deleted_at.is_(None),
            )
            .order_by(Registration.created_at.desc())
            .all()
        )
        for row in rows:
            if row.status != RegistrationStatus.CANCELED:
                return row
        return rows[0] if rows else None


registration = CRUDRegistration(Registration)
