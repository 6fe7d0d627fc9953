# File: app/services/registration_service.py
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from app import crud
from app.core.clock import utcnow
from app.core.exceptions import (
    AuthorizationDeniedError,
    RegistrationConflictError,
    RegistrationNotFoundError,
)
from app.core.permissions import Requester, check_is_admin, check_ownership_or_admin
from app.crud.registration import CRUDRegistration
from app.models.registration import Registration, RegistrationStatus

logger = logging.getLogger(__name__)


class RegistrationService:
    """Owns every state transition of a registration.

    Each operation authorizes the requester first, then checks that the
    transition is legal, and only then touches the record and persists it.
    A failure at any step leaves the stored row unchanged.

    The create-time duplicate check is a plain read before the write; two
    concurrent creates for the same user and event can both pass it.
    """

    def __init__(
        self,
        db: Session,
        repository: CRUDRegistration = crud.registration,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.db = db
        self.repository = repository
        self.clock = clock

    def list_all(self, requester: Requester) -> List[Registration]:
        """All active registrations. Administrators only."""
        try:
            check_is_admin(requester.roles)
        except AuthorizationDeniedError:
            logger.warning(f"🚫 {requester.id} tried to list all registrations without admin role")
            raise
        return self.repository.get_multi_active(self.db)

    def list_by_user(self, requester: Requester, user_id: str) -> List[Registration]:
        self._authorize(requester, user_id, "list registrations of", user_id)
        return self.repository.get_multi_active_by_user(self.db, user_id=user_id)

    def get(self, requester: Requester, registration_id: str) -> Registration:
        """Fetch by id. Logically deleted registrations are still returned."""
        registration = self._get_or_404(registration_id)
        self._authorize(requester, registration.user_id, "read", registration_id)
        return registration

    def create(self, requester: Requester, *, event_id: str, user_id: str) -> Registration:
        self._authorize(requester, user_id, "register", f"{user_id}@{event_id}")

        existing = self.repository.get_active_by_user_and_event(
            self.db, user_id=user_id, event_id=event_id
        )
        if existing is not None and existing.status != RegistrationStatus.CANCELED:
            logger.warning(
                f"⚠️ User {user_id} already registered for event {event_id} ({existing.id})"
            )
            raise RegistrationConflictError("The user is already registered for this event")

        now = self.clock()
        registration = Registration(
            id=str(uuid.uuid4()),
            event_id=event_id,
            user_id=user_id,
            status=RegistrationStatus.CONFIRMED,
            check_in=None,
            created_at=now,
            updated_at=now,
        )
        registration = self.repository.save(self.db, db_obj=registration)
        logger.info(f"✅ Registration {registration.id} created for user {user_id} on event {event_id}")
        return registration

    def update(
        self,
        requester: Requester,
        registration_id: str,
        *,
        status: RegistrationStatus,
        check_in: Optional[datetime] = None,
    ) -> Registration:
        """Overwrite status and check-in as given.

        Unlike check_in() and cancel() this performs no transition check:
        the caller is trusted to send a coherent combination.
        """
        registration = self._get_or_404(registration_id)
        self._authorize(requester, registration.user_id, "update", registration_id)

        registration.status = status
        if check_in is not None and check_in.tzinfo is not None:
            check_in = check_in.astimezone(timezone.utc)
        registration.check_in = check_in
        registration.updated_at = self.clock()

        registration = self.repository.save(self.db, db_obj=registration)
        logger.info(f"✏️ Registration {registration_id} updated to {status.name} by {requester.id}")
        return registration

    def check_in(self, requester: Requester, registration_id: str) -> Registration:
        registration = self._get_or_404(registration_id)
        self._authorize(requester, registration.user_id, "check in", registration_id)

        if registration.check_in is not None:
            logger.warning(f"⚠️ Registration {registration_id} already checked in")
            raise RegistrationConflictError("This registration has already checked in")

        now = self.clock()
        registration.check_in = now
        registration.status = RegistrationStatus.CHECKED_IN
        registration.updated_at = now

        registration = self.repository.save(self.db, db_obj=registration)
        logger.info(f"✅ Registration {registration_id} checked in by {requester.id}")
        return registration

    def cancel(self, requester: Requester, registration_id: str) -> Registration:
        registration = self._get_or_404(registration_id)
        self._authorize(requester, registration.user_id, "cancel", registration_id)

        if registration.check_in is not None:
            logger.warning(f"⚠️ Registration {registration_id} cannot be canceled after check-in")
            raise RegistrationConflictError(
                "A registration that has already checked in cannot be canceled"
            )
        if registration.status == RegistrationStatus.CANCELED:
            logger.warning(f"⚠️ Registration {registration_id} is already canceled")
            raise RegistrationConflictError("This registration is already canceled")

        registration.status = RegistrationStatus.CANCELED
        registration.updated_at = self.clock()

        registration = self.repository.save(self.db, db_obj=registration)
        logger.info(f"✅ Registration {registration_id} canceled by {requester.id}")
        return registration

    def delete(self, requester: Requester, registration_id: str) -> Registration:
        """Logical deletion; the row stays in the table."""
        registration = self._get_or_404(registration_id)
        self._authorize(requester, registration.user_id, "delete", registration_id)

        now = self.clock()
        registration.status = RegistrationStatus.DELETED
        registration.deleted_at = now
        registration.updated_at = now

        registration = self.repository.save(self.db, db_obj=registration)
        logger.info(f"🗑️ Registration {registration_id} logically deleted by {requester.id}")
        return registration

    def _get_or_404(self, registration_id: str) -> Registration:
        registration = self.repository.get(self.db, id=registration_id)
        if registration is None:
            logger.warning(f"❌ Registration {registration_id} not found")
            raise RegistrationNotFoundError(registration_id)
        return registration

    def _authorize(self, requester: Requester, owner_id: str, action: str, target: str) -> None:
        try:
            check_ownership_or_admin(owner_id, requester.id, requester.roles)
        except AuthorizationDeniedError:
            logger.warning(f"🚫 {requester.id} is not allowed to {action} {target}")
            raise
