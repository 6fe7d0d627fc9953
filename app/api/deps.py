# File: app/api/deps.py
from fastapi import Depends, Header
from sqlalchemy.orm import Session
from app.core.config import settings
from app.core.permissions import Requester
from app.db.database import get_db
from app.services.registration_service import RegistrationService


def get_requester(
    x_user_id: str = Header(..., alias=settings.USER_ID_HEADER, min_length=1),
    x_user_roles: str = Header("", alias=settings.USER_ROLES_HEADER),
) -> Requester:
    """
    Build the caller context from the gateway headers.
    Identity is trusted as forwarded; authorization happens in the service.
    """
    return Requester.from_headers(x_user_id, x_user_roles)


def get_registration_service(db: Session = Depends(get_db)) -> RegistrationService:
    return RegistrationService(db)
