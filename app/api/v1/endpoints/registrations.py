# File: app/api/v1/endpoints/registrations.py
from typing import Any, List
from fastapi import APIRouter, Depends, Response, status
from app import schemas
from app.api import deps
from app.core.permissions import Requester
from app.services.registration_service import RegistrationService

router = APIRouter()


@router.get("/", response_model=List[schemas.Registration])
def get_registrations(
    *,
    service: RegistrationService = Depends(deps.get_registration_service),
    requester: Requester = Depends(deps.get_requester),
) -> Any:
    """List every active registration. Administrators only."""
    return service.list_all(requester)


@router.get("/users/{user_id}", response_model=List[schemas.Registration])
def get_registrations_by_user(
    *,
    user_id: str,
    service: RegistrationService = Depends(deps.get_registration_service),
    requester: Requester = Depends(deps.get_requester),
) -> Any:
    """List a user's active registrations. The user themself or an administrator."""
    return service.list_by_user(requester, user_id)


@router.get("/{registration_id}", response_model=schemas.Registration)
def get_registration(
    *,
    registration_id: str,
    service: RegistrationService = Depends(deps.get_registration_service),
    requester: Requester = Depends(deps.get_requester),
) -> Any:
    return service.get(requester, registration_id)


@router.post("/", response_model=schemas.Registration, status_code=status.HTTP_201_CREATED)
def create_registration(
    *,
    registration_in: schemas.RegistrationCreate,
    service: RegistrationService = Depends(deps.get_registration_service),
    requester: Requester = Depends(deps.get_requester),
) -> Any:
    """Register a user for an event. Admins may register on behalf of another user."""
    return service.create(
        requester, event_id=registration_in.event_id, user_id=registration_in.user_id
    )


@router.put("/{registration_id}", response_model=schemas.Registration)
def update_registration(
    *,
    registration_id: str,
    registration_in: schemas.RegistrationUpdate,
    service: RegistrationService = Depends(deps.get_registration_service),
    requester: Requester = Depends(deps.get_requester),
) -> Any:
    return service.update(
        requester,
        registration_id,
        status=registration_in.status,
        check_in=registration_in.check_in,
    )


@router.patch("/{registration_id}/check-in", response_model=schemas.Registration)
def check_in_registration(
    *,
    registration_id: str,
    service: RegistrationService = Depends(deps.get_registration_service),
    requester: Requester = Depends(deps.get_requester),
) -> Any:
    """Record attendance. The check-in time is set by the server."""
    return service.check_in(requester, registration_id)


@router.patch("/{registration_id}/cancel", response_model=schemas.Registration)
def cancel_registration(
    *,
    registration_id: str,
    service: RegistrationService = Depends(deps.get_registration_service),
    requester: Requester = Depends(deps.get_requester),
) -> Any:
    return service.cancel(requester, registration_id)


@router.delete("/{registration_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_registration(
    *,
    registration_id: str,
    service: RegistrationService = Depends(deps.get_registration_service),
    requester: Requester = Depends(deps.get_requester),
) -> Response:
    """Logically delete a registration. The record remains retrievable by id."""
    service.delete(requester, registration_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
