# File: app/core/exceptions.py
"""Error kinds raised by the registration lifecycle.

The HTTP layer maps each kind to a status code (see ``app.main``); the
service itself only distinguishes the three kinds below.
"""


class RegistrationError(Exception):
    """Base class for every error the registration service raises on purpose"""

    status_code: int

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class RegistrationNotFoundError(RegistrationError):
    status_code = 404

    def __init__(self, registration_id: str):
        super().__init__(f"Registration not found with id: {registration_id}")
        self.registration_id = registration_id


class AuthorizationDeniedError(RegistrationError):
    status_code = 403

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class RegistrationConflictError(RegistrationError):
    """Illegal transition: duplicate registration, repeated check-in, cancel after check-in..."""

    status_code = 409
