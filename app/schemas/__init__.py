# File: app/schemas/__init__.py
from .registration import Registration, RegistrationCreate, RegistrationUpdate
from .error import ApiErrorResponse

__all__ = ["Registration", "RegistrationCreate", "RegistrationUpdate", "ApiErrorResponse"]
