from .base import BaseModel
from .registration import Registration, RegistrationStatus

__all__ = ["BaseModel", "Registration", "RegistrationStatus"]
