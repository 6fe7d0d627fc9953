from pydantic import BaseModel
from datetime import datetime


class ApiErrorResponse(BaseModel):
    status: int
    error: str
    message: str
    timestamp: datetime
