from typing import Optional

from pydantic import BaseModel, ConfigDict


class ContactForm(BaseModel):
    # Every field is optional here so that presence is checked by the intake
    # validator, which owns the client-facing error message.
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    message: Optional[str] = None


class ContactResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    email_configured: bool
    sheets_enabled: bool
