"""Appointment schemas for request/response validation."""

from datetime import date
from enum import Enum

from pydantic import BaseModel, Field, ValidationInfo, field_validator

# 24-hour HH:MM, zero padded
TIME_PATTERN = r"^([01][0-9]|2[0-3]):[0-5][0-9]$"
PHONE_LENGTH = 10


class Service(str, Enum):
    """Services offered by the studio."""

    TRADICIONAL = "Tradicional"
    SEMIPERMANENTE = "Semipermanente"
    PRESS_ON = "PressOn"
    POLYGEL = "Polygel"
    ACRILICO = "Acrílico"
    PIES = "Pies"


class AppointmentFields(BaseModel):
    """Editable appointment fields with their validation rules."""

    start_time: str = Field(..., pattern=TIME_PATTERN)
    end_time: str = Field(..., pattern=TIME_PATTERN)
    client_name: str = Field(..., min_length=1, max_length=200)
    client_phone: str
    service: Service

    @field_validator("client_name")
    @classmethod
    def validate_client_name(cls, v: str) -> str:
        """Reject names made only of whitespace."""
        v = v.strip()
        if not v:
            raise ValueError("Client name is required")
        return v

    @field_validator("client_phone")
    @classmethod
    def validate_phone(cls, v: str) -> str:
        """Validate local phone number format."""
        if len(v) != PHONE_LENGTH or not (v.isascii() and v.isdigit()):
            raise ValueError(f"Phone number must have exactly {PHONE_LENGTH} digits")
        return v

    @field_validator("end_time")
    @classmethod
    def validate_end_time(cls, v: str, info: ValidationInfo) -> str:
        """Validate end time is after start time."""
        if "start_time" in info.data and v <= info.data["start_time"]:
            raise ValueError("End time must be after start time")
        return v


class AppointmentCreate(AppointmentFields):
    """Schema for creating a new appointment."""

    date: date


class AppointmentUpdate(AppointmentFields):
    """Schema for updating an existing appointment. The date is not editable."""


class Appointment(BaseModel):
    """A stored appointment."""

    id: int
    date: date
    start_time: str
    end_time: str
    client_name: str
    client_phone: str
    service: str
    notification_scheduled: bool = False

    model_config = {"from_attributes": True}


class AppointmentForm(BaseModel):
    """
    Raw appointment form as submitted by the UI.

    Fields are deliberately loose; the booking core validates them and reports
    user-correctable errors.
    """

    date: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    client_name: str | None = None
    client_phone: str | None = None
    service: str | None = None


class AppointmentUpdateForm(BaseModel):
    """Raw appointment edit form as submitted by the UI."""

    start_time: str | None = None
    end_time: str | None = None
    client_name: str | None = None
    client_phone: str | None = None
    service: str | None = None


class AppointmentListResponse(BaseModel):
    """Schema for appointment list response."""

    total: int
    items: list[Appointment]


class AppointmentDatesResponse(BaseModel):
    """Dates that have at least one appointment."""

    dates: list[date]


class MessagingLinkResponse(BaseModel):
    """Deep link for messaging a client."""

    appointment_id: int
    url: str


class ServiceCatalogResponse(BaseModel):
    """Services offered by the studio."""

    services: list[str]
