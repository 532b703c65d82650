"""
Result values for expected booking outcomes.

The appointment store and the scheduling validator return these instead of
raising, so callers branch on validation failures, missing rows and
conflicts explicitly.
"""

from pydantic import BaseModel, ValidationError as PydanticValidationError

from agenda.schemas.appointments import Appointment


def format_time_for_display(value: str) -> str:
    """Render a 24-hour HH:MM time as a 12-hour clock time, e.g. ``2:30 PM``."""
    hour, minute = (int(part) for part in value.split(":"))
    suffix = "AM" if hour < 12 else "PM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


class ValidationError(BaseModel):
    """A required field is missing or malformed."""

    model_config = {"frozen": True}

    errors: dict[str, str]

    @property
    def message(self) -> str:
        """Human readable summary of the field errors."""
        return "; ".join(f"{field}: {error}" for field, error in self.errors.items())

    @classmethod
    def from_pydantic(cls, exc: PydanticValidationError) -> "ValidationError":
        """Collect the first error reported for each field."""
        errors: dict[str, str] = {}
        for error in exc.errors():
            field = ".".join(str(part) for part in error["loc"]) or "appointment"
            errors.setdefault(field, error["msg"])
        return cls(errors=errors)


class NotFound(BaseModel):
    """No appointment exists with the requested id."""

    model_config = {"frozen": True}

    appointment_id: int

    @property
    def message(self) -> str:
        return f"Appointment {self.appointment_id} not found"


class InvalidRange(BaseModel):
    """The candidate interval does not start before it ends."""

    model_config = {"frozen": True}

    start_time: str
    end_time: str

    @property
    def message(self) -> str:
        return "Start time must be before end time"


class ConflictError(BaseModel):
    """The candidate interval overlaps an existing appointment."""

    model_config = {"frozen": True}

    appointment: Appointment

    @property
    def message(self) -> str:
        """Describe the conflicting appointment so the user can adjust."""
        existing = self.appointment
        return (
            "An appointment already exists in that time slot: "
            f"client {existing.client_name}, service {existing.service}, "
            f"{format_time_for_display(existing.start_time)} - "
            f"{format_time_for_display(existing.end_time)}"
        )


class NoConflict(BaseModel):
    """The candidate interval is free."""

    model_config = {"frozen": True}


NO_CONFLICT = NoConflict()
