"""Time slot conflict detection for same-day appointments."""

from collections.abc import Iterable

from agenda.core.results import NO_CONFLICT, ConflictError, InvalidRange, NoConflict
from agenda.schemas.appointments import Appointment


def overlaps(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    """
    Check whether two half-open ``[start, end)`` intervals intersect.

    Times are zero-padded ``HH:MM`` strings, so lexicographic comparison
    matches chronological order. Intervals that only touch do not overlap.
    """
    return start_a < end_b and start_b < end_a


def find_conflict(
    candidate_start: str,
    candidate_end: str,
    same_date_appointments: Iterable[Appointment],
    exclude_id: int | None = None,
) -> InvalidRange | ConflictError | NoConflict:
    """
    Check a candidate time slot against the appointments of its date.

    Args:
        candidate_start: Proposed start time (HH:MM)
        candidate_end: Proposed end time (HH:MM)
        same_date_appointments: Appointments already booked on the same date
        exclude_id: Appointment being edited, never compared against itself

    Returns:
        InvalidRange if the slot is empty or reversed, ConflictError with the
        first overlapping appointment, or NO_CONFLICT
    """
    if candidate_start >= candidate_end:
        return InvalidRange(start_time=candidate_start, end_time=candidate_end)

    for existing in same_date_appointments:
        if exclude_id is not None and existing.id == exclude_id:
            continue
        if overlaps(candidate_start, candidate_end, existing.start_time, existing.end_time):
            return ConflictError(appointment=existing)

    return NO_CONFLICT
