from enum import Enum
from typing import Optional


class SchedulingError(Exception):
    """Base class for business-rule violations raised by the lesson service."""
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SchedulingError):
    """Malformed or blank caller input."""
    status_code = 400


class NotFoundError(SchedulingError):
    status_code = 404


class ConflictKind(str, Enum):
    SUBJECT = "subject_conflict"
    TEACHER = "teacher_conflict"


class ConflictError(SchedulingError):
    """
    The requested slot overlaps an existing booking.

    Carries the names of the occupying subject and teacher so the caller can
    show who holds the slot.
    """
    status_code = 409

    def __init__(self, kind: ConflictKind, subject_name: Optional[str], teacher_name: Optional[str]):
        self.kind = kind
        self.subject_name = subject_name
        self.teacher_name = teacher_name
        if kind == ConflictKind.SUBJECT:
            message = f"Subject '{subject_name}' is already assigned to teacher '{teacher_name}' in this time range"
        else:
            message = f"Teacher '{teacher_name}' is already teaching '{subject_name}' in this time range"
        super().__init__(message)


class PartialFailureError(SchedulingError):
    """A bulk delete affected fewer rows than ids requested."""
    status_code = 409
