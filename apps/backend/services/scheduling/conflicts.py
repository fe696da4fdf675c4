import logging
from models.schemas import Lesson, LessonFilter
from services.exceptions import ConflictError, ConflictKind

logger = logging.getLogger(__name__)


class ConflictDetector:
    """
    Checks a candidate lesson against existing bookings.

    Two lookups, in this order:
    1. Subject: is the subject already taught by someone in the window?
    2. Teacher: is the teacher already busy with something in the window?
    The first hit is raised as ConflictError. When the candidate has an id
    (update), it is passed as `exclude_id` so the store skips the lesson
    itself.
    """
    def __init__(self, store):
        self.store = store

    def detect_conflicts(self, candidate: Lesson) -> None:
        by_subject = LessonFilter(
            exclude_id=candidate.id,
            subject_id=candidate.subject_id,
            start_time=candidate.start_time,
            end_time=candidate.end_time,
        )
        taken = self.store.select_lessons(by_subject)
        if taken:
            occupant = taken[0]
            logger.warning("Subject %s already booked by lesson %s", candidate.subject_id, occupant.id)
            raise ConflictError(
                ConflictKind.SUBJECT,
                subject_name=_display(occupant.subject_name, occupant.subject_id),
                teacher_name=_display(occupant.teacher_name, occupant.user_id),
            )

        by_teacher = LessonFilter(
            exclude_id=candidate.id,
            user_id=candidate.user_id,
            start_time=candidate.start_time,
            end_time=candidate.end_time,
        )
        busy = self.store.select_lessons(by_teacher)
        if busy:
            occupant = busy[0]
            logger.warning("Teacher %s already booked by lesson %s", candidate.user_id, occupant.id)
            raise ConflictError(
                ConflictKind.TEACHER,
                subject_name=_display(occupant.subject_name, occupant.subject_id),
                teacher_name=_display(occupant.teacher_name, occupant.user_id),
            )

def _display(name, fallback_id):
    return name if name else f"#{fallback_id}"
