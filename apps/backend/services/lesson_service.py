import functools
import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from models.schemas import Lesson, LessonFilter, TimetableWeek, is_aware
from services.exceptions import NotFoundError, PartialFailureError, ValidationError
from services.lesson_store import LessonStore, PeriodCatalog
from services.scheduling.conflicts import ConflictDetector
from services.scheduling.timetable import TimetableBuilder
from services.scheduling.weeks import week_label
from settings import settings

logger = logging.getLogger(__name__)

# Signed 64-bit, the widest INTEGER the database accepts
MIN_ID = -2 ** 63
MAX_ID = 2 ** 63 - 1


def transactional(method):
    """
    Runs a service method as one unit of work on `self.db`.
    Commits on success; on any exception rolls back everything the call
    issued (including partial writes) and re-raises.
    """
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            result = method(self, *args, **kwargs)
            self.db.commit()
            return result
        except Exception:
            self.db.rollback()
            raise
    return wrapper


class LessonService:
    """
    Lesson booking operations: conflict-checked writes and timetable reads.

    Attributes:
        db (Session): Database session; owns the transaction of every call.
        store (LessonStore): Lesson persistence.
        periods (PeriodCatalog): Ordered period catalog.
        match_mode (str): Period matching policy for the timetable grid.
    """
    def __init__(self, db: Session, store: Optional[LessonStore] = None,
                 periods: Optional[PeriodCatalog] = None, match_mode: Optional[str] = None):
        self.db = db
        self.store = store or LessonStore(db)
        self.periods = periods or PeriodCatalog(db)
        self.detector = ConflictDetector(self.store)
        self.match_mode = match_mode or settings.PERIOD_MATCH_MODE

    @transactional
    def add_lesson(self, lesson: Lesson) -> bool:
        _check_time_order(lesson)
        lesson.week = week_label(lesson.start_time)
        self.detector.detect_conflicts(lesson)
        created = self.store.insert_lesson(lesson) == 1
        logger.info("Lesson %s added (subject=%s, teacher=%s, week=%s)",
                    lesson.id, lesson.subject_id, lesson.user_id, lesson.week)
        return created

    @transactional
    def update_lesson(self, lesson: Lesson) -> bool:
        if lesson.id is None or not MIN_ID <= lesson.id <= MAX_ID or self.store.select_lesson_by_id(lesson.id) is None:
            raise NotFoundError(f"Lesson {lesson.id} does not exist")
        _check_time_order(lesson)

        # Self-exclusion happens through lesson.id
        self.detector.detect_conflicts(lesson)

        lesson.week = week_label(lesson.start_time)
        updated = self.store.update_lesson(lesson) == 1
        logger.info("Lesson %s updated (week=%s)", lesson.id, lesson.week)
        return updated

    @transactional
    def remove_lesson(self, ids: str) -> bool:
        if not ids or not ids.strip():
            raise ValidationError("No lessons to delete")
        tokens = [t.strip() for t in ids.split(',')]
        try:
            id_list = [int(t) for t in tokens]
        except ValueError:
            raise ValidationError(f"Invalid lesson id list: {ids!r}")
        if any(not MIN_ID <= i <= MAX_ID for i in id_list):
            raise ValidationError(f"Lesson id out of range: {ids!r}")

        # A short count means some ids were missing; raising undoes the rows already deleted
        deleted = self.store.delete_lessons(id_list)
        if deleted != len(id_list):
            logger.warning("Bulk delete removed %s of %s lessons, rolling back", deleted, len(id_list))
            raise PartialFailureError(f"Deleted {deleted} of {len(id_list)} lessons; nothing was removed")
        logger.info("Lessons %s removed", id_list)
        return True

    @transactional
    def get_lessons(self, start_time: Optional[datetime] = None, user_id: Optional[int] = None,
                    subject_id: Optional[int] = None, campus_id: Optional[int] = None) -> List[TimetableWeek]:
        lesson_filter = LessonFilter(
            week=week_label(start_time) if start_time is not None else None,
            user_id=user_id,
            subject_id=subject_id,
            campus_id=campus_id,
        )
        lessons = self.store.select_lessons(lesson_filter)
        builder = TimetableBuilder(self.periods.get_all_periods(), match_mode=self.match_mode)
        return builder.build(lessons)

def _check_time_order(lesson: Lesson):
    if is_aware(lesson.start_time) != is_aware(lesson.end_time):
        raise ValidationError("Lesson start and end time must both carry a timezone offset or neither")
    if lesson.start_time >= lesson.end_time:
        raise ValidationError("Lesson start time must be before its end time")
