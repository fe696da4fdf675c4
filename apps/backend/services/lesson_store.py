from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from database import LessonDB, PeriodDB
from models.schemas import Lesson, LessonFilter, Period


class LessonStore:
    """
    SQLAlchemy-backed lesson persistence.

    `select_lessons` interprets a `LessonFilter` field by field (see the
    filter's docstring): ids and names narrow by equality, the time window
    is a half-open overlap test and `exclude_id` removes a lesson from the
    match set so an update never collides with itself.
    """
    def __init__(self, db: Session):
        self.db = db

    def select_lessons(self, lesson_filter: LessonFilter) -> List[Lesson]:
        q = self.db.query(LessonDB)
        if lesson_filter.exclude_id is not None:
            q = q.filter(LessonDB.id != lesson_filter.exclude_id)
        if lesson_filter.subject_id is not None:
            q = q.filter(LessonDB.subject_id == lesson_filter.subject_id)
        if lesson_filter.user_id is not None:
            q = q.filter(LessonDB.user_id == lesson_filter.user_id)
        if lesson_filter.campus_id is not None:
            q = q.filter(LessonDB.campus_id == lesson_filter.campus_id)
        if lesson_filter.week is not None:
            q = q.filter(LessonDB.week == lesson_filter.week)
        if lesson_filter.end_time is not None:
            q = q.filter(LessonDB.start_time < lesson_filter.end_time)   # existing starts BEFORE new ends
        if lesson_filter.start_time is not None:
            q = q.filter(LessonDB.end_time > lesson_filter.start_time)   # existing ends AFTER new starts
        rows = q.order_by(LessonDB.start_time, LessonDB.id).all()
        return [Lesson.model_validate(r) for r in rows]

    def select_lesson_by_id(self, lesson_id: int) -> Optional[Lesson]:
        row = self.db.get(LessonDB, lesson_id)
        return Lesson.model_validate(row) if row else None

    def insert_lesson(self, lesson: Lesson) -> int:
        row = LessonDB(
            subject_id=lesson.subject_id,
            user_id=lesson.user_id,
            campus_id=lesson.campus_id,
            start_time=lesson.start_time,
            end_time=lesson.end_time,
            week=lesson.week,
        )
        self.db.add(row)
        self.db.flush()
        lesson.id = row.id
        return 1

    def update_lesson(self, lesson: Lesson) -> int:
        return (self.db.query(LessonDB)
                .filter(LessonDB.id == lesson.id)
                .update({
                    LessonDB.subject_id: lesson.subject_id,
                    LessonDB.user_id: lesson.user_id,
                    LessonDB.campus_id: lesson.campus_id,
                    LessonDB.start_time: lesson.start_time,
                    LessonDB.end_time: lesson.end_time,
                    LessonDB.week: lesson.week,
                }))

    def delete_lessons(self, ids: Sequence[int]) -> int:
        if not ids:
            return 0
        return (self.db.query(LessonDB)
                .filter(LessonDB.id.in_(list(ids)))
                .delete())


class PeriodCatalog:
    def __init__(self, db: Session):
        self.db = db

    def get_all_periods(self) -> List[Period]:
        rows = self.db.query(PeriodDB).order_by(PeriodDB.position, PeriodDB.id).all()
        return [Period.model_validate(r) for r in rows]

    def add_period(self, name: str) -> Period:
        last = self.db.query(PeriodDB).order_by(PeriodDB.position.desc()).first()
        row = PeriodDB(name=name, position=(last.position + 1) if last else 0)
        self.db.add(row)
        self.db.flush()
        return Period.model_validate(row)
