from pydantic import BaseModel, ConfigDict, model_validator
from typing import List, Optional, Tuple
from datetime import date, datetime
from enum import Enum

class DayOfWeek(str, Enum):
    MON = "mon"
    TUE = "tue"
    WED = "wed"
    THU = "thu"
    FRI = "fri"
    SAT = "sat"
    SUN = "sun"

# Weekday index (Mon=0 .. Sun=6) -> PlanRow slot name
DAY_SLOTS = [d.value for d in DayOfWeek]

def is_aware(moment: datetime) -> bool:
    return moment.tzinfo is not None and moment.utcoffset() is not None

class LessonIn(BaseModel):
    subject_id: int
    user_id: int # teacher
    campus_id: Optional[int] = None
    start_time: datetime
    end_time: datetime

    @model_validator(mode="after")
    def check_time_order(self):
        if is_aware(self.start_time) != is_aware(self.end_time):
            raise ValueError("start_time and end_time must both carry a timezone offset or neither")
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self

class Lesson(BaseModel):
    """
    A single scheduled teaching session.

    `week` is derived from `start_time` on every write; `subject_name` and
    `teacher_name` are filled in by the store for display only.
    """
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    subject_id: int
    user_id: int
    campus_id: Optional[int] = None
    start_time: datetime
    end_time: datetime
    week: Optional[str] = None
    subject_name: Optional[str] = None
    teacher_name: Optional[str] = None

class LessonFilter(BaseModel):
    """
    Query-by-example filter passed to the lesson store.

    Per-field semantics (None means the dimension is not filtered):
    - exclude_id: exclusion, matches lessons whose id differs
    - subject_id, user_id, campus_id, week: equality
    - start_time / end_time: range overlap against the stored interval,
      i.e. stored.start_time < end_time and stored.end_time > start_time
    """
    model_config = ConfigDict(frozen=True)

    exclude_id: Optional[int] = None
    subject_id: Optional[int] = None
    user_id: Optional[int] = None
    campus_id: Optional[int] = None
    week: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

class Period(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    name: str # "HH:MM-HH:MM"

class PlanRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    period: str
    # Tuples so a built grid cannot be edited in place; with match mode "all"
    # the same Lesson may appear in more than one row
    mon: Tuple[Lesson, ...] = ()
    tue: Tuple[Lesson, ...] = ()
    wed: Tuple[Lesson, ...] = ()
    thu: Tuple[Lesson, ...] = ()
    fri: Tuple[Lesson, ...] = ()
    sat: Tuple[Lesson, ...] = ()
    sun: Tuple[Lesson, ...] = ()

    def day(self, index: int) -> Tuple[Lesson, ...]:
        return getattr(self, DAY_SLOTS[index])

class TimetableWeek(BaseModel):
    model_config = ConfigDict(frozen=True)

    week: str
    monday: date
    plans: Tuple[PlanRow, ...]

class SubjectIn(BaseModel):
    name: str

class TeacherIn(BaseModel):
    name: str

class PeriodIn(BaseModel):
    name: str

class NamedItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
