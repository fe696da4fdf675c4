from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from database import get_db
from models.schemas import Lesson, LessonIn, TimetableWeek
from services.exceptions import SchedulingError
from services.lesson_service import LessonService
from services.pdf_service import generate_timetable_pdf
from typing import List, Optional
from datetime import datetime

router = APIRouter(prefix="/lessons", tags=["Lessons"])

def _http_error(e: SchedulingError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)

@router.post("/")
async def add_lesson(payload: LessonIn, db: Session = Depends(get_db)):
    """
    Books a new lesson.

    Rejected with 409 if the subject or the teacher is already booked in an
    overlapping window.
    """
    lesson = Lesson(**payload.model_dump())
    try:
        created = LessonService(db).add_lesson(lesson)
    except SchedulingError as e:
        raise _http_error(e)
    return {"status": "success", "created": created, "id": lesson.id, "week": lesson.week}

@router.put("/{lesson_id}")
async def update_lesson(lesson_id: int, payload: LessonIn, db: Session = Depends(get_db)):
    lesson = Lesson(id=lesson_id, **payload.model_dump())
    try:
        updated = LessonService(db).update_lesson(lesson)
    except SchedulingError as e:
        raise _http_error(e)
    return {"status": "success", "updated": updated, "id": lesson_id, "week": lesson.week}

@router.delete("/")
async def remove_lessons(ids: str = "", db: Session = Depends(get_db)):
    """
    Deletes lessons by comma-separated ids, all or nothing.
    """
    try:
        LessonService(db).remove_lesson(ids)
    except SchedulingError as e:
        raise _http_error(e)
    return {"status": "deleted", "ids": ids}

@router.get("/", response_model=List[TimetableWeek])
async def get_lessons(
    start_time: Optional[datetime] = None,
    user_id: Optional[int] = None,
    subject_id: Optional[int] = None,
    campus_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    """
    Weekly timetable grid.

    `start_time` selects the calendar week containing it; the other filters
    narrow by teacher, subject and campus.
    """
    return LessonService(db).get_lessons(start_time, user_id, subject_id, campus_id)

@router.get("/pdf")
async def get_lessons_pdf(
    start_time: Optional[datetime] = None,
    user_id: Optional[int] = None,
    subject_id: Optional[int] = None,
    campus_id: Optional[int] = None,
    db: Session = Depends(get_db),
):
    weeks = LessonService(db).get_lessons(start_time, user_id, subject_id, campus_id)
    pdf_buffer = generate_timetable_pdf(weeks)

    return StreamingResponse(
        pdf_buffer,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="timetable.pdf"'}
    )
