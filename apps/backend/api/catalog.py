from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from database import get_db, SubjectDB, TeacherDB
from models.schemas import NamedItem, Period, PeriodIn, SubjectIn, TeacherIn
from services.lesson_store import PeriodCatalog
from typing import List

router = APIRouter(prefix="/catalog", tags=["Catalog"])

@router.get("/periods", response_model=List[Period])
async def list_periods(db: Session = Depends(get_db)):
    return PeriodCatalog(db).get_all_periods()

@router.post("/periods", response_model=Period)
async def add_period(item: PeriodIn, db: Session = Depends(get_db)):
    """
    Appends a period to the end of the catalog.

    Names are expected as "HH:MM-HH:MM"; other names are stored but never
    receive lessons in the timetable grid.
    """
    period = PeriodCatalog(db).add_period(item.name.strip())
    db.commit()
    return period

@router.get("/subjects", response_model=List[NamedItem])
async def list_subjects(db: Session = Depends(get_db)):
    return db.query(SubjectDB).order_by(SubjectDB.id).all()

@router.post("/subjects", response_model=NamedItem)
async def create_subject(item: SubjectIn, db: Session = Depends(get_db)):
    db_item = SubjectDB(name=item.name)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item

@router.get("/teachers", response_model=List[NamedItem])
async def list_teachers(db: Session = Depends(get_db)):
    return db.query(TeacherDB).order_by(TeacherDB.id).all()

@router.post("/teachers", response_model=NamedItem)
async def create_teacher(item: TeacherIn, db: Session = Depends(get_db)):
    db_item = TeacherDB(name=item.name)
    db.add(db_item)
    db.commit()
    db.refresh(db_item)
    return db_item
