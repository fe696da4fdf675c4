from sqlalchemy import create_engine, CheckConstraint, Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import declarative_base, relationship, sessionmaker
from settings import settings

DATABASE_URL = settings.DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

class SubjectDB(Base):
    __tablename__ = "subjects"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)

class TeacherDB(Base):
    __tablename__ = "teachers"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)

class PeriodDB(Base):
    __tablename__ = "periods"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False) # e.g. "08:00-09:30"
    position = Column(Integer, nullable=False, default=0) # catalog order

class LessonDB(Base):
    __tablename__ = "lessons"

    id = Column(Integer, primary_key=True, index=True)
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False)
    user_id = Column(Integer, ForeignKey("teachers.id"), nullable=False)
    campus_id = Column(Integer, nullable=True, index=True)
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    week = Column(String, nullable=False, index=True) # e.g. "2026-W43"

    subject = relationship("SubjectDB", lazy="joined")
    teacher = relationship("TeacherDB", lazy="joined")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_lesson_time_order"),
        Index("ix_lesson_subject_start", "subject_id", "start_time"),
        Index("ix_lesson_teacher_start", "user_id", "start_time"),
    )

    @property
    def subject_name(self):
        return self.subject.name if self.subject else None

    @property
    def teacher_name(self):
        return self.teacher.name if self.teacher else None

    def __repr__(self) -> str:
        return f"<LessonDB id={self.id} subject={self.subject_id} teacher={self.user_id} start={self.start_time} end={self.end_time}>"

def init_db():
    Base.metadata.create_all(bind=engine)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
