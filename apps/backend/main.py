from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging
import uvicorn
from api import catalog, lessons
from database import init_db, SessionLocal, PeriodDB
from services.scheduling.timetable import MATCH_MODES
from settings import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Lesson Scheduler API")

@app.on_event("startup")
def on_startup():
    check_settings()
    init_db()
    seed_data()

def check_settings():
    """Fails startup on configuration the request handlers could not use."""
    if settings.PERIOD_MATCH_MODE not in MATCH_MODES:
        raise ValueError(
            f"PERIOD_MATCH_MODE must be one of {', '.join(MATCH_MODES)}, got {settings.PERIOD_MATCH_MODE!r}"
        )

def seed_data():
    db = SessionLocal()
    try:
        if not db.query(PeriodDB).first():
            logger.info("Seeding default period catalog (%s periods)", len(settings.DEFAULT_PERIODS))
            for position, name in enumerate(settings.DEFAULT_PERIODS):
                db.add(PeriodDB(name=name, position=position))
            db.commit()
    finally:
        db.close()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(lessons.router, prefix="/api")
app.include_router(catalog.router, prefix="/api")

@app.get("/health")
async def health_check():
    return {"status": "ok", "version": "0.1.0"}

if __name__ == "__main__":
    uvicorn.run("main:app", host="127.0.0.1", port=settings.PORT, reload=True)
