import os
from dotenv import load_dotenv

load_dotenv() # Load env vars from .env

DEFAULT_PERIOD_NAMES = "08:00-09:30,09:40-11:10,11:20-12:50,13:30-15:00,15:10-16:40,16:50-18:20"


class Settings:
    # Database
    DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./lesson_scheduler.db")

    # Timetable
    # "all": a lesson lands in every period whose range contains its start time
    # "first": only the first such period in catalog order
    PERIOD_MATCH_MODE = os.getenv("PERIOD_MATCH_MODE", "all").strip().lower()
    DEFAULT_PERIODS = [
        name.strip()
        for name in os.getenv("DEFAULT_PERIODS", DEFAULT_PERIOD_NAMES).split(",")
        if name.strip()
    ]

    # PDF export: TrueType font covering the names that get printed
    PDF_FONT_PATH = os.getenv("PDF_FONT_PATH", "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf")
    PDF_FONT_BOLD_PATH = os.getenv("PDF_FONT_BOLD_PATH", "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf")

    # App Settings
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    PORT = int(os.getenv("PORT", 8765))


settings = Settings()
