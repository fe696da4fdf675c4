import re
from datetime import date, datetime

WEEK_LABEL_PATTERN = re.compile(r'^(\d{4})-W(\d{2})$')

def week_label(moment: datetime) -> str:
    """ISO-8601 week key, e.g. 2026-10-19 -> "2026-W43". Weeks start on Monday."""
    iso_year, iso_week, _ = moment.isocalendar()
    return f"{iso_year}-W{iso_week:02d}"

def monday_of_week(label: str) -> date:
    match = WEEK_LABEL_PATTERN.match(label)
    if not match:
        raise ValueError(f"Invalid week label: {label!r}")
    return date.fromisocalendar(int(match.group(1)), int(match.group(2)), 1)

def day_of_week_index(moment: datetime) -> int:
    # Monday=0 .. Sunday=6
    return moment.weekday()
