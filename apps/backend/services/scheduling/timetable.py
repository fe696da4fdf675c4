import logging
from datetime import datetime, time
from typing import Dict, List, Optional, Sequence, Tuple
from models.schemas import DAY_SLOTS, Lesson, Period, PlanRow, TimetableWeek
from services.scheduling.weeks import day_of_week_index, monday_of_week, week_label

logger = logging.getLogger(__name__)

MATCH_ALL = "all"
MATCH_FIRST = "first"
MATCH_MODES = (MATCH_ALL, MATCH_FIRST)

def parse_period_range(name: str) -> Optional[Tuple[time, time]]:
    """
    Parses a period name like "08:00-09:30" into (start, end) times.
    Returns None when the name is not a two-token range.
    """
    parts = name.split('-')
    if len(parts) != 2:
        return None
    try:
        start = datetime.strptime(parts[0].strip(), "%H:%M").time()
        end = datetime.strptime(parts[1].strip(), "%H:%M").time()
    except ValueError:
        return None
    return start, end


class TimetableBuilder:
    """
    Lays out a flat list of lessons as a weekly timetable grid.

    Processing:
    1. Bucketing: week label -> period name -> weekday index -> lessons.
       A lesson belongs to a period when its start time of day (hour:minute)
       falls within the period's range, both ends inclusive.
    2. Flattening: one TimetableWeek per week (first-seen order), with a
       PlanRow for every catalog period so empty periods still render.

    Args:
        periods: Period catalog, in catalog order.
        match_mode: "all" places a lesson into every matching period when
            ranges overlap; "first" keeps only the first match.
    """
    def __init__(self, periods: Sequence[Period], match_mode: str = MATCH_ALL):
        if match_mode not in MATCH_MODES:
            raise ValueError(f"Unknown period match mode: {match_mode!r}")
        self.periods = list(periods)
        self.match_mode = match_mode
        self._ranges = []
        for period in self.periods:
            parsed = parse_period_range(period.name)
            if parsed is None:
                logger.debug("Skipping period %r: not an HH:MM-HH:MM range", period.name)
                continue
            self._ranges.append((period.name, parsed[0], parsed[1]))

    def matching_periods(self, moment: datetime) -> List[str]:
        start_of_day = time(moment.hour, moment.minute)
        matches = []
        for name, start, end in self._ranges:
            if start <= start_of_day <= end:
                matches.append(name)
                if self.match_mode == MATCH_FIRST:
                    break
        return matches

    def bucket(self, lessons: Sequence[Lesson]) -> Dict[str, Dict[str, Dict[int, List[Lesson]]]]:
        weeks = {}
        for lesson in lessons:
            by_period = weeks.setdefault(week_label(lesson.start_time), {})
            day_idx = day_of_week_index(lesson.start_time)
            for name in self.matching_periods(lesson.start_time):
                by_period.setdefault(name, {}).setdefault(day_idx, []).append(lesson)
        return weeks

    def build(self, lessons: Sequence[Lesson]) -> List[TimetableWeek]:
        result = []
        for week, by_period in self.bucket(lessons).items():
            plans = []
            for period in self.periods:
                slots = {slot: () for slot in DAY_SLOTS}
                for day_idx, day_lessons in by_period.get(period.name, {}).items():
                    slots[DAY_SLOTS[day_idx]] = tuple(day_lessons)
                plans.append(PlanRow(period=period.name, **slots))
            result.append(TimetableWeek(week=week, monday=monday_of_week(week), plans=tuple(plans)))
        return result
