"""
Timetable constants: the allowed time slots and the French day table.
"""

from typing import Dict, List

from timetable.models import DayOfWeek

# Slot labels printed on the cohort timetables, in chronological order
TIME_SLOTS: List[str] = [
    "08:30-11:00",
    "11:00-13:30",
    "13:30-16:00",
    "16:00-18:30",
]

# Exact-match lookup. Anything not listed here is passed through as-is.
DAY_MAP: Dict[str, DayOfWeek] = {
    "Lundi": DayOfWeek.MONDAY,
    "Mardi": DayOfWeek.TUESDAY,
    "Mercredi": DayOfWeek.WEDNESDAY,
    "Jeudi": DayOfWeek.THURSDAY,
    "Vendredi": DayOfWeek.FRIDAY,
    "Samedi": DayOfWeek.SATURDAY,
}
