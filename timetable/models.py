"""
Schedule Data Model
Records handed back to callers after a timetable PDF has been extracted,
plus the transfer shapes used to validate what Gemini returns.

JSON field names follow the camelCase contract used by the front end
(groupName, timeSlot, lastUpdated, mondaySummary).
"""

from datetime import datetime
from enum import Enum
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class DayOfWeek(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"


class GroupStatus(str, Enum):
    OK = "OK"
    ERROR = "ERROR"


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------

class ScheduleEntry(CamelModel):
    group_name: str
    # Unrecognised day labels are kept verbatim
    day: Union[DayOfWeek, str]
    time_slot: str
    room: str
    professor: str


class GroupData(CamelModel):
    name: str
    last_updated: datetime
    entries: List[ScheduleEntry] = Field(default_factory=list)
    status: GroupStatus = GroupStatus.OK
    monday_summary: List[ScheduleEntry] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Gemini response shapes
# ---------------------------------------------------------------------------

class RawEntry(CamelModel):
    """One row as returned by the model. All four fields must be present."""

    day: str
    time_slot: str
    room: str
    professor: str


class RawSchedule(CamelModel):
    """Top-level body. Missing or null groupName and entries count as empty."""

    group_name: Optional[str] = None
    entries: Optional[List[RawEntry]] = None
