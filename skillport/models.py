# skillport/models.py
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from .config import DEFAULT_FILTERS


@dataclass(frozen=True)
class Subject:
    id: str
    name: str
    icon: str


@dataclass(frozen=True)
class Timeslot:
    id: str
    day: str
    start: str   # HH:MM
    end: str     # HH:MM
    label: str


@dataclass(frozen=True)
class Person:
    id: str
    name: str
    city: str
    school: str
    grade: int
    role: str                      # "mentor" or "student"
    subjects: FrozenSet[str]       # subject ids
    about: str = ""
    rating: float = 0.0            # 0 for non-mentors
    reviews_count: int = 0
    points: int = 0                # cumulative portfolio score
    available: FrozenSet[str] = field(default_factory=frozenset)  # timeslot ids
    verified: bool = False


@dataclass(frozen=True)
class MatchFilters:
    role_needed: str = DEFAULT_FILTERS["role_needed"]
    seeker_grade: int = DEFAULT_FILTERS["seeker_grade"]
    subject_id: str = DEFAULT_FILTERS["subject_id"]
    format: str = DEFAULT_FILTERS["format"]
    duration_min: int = DEFAULT_FILTERS["duration_min"]
    time_ids: Tuple[str, ...] = DEFAULT_FILTERS["time_ids"]
    only_verified: bool = DEFAULT_FILTERS["only_verified"]
    query: str = DEFAULT_FILTERS["query"]


class RequestStatus(str, Enum):
    OPEN = "Open"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"


@dataclass
class SessionRequest:
    id: str
    created_at: str                # ISO-8601, UTC
    subject_id: str
    student_grade: int
    preferred_times: Tuple[str, ...]
    format: str
    duration_min: int
    topic: str = ""
    status: RequestStatus = RequestStatus.OPEN
    matched_mentor_id: Optional[str] = None  # set only once Confirmed
