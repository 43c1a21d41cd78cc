# skillport/data_generation/lookups.py
from __future__ import annotations
from typing import Dict, Iterable, Optional

from ..models import Person, Subject, Timeslot
from .catalog import PEOPLE, SUBJECTS, TIMESLOTS


def _index_by_id(items: Iterable) -> Dict[str, object]:
    return {item.id: item for item in items}


_SUBJECTS_BY_ID = _index_by_id(SUBJECTS)
_TIMESLOTS_BY_ID = _index_by_id(TIMESLOTS)


def subject_by_id(subject_id: str) -> Optional[Subject]:
    return _SUBJECTS_BY_ID.get(subject_id)


def timeslot_by_id(slot_id: str) -> Optional[Timeslot]:
    return _TIMESLOTS_BY_ID.get(slot_id)


def person_by_id(person_id: str, pool: Iterable[Person] = PEOPLE) -> Optional[Person]:
    for p in pool:
        if p.id == person_id:
            return p
    return None


def subject_name(subject_id: str) -> str:
    """Display name of a subject, or the raw id when it is not in the catalog."""
    subject = subject_by_id(subject_id)
    return subject.name if subject else subject_id


def time_label(slot_id: str) -> str:
    slot = timeslot_by_id(slot_id)
    return slot.label if slot else slot_id


def person_name(person_id: str, pool: Iterable[Person] = PEOPLE) -> str:
    person = person_by_id(person_id, pool)
    return person.name if person else person_id
