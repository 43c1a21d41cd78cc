# skillport/data_generation/person_factory.py
from __future__ import annotations

import random
from typing import List, Optional, Sequence

from ..models import Person
from ..config import (
    DEFAULT_SEED,
    NUM_PEOPLE_DEFAULT,
    MENTOR_SHARE_DEFAULT,
    VERIFIED_SHARE_DEFAULT,
    SUBJECTS_PER_PERSON,
    SLOTS_PER_PERSON,
    MIN_GRADE,
    MAX_GRADE,
)
from .catalog import SUBJECTS, TIMESLOTS

CITIES = ["Vladivostok", "Nakhodka", "Ussuriysk", "Artyom"]


def _split_roles(num_people: int, mentor_share: float) -> List[str]:
    """
    Mentors first, then students:
      - at least one of each role when num_people >= 2
    """
    if not (0.0 <= mentor_share <= 1.0):
        raise ValueError(f"mentor_share must be within [0, 1], got {mentor_share}.")

    num_mentors = round(num_people * mentor_share)
    if num_people >= 2:
        num_mentors = min(max(num_mentors, 1), num_people - 1)
    return ["mentor"] * num_mentors + ["student"] * (num_people - num_mentors)


def create_people(
    num_people: int = NUM_PEOPLE_DEFAULT,
    seed: int = DEFAULT_SEED,
    mentor_share: float = MENTOR_SHARE_DEFAULT,
    verified_share: float = VERIFIED_SHARE_DEFAULT,
    subject_ids: Optional[Sequence[str]] = None,
    slot_ids: Optional[Sequence[str]] = None,
) -> List[Person]:
    """
    Create a synthetic candidate pool.

    - Mentors are drawn from the upper grades (8-11) and get a rating in
      [3.5, 5.0]; students get grades 7-10 and rating 0.
    - Each person covers SUBJECTS_PER_PERSON subjects and 2-3 timeslots.
    - Same seed -> same pool.
    """
    if num_people < 0:
        raise ValueError(f"num_people must be non-negative, got {num_people}.")

    rng = random.Random(seed)
    all_subjects = list(subject_ids) if subject_ids else [s.id for s in SUBJECTS]
    all_slots = list(slot_ids) if slot_ids else [t.id for t in TIMESLOTS]

    people: List[Person] = []
    for idx, role in enumerate(_split_roles(num_people, mentor_share), start=1):
        if role == "mentor":
            grade = rng.randint(MIN_GRADE + 1, MAX_GRADE)
            rating = round(rng.uniform(3.5, 5.0), 1)
            reviews = rng.randint(0, 50)
            points = reviews * 40 + rng.randint(0, 400)
            label = "Mentor"
        else:
            grade = rng.randint(MIN_GRADE, MAX_GRADE - 1)
            rating = 0.0
            reviews = 0
            points = rng.randint(0, 200)
            label = "Student"

        k_subjects = min(SUBJECTS_PER_PERSON, len(all_subjects))
        k_slots = min(rng.randint(*SLOTS_PER_PERSON), len(all_slots))

        people.append(
            Person(
                id=f"P{idx:03d}",
                name=f"{label} {idx}, grade {grade}",
                city=rng.choice(CITIES),
                school=f"School No. {rng.randint(1, 40)}",
                grade=grade,
                role=role,
                subjects=frozenset(rng.sample(all_subjects, k=k_subjects)),
                about="",
                rating=rating,
                reviews_count=reviews,
                points=points,
                available=frozenset(rng.sample(all_slots, k=k_slots)),
                verified=rng.random() < verified_share,
            )
        )

    return people
