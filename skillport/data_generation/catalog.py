# skillport/data_generation/catalog.py
from __future__ import annotations
from typing import List

from ..models import Person, RequestStatus, SessionRequest, Subject, Timeslot


SUBJECTS: List[Subject] = [
    Subject(id="math", name="Mathematics", icon="∑"),
    Subject(id="rus", name="Russian language", icon="А"),
    Subject(id="phys", name="Physics", icon="⚡"),
    Subject(id="chem", name="Chemistry", icon="⚗"),
    Subject(id="eng", name="English", icon="EN"),
    Subject(id="inf", name="Computer science", icon="</>"),
]


def _slot(slot_id: str, day: str, start: str, end: str) -> Timeslot:
    return Timeslot(id=slot_id, day=day, start=start, end=end, label=f"{day} {start}–{end}")


TIMESLOTS: List[Timeslot] = [
    _slot("mon-17", "Mon", "17:00", "17:30"),
    _slot("mon-19", "Mon", "19:00", "19:30"),
    _slot("tue-18", "Tue", "18:00", "18:30"),
    _slot("wed-17", "Wed", "17:00", "17:30"),
    _slot("thu-19", "Thu", "19:00", "19:30"),
    _slot("fri-18", "Fri", "18:00", "18:30"),
    _slot("sat-12", "Sat", "12:00", "12:30"),
    _slot("sun-16", "Sun", "16:00", "16:30"),
]


PEOPLE: List[Person] = [
    Person(
        id="p1",
        name="Egor, grade 10",
        city="Vladivostok",
        school="School No. 12",
        grade=10,
        role="mentor",
        subjects=frozenset({"math", "inf"}),
        about="Preparing for the profile maths and CS finals. I explain briefly and step by step.",
        rating=4.8,
        reviews_count=23,
        points=1240,
        available=frozenset({"mon-19", "wed-17", "sat-12"}),
        verified=True,
    ),
    Person(
        id="p2",
        name="Alina, grade 11",
        city="Vladivostok",
        school="Gymnasium No. 1",
        grade=11,
        role="mentor",
        subjects=frozenset({"rus", "eng"}),
        about="I help with essays and grammar rules. Can check homework and make a plan.",
        rating=4.9,
        reviews_count=41,
        points=2030,
        available=frozenset({"tue-18", "thu-19", "sun-16"}),
        verified=True,
    ),
    Person(
        id="p3",
        name="Ivan, grade 9",
        city="Vladivostok",
        school="School No. 12",
        grade=9,
        role="mentor",
        subjects=frozenset({"phys", "math"}),
        about="Physics exam prep. I love motion and electricity problems.",
        rating=4.6,
        reviews_count=12,
        points=760,
        available=frozenset({"fri-18", "sat-12"}),
        verified=False,
    ),
    Person(
        id="p4",
        name="Sasha, grade 8",
        city="Vladivostok",
        school="School No. 7",
        grade=8,
        role="student",
        subjects=frozenset({"math", "rus"}),
        about="Struggling with fractions and word problems. Need short explanations.",
        rating=0.0,
        reviews_count=0,
        points=120,
        available=frozenset({"mon-17", "wed-17", "sun-16"}),
        verified=True,
    ),
    Person(
        id="p5",
        name="Lera, grade 7",
        city="Vladivostok",
        school="School No. 5",
        grade=7,
        role="student",
        subjects=frozenset({"chem", "math"}),
        about="Want to catch up on maths and understand the basics of chemistry.",
        rating=0.0,
        reviews_count=0,
        points=80,
        available=frozenset({"tue-18", "thu-19"}),
        verified=False,
    ),
]


def initial_requests() -> List[SessionRequest]:
    """
    Seed request collection used on first start or when the stored
    snapshot is unreadable. Returns fresh objects on every call.
    """
    return [
        SessionRequest(
            id="r1",
            created_at="2026-02-19T09:30:00.000Z",
            subject_id="math",
            topic="Fractions and reducing to a common denominator",
            student_grade=8,
            preferred_times=("wed-17", "sun-16"),
            format="video",
            duration_min=20,
            status=RequestStatus.OPEN,
        ),
        SessionRequest(
            id="r2",
            created_at="2026-02-18T16:10:00.000Z",
            subject_id="rus",
            topic="Exam essay: structure and arguments",
            student_grade=9,
            preferred_times=("tue-18", "thu-19"),
            format="chat",
            duration_min=30,
            status=RequestStatus.CONFIRMED,
            matched_mentor_id="p2",
        ),
    ]
