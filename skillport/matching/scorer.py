"""
Deterministic match scorer.

Candidates are first filtered (role, verification, subject, free-text query)
and then scored with an integer points table; the ranking is a stable sort
by score, so equal scores keep the order of the candidate pool.
"""
from __future__ import annotations

import logging
import math
from typing import Iterable, List, Tuple

from ..models import MatchFilters, Person
from ..config import (
    ROLE_MATCH_POINTS,
    SUBJECT_MATCH_POINTS,
    GRADE_FIT_POINTS,
    GRADE_MISFIT_PENALTY,
    MAX_OVERLAP_POINTS,
    VERIFIED_BONUS_POINTS,
    QUERY_MATCH_POINTS,
)

logger = logging.getLogger(__name__)

RankedCandidate = Tuple[Person, int]


def round_half_up(value: float) -> int:
    """4.5 -> 5, 4.4 -> 4 (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def normalize_query(query: str) -> str:
    return query.strip().lower()


def search_haystack(person: Person) -> str:
    return f"{person.name} {person.about} {person.school} {person.city}".lower()


def matches_query(person: Person, query: str) -> bool:
    """Empty (or whitespace-only) query matches everyone."""
    q = normalize_query(query)
    if not q:
        return True
    return q in search_haystack(person)


def grade_fits(filters: MatchFilters, person: Person) -> bool:
    """
    Mentors must be at least one grade above the seeker,
    students at least one grade below.
    """
    if filters.role_needed == "mentor":
        return person.grade >= filters.seeker_grade + 1
    return person.grade <= filters.seeker_grade - 1


def timeslot_overlap(filters: MatchFilters, person: Person) -> int:
    return len(person.available & set(filters.time_ids))


def matches_filters(filters: MatchFilters, person: Person) -> bool:
    if person.role != filters.role_needed:
        return False
    if filters.only_verified and not person.verified:
        return False
    if filters.subject_id not in person.subjects:
        return False
    return matches_query(person, filters.query)


def score(filters: MatchFilters, person: Person) -> int:
    """
    Integer compatibility score of `person` for `filters`.

    Role is rewarded here but not enforced; exclusion is the job of
    matches_filters. The rating bonus follows the candidate's own role,
    not filters.role_needed.
    """
    points = 0

    if person.role == filters.role_needed:
        points += ROLE_MATCH_POINTS
    if filters.subject_id in person.subjects:
        points += SUBJECT_MATCH_POINTS

    if grade_fits(filters, person):
        points += GRADE_FIT_POINTS
    else:
        points -= GRADE_MISFIT_PENALTY

    points += min(MAX_OVERLAP_POINTS, timeslot_overlap(filters, person))

    if filters.only_verified and person.verified:
        points += VERIFIED_BONUS_POINTS
    if person.role == "mentor":
        points += round_half_up(person.rating)

    if normalize_query(filters.query) and matches_query(person, filters.query):
        points += QUERY_MATCH_POINTS

    logger.debug(f"Score for {person.id}: {points}")
    return points


def filter_candidates(filters: MatchFilters, pool: Iterable[Person]) -> List[Person]:
    return [p for p in pool if matches_filters(filters, p)]


def rank(filters: MatchFilters, pool: Iterable[Person]) -> List[RankedCandidate]:
    """
    Filter, score and sort the pool by score descending.
    sorted() is stable, so ties keep their filtered order.
    """
    scored = [(p, score(filters, p)) for p in filter_candidates(filters, pool)]
    ranked = sorted(scored, key=lambda item: item[1], reverse=True)
    logger.info(
        f"Ranked {len(ranked)} candidates for subject={filters.subject_id} "
        f"role={filters.role_needed}"
    )
    return ranked
