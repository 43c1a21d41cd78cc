# skillport/reporting/dashboard.py
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Sequence, Tuple

import pandas as pd

from ..models import Person, RequestStatus, SessionRequest
from ..data_generation.lookups import person_name, subject_name, time_label
from ..matching.scorer import round_half_up


def stars(rating: float) -> str:
    """4.8 -> '★★★★★', 3.2 -> '★★★☆☆'."""
    full = max(0, min(5, round_half_up(rating)))
    return "★" * full + "☆" * (5 - full)


def summarize_requests(
    requests: Sequence[SessionRequest],
    pool: Iterable[Person],
) -> Dict[str, Any]:
    """
    Dashboard counters.

    Returns a dict with:
      - 'total', 'open', 'confirmed', 'done': request counts by status
      - 'mentors': number of mentors in the pool
      - 'verified_mentors': number of verified mentors in the pool
    """
    mentors = [p for p in pool if p.role == "mentor"]
    by_status = {s: 0 for s in RequestStatus}
    for r in requests:
        by_status[r.status] += 1

    return {
        "total": len(requests),
        "open": by_status[RequestStatus.OPEN],
        "confirmed": by_status[RequestStatus.CONFIRMED],
        "done": by_status[RequestStatus.COMPLETED],
        "mentors": len(mentors),
        "verified_mentors": sum(1 for m in mentors if m.verified),
    }


def mentor_leaderboard(pool: Iterable[Person]) -> List[Person]:
    """Mentors by portfolio points, highest first (ties keep pool order)."""
    mentors = [p for p in pool if p.role == "mentor"]
    return sorted(mentors, key=lambda p: p.points, reverse=True)


def ranking_frame(ranked: Sequence[Tuple[Person, int]]) -> pd.DataFrame:
    rows = [
        {
            "id": p.id,
            "name": p.name,
            "grade": p.grade,
            "score": s,
            "rating": stars(p.rating) if p.role == "mentor" else "",
            "verified": p.verified,
            "slots": ", ".join(time_label(t) for t in sorted(p.available)),
        }
        for p, s in ranked
    ]
    return pd.DataFrame(rows, columns=["id", "name", "grade", "score", "rating", "verified", "slots"])


def requests_frame(
    requests: Sequence[SessionRequest],
    pool: Iterable[Person],
) -> pd.DataFrame:
    pool = list(pool)
    rows = [
        {
            "id": r.id,
            "status": r.status.value,
            "subject": subject_name(r.subject_id),
            "grade": r.student_grade,
            "format": r.format,
            "minutes": r.duration_min,
            "topic": r.topic or "(not filled in yet)",
            "mentor": person_name(r.matched_mentor_id, pool) if r.matched_mentor_id else "-",
        }
        for r in requests
    ]
    return pd.DataFrame(
        rows,
        columns=["id", "status", "subject", "grade", "format", "minutes", "topic", "mentor"],
    )


def leaderboard_frame(pool: Iterable[Person]) -> pd.DataFrame:
    rows = [
        {
            "rank": i,
            "name": p.name,
            "school": p.school,
            "city": p.city,
            "points": p.points,
            "verified": p.verified,
        }
        for i, p in enumerate(mentor_leaderboard(pool), start=1)
    ]
    return pd.DataFrame(rows, columns=["rank", "name", "school", "city", "points", "verified"])
