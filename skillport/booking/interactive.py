# skillport/booking/interactive.py
from __future__ import annotations

from dataclasses import replace
from typing import Callable, Sequence

from ..config import DURATIONS_MIN, FORMATS, ROLES
from ..models import MatchFilters, Person
from ..matching.scorer import rank
from ..data_generation.lookups import subject_by_id, time_label, timeslot_by_id
from ..reporting.dashboard import ranking_frame, requests_frame, summarize_requests
from .commands import (
    AutoMatch,
    CompleteRequest,
    CreateRequest,
    MatchRequest,
    QuickMatch,
    SetTopic,
    dispatch,
)
from .lifecycle import RequestStore

MENU = (
    "\nChoose an action:\n"
    "  1) Show ranked candidates\n"
    "  2) Change search filters\n"
    "  3) Create request from current filters\n"
    "  4) Quick match with a candidate\n"
    "  5) Match request with a candidate\n"
    "  6) Auto-match request with the best candidate\n"
    "  7) Complete request\n"
    "  8) Set request topic\n"
    "  9) Quit\n"
)


def _print_filters(filters: MatchFilters) -> None:
    subject = subject_by_id(filters.subject_id)
    subject_label = subject.name if subject else f"{filters.subject_id} (not found)"
    slots = ", ".join(time_label(t) for t in filters.time_ids) or "-"
    print(
        f"Filters: looking for {filters.role_needed}, grade {filters.seeker_grade}, "
        f"{subject_label}, {filters.format} {filters.duration_min} min, "
        f"slots [{slots}], verified only={filters.only_verified}, "
        f"query={filters.query!r}"
    )


def _pick(ask: Callable[[str], str], label: str, current, allowed, convert=str):
    raw = ask(f"{label} {'/'.join(str(a) for a in allowed)} [{current}]: ").strip()
    if not raw:
        return current
    try:
        value = convert(raw)
    except ValueError:
        value = None
    if value not in allowed:
        print(f"{label} must be one of {', '.join(str(a) for a in allowed)}, keeping {current}.")
        return current
    return value


def _edit_filters(filters: MatchFilters, ask: Callable[[str], str]) -> MatchFilters:
    """Ask for every filter field; an empty answer keeps the current value."""
    role = _pick(ask, "Looking for", filters.role_needed, ROLES)
    subject_id = ask(f"Subject id [{filters.subject_id}]: ").strip() or filters.subject_id

    grade_raw = ask(f"Your grade [{filters.seeker_grade}]: ").strip()
    try:
        grade = int(grade_raw) if grade_raw else filters.seeker_grade
    except ValueError:
        print("Grade must be a number, keeping the previous one.")
        grade = filters.seeker_grade

    slots_raw = ask(f"Time slot ids, comma separated [{','.join(filters.time_ids)}]: ").strip()
    time_ids = filters.time_ids
    if slots_raw:
        picked = tuple(s.strip() for s in slots_raw.split(",") if s.strip())
        unknown = [s for s in picked if timeslot_by_id(s) is None]
        if unknown:
            print(f"Unknown time slots {', '.join(unknown)}, keeping the previous ones.")
        else:
            time_ids = picked

    verified_raw = ask(f"Verified only y/n [{'y' if filters.only_verified else 'n'}]: ").strip().lower()
    only_verified = filters.only_verified
    if verified_raw in ("y", "yes"):
        only_verified = True
    elif verified_raw in ("n", "no"):
        only_verified = False
    elif verified_raw:
        print("Answer y or n, keeping the previous setting.")

    session_format = _pick(ask, "Format", filters.format, FORMATS)
    duration = _pick(ask, "Duration (min)", filters.duration_min, DURATIONS_MIN, convert=int)

    query = ask(f"Search text [{filters.query}] ('-' to clear): ").strip()
    if not query:
        query = filters.query
    elif query == "-":
        query = ""

    return replace(
        filters,
        role_needed=role,
        subject_id=subject_id,
        seeker_grade=grade,
        time_ids=time_ids,
        only_verified=only_verified,
        format=session_format,
        duration_min=duration,
        query=query,
    )


def interactive_manage_requests(
    store: RequestStore,
    pool: Sequence[Person],
    filters: MatchFilters,
    ask: Callable[[str], str] = input,
) -> None:
    """Console loop over `store`; every change goes through dispatch()."""
    while True:
        stats = summarize_requests(store.requests, pool)
        print("\n========== REQUESTS ==========")
        print(requests_frame(store.requests, pool).to_string(index=False))
        print(
            f"\nTotal={stats['total']} open={stats['open']} "
            f"confirmed={stats['confirmed']} done={stats['done']}"
        )
        _print_filters(filters)
        print(MENU)

        choice = ask("Your choice [1-9]: ").strip()

        if choice == "1":
            ranked = rank(filters, pool)
            if ranked:
                print(ranking_frame(ranked).to_string(index=False))
            else:
                print("No candidates match these filters.")

        elif choice == "2":
            filters = _edit_filters(filters, ask)

        elif choice == "3":
            topic = ask("Topic (optional): ").strip()
            dispatch(store, CreateRequest(filters, topic))

        elif choice == "4":
            mentor_id = ask("Candidate id: ").strip()
            dispatch(store, QuickMatch(filters, mentor_id))

        elif choice == "5":
            request_id = ask("Request id: ").strip()
            mentor_id = ask("Candidate id: ").strip()
            dispatch(store, MatchRequest(request_id, mentor_id))

        elif choice == "6":
            request_id = ask("Request id: ").strip()
            dispatch(store, AutoMatch(request_id, filters, tuple(pool)))

        elif choice == "7":
            request_id = ask("Request id: ").strip()
            dispatch(store, CompleteRequest(request_id))

        elif choice == "8":
            request_id = ask("Request id: ").strip()
            topic = ask("New topic: ")
            dispatch(store, SetTopic(request_id, topic))

        elif choice == "9":
            print("Bye.")
            return

        else:
            print("Invalid choice, please select 1–9.")
