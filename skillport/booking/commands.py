# skillport/booking/commands.py
"""
Explicit commands for everything a front end can do to the request
collection. A UI builds one of these and hands it to dispatch().
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence, Union

from ..matching.scorer import rank
from ..models import MatchFilters, Person, SessionRequest
from .lifecycle import RequestStore


@dataclass(frozen=True)
class CreateRequest:
    filters: MatchFilters
    topic: str = ""


@dataclass(frozen=True)
class QuickMatch:
    filters: MatchFilters
    mentor_id: str


@dataclass(frozen=True)
class MatchRequest:
    request_id: str
    mentor_id: str


@dataclass(frozen=True)
class AutoMatch:
    request_id: str
    filters: MatchFilters
    pool: Sequence[Person] = field(default_factory=tuple)


@dataclass(frozen=True)
class CompleteRequest:
    request_id: str


@dataclass(frozen=True)
class SetTopic:
    request_id: str
    topic: str


Command = Union[CreateRequest, QuickMatch, MatchRequest, AutoMatch, CompleteRequest, SetTopic]


def dispatch(store: RequestStore, command: Command) -> List[SessionRequest]:
    """Apply `command` to `store` and return the resulting collection."""
    if isinstance(command, CreateRequest):
        store.create_request(command.filters, command.topic)
    elif isinstance(command, QuickMatch):
        store.quick_match(command.filters, command.mentor_id)
    elif isinstance(command, MatchRequest):
        store.match(command.request_id, command.mentor_id)
    elif isinstance(command, AutoMatch):
        store.auto_match(command.request_id, rank(command.filters, command.pool))
    elif isinstance(command, CompleteRequest):
        store.complete(command.request_id)
    elif isinstance(command, SetTopic):
        store.set_topic(command.request_id, command.topic)
    else:
        raise TypeError(f"Unknown command: {command!r}")
    return store.requests
