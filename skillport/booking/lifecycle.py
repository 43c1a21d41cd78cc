"""Session request lifecycle.

Requests move strictly forward through Open -> Confirmed -> Completed. The
only way to skip Open is the quick-match constructor, which creates a request
already Confirmed; it is not a transition.

``RequestStore`` owns the request collection (newest first). Loading, saving,
id generation and the clock are injected so the store carries no global
state and tests can pin ids and timestamps.
"""
from __future__ import annotations

import copy
import itertools
import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from ..config import QUICK_MATCH_TOPIC, REQUEST_ID_PREFIX
from ..errors import InvalidTransition, PersistenceUnavailable, RequestNotFound
from ..models import MatchFilters, Person, RequestStatus, SessionRequest
from ..data_generation.catalog import initial_requests

logger = logging.getLogger(__name__)

# action -> (required status, resulting status)
TRANSITIONS: Dict[str, Tuple[RequestStatus, RequestStatus]] = {
    "match": (RequestStatus.OPEN, RequestStatus.CONFIRMED),
    "complete": (RequestStatus.CONFIRMED, RequestStatus.COMPLETED),
}

Loader = Callable[[], Optional[List[SessionRequest]]]
Saver = Callable[[List[SessionRequest]], None]


def can_transition(status: RequestStatus, action: str) -> bool:
    required, _ = TRANSITIONS[action]
    return status is required


def counter_ids(prefix: str = REQUEST_ID_PREFIX, start: int = 1) -> Iterator[str]:
    """r1, r2, r3, ..."""
    for n in itertools.count(start):
        yield f"{prefix}{n}"


def uuid_ids(prefix: str = REQUEST_ID_PREFIX) -> Iterator[str]:
    while True:
        yield f"{prefix}{uuid.uuid4().hex[:12]}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """2026-02-19T09:30:00.000Z"""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


class RequestStore:
    """
    The mutable request collection and its transitions.

    With strict=False (default) operations on unknown ids and disallowed
    transitions are logged no-ops; strict=True raises RequestNotFound /
    InvalidTransition instead. Either way nothing is modified.
    """

    def __init__(
        self,
        load: Optional[Loader] = None,
        save: Optional[Saver] = None,
        id_generator: Optional[Iterator[str]] = None,
        clock: Callable[[], datetime] = utc_now,
        seed: Callable[[], List[SessionRequest]] = initial_requests,
        strict: bool = False,
    ):
        self._save = save
        self._ids = id_generator if id_generator is not None else uuid_ids()
        self._clock = clock
        self.strict = strict
        self.requests: List[SessionRequest] = self._load_or_seed(load, seed)

    # ------------------------------------------------------------------
    # persistence boundary
    # ------------------------------------------------------------------
    def _load_or_seed(
        self,
        load: Optional[Loader],
        seed: Callable[[], List[SessionRequest]],
    ) -> List[SessionRequest]:
        if load is None:
            return seed()
        try:
            loaded = load()
        except PersistenceUnavailable as e:
            logger.warning(f"Falling back to seed requests: {e}")
            return seed()
        if loaded is None:
            return seed()
        logger.info(f"Loaded {len(loaded)} requests")
        return loaded

    def _persist(self) -> None:
        if self._save is None:
            return
        try:
            self._save(self.snapshot())
        except PersistenceUnavailable as e:
            logger.warning(f"Changes kept in memory only: {e}")

    def snapshot(self) -> List[SessionRequest]:
        """Deep copy of the collection, safe to hand to collaborators."""
        return copy.deepcopy(self.requests)

    # ------------------------------------------------------------------
    # lookups
    # ------------------------------------------------------------------
    def get(self, request_id: str) -> Optional[SessionRequest]:
        for req in self.requests:
            if req.id == request_id:
                return req
        return None

    def _require(self, request_id: str) -> Optional[SessionRequest]:
        req = self.get(request_id)
        if req is None:
            if self.strict:
                raise RequestNotFound(request_id)
            logger.info(f"Ignoring operation on unknown request {request_id}")
        return req

    def _next_id(self) -> str:
        taken = {r.id for r in self.requests}
        new_id = next(self._ids)
        while new_id in taken:
            new_id = next(self._ids)
        return new_id

    # ------------------------------------------------------------------
    # constructors
    # ------------------------------------------------------------------
    def _build(self, filters: MatchFilters, topic: str) -> SessionRequest:
        return SessionRequest(
            id=self._next_id(),
            created_at=format_timestamp(self._clock()),
            subject_id=filters.subject_id,
            topic=topic,
            student_grade=filters.seeker_grade,
            preferred_times=tuple(filters.time_ids),
            format=filters.format,
            duration_min=filters.duration_min,
        )

    def _add(self, req: SessionRequest) -> SessionRequest:
        self.requests.insert(0, req)
        self._persist()
        return req

    def create_request(self, filters: MatchFilters, topic: str = "") -> SessionRequest:
        req = self._build(filters, topic)
        logger.info(f"Created request {req.id} for subject {req.subject_id}")
        return self._add(req)

    def quick_match(
        self,
        filters: MatchFilters,
        mentor_id: str,
        topic: str = QUICK_MATCH_TOPIC,
    ) -> SessionRequest:
        """Create a request that starts out Confirmed with `mentor_id`."""
        req = self._build(filters, topic)
        req.status = RequestStatus.CONFIRMED
        req.matched_mentor_id = mentor_id
        logger.info(f"Quick-matched request {req.id} with mentor {mentor_id}")
        return self._add(req)

    # ------------------------------------------------------------------
    # transitions
    # ------------------------------------------------------------------
    def _transition(self, request_id: str, action: str) -> Optional[SessionRequest]:
        """Return the request if `action` is allowed on it, else None."""
        req = self._require(request_id)
        if req is None:
            return None
        if not can_transition(req.status, action):
            if self.strict:
                raise InvalidTransition(request_id, action, req.status.value)
            logger.info(f"Ignoring {action} on request {request_id}: status is {req.status.value}")
            return None
        return req

    def match(self, request_id: str, mentor_id: str) -> List[SessionRequest]:
        req = self._transition(request_id, "match")
        if req is not None:
            req.status = TRANSITIONS["match"][1]
            req.matched_mentor_id = mentor_id
            logger.info(f"Request {request_id} confirmed with mentor {mentor_id}")
            self._persist()
        return self.requests

    def complete(self, request_id: str) -> List[SessionRequest]:
        req = self._transition(request_id, "complete")
        if req is not None:
            req.status = TRANSITIONS["complete"][1]
            logger.info(f"Request {request_id} completed")
            self._persist()
        return self.requests

    def auto_match(
        self,
        request_id: str,
        ranked: Sequence[Tuple[Person, int]],
    ) -> List[SessionRequest]:
        """Match with the top-ranked candidate; nothing to do for an empty ranking."""
        if not ranked:
            logger.info(f"No candidates to auto-match request {request_id}")
            return self.requests
        best, _ = ranked[0]
        return self.match(request_id, best.id)

    def set_topic(self, request_id: str, topic: str) -> List[SessionRequest]:
        """Allowed in every status."""
        req = self._require(request_id)
        if req is not None and req.topic != topic:
            req.topic = topic
            self._persist()
        return self.requests
