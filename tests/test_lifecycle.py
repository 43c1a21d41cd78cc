import unittest
import sys
import os
from dataclasses import asdict
from datetime import datetime, timezone

# Add parent directory to path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from skillport.config import QUICK_MATCH_TOPIC
from skillport.errors import InvalidTransition, RequestNotFound
from skillport.models import MatchFilters, RequestStatus
from skillport.data_generation.catalog import PEOPLE
from skillport.matching.scorer import rank
from skillport.booking.lifecycle import (
    RequestStore,
    can_transition,
    counter_ids,
    format_timestamp,
)

FIXED_NOW = datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_store(**kwargs):
    """Empty store with deterministic ids and clock."""
    kwargs.setdefault("id_generator", counter_ids())
    kwargs.setdefault("clock", lambda: FIXED_NOW)
    kwargs.setdefault("seed", list)
    return RequestStore(**kwargs)


class TestCreate(unittest.TestCase):

    def test_create_copies_filters(self):
        store = make_store()
        f = MatchFilters(
            subject_id="phys",
            seeker_grade=9,
            time_ids=("fri-18", "sat-12"),
            format="chat",
            duration_min=30,
        )
        req = store.create_request(f, topic="Ohm's law")

        self.assertEqual(req.id, "r1")
        self.assertEqual(req.created_at, "2026-03-01T12:00:00.000Z")
        self.assertEqual(req.subject_id, "phys")
        self.assertEqual(req.student_grade, 9)
        self.assertEqual(req.preferred_times, ("fri-18", "sat-12"))
        self.assertEqual(req.format, "chat")
        self.assertEqual(req.duration_min, 30)
        self.assertEqual(req.topic, "Ohm's law")
        self.assertIs(req.status, RequestStatus.OPEN)
        self.assertIsNone(req.matched_mentor_id)

    def test_create_defaults_to_empty_topic(self):
        self.assertEqual(make_store().create_request(MatchFilters()).topic, "")

    def test_newest_first(self):
        store = make_store()
        first = store.create_request(MatchFilters())
        second = store.create_request(MatchFilters())
        self.assertEqual([r.id for r in store.requests], [second.id, first.id])

    def test_generated_ids_skip_existing(self):
        # Seed collection already holds r1 and r2
        store = RequestStore(id_generator=counter_ids(), clock=lambda: FIXED_NOW)
        req = store.create_request(MatchFilters())
        self.assertEqual(req.id, "r3")
        self.assertEqual(len({r.id for r in store.requests}), 3)

    def test_default_ids_are_unique(self):
        store = RequestStore(seed=list)
        ids = {store.create_request(MatchFilters()).id for _ in range(50)}
        self.assertEqual(len(ids), 50)

    def test_quick_match_starts_confirmed(self):
        store = make_store()
        req = store.quick_match(MatchFilters(), "p1")
        self.assertIs(req.status, RequestStatus.CONFIRMED)
        self.assertEqual(req.matched_mentor_id, "p1")
        self.assertEqual(req.topic, QUICK_MATCH_TOPIC)

    def test_format_timestamp_converts_to_utc(self):
        from datetime import timedelta
        moment = datetime(2026, 3, 1, 21, 0, 0, 123456, tzinfo=timezone(timedelta(hours=10)))
        self.assertEqual(format_timestamp(moment), "2026-03-01T11:00:00.123Z")


class TestTransitions(unittest.TestCase):

    def setUp(self):
        self.store = make_store()
        self.req = self.store.create_request(MatchFilters())

    def test_transition_table(self):
        self.assertTrue(can_transition(RequestStatus.OPEN, "match"))
        self.assertFalse(can_transition(RequestStatus.CONFIRMED, "match"))
        self.assertTrue(can_transition(RequestStatus.CONFIRMED, "complete"))
        self.assertFalse(can_transition(RequestStatus.OPEN, "complete"))
        self.assertFalse(can_transition(RequestStatus.COMPLETED, "complete"))

    def test_match_confirms(self):
        result = self.store.match(self.req.id, "m1")
        self.assertIs(result, self.store.requests)
        self.assertIs(self.req.status, RequestStatus.CONFIRMED)
        self.assertEqual(self.req.matched_mentor_id, "m1")

    def test_match_accepts_unknown_mentor_id(self):
        self.store.match(self.req.id, "nobody")
        self.assertEqual(self.req.matched_mentor_id, "nobody")

    def test_match_on_confirmed_is_noop(self):
        self.store.match(self.req.id, "m1")
        before = asdict(self.req)
        self.store.match(self.req.id, "m2")
        self.assertEqual(asdict(self.req), before)

    def test_match_on_completed_is_noop(self):
        self.store.match(self.req.id, "m1")
        self.store.complete(self.req.id)
        before = asdict(self.req)
        self.store.match(self.req.id, "m2")
        self.assertEqual(asdict(self.req), before)

    def test_complete_on_open_is_noop(self):
        before = asdict(self.req)
        self.store.complete(self.req.id)
        self.assertEqual(asdict(self.req), before)

    def test_complete_keeps_mentor(self):
        self.store.match(self.req.id, "m1")
        self.store.complete(self.req.id)
        self.assertIs(self.req.status, RequestStatus.COMPLETED)
        self.assertEqual(self.req.matched_mentor_id, "m1")

    def test_complete_is_idempotent(self):
        self.store.match(self.req.id, "m1")
        self.store.complete(self.req.id)
        before = asdict(self.req)
        self.store.complete(self.req.id)
        self.assertEqual(asdict(self.req), before)

    def test_unknown_request_is_noop(self):
        before = [asdict(r) for r in self.store.requests]
        self.store.match("missing", "m1")
        self.store.complete("missing")
        self.store.set_topic("missing", "x")
        self.assertEqual([asdict(r) for r in self.store.requests], before)

    def test_other_requests_untouched(self):
        other = self.store.create_request(MatchFilters(subject_id="eng"))
        self.store.match(self.req.id, "m1")
        self.assertIs(other.status, RequestStatus.OPEN)
        self.assertIsNone(other.matched_mentor_id)

    def test_set_topic_in_any_status(self):
        self.store.set_topic(self.req.id, "Fractions")
        self.assertEqual(self.req.topic, "Fractions")
        self.store.match(self.req.id, "m1")
        self.store.complete(self.req.id)
        self.store.set_topic(self.req.id, "Fractions, part 2")
        self.assertEqual(self.req.topic, "Fractions, part 2")
        self.assertIs(self.req.status, RequestStatus.COMPLETED)

    def test_auto_match_picks_top_candidate(self):
        ranked = rank(MatchFilters(only_verified=False), PEOPLE)
        self.store.auto_match(self.req.id, ranked)
        self.assertEqual(self.req.matched_mentor_id, ranked[0][0].id)
        self.assertIs(self.req.status, RequestStatus.CONFIRMED)

    def test_auto_match_with_empty_ranking_is_noop(self):
        self.store.auto_match(self.req.id, [])
        self.assertIs(self.req.status, RequestStatus.OPEN)
        self.assertIsNone(self.req.matched_mentor_id)

    def test_mentor_present_iff_confirmed_or_completed(self):
        quick = self.store.quick_match(MatchFilters(), "p1")
        self.store.match(self.req.id, "p3")
        third = self.store.create_request(MatchFilters())
        self.store.complete(quick.id)
        for r in self.store.requests:
            self.assertEqual(
                r.matched_mentor_id is not None,
                r.status in (RequestStatus.CONFIRMED, RequestStatus.COMPLETED),
            )
        self.assertIsNone(third.matched_mentor_id)


class TestStrictStore(unittest.TestCase):

    def setUp(self):
        self.store = make_store(strict=True)
        self.req = self.store.create_request(MatchFilters())

    def test_invalid_transition_raises(self):
        with self.assertRaises(InvalidTransition) as ctx:
            self.store.complete(self.req.id)
        self.assertEqual(ctx.exception.action, "complete")
        self.assertEqual(ctx.exception.status, "Open")
        self.assertIs(self.req.status, RequestStatus.OPEN)

    def test_unknown_request_raises(self):
        with self.assertRaises(RequestNotFound):
            self.store.match("missing", "m1")

    def test_valid_transitions_still_work(self):
        self.store.match(self.req.id, "m1")
        self.store.complete(self.req.id)
        self.assertIs(self.req.status, RequestStatus.COMPLETED)


if __name__ == '__main__':
    unittest.main()
