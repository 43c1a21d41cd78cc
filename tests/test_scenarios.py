import unittest
import sys
import os

# Add parent directory to path to import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from skillport.models import MatchFilters, RequestStatus
from skillport.data_generation.catalog import PEOPLE
from skillport.data_generation.lookups import subject_by_id
from skillport.matching.scorer import rank, round_half_up
from skillport.booking.lifecycle import RequestStore, counter_ids


class TestMatchingScenarios(unittest.TestCase):

    def run_pipeline(self, filters, mentor_id=None):
        """
        Helper to run rank -> create -> match -> complete on the sample pool.
        Returns: (ranked, store, request, statuses seen)
        """
        ranked = rank(filters, PEOPLE)

        store = RequestStore(id_generator=counter_ids(start=100))
        req = store.create_request(filters)
        seen = [req.status]

        if mentor_id is None:
            store.auto_match(req.id, ranked)
        else:
            store.match(req.id, mentor_id)
        seen.append(req.status)

        store.complete(req.id)
        seen.append(req.status)
        return ranked, store, req, seen

    def test_verified_math_mentor_for_grade_8(self):
        """Grade 8 seeker, math, Wed 17:00, verified only -> verified math mentor on top."""
        filters = MatchFilters(
            role_needed="mentor",
            seeker_grade=8,
            subject_id="math",
            time_ids=("wed-17",),
            only_verified=True,
            query="",
        )
        ranked, _, _, _ = self.run_pipeline(filters)
        self.assertTrue(ranked)

        top, top_score = ranked[0]
        self.assertIn("math", top.subjects)
        self.assertGreaterEqual(top.grade, 9)
        self.assertTrue(top.verified)
        self.assertIn("wed-17", top.available)
        # role + subject + grade + overlap + verified + rating
        self.assertEqual(top_score, 3 + 4 + 2 + 1 + 1 + round_half_up(top.rating))

    def test_create_match_complete_in_order(self):
        """Open -> Confirmed -> Completed, then a repeated match changes nothing."""
        _, store, req, seen = self.run_pipeline(MatchFilters(), mentor_id="m1")
        self.assertEqual(
            seen,
            [RequestStatus.OPEN, RequestStatus.CONFIRMED, RequestStatus.COMPLETED],
        )

        store.match(req.id, "m2")
        self.assertIs(req.status, RequestStatus.COMPLETED)
        self.assertEqual(req.matched_mentor_id, "m1")

    def test_subject_nobody_teaches(self):
        """No candidate covers the subject -> empty ranking, request stays Open."""
        filters = MatchFilters(subject_id="history", only_verified=False)
        self.assertIsNone(subject_by_id("history"))

        ranked, _, req, seen = self.run_pipeline(filters)
        self.assertEqual(ranked, [])
        self.assertEqual(seen, [RequestStatus.OPEN] * 3)
        self.assertIsNone(req.matched_mentor_id)

    def test_student_search_from_grade_10(self):
        """Mentor looking for students: younger students ranked by overlap."""
        filters = MatchFilters(
            role_needed="student",
            seeker_grade=10,
            time_ids=("mon-17", "wed-17", "sun-16", "tue-18"),
            only_verified=False,
        )
        ranked = rank(filters, PEOPLE)
        self.assertEqual([(p.id, s) for p, s in ranked], [("p4", 12), ("p5", 10)])


if __name__ == '__main__':
    unittest.main()
