# run_demo.py

import logging

from skillport.config import LOG_LEVEL, DEFAULT_SEED
from skillport.models import MatchFilters
from skillport.data_generation.catalog import PEOPLE
from skillport.data_generation.person_factory import create_people
from skillport.matching.scorer import rank
from skillport.booking.lifecycle import RequestStore, counter_ids
from skillport.booking.persistence import MemoryStorage
from skillport.reporting.dashboard import (
    leaderboard_frame,
    ranking_frame,
    requests_frame,
    summarize_requests,
)


def print_requests(store, pool):
    print(requests_frame(store.requests, pool).to_string(index=False))
    print()


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    filters = MatchFilters()
    pool = list(PEOPLE)

    # ============================
    #  RANKING (sample pool)
    # ============================
    ranked = rank(filters, pool)
    print("=== RANKED CANDIDATES (sample pool) ===")
    print(ranking_frame(ranked).to_string(index=False))
    print()

    # ============================
    #  REQUEST LIFECYCLE
    # ============================
    storage = MemoryStorage()
    store = RequestStore(
        load=storage.load,
        save=storage.save,
        id_generator=counter_ids(start=100),
    )

    req = store.create_request(filters, topic="Quadratic equations")
    print(f"[REQUESTS] Created {req.id} ({req.status.value})")
    store.auto_match(req.id, ranked)
    print(f"[REQUESTS] Auto-matched {req.id} -> {req.matched_mentor_id} ({req.status.value})")
    store.complete(req.id)
    print(f"[REQUESTS] Completed {req.id} ({req.status.value})")

    quick = store.quick_match(filters, mentor_id="p3")
    print(f"[REQUESTS] Quick match {quick.id} -> {quick.matched_mentor_id} ({quick.status.value})")
    print()

    print("=== REQUESTS ===")
    print_requests(store, pool)

    stats = summarize_requests(store.requests, pool)
    print("=== DASHBOARD ===")
    for key, value in stats.items():
        print(f"  {key:<17}: {value}")
    print()

    print("=== MENTOR PORTFOLIO ===")
    print(leaderboard_frame(pool).to_string(index=False))
    print()

    # ============================
    #  RANKING (synthetic pool)
    # ============================
    big_pool = create_people(num_people=30, seed=DEFAULT_SEED)
    big_ranked = rank(MatchFilters(only_verified=False, time_ids=("mon-19", "sat-12")), big_pool)
    print(f"=== RANKED CANDIDATES (synthetic pool of {len(big_pool)}, top 10) ===")
    print(ranking_frame(big_ranked[:10]).to_string(index=False))


if __name__ == "__main__":
    main()
