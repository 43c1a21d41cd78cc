# run_interactive.py

from __future__ import annotations

import logging
import sys

from skillport.config import LOG_LEVEL, STATE_FILE_PATH
from skillport.models import MatchFilters
from skillport.data_generation.catalog import PEOPLE
from skillport.booking.lifecycle import RequestStore
from skillport.booking.persistence import JsonFileStorage
from skillport.booking.interactive import interactive_manage_requests


def main():
    logging.basicConfig(level=LOG_LEVEL, format="%(levelname)s %(name)s: %(message)s")

    # State file can be overridden: python run_interactive.py my_state.json
    path = sys.argv[1] if len(sys.argv) > 1 else STATE_FILE_PATH
    storage = JsonFileStorage(path)

    # 1) Load saved requests (seed collection if missing or unreadable)
    store = RequestStore(load=storage.load, save=storage.save)
    print(f"Using state file: {path} ({len(store.requests)} requests)")

    # 2) Menu loop; every change is saved right away
    interactive_manage_requests(store, PEOPLE, MatchFilters())


if __name__ == "__main__":
    main()
