# skillport/config.py

# Match score weights
ROLE_MATCH_POINTS = 3
SUBJECT_MATCH_POINTS = 4
GRADE_FIT_POINTS = 2
GRADE_MISFIT_PENALTY = 2
MAX_OVERLAP_POINTS = 3
VERIFIED_BONUS_POINTS = 1
QUERY_MATCH_POINTS = 2

# Grade bounds (school years 7-11)
MIN_GRADE = 7
MAX_GRADE = 11

# Roles / session options
ROLES = ("mentor", "student")
FORMATS = ("video", "chat")
DURATIONS_MIN = (20, 30)

# Initial search form
DEFAULT_FILTERS = {
    "role_needed": "mentor",
    "seeker_grade": 8,
    "subject_id": "math",
    "format": "video",
    "duration_min": 20,
    "time_ids": ("wed-17",),
    "only_verified": True,
    "query": "",
}

# Topic attached to requests created through quick match
QUICK_MATCH_TOPIC = "Quick session: need help with a topic"

# Request id prefix (r1, r2, ...)
REQUEST_ID_PREFIX = "r"

# Persisted request collection
STATE_FILE_PATH = "skillport_mvp_state_v1.json"
SNAPSHOT_VERSION = 1

# Synthetic pool knobs
NUM_PEOPLE_DEFAULT = 20
MENTOR_SHARE_DEFAULT = 0.5
VERIFIED_SHARE_DEFAULT = 0.6
SUBJECTS_PER_PERSON = 2
SLOTS_PER_PERSON = (2, 3)

# Random seed for reproducible toy pools
DEFAULT_SEED = 42

# Logging level used by the run_* scripts
LOG_LEVEL = "INFO"
