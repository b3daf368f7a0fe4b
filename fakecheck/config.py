# fakecheck/config.py

import os

HISTORY_LIMIT = int(os.getenv("FAKECHECK_HISTORY_LIMIT", "5"))
SIMULATION_SALT = os.getenv("FAKECHECK_SIMULATION_SALT", "fakecheck")
LOG_LEVEL = os.getenv("FAKECHECK_LOG_LEVEL", "INFO").upper()
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
