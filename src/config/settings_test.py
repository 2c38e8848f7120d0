"""Settings used by the test suite.

Provides the values that ``config.settings`` refuses to default and
points the database at an in-memory SQLite instance.
"""

import os

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")

from config.settings import *  # noqa: E402,F401,F403

DEBUG = False
