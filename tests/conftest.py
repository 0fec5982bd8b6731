"""Root conftest — shared test configuration."""

import os

# Keep tests independent of any local .env
os.environ.setdefault("WORKNEARBY_LOG_FORMAT", "text")
os.environ.setdefault("WORKNEARBY_ADMIN_REQUIRES_AUTH", "false")
