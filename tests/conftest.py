"""Root conftest: shared test configuration."""

import os

# Keep test output quiet and independent of a developer .env
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "text")
