import pytest
import os
import sys

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

# Must be set before roster.config is imported anywhere
os.environ.setdefault("STORAGE_BACKEND", "memory")
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/99")

@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch):
    """Fast, deterministic course fetches for every test"""
    from roster.config import settings
    monkeypatch.setattr(settings, "COURSE_FETCH_DELAY", 0.0)
    monkeypatch.setattr(settings, "COURSE_FETCH_FAILURE_RATE", 0.0)
