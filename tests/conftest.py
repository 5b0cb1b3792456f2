import os
import sys
import tempfile

# Ensure Python path includes project root for `import app`
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

# Test environment must be in place before app.config is imported.
_TMP_DIR = tempfile.mkdtemp(prefix="event_planner_tests_")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'events.db')}")
os.environ.setdefault("LLM_PROVIDER", "stub")
os.environ.setdefault("LOCAL_CACHE_BACKEND", "file")
os.environ.setdefault("LOCAL_CACHE_PATH", os.path.join(_TMP_DIR, "events.json"))

import pytest


@pytest.fixture(autouse=True)
def reset_llm_provider():
    """Drop the cached provider so every test starts from settings."""
    import app.core.llm.providers as providers
    providers._provider_instance = None
    yield
    providers._provider_instance = None
