"""
Shared test fixtures for the estimator tests.

Cleans all estimator environment variables before each test, provides
TestClient fixtures with and without an API key, and a mock Gemini client
that can be injected in place of the real one.

CHANGELOG:
- 2026-10-14: Add mock_gemini and client_without_key fixtures (STORY-009)
- 2026-10-12: Initial creation (STORY-001)
"""

import sys
from collections.abc import Generator
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

# Ensure the repository root is on sys.path so ``import sunsathi`` resolves
# when pytest is invoked without an installed package.
_REPO_ROOT = str(Path(__file__).resolve().parent.parent)
if _REPO_ROOT not in sys.path:
    sys.path.insert(0, _REPO_ROOT)

# All SunSathiSettings environment variable names, used for cleanup.
_ALL_ENV_VARS = (
    "API_KEY",
    "MODEL_ID",
    "GEMINI_BASE_URL",
    "MAX_VIDEO_BYTES",
    "REQUEST_TIMEOUT_S",
)

TEST_API_KEY = "test-gemini-key"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Remove estimator env vars and isolate from .env files before each test.

    Changes working directory to tmp_path so no .env file is accidentally
    loaded by Pydantic BaseSettings.
    """
    for var in _ALL_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    """Set API_KEY to a test value and return it."""
    monkeypatch.setenv("API_KEY", TEST_API_KEY)
    return TEST_API_KEY


@pytest.fixture()
def mock_gemini() -> MagicMock:
    """Create a mock GeminiClient with async analysis methods.

    Returns:
        MagicMock: Stand-in whose three flow methods are AsyncMocks.
    """
    gemini = MagicMock()
    gemini.analyze_solar_potential = AsyncMock()
    gemini.detect_appliances = AsyncMock(return_value=[])
    gemini.analyze_video_efficiency = AsyncMock()
    return gemini


@pytest.fixture()
def client(api_key: str) -> Generator[TestClient, None, None]:
    """Create a FastAPI TestClient with an API key configured.

    Uses a context manager so the lifespan (settings load) runs.
    Dependency overrides are cleared on teardown.

    Yields:
        TestClient: Configured test client for the FastAPI app.
    """
    from sunsathi.api.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def client_without_key() -> Generator[TestClient, None, None]:
    """Create a FastAPI TestClient with no API key in the environment."""
    from sunsathi.api.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture()
def gemini_client(client: TestClient, mock_gemini: MagicMock) -> TestClient:
    """TestClient whose AI routes use ``mock_gemini``."""
    from sunsathi.api.deps import get_gemini_client
    from sunsathi.api.main import app

    app.dependency_overrides[get_gemini_client] = lambda: mock_gemini
    return client
