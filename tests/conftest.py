"""
Pytest configuration for acmesh tests
"""

import sys
from pathlib import Path

import pytest

# Ensure the parent directory is in the Python path for imports
parent_dir = Path(__file__).resolve().parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import acmesh.env as env_config  # noqa: E402

# Ensure tests read the process environment rather than any .env file on disk
env_config.reload_env({"ACMESH_FORCE_ENV_OVERRIDE": "false"})

from acmesh.config import ClientConfig  # noqa: E402


class FakeRunner:
    """Stands in for ProcessRunner: returns canned stdout lines or raises."""

    def __init__(self, stdout_lines=None, error=None):
        self.stdout_lines = list(stdout_lines or [])
        self.error = error
        self.calls = []

    async def run(self, args):
        self.calls.append(list(args))
        if self.error is not None:
            raise self.error
        return list(self.stdout_lines)


@pytest.fixture
def client_config():
    return ClientConfig(executable=["acme.sh"], timeout_seconds=30)


@pytest.fixture
def fake_runner_factory():
    return FakeRunner


@pytest.fixture(autouse=True)
def _clear_acmesh_env(monkeypatch):
    for var in ("ACMESH_PATH", "ACMESH_WORKING_DIR", "ACMESH_TIMEOUT_SECONDS"):
        monkeypatch.delenv(var, raising=False)
