"""Pytest fixtures for the echo, dual-mode and diagnostic server tests."""

import sys
from pathlib import Path

import pytest
import yaml

# Ensure project root is in path for package imports
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


class FakeRunner:
    """Records shell commands instead of running them."""

    def __init__(self, output: str = "fake output\n"):
        self.output = output
        self.run_calls: list = []
        self.spawn_calls: list = []

    def run(self, command: str) -> str:
        self.run_calls.append(command)
        return self.output

    def spawn(self, command: str) -> int:
        self.spawn_calls.append(command)
        return 0


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def project_root() -> Path:
    return _project_root()


@pytest.fixture
def config_path(project_root: Path) -> Path:
    return project_root / "config" / "config.yaml.example"


@pytest.fixture
def config(config_path: Path) -> dict:
    """Load config dict from YAML."""
    with open(config_path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sent_signals() -> list:
    return []


@pytest.fixture
def context(runner, clock, sent_signals):
    from probe_fixtures.core.context import ServerContext

    return ServerContext(
        environ={"HOME": "/home/vcap", "LANG": "en_US.UTF-8", "PORT": "8080"},
        runner=runner,
        instance_id="instance-abc",
        send_signal=sent_signals.append,
        clock=clock,
    )


@pytest.fixture
def client(context):
    """TestClient over the diagnostic app; unhandled errors come back as 500 instead of raising."""
    from fastapi.testclient import TestClient

    from servers.diagnostic import create_app

    return TestClient(create_app(context), raise_server_exceptions=False)
