"""
Pytest configuration and shared fixtures.
"""

import os
import sys

import httpx
import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

BASE_URL = "https://ci.example"


# ============================================================================
# Environment Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def mock_env(monkeypatch):
    """Set up test environment variables."""
    monkeypatch.setenv("JENKINS_URL", f"{BASE_URL}/")
    monkeypatch.setenv("JENKINS_USER", "jenkins-user")
    monkeypatch.setenv("JENKINS_TOKEN", "jenkins-token")
    for name in ("CONNECT_TIMEOUT", "POLL_INTERVAL", "POLL_MAX_ATTEMPTS", "POLL_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    from jenkins_trigger.core.config import get_settings
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ============================================================================
# Fake Jenkins
# ============================================================================

class FakeJenkins:
    """Scripted responses keyed by (method, url), served through httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list] = {}

    def add(self, method: str, url: str, *responses) -> None:
        """Queue responses (httpx.Response or exception) for a route, served in order."""
        self._routes.setdefault((method, url), []).extend(responses)

    def requests_to(self, method: str, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and str(r.url) == url]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._routes.get((request.method, str(request.url)))
        if not queue:
            raise AssertionError(f"unexpected request {request.method} {request.url}")
        result = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(result, Exception):
            raise result
        return result

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


class RecordingSleep:
    """Stands in for asyncio.sleep, records every requested delay and advances a fake clock."""

    def __init__(self):
        self.calls: list[float] = []
        self.now = 0.0

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)
        self.now += seconds

    def clock(self) -> float:
        return self.now


@pytest.fixture
def fake_jenkins():
    return FakeJenkins()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def jenkins_client(fake_jenkins, recording_sleep):
    """Create a JenkinsClient talking to the fake server without real waits."""
    from jenkins_trigger.services.jenkins import ConstantDelay, JenkinsClient

    return JenkinsClient(
        BASE_URL,
        "jenkins-user",
        "jenkins-token",
        delay=ConstantDelay(3.0, sleep=recording_sleep),
        transport=fake_jenkins.transport,
    )
