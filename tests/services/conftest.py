"""Service test fixtures — fake extractor runner + FastAPI test client.

Invariants:
    - No test spawns a real yt-dlp process; FakeRunner records every call
    - get_video_service dependency overridden to use FakeRunner
    - Client does not re-raise app exceptions, so catch-all 500s are observable
"""

from dataclasses import replace

import pytest
from httpx import ASGITransport, AsyncClient

from ytgateway.api.routes.video_actions import get_video_service
from ytgateway.core.extractor_output import ExtractorResult
from ytgateway.main import app
from ytgateway.services.video_actions import VideoActionService


class FakeRunner:
    """Stands in for ExtractorRunner.

    Set `result` to control the returned ExtractorResult, or `error`
    to raise instead.
    """

    def __init__(self):
        self.calls: list[dict] = []
        self.result = ExtractorResult(args=[], exit_code=0, stdout="{}", stderr="")
        self.error: Exception | None = None

    def respond(self, stdout: str = "", stderr: str = "", exit_code: int = 0):
        self.result = ExtractorResult(
            args=[], exit_code=exit_code, stdout=stdout, stderr=stderr,
        )

    async def run(self, args, context=None):
        self.calls.append({
            "args": list(args),
            "action": context.action if context else None,
        })
        if self.error is not None:
            raise self.error
        return replace(self.result, args=list(args))


@pytest.fixture
def fake_runner():
    return FakeRunner()


@pytest.fixture
def service(fake_runner):
    return VideoActionService(fake_runner)


@pytest.fixture
async def client(service):
    """FastAPI test client with the video service overridden."""
    app.dependency_overrides[get_video_service] = lambda: service

    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
