"""
Unit tests for the navigation retry controller.
"""

import asyncio
from typing import List

import pytest
from pydantic import ValidationError
from structlog.testing import capture_logs

from gnews_resolver.core.exceptions import NavigationFailure, SessionReleaseFailure
from gnews_resolver.resolver import FallbackOrchestrator, UrlResolver

from .conftest import GNEWS_URL, FakeSession, aggregator_page


class SessionPool:
    """Session factory handing out pre-built fake sessions in order."""

    def __init__(self, sessions: List[FakeSession]):
        self.sessions = list(sessions)
        self.handed_out: List[FakeSession] = []

    def __call__(self) -> FakeSession:
        session = self.sessions.pop(0)
        self.handed_out.append(session)
        return session


class StartFailingSession(FakeSession):
    async def start(self) -> None:
        raise NavigationFailure("Browser launch failed")


class HangingSession(FakeSession):
    async def navigate(self, url: str) -> None:
        self.navigations.append(url)
        await asyncio.sleep(10)


class TestUrlResolver:
    def make_resolver(self, pool, test_settings):
        return UrlResolver(session_factory=pool, settings=test_settings)

    @pytest.mark.asyncio
    async def test_direct_redirect_resolves_first_attempt(self, test_settings):
        pool = SessionPool([FakeSession(redirects={GNEWS_URL: "https://publisher.example/story"})])
        result = await self.make_resolver(pool, test_settings).resolve(GNEWS_URL)

        assert result.final_url == "https://publisher.example/story"
        assert result.original_url == GNEWS_URL
        assert result.resolved is True
        assert result.attempts == 1
        assert pool.handed_out[0].evaluated == []
        assert pool.handed_out[0].closed

    @pytest.mark.asyncio
    async def test_anchor_scenario(self, test_settings):
        session = FakeSession(page=aggregator_page(anchors=["https://reuters.com/world/ebola-outbreak"]))
        result = await self.make_resolver(SessionPool([session]), test_settings).resolve(GNEWS_URL)

        assert result.final_url == "https://reuters.com/world/ebola-outbreak"
        assert result.resolved is True

    @pytest.mark.asyncio
    async def test_all_attempts_fail_returns_original(self, test_settings):
        sessions = [FakeSession(failing={GNEWS_URL}) for _ in range(3)]
        pool = SessionPool(sessions)

        result = await self.make_resolver(pool, test_settings).resolve(GNEWS_URL)

        assert result.final_url == GNEWS_URL
        assert result.resolved is False
        assert result.attempts == 3
        assert len(pool.handed_out) == 3
        assert all(s.closed for s in sessions)

    @pytest.mark.asyncio
    async def test_retry_uses_fresh_session_and_original_url(self, test_settings):
        first = FakeSession(failing={GNEWS_URL})
        second = FakeSession(redirects={GNEWS_URL: "https://publisher.example/a"})
        pool = SessionPool([first, second, FakeSession()])

        result = await self.make_resolver(pool, test_settings).resolve(GNEWS_URL)

        assert result.final_url == "https://publisher.example/a"
        assert result.attempts == 2
        assert first.navigations == [GNEWS_URL]
        assert second.navigations == [GNEWS_URL]
        assert first is not second
        assert first.closed and second.closed
        assert len(pool.sessions) == 1

    @pytest.mark.asyncio
    async def test_success_without_improvement_stops_retrying(self, test_settings):
        pool = SessionPool([FakeSession(page=aggregator_page()), FakeSession()])
        result = await self.make_resolver(pool, test_settings).resolve(GNEWS_URL)

        assert result.final_url == GNEWS_URL
        assert result.resolved is True
        assert result.attempts == 1
        assert len(pool.handed_out) == 1

    @pytest.mark.asyncio
    async def test_max_attempts_override(self, test_settings):
        pool = SessionPool([FakeSession(failing={GNEWS_URL}) for _ in range(5)])
        result = await self.make_resolver(pool, test_settings).resolve(GNEWS_URL, max_attempts=1)

        assert result.attempts == 1
        assert len(pool.handed_out) == 1

    @pytest.mark.asyncio
    async def test_browser_launch_failure_counts_as_attempt(self, test_settings):
        pool = SessionPool(
            [StartFailingSession(), FakeSession(redirects={GNEWS_URL: "https://publisher.example/b"})]
        )
        result = await self.make_resolver(pool, test_settings).resolve(GNEWS_URL)

        assert result.final_url == "https://publisher.example/b"
        assert result.attempts == 2
        assert pool.handed_out[0].closed

    @pytest.mark.asyncio
    async def test_release_failure_does_not_mask_result(self, test_settings):
        session = FakeSession(
            redirects={GNEWS_URL: "https://publisher.example/c"},
            close_error=SessionReleaseFailure("browser: already closed"),
        )
        result = await self.make_resolver(SessionPool([session]), test_settings).resolve(GNEWS_URL)

        assert result.final_url == "https://publisher.example/c"
        assert result.resolved is True

    @pytest.mark.asyncio
    async def test_attempt_timeout_counts_as_failure(self, test_settings):
        settings = test_settings.model_copy(update={"attempt_timeout": 0.05, "max_attempts": 2})
        sessions = [HangingSession(), HangingSession()]
        resolver = UrlResolver(session_factory=SessionPool(sessions), settings=settings)

        result = await resolver.resolve(GNEWS_URL)

        assert result.resolved is False
        assert result.final_url == GNEWS_URL
        assert all(s.closed for s in sessions)

    @pytest.mark.asyncio
    async def test_uses_given_orchestrator(self, matcher, test_settings):
        orchestrator = FallbackOrchestrator(strategies=[], matcher=matcher, settings=test_settings)
        resolver = UrlResolver(
            session_factory=SessionPool([FakeSession()]),
            orchestrator=orchestrator,
            settings=test_settings,
        )
        result = await resolver.resolve(GNEWS_URL)
        assert result.final_url == GNEWS_URL
        assert result.resolved is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_url", ["", "news.google.com/rss/articles/ABC", "/relative"])
    async def test_malformed_url_rejected(self, bad_url, test_settings):
        resolver = self.make_resolver(SessionPool([]), test_settings)
        with pytest.raises(ValidationError):
            await resolver.resolve(bad_url)
    @pytest.mark.asyncio
    @pytest.mark.parametrize("attempts", [0, -1])
    async def test_non_positive_max_attempts_rejected(self, attempts, test_settings):
        pool = SessionPool([FakeSession(failing={GNEWS_URL}) for _ in range(3)])
        resolver = self.make_resolver(pool, test_settings)
        with pytest.raises(ValidationError):
            await resolver.resolve(GNEWS_URL, max_attempts=attempts)
        assert pool.handed_out == []

    @pytest.mark.asyncio
    async def test_every_attempt_is_logged(self, test_settings):
        pool = SessionPool([FakeSession(failing={GNEWS_URL}) for _ in range(3)])
        resolver = self.make_resolver(pool, test_settings)

        with capture_logs() as logs:
            await resolver.resolve(GNEWS_URL)

        started = [e for e in logs if e["event"] == "Navigation attempt"]
        failed = [e for e in logs if e["event"] == "Navigation attempt failed"]
        assert [e["attempt"] for e in started] == [1, 2, 3]
        assert [e["attempt"] for e in failed] == [1, 2, 3]
        assert all(e["url"] == GNEWS_URL and e["error"] for e in failed)

    @pytest.mark.asyncio
    async def test_successful_attempt_is_logged(self, test_settings):
        pool = SessionPool([FakeSession(redirects={GNEWS_URL: "https://publisher.example/d"})])
        with capture_logs() as logs:
            await self.make_resolver(pool, test_settings).resolve(GNEWS_URL)

        succeeded = [e for e in logs if e["event"] == "Navigation attempt succeeded"]
        assert len(succeeded) == 1
        assert succeeded[0]["attempt"] == 1
        assert succeeded[0]["final_url"] == "https://publisher.example/d"
