# ┌───────────────────────────────────────────────────────────────┐
# │  Copyright (c) 2025 Ateet Vatan Bahmani                       │
# │  Project: gnews-resolver – Google News URL Resolver           │
# │  All rights reserved.                                         │
# └───────────────────────────────────────────────────────────────┘
#
# gnews-resolver is a proprietary software system developed and owned by Ateet Vatan Bahmani.
# The source code, documentation, workflows and designs are protected by applicable
# copyright and trademark laws.
#
# Redistribution, modification, commercial use, or publication of any portion of this
# project without explicit written consent is strictly prohibited.
#
# This project is not open-source and is intended solely for internal, research,
# or demonstration use by the author.
#
# Contact: ab@masxai.com

"""
This module contains the UrlResolver class, which opens an aggregator URL in a
fresh browser session, retries failed navigations and hands successful ones to
the fallback orchestrator.
"""

import asyncio
from typing import Callable, Optional, Tuple

from gnews_resolver.browser.session import BrowserSession, PlaywrightSession
from gnews_resolver.config import get_service_logger, get_settings
from gnews_resolver.core.exceptions import EvaluationFailure
from gnews_resolver.models import NavigationOutcome, ResolutionRequest, ResolutionResult

from .orchestrator import FallbackOrchestrator

SessionFactory = Callable[[], BrowserSession]


class UrlResolver:
    """
    Navigation retry controller.

    Every attempt gets its own browser session, which is closed before the
    attempt ends. Retries always restart from the original URL. A failed
    resolution is reported as data (``resolved=False``), never raised.
    """

    def __init__(
        self,
        session_factory: Optional[SessionFactory] = None,
        orchestrator: Optional[FallbackOrchestrator] = None,
        settings=None,
    ):
        self.settings = settings or get_settings()
        self.session_factory = session_factory or PlaywrightSession
        self.orchestrator = orchestrator or FallbackOrchestrator(settings=self.settings)
        self.logger = get_service_logger("UrlResolver")

    async def resolve(
        self, url: str, max_attempts: Optional[int] = None
    ) -> ResolutionResult:
        """
        Resolve an aggregator URL to the publisher URL.

        Raises pydantic's ValidationError for a malformed ``url`` or a
        non-positive ``max_attempts``; every runtime failure is absorbed.
        """
        request = ResolutionRequest(
            url=url,
            max_attempts=(
                max_attempts if max_attempts is not None else self.settings.max_attempts
            ),
        )

        for attempt in range(1, request.max_attempts + 1):
            outcome, final_url = await self._run_attempt(request.url, attempt)

            if outcome.success:
                return ResolutionResult(
                    original_url=request.url,
                    final_url=final_url,
                    resolved=True,
                    attempts=attempt,
                )

            if attempt < request.max_attempts:
                await asyncio.sleep(self.settings.retry_backoff)

        self.logger.warning(
            "All attempts failed, returning original URL",
            url=request.url,
            attempts=request.max_attempts,
        )
        return ResolutionResult.unresolved(request.url, request.max_attempts)

    async def _run_attempt(
        self, url: str, attempt: int
    ) -> Tuple[NavigationOutcome, str]:
        self.logger.info("Navigation attempt", attempt=attempt, url=url)
        session = self.session_factory()
        try:
            if self.settings.attempt_timeout:
                outcome, final_url = await asyncio.wait_for(
                    self._attempt(session, url, attempt),
                    timeout=self.settings.attempt_timeout,
                )
            else:
                outcome, final_url = await self._attempt(session, url, attempt)
        except asyncio.TimeoutError:
            outcome = NavigationOutcome(
                attempt=attempt,
                success=False,
                error=f"attempt exceeded {self.settings.attempt_timeout}s",
            )
            final_url = url
        finally:
            await self._release(session, url, attempt)

        if outcome.success:
            self.logger.info(
                "Navigation attempt succeeded",
                attempt=attempt,
                url=url,
                landed=outcome.current_location,
                final_url=final_url,
            )
        else:
            self.logger.warning(
                "Navigation attempt failed",
                attempt=attempt,
                url=url,
                error=outcome.error,
            )
        return outcome, final_url

    async def _attempt(
        self, session: BrowserSession, url: str, attempt: int
    ) -> Tuple[NavigationOutcome, str]:
        try:
            await session.start()
            await session.navigate(url)
        except Exception as e:
            return NavigationOutcome(attempt=attempt, success=False, error=str(e)), url

        await asyncio.sleep(self.settings.settle_delay)

        try:
            history = await session.navigation_history()
        except EvaluationFailure as e:
            self.logger.warning(
                "Error retrieving navigation history", url=url, error=str(e)
            )
            history = []

        outcome = NavigationOutcome(attempt=attempt, success=True, history=history)
        final_url = await self.orchestrator.orchestrate(session, url, history=history)
        return outcome, final_url

    async def _release(self, session: BrowserSession, url: str, attempt: int) -> None:
        try:
            await session.close()
        except Exception as e:
            self.logger.error(
                "Session release failed",
                attempt=attempt,
                url=url,
                error=str(e),
                context=getattr(e, "context", None),
            )
