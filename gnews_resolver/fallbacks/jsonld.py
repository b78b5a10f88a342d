import json
from typing import Any, List, Optional

from gnews_resolver.browser import scripts
from gnews_resolver.browser.session import BrowserSession
from gnews_resolver.core.exceptions import ParseFailure
from gnews_resolver.utils.jsonld_scanner import find_url_fields
from gnews_resolver.utils.url_utils import is_absolute_url

from .base import FallbackStrategy


def parse_jsonld_block(text: str) -> Any:
    """Parse one JSON-LD script body; raises ParseFailure when malformed."""
    try:
        return json.loads(text)
    except (TypeError, ValueError) as e:
        raise ParseFailure(f"Invalid JSON-LD block: {e}") from e


class JsonLdFallback(FallbackStrategy):
    """Pick an external ``url``/``mainEntityOfPage`` from the page's JSON-LD."""

    name = "jsonld"

    def candidates(self, document: Any) -> List[str]:
        return [
            value
            for value in find_url_fields(document)
            if is_absolute_url(value) and not self.matcher.contains_brand(value)
        ]

    async def apply(self, session: BrowserSession, current_url: str) -> Optional[str]:
        blocks = await self._evaluate(session, scripts.JSONLD_BLOCKS)
        if not isinstance(blocks, list):
            return None

        for index, block in enumerate(blocks):
            try:
                document = parse_jsonld_block(block)
            except ParseFailure as e:
                self.logger.debug("Skipping JSON-LD block", index=index, error=str(e))
                continue

            if not isinstance(document, (dict, list)):
                continue

            found = self.candidates(document)
            if found:
                self.logger.info("Found external URL in JSON-LD", candidate=found[0])
                return found[0]

        self.logger.info("No external URLs found in JSON-LD", blocks=len(blocks))
        return None
