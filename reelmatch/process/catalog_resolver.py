"""Resolve candidate titles to TMDB catalog records."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from reelmatch.schemas.movies import CatalogMatch
from reelmatch.utils.concurrency import fan_out
from reelmatch.utils.logger import get_logger

logger = get_logger(__name__)

NO_RESULTS = "no_results"
INVALID_RECORD = "invalid_record"
LOOKUP_FAILED = "lookup_failed"


class Resolution(BaseModel):
    """Outcome for one candidate title: either a match or the reason there is none."""

    model_config = ConfigDict(frozen=True)

    title: str
    match: Optional[CatalogMatch] = None
    reason: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.match is not None


def select_result(title: str, results: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Prefer a case-insensitive exact title match, else the top-ranked result."""
    wanted = title.lower()
    for item in results:
        if not isinstance(item, dict):
            continue
        candidate = item.get("title")
        if isinstance(candidate, str) and candidate.lower() == wanted:
            return item
    return results[0]


class CatalogResolver:
    """Maps candidate titles onto catalog records via the client's title search."""

    def __init__(self, client, max_workers: Optional[int] = None):
        self.client = client
        self.max_workers = max_workers

    @property
    def is_configured(self) -> bool:
        return self.client.is_configured

    def resolve(self, title: str, language: Optional[str] = None) -> Resolution:
        try:
            results = self.client.search_movies(title, language)
        except Exception as e:
            logger.error("Error fetching catalog data for %r: %s", title, repr(e))
            return Resolution(title=title, reason=LOOKUP_FAILED)

        if not isinstance(results, list) or not results:
            logger.warning("No catalog results for: %s", title)
            return Resolution(title=title, reason=NO_RESULTS)

        try:
            match = CatalogMatch.model_validate(select_result(title, results))
        except (ValidationError, TypeError, AttributeError) as e:
            logger.warning("Invalid catalog record for %r: %s", title, repr(e))
            return Resolution(title=title, reason=INVALID_RECORD)
        return Resolution(title=title, match=match)

    def resolve_all(self, titles: List[str], language: Optional[str] = None) -> List[Resolution]:
        """Resolve every title concurrently; results follow the order of ``titles``."""
        return fan_out(lambda t: self.resolve(t, language), titles, self.max_workers)
