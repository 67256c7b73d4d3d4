"""Build EnrichedMovie records from resolved catalog matches."""

from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from reelmatch.config.settings import settings
from reelmatch.dao.preferences import dispatch_write, upsert_user_movie
from reelmatch.schemas.movies import CatalogMatch, EnrichedMovie, MovieDetail
from reelmatch.utils.concurrency import fan_out
from reelmatch.utils.logger import get_logger

logger = get_logger(__name__)

POSTER_SIZE = "w500"
BACKDROP_SIZE = "w1280"


class Enrichment(BaseModel):
    """An enriched movie plus whether it had to be built from search data only."""

    model_config = ConfigDict(frozen=True)

    movie: EnrichedMovie
    degraded: bool = False


def image_url(path: Optional[str], size: str) -> Optional[str]:
    if not path:
        return None
    return f"{settings.TMDB_IMAGE_BASE_URL}/{size}{path}"


def base_fields(match: CatalogMatch) -> Dict[str, Any]:
    """Fields taken from the search hit, with display fallbacks applied."""
    return {
        "id": match.id,
        "title": match.title,
        "overview": match.overview or "No overview available",
        "poster_path": image_url(match.poster_path, POSTER_SIZE),
        "backdrop_path": image_url(match.backdrop_path, BACKDROP_SIZE),
        "release_date": match.release_date or "Unknown",
        "vote_average": match.vote_average or 0,
        "vote_count": match.vote_count or 0,
        "original_language": match.original_language or "en",
    }


class DetailEnricher:
    """Fetches detail and watch providers for a match; never fails a record.

    A failed detail lookup yields a degraded record built from the search hit.
    A failed provider lookup only nulls ``providers``.
    """

    def __init__(
        self,
        client,
        dispatch: Callable[..., Any] = dispatch_write,
        region: Optional[str] = None,
        max_workers: Optional[int] = None,
    ):
        self.client = client
        self.dispatch = dispatch
        self.region = region or settings.WATCH_PROVIDER_REGION
        self.max_workers = max_workers

    def fetch_providers(self, tmdb_id: int) -> Optional[Dict[str, Any]]:
        # TODO: report "lookup failed" separately from "not available in region"; both are None today
        try:
            by_region = self.client.get_watch_providers(tmdb_id)
        except Exception as e:
            logger.error("Error fetching providers for %s: %s", tmdb_id, repr(e))
            return None
        if not isinstance(by_region, dict):
            logger.warning("Unexpected providers payload for %s: %s", tmdb_id, type(by_region).__name__)
            return None
        providers = by_region.get(self.region)
        if providers is None:
            logger.debug("No %s providers for %s", self.region, tmdb_id)
            return None
        if not isinstance(providers, dict):
            logger.warning("Unexpected %s providers entry for %s: %s", self.region, tmdb_id, type(providers).__name__)
            return None
        return providers

    def degraded(self, match: CatalogMatch) -> EnrichedMovie:
        return EnrichedMovie(**base_fields(match))

    def enrich(self, match: CatalogMatch, user_id: Optional[str] = None) -> Enrichment:
        try:
            detail = MovieDetail.from_payload(self.client.get_movie_details(match.id))
            movie = EnrichedMovie(
                **base_fields(match),
                runtime=detail.runtime,
                genres=detail.genres,
                credits=detail.credits,
                videos=detail.videos,
                similar=detail.similar,
                providers=self.fetch_providers(match.id),
                status=detail.status,
                tagline=detail.tagline,
            )
        except Exception as e:
            logger.error("Error enriching details for %s: %s", match.title, repr(e))
            return Enrichment(movie=self.degraded(match), degraded=True)

        if user_id:
            self.dispatch(upsert_user_movie, user_id, movie)
        return Enrichment(movie=movie)

    def enrich_all(self, matches: List[CatalogMatch], user_id: Optional[str] = None) -> List[Enrichment]:
        """Enrich every match concurrently; results follow the order of ``matches``."""
        return fan_out(lambda m: self.enrich(m, user_id), matches, self.max_workers)
