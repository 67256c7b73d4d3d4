"""Recommendation processing module."""

from typing import Any, Callable, List, Optional

from reelmatch.config.settings import settings
from reelmatch.dao.preferences import dispatch_write, upsert_user_preferences
from reelmatch.exceptions import (
    CatalogBackendUnconfigured,
    GenerationBackendError,
    InvalidRequest,
    NoCatalogMatches,
)
from reelmatch.process.catalog_resolver import CatalogResolver
from reelmatch.process.detail_enricher import DetailEnricher
from reelmatch.process.title_extractor import extract_titles
from reelmatch.schemas.api import RecommendationRequest
from reelmatch.schemas.movies import EnrichedMovie
from reelmatch.tmdb_client import get_tmdb_client
from reelmatch.utils.logger import get_logger
from reelmatch.utils.openai_client import complete_prompt
from reelmatch.utils.prompt_registry import PromptRegistry

logger = get_logger(__name__)


class MovieRecommender:
    """Generates movie recommendations from genre/language preferences.

    Pipeline: prompt the language model for candidate titles, resolve each
    title against TMDB, enrich the matches with details and watch providers.
    Only validation, generation, parsing, a missing TMDB key and an empty
    match set fail the request; everything after that degrades per movie.
    """

    def __init__(
        self,
        generate: Callable[[str], str] = complete_prompt,
        resolver: Optional[CatalogResolver] = None,
        enricher: Optional[DetailEnricher] = None,
        dispatch: Callable[..., Any] = dispatch_write,
        prompt_registry: Optional[PromptRegistry] = None,
    ):
        self.generate = generate
        self.dispatch = dispatch
        if resolver is None or enricher is None:
            client = get_tmdb_client()
            resolver = resolver or CatalogResolver(client)
            enricher = enricher or DetailEnricher(client, dispatch=dispatch)
        self.resolver = resolver
        self.enricher = enricher
        self.prompt_registry = prompt_registry or PromptRegistry()

    def get_recommendation_prompt(self, request: RecommendationRequest, prompt_version: int = 1) -> str:
        return self.prompt_registry.render(
            "recommend/movie_titles",
            prompt_version,
            count=settings.RECOMMENDATION_COUNT,
            genre=request.genre,
            language=request.language,
            additional_details=request.additional_details or "none",
        )

    def generate_titles(self, request: RecommendationRequest) -> List[str]:
        prompt = self.get_recommendation_prompt(request)
        logger.info("Requesting %s titles for genre=%s language=%s", settings.RECOMMENDATION_COUNT, request.genre, request.language)
        try:
            text = self.generate(prompt)
        except Exception as e:
            logger.error("Generation backend error: %s", repr(e), exc_info=True)
            raise GenerationBackendError(
                f"Generation backend error: {e}",
                details="Failed to generate movie recommendations",
            )
        titles = extract_titles(text)
        logger.info("Model suggested %s titles: %s", len(titles), titles)
        return titles

    def recommend(self, request: RecommendationRequest) -> List[EnrichedMovie]:
        if not request.genre or not request.genre.strip():
            raise InvalidRequest("Genre is required")

        if request.save_preferences and request.user_id:
            self.dispatch(
                upsert_user_preferences,
                request.user_id,
                request.genre,
                request.language,
                request.additional_details,
            )

        titles = self.generate_titles(request)

        if not self.resolver.is_configured:
            raise CatalogBackendUnconfigured("TMDB API key is not configured")

        resolutions = self.resolver.resolve_all(titles, request.language)
        matches = [r.match for r in resolutions if r.resolved]
        logger.info("Resolved %s of %s titles", len(matches), len(titles))
        if not matches:
            raise NoCatalogMatches(
                "No movies found matching your criteria",
                details="Catalog returned no valid results for the suggested movies",
            )

        enrichments = self.enricher.enrich_all(matches, request.user_id)
        degraded = sum(1 for e in enrichments if e.degraded)
        if degraded:
            logger.warning("%s of %s movies returned without details", degraded, len(enrichments))
        return [e.movie for e in enrichments]
