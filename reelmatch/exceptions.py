"""Request-level failures of the recommendation pipeline.

Only these conditions abort a recommendation request. Per-title lookup and
enrichment failures are absorbed inside the pipeline stages and never show up
here.
"""

from typing import Any, Dict, Optional


class RecommendationError(Exception):
    """Base class; carries the HTTP status and the JSON body to return."""

    status_code = 500

    def __init__(self, error: str, details: Optional[str] = None, response: Optional[str] = None):
        super().__init__(error)
        self.error = error
        self.details = details
        self.response = response

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        if self.response is not None:
            body["response"] = self.response
        return body


class InvalidRequest(RecommendationError):
    status_code = 400


class GenerationBackendError(RecommendationError):
    status_code = 500


class MalformedGenerationOutput(RecommendationError):
    status_code = 500


class CatalogBackendUnconfigured(RecommendationError):
    status_code = 500


class NoCatalogMatches(RecommendationError):
    status_code = 404


class PersistenceError(Exception):
    """Raised by synchronous store operations (saved movie lists)."""
