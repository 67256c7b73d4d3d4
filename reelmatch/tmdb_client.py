"""TMDB (The Movie Database) catalog client.

Thin wrapper over the v3 REST endpoints the recommendation pipeline needs.
Every call makes exactly one request; non-2xx responses raise
``requests.HTTPError`` and callers decide how to degrade.
"""

from typing import Any, Dict, List, Optional

import requests

from reelmatch.config.settings import settings
from reelmatch.utils.logger import get_logger

logger = get_logger(__name__)


class TMDBClient:
    """Search, detail and watch-provider lookups against TMDB."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = settings.TMDB_API_KEY if api_key is None else api_key
        self.base_url = (base_url or settings.TMDB_API_URL).rstrip("/")
        self.timeout = timeout or settings.TMDB_TIMEOUT_SECONDS
        self.session = session or requests.Session()
        # v4 read access tokens (JWT) go in the header, v3 keys in the query string
        self.use_bearer = bool(self.api_key) and self.api_key.startswith("eyJ")
        self.session.headers.update({"Accept": "application/json"})
        if self.use_bearer:
            self.session.headers["Authorization"] = f"Bearer {self.api_key}"

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        params = dict(params or {})
        if not self.use_bearer:
            params["api_key"] = self.api_key
        resp = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    def search_movies(self, title: str, language: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return the first page of /search/movie results for a title (adult content excluded)."""
        params = {"query": title, "page": 1, "include_adult": "false"}
        if language:
            params["language"] = language
        data = self._get("/search/movie", params)
        results = data.get("results") if isinstance(data, dict) else None
        return results if isinstance(results, list) else []

    def get_movie_details(self, tmdb_id: int) -> Dict[str, Any]:
        """Full movie record with credits, videos and similar titles appended."""
        return self._get(f"/movie/{tmdb_id}", {"append_to_response": "credits,videos,similar"})

    def get_watch_providers(self, tmdb_id: int) -> Dict[str, Any]:
        """Region-keyed availability map (``{"US": {...}, "FR": {...}}``)."""
        data = self._get(f"/movie/{tmdb_id}/watch/providers")
        results = data.get("results") if isinstance(data, dict) else None
        return results if isinstance(results, dict) else {}

    def close(self) -> None:
        self.session.close()


_client: Optional[TMDBClient] = None


def get_tmdb_client() -> TMDBClient:
    """Shared client so the pipeline reuses one connection pool."""
    global _client
    if _client is None:
        _client = TMDBClient()
        if not _client.is_configured:
            logger.warning("TMDB_API_KEY is not set; recommendation requests will fail")
    return _client


def close_tmdb_client() -> None:
    global _client
    if _client is not None:
        _client.close()
        _client = None
