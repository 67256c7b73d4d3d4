"""Pytest configuration and fixtures."""

import json
import threading
from collections.abc import AsyncGenerator
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from reelmatch.api import get_recommender
from reelmatch.main import app
from reelmatch.process.catalog_resolver import CatalogResolver
from reelmatch.process.detail_enricher import DetailEnricher
from reelmatch.process.recommendation import MovieRecommender


def search_hit(tmdb_id: int, title: str, **extra: Any) -> dict:
    """A /search/movie result as TMDB returns it."""
    hit = {
        "id": tmdb_id,
        "title": title,
        "overview": f"Overview of {title}",
        "poster_path": f"/poster{tmdb_id}.jpg",
        "backdrop_path": f"/backdrop{tmdb_id}.jpg",
        "release_date": "2001-01-01",
        "vote_average": 7.5,
        "vote_count": 1200,
        "original_language": "en",
    }
    hit.update(extra)
    return hit


def detail_payload(tmdb_id: int, **extra: Any) -> dict:
    """A /movie/{id} payload with credits, videos and similar appended."""
    payload = {
        "id": tmdb_id,
        "runtime": 101,
        "genres": [{"id": 35, "name": "Comedy"}, {"id": 18, "name": "Drama"}],
        "credits": {"cast": [{"id": 1, "name": "Lead Actor"}], "crew": [{"id": 2, "job": "Director"}]},
        "videos": {"results": [{"key": "abc", "site": "YouTube"}]},
        "similar": {"results": [{"id": 999, "title": "Similar Movie"}]},
        "status": "Released",
        "tagline": "A tagline",
    }
    payload.update(extra)
    return payload


class FakeTMDB:
    """In-memory stand-in for TMDBClient.

    Each mapping value is either the payload to return or an exception to raise.
    """

    def __init__(self, search=None, details=None, providers=None, configured: bool = True):
        self.search = search or {}
        self.details = details or {}
        self.providers = providers or {}
        self.configured = configured
        self.calls: list[tuple] = []
        self._lock = threading.Lock()

    @property
    def is_configured(self) -> bool:
        return self.configured

    def _record(self, *call) -> None:
        with self._lock:
            self.calls.append(call)

    @staticmethod
    def _answer(value):
        if isinstance(value, Exception):
            raise value
        return value

    def search_movies(self, title, language=None):
        self._record("search", title, language)
        return self._answer(self.search.get(title, []))

    def get_movie_details(self, tmdb_id):
        self._record("details", tmdb_id)
        return self._answer(self.details.get(tmdb_id, detail_payload(tmdb_id)))

    def get_watch_providers(self, tmdb_id):
        self._record("providers", tmdb_id)
        return self._answer(self.providers.get(tmdb_id, {"US": {"flatrate": [{"provider_name": "Netflix"}]}}))

    def calls_of(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]


class RecordingDispatch:
    """Collects fire-and-forget writes instead of running them."""

    def __init__(self):
        self.writes: list[tuple] = []
        self._lock = threading.Lock()

    def __call__(self, fn, *args, **kwargs):
        with self._lock:
            self.writes.append((fn.__name__, args, kwargs))
        return None

    def names(self) -> list[str]:
        return [w[0] for w in self.writes]


class FakeGenerator:
    """Generation backend returning a fixed text (or raising)."""

    def __init__(self, text: str | None = None, error: Exception | None = None):
        self.text = text
        self.error = error
        self.prompts: list[str] = []

    @classmethod
    def of_titles(cls, titles: list[str]) -> "FakeGenerator":
        return cls(text=json.dumps(titles))

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def dispatch() -> RecordingDispatch:
    return RecordingDispatch()


@pytest.fixture
def fake_tmdb() -> FakeTMDB:
    return FakeTMDB()


def make_recommender(generator, tmdb, dispatch) -> MovieRecommender:
    return MovieRecommender(
        generate=generator,
        resolver=CatalogResolver(tmdb),
        enricher=DetailEnricher(tmdb, dispatch=dispatch, region="US"),
        dispatch=dispatch,
    )


@pytest_asyncio.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create a test client; tests install their own recommender override."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def use_recommender():
    """Return a function that routes the API to a given recommender."""

    def _install(recommender: MovieRecommender) -> MovieRecommender:
        app.dependency_overrides[get_recommender] = lambda: recommender
        return recommender

    yield _install
    app.dependency_overrides.clear()
