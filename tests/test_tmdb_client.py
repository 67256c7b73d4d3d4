"""Tests for the TMDB client request shapes."""

from unittest.mock import MagicMock

import pytest
import requests

from reelmatch.tmdb_client import TMDBClient


def make_session(payload=None, error=None) -> MagicMock:
    session = MagicMock()
    session.headers = {}
    response = MagicMock()
    response.json.return_value = payload if payload is not None else {}
    if error is not None:
        response.raise_for_status.side_effect = error
    session.get.return_value = response
    return session


class TestTMDBClient:
    """Tests for TMDBClient."""

    def test_search_movies_params(self):
        session = make_session({"results": [{"id": 1, "title": "Heat"}]})
        client = TMDBClient(api_key="v3key", base_url="https://tmdb.test/3", session=session)

        results = client.search_movies("Heat", "en-US")

        assert results == [{"id": 1, "title": "Heat"}]
        url = session.get.call_args.args[0]
        params = session.get.call_args.kwargs["params"]
        assert url == "https://tmdb.test/3/search/movie"
        assert params == {
            "query": "Heat",
            "page": 1,
            "include_adult": "false",
            "language": "en-US",
            "api_key": "v3key",
        }

    def test_search_without_results_key(self):
        client = TMDBClient(api_key="k", session=make_session({}))
        assert client.search_movies("Heat") == []

    def test_search_with_non_list_results(self):
        client = TMDBClient(api_key="k", session=make_session({"results": {"id": 1}}))
        assert client.search_movies("Heat") == []

    def test_watch_providers_with_non_dict_results(self):
        client = TMDBClient(api_key="k", session=make_session({"id": 7, "results": ["US"]}))
        assert client.get_watch_providers(7) == {}

    def test_movie_details_appends_sections(self):
        session = make_session({"id": 7, "runtime": 127})
        client = TMDBClient(api_key="k", base_url="https://tmdb.test/3", session=session)

        assert client.get_movie_details(7) == {"id": 7, "runtime": 127}
        assert session.get.call_args.args[0] == "https://tmdb.test/3/movie/7"
        assert session.get.call_args.kwargs["params"]["append_to_response"] == "credits,videos,similar"

    def test_watch_providers_returns_region_map(self):
        session = make_session({"id": 7, "results": {"US": {"link": "x"}}})
        client = TMDBClient(api_key="k", base_url="https://tmdb.test/3", session=session)

        assert client.get_watch_providers(7) == {"US": {"link": "x"}}
        assert session.get.call_args.args[0] == "https://tmdb.test/3/movie/7/watch/providers"

    def test_http_error_raises(self):
        client = TMDBClient(api_key="k", session=make_session(error=requests.HTTPError("401")))
        with pytest.raises(requests.HTTPError):
            client.get_movie_details(1)

    def test_bearer_token_goes_in_header(self):
        session = make_session({"results": []})
        client = TMDBClient(api_key="eyJhbGciOi.token", session=session)

        client.search_movies("Heat")

        assert session.headers["Authorization"] == "Bearer eyJhbGciOi.token"
        assert "api_key" not in session.get.call_args.kwargs["params"]

    def test_is_configured(self):
        assert TMDBClient(api_key="k", session=make_session()).is_configured
        assert not TMDBClient(api_key="", session=make_session()).is_configured
