from typing import List

from fastapi import APIRouter, Depends, HTTPException

from reelmatch.dao.preferences import insert_movie_list, movie_lists_enabled
from reelmatch.exceptions import PersistenceError, RecommendationError
from reelmatch.process.recommendation import MovieRecommender
from reelmatch.schemas.api import (
    HealthResponse,
    MovieListRequest,
    MovieListResponse,
    RecommendationRequest,
)
from reelmatch.schemas.movies import EnrichedMovie
from reelmatch.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


def get_recommender() -> MovieRecommender:
    return MovieRecommender()


@router.get("/health", response_model=HealthResponse)
def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "ok", "service": "reelmatch"}


@router.post("/api/recommendations", response_model=List[EnrichedMovie])
def recommend(payload: RecommendationRequest, recommender: MovieRecommender = Depends(get_recommender)):
    """Generate enriched movie recommendations for a genre/language/preferences request.

    Returns the movies in the order the model suggested them. Pipeline
    failures are raised as RecommendationError and rendered by the app's
    exception handler.
    """
    logger.info(
        "Received request: genre=%s language=%s user=%s save_preferences=%s",
        payload.genre,
        payload.language,
        payload.user_id,
        payload.save_preferences,
    )
    try:
        return recommender.recommend(payload)
    except (HTTPException, RecommendationError):
        raise
    except Exception as e:
        logger.error("recommend error: %s", repr(e), exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/api/movie-lists", response_model=MovieListResponse, status_code=201)
def save_movie_list(payload: MovieListRequest):
    """Save a named list of movies for a user."""
    if not movie_lists_enabled():
        raise HTTPException(status_code=503, detail="persistence is not configured")
    try:
        return insert_movie_list(
            payload.user_id,
            payload.name,
            payload.movies,
            genre=payload.genre,
            language=payload.language,
            additional_details=payload.additional_details,
        )
    except PersistenceError as e:
        raise HTTPException(status_code=500, detail=f"failed to save movie list: {e}")
