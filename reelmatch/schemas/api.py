"""Request/response bodies for the HTTP API (camelCase on the wire)."""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecommendationRequest(BaseModel):
    """Body of POST /api/recommendations.

    genre is optional here so a missing genre reaches the pipeline and is
    reported as a 400 with the same error body as other failures.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    genre: Optional[str] = None
    language: Optional[str] = "en"
    additional_details: Optional[str] = Field(default=None, alias="additionalDetails")
    user_id: Optional[str] = Field(default=None, alias="userId")
    save_preferences: bool = Field(default=False, alias="savePreferences")

    @field_validator("genre", mode="before")
    @classmethod
    def non_text_genre_is_missing(cls, v: Any) -> Any:
        return v if isinstance(v, str) else None

    @field_validator("language", mode="before")
    @classmethod
    def null_language_is_default(cls, v: Any) -> Any:
        return "en" if v is None else v


class MovieListRequest(BaseModel):
    """Body of POST /api/movie-lists."""

    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)
    name: str = Field(min_length=1)
    movies: List[Dict[str, Any]]
    genre: Optional[str] = None
    language: Optional[str] = None
    additional_details: Optional[str] = Field(default=None, alias="additionalDetails")


class MovieListResponse(BaseModel):
    id: str
    user_id: str
    name: str
    genre: Optional[str] = None
    language: Optional[str] = None
    additional_details: Optional[str] = None
    movies: List[Dict[str, Any]]
    created_at: datetime


class HealthResponse(BaseModel):
    status: str
    service: str
