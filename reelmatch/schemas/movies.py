"""Pydantic schemas for catalog records and enriched movies."""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class CatalogMatch(BaseModel):
    """One TMDB search hit that a candidate title resolved to."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    title: str
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    original_language: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title must not be blank")
        return v


class Genre(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str


class Credits(BaseModel):
    model_config = ConfigDict(frozen=True)

    cast: List[Dict[str, Any]] = []
    crew: List[Dict[str, Any]] = []


class MovieDetail(BaseModel):
    """The parts of /movie/{id} (with credits, videos, similar appended) the pipeline keeps."""

    model_config = ConfigDict(frozen=True)

    runtime: int = 0
    genres: List[Genre] = []
    credits: Credits = Credits()
    videos: List[Dict[str, Any]] = []
    similar: List[Dict[str, Any]] = []
    status: str = "Unknown"
    tagline: str = ""

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "MovieDetail":
        """Decode a raw detail payload, substituting defaults for null or missing fields.

        Raises pydantic.ValidationError (or TypeError for non-dict payloads) when the
        shape is unusable.
        """
        if not isinstance(data, dict):
            raise TypeError(f"expected a dict payload, got {type(data).__name__}")
        return cls.model_validate(
            {
                "runtime": data.get("runtime") or 0,
                "genres": data.get("genres") or [],
                "credits": data.get("credits") or {},
                "videos": (data.get("videos") or {}).get("results") or [],
                "similar": (data.get("similar") or {}).get("results") or [],
                "status": data.get("status") or "Unknown",
                "tagline": data.get("tagline") or "",
            }
        )


class EnrichedMovie(BaseModel):
    """Terminal record returned to the caller (and optionally stored per user)."""

    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    overview: str
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    release_date: str
    vote_average: float = 0
    vote_count: int = 0
    runtime: int = 0
    genres: List[Genre] = []
    credits: Credits = Credits()
    videos: List[Dict[str, Any]] = []
    similar: List[Dict[str, Any]] = []
    providers: Optional[Dict[str, Any]] = None
    original_language: str = "en"
    status: str = "Unknown"
    tagline: str = ""

    @property
    def genre_names(self) -> str:
        return ", ".join(g.name for g in self.genres)
