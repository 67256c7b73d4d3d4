"""Best-effort persistence of user preferences, per-user movies and saved lists.

The recommendation pipeline only ever reaches this module through
``dispatch_write``: writes run on a detached thread pool, their failures are
logged and nothing is propagated back to the request.
"""
import threading
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from reelmatch.db import (
    movie_lists_collection,
    user_movies_collection,
    user_preferences_collection,
)
from reelmatch.exceptions import PersistenceError
from reelmatch.schemas.movies import EnrichedMovie
from reelmatch.utils.logger import get_logger

logger = get_logger(__name__)

_WRITE_POOL: Optional[ThreadPoolExecutor] = None
_pending: set = set()
_lock = threading.Lock()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def upsert_user_preferences(user_id: str, genre: str, language: str, additional_details: Optional[str]) -> None:
    """Store the latest search criteria for a user (one document per user)."""
    if user_preferences_collection is None:
        logger.debug("Persistence disabled; skipping preferences for user %s", user_id)
        return
    user_preferences_collection.update_one(
        {"user_id": user_id},
        {
            "$set": {
                "user_id": user_id,
                "genre": genre,
                "language": language,
                "additional_details": additional_details,
                "updated_at": _utcnow(),
            }
        },
        upsert=True,
    )
    logger.info("Saved preferences for user %s", user_id)


def upsert_user_movie(user_id: str, movie: EnrichedMovie) -> None:
    """Store a snapshot of a recommended movie, unique per (user_id, movie_id)."""
    if user_movies_collection is None:
        logger.debug("Persistence disabled; skipping movie %s for user %s", movie.id, user_id)
        return
    user_movies_collection.update_one(
        {"user_id": user_id, "movie_id": movie.id},
        {
            "$set": {
                "user_id": user_id,
                "movie_id": movie.id,
                "movie_data": movie.model_dump(mode="json"),
                "genre": movie.genre_names,
                "language": movie.original_language,
                "updated_at": _utcnow(),
            }
        },
        upsert=True,
    )


def movie_lists_enabled() -> bool:
    return movie_lists_collection is not None


def insert_movie_list(
    user_id: str,
    name: str,
    movies: List[Dict[str, Any]],
    genre: Optional[str] = None,
    language: Optional[str] = None,
    additional_details: Optional[str] = None,
) -> Dict[str, Any]:
    """Insert a named list of movies for a user and return the stored document.

    Unlike the upserts above this is called synchronously by the API and
    raises PersistenceError on failure.
    """
    if movie_lists_collection is None:
        raise PersistenceError("persistence is not configured")
    doc = {
        "user_id": user_id,
        "name": name,
        "genre": genre,
        "language": language,
        "additional_details": additional_details,
        "movies": movies,
        "created_at": _utcnow(),
    }
    try:
        result = movie_lists_collection.insert_one(doc)
    except Exception as e:
        logger.error("Error saving movie list for user %s: %s", user_id, repr(e), exc_info=True)
        raise PersistenceError(str(e)) from e
    # insert_one adds the ObjectId to doc as _id
    doc.pop("_id", None)
    doc["id"] = str(result.inserted_id)
    logger.info("Saved movie list '%s' (%s movies) for user %s", name, len(movies), user_id)
    return doc


def _get_pool() -> ThreadPoolExecutor:
    global _WRITE_POOL
    if _WRITE_POOL is None:
        _WRITE_POOL = ThreadPoolExecutor(max_workers=4, thread_name_prefix="reelmatch-write")
    return _WRITE_POOL


def _on_write_done(future: Future) -> None:
    with _lock:
        _pending.discard(future)
    exc = future.exception()
    if exc is not None:
        logger.error("Background write %s failed: %s", getattr(future, "write_name", "?"), repr(exc))


def dispatch_write(fn: Callable[..., Any], *args, **kwargs) -> Optional[Future]:
    """Run a write on the background pool without waiting for it.

    Returns the future (mostly useful to tests) or None when the write could
    not even be scheduled.
    """
    try:
        future = _get_pool().submit(fn, *args, **kwargs)
    except RuntimeError as e:
        # pool already shut down
        logger.warning("Could not schedule %s: %s", getattr(fn, "__name__", fn), repr(e))
        return None
    future.write_name = getattr(fn, "__name__", repr(fn))
    with _lock:
        _pending.add(future)
    future.add_done_callback(_on_write_done)
    return future


def flush_writes(timeout: Optional[float] = None) -> int:
    """Wait for scheduled writes to finish; returns how many were still pending."""
    with _lock:
        pending = list(_pending)
    if pending:
        wait(pending, timeout=timeout)
    return len(pending)


def shutdown_writes(timeout: Optional[float] = 5.0) -> None:
    global _WRITE_POOL
    flush_writes(timeout=timeout)
    if _WRITE_POOL is not None:
        _WRITE_POOL.shutdown(wait=False)
        _WRITE_POOL = None
