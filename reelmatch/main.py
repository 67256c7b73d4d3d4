from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from reelmatch.api import router
from reelmatch.dao.preferences import shutdown_writes
from reelmatch.exceptions import RecommendationError
from reelmatch.tmdb_client import close_tmdb_client
from reelmatch.utils.logger import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler: drain background writes and close the TMDB session on shutdown."""
    try:
        yield
    finally:
        try:
            shutdown_writes()
            close_tmdb_client()
            logger.info("Background writes drained and TMDB session closed")
        except Exception as e:
            logger.warning("Shutdown cleanup failed: %s", repr(e), exc_info=True)


app = FastAPI(title="Reelmatch", lifespan=lifespan)
app.include_router(router)


@app.exception_handler(RecommendationError)
async def recommendation_error_handler(request: Request, exc: RecommendationError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())
