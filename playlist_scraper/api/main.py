"""
Main application file for the playlist scraper API.

This file initializes the FastAPI application, sets up logging,
registers global exception handlers, and includes the API routers.
"""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from playlist_scraper import __version__
from playlist_scraper.api.routes import playlist_router
from playlist_scraper.core.exceptions import PlaylistScraperError
from playlist_scraper.core.logger import setup_logging, get_logger
from playlist_scraper.core.config import config_manager

# --- Logging Setup ---
setup_logging(config_manager)
logger = get_logger(__name__)


# --- FastAPI Application Initialization ---
app = FastAPI(
    title="Playlist Scraper API",
    description="Scrapes SomaFM station playlist histories from their rendered song-history pages.",
    version=__version__,
)

# --- Global Exception Handlers ---

def jsonable_errors(exc: RequestValidationError):
    # Pydantic error contexts may hold exception objects.
    return [{k: v for k, v in error.items() if k != "ctx"} for error in exc.errors()]

@app.exception_handler(PlaylistScraperError)
async def playlist_scraper_exception_handler(request: Request, exc: PlaylistScraperError):
    """
    Handles application exceptions that escaped the route handlers.

    Returns:
        JSONResponse: A standardized JSON error response with HTTP 500.
    """
    logger.error(
        f"PlaylistScraperError caught: {exc.__class__.__name__} - {exc.message} "
        f"for request: {request.method} {request.url}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": f"An application error occurred: {exc.message}"},
    )

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handles `RequestValidationError` for path or query parameters (HTTP 422).
    """
    logger.warning(f"RequestValidationError caught for: {request.method} {request.url}. Errors: {exc.errors()}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": "Request validation failed", "errors": jsonable_errors(exc)},
    )

@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """
    Catch-all so the API always answers with JSON, even for unexpected server errors.
    """
    logger.critical(
        f"Generic unhandled exception caught: {exc.__class__.__name__} - {str(exc)} "
        f"for request: {request.method} {request.url}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected server error occurred."},
    )


# --- API Router Inclusion ---
app.include_router(
    playlist_router,
    prefix="/api/v1/playlist",
    tags=["Playlist"]
)


# --- Root Endpoint ---
@app.get("/", tags=["General"], summary="API Root Endpoint")
async def read_root():
    """
    Basic API information; doubles as a health check.
    """
    return {
        "message": "Welcome to the Playlist Scraper API",
        "version": app.version,
        "documentation_url": app.docs_url,
        "redoc_url": app.redoc_url
    }


if __name__ == "__main__":
    import uvicorn

    logger.info("Starting Uvicorn server for local development...")
    uvicorn.run(app, host="0.0.0.0", port=8000)
