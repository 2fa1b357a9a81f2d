"""
API routes exposing the playlist pipeline.

Each request runs one fetch-then-parse attempt for a SomaFM station and returns
the parsed playlist history.
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, status

from playlist_scraper.api.models import PlaylistItemSchema, PlaylistResponse
from playlist_scraper.core.config import config_manager
from playlist_scraper.core.exceptions import FetchError, ParseError, PipelineError
from playlist_scraper.core.logger import get_logger
from playlist_scraper.core.manager import PlaylistManager

logger = get_logger(__name__)

# SomaFM station ids, e.g. "groovesalad", "dronezone", "u80s".
STATION_PATTERN = r"^[a-z0-9]+$"

router = APIRouter()


def get_playlist_manager() -> PlaylistManager:
    """Dependency provider: a fresh manager per request, configured from the global config."""
    try:
        return PlaylistManager(config=config_manager)
    except PipelineError as e:
        logger.error(f"PlaylistManager unavailable: {e.message}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Playlist pipeline could not be initialized. Error: {e.message}"
        )


async def _scrape(manager: PlaylistManager, station: Optional[str]) -> PlaylistResponse:
    station = station or manager.fetcher.default_station
    try:
        items = await manager.scrape_playlist(station)
    except FetchError as e:
        # Browser endpoint down, page unreachable or layout not rendered.
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Could not fetch playlist for station '{station}'. Error: {e.message}"
        )
    except ParseError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Playlist page for station '{station}' could not be parsed. Error: {e.message}"
        )

    return PlaylistResponse(
        station=station,
        count=len(items),
        items=[PlaylistItemSchema.model_validate(item) for item in items],
    )


@router.get(
    "/",
    response_model=PlaylistResponse,
    summary="Playlist history of the default station",
)
async def default_station_playlist(manager: PlaylistManager = Depends(get_playlist_manager)):
    return await _scrape(manager, None)


@router.get(
    "/{station}",
    response_model=PlaylistResponse,
    summary="Playlist history of a station",
    description="Renders the station's song-history page, parses the playlist table "
                "and returns its entries newest first. One attempt per request; "
                "503 when the page could not be fetched, 502 when it could not be parsed.",
)
async def station_playlist(
    station: str = Path(..., pattern=STATION_PATTERN, description="SomaFM station id"),
    manager: PlaylistManager = Depends(get_playlist_manager),
):
    return await _scrape(manager, station)
