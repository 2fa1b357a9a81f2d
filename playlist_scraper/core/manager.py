from typing import List, Optional, TYPE_CHECKING

from playlist_scraper.components.extractor.models import PlaylistItem
from playlist_scraper.components.extractor.table_scraper import parse_playlist
from playlist_scraper.components.renderer.playlist_fetcher import PlaylistFetcher
from playlist_scraper.core.exceptions import FetchError, ParseError, PipelineError
from playlist_scraper.core.logger import get_logger

if TYPE_CHECKING:
    from playlist_scraper.core.config import ConfigurationManager

logger = get_logger(__name__)


class PlaylistManager:
    """
    Runs the playlist pipeline: fetch the rendered markup, then parse it.

    Each call to `scrape_playlist` is a single attempt with a fresh browser
    session; failures are logged and propagated, retrying is up to the caller.
    """
    def __init__(self, config: 'ConfigurationManager'):
        """
        Args:
            config (ConfigurationManager): Configuration for the page fetcher.

        Raises:
            PipelineError: If the page fetcher cannot be set up from the configuration.
        """
        self.config = config
        try:
            self.fetcher = PlaylistFetcher(config=self.config)
        except Exception as e:
            logger.error(f"Error initializing PlaylistFetcher: {e}", exc_info=True)
            raise PipelineError(f"Failed to initialize PlaylistFetcher: {e}")
        logger.info("PlaylistManager initialized.")

    async def scrape_playlist(self, station: Optional[str] = None) -> List[PlaylistItem]:
        """
        Fetches and parses the playlist history of `station`.

        Returns:
            List[PlaylistItem]: Entries in page order, newest first.

        Raises:
            FetchError: If the page could not be retrieved.
            ParseError: If the retrieved markup could not be parsed.
        """
        station = station or self.fetcher.default_station
        logger.info(f"Scraping playlist history for station '{station}'.")

        try:
            markup = await self.fetcher.fetch_playlist_markup(station)
        except FetchError as e:
            logger.error(f"Fetch phase failed for station '{station}': {e.message}")
            raise

        try:
            items = parse_playlist(markup)
        except ParseError as e:
            logger.error(f"Parse phase failed for station '{station}': {e.message}")
            raise

        logger.info(f"Scraped {len(items)} playlist entries for station '{station}'.")
        return items
