"""
Fetches the rendered playlist-history markup of a SomaFM station.

The song history table is populated by JavaScript, so the page is loaded in a
real browser and the inner HTML of the playlist container is read once it is
attached to the DOM.
"""
from typing import Optional, TYPE_CHECKING

from playlist_scraper.components.extractor.entities import decode_entities
from playlist_scraper.components.renderer.playwright_manager import PlaywrightManager, CONFIG_PREFIX
from playlist_scraper.core.exceptions import ElementNotFoundError
from playlist_scraper.core.logger import get_logger

if TYPE_CHECKING:
    from playlist_scraper.core.config import ConfigurationManager

logger = get_logger(__name__)


class PlaylistFetcher:
    """
    Retrieves the entity-decoded inner HTML of a station's playlist container.

    One browser session is opened and closed per `fetch_playlist_markup()` call;
    the fetcher holds no session state between calls, so concurrent calls are safe.
    """
    DEFAULT_URL_TEMPLATE = "https://somafm.com/{station}/songhistory.html"
    DEFAULT_STATION = "groovesalad"
    DEFAULT_SELECTOR = "#playinc"

    def __init__(self, config: Optional['ConfigurationManager'] = None):
        self.config = config
        if config:
            self.url_template = config.get(f'{CONFIG_PREFIX}.url_template', self.DEFAULT_URL_TEMPLATE)
            self.default_station = config.get(f'{CONFIG_PREFIX}.default_station', self.DEFAULT_STATION)
            self.selector = config.get(f'{CONFIG_PREFIX}.selector', self.DEFAULT_SELECTOR)
        else:
            self.url_template = self.DEFAULT_URL_TEMPLATE
            self.default_station = self.DEFAULT_STATION
            self.selector = self.DEFAULT_SELECTOR

    def playlist_url(self, station: Optional[str] = None) -> str:
        return self.url_template.format(station=station or self.default_station)

    def _new_session(self) -> PlaywrightManager:
        return PlaywrightManager(config=self.config)

    async def fetch_playlist_markup(self, station: Optional[str] = None) -> str:
        """
        Loads the playlist-history page and returns the container's decoded inner HTML.

        Args:
            station (Optional[str]): SomaFM station id; defaults to the configured station.

        Returns:
            str: Inner HTML of the playlist container with HTML entities decoded.

        Raises:
            SessionConnectError: The browser-automation endpoint could not be reached.
            NavigationError: The playlist page could not be loaded.
            ElementNotFoundError: The playlist container never appeared.
            SessionCloseError: The session could not be closed after a successful read.
        """
        url = self.playlist_url(station)
        logger.info(f"Fetching playlist markup from {url} (selector '{self.selector}').")

        async with self._new_session() as session:
            await session.navigate(url)
            element = await session.find_element(self.selector)
            try:
                raw_html = await element.inner_html()
            except Exception as e:
                logger.error(f"Reading inner HTML of '{self.selector}' failed: {e}", exc_info=True)
                raise ElementNotFoundError(f"Could not read inner HTML of '{self.selector}'", e)

        markup = decode_entities(raw_html)
        logger.info(f"Fetched {len(markup)} characters of playlist markup from {url}.")
        return markup
