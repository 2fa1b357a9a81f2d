"""
Manages a Playwright browser session used to render the playlist page.

This module provides the `PlaywrightManager` class, an asynchronous context manager
that opens a session against a remote browser-automation endpoint (or launches a
local headless browser when no endpoint is configured), navigates it, looks up
DOM elements and guarantees the session is closed on every exit path.
"""
from typing import Optional, TYPE_CHECKING

from playwright.async_api import (
    async_playwright,
    Browser,
    ElementHandle,
    Page,
    Playwright,
    TimeoutError as PlaywrightTimeoutError,
)

from playlist_scraper.core.exceptions import (
    ConfigurationError,
    ElementNotFoundError,
    NavigationError,
    SessionCloseError,
    SessionConnectError,
)
from playlist_scraper.core.logger import get_logger

if TYPE_CHECKING:
    from playlist_scraper.core.config import ConfigurationManager

logger = get_logger(__name__)

CONFIG_PREFIX = "components.page_fetcher"


class PlaywrightManager:
    """
    Asynchronous context manager for one browser-automation session.

    Entering the context connects to (or launches) the browser; leaving it closes
    the browser and stops the Playwright engine, whether the body succeeded,
    raised or was cancelled.

    Attributes:
        browser_type (str): Browser engine to drive ('chromium', 'firefox' or 'webkit').
        remote_endpoint (Optional[str]): Endpoint of the remote session, None to launch locally.
        remote_protocol (str): 'cdp' (Chrome DevTools Protocol) or 'playwright' (Playwright server).
        playwright (Optional[Playwright]): The Playwright engine instance.
        browser (Optional[Browser]): The connected or launched browser.
        page (Optional[Page]): The page opened by the last `navigate()` call.
    """
    DEFAULT_BROWSER_TYPE = 'chromium'
    DEFAULT_REMOTE_PROTOCOL = 'cdp'
    DEFAULT_NAVIGATION_TIMEOUT = 30000  # Milliseconds
    DEFAULT_ELEMENT_TIMEOUT = 15000  # Milliseconds
    SUPPORTED_BROWSER_TYPES = ('chromium', 'firefox', 'webkit')
    SUPPORTED_REMOTE_PROTOCOLS = ('cdp', 'playwright')

    def __init__(self, config: Optional['ConfigurationManager'] = None):
        """
        Initializes the PlaywrightManager from the `components.page_fetcher` settings.

        Args:
            config (Optional[ConfigurationManager]): Source of the session settings.
                If None, a local chromium browser is launched with default timeouts.

        Raises:
            ConfigurationError: On an unsupported browser type or protocol, or when the
                Chrome DevTools Protocol is requested for a non-chromium browser.
        """
        if config:
            self.browser_type = config.get(f'{CONFIG_PREFIX}.browser_type', self.DEFAULT_BROWSER_TYPE)
            self.remote_endpoint = config.get(f'{CONFIG_PREFIX}.remote_endpoint')
            self.remote_protocol = config.get(f'{CONFIG_PREFIX}.remote_protocol', self.DEFAULT_REMOTE_PROTOCOL)
            self.navigation_timeout = int(config.get(f'{CONFIG_PREFIX}.navigation_timeout_ms', self.DEFAULT_NAVIGATION_TIMEOUT))
            self.element_timeout = int(config.get(f'{CONFIG_PREFIX}.element_timeout_ms', self.DEFAULT_ELEMENT_TIMEOUT))
        else:
            self.browser_type = self.DEFAULT_BROWSER_TYPE
            self.remote_endpoint = None
            self.remote_protocol = self.DEFAULT_REMOTE_PROTOCOL
            self.navigation_timeout = self.DEFAULT_NAVIGATION_TIMEOUT
            self.element_timeout = self.DEFAULT_ELEMENT_TIMEOUT

        if self.browser_type not in self.SUPPORTED_BROWSER_TYPES:
            logger.error(f"Unsupported browser type configured: {self.browser_type}")
            raise ConfigurationError(f"Unsupported browser type: {self.browser_type}. Must be 'chromium', 'firefox', or 'webkit'.")
        if self.remote_protocol not in self.SUPPORTED_REMOTE_PROTOCOLS:
            logger.error(f"Unsupported remote protocol configured: {self.remote_protocol}")
            raise ConfigurationError(f"Unsupported remote protocol: {self.remote_protocol}. Must be 'cdp' or 'playwright'.")
        if self.remote_endpoint and self.remote_protocol == 'cdp' and self.browser_type != 'chromium':
            raise ConfigurationError(f"The 'cdp' protocol only supports chromium, not {self.browser_type}.")

        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.page: Optional[Page] = None

        target = self.remote_endpoint or "local launch"
        logger.info(f"PlaywrightManager configured: browser={self.browser_type}, endpoint={target}, protocol={self.remote_protocol}")

    async def __aenter__(self) -> 'PlaywrightManager':
        try:
            await self.connect()
        except BaseException:
            # __aexit__ never runs for a failed __aenter__; cancellation mid-connect lands here too.
            await self.close(raise_on_error=False)
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        # A close failure must not mask the error that is already propagating.
        await self.close(raise_on_error=exc_type is None)

    async def connect(self) -> None:
        """
        Starts Playwright and opens the browser session.

        Raises:
            SessionConnectError: If the endpoint is unreachable or the browser cannot start.
        """
        logger.debug(f"Opening {self.browser_type} session ({self.remote_endpoint or 'local launch'}).")
        try:
            self.playwright = await async_playwright().start()
            browser_launcher = getattr(self.playwright, self.browser_type)
            if not self.remote_endpoint:
                self.browser = await browser_launcher.launch()
            elif self.remote_protocol == 'cdp':
                self.browser = await browser_launcher.connect_over_cdp(self.remote_endpoint, timeout=self.navigation_timeout)
            else:
                self.browser = await browser_launcher.connect(self.remote_endpoint, timeout=self.navigation_timeout)
            logger.info(f"{self.browser_type} session opened.")
        except Exception as e:
            logger.error(f"Failed to open {self.browser_type} session: {e}", exc_info=True)
            if self.playwright:
                try:
                    await self.playwright.stop()
                except Exception as stop_e:
                    logger.error(f"Error stopping Playwright after failed connect: {stop_e}", exc_info=True)
                self.playwright = None
            raise SessionConnectError(f"Failed to open {self.browser_type} session at '{self.remote_endpoint or 'local launch'}'", e)

    async def close(self, raise_on_error: bool = True) -> None:
        """
        Closes the browser session and stops Playwright. Safe to call more than once.

        Args:
            raise_on_error (bool): Raise `SessionCloseError` when closing fails. When False
                the failure is only logged.
        """
        errors = []
        if self.browser:
            try:
                await self.browser.close()
                logger.info("Browser session closed.")
            except Exception as e:
                logger.error(f"Error closing browser session: {e}", exc_info=True)
                errors.append(e)
        if self.playwright:
            try:
                await self.playwright.stop()
                logger.debug("Playwright stopped.")
            except Exception as e:
                logger.error(f"Error stopping Playwright: {e}", exc_info=True)
                errors.append(e)

        self.page = None
        self.browser = None
        self.playwright = None

        if errors and raise_on_error:
            raise SessionCloseError("Failed to close browser session", errors[0])

    async def navigate(self, url: str, timeout: Optional[int] = None) -> Page:
        """
        Opens a new page and navigates it to `url`.

        Raises:
            SessionConnectError: If called outside an open session.
            NavigationError: If the page cannot be loaded.
        """
        if not self.browser:
            logger.error("navigate called but no browser session is open.")
            raise SessionConnectError("Browser session is not open. Use PlaywrightManager within an 'async with' statement.")

        effective_timeout = timeout if timeout is not None else self.navigation_timeout
        logger.debug(f"Navigating to {url} with timeout {effective_timeout}ms.")
        try:
            self.page = await self.browser.new_page()
            await self.page.goto(url, wait_until='load', timeout=effective_timeout)
        except Exception as e:
            logger.error(f"Navigation to '{url}' failed: {e}", exc_info=True)
            raise NavigationError(f"Failed to navigate to '{url}'", e)
        logger.info(f"Navigated to {url}.")
        return self.page

    async def find_element(self, selector: str, timeout: Optional[int] = None) -> ElementHandle:
        """
        Waits until an element matching the CSS `selector` is attached to the page.

        Raises:
            NavigationError: If no page has been opened with `navigate()`.
            ElementNotFoundError: If the element does not show up within the timeout.
        """
        if not self.page:
            raise NavigationError("No page is open. Call navigate() before find_element().")

        effective_timeout = timeout if timeout is not None else self.element_timeout
        try:
            element = await self.page.wait_for_selector(selector, state='attached', timeout=effective_timeout)
        except PlaywrightTimeoutError as e:
            logger.error(f"Element '{selector}' not found within {effective_timeout}ms.")
            raise ElementNotFoundError(f"Element '{selector}' not found within {effective_timeout}ms", e)
        except Exception as e:
            logger.error(f"Lookup of element '{selector}' failed: {e}", exc_info=True)
            raise ElementNotFoundError(f"Lookup of element '{selector}' failed", e)

        if element is None:
            raise ElementNotFoundError(f"Element '{selector}' not found")
        logger.debug(f"Element '{selector}' found.")
        return element
