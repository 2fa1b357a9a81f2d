"""
Custom exception classes for the playlist scraper.

Two component taxonomies are kept apart: `FetchError` for everything that goes
wrong while driving the browser session, `ParseError` for everything that goes
wrong while turning the fetched markup into playlist entries.
"""
from typing import Optional


class PlaylistScraperError(Exception):
    """
    Base class for all custom exceptions in the playlist scraper.

    Attributes:
        message (str): A human-readable description of the error.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


# --- Configuration Related Exceptions ---
class ConfigurationError(PlaylistScraperError):
    """Raised when configuration values are present but unusable (e.g. an unknown browser type)."""
    def __init__(self, message: str):
        super().__init__(message)


# --- Pipeline Related Exceptions ---
class PipelineError(PlaylistScraperError):
    """Raised when the fetch-then-parse pipeline cannot be set up or run."""
    def __init__(self, message: str):
        super().__init__(message)


# --- Component Related Exceptions ---
class ComponentError(PlaylistScraperError):
    """
    A general base class for errors originating from within a specific component.

    Attributes:
        component_name (str): Name of the component where the error originated.
    """
    def __init__(self, component_name: str, message: str):
        full_message = f"Error in component '{component_name}': {message}"
        super().__init__(full_message)
        self.component_name = component_name


class FetchError(ComponentError):
    """
    Raised by the page fetcher. Never retried internally.

    Attributes:
        original_exception (Optional[Exception]): The underlying Playwright exception, if any.
    """
    def __init__(self, message: str, original_exception: Optional[Exception] = None):
        self.original_exception = original_exception
        if original_exception is not None:
            message = f"{message} (Original exception: {original_exception})"
        super().__init__(component_name="PageFetcher", message=message)


class SessionConnectError(FetchError):
    """The browser-automation endpoint could not be reached or the browser could not start."""


class NavigationError(FetchError):
    """Navigation to the playlist page failed (network, DNS, timeout)."""


class ElementNotFoundError(FetchError):
    """The playlist container element never appeared on the page."""


class SessionCloseError(FetchError):
    """The browser session could not be closed cleanly."""


class ParseError(ComponentError):
    """Raised by the table scraper. Parsing is all-or-nothing."""
    def __init__(self, message: str):
        super().__init__(component_name="TableScraper", message=message)


class MalformedFragmentError(ParseError):
    """The markup could not be parsed as an HTML fragment."""


class MissingTableError(ParseError):
    """The fragment contains no `table` element."""
    def __init__(self, message: str = "No <table> element found in playlist markup."):
        super().__init__(message)


class MissingBodyError(ParseError):
    """The playlist table has no `tbody` element."""
    def __init__(self, message: str = "Playlist table has no <tbody> element."):
        super().__init__(message)


class MissingHyperlinkError(ParseError):
    """
    A data row lacks the hyperlink required in one of its link-wrapped cells.

    Attributes:
        row_index (int): Zero-based index of the offending row within the table body.
        column (str): Name of the field whose cell had no link ('artist' or 'album').
    """
    def __init__(self, row_index: int, column: str):
        self.row_index = row_index
        self.column = column
        super().__init__(f"Row {row_index} is missing the required hyperlink in the '{column}' cell.")
