"""
Renderer component for the playlist scraper.

Drives a browser session to obtain the JavaScript-populated playlist markup.
"""
from .playwright_manager import PlaywrightManager
from .playlist_fetcher import PlaylistFetcher

__all__ = [
    "PlaywrightManager",
    "PlaylistFetcher",
]
