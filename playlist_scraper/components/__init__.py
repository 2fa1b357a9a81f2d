"""
Components sub-package for the playlist scraper.

`renderer` fetches the rendered playlist markup, `extractor` turns it into
playlist entries. The main entry points are re-exported here.
"""
from .extractor.models import PlaylistItem
from .extractor.table_scraper import parse_playlist
from .renderer.playlist_fetcher import PlaylistFetcher
from .renderer.playwright_manager import PlaywrightManager

__all__ = [
    "PlaylistItem",
    "parse_playlist",
    "PlaylistFetcher",
    "PlaywrightManager",
]
