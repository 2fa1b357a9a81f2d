"""
API Routes sub-package for the playlist scraper.
"""

from .playlist_routes import router as playlist_router

__all__ = [
    "playlist_router",
]
