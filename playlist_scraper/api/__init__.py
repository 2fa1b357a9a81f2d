"""
API sub-package for the playlist scraper.

Contains the FastAPI application (`api.main`), its routers (`api.routes`) and
the response schemas (`api.models`). Import them from their modules directly.
"""

__all__ = []
