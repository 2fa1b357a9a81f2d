"""
Extractor component for the playlist scraper.

Parses the playlist-history table into `PlaylistItem` records.
"""
from .entities import decode_entities
from .models import PlaylistItem
from .table_scraper import (
    RowKind,
    classify_row,
    extract_item,
    extract_link_text,
    parse_playlist,
)

__all__ = [
    "decode_entities",
    "PlaylistItem",
    "RowKind",
    "classify_row",
    "extract_item",
    "extract_link_text",
    "parse_playlist",
]
