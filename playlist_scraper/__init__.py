"""
Playlist scraper for SomaFM station song histories.

Renders a station's playlist-history page in a browser, reads the playlist
table and turns it into `PlaylistItem` records.
"""
__version__ = "0.1.0"
