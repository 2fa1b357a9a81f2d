"""
Playlist table scraper built on BeautifulSoup.

Turns the inner HTML of a station's playlist-history container into an ordered
list of `PlaylistItem` records. The table mixes a header row, spacer rows and
"Break / Station ID" placeholder rows with the actual data rows; rows are told
apart by position and cell count rather than by their text.

Row layout of a data row: Played At | Artist (link) | Song | Album (link) | buy links.
"""
import enum
from typing import List, NamedTuple, Sequence

from bs4 import BeautifulSoup
from bs4.element import Tag

from playlist_scraper.components.extractor.entities import decode_entities
from playlist_scraper.components.extractor.models import PlaylistItem, PLAYED_AT_WIDTH
from playlist_scraper.core.exceptions import (
    MalformedFragmentError,
    MissingBodyError,
    MissingHyperlinkError,
    MissingTableError,
)
from playlist_scraper.core.logger import get_logger

logger = get_logger(__name__)

# Data rows carry at least this many cells; break and spacer rows use one merged cell.
MIN_DATA_CELLS = 5

CELL_TAGS = ["td", "th"]


class RowKind(enum.Enum):
    HEADER = "header"
    SEPARATOR = "separator"
    BREAK = "break"
    DATA = "data"


class ClassifiedRow(NamedTuple):
    index: int
    kind: RowKind
    cells: List[Tag]


def classify_row(index: int, cells: Sequence[Tag]) -> RowKind:
    """
    Classifies a table-body row. The first matching rule wins:

    - index 0 is the column-label header,
    - index 1 is the cosmetic spacer under it,
    - any row with fewer than `MIN_DATA_CELLS` cells is a break/spacer row
      (this also covers the spacer closing the table),
    - everything else is a data row.
    """
    if index == 0:
        return RowKind.HEADER
    if index == 1:
        return RowKind.SEPARATOR
    if len(cells) < MIN_DATA_CELLS:
        return RowKind.BREAK
    return RowKind.DATA


def extract_link_text(cell: Tag, row_index: int, column: str) -> str:
    """
    Returns the decoded text of the first hyperlink inside `cell`.

    Raises:
        MissingHyperlinkError: If the cell holds no <a> element.
    """
    link = cell.find("a")
    if link is None:
        raise MissingHyperlinkError(row_index=row_index, column=column)
    return decode_entities(link.get_text(strip=True))


def extract_item(row_index: int, cells: Sequence[Tag]) -> PlaylistItem:
    """Builds a `PlaylistItem` from the cells of a data row."""
    # Only leading whitespace goes; the "(Now)" suffix after the time is cut off by the width.
    played_at = decode_entities(cells[0].get_text()).lstrip()[:PLAYED_AT_WIDTH]
    return PlaylistItem(
        played_at=played_at,
        artist=extract_link_text(cells[1], row_index, "artist"),
        song=decode_entities(cells[2].get_text(strip=True)),
        album=extract_link_text(cells[3], row_index, "album"),
    )


def iter_rows(markup: str) -> List[ClassifiedRow]:
    """
    Parses `markup` and classifies every direct row of the playlist table body.

    Raises:
        MalformedFragmentError: If `markup` is not a string or cannot be parsed.
        MissingTableError: If the fragment contains no <table>.
        MissingBodyError: If the table has no <tbody>.
    """
    if not isinstance(markup, str):
        raise MalformedFragmentError(f"Playlist markup must be a string, got {type(markup).__name__}.")

    try:
        soup = BeautifulSoup(markup, 'html.parser')
    except Exception as e:
        raise MalformedFragmentError(f"Failed to parse playlist markup: {e}")

    table = soup.find("table")
    if table is None:
        raise MissingTableError()
    body = table.find("tbody")
    if body is None:
        raise MissingBodyError()

    classified: List[ClassifiedRow] = []
    for index, row in enumerate(body.find_all("tr", recursive=False)):
        cells = row.find_all(CELL_TAGS, recursive=False)
        classified.append(ClassifiedRow(index, classify_row(index, cells), cells))
    return classified


def parse_playlist(markup: str) -> List[PlaylistItem]:
    """
    Parses a playlist-history fragment into playlist entries.

    Entries come out in page order (newest first). Any row failure aborts the
    whole parse; partial results are never returned.

    Args:
        markup (str): Inner HTML of the playlist container, entity-decoded or not.

    Returns:
        List[PlaylistItem]: One entry per data row.

    Raises:
        ParseError: One of its subclasses, see `iter_rows` and `extract_link_text`.
    """
    rows = iter_rows(markup)
    data_rows = [row for row in rows if row.kind is RowKind.DATA]
    logger.debug(f"Playlist table has {len(rows)} rows, {len(data_rows)} of them data rows.")

    try:
        items = [extract_item(row.index, row.cells) for row in data_rows]
    except MissingHyperlinkError as e:
        logger.error(f"Playlist parse aborted: {e.message}")
        raise
    logger.info(f"Parsed {len(items)} playlist entries.")
    return items
