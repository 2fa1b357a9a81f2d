import pytest
from unittest.mock import MagicMock, patch
from bs4 import BeautifulSoup

from playlist_scraper.components.extractor.entities import decode_entities
from playlist_scraper.components.extractor.models import PlaylistItem
from playlist_scraper.components.extractor.table_scraper import (
    RowKind,
    classify_row,
    extract_item,
    extract_link_text,
    iter_rows,
    parse_playlist,
)
from playlist_scraper.core.exceptions import (
    MalformedFragmentError,
    MissingBodyError,
    MissingHyperlinkError,
    MissingTableError,
    ParseError,
)

# Mock the logger used in table_scraper to keep test output quiet
@pytest.fixture(autouse=True)
def mock_table_scraper_logger():
    with patch('playlist_scraper.components.extractor.table_scraper.logger', MagicMock()) as mock_log:
        yield mock_log


HEADER_ROW = (
    '<tr><td class="boldblue">Played At</td><td class="boldblue">Artist</td>'
    '<td class="boldblue">Song</td><td class="boldblue">Album</td><td class="boldblue"></td></tr>'
)
SPACER_ROW = '<tr><td colspan="5"><img src="/img3/red.gif" height="1" width="100%" alt=""></td></tr>'
BREAK_ROW = '<tr><td>14:12:02</td><td colspan="4"><span class="dim">Break / Station ID</span></td></tr>'


def data_row(played_at="14:17:01", artist="Hazy J", song="Our Way", album="Cafe del Mar, Vol. 19"):
    return (
        f'<tr><td>{played_at}</td>'
        f'<td><a target="_blank" href="/buy/multibuy.cgi?mode=amazon" title="Search Amazon for {artist}">{artist}</a></td>'
        f'<td>{song}</td>'
        f'<td><a target="_blank" href="/buy/multibuy.cgi?mode=amazon" title="Search Amazon for {album}">{album}</a></td>'
        f'<td></td></tr>'
    )


def playlist_table(*rows):
    return '<table width="100%" border="0"><tbody>' + HEADER_ROW + SPACER_ROW + "".join(rows) + SPACER_ROW + '</tbody></table>'


def cells_of(row_markup):
    row = BeautifulSoup(f"<table><tbody>{row_markup}</tbody></table>", "html.parser").find("tr")
    return row.find_all(["td", "th"], recursive=False)


# --- classify_row ---

def test_classify_row_header_and_separator_by_position():
    five_cells = cells_of(data_row())
    assert classify_row(0, five_cells) is RowKind.HEADER
    assert classify_row(1, five_cells) is RowKind.SEPARATOR


def test_classify_row_short_rows_are_breaks():
    assert classify_row(2, cells_of(BREAK_ROW)) is RowKind.BREAK
    assert classify_row(25, cells_of(SPACER_ROW)) is RowKind.BREAK
    assert classify_row(3, []) is RowKind.BREAK


def test_classify_row_data():
    assert classify_row(2, cells_of(data_row())) is RowKind.DATA


# --- extract_link_text / extract_item ---

def test_extract_link_text_returns_decoded_link_text():
    cell = cells_of(data_row(artist="Welder &amp; Seed"))[1]
    assert extract_link_text(cell, row_index=2, column="artist") == "Welder & Seed"


def test_extract_link_text_missing_link_raises_row_error():
    cell = cells_of('<tr><td>Plain artist</td></tr>')[0]
    with pytest.raises(MissingHyperlinkError) as excinfo:
        extract_link_text(cell, row_index=7, column="artist")
    assert excinfo.value.row_index == 7
    assert excinfo.value.column == "artist"
    assert "Row 7" in str(excinfo.value)


def test_extract_item_truncates_played_at_with_now_marker():
    cells = cells_of(data_row(played_at="14:21:19&nbsp; (Now) ", artist="Welder &amp; Seed",
                              song="Last Place To Hide", album="Chime"))
    item = extract_item(2, cells)
    assert item == PlaylistItem(played_at="14:21:19", artist="Welder & Seed", song="Last Place To Hide", album="Chime")
    assert len(item.played_at) == 8


def test_extract_item_played_at_ignores_leading_whitespace():
    cells = cells_of(data_row(played_at="\n   14:21:19&nbsp; (Now) "))
    assert extract_item(2, cells).played_at == "14:21:19"


def test_extract_item_song_is_plain_text():
    cells = cells_of(data_row(song="Forever Broke (Fila Brazillia Remix)"))
    assert extract_item(2, cells).song == "Forever Broke (Fila Brazillia Remix)"


# --- parse_playlist ---

def test_parse_playlist_recorded_fragment(playlist_markup):
    items = parse_playlist(playlist_markup)

    assert len(items) == 20
    assert items[0] == PlaylistItem(played_at="14:21:19", artist="Welder & Seed", song="Last Place To Hide", album="Chime")
    assert items[-1] == PlaylistItem(played_at="12:45:03", artist="Bonobo", song="Kiara", album="Black Sands")
    assert all(len(item.played_at) == 8 for item in items)
    assert all(item.artist and item.song and item.album for item in items)


def test_parse_playlist_skips_consecutive_breaks(playlist_markup):
    items = parse_playlist(playlist_markup)
    times = [item.played_at for item in items]

    # The break rows at 13:14:58 and 13:14:36 sit between these two entries.
    assert "13:14:58" not in times and "13:14:36" not in times
    index = times.index("13:15:01")
    assert times[index + 1] == "13:08:29"
    assert items[index + 1].artist == "Liquid Stranger"


def test_parse_playlist_preserves_page_order(playlist_markup):
    times = [item.played_at for item in parse_playlist(playlist_markup)]
    assert times == sorted(times, reverse=True)


def test_parse_playlist_decodes_entities_in_fields(playlist_markup):
    by_artist = {item.artist: item for item in parse_playlist(playlist_markup)}
    assert by_artist["Kruder & Dorfmeister"].album == "The K&D Sessions"
    assert by_artist["Sofa Lofa"].album == 'Bathesphere recordings 7"'


def test_parse_playlist_accepts_pre_decoded_markup(playlist_markup):
    assert parse_playlist(decode_entities(playlist_markup)) == parse_playlist(playlist_markup)


def test_parse_playlist_header_and_spacers_only():
    assert parse_playlist(playlist_table()) == []


def test_parse_playlist_rows_before_index_two_never_yield_records():
    # Data-shaped rows in the header and separator positions are still skipped.
    markup = '<table><tbody>' + data_row(played_at="09:00:00") + data_row(played_at="09:00:01") + data_row(played_at="09:00:02") + '</tbody></table>'
    items = parse_playlist(markup)
    assert [item.played_at for item in items] == ["09:00:02"]


def test_parse_playlist_missing_artist_link_fails_whole_parse():
    bad_row = '<tr><td>14:07:32</td><td>Alex Cortiz</td><td>Glamourgirl</td><td><a href="#">Magnifico!</a></td><td></td></tr>'
    markup = playlist_table(data_row(), bad_row, data_row(played_at="14:02:23"))

    with pytest.raises(MissingHyperlinkError) as excinfo:
        parse_playlist(markup)
    assert excinfo.value.row_index == 3
    assert excinfo.value.column == "artist"


def test_parse_playlist_missing_album_link():
    bad_row = '<tr><td>14:07:32</td><td><a href="#">Alex Cortiz</a></td><td>Glamourgirl</td><td>Magnifico!</td><td></td></tr>'
    with pytest.raises(MissingHyperlinkError) as excinfo:
        parse_playlist(playlist_table(bad_row))
    assert excinfo.value.row_index == 2
    assert excinfo.value.column == "album"


def test_parse_playlist_missing_table():
    with pytest.raises(MissingTableError) as excinfo:
        parse_playlist('<div id="playinc"><p>Loading...</p></div>')
    assert isinstance(excinfo.value, ParseError)


def test_parse_playlist_missing_body():
    with pytest.raises(MissingBodyError):
        parse_playlist('<table><tr><td>Played At</td></tr></table>')


@pytest.mark.parametrize("markup", [None, 42, b"<table></table>"])
def test_parse_playlist_rejects_non_string_markup(markup):
    with pytest.raises(MalformedFragmentError):
        parse_playlist(markup)


def test_iter_rows_classifies_recorded_fragment(playlist_markup):
    kinds = [row.kind for row in iter_rows(playlist_markup)]
    assert kinds[0] is RowKind.HEADER
    assert kinds[1] is RowKind.SEPARATOR
    assert kinds[-1] is RowKind.BREAK
    assert kinds.count(RowKind.DATA) == 20
    assert kinds.count(RowKind.BREAK) == 3
