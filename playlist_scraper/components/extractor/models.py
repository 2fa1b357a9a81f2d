from dataclasses import dataclass, asdict
from typing import Dict

# Length of the HH:MM:SS prefix kept from the "Played At" cell.
PLAYED_AT_WIDTH = 8


@dataclass(frozen=True)
class PlaylistItem:
    """
    One playback event from a station's playlist history.

    Columns on the page: Played At, Artist, Song, Album.
    """
    played_at: str
    artist: str
    song: str
    album: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)
