from typing import List
from pydantic import BaseModel, ConfigDict


class PlaylistItemSchema(BaseModel):
    """
    Pydantic schema for a `PlaylistItem`.
    """
    model_config = ConfigDict(from_attributes=True)

    played_at: str
    artist: str
    song: str
    album: str


class PlaylistResponse(BaseModel):
    """
    Response model for a scraped playlist history, newest entry first.
    """
    station: str
    count: int
    items: List[PlaylistItemSchema]
