import os

import pytest

FIXTURES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "fixtures")


def load_fixture(name: str) -> str:
    with open(os.path.join(FIXTURES_DIR, name), "r", encoding="utf-8") as f:
        return f.read()


@pytest.fixture
def playlist_markup() -> str:
    """Recorded inner HTML of the #playinc container, entities still escaped."""
    return load_fixture("songhistory_playinc.html")
