"""HTML character-entity decoding for fetched markup and extracted cell text."""
import html
from typing import Optional


def decode_entities(text: Optional[str]) -> str:
    """
    Converts HTML character references (``&amp;``, ``&nbsp;``, ``&#39;``...) to
    their literal characters. `None` decodes to an empty string.

    Text without a ``&`` comes back unchanged, so decoding an already decoded
    field is a no-op unless the literal text itself reads like a reference.
    Follows `html.unescape`, which also accepts the legacy HTML named references
    without a trailing semicolon: "R&B &copy Mix" decodes to "R&B © Mix".
    """
    if not text:
        return ""
    if "&" not in text:
        return text
    return html.unescape(text)
