"""Docs Proxy — RSS status feed parsing."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from app.core.errors import FeedEmptyError, FeedMalformedError

# Entries live at rss > channel > item > title
TITLE_PATH = "channel/item/title"


def item_titles(document: bytes | str) -> list[str]:
    """Return the title of every feed item, in document order.

    Items without a ``<title>`` contribute nothing. Whitespace ahead of the
    XML declaration is ignored, everything else must be well formed.

    Raises:
        FeedMalformedError: the document is not parseable XML.
    """
    try:
        root = ET.fromstring(document.lstrip())
    except ET.ParseError as exc:
        raise FeedMalformedError(str(exc)) from exc

    return ["".join(title.itertext()) for title in root.iterfind(TITLE_PATH)]


def latest_item(document: bytes | str) -> str:
    """Return the title of the most recent (first) item of a status feed.

    Raises:
        FeedMalformedError: the document is not parseable XML.
        FeedEmptyError: the feed holds no titled items.
    """
    titles = item_titles(document)
    if not titles:
        raise FeedEmptyError()
    return titles[0]
