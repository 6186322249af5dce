"""
Helpers for wiki links and entry titles.

Wiki links use the syntax `[[entryId]]` or `[[entryId|Display Name]]`, where an entry
ID is any run of characters other than `]` and `|`.
"""

from dataclasses import dataclass
import re
from typing import List, Tuple


WIKI_LINK_PATTERN = re.compile(r'\[\[([^\]|]+)(?:\|([^\]]+))?\]\]')
TITLE_TAG_PATTERN = re.compile(r'#(\w+)')


@dataclass(frozen=True)
class LinkTrigger:
    """
    An unfinished wiki link being typed before the cursor.

    Attributes:
        search_term: Text typed after the opening `[[`
        start_pos: Position of the opening `[[`
    """
    search_term: str
    start_pos: int


def extract_entry_ids_from_content(content: str) -> List[str]:
    """
    Find the IDs of all entries linked from some markdown text.

    Args:
        content: The markdown text

    Returns:
        Unique entry IDs in the order they first appear
    """
    entry_ids: List[str] = []
    seen = set()
    for match in WIKI_LINK_PATTERN.finditer(content):
        entry_id = match.group(1).strip()
        if entry_id and entry_id not in seen:
            seen.add(entry_id)
            entry_ids.append(entry_id)

    return entry_ids


def find_link_trigger(text: str, pos: int) -> LinkTrigger | None:
    """
    Look backwards from the cursor for an opening `[[` that has not been closed.

    Args:
        text: The document text
        pos: Cursor position

    Returns:
        The link trigger, or None if the cursor is not inside an unfinished wiki link
    """
    before_cursor = text[:max(0, pos)]
    start_pos = before_cursor.rfind("[[")
    if start_pos == -1:
        return None

    after_bracket = before_cursor[start_pos:]
    if "]]" in after_bracket:
        return None

    return LinkTrigger(search_term=after_bracket[2:], start_pos=start_pos)


def extract_tags_from_title(title: str) -> Tuple[List[str], str]:
    """
    Split hashtags out of an entry title.

    Args:
        title: The entry title, e.g. "Meeting notes #work #planning"

    Returns:
        Tuple of (tags without their '#', title with the tags removed)
    """
    tags = TITLE_TAG_PATTERN.findall(title)
    cleaned_title = " ".join(TITLE_TAG_PATTERN.sub("", title).split())
    return tags, cleaned_title
