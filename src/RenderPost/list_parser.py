from __future__ import annotations

import re
from typing import List, Optional, Sequence, Tuple

from .inline_parser import parse_inline
from .model import ListBlock, ListItem

ORDERED_ITEM_RE = re.compile(r"^( *)([^\s.]+)\.\s+(.*)$")
UNORDERED_ITEM_RE = re.compile(r"^( *)[-*]\s+(.*)$")
INDENT_WIDTH = 4


def match_list_item(line: str) -> Optional[Tuple[bool, ListItem]]:
    """Return ``(ordered, item)`` when ``line`` is a list item, else ``None``.

    The item content is inline-formatted right away.
    """
    match = ORDERED_ITEM_RE.match(line)
    if match:
        return True, _make_item(match.group(1), match.group(3))
    match = UNORDERED_ITEM_RE.match(line)
    if match:
        return False, _make_item(match.group(1), match.group(2))
    return None


def consume_list(lines: Sequence[str], start: int) -> Tuple[Optional[ListBlock], int]:
    """Collect consecutive item lines beginning at ``lines[start]``.

    Items of either marker kind continue the list; ``ordered`` comes from the
    first item. Returns the block and the index of the first unconsumed line.
    """
    items: List[ListItem] = []
    ordered: Optional[bool] = None
    i = start
    while i < len(lines):
        matched = match_list_item(lines[i])
        if matched is None:
            break
        kind, item = matched
        if ordered is None:
            ordered = kind
        items.append(item)
        i += 1
    if ordered is None:
        return None, start
    return ListBlock(ordered=ordered, items=items), i


def _make_item(indent: str, content: str) -> ListItem:
    return ListItem(level=len(indent) // INDENT_WIDTH, content=parse_inline(content))
