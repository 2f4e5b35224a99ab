#!/usr/bin/env python3
"""
tags.py
--------------------
Tag utilities for notes and todos.

Tags live inside note text as ``#token`` words and on their own in
``**标签:** #a #b`` attribute lines. These helpers move between the two.

Functions:
    dedupe_tags: Drop repeated tags, keeping first-seen order
    extract_tags: Collect ``#tags`` from free text (lower-cased)
    strip_tags: Remove known ``#tags`` from free text
    format_tags: Render tags as ``#a #b``
    parse_tag_tokens: Read ``#a #b`` back into a list
    matches_search: Case-insensitive search over content and tags
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import Iterable, List


TAG_PATTERN = re.compile(r"(?P<lead>[ \t]*)#(?P<tag>\w+)")


def dedupe_tags(tags: Iterable[str]) -> List[str]:
    """
    Remove duplicates and empty tags while preserving order.

    Examples:
        >>> dedupe_tags(["work", "home", "work", ""])
        ['work', 'home']
    """
    seen = set()
    result: List[str] = []
    for tag in tags:
        tag = tag.strip().lstrip("#")
        if tag and tag not in seen:
            seen.add(tag)
            result.append(tag)
    return result


def extract_tags(content: str) -> List[str]:
    """
    Collect ``#tag`` tokens from text, lower-cased and de-duplicated.

    Examples:
        >>> extract_tags("Met #Alice about #work and more #work")
        ['alice', 'work']
        >>> extract_tags("今天很开心 #心情")
        ['心情']
    """
    return dedupe_tags(m.group("tag").lower() for m in TAG_PATTERN.finditer(content))


def strip_tags(content: str, tags: Iterable[str]) -> str:
    """
    Remove the given ``#tags`` from text.

    Lines that held nothing but tags disappear; other lines keep their
    line breaks. Unknown ``#words`` are left alone. Leading and trailing
    blank lines are trimmed.

    Examples:
        >>> strip_tags("今天很开心\\n\\n#心情", ["心情"])
        '今天很开心'
        >>> strip_tags("read #book twice #later", ["book"])
        'read twice #later'
    """
    wanted = {tag.lower() for tag in tags}
    if not wanted:
        return content.strip()

    def _drop(match: re.Match) -> str:
        if match.group("tag").lower() in wanted:
            return ""
        return match.group(0)

    lines: List[str] = []
    for line in content.splitlines():
        stripped = TAG_PATTERN.sub(_drop, line)
        if stripped == line:
            lines.append(line)
            continue
        stripped = re.sub(r"[ \t]{2,}", " ", stripped).strip()
        if stripped:
            lines.append(stripped)

    return "\n".join(lines).strip()


def format_tags(tags: Iterable[str]) -> str:
    """
    Render tags as space-separated ``#tokens``.

    Examples:
        >>> format_tags(["work", "home"])
        '#work #home'
    """
    return " ".join(f"#{tag}" for tag in tags)


def parse_tag_tokens(text: str) -> List[str]:
    """
    Read a ``#a #b`` attribute value back into tags.

    Only whitespace-separated tokens starting with ``#`` count.

    Examples:
        >>> parse_tag_tokens("#心情 #work junk #work")
        ['心情', 'work']
    """
    return dedupe_tags(
        token[1:] for token in text.split() if token.startswith("#") and len(token) > 1
    )


def matches_search(content: str, tags: Iterable[str], term: str) -> bool:
    """
    Case-insensitive search over content and tags.

    An empty or blank term matches everything.

    Examples:
        >>> matches_search("Buy milk", ["errand"], "MILK")
        True
        >>> matches_search("Buy milk", ["errand"], "err")
        True
    """
    if not term.strip():
        return True
    needle = term.strip().lower()
    if needle in content.lower():
        return True
    return any(needle in tag.lower() for tag in tags)
