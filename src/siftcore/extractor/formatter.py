"""
Text formatting and normalisation for extracted content.

Turns a DOM subtree into paragraph-structured plain text:
- Paragraph breaks around headings and paragraphs
- Line breaks around other block elements
- Bullet prefixes for list items
- Repair of UTF-8 text that was decoded as Latin-1/Windows-1252
- Removal of control, replacement and zero-width characters
"""

from __future__ import annotations

import copy
import re
from typing import Dict

from bs4 import Comment, NavigableString, Tag

PARAGRAPH_TAGS = ("h1", "h2", "h3", "h4", "h5", "h6", "p")
LINE_TAGS = ("div", "blockquote", "pre", "ul", "ol", "dl")
ITEM_TAGS = ("li", "tr")
CELL_TAGS = ("td", "th")
DROPPED_TAGS = ("script", "style", "noscript", "template")
BULLET = "• "

# Longer sequences first so that prefixes are not consumed early
MOJIBAKE_REPAIRS: Dict[str, str] = {
    "â€™": "'",
    "â€˜": "'",
    "â€œ": '"',
    "â€\x9d": '"',
    "â€\ufffd": '"',
    "â€”": "—",
    "â€“": "–",
    "â€¦": "...",
    "â€¢": "•",
    "Â\xa0": " ",
    "Â ": " ",
    "Ã©": "é",
    "Ã¨": "è",
    "Ã\xa0": "à",
    "Ã¢": "â",
    "Ã®": "î",
    "Ã´": "ô",
    "Ã§": "ç",
    "Ã¼": "ü",
    "Ã¶": "ö",
    "Ã¤": "ä",
}

MOJIBAKE_PATTERN = re.compile("|".join(re.escape(key) for key in sorted(MOJIBAKE_REPAIRS, key=len, reverse=True)))

# C0 controls except tab and newline, DEL, and C1 controls
CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b-\x1f\x7f-\x9f]")
INVISIBLE_CHARS_PATTERN = re.compile(r"[\ufffd\ufeff\u200b-\u200d\u2060]")
INLINE_WHITESPACE_PATTERN = re.compile(r"[^\S\n]+")
LINE_EDGE_SPACES_PATTERN = re.compile(r" *\n *")
EXCESS_NEWLINES_PATTERN = re.compile(r"\n{3,}")
SOURCE_WHITESPACE_PATTERN = re.compile(r"\s+")


def repair_mojibake(text: str) -> str:
    """Replace known UTF-8-as-Latin-1 sequences with the intended characters."""
    return MOJIBAKE_PATTERN.sub(lambda match: MOJIBAKE_REPAIRS[match.group(0)], text)


def normalize_text(text: str) -> str:
    """
    Normalise flattened text.

    The result contains no control characters besides newlines, no Unicode
    replacement, BOM or zero-width characters, single spaces within lines,
    at most one blank line between blocks, and no leading or trailing
    blank lines.
    """
    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\t", " ")
    text = repair_mojibake(text)
    text = CONTROL_CHARS_PATTERN.sub("", text)
    text = INVISIBLE_CHARS_PATTERN.sub("", text)
    text = INLINE_WHITESPACE_PATTERN.sub(" ", text)
    text = LINE_EDGE_SPACES_PATTERN.sub("\n", text)
    text = EXCESS_NEWLINES_PATTERN.sub("\n\n", text)
    return text.strip()


class TextFormatter:
    """
    Linearises a DOM subtree into clean, paragraph-structured text.

    The subtree is cloned first; the caller's tree is never modified.
    """

    def format_text(self, element: Tag) -> str:
        """Format an element's content as normalised plain text."""
        clone = copy.copy(element)

        for dropped in clone.find_all(list(DROPPED_TAGS)):
            if not dropped.decomposed:
                dropped.decompose()
        for comment in clone.find_all(string=lambda s: isinstance(s, Comment)):
            comment.extract()

        self._collapse_source_whitespace(clone)
        self._insert_breaks(clone)

        return normalize_text(clone.get_text())

    @staticmethod
    def _collapse_source_whitespace(root: Tag) -> None:
        # Only inserted breaks should produce newlines, except inside <pre>
        for string in list(root.find_all(string=True)):
            if type(string) is not NavigableString:
                continue
            if string.find_parent("pre") is not None:
                continue
            collapsed = SOURCE_WHITESPACE_PATTERN.sub(" ", str(string))
            if collapsed != string:
                string.replace_with(collapsed)

    @staticmethod
    def _insert_breaks(root: Tag) -> None:
        # A detached clone has no parent to insert siblings into
        for tag in root.find_all(list(PARAGRAPH_TAGS)):
            tag.insert(0, "\n\n")
            tag.append("\n\n")

        for tag in root.find_all(list(LINE_TAGS)):
            tag.insert(0, "\n")
            tag.append("\n")

        # Consecutive items and rows stay on adjacent lines
        for tag in root.find_all(list(ITEM_TAGS)):
            if tag.name == "li":
                tag.insert(0, BULLET)
            tag.insert(0, "\n")

        for tag in root.find_all(list(CELL_TAGS)):
            tag.append(" ")

        for tag in root.find_all("br"):
            tag.replace_with("\n")
