from __future__ import annotations

import re

from .contracts import RecognizedPage

# A registration number (company id `12.345.678/0001-90` or personal id
# `123.456.789-00`) followed by free text on the same line. The personal id
# shape accepts any separator character, which tolerates OCR misreads of dots.
# Digits and whitespace are ASCII only.
IDENTIFIER_LINE_RE = re.compile(
    r"(\d{2}\.\d{3}\.\d{3}/\d{4}-\d{2}|\d{3}.\d{3}.\d{3}-\d{2})\s*(.+)",
    re.ASCII,
)


def find_identifier_lines(text: str, pattern: re.Pattern[str] = IDENTIFIER_LINE_RE) -> list[str]:
    """
    All non-overlapping identifier-line matches, in text order.
    """

    return [m.group(0) for m in pattern.finditer(text)]


def field_from_identifier_line(line: str) -> str:
    """
    Strip the leading token from a matched line and return the remainder.

    Quirk kept on purpose: when the match has no space, or nothing but
    whitespace follows the first space, the text before the space is returned
    (for a match without spaces that is the whole match, token included).
    """

    head, sep, rest = line.partition(" ")
    if sep and rest.strip():
        return rest.strip()
    return head


class IdentifierParser:
    """
    Recovers `(company, collaborator_key)` from recognized page text.

    The first identifier line is the company, the second the collaborator;
    later ones are ignored. With fewer than two lines both fields are empty,
    which is the normal case for continuation pages.
    """

    def __init__(self, pattern: re.Pattern[str] = IDENTIFIER_LINE_RE) -> None:
        self._pattern = pattern

    def parse(self, text: str) -> RecognizedPage:
        lines = find_identifier_lines(text, self._pattern)
        if len(lines) < 2:
            return RecognizedPage()
        return RecognizedPage(
            company=field_from_identifier_line(lines[0]),
            collaborator_key=field_from_identifier_line(lines[1]),
        )
