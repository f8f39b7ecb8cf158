"""
Page grouping: recognized text -> identifying fields -> contiguous page groups.

No OCR, rendering or file I/O happens here.
"""

from .contracts import GrouperState, PageGroup, RecognizedPage
from .identifiers import IDENTIFIER_LINE_RE, IdentifierParser, find_identifier_lines
from .page_groups import PageGrouper, group_recognized_pages

__all__ = [
    "GrouperState",
    "IDENTIFIER_LINE_RE",
    "IdentifierParser",
    "PageGroup",
    "PageGrouper",
    "RecognizedPage",
    "find_identifier_lines",
    "group_recognized_pages",
]
