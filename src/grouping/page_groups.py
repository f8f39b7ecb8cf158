from __future__ import annotations

from pathlib import Path
from typing import Iterable

from .contracts import GrouperState, OpenGroup, PageGroup, RecognizedPage


class PageGrouper:
    """
    Folds one document's pages, in ascending order, into contiguous groups
    sharing a collaborator key.

    Per page:
    1. an empty key while KEYED inherits the held key (continuation sheet);
    2. a key different from the held one closes the open group and starts a
       fresh one for the same source file;
    3. a non-empty company overwrites `sub_path`;
    4. a non-empty key sets `key`;
    5. the page number is appended.

    `finish()` always yields the trailing group, even if it never got a key.
    """

    def __init__(self, *, source_file: Path) -> None:
        self.source_file = source_file
        self._open = OpenGroup(source_file=source_file)
        self._last_page_num = 0
        self._finished = False

    @property
    def state(self) -> GrouperState:
        return GrouperState.KEYED if self._open.key else GrouperState.EMPTY

    @property
    def current_key(self) -> str:
        return self._open.key

    def feed(self, *, page_num: int, page: RecognizedPage) -> PageGroup | None:
        """
        Consume one page; return the group it closed, if any.
        """

        if self._finished:
            raise RuntimeError("PageGrouper already finished")
        if page_num <= self._last_page_num:
            raise ValueError(
                f"pages must be fed in strictly ascending order: {page_num} after {self._last_page_num}"
            )
        self._last_page_num = page_num

        key = page.collaborator_key
        if not key and self._open.key:
            key = self._open.key

        closed: PageGroup | None = None
        if self._open.key and key != self._open.key:
            closed = self._open.freeze()
            self._open = OpenGroup(source_file=self.source_file)

        if page.company:
            self._open.sub_path = page.company
        if key:
            self._open.key = key
        self._open.pages.append(page_num)
        return closed

    def finish(self) -> PageGroup:
        if self._finished:
            raise RuntimeError("PageGrouper already finished")
        self._finished = True
        return self._open.freeze()


def group_recognized_pages(
    *, source_file: Path, pages: Iterable[tuple[int, RecognizedPage]]
) -> list[PageGroup]:
    """
    Run a whole document through a `PageGrouper` and return every group in
    emission order.
    """

    grouper = PageGrouper(source_file=source_file)
    groups: list[PageGroup] = []
    for page_num, page in pages:
        closed = grouper.feed(page_num=page_num, page=page)
        if closed is not None:
            groups.append(closed)
    groups.append(grouper.finish())
    return groups
