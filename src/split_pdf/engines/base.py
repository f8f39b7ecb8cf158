from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class PageCollectError(Exception):
    pass


class PageCollectorEngine(ABC):
    """
    Copies an explicit list of pages of a source PDF into a new PDF file.

    Engines raise `PageCollectError` on failure; `split_pdf.writer.GroupWriter`
    converts it into a `SplitPdfError` value.
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def collect_pages(self, *, source_file: Path, out_file: Path, pages: list[int]) -> None:
        """
        `pages` are 1-indexed and written in the given order.
        """

        raise NotImplementedError
