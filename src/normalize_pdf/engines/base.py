from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from PIL import Image

from ..contracts import ColorMode


class RasterDocument(ABC):
    """
    An opened PDF that can report its page count and render pages.

    Page numbers are 1-indexed at this interface.
    """

    @property
    @abstractmethod
    def page_count(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def render_page(self, *, page_num: int, dpi: int, color_mode: ColorMode) -> Image.Image:
        raise NotImplementedError

    def close(self) -> None:
        return None

    def __enter__(self) -> RasterDocument:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class PdfRasterEngine(ABC):
    """
    Rendering engine abstraction.

    Engines must:
    - Render PDF pages to in-memory bitmaps (encoding to disk is the caller's job)
    - Perform NO OCR, text extraction, layout inference, or filtering
    """

    @abstractmethod
    def backend_id(self) -> str:
        raise NotImplementedError

    def backend_version(self) -> str | None:
        return None

    @abstractmethod
    def open_document(self, *, pdf_file: Path) -> RasterDocument:
        raise NotImplementedError
