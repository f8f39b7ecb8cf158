from __future__ import annotations

import threading
from pathlib import Path

from PIL import Image

from ..contracts import ColorMode
from .base import PdfRasterEngine, RasterDocument

# pdfium is not thread-safe, not even across distinct documents.
_PDFIUM_LOCK = threading.Lock()


def _require_pdfium():
    try:
        import pypdfium2 as pdfium  # type: ignore

        return pdfium
    except ImportError as e:
        raise RuntimeError("Missing dependency: pypdfium2 is required for PDF rendering.") from e


class Pypdfium2Document(RasterDocument):
    def __init__(self, doc) -> None:
        self._doc = doc
        with _PDFIUM_LOCK:
            self._page_count = len(doc)

    @property
    def page_count(self) -> int:
        return self._page_count

    def render_page(self, *, page_num: int, dpi: int, color_mode: ColorMode) -> Image.Image:
        if page_num < 1 or page_num > self._page_count:
            raise ValueError(f"Page out of range: {page_num} (1..{self._page_count})")

        scale = dpi / 72.0  # PDF points are 1/72 inch

        with _PDFIUM_LOCK:
            page = self._doc[page_num - 1]
            try:
                bitmap = page.render(scale=scale)
                try:
                    # convert() copies out of the pdfium-owned buffer.
                    pil_img = bitmap.to_pil()
                    if color_mode == ColorMode.GRAY:
                        return pil_img.convert("L")
                    return pil_img.convert("RGB")
                finally:
                    bitmap.close()
            finally:
                page.close()

    def close(self) -> None:
        with _PDFIUM_LOCK:
            self._doc.close()


class Pypdfium2Engine(PdfRasterEngine):
    def backend_id(self) -> str:
        return "pypdfium2"

    def backend_version(self) -> str | None:
        try:
            pdfium = _require_pdfium()
        except RuntimeError:
            return None
        return getattr(pdfium, "__version__", None)

    def open_document(self, *, pdf_file: Path) -> RasterDocument:
        pdfium = _require_pdfium()
        with _PDFIUM_LOCK:
            doc = pdfium.PdfDocument(str(pdf_file))
        return Pypdfium2Document(doc)
