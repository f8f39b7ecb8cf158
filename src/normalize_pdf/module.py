from __future__ import annotations

import hashlib
import re
from pathlib import Path

from .contracts import NormalizeEngineName, NormalizePdfConfig, NormalizePdfError, RenderedPage
from .engines import PdfRasterEngine, Pypdfium2Engine, RasterDocument


def safe_pdf_stem(pdf_file: Path | str) -> str:
    """
    Deterministic, filesystem-safe stem for readability.
    """
    s = str(pdf_file).replace("\\", "/").split("/")[-1]
    if s.lower().endswith(".pdf"):
        s = s[: -len(".pdf")]
    s = re.sub(r"[^A-Za-z0-9._-]+", "_", s)
    s = re.sub(r"_+", "_", s).strip("_")
    return s or "pdf"


def page_image_name(*, pdf_file: Path, page_num: int) -> str:
    """
    Name of the PNG artifact for one page: `<stem>_<page_num>.png`, where the
    stem is the base name up to its first dot.
    """

    stem = pdf_file.name.split(".")[0]
    return f"{stem}_{page_num}.png"


def compute_doc_tmp_id(*, pdf_file: Path) -> str:
    """
    Deterministic per-document directory name, stable for identical source paths.

    Two PDFs sharing a stem in different folders get different ids.
    """

    source = pdf_file.expanduser().resolve().as_posix()
    digest = hashlib.sha256(source.encode("utf-8")).hexdigest()
    return f"{safe_pdf_stem(pdf_file)}_{digest[:12]}"


def _get_engine(engine: NormalizeEngineName) -> PdfRasterEngine:
    if engine == NormalizeEngineName.PYPDFIUM2:
        return Pypdfium2Engine()
    raise ValueError(f"Unsupported normalization engine: {engine}")


class PageExtractor:
    """
    Opens PDFs and materializes single pages as PNG files.

    Backend exceptions never escape: they come back as `NormalizePdfError`
    values so callers can decide whether a failure is per-page or per-document.
    """

    def __init__(self, *, config: NormalizePdfConfig, engine: PdfRasterEngine | None = None) -> None:
        self.config = config
        self._engine = engine if engine is not None else _get_engine(config.engine)

    @property
    def backend_id(self) -> str:
        return self._engine.backend_id()

    @property
    def backend_version(self) -> str | None:
        return self._engine.backend_version()

    def open_document(self, *, pdf_file: Path) -> tuple[RasterDocument | None, NormalizePdfError | None]:
        try:
            return self._engine.open_document(pdf_file=pdf_file), None
        except (RuntimeError, OSError, ValueError) as e:
            # pypdfium2.PdfiumError is a RuntimeError subclass.
            return (
                None,
                NormalizePdfError(
                    code="PDF_OPEN_FAILED",
                    message="Failed to open PDF for rendering",
                    detail={"pdf_file": str(pdf_file), "error": repr(e)},
                ),
            )

    def render_page_to_file(
        self, *, document: RasterDocument, page_num: int, out_file: Path
    ) -> tuple[RenderedPage | None, NormalizePdfError | None]:
        try:
            image = document.render_page(
                page_num=page_num, dpi=self.config.dpi, color_mode=self.config.color_mode
            )
        except (RuntimeError, OSError, ValueError) as e:
            return (
                None,
                NormalizePdfError(
                    code="PAGE_RENDER_FAILED",
                    message="PDF page rendering failed",
                    detail={"page_num": page_num, "error": repr(e)},
                ),
            )

        try:
            out_file.parent.mkdir(parents=True, exist_ok=True)
            image.save(out_file, format="PNG")
        except (OSError, ValueError) as e:
            return (
                None,
                NormalizePdfError(
                    code="PAGE_ENCODE_FAILED",
                    message="Failed to encode page image as PNG",
                    detail={"page_num": page_num, "image_file": str(out_file), "error": repr(e)},
                ),
            )

        width_px, height_px = image.size
        return (
            RenderedPage(
                page_num=page_num,
                image_file=out_file,
                width_px=int(width_px),
                height_px=int(height_px),
            ),
            None,
        )
