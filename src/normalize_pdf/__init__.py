"""
PDF rasterization (PDF -> per-page PNG artifacts).

This package is intentionally limited to format normalization:
- It renders PDF pages to images and encodes them to disk.
- It performs NO OCR, text extraction, layout inference, or content filtering.
"""

from .contracts import (
    ColorMode,
    NormalizeEngineName,
    NormalizePdfConfig,
    NormalizePdfError,
    RenderedPage,
)
from .module import PageExtractor, compute_doc_tmp_id, page_image_name, safe_pdf_stem

__all__ = [
    "ColorMode",
    "NormalizeEngineName",
    "NormalizePdfConfig",
    "NormalizePdfError",
    "PageExtractor",
    "RenderedPage",
    "compute_doc_tmp_id",
    "page_image_name",
    "safe_pdf_stem",
]
