"""
OCR stage (perception only).

- Input: one rendered page image
- Output: the literal recognized text
- Constraints: no correction, no inference; calls are serialized through the
  shared `TextRecognizer`
"""

from .contracts import OcrConfig, OcrEngineName, OcrError, OcrTextResult
from .module import TextRecognizer

__all__ = [
    "OcrConfig",
    "OcrEngineName",
    "OcrError",
    "OcrTextResult",
    "TextRecognizer",
]
