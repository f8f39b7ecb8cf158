from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from ..contracts import OcrConfig, OcrTextResult


class OcrEngine(ABC):
    """
    Interface for OCR perception engines.

    IMPORTANT:
    - Engines must return the literal recognized text.
    - Engines must NOT apply semantic correction/guessing/normalization.
    - Engines are not assumed to be safe for concurrent calls; callers
      serialize access (see `ocr.module.TextRecognizer`).
    """

    @abstractmethod
    def recognize_image_file(self, *, config: OcrConfig, image_file: Path) -> OcrTextResult:
        raise NotImplementedError

    def close(self) -> None:
        return None
