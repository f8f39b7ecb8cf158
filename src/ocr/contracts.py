from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OcrEngineName(str, Enum):
    """
    OCR backends supported by this module.

    Note: The OCR module is *perception only*; the backend must not perform
    post-correction / semantic filtering within this module.
    """

    TESSERACT_CLI = "tesseract_cli"


@dataclass(frozen=True, slots=True)
class OcrError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class OcrTextResult:
    """
    Recognized text for one image.

    On failure, `ok` is False and `text` is empty. No content is fabricated to
    "fill in" missing OCR results.
    """

    ok: bool
    engine: OcrEngineName
    text: str
    errors: list[OcrError]


@dataclass(frozen=True, slots=True)
class OcrConfig:
    """
    OCR module configuration.

    One language for the whole run; `timeout_s` bounds every single call.
    """

    engine: OcrEngineName = OcrEngineName.TESSERACT_CLI
    language: str = "eng"  # engine hint only; not a semantic correction.
    psm: int | None = None  # Tesseract page segmentation mode; if None, use default.
    timeout_s: float = 120.0

    def __post_init__(self) -> None:
        if not self.language:
            raise ValueError("language must be a non-empty tesseract language code")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be positive")
