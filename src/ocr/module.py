from __future__ import annotations

import logging
import threading
from pathlib import Path

from .contracts import OcrConfig, OcrEngineName, OcrError, OcrTextResult
from .engines.base import OcrEngine
from .engines.tesseract_cli import TesseractCliEngine

logger = logging.getLogger(__name__)


def _get_engine(engine: OcrEngineName) -> OcrEngine:
    if engine == OcrEngineName.TESSERACT_CLI:
        return TesseractCliEngine()
    raise ValueError(f"Unsupported OCR engine: {engine}")


class TextRecognizer:
    """
    The single OCR handle shared by every document worker.

    All calls are serialized through one lock, giving a total order over OCR
    invocations process-wide. Rendering and file I/O happen outside of it.
    """

    def __init__(self, *, config: OcrConfig, engine: OcrEngine | None = None) -> None:
        self.config = config
        self._engine = engine if engine is not None else _get_engine(config.engine)
        self._lock = threading.Lock()
        self._closed = False

    def recognize_image_file(self, *, image_file: Path) -> OcrTextResult:
        if image_file.suffix.lower() == ".pdf":
            return OcrTextResult(
                ok=False,
                engine=self.config.engine,
                text="",
                errors=[
                    OcrError(
                        code="OCR_INPUT_IS_PDF",
                        message="OCR rejects PDF inputs; PDFs must be rendered to images first.",
                        detail={"image_file": str(image_file)},
                    )
                ],
            )

        with self._lock:
            if self._closed:
                return OcrTextResult(
                    ok=False,
                    engine=self.config.engine,
                    text="",
                    errors=[OcrError(code="OCR_ENGINE_CLOSED", message="OCR engine already released")],
                )
            logger.debug("OCR %s", image_file)
            return self._engine.recognize_image_file(config=self.config, image_file=image_file)

    def close(self) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._engine.close()
