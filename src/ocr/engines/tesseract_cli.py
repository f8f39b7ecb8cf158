from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Any

from ..contracts import OcrConfig, OcrEngineName, OcrError, OcrTextResult
from .base import OcrEngine


class TesseractCliEngine(OcrEngine):
    """
    Tesseract OCR via the `tesseract` CLI, plain-text output on stdout.

    This engine performs no correction and no semantic filtering.
    """

    def _failure(self, *, code: str, message: str, detail: dict[str, Any]) -> OcrTextResult:
        return OcrTextResult(
            ok=False,
            engine=OcrEngineName.TESSERACT_CLI,
            text="",
            errors=[OcrError(code=code, message=message, detail=detail)],
        )

    def recognize_image_file(self, *, config: OcrConfig, image_file: Path) -> OcrTextResult:
        if not image_file.exists():
            return self._failure(
                code="OCR_INPUT_NOT_FOUND",
                message="Input image file not found",
                detail={"image_file": str(image_file)},
            )

        cmd = [
            "tesseract",
            str(image_file),
            "stdout",
            "-l",
            config.language,
        ]

        if config.psm is not None:
            cmd.extend(["--psm", str(config.psm)])

        try:
            proc = subprocess.run(
                cmd,
                check=False,
                capture_output=True,
                text=True,
                timeout=config.timeout_s,
            )
        except FileNotFoundError:
            return self._failure(
                code="OCR_BACKEND_NOT_INSTALLED",
                message="tesseract binary not found on PATH",
                detail={"expected_command": "tesseract"},
            )
        except subprocess.TimeoutExpired:
            return self._failure(
                code="OCR_TIMEOUT",
                message="OCR backend timed out",
                detail={"timeout_s": config.timeout_s, "image_file": str(image_file)},
            )

        if proc.returncode != 0:
            return self._failure(
                code="OCR_BACKEND_ERROR",
                message="OCR backend returned a non-zero exit code",
                detail={
                    "returncode": proc.returncode,
                    "stderr": proc.stderr[-4000:],
                    "image_file": str(image_file),
                },
            )

        return OcrTextResult(
            ok=True,
            engine=OcrEngineName.TESSERACT_CLI,
            text=proc.stdout,
            errors=[],
        )
