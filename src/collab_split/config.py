from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from normalize_pdf.contracts import ColorMode, NormalizePdfConfig
from ocr.contracts import OcrConfig


@dataclass(frozen=True, slots=True)
class SplitRunConfig:
    """
    Run-level configuration, built once by the CLI and passed explicitly.

    Stage configs are derived from it; no module reads environment variables.
    """

    root_dir: Path = Path(".")
    out_dir: Path = Path("processed")
    tmp_dir: Path = Path("tmp")
    max_workers: int = 5
    extension: str = ".pdf"
    language: str = "eng"
    psm: int | None = None
    dpi: int = 300
    color_mode: ColorMode = ColorMode.RGB
    ocr_timeout_s: float = 120.0
    queue_size: int = 1
    keep_tmp: bool = False
    show_progress: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.root_dir, Path) or not isinstance(self.out_dir, Path) or not isinstance(
            self.tmp_dir, Path
        ):
            raise TypeError("root_dir, out_dir and tmp_dir must be pathlib.Path")
        if self.max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        if self.queue_size < 1:
            raise ValueError("queue_size must be >= 1")
        if not self.extension.startswith("."):
            raise ValueError("extension must start with '.'")
        # Stage configs validate dpi, language and timeout.
        self.render_config()
        self.ocr_config()

    def render_config(self) -> NormalizePdfConfig:
        return NormalizePdfConfig(dpi=self.dpi, color_mode=self.color_mode)

    def ocr_config(self) -> OcrConfig:
        return OcrConfig(language=self.language, psm=self.psm, timeout_s=self.ocr_timeout_s)
