from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class ColorMode(str, Enum):
    RGB = "rgb"
    GRAY = "gray"


class NormalizeEngineName(str, Enum):
    """
    Rendering backend identifiers.
    """

    PYPDFIUM2 = "pypdfium2"


@dataclass(frozen=True, slots=True)
class NormalizePdfError:
    code: str
    message: str
    detail: dict[str, Any] | None = None


@dataclass(frozen=True, slots=True)
class RenderedPage:
    page_num: int  # 1-indexed
    image_file: Path  # materialized PNG artifact
    width_px: int
    height_px: int


@dataclass(frozen=True, slots=True)
class NormalizePdfConfig:
    """
    Rasterization configuration.

    The rendering stage never decides where artifacts live: callers pass the
    output file for every page explicitly.
    """

    engine: NormalizeEngineName = NormalizeEngineName.PYPDFIUM2
    dpi: int = 300
    color_mode: ColorMode = ColorMode.RGB

    def __post_init__(self) -> None:
        if self.dpi <= 0:
            raise ValueError("dpi must be a positive integer")
