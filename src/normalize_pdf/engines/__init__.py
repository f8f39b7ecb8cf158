from .base import PdfRasterEngine, RasterDocument
from .pypdfium2_engine import Pypdfium2Document, Pypdfium2Engine

__all__ = ["PdfRasterEngine", "Pypdfium2Document", "Pypdfium2Engine", "RasterDocument"]
