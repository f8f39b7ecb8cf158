from .base import PageCollectError, PageCollectorEngine
from .pypdf_engine import PypdfCollectorEngine

__all__ = ["PageCollectError", "PageCollectorEngine", "PypdfCollectorEngine"]
