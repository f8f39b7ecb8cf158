"""
Re-split scanned PDFs into one file per collaborator.

Pipeline: discover PDFs -> bounded pool of document workers (render, OCR,
parse, group) -> single group writer.
"""

from .config import SplitRunConfig
from .contracts import DocumentRunResult, PipelineError, RunSummary
from .driver import DiscoveryError, discover_documents, run_split
from .worker import DocumentWorker

__all__ = [
    "DiscoveryError",
    "DocumentRunResult",
    "DocumentWorker",
    "PipelineError",
    "RunSummary",
    "SplitRunConfig",
    "discover_documents",
    "run_split",
]
