"""
PDF splitting: one output PDF per closed page group.
"""

from .contracts import GroupWriteResult, SplitPdfError
from .writer import GroupWriter, output_path_for

__all__ = ["GroupWriteResult", "GroupWriter", "SplitPdfError", "output_path_for"]
