from __future__ import annotations

import os
from pathlib import Path

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from .base import PageCollectError, PageCollectorEngine


class PypdfCollectorEngine(PageCollectorEngine):
    def backend_id(self) -> str:
        return "pypdf"

    def collect_pages(self, *, source_file: Path, out_file: Path, pages: list[int]) -> None:
        # Written beside the target and renamed into place; a failed write
        # never leaves a truncated PDF at `out_file`.
        part_file = out_file.with_name(f".{out_file.name}.part")
        try:
            reader = PdfReader(str(source_file))
            page_count = len(reader.pages)

            writer = PdfWriter()
            for page_num in pages:
                if page_num < 1 or page_num > page_count:
                    raise PageCollectError(f"Page out of range: {page_num} (1..{page_count})")
                writer.add_page(reader.pages[page_num - 1])

            with open(part_file, "wb") as f:
                writer.write(f)
            os.replace(part_file, out_file)
        except (PyPdfError, OSError, ValueError) as e:
            part_file.unlink(missing_ok=True)
            raise PageCollectError(f"{type(e).__name__}: {e}") from e
