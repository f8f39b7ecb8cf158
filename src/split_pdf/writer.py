from __future__ import annotations

import logging
import queue
from pathlib import Path

from grouping.contracts import PageGroup

from .contracts import GroupWriteResult, SplitPdfError
from .engines import PageCollectError, PageCollectorEngine, PypdfCollectorEngine

logger = logging.getLogger(__name__)

PDF_EXT = ".pdf"


def _safe_segment(value: str) -> str:
    """
    Make OCR text usable as a single path segment under the output root.
    """

    s = value.replace("/", "_").replace("\\", "_").replace("\x00", "").strip()
    if s in (".", ".."):
        return s.replace(".", "_")
    return s


def output_path_for(*, out_root: Path, group: PageGroup) -> Path:
    """
    `<out_root>/<sub_path>/<key>.pdf`.

    An empty `sub_path` puts the file directly under `out_root`; an empty key
    falls back to the source PDF's stem.
    """

    name = _safe_segment(group.key) or _safe_segment(group.source_file.name.split(".")[0]) or "document"
    sub = _safe_segment(group.sub_path)
    if sub:
        return out_root / sub / f"{name}{PDF_EXT}"
    return out_root / f"{name}{PDF_EXT}"


class GroupWriter:
    """
    The single consumer of completed page groups.

    Groups are written strictly in arrival order; a failed group is logged,
    recorded and skipped. `drain()` stops at the first `None` on the queue.
    """

    def __init__(self, *, out_root: Path, engine: PageCollectorEngine | None = None) -> None:
        self.out_root = out_root
        self._engine = engine if engine is not None else PypdfCollectorEngine()
        self.results: list[GroupWriteResult] = []
        self._written: dict[Path, Path] = {}

    @property
    def backend_id(self) -> str:
        return self._engine.backend_id()

    def write(self, group: PageGroup) -> GroupWriteResult:
        if not group.pages:
            logger.warning("Skipping group with no pages from %s", group.source_file)
            return self._record(
                GroupWriteResult(
                    ok=False,
                    source_file=group.source_file,
                    out_file=None,
                    pages=group.pages,
                    errors=[
                        SplitPdfError(
                            code="GROUP_EMPTY",
                            message="Group has no pages to write",
                            detail={"source_file": str(group.source_file), "key": group.key},
                        )
                    ],
                )
            )

        out_file = output_path_for(out_root=self.out_root, group=group)
        previous_source = self._written.get(out_file)
        if previous_source is not None:
            logger.warning(
                "Overwriting %s (previously written from %s) with pages %s of %s",
                out_file,
                previous_source,
                list(group.pages),
                group.source_file,
            )

        try:
            out_file.parent.mkdir(parents=True, exist_ok=True)
            self._engine.collect_pages(
                source_file=group.source_file, out_file=out_file, pages=list(group.pages)
            )
        except (PageCollectError, OSError) as e:
            logger.error("Failed to write %s for %s: %s", out_file, group.source_file, e)
            return self._record(
                GroupWriteResult(
                    ok=False,
                    source_file=group.source_file,
                    out_file=out_file,
                    pages=group.pages,
                    errors=[
                        SplitPdfError(
                            code="GROUP_WRITE_FAILED",
                            message="Page extraction into a new PDF failed",
                            detail={
                                "source_file": str(group.source_file),
                                "out_file": str(out_file),
                                "key": group.key,
                                "error": repr(e),
                            },
                        )
                    ],
                )
            )

        self._written[out_file] = group.source_file
        logger.debug("Wrote %s (%d page(s)) from %s", out_file, len(group.pages), group.source_file)
        return self._record(
            GroupWriteResult(
                ok=True,
                source_file=group.source_file,
                out_file=out_file,
                pages=group.pages,
                errors=[],
            )
        )

    def drain(self, groups: queue.Queue[PageGroup | None]) -> None:
        while True:
            group = groups.get()
            try:
                if group is None:
                    return
                try:
                    self.write(group)
                except Exception as e:
                    # Producers block on a full queue; the consumer must keep draining.
                    logger.exception("Unexpected error writing group from %s", group.source_file)
                    self._record(
                        GroupWriteResult(
                            ok=False,
                            source_file=group.source_file,
                            out_file=None,
                            pages=group.pages,
                            errors=[
                                SplitPdfError(
                                    code="GROUP_WRITE_FAILED",
                                    message="Unexpected error while writing group",
                                    detail={"source_file": str(group.source_file), "error": repr(e)},
                                )
                            ],
                        )
                    )
            finally:
                groups.task_done()

    def _record(self, result: GroupWriteResult) -> GroupWriteResult:
        self.results.append(result)
        return result
