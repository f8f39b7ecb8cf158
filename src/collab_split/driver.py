from __future__ import annotations

import logging
import os
import queue
import shutil
import tempfile
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Iterable

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm

from grouping.contracts import PageGroup
from normalize_pdf.module import PageExtractor
from ocr.module import TextRecognizer
from split_pdf.writer import GroupWriter

from .config import SplitRunConfig
from .contracts import DocumentRunResult, PipelineError, RunSummary
from .worker import DocumentWorker

logger = logging.getLogger(__name__)


class DiscoveryError(Exception):
    """
    The root directory itself cannot be enumerated; the only fatal condition.
    """


def discover_documents(
    *, root_dir: Path, extension: str = ".pdf", exclude: Iterable[Path] = ()
) -> tuple[list[Path], list[PipelineError]]:
    """
    Recursively list files under `root_dir` whose suffix matches `extension`
    (case-insensitive), sorted, skipping the `exclude` directories.

    Unreadable sub-paths are logged and skipped.
    """

    if not root_dir.exists():
        raise DiscoveryError(f"Root directory not found: {root_dir}")
    if not root_dir.is_dir():
        raise DiscoveryError(f"Root path is not a directory: {root_dir}")
    try:
        with os.scandir(root_dir):
            pass
    except OSError as e:
        raise DiscoveryError(f"Cannot list root directory {root_dir}: {e}") from e

    ext = extension.lower()
    excluded = {p.expanduser().resolve() for p in exclude}
    errors: list[PipelineError] = []

    def _onerror(err: OSError) -> None:
        logger.warning("Cannot access %s: %s", err.filename, err.strerror)
        errors.append(
            PipelineError(
                code="DISCOVERY_UNREADABLE_PATH",
                message="Path could not be listed during discovery",
                detail={"path": str(err.filename), "error": repr(err)},
            )
        )

    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root_dir, onerror=_onerror):
        current = Path(dirpath)
        dirnames[:] = sorted(d for d in dirnames if (current / d).resolve() not in excluded)
        for name in sorted(filenames):
            if name.lower().endswith(ext):
                found.append(current / name)
    return found, errors


def _remove_tmp_dir(tmp_dir: Path) -> None:
    if not tmp_dir.exists():
        return
    try:
        shutil.rmtree(tmp_dir)
    except OSError as e:
        logger.warning("Could not remove temporary directory %s: %s", tmp_dir, e)


def _remove_empty_dir(path: Path) -> None:
    try:
        path.rmdir()
    except OSError as e:
        logger.debug("Leaving %s in place: %s", path, e)


def run_split(
    config: SplitRunConfig,
    *,
    extractor: PageExtractor | None = None,
    recognizer: TextRecognizer | None = None,
    writer: GroupWriter | None = None,
) -> RunSummary:
    """
    Discover PDFs, run one DocumentWorker per PDF on a bounded thread pool and
    write every emitted group through a single writer thread.

    Ordering: the writer starts before any worker; the close sentinel is
    queued only after every worker finished; the recognizer is released and
    this run's private temp directory removed only after the writer drained
    the queue. Other contents of `tmp_dir` are never touched.
    """

    documents, discovery_errors = discover_documents(
        root_dir=config.root_dir,
        extension=config.extension,
        exclude=(config.out_dir, config.tmp_dir),
    )
    summary = RunSummary(root_dir=config.root_dir, discovery_errors=discovery_errors)
    if not documents:
        logger.warning("No %s files found under %s", config.extension, config.root_dir)

    tmp_root_created = not config.tmp_dir.exists()
    config.tmp_dir.mkdir(parents=True, exist_ok=True)
    config.out_dir.mkdir(parents=True, exist_ok=True)
    # Teardown removes only this directory, never other contents of tmp_dir.
    run_tmp_dir = Path(tempfile.mkdtemp(prefix="run_", dir=config.tmp_dir))

    extractor = extractor if extractor is not None else PageExtractor(config=config.render_config())
    recognizer = recognizer if recognizer is not None else TextRecognizer(config=config.ocr_config())
    writer = writer if writer is not None else GroupWriter(out_root=config.out_dir)
    summary.backends = {
        "render": extractor.backend_id,
        "render_version": extractor.backend_version,
        "ocr": recognizer.config.engine.value,
        "collect": writer.backend_id,
    }

    groups: queue.Queue[PageGroup | None] = queue.Queue(maxsize=config.queue_size)
    writer_thread = threading.Thread(target=writer.drain, args=(groups,), name="group-writer", daemon=True)
    writer_thread.start()

    try:
        with logging_redirect_tqdm(), tqdm(
            total=len(documents), desc="Documents", unit="pdf", disable=not config.show_progress
        ) as bar:

            def _on_page(pdf_file: Path, page_num: int, page_count: int) -> None:
                bar.set_postfix_str(f"{pdf_file.name} {page_num}/{page_count}", refresh=False)

            worker = DocumentWorker(
                extractor=extractor,
                recognizer=recognizer,
                tmp_dir=run_tmp_dir,
                emit=groups.put,
                on_page=_on_page,
            )

            with ThreadPoolExecutor(max_workers=config.max_workers, thread_name_prefix="document-worker") as pool:
                futures = {pool.submit(worker.process, pdf_file): pdf_file for pdf_file in documents}
                for future in as_completed(futures):
                    pdf_file = futures[future]
                    try:
                        summary.documents.append(future.result())
                    except Exception as e:
                        logger.exception("Unexpected error while processing %s", pdf_file)
                        summary.documents.append(
                            DocumentRunResult(
                                source_file=pdf_file,
                                ok=False,
                                page_count=0,
                                pages_grouped=0,
                                groups_emitted=0,
                                errors=[
                                    PipelineError(
                                        code="DOCUMENT_FAILED",
                                        message="Unexpected error while processing document",
                                        detail={"source_file": str(pdf_file), "error": repr(e)},
                                    )
                                ],
                            )
                        )
                    bar.update(1)
    finally:
        groups.put(None)
        writer_thread.join()
        recognizer.close()
        if not config.keep_tmp:
            _remove_tmp_dir(run_tmp_dir)
            if tmp_root_created:
                _remove_empty_dir(config.tmp_dir)
        else:
            logger.info("Page images kept in %s", run_tmp_dir)

    summary.documents.sort(key=lambda d: str(d.source_file))
    summary.writes = list(writer.results)
    return summary
