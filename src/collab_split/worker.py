from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from grouping.contracts import PageGroup
from grouping.identifiers import IdentifierParser
from grouping.page_groups import PageGrouper
from normalize_pdf.engines import RasterDocument
from normalize_pdf.module import PageExtractor, compute_doc_tmp_id, page_image_name
from ocr.module import TextRecognizer

from .contracts import DocumentRunResult, PipelineError

logger = logging.getLogger(__name__)

PageProgress = Callable[[Path, int, int], None]


class DocumentWorker:
    """
    Per-document pipeline: render -> PNG -> OCR -> parse -> group.

    Pages are visited strictly in ascending order. Every closed group is
    handed to `emit` immediately; the trailing group is emitted when the
    document ends, including after an unexpected error mid-document.
    """

    def __init__(
        self,
        *,
        extractor: PageExtractor,
        recognizer: TextRecognizer,
        tmp_dir: Path,
        emit: Callable[[PageGroup], None],
        parser: IdentifierParser | None = None,
        on_page: PageProgress | None = None,
    ) -> None:
        self._extractor = extractor
        self._recognizer = recognizer
        self._tmp_dir = tmp_dir
        self._emit = emit
        self._parser = parser if parser is not None else IdentifierParser()
        self._on_page = on_page

    def process(self, pdf_file: Path) -> DocumentRunResult:
        document, open_err = self._extractor.open_document(pdf_file=pdf_file)
        if document is None:
            assert open_err is not None
            logger.error("Cannot open PDF %s: %s", pdf_file, (open_err.detail or {}).get("error"))
            return DocumentRunResult(
                source_file=pdf_file,
                ok=False,
                page_count=0,
                pages_grouped=0,
                groups_emitted=0,
                errors=[PipelineError(code=open_err.code, message=open_err.message, detail=open_err.detail)],
            )

        errors: list[PipelineError] = []
        grouper = PageGrouper(source_file=pdf_file)
        doc_tmp_dir = self._tmp_dir / compute_doc_tmp_id(pdf_file=pdf_file)
        pages_grouped = 0
        groups_emitted = 0

        with document:
            page_count = document.page_count
            try:
                for page_num in range(1, page_count + 1):
                    text = self._recognize_page(
                        document=document,
                        pdf_file=pdf_file,
                        page_num=page_num,
                        out_file=doc_tmp_dir / page_image_name(pdf_file=pdf_file, page_num=page_num),
                        errors=errors,
                    )
                    if self._on_page is not None:
                        self._on_page(pdf_file, page_num, page_count)
                    if text is None:
                        continue

                    closed = grouper.feed(page_num=page_num, page=self._parser.parse(text))
                    pages_grouped += 1
                    if closed is not None:
                        self._emit(closed)
                        groups_emitted += 1
            finally:
                self._emit(grouper.finish())
                groups_emitted += 1

        return DocumentRunResult(
            source_file=pdf_file,
            ok=True,
            page_count=page_count,
            pages_grouped=pages_grouped,
            groups_emitted=groups_emitted,
            errors=errors,
        )

    def _recognize_page(
        self,
        *,
        document: RasterDocument,
        pdf_file: Path,
        page_num: int,
        out_file: Path,
        errors: list[PipelineError],
    ) -> str | None:
        rendered, render_err = self._extractor.render_page_to_file(
            document=document, page_num=page_num, out_file=out_file
        )
        if rendered is None:
            assert render_err is not None
            logger.warning(
                "Skipping page %d of %s: %s", page_num, pdf_file, (render_err.detail or {}).get("error")
            )
            errors.append(
                PipelineError(
                    code=render_err.code,
                    message=render_err.message,
                    detail={"source_file": str(pdf_file), **(render_err.detail or {})},
                )
            )
            return None

        result = self._recognizer.recognize_image_file(image_file=rendered.image_file)
        if not result.ok:
            for e in result.errors:
                logger.warning("Skipping page %d of %s: OCR failed (%s: %s)", page_num, pdf_file, e.code, e.message)
                errors.append(
                    PipelineError(
                        code=e.code,
                        message=e.message,
                        detail={"source_file": str(pdf_file), "page_num": page_num, **(e.detail or {})},
                    )
                )
            return None
        return result.text
