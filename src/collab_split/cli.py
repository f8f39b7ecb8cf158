from __future__ import annotations

import argparse
import logging
from pathlib import Path

from normalize_pdf.contracts import ColorMode

from .artifacts import write_run_summary_json
from .config import SplitRunConfig
from .driver import DiscoveryError, run_split

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="collab-split",
        description=(
            "OCR scanned PDFs and re-split them into one PDF per collaborator, "
            "organized in one folder per company."
        ),
    )
    p.add_argument("-d", "--root-dir", type=Path, default=Path("."), help="Directory scanned recursively for PDFs.")
    p.add_argument("-w", "--workers", type=int, default=5, help="Maximum number of PDFs processed concurrently.")
    p.add_argument("-o", "--out-dir", type=Path, default=Path("processed"), help="Output root for split PDFs.")
    p.add_argument("--tmp-dir", type=Path, default=Path("tmp"), help="Directory for temporary page images.")
    p.add_argument("--extension", default=".pdf", help="File extension selecting input documents.")
    p.add_argument("--language", default="eng", help="Tesseract language (default: eng).")
    p.add_argument("--psm", type=int, default=None, help="Tesseract page segmentation mode (optional).")
    p.add_argument("--dpi", type=int, default=300, help="Render DPI.")
    p.add_argument(
        "--color-mode",
        choices=[m.value for m in ColorMode],
        default=ColorMode.RGB.value,
        help="Color mode for rendered pages.",
    )
    p.add_argument("--timeout-s", type=float, default=120.0, help="Per-page OCR timeout in seconds.")
    p.add_argument("--keep-tmp", action="store_true", help="Keep temporary page images after the run.")
    p.add_argument("--summary-json", type=Path, default=None, help="Write a JSON run summary to this file.")
    p.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any document, page or group failed.",
    )
    p.add_argument("--no-progress", action="store_true", help="Disable the progress bar.")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SplitRunConfig(
            root_dir=args.root_dir,
            out_dir=args.out_dir,
            tmp_dir=args.tmp_dir,
            max_workers=args.workers,
            extension=args.extension,
            language=args.language,
            psm=args.psm,
            dpi=args.dpi,
            color_mode=ColorMode(args.color_mode),
            ocr_timeout_s=args.timeout_s,
            keep_tmp=args.keep_tmp,
            show_progress=not args.no_progress,
        )
    except ValueError as e:
        parser.error(str(e))

    try:
        summary = run_split(config)
    except DiscoveryError as e:
        logger.error("%s", e)
        return 2

    if args.summary_json is not None:
        write_run_summary_json(summary=summary, out_file=args.summary_json)

    logger.info(
        "documents=%d documents_failed=%d pages_failed=%d groups_written=%d groups_failed=%d",
        len(summary.documents),
        summary.documents_failed,
        summary.pages_failed,
        summary.groups_written,
        summary.groups_failed,
    )
    if summary.ok:
        print(f"\nAll files processed. Output in {config.out_dir}")
    else:
        print(f"\nProcessing finished with errors. Output in {config.out_dir}")

    if args.strict and not summary.ok:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
