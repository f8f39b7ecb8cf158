from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from split_pdf.contracts import GroupWriteResult


@dataclass(frozen=True, slots=True)
class PipelineError:
    code: str
    message: str
    detail: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class DocumentRunResult:
    """
    Outcome of one DocumentWorker run.

    `ok` is False only when the document could not be opened; page-level
    failures are listed in `errors` but leave `ok` True.
    """

    source_file: Path
    ok: bool
    page_count: int
    pages_grouped: int
    groups_emitted: int
    errors: list[PipelineError]

    @property
    def pages_failed(self) -> int:
        return self.page_count - self.pages_grouped

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_file": str(self.source_file),
            "ok": self.ok,
            "page_count": self.page_count,
            "pages_grouped": self.pages_grouped,
            "groups_emitted": self.groups_emitted,
            "errors": [e.to_dict() for e in self.errors],
        }


@dataclass(slots=True)
class RunSummary:
    root_dir: Path
    documents: list[DocumentRunResult] = field(default_factory=list)
    writes: list[GroupWriteResult] = field(default_factory=list)
    discovery_errors: list[PipelineError] = field(default_factory=list)
    backends: dict[str, str | None] = field(default_factory=dict)

    @property
    def documents_failed(self) -> int:
        return sum(1 for d in self.documents if not d.ok)

    @property
    def pages_failed(self) -> int:
        return sum(d.pages_failed for d in self.documents)

    @property
    def groups_written(self) -> int:
        return sum(1 for w in self.writes if w.ok)

    @property
    def groups_failed(self) -> int:
        return sum(1 for w in self.writes if not w.ok)

    @property
    def ok(self) -> bool:
        return (
            not self.discovery_errors
            and self.documents_failed == 0
            and self.pages_failed == 0
            and self.groups_failed == 0
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "root_dir": str(self.root_dir),
            "ok": self.ok,
            "backends": dict(self.backends),
            "counts": {
                "documents": len(self.documents),
                "documents_failed": self.documents_failed,
                "pages_failed": self.pages_failed,
                "groups_written": self.groups_written,
                "groups_failed": self.groups_failed,
            },
            "discovery_errors": [e.to_dict() for e in self.discovery_errors],
            "documents": [d.to_dict() for d in self.documents],
            "writes": [w.to_dict() for w in self.writes],
        }
