from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class SplitPdfError:
    code: str
    message: str
    detail: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class GroupWriteResult:
    ok: bool
    source_file: Path
    out_file: Path | None
    pages: tuple[int, ...]
    errors: list[SplitPdfError]

    def to_dict(self) -> dict[str, Any]:
        return {
            "ok": self.ok,
            "source_file": str(self.source_file),
            "out_file": None if self.out_file is None else str(self.out_file),
            "pages": list(self.pages),
            "errors": [e.to_dict() for e in self.errors],
        }
