from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


class GrouperState(str, Enum):
    EMPTY = "empty"  # no collaborator key yet
    KEYED = "keyed"  # key set, accumulating pages


@dataclass(frozen=True, slots=True)
class RecognizedPage:
    """
    Identifying fields parsed from one page; either may be empty.
    """

    company: str = ""
    collaborator_key: str = ""


@dataclass(frozen=True, slots=True)
class PageGroup:
    """
    A closed run of contiguous pages from one source PDF sharing one key.

    - `pages` are 1-indexed and strictly increasing.
    - `key` may be empty only for a document where no page ever yielded one.
    - `sub_path` is the last non-empty company seen while the group was open.
    """

    source_file: Path
    key: str
    sub_path: str
    pages: tuple[int, ...]


@dataclass(slots=True)
class OpenGroup:
    """
    Mutable accumulator owned by a `PageGrouper` until it is frozen.
    """

    source_file: Path
    key: str = ""
    sub_path: str = ""
    pages: list[int] = field(default_factory=list)

    def freeze(self) -> PageGroup:
        return PageGroup(
            source_file=self.source_file,
            key=self.key,
            sub_path=self.sub_path,
            pages=tuple(self.pages),
        )
