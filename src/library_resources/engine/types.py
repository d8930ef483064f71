"""Engine result types."""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from library_resources.core.registry import Resource  # noqa: TC001


class Outcome(str, Enum):
    UPDATED = "updated"
    RESTORED = "restored"
    ALREADY_CLONED = "already-cloned"
    NOT_CLONED = "not-cloned"
    FAILED = "failed"


class ResourceStatus(BaseModel):
    resource: Resource
    path: Path
    cloned: bool


class AddResult(BaseModel):
    resource: Resource
    path: Path
    file_count: int | None = None
    size: str | None = None


class ResourceInfo(BaseModel):
    resource: Resource
    path: Path
    cloned: bool
    size: str | None = None
    file_count: int | None = None
    last_commit: str | None = None


class BatchItem(BaseModel):
    name: str
    outcome: Outcome
    message: str = ""


class BatchResult(BaseModel):
    items: list[BatchItem] = Field(default_factory=list)

    def summary(self) -> dict[str, int]:
        counts = {o.value: 0 for o in Outcome}
        for item in self.items:
            counts[item.outcome.value] += 1
        return counts

    @property
    def failed(self) -> list[BatchItem]:
        return [i for i in self.items if i.outcome == Outcome.FAILED]


class SearchSection(BaseModel):
    name: str
    lines: list[str]


class SearchResult(BaseModel):
    query: str
    name: str | None = None
    targets: int = 0
    sections: list[SearchSection] = Field(default_factory=list)


class FileContent(BaseModel):
    name: str
    file_path: str
    content: str


class TreeListing(BaseModel):
    name: str
    subpath: str
    depth: int
    files: list[str] = Field(default_factory=list)
    truncated: bool = False
