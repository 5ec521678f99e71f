"""Search request/outcome messages and the parsed result tree."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field
from result import Result

from ggrep.models.query import Query


@dataclass(frozen=True)
class SearchRequest:
    """Snapshot of a query taken at the moment a search is committed."""

    query: Query
    sequence_number: int


@dataclass(frozen=True)
class SearchOutcome:
    """Completion of one git grep invocation: raw output lines or an error message."""

    sequence_number: int
    status: Result[list[str], str]


class MatchEntry(BaseModel):
    """One matched line of git grep output."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    line_number: int
    line_text: str = ""

    @property
    def key(self) -> tuple[str, int]:
        return (self.file_path, self.line_number)


class FileGroup(BaseModel):
    """All matched lines of one file, in ascending line order."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    entries: tuple[MatchEntry, ...] = ()


class ResultTree(BaseModel):
    """File-grouped matches in the order git reported them."""

    model_config = ConfigDict(frozen=True)

    groups: tuple[FileGroup, ...] = Field(default_factory=tuple)

    @property
    def hit_files(self) -> int:
        return len(self.groups)

    @property
    def hit_lines(self) -> int:
        return sum(len(group.entries) for group in self.groups)

    def is_empty(self) -> bool:
        return not self.groups

    def flatten(self) -> list[MatchEntry]:
        """Entries across all groups in display order."""
        return [entry for group in self.groups for entry in group.entries]

    def index_of(self, key: tuple[str, int]) -> int | None:
        """Flattened index of the entry identified by ``(file_path, line_number)``."""
        for index, entry in enumerate(self.flatten()):
            if entry.key == key:
                return index
        return None
