"""Query models: the pattern being edited and the active git grep flags."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntFlag
from typing import Annotated

from pydantic import BaseModel, ConfigDict, PlainValidator, model_validator


class SearchFlag(IntFlag):
    """Bitmask of git grep options that can be toggled for a query."""

    IGNORE_CASE = 1
    FIXED_STRINGS = 2
    WORD_REGEXP = 4
    INVERT_MATCH = 8
    EXTENDED_REGEXP = 16
    PERL_REGEXP = 32
    UNTRACKED = 64
    NO_INDEX = 128


@dataclass(frozen=True)
class FlagOption:
    """How one flag is spelled on the git command line and bound in the UI."""

    flag: SearchFlag
    option: str
    short: str
    key: str
    label: str


FLAG_OPTIONS: tuple[FlagOption, ...] = (
    FlagOption(SearchFlag.IGNORE_CASE, "--ignore-case", "-i", "i", "ignore case"),
    FlagOption(SearchFlag.FIXED_STRINGS, "--fixed-strings", "-F", "F", "fixed strings"),
    FlagOption(SearchFlag.WORD_REGEXP, "--word-regexp", "-w", "w", "word regexp"),
    FlagOption(SearchFlag.INVERT_MATCH, "--invert-match", "-v", "v", "invert match"),
    FlagOption(SearchFlag.EXTENDED_REGEXP, "--extended-regexp", "-E", "E", "extended regexp"),
    FlagOption(SearchFlag.PERL_REGEXP, "--perl-regexp", "-P", "P", "perl regexp"),
    FlagOption(SearchFlag.UNTRACKED, "--untracked", "", "u", "untracked"),
    FlagOption(SearchFlag.NO_INDEX, "--no-index", "", "I", "no index"),
)
FLAG_OPTION_BY_FLAG: dict[SearchFlag, FlagOption] = {item.flag: item for item in FLAG_OPTIONS}

# Only one pattern syntax can be active at a time.
PATTERN_SYNTAX_FLAGS = SearchFlag.FIXED_STRINGS | SearchFlag.EXTENDED_REGEXP | SearchFlag.PERL_REGEXP


def iter_flags(flags: SearchFlag) -> list[SearchFlag]:
    """Return the single flags set in ``flags`` in canonical option order."""
    return [item.flag for item in FLAG_OPTIONS if item.flag in flags]


class Query(BaseModel):
    """A user-composed search: pattern, cursor within it, and active flags."""

    model_config = ConfigDict(frozen=True)

    pattern: str = ""
    cursor: int = 0
    flags: Annotated[SearchFlag, PlainValidator(SearchFlag)] = SearchFlag(0)
    revision: str = ""
    pathspec: str = ""

    @model_validator(mode="after")
    def _check_cursor(self) -> Query:
        if not 0 <= self.cursor <= len(self.pattern):
            raise ValueError(f"cursor {self.cursor} outside pattern of length {len(self.pattern)}")
        return self

    @classmethod
    def from_pattern(
        cls,
        pattern: str,
        flags: SearchFlag = SearchFlag(0),
        revision: str = "",
        pathspec: str = "",
    ) -> Query:
        """Build a query with the cursor placed at the end of ``pattern``."""
        return cls(
            pattern=pattern,
            cursor=len(pattern),
            flags=flags,
            revision=revision,
            pathspec=pathspec,
        )

    def has_flag(self, flag: SearchFlag) -> bool:
        return flag in self.flags
