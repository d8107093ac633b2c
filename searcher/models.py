from enum import Enum
from typing import NamedTuple
from dataclasses import dataclass, field

class OutputMode(Enum):
    # How results are grouped on the output stream
    HEADING = 1
    NO_HEADING = 2

class LineRecord(NamedTuple):
    # A single line of a scanned file
    index: int      # 0-based position in the file
    text: str       # Line content without its terminator
    is_match: bool

class ContextRange(NamedTuple):
    # Inclusive block of line indexes to print (match + its context)
    start: int
    end: int

@dataclass
class FileResult:
    # Everything needed to print one file that had at least one match
    path: str
    lines: list[LineRecord]           # Emitted lines over all ranges, in order
    ranges: list[ContextRange]
    match_indexes: list[int]

    @property
    def match_count(self) -> int:
        return len(self.match_indexes)

@dataclass
class SearchOutcome:
    # Aggregated results of a run, in path traversal order
    results: list[FileResult] = field(default_factory=list)

    @property
    def found_any(self) -> bool:
        return len(self.results) > 0

    @property
    def files_matched(self) -> int:
        return len(self.results)

    @property
    def lines_matched(self) -> int:
        return sum(r.match_count for r in self.results)

@dataclass(frozen=True)
class SearchOptions:
    # Resolved option values handed to the engine by the CLI or the GUI
    ignore_case: bool = False
    color: bool = False
    no_heading: bool = False
    before: int = 0
    after: int = 0
    show_hidden: bool = False

    def __post_init__(self) -> None:
        if self.before < 0 or self.after < 0:
            raise ValueError(f"Context sizes must be >= 0, got before={self.before} after={self.after}")

    @property
    def context_active(self) -> bool:
        return self.before > 0 or self.after > 0

    @property
    def mode(self) -> OutputMode:
        return OutputMode.NO_HEADING if self.no_heading else OutputMode.HEADING
