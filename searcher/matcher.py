import logging

from searcher.binary import is_binary
from searcher.models import LineRecord
from searcher.pattern import Pattern
from searcher.prefilter import line_may_match

# Lines longer than this are kept for context but never handed to the regex
MAX_LINE_LENGTH = 10_000


def _strip_terminator(line: str) -> str:
    # Universal newline mode turns \r\n and \r into \n
    if line.endswith("\n"):
        return line[:-1]

    return line

def match_line(line: str, pattern: Pattern, hint: str | None) -> bool:
    if len(line) > MAX_LINE_LENGTH:
        return False

    if not line_may_match(line, hint, ignore_case=pattern.ignore_case):
        return False

    return pattern.matches(line)

def match_lines(lines: list[str], pattern: Pattern, hint: str | None = None) -> list[LineRecord]:
    return [LineRecord(index=i, text=line, is_match=match_line(line, pattern, hint))
            for i, line in enumerate(lines)]

def read_lines(path: str) -> list[str] | None:
    """
    Read a text file as a list of lines without terminators.

    Malformed UTF-8 is replaced, never fatal. Any I/O error while reading
    throws away what was read so far and returns None.
    """
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as file:
            return [_strip_terminator(line) for line in file]
    except OSError as e:
        logging.debug(f"Skipping {path}: {e}")
        return None

def scan_file(path: str, pattern: Pattern, hint: str | None = None) -> list[LineRecord] | None:
    if is_binary(path):
        logging.debug(f"Skipping binary file {path}")
        return None

    lines = read_lines(path)
    if lines is None:
        return None

    return match_lines(lines, pattern, hint)

def match_indexes(records: list[LineRecord]) -> list[int]:
    return [record.index for record in records if record.is_match]
