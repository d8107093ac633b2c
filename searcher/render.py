import sys
from typing import Iterator, NamedTuple, TextIO

from searcher.models import FileResult, LineRecord, OutputMode, SearchOptions
from searcher.pattern import Pattern

# Terminal red around every matched span, reset after
HIGHLIGHT_START = "\x1b[31m"
HIGHLIGHT_END = "\x1b[0m"

GROUP_SEPARATOR = "--"
MATCH_SEPARATOR = ":"
CONTEXT_SEPARATOR = "-"


class OutputLine(NamedTuple):
    # One line of rendered output (without the trailing newline)
    text: str
    record: LineRecord | None   # None for path headers and separators
    prefix_len: int             # Characters before the line content starts

def highlight(text: str, pattern: Pattern) -> str:
    spans = pattern.find(text)
    if not spans:
        return text

    pieces: list[str] = []
    position = 0
    for start, end in spans:
        pieces.append(text[position:start])
        pieces.append(f"{HIGHLIGHT_START}{text[start:end]}{HIGHLIGHT_END}")
        position = end
    pieces.append(text[position:])

    return "".join(pieces)


class ResultRenderer:
    """
    Turns FileResults into grep-style text and writes it to a sink.

    Layout rules:
    - match lines use ':' and context lines use '-' as separator
    - no-heading: "path:12:text" / "path-13:text"
    - heading: the path once, then "12:text" / "13-text"
    - "--" between non-adjacent lines of a file, only when context is on
    - between files: "--" when context is on, otherwise nothing (no-heading)
      or a blank line (heading)

    The sink is anything with write(str). If the reader on the other end of
    a pipe goes away, the renderer marks itself closed and drops the rest.
    """

    def __init__(self, pattern: Pattern, *, mode: OutputMode = OutputMode.HEADING,
                 color: bool = False, context_active: bool = False,
                 sink: TextIO | None = None) -> None:
        self.pattern = pattern
        self.mode = mode
        self.color = color
        self.context_active = context_active
        self.sink = sink if sink is not None else sys.stdout
        self.closed = False
        self._files_rendered = 0

    @classmethod
    def from_options(cls, pattern: Pattern, options: SearchOptions,
                     sink: TextIO | None = None) -> "ResultRenderer":
        return cls(pattern, mode=options.mode, color=options.color,
                   context_active=options.context_active, sink=sink)

    def _separator(self) -> OutputLine:
        return OutputLine(GROUP_SEPARATOR, None, 0)

    def _file_separator(self) -> OutputLine | None:
        if self.context_active:
            return self._separator()

        if self.mode == OutputMode.HEADING:
            return OutputLine("", None, 0)

        return None

    def _format_line(self, path: str, record: LineRecord, is_match: bool) -> OutputLine:
        kind = MATCH_SEPARATOR if is_match else CONTEXT_SEPARATOR
        line_number = record.index + 1

        if self.mode == OutputMode.NO_HEADING:
            prefix = f"{path}{kind}{line_number}{MATCH_SEPARATOR}"
        else:
            prefix = f"{line_number}{kind}"

        text = record.text
        if self.color and is_match:
            text = highlight(text, self.pattern)

        return OutputLine(prefix + text, record, len(prefix))

    def iter_output(self, result: FileResult) -> Iterator[OutputLine]:
        if self._files_rendered > 0:
            separator = self._file_separator()
            if separator is not None:
                yield separator

        if self.mode == OutputMode.HEADING:
            yield OutputLine(result.path, None, 0)

        matched = set(result.match_indexes)
        previous_index: int | None = None

        for record in result.lines:
            if self.context_active and previous_index is not None and record.index != previous_index + 1:
                yield self._separator()
            previous_index = record.index

            yield self._format_line(result.path, record, record.index in matched)

        self._files_rendered += 1

    def _write(self, text: str) -> None:
        if self.closed:
            return

        try:
            self.sink.write(text)
        except BrokenPipeError:
            self.closed = True

    # Write one file's block; returns False once the output has gone away
    def render(self, result: FileResult) -> bool:
        for line in self.iter_output(result):
            self._write(line.text + "\n")
            if self.closed:
                break

        return not self.closed

    def flush(self) -> None:
        if self.closed:
            return

        try:
            self.sink.flush()
        except BrokenPipeError:
            self.closed = True
