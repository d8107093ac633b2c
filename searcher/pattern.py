import re


class InvalidPatternError(ValueError):
    # Raised before any file is opened when the user pattern does not compile
    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class Pattern:
    """
    Compiled search pattern shared read-only by every file scan of a run.

    The engine only needs two capabilities from it:
    - matches(text) -> does the line contain a match at all
    - find(text)    -> spans (start, end) of every non-empty match, for highlighting
    """

    __slots__ = ("source", "ignore_case", "_compiled")

    def __init__(self, source: str, compiled_re: re.Pattern, ignore_case: bool) -> None:
        self.source = source
        self.ignore_case = ignore_case
        self._compiled = compiled_re

    def matches(self, text: str) -> bool:
        if self._compiled.search(text):
            return True

        return False

    def find(self, text: str) -> list[tuple[int, int]]:
        spans: list[tuple[int, int]] = []

        for match in self._compiled.finditer(text):
            start, end = match.span()
            # Zero-width matches (^, \b, a*) have nothing to highlight
            if end > start:
                spans.append((start, end))

        return spans

    def __repr__(self) -> str:
        return f"Pattern({self.source!r}, ignore_case={self.ignore_case})"


def compile_pattern(text: str, *, ignore_case: bool = False) -> Pattern:
    flags = re.IGNORECASE if ignore_case else 0

    try:
        compiled_re = re.compile(text, flags)
    except re.error as e:
        raise InvalidPatternError(text, str(e)) from e

    return Pattern(text, compiled_re, ignore_case)
