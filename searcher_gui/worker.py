from PyQt6.QtCore import pyqtSignal, QObject

from searcher import engine
from searcher.models import SearchOptions
from searcher.pattern import InvalidPatternError, compile_pattern

# Background worker that runs one search. It lives in a QThread and talks to
# the UI only through signals, so the window stays responsive on large trees.
class SearchWorker(QObject):
    # Emitted to report progress stages (e.g. "Searching...").
    status = pyqtSignal(str)

    # Emitted when the pattern is invalid or the search fails.
    error = pyqtSignal(str)

    # Emitted once on success with the SearchOutcome and the compiled Pattern.
    finished = pyqtSignal(object, object)

    def __init__(self, pattern_text: str, paths: list[str], options: SearchOptions) -> None:
        super().__init__()
        # Captured at creation time; not modified during execution.
        self.pattern_text = pattern_text
        self.paths = list(paths)
        self.options = options

    def run(self) -> None:
        # The window needs the compiled Pattern for highlighting
        try:
            pattern = compile_pattern(self.pattern_text, ignore_case=self.options.ignore_case)
        except InvalidPatternError:
            self.error.emit("Invalid regex")
            return

        try:
            self.status.emit("Searching...")
            outcome = engine.run_search(self.pattern_text, self.paths, self.options, render=False)
        except Exception as e:
            self.error.emit(f"Search Error: {e}")
            return
        else:
            self.finished.emit(outcome, pattern)
