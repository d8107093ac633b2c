import io

from PyQt6.QtCore import QThread
from PyQt6.QtWidgets import QMainWindow, QLabel, QLineEdit, QPushButton, QProgressBar, QPlainTextEdit, \
    QVBoxLayout, QHBoxLayout, QWidget, QFileDialog, QTextEdit, QSizePolicy, QCheckBox, QSpinBox
from PyQt6.QtGui import QColor, QTextCursor, QTextCharFormat, QFont

from searcher.models import SearchOptions, SearchOutcome
from searcher.pattern import Pattern
from searcher.render import ResultRenderer, OutputLine
from searcher_gui.worker import SearchWorker

MAX_CONTEXT_LINES = 99


# QTextDocument positions count UTF-16 code units, Python strings count code points
def _qt_len(text: str) -> int:
    return len(text.encode("utf-16-le")) // 2


class MainWindow(QMainWindow):
    def __init__(self, initial_path: str | None = None):
        super().__init__()

        self.setWindowTitle("Searcher")
        self.resize(900, 650)

        # Keep references to avoid garbage-collection while the background thread is running.
        self.thread: QThread | None = None
        self.worker: SearchWorker | None = None

        self.last_outcome: SearchOutcome | None = None
        self.options = SearchOptions()

        self._build_ui()
        self._apply_style()
        self._connect_signals()

        if initial_path:
            self.path_edit.setText(initial_path)

    # Create widgets and layouts.
    def _build_ui(self) -> None:
        self.status_label = QLabel("Ready")
        self.status_label.setObjectName("statusLabel")
        self.status_label.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)

        self.path_edit = QLineEdit()
        self.path_edit.setReadOnly(True)
        self.pattern_edit = QLineEdit()
        self.pattern_edit.setPlaceholderText("Regular expression...")

        self.ignore_case_checkbox = QCheckBox("Ignore case")
        self.hidden_checkbox = QCheckBox("Hidden files")
        self.no_heading_checkbox = QCheckBox("No heading")

        self.before_spin = QSpinBox()
        self.before_spin.setRange(0, MAX_CONTEXT_LINES)
        self.after_spin = QSpinBox()
        self.after_spin.setRange(0, MAX_CONTEXT_LINES)

        self.browse_btn = QPushButton("Browse...")
        self.search_btn = QPushButton("Search")
        self.search_btn.setObjectName("searchButton")

        self.progress = QProgressBar()
        self.progress.hide()

        self.results_box = QPlainTextEdit()
        self.results_box.setReadOnly(True)
        self.results_box.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.results_box.setFont(QFont("monospace"))

        main_layout = QVBoxLayout()
        main_widget = QWidget()

        # 1. Folder row
        folder_layout = QHBoxLayout()
        folder_layout.addWidget(QLabel("Folder:"))
        folder_layout.addWidget(self.path_edit)
        folder_layout.addWidget(self.browse_btn)

        # 2. Pattern row
        search_layout = QHBoxLayout()
        search_layout.addWidget(self.pattern_edit)
        search_layout.addWidget(self.search_btn)

        # 3. Options row
        options_layout = QHBoxLayout()
        options_layout.addWidget(self.ignore_case_checkbox)
        options_layout.addWidget(self.hidden_checkbox)
        options_layout.addWidget(self.no_heading_checkbox)
        options_layout.addWidget(QLabel("Before:"))
        options_layout.addWidget(self.before_spin)
        options_layout.addWidget(QLabel("After:"))
        options_layout.addWidget(self.after_spin)
        options_layout.addWidget(self.progress)
        options_layout.addStretch(1)
        options_layout.addWidget(self.status_label)

        main_layout.addLayout(folder_layout)
        main_layout.addLayout(search_layout)
        main_layout.addLayout(options_layout)
        main_layout.addWidget(self.results_box)

        main_widget.setLayout(main_layout)
        self.setCentralWidget(main_widget)

    def _apply_style(self) -> None:
        self.setStyleSheet("""
            QWidget {
                background: #0f172a;
                color: #f8fafc;
                font-size: 13px;
            }
            QLabel#statusLabel {
                background: #1e293b;
                border: 1px solid #334155;
                border-radius: 12px;
                padding: 4px 14px;
                color: #38bdf8;
                font-weight: 600;
            }
            QLineEdit, QPlainTextEdit, QSpinBox {
                background: #020617;
                border: 1px solid #1e293b;
                border-radius: 6px;
                padding: 6px;
            }
            QPushButton {
                background: #1e293b;
                border: 1px solid #334155;
                border-radius: 6px;
                padding: 6px 16px;
            }
            QPushButton#searchButton {
                background: #2563eb;
                font-weight: bold;
            }
        """)

    # Connect buttons and worker signals
    def _connect_signals(self) -> None:
        self.browse_btn.clicked.connect(self.on_browse_clicked)
        self.search_btn.clicked.connect(self.on_search_clicked)
        self.pattern_edit.returnPressed.connect(self.on_search_clicked)

    def on_browse_clicked(self) -> None:
        folder = QFileDialog.getExistingDirectory(self, "Select folder to search")
        if folder:
            self.path_edit.setText(folder)
            self.results_box.clear()
            self.last_outcome = None

    def _current_options(self) -> SearchOptions:
        return SearchOptions(
            ignore_case=self.ignore_case_checkbox.isChecked(),
            color=False,
            no_heading=self.no_heading_checkbox.isChecked(),
            before=self.before_spin.value(),
            after=self.after_spin.value(),
            show_hidden=self.hidden_checkbox.isChecked(),
        )

    def on_search_clicked(self) -> None:
        if len(self.path_edit.text()) == 0:
            self.status_label.setText("No folder...")
            return

        if self.pattern_edit.text() == "":
            self.status_label.setText("Enter a pattern")
            return

        if self.thread is not None:
            # A search is still running
            return

        self.search_btn.setEnabled(False)
        self.browse_btn.setEnabled(False)
        self.results_box.clear()
        self.progress.show()
        self.progress.setRange(0, 0)  # Busy/indeterminate mode while the worker runs.

        self.options = self._current_options()
        self.thread = QThread()
        self.worker = SearchWorker(self.pattern_edit.text(), [self.path_edit.text()], self.options)

        self.worker.moveToThread(self.thread)
        self.thread.started.connect(self.worker.run)

        self.worker.status.connect(self.on_search_status)
        self.worker.error.connect(self.on_search_error)
        self.worker.finished.connect(self.on_search_finished)

        # Always stop and clean up the thread when work ends (success or error).
        self.worker.finished.connect(self.thread.quit)
        self.worker.error.connect(self.thread.quit)
        self.thread.finished.connect(self.worker.deleteLater)
        self.thread.finished.connect(self.thread.deleteLater)
        self.thread.finished.connect(self._on_thread_finished)

        self.thread.start()

    def _on_thread_finished(self) -> None:
        self.thread = None
        self.worker = None

    def _restore_controls(self) -> None:
        self.progress.setRange(0, 100)
        self.progress.hide()
        self.search_btn.setEnabled(True)
        self.browse_btn.setEnabled(True)

    def on_search_status(self, message: str) -> None:
        self.status_label.setText(message)

    def on_search_error(self, message: str) -> None:
        self.status_label.setText(message)
        self._restore_controls()

    def on_search_finished(self, outcome: SearchOutcome, pattern: Pattern) -> None:
        self.last_outcome = outcome
        self._restore_controls()

        if not outcome.found_any:
            self.status_label.setText("No results")
            return

        self.show_outcome_with_highlight(outcome, pattern)
        self.status_label.setText(f"{outcome.lines_matched} matches in {outcome.files_matched} files")

    """
        Lay the outcome out exactly like the terminal output, then mark every
        matched span (match lines only) and the path headers.
    """
    def show_outcome_with_highlight(self, outcome: SearchOutcome, pattern: Pattern) -> None:
        renderer = ResultRenderer.from_options(pattern, self.options, sink=io.StringIO())

        lines: list[OutputLine] = []
        for result in outcome.results:
            lines.extend(renderer.iter_output(result))

        self.results_box.setPlainText("\n".join(line.text for line in lines))

        match_format = QTextCharFormat()
        match_format.setBackground(QColor("yellow"))
        match_format.setForeground(QColor("Black"))

        header_format = QTextCharFormat()
        header_format.setForeground(QColor("#00FFFF"))
        header_format.setFontWeight(QFont.Weight.Bold)

        doc = self.results_box.document()
        selections: list[QTextEdit.ExtraSelection] = []
        position = 0

        for line in lines:
            if line.record is None:
                if line.text and line.text != "--":
                    selections.append(self._selection(doc, position, position + _qt_len(line.text),
                                                      header_format))
            elif line.record.is_match:
                content_start = position + _qt_len(line.text[:line.prefix_len])
                text = line.record.text
                for start, end in pattern.find(text):
                    selections.append(self._selection(doc,
                                                      content_start + _qt_len(text[:start]),
                                                      content_start + _qt_len(text[:end]),
                                                      match_format))

            position += _qt_len(line.text) + 1

        self.results_box.setExtraSelections(selections)

    @staticmethod
    def _selection(doc, start: int, end: int, fmt: QTextCharFormat) -> QTextEdit.ExtraSelection:
        cursor = QTextCursor(doc)
        cursor.setPosition(start)
        cursor.setPosition(end, QTextCursor.MoveMode.KeepAnchor)

        selection = QTextEdit.ExtraSelection()
        selection.cursor = cursor
        selection.format = fmt
        return selection
