import sys

from PyQt6.QtWidgets import QApplication
from searcher_gui.main_window import MainWindow

# Entry point of the searcher-gui script; an optional argument preselects the folder.
def main() -> int:
    app = QApplication(sys.argv)
    app.setApplicationName("Searcher")

    window = MainWindow(initial_path=sys.argv[1] if len(sys.argv) > 1 else None)
    window.show()

    return app.exec()

if __name__ == "__main__":
    sys.exit(main())
