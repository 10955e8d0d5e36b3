from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from sample_finder.ui.window import SampleFinderWindow


def main() -> int:
    app = QApplication(sys.argv)
    app.setApplicationName("Sample Finder")

    win = SampleFinderWindow()
    win.show()

    try:
        return app.exec()
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
