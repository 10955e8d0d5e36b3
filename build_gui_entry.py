# build_gui_entry.py
# Entry script for frozen (PyInstaller) GUI builds.
from __future__ import annotations

from sample_finder.ui.app import main

if __name__ == "__main__":
    raise SystemExit(main())
