"""``python -m sample_finder`` entrypoint.

``python -m sample_finder gui`` opens the search window; anything else
is handed to :func:`sample_finder.cli.main` unchanged.
"""

from __future__ import annotations

import sys
from typing import List, Optional

GUI_COMMANDS = frozenset({"gui", "qt"})

GUI_INSTALL_HINT = (
    "The search window needs PySide6, which is not installed.\n"
    'Install the GUI extra:\n  pip install -e ".[gui]"\n'
    "Or keep using the command line:\n  sample-finder search LIBRARY QUERY"
)


def launch_gui() -> int:
    try:
        from sample_finder.ui.app import main as gui_main
    except ModuleNotFoundError as exc:
        if exc.name != "PySide6" and "PySide6" not in str(exc):
            raise
        print(GUI_INSTALL_HINT)
        return 1
    return int(gui_main())


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0].lower() in GUI_COMMANDS:
        return launch_gui()

    from sample_finder.cli import main as cli_main

    return int(cli_main(args))


if __name__ == "__main__":
    raise SystemExit(main())
