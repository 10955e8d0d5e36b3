"""PySide6 search window for Sample Finder (optional ``[gui]`` extra).

:mod:`sample_finder.ui.state` has no Qt dependency and can be imported
without PySide6 installed.
"""
