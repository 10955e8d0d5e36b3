"""Centralized tuning constants for path-based sample classification and search.

Loop keywords, audio markers, ignore rules and search defaults are
defined here and referenced by the classifier, scanner and search engine
(single source of truth).
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple

# ---------------------------------------------------------------------------
# Classification
# Ordered substrings; any hit in the lowercased path marks a loop.
LOOP_KEYWORDS: List[str] = [
    "/loop",
    "/construction",
    "_loop",
    "[",
    "bpm",
    "loop",
    "loops",
]

# ---------------------------------------------------------------------------
# Discovery
# Substring markers, not suffixes: "foo.wavy" counts as audio.
AUDIO_MARKERS: Tuple[str, ...] = (".wav", ".mp3")

IGNORE_RULES: List[str] = ["__MACOSX", ".DS_Store", "._"]

# ---------------------------------------------------------------------------
# Search
DEFAULT_MAX_RESULTS = 10

# "filter": bounds are checked against the loop filter's own tempo.
# "sample": bounds are checked against each candidate sample's tempo.
TEMPO_GATE = "filter"
TEMPO_GATE_MODES: Tuple[str, ...] = ("filter", "sample")


def apply_overrides(data: Dict[str, Any]) -> None:
    """Merge tuning overrides into module globals (best-effort).

    Unknown keys and values whose type does not match the current value
    are ignored.  Sequences are replaced, dicts are updated in place.
    """
    if not isinstance(data, dict):
        return

    module_globals = globals()
    for key, value in data.items():
        if key not in module_globals or key.startswith("_") or key == "TEMPO_GATE_MODES":
            continue
        current = module_globals[key]
        if isinstance(current, dict) and isinstance(value, dict):
            current.update(value)
        elif isinstance(current, (list, tuple)) and isinstance(value, (list, tuple)):
            if all(isinstance(item, str) for item in value):
                module_globals[key] = type(current)(value)
        elif isinstance(current, str) and isinstance(value, str):
            if key == "TEMPO_GATE" and value not in TEMPO_GATE_MODES:
                continue
            module_globals[key] = value
        elif isinstance(current, int) and isinstance(value, int) and not isinstance(value, bool):
            module_globals[key] = value
