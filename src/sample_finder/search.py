"""Free-text search over a :class:`~sample_finder.models.SampleLibrary`.

Each query re-scans every sample.  A sample's relevance is the number
of query tokens found in its lowercased path, after two gates:

1. type gate: a ``sample_type`` filter of a different variant excludes
   the sample outright;
2. tempo gate: for a loop filter, ``min_tempo``/``max_tempo`` are
   checked.  In the default ``"filter"`` mode the bounds are compared
   against the filter's own tempo (``Loop(t)``), never the sample's;
   ``"sample"`` mode compares the candidate's tempo against the range.

Tokens prefixed with ``-`` exclude samples whose path contains the
remainder.  The dash-included token is still counted as an ordinary
match, so ``-808`` both excludes ``808`` paths and scores ``-808``
paths.  Results are sorted by relevance with a stable sort; ties keep
library scan order.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from . import tuning
from .models import Sample, SampleLibrary, SearchParams, SearchResult


def tokenize(text: str) -> List[str]:
    """Lowercase ``text`` and split it on single spaces (empty tokens kept)."""
    return [token.strip() for token in (text or "").lower().split(" ")]


def _resolve_tempo_gate(tempo_gate: Optional[str]) -> str:
    mode = tuning.TEMPO_GATE if tempo_gate is None else tempo_gate
    if mode not in tuning.TEMPO_GATE_MODES:
        raise ValueError(f"Unknown tempo gate {mode!r}; expected one of {', '.join(tuning.TEMPO_GATE_MODES)}")
    return mode


def _passes_tempo_gate(query: SearchParams, sample: Sample, mode: str) -> bool:
    if query.sample_type is None or not query.sample_type.is_loop:
        return True
    if mode == "filter":
        tempo = int(query.sample_type.tempo or 0)
        if query.min_tempo is not None and tempo > query.min_tempo:
            return False
        if query.max_tempo is not None and tempo < query.max_tempo:
            return False
        return True
    tempo = int(sample.sampletype.tempo or 0)
    if query.min_tempo is not None and tempo < query.min_tempo:
        return False
    if query.max_tempo is not None and tempo > query.max_tempo:
        return False
    return True


def score(
    query: SearchParams,
    sample: Sample,
    tokens: Sequence[str],
    *,
    tempo_gate: Optional[str] = None,
) -> int:
    """Return the relevance of ``sample`` for ``query`` (0 = excluded)."""
    mode = _resolve_tempo_gate(tempo_gate)
    if query.sample_type is not None and not query.sample_type.same_variant(sample.sampletype):
        return 0
    if not _passes_tempo_gate(query, sample, mode):
        return 0

    path_lower = sample.path.lower()
    relevance = 0
    is_filtered = False
    for token in tokens:
        if not token:
            continue
        if token.startswith("-") and token[1:].lower() in path_lower:
            is_filtered = True
        if token.lower() in path_lower:
            relevance += 1

    if is_filtered:
        return 0
    return relevance


def rank(
    library: SampleLibrary,
    query: SearchParams,
    *,
    tempo_gate: Optional[str] = None,
) -> List[Tuple[Sample, int]]:
    """Score every candidate and return ``(sample, score)`` pairs, best first."""
    mode = _resolve_tempo_gate(tempo_gate)
    tokens = tokenize(query.query)
    scored: List[Tuple[Sample, int]] = []
    for pack in library.packs:
        if query.pack_id is not None and pack.meta.name != query.pack_id:
            continue
        for sample in pack.samples:
            relevance = score(query, sample, tokens, tempo_gate=mode)
            if relevance > 0:
                scored.append((sample, relevance))
    # sorted() is stable: equal scores stay in scan order.
    return sorted(scored, key=lambda pair: pair[1], reverse=True)


def search(
    library: SampleLibrary,
    query: SearchParams,
    *,
    tempo_gate: Optional[str] = None,
    default_max_results: Optional[int] = None,
) -> SearchResult:
    """Run ``query`` against ``library`` and return the ranked samples."""
    ranked = rank(library, query, tempo_gate=tempo_gate)
    if query.max_results is not None:
        limit = query.max_results
    elif default_max_results is not None:
        limit = default_max_results
    else:
        limit = tuning.DEFAULT_MAX_RESULTS
    limit = max(0, int(limit))
    return SearchResult(samples=[sample for sample, _ in ranked[:limit]])
