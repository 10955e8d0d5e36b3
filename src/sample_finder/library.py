"""Assemble classified samples into packs and libraries.

The builders consume already-enumerated path strings; discovering them
on disk is :mod:`sample_finder.scanner`'s job.  Progress is reported
through the same emitter seam the CLI and GUI use: lines are printed
when ``log_to_console`` is set and forwarded to ``log_callback``.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from .classifier import SampleKind, detect_type
from .models import Pack, PackInfo, Sample, SampleLibrary

LogCallback = Callable[[str], None]


def make_emitter(log_callback: Optional[LogCallback] = None, log_to_console: bool = False) -> LogCallback:
    """Return a function that prints and/or forwards log lines."""

    def _emit_log(msg: str) -> None:
        if log_to_console:
            print(msg)
        if log_callback is not None:
            try:
                log_callback(msg)
            except Exception:
                pass

    return _emit_log


def sample_name_from_path(path: str) -> str:
    """Return the final segment of ``path`` (``/`` and ``\\`` both separate)."""
    return path.replace("\\", "/").rstrip("/").rsplit("/", 1)[-1]


def make_sample(path: str, keywords: Optional[Iterable[str]] = None) -> Sample:
    return Sample(
        path=path,
        name=sample_name_from_path(path),
        sampletype=detect_type(path, keywords),
    )


def assemble_pack(
    paths: Iterable[str],
    name: str,
    description: str = "",
    *,
    keywords: Optional[Iterable[str]] = None,
    img: Optional[str] = None,
    log_callback: Optional[LogCallback] = None,
    log_to_console: bool = False,
) -> Pack:
    """Classify ``paths`` in order and collect them into a new pack."""
    emit = make_emitter(log_callback, log_to_console)
    if keywords is not None:
        keywords = list(keywords)
    pack = Pack(meta=PackInfo(name=name, description=description, img=img))
    count_loop = 0
    count_oneshot = 0
    for path in paths:
        sample = make_sample(path, keywords)
        if sample.sampletype.is_loop:
            count_loop += 1
        else:
            count_oneshot += 1
        pack.samples.append(sample)
        emit(f"Sample found: {sample.name}")
    emit(f"Loops: {count_loop}, OneShots: {count_oneshot}")
    pack.meta.num_samples = len(pack.samples)
    return pack


def build_library(name: str, packs: Iterable[Pack]) -> SampleLibrary:
    return SampleLibrary(name=name, packs=list(packs))


def get_packs_metadata(library: SampleLibrary) -> List[PackInfo]:
    """Return a copy of every pack's metadata, in library order."""
    return [pack.meta.copy() for pack in library.packs]


def count_types(pack: Pack) -> Dict[str, int]:
    counts = {SampleKind.LOOP.value: 0, SampleKind.ONE_SHOT.value: 0}
    for sample in pack.samples:
        counts[sample.sampletype.kind.value] += 1
    return counts
