"""Filesystem discovery for sample packs.

Walks a sample folder in deterministic (sorted) order and hands the
audio paths to :func:`sample_finder.library.assemble_pack`.  A file
counts as audio when its name *contains* one of
``tuning.AUDIO_MARKERS``; this is a substring test, not a suffix check.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Optional, Union

from . import tuning
from .library import LogCallback, assemble_pack, build_library, make_emitter
from .models import Pack, SampleLibrary

PathLike = Union[str, os.PathLike]


def should_ignore(name: str, ignore_rules: Optional[Iterable[str]] = None) -> bool:
    rules = tuning.IGNORE_RULES if ignore_rules is None else ignore_rules
    for rule in rules:
        if name == rule or name.startswith(rule):
            return True
    return False


def is_audio_name(name: str, markers: Optional[Iterable[str]] = None) -> bool:
    markers = tuning.AUDIO_MARKERS if markers is None else markers
    return any(marker in name for marker in markers)


def collect_audio_paths(
    root: PathLike,
    *,
    markers: Optional[Iterable[str]] = None,
    ignore_rules: Optional[Iterable[str]] = None,
) -> List[str]:
    """Return audio file paths below ``root`` in deterministic order."""
    if markers is not None:
        markers = list(markers)
    if ignore_rules is not None:
        ignore_rules = list(ignore_rules)
    paths: List[str] = []
    for dirpath, dirs, files in os.walk(root):
        dirs[:] = sorted(d for d in dirs if not should_ignore(d, ignore_rules))
        for fname in sorted(files):
            if should_ignore(fname, ignore_rules) or not is_audio_name(fname, markers):
                continue
            file_path = Path(dirpath) / fname
            if file_path.is_file():
                paths.append(str(file_path))
    return paths


def _loose_audio_paths(
    root: Path,
    markers: Optional[Iterable[str]],
    ignore_rules: Optional[Iterable[str]],
) -> List[str]:
    loose: List[str] = []
    for p in sorted(root.iterdir()):
        if p.is_file() and not should_ignore(p.name, ignore_rules) and is_audio_name(p.name, markers):
            loose.append(str(p))
    return loose


def discover_packs(root: PathLike, ignore_rules: Optional[Iterable[str]] = None) -> List[Path]:
    """Return immediate child folders of ``root``; each one is a pack."""
    root = Path(root)
    if not root.exists():
        return []
    if ignore_rules is not None:
        ignore_rules = list(ignore_rules)
    return sorted(p for p in root.iterdir() if p.is_dir() and not should_ignore(p.name, ignore_rules))


def load_pack(
    folder: PathLike,
    name: Optional[str] = None,
    description: str = "",
    *,
    keywords: Optional[Iterable[str]] = None,
    markers: Optional[Iterable[str]] = None,
    ignore_rules: Optional[Iterable[str]] = None,
    log_callback: Optional[LogCallback] = None,
    log_to_console: bool = False,
) -> Pack:
    """Walk ``folder`` and assemble every audio file into one pack."""
    folder = Path(folder)
    paths = collect_audio_paths(folder, markers=markers, ignore_rules=ignore_rules)
    return assemble_pack(
        paths,
        name or folder.name,
        description,
        keywords=keywords,
        log_callback=log_callback,
        log_to_console=log_to_console,
    )


def load_library(
    root: PathLike,
    name: Optional[str] = None,
    *,
    single_pack: bool = False,
    description: str = "",
    keywords: Optional[Iterable[str]] = None,
    markers: Optional[Iterable[str]] = None,
    ignore_rules: Optional[Iterable[str]] = None,
    log_callback: Optional[LogCallback] = None,
    log_to_console: bool = False,
) -> SampleLibrary:
    """Index ``root`` into a library.

    By default every child folder of ``root`` becomes a pack, and audio
    files lying directly in ``root`` form one extra pack named after it.
    With ``single_pack`` the whole tree is a single pack.
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Sample folder not found: {root}")
    library_name = name or root.name
    emit = make_emitter(log_callback, log_to_console)
    if keywords is not None:
        keywords = list(keywords)
    if markers is not None:
        markers = list(markers)
    if ignore_rules is not None:
        ignore_rules = list(ignore_rules)

    common = dict(
        keywords=keywords,
        log_callback=log_callback,
        log_to_console=log_to_console,
    )

    if single_pack:
        emit(f"Processing pack: {root.name}")
        pack = load_pack(root, root.name, description, markers=markers, ignore_rules=ignore_rules, **common)
        return build_library(library_name, [pack])

    packs: List[Pack] = []
    pack_dirs = discover_packs(root, ignore_rules)
    emit(f"Packs discovered: {len(pack_dirs)}")
    for pack_dir in pack_dirs:
        emit(f"Processing pack: {pack_dir.name}")
        packs.append(load_pack(pack_dir, pack_dir.name, description, markers=markers, ignore_rules=ignore_rules, **common))

    loose = _loose_audio_paths(root, markers, ignore_rules)
    if loose:
        emit(f"Processing loose files: {len(loose)}")
        packs.append(assemble_pack(loose, root.name, description, **common))
    return build_library(library_name, packs)
