"""Path-based loop/one-shot classification.

A sample is classified from its path string alone: a loop keyword
anywhere in the lowercased path marks it as a loop, and the first
bracketed integer (``"Loop_[90]_clap.wav"``) is read as its tempo.
Nothing here touches the filesystem or raises; malformed brackets
simply fall back to tempo 0.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Optional

from . import tuning

# Signed 32-bit range; anything outside is treated as unparseable.
_TEMPO_MIN = -(2**31)
_TEMPO_MAX = 2**31 - 1
_TEMPO_RE = re.compile(r"[+-]?[0-9]+")


class SampleKind(str, Enum):
    LOOP = "Loop"
    ONE_SHOT = "OneShot"


@dataclass(frozen=True, order=True)
class SampleType:
    """Tagged sample type: ``Loop(tempo)`` or ``OneShot``.

    Loops sort before one-shots, loops among themselves by tempo.
    """

    kind: SampleKind
    tempo: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind is SampleKind.ONE_SHOT and self.tempo is not None:
            raise ValueError("OneShot samples do not carry a tempo")
        if self.kind is SampleKind.LOOP and self.tempo is None:
            object.__setattr__(self, "tempo", 0)

    @classmethod
    def loop(cls, tempo: int = 0) -> "SampleType":
        return cls(SampleKind.LOOP, int(tempo))

    @classmethod
    def one_shot(cls) -> "SampleType":
        return cls(SampleKind.ONE_SHOT)

    @property
    def is_loop(self) -> bool:
        return self.kind is SampleKind.LOOP

    def same_variant(self, other: "SampleType") -> bool:
        """Compare discriminants only; the tempo payload is ignored."""
        return self.kind is other.kind

    def to_json(self) -> Any:
        if self.is_loop:
            return {SampleKind.LOOP.value: self.tempo}
        return SampleKind.ONE_SHOT.value

    @classmethod
    def from_json(cls, data: Any) -> "SampleType":
        if data == SampleKind.ONE_SHOT.value:
            return cls.one_shot()
        if isinstance(data, dict) and set(data) == {SampleKind.LOOP.value}:
            tempo = data[SampleKind.LOOP.value]
            if isinstance(tempo, int) and not isinstance(tempo, bool):
                return cls.loop(tempo)
        raise ValueError(f"Unrecognised sample type: {data!r}")

    def __str__(self) -> str:
        if self.is_loop:
            return f"Loop({self.tempo})"
        return "OneShot"


def extract_tempo(path: str) -> Optional[int]:
    """Return the integer inside the first ``[...]`` of ``path``, if any."""
    start = path.find("[")
    if start < 0:
        return None
    end = path.find("]", start + 1)
    if end < 0:
        return None
    inner = path[start + 1 : end]
    if not _TEMPO_RE.fullmatch(inner):
        return None
    value = int(inner)
    if value < _TEMPO_MIN or value > _TEMPO_MAX:
        return None
    return value


def detect_tempo(path: str) -> int:
    """Like :func:`extract_tempo` but 0 when no tempo can be read."""
    tempo = extract_tempo(path)
    return 0 if tempo is None else tempo


def detect_type(path: str, keywords: Optional[Iterable[str]] = None) -> SampleType:
    """Classify ``path`` as a loop (with tempo) or a one-shot."""
    if keywords is None:
        keywords = tuning.LOOP_KEYWORDS
    path_lower = path.lower()
    for keyword in keywords:
        if keyword and keyword.lower() in path_lower:
            return SampleType.loop(detect_tempo(path_lower))
    return SampleType.one_shot()
