from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from sample_finder.classifier import SampleType
from sample_finder.models import SearchParams

SAMPLE_TYPE_FILTERS: tuple[str, ...] = ("any", "loop", "oneshot")


def _optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@dataclass(slots=True)
class SearchState:
    library_path: str = ""
    query: str = ""
    sample_type: str = "any"
    filter_tempo: int = 0
    min_tempo: Optional[int] = None
    max_tempo: Optional[int] = None
    pack_id: str = ""
    max_results: Optional[int] = None

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "SearchState":
        gui = config.get("gui")
        if not isinstance(gui, dict):
            gui = {}
        sample_type = str(gui.get("sample_type", "any"))
        if sample_type not in SAMPLE_TYPE_FILTERS:
            sample_type = "any"
        return cls(
            library_path=str(config.get("last_library", "")),
            query=str(gui.get("query", "")),
            sample_type=sample_type,
            filter_tempo=_optional_int(gui.get("filter_tempo")) or 0,
            min_tempo=_optional_int(gui.get("min_tempo")),
            max_tempo=_optional_int(gui.get("max_tempo")),
            pack_id=str(gui.get("pack_id") or ""),
            max_results=_optional_int(gui.get("max_results")),
        )

    def to_config_updates(self) -> dict[str, Any]:
        gui: dict[str, Any] = {
            "query": self.query,
            "sample_type": self.sample_type,
            "filter_tempo": self.filter_tempo,
            "pack_id": self.pack_id,
        }
        for key in ("min_tempo", "max_tempo", "max_results"):
            value = getattr(self, key)
            if value is not None:
                gui[key] = value
        return {"last_library": self.library_path, "gui": gui}

    def to_params(self) -> SearchParams:
        sample_type: Optional[SampleType] = None
        if self.sample_type == "loop":
            sample_type = SampleType.loop(self.filter_tempo)
        elif self.sample_type == "oneshot":
            sample_type = SampleType.one_shot()
        return SearchParams(
            query=self.query,
            sample_type=sample_type,
            min_tempo=self.min_tempo,
            max_tempo=self.max_tempo,
            pack_id=self.pack_id or None,
            max_results=self.max_results,
        )
