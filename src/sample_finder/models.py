"""Library data model.

The shapes mirror the persisted JSON document::

    {
      "packs": [
        {
          "samples": [
            {"path": "kit/Loop_[90]_clap.wav", "name": "Loop_[90]_clap.wav",
             "sampletype": {"Loop": 90}},
            {"path": "kit/clap.wav", "name": "clap.wav", "sampletype": "OneShot"}
          ],
          "meta": {"description": "", "name": "Drums", "img": null, "num_samples": 2}
        }
      ],
      "name": "MyLibrary"
    }

A :class:`SampleLibrary` owns its packs and each :class:`Pack` owns its
samples and metadata; there are no back references.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

from .classifier import SampleType


@dataclass(frozen=True, order=True)
class Sample:
    path: str
    name: str
    sampletype: SampleType

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "name": self.name,
            "sampletype": self.sampletype.to_json(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sample":
        return cls(
            path=str(data["path"]),
            name=str(data["name"]),
            sampletype=SampleType.from_json(data["sampletype"]),
        )


@dataclass
class PackInfo:
    """Pack metadata.  ``num_samples`` is a load-time snapshot, not a live count."""

    name: str
    description: str = ""
    img: Optional[str] = None
    num_samples: Optional[int] = None

    def copy(self) -> "PackInfo":
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "name": self.name,
            "img": self.img,
            "num_samples": self.num_samples,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PackInfo":
        return cls(
            name=str(data["name"]),
            description=str(data.get("description", "")),
            img=data.get("img"),
            num_samples=data.get("num_samples"),
        )


@dataclass
class Pack:
    meta: PackInfo
    samples: List[Sample] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.meta.name

    def to_dict(self) -> Dict[str, Any]:
        return {
            "samples": [s.to_dict() for s in self.samples],
            "meta": self.meta.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pack":
        return cls(
            meta=PackInfo.from_dict(data["meta"]),
            samples=[Sample.from_dict(s) for s in data.get("samples", [])],
        )


@dataclass
class SampleLibrary:
    name: str
    packs: List[Pack] = field(default_factory=list)

    def iter_samples(self):
        for pack in self.packs:
            yield from pack.samples

    def to_dict(self) -> Dict[str, Any]:
        return {
            "packs": [p.to_dict() for p in self.packs],
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SampleLibrary":
        return cls(
            name=str(data["name"]),
            packs=[Pack.from_dict(p) for p in data.get("packs", [])],
        )


@dataclass
class SearchParams:
    """A search request.

    ``sample_type`` filters by variant only.  ``min_tempo``/``max_tempo``
    apply only when the filter is a loop.  ``pack_id`` must equal a pack's
    name exactly.  ``max_results`` falls back to the configured default.
    """

    query: str = ""
    sample_type: Optional[SampleType] = None
    min_tempo: Optional[int] = None
    max_tempo: Optional[int] = None
    pack_id: Optional[str] = None
    max_results: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "sample_type": self.sample_type.to_json() if self.sample_type is not None else None,
            "max_tempo": self.max_tempo,
            "min_tempo": self.min_tempo,
            "pack_id": self.pack_id,
            "max_results": self.max_results,
        }


@dataclass
class SearchResult:
    samples: List[Sample] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.samples)

    def to_dict(self) -> Dict[str, Any]:
        return {"samples": [s.to_dict() for s in self.samples]}
