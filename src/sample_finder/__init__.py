"""Sample Finder package

This package contains the path-based loop/one-shot classifier, the
sample library model, the free-text search engine and the surrounding
scanner, persistence, command-line interface and optional GUI for
searching music sample packs.

Public functions and classes are re-exported here for convenience;
``sample_finder.search`` is the search function, the module stays
importable as ``from sample_finder.search import rank, score``.
"""

from .classifier import SampleKind, SampleType, detect_tempo, detect_type, extract_tempo  # noqa: F401
from .config_service import ConfigService  # noqa: F401
from .library import assemble_pack, get_packs_metadata  # noqa: F401
from .models import Pack, PackInfo, Sample, SampleLibrary, SearchParams, SearchResult  # noqa: F401
from .persistence import LibraryFormatError, load_library_json, save_library_json  # noqa: F401
from .scanner import load_library, load_pack  # noqa: F401
from .search import search  # noqa: F401

__all__ = [
    "SampleKind",
    "SampleType",
    "detect_tempo",
    "detect_type",
    "extract_tempo",
    "ConfigService",
    "assemble_pack",
    "get_packs_metadata",
    "Pack",
    "PackInfo",
    "Sample",
    "SampleLibrary",
    "SearchParams",
    "SearchResult",
    "LibraryFormatError",
    "load_library_json",
    "save_library_json",
    "load_library",
    "load_pack",
    "search",
]
