"""JSON persistence for sample libraries.

A library is stored as ``<folder>/<library name>.json`` and validated
against ``schemas/library.schema.json`` when loaded.
"""

from __future__ import annotations

import json
from json import JSONDecodeError
from pathlib import Path
from typing import Any, Union

import jsonschema

from .models import SampleLibrary

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"
LIBRARY_SCHEMA_PATH = SCHEMA_DIR / "library.schema.json"


class LibraryFormatError(ValueError):
    """Raised when a library document cannot be parsed or fails validation."""


def _load_schema(path: Path) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def library_filename(name: str) -> str:
    return f"{name}.json"


def save_library_json(library: SampleLibrary, folder: Union[str, Path]) -> Path:
    """Write ``library`` to ``folder`` and return the written path."""
    file_path = Path(folder) / library_filename(library.name)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        json.dump(library.to_dict(), f, indent=2)
    return file_path


def load_library_json(path: Union[str, Path]) -> SampleLibrary:
    """Read and validate a library document."""
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Library file not found: {file_path}")
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (JSONDecodeError, UnicodeDecodeError) as exc:
        raise LibraryFormatError(f"Couldn't parse library {file_path}: {exc}") from exc
    try:
        jsonschema.validate(instance=data, schema=_load_schema(LIBRARY_SCHEMA_PATH))
    except jsonschema.ValidationError as exc:
        raise LibraryFormatError(f"Invalid library {file_path}: {exc.message}") from exc
    # The schema counts 90.0 as an integer; from_dict does not.
    try:
        return SampleLibrary.from_dict(data)
    except (KeyError, TypeError, ValueError) as exc:
        raise LibraryFormatError(f"Invalid library {file_path}: {exc}") from exc
