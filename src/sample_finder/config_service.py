"""Configuration management for Sample Finder.

This module centralises finding and loading the ``config.json`` file.
It supports both AppData and portable installation modes, resolves the
appropriate configuration directory, and validates configuration
against the bundled JSON schema.

Portable mode is controlled via a ``portable.flag`` file located in the
application directory or by passing ``--portable`` to the CLI.  The
flag file takes precedence over the command line.

Recognised keys::

    {
      "library_dir": "~/Samples/libraries",
      "last_library": "~/Samples/libraries/Main.json",
      "default_max_results": 25,
      "tempo_gate": "filter",
      "tuning": {"LOOP_KEYWORDS": ["/loop", "bpm", "loop"]},
      "gui": {"query": "kick", "sample_type": "oneshot"}
    }
"""

from __future__ import annotations

import json
import os
import platform
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema

from . import tuning

SCHEMA_DIR = Path(__file__).resolve().parent / "schemas"


def _get_appdata_root(app_name: str = "SampleFinder") -> Path:
    """Return the platform-specific base directory for config files."""
    system = platform.system().lower()
    if system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / app_name
        return Path.home() / f"AppData/Roaming/{app_name}"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / app_name
    return Path.home() / ".config" / app_name


def _load_json(path: Path) -> Any:
    if not path.exists():
        return None
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _save_json(data: Any, file_path: Path) -> None:
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with file_path.open("w", encoding="utf-8", newline="\n") as f:
        json.dump(data, f, indent=2)


def _validate_json(data: Any, schema_path: Path) -> None:
    """Validate JSON against a schema file; raises ``ValueError`` when invalid."""
    schema = _load_json(schema_path)
    if not schema:
        return
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as exc:
        raise ValueError(f"Invalid configuration: {exc.message}") from exc


@dataclass
class ConfigService:
    """Resolve and manage Sample Finder configuration."""

    app_dir: Path
    portable_flag_filename: str = "portable.flag"
    config_filename: str = "config.json"
    schema_dir: Path = SCHEMA_DIR
    config_schema_name: str = "config.schema.json"
    _cached_mode: Optional[bool] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.app_dir = Path(self.app_dir)

    def _portable_flag_exists(self) -> bool:
        return (self.app_dir / self.portable_flag_filename).exists()

    def detect_mode(self, cli_portable: bool = False) -> bool:
        """Return ``True`` if portable mode should be used.

        A ``portable.flag`` file in the application directory always
        forces portable mode; otherwise ``cli_portable`` decides.  The
        result is cached for subsequent calls.
        """
        if self._cached_mode is None:
            if self._portable_flag_exists():
                self._cached_mode = True
            else:
                self._cached_mode = bool(cli_portable)
        return self._cached_mode

    def get_config_dir(self, cli_portable: bool = False) -> Path:
        if self.detect_mode(cli_portable=cli_portable):
            return self.app_dir
        return _get_appdata_root()

    def get_config_path(self, cli_portable: bool = False) -> Path:
        return self.get_config_dir(cli_portable) / self.config_filename

    def get_schema_path(self) -> Path:
        return Path(self.schema_dir) / self.config_schema_name

    def load_config(self, cli_portable: bool = False) -> Dict[str, Any]:
        """Load configuration from the resolved path, validating against schema."""
        cfg: Dict[str, Any] = {}
        try:
            data = _load_json(self.get_config_path(cli_portable))
        except json.JSONDecodeError as exc:
            print(f"Warning: Couldn't parse configuration ({exc}). Falling back to defaults.")
            data = None
        if data is not None:
            cfg = data
        schema_path = self.get_schema_path()
        if schema_path.exists():
            try:
                _validate_json(cfg, schema_path)
            except ValueError as exc:
                print(f"Warning: {exc}. Falling back to defaults.")
                cfg = {}
        return cfg

    def save_config(self, config: Dict[str, Any], cli_portable: bool = False) -> None:
        """Write configuration to disk, validating against the schema first."""
        schema_path = self.get_schema_path()
        if schema_path.exists():
            _validate_json(config, schema_path)
        _save_json(config, self.get_config_path(cli_portable))

    def update_config(self, updates: Dict[str, Any], cli_portable: bool = False) -> Dict[str, Any]:
        config = self.load_config(cli_portable)
        config.update(updates)
        self.save_config(config, cli_portable)
        return config


def apply_config(config: Dict[str, Any]) -> None:
    """Push the ``tuning`` section of ``config`` into :mod:`sample_finder.tuning`."""
    overrides = config.get("tuning") if isinstance(config, dict) else None
    if isinstance(overrides, dict):
        tuning.apply_overrides(overrides)
