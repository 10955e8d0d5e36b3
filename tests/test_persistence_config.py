import json
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from sample_finder import tuning
from sample_finder.config_service import ConfigService, apply_config
from sample_finder.library import assemble_pack, build_library
from sample_finder.persistence import (
    LibraryFormatError,
    library_filename,
    load_library_json,
    save_library_json,
)


@pytest.fixture
def library():
    return build_library(
        "Main",
        [
            assemble_pack(["kit/Loop_[90]_clap.wav", "kit/clap_oneshot.wav"], "Drums", "Acoustic"),
            assemble_pack(["syn/lead.wav"], "Synths"),
        ],
    )


# ============================================================================
# Persistence
# ============================================================================

def test_save_then_load_is_identity(tmp_path: Path, library):
    path = save_library_json(library, tmp_path / "libs")
    assert path == tmp_path / "libs" / library_filename("Main")
    assert load_library_json(path) == library


def test_saved_document_shape(tmp_path: Path, library):
    path = save_library_json(library, tmp_path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["name"] == "Main"
    first = data["packs"][0]
    assert first["meta"] == {"description": "Acoustic", "name": "Drums", "img": None, "num_samples": 2}
    assert first["samples"][0] == {
        "path": "kit/Loop_[90]_clap.wav",
        "name": "Loop_[90]_clap.wav",
        "sampletype": {"Loop": 90},
    }
    assert first["samples"][1]["sampletype"] == "OneShot"


def test_load_missing_library(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_library_json(tmp_path / "absent.json")


def test_load_unparseable_library(tmp_path: Path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(LibraryFormatError):
        load_library_json(path)


def test_load_library_with_bad_sampletype(tmp_path: Path):
    path = tmp_path / "bad.json"
    doc = {
        "name": "Bad",
        "packs": [{"samples": [{"path": "a.wav", "name": "a.wav", "sampletype": "Chop"}], "meta": {"name": "P"}}],
    }
    path.write_text(json.dumps(doc), encoding="utf-8")
    with pytest.raises(LibraryFormatError):
        load_library_json(path)


def test_load_library_that_is_not_utf8(tmp_path: Path):
    path = tmp_path / "latin.json"
    path.write_bytes(b'{"name": "\xff", "packs": []}')
    with pytest.raises(LibraryFormatError):
        load_library_json(path)


def test_load_library_with_float_tempo(tmp_path: Path):
    path = tmp_path / "float.json"
    doc = {
        "name": "Float",
        "packs": [
            {"samples": [{"path": "a.wav", "name": "a.wav", "sampletype": {"Loop": 90.0}}], "meta": {"name": "P"}}
        ],
    }
    path.write_text(json.dumps(doc), encoding="utf-8")
    with pytest.raises(LibraryFormatError, match="Invalid library"):
        load_library_json(path)


def test_library_format_error_is_value_error():
    assert issubclass(LibraryFormatError, ValueError)


# ============================================================================
# ConfigService
# ============================================================================

def test_portable_flag_forces_app_dir(tmp_path: Path):
    (tmp_path / "portable.flag").write_text("", encoding="utf-8")
    service = ConfigService(app_dir=tmp_path)
    assert service.detect_mode(cli_portable=False) is True
    assert service.get_config_path() == tmp_path / "config.json"


def test_appdata_dir_used_without_portable(tmp_path: Path, monkeypatch):
    monkeypatch.setattr("sample_finder.config_service.platform.system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    service = ConfigService(app_dir=tmp_path / "app")
    assert service.get_config_dir() == tmp_path / "xdg" / "SampleFinder"


def test_config_round_trip(tmp_path: Path):
    service = ConfigService(app_dir=tmp_path)
    config = {"default_max_results": 25, "tempo_gate": "sample", "tuning": {"LOOP_KEYWORDS": ["loop"]}}
    service.save_config(config, cli_portable=True)
    assert service.load_config(cli_portable=True) == config


def test_save_invalid_config_raises(tmp_path: Path):
    service = ConfigService(app_dir=tmp_path)
    with pytest.raises(ValueError, match="Invalid configuration"):
        service.save_config({"tempo_gate": "nearest"}, cli_portable=True)


def test_load_invalid_config_falls_back(tmp_path: Path, capsys):
    (tmp_path / "config.json").write_text(json.dumps({"default_max_results": "many"}), encoding="utf-8")
    service = ConfigService(app_dir=tmp_path)
    assert service.load_config(cli_portable=True) == {}
    assert "Falling back to defaults" in capsys.readouterr().out


def test_update_config_merges(tmp_path: Path):
    service = ConfigService(app_dir=tmp_path)
    service.save_config({"library_dir": "/libs"}, cli_portable=True)
    merged = service.update_config({"last_library": "/libs/Main.json"}, cli_portable=True)
    assert merged == {"library_dir": "/libs", "last_library": "/libs/Main.json"}


# ============================================================================
# Tuning overrides
# ============================================================================

@pytest.fixture
def restore_tuning(monkeypatch):
    for key in ("LOOP_KEYWORDS", "AUDIO_MARKERS", "IGNORE_RULES", "DEFAULT_MAX_RESULTS", "TEMPO_GATE"):
        monkeypatch.setattr(tuning, key, getattr(tuning, key))


def test_apply_overrides_replaces_known_values(restore_tuning):
    tuning.apply_overrides({"LOOP_KEYWORDS": ["groove"], "AUDIO_MARKERS": [".flac"], "DEFAULT_MAX_RESULTS": 3})
    assert tuning.LOOP_KEYWORDS == ["groove"]
    assert tuning.AUDIO_MARKERS == (".flac",)
    assert tuning.DEFAULT_MAX_RESULTS == 3


def test_apply_overrides_ignores_bad_values(restore_tuning):
    before = list(tuning.LOOP_KEYWORDS)
    tuning.apply_overrides(
        {
            "LOOP_KEYWORDS": "loop",
            "DEFAULT_MAX_RESULTS": True,
            "TEMPO_GATE": "nearest",
            "UNKNOWN": 1,
            "TEMPO_GATE_MODES": ["x"],
        }
    )
    assert tuning.LOOP_KEYWORDS == before
    assert tuning.DEFAULT_MAX_RESULTS == 10
    assert tuning.TEMPO_GATE == "filter"
    assert tuning.TEMPO_GATE_MODES == ("filter", "sample")
    assert not hasattr(tuning, "UNKNOWN")


def test_apply_config_uses_tuning_section(restore_tuning):
    apply_config({"tuning": {"TEMPO_GATE": "sample"}, "tempo_gate": "filter"})
    assert tuning.TEMPO_GATE == "sample"
