import sys
from pathlib import Path

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from sample_finder.classifier import SampleType
from sample_finder.ui.state import SearchState


def test_defaults_from_empty_config():
    state = SearchState.from_config({})
    assert state == SearchState()
    params = state.to_params()
    assert params.sample_type is None
    assert params.pack_id is None
    assert params.max_results is None


def test_config_round_trip():
    state = SearchState(
        library_path="/libs/Main.json",
        query="kick -808",
        sample_type="loop",
        filter_tempo=90,
        min_tempo=80,
        max_tempo=None,
        pack_id="Drums",
        max_results=25,
    )
    assert SearchState.from_config(state.to_config_updates()) == state


def test_to_params_builds_filters():
    params = SearchState(query="kick", sample_type="loop", filter_tempo=120, min_tempo=100).to_params()
    assert params.query == "kick"
    assert params.sample_type == SampleType.loop(120)
    assert params.min_tempo == 100

    params = SearchState(sample_type="oneshot", pack_id="Drums").to_params()
    assert params.sample_type == SampleType.one_shot()
    assert params.pack_id == "Drums"


def test_invalid_saved_values_are_dropped():
    config = {"gui": {"sample_type": "chop", "min_tempo": "fast", "max_results": True, "filter_tempo": None}}
    state = SearchState.from_config(config)
    assert state.sample_type == "any"
    assert state.min_tempo is None
    assert state.max_results is None
    assert state.filter_tempo == 0
