import sys
from pathlib import Path

import pytest

# Add the src directory to sys.path so that sample_finder can be imported
SRC_DIR = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC_DIR))

from sample_finder.classifier import (
    SampleKind,
    SampleType,
    detect_tempo,
    detect_type,
    extract_tempo,
)


# ============================================================================
# detect_type
# ============================================================================

def test_bracketed_tempo_alone_marks_loop():
    assert detect_type("drums/kick_[120].wav") == SampleType.loop(120)


def test_no_keyword_is_one_shot_without_tempo():
    result = detect_type("kit/snare_hard.wav")
    assert result == SampleType.one_shot()
    assert result.kind is SampleKind.ONE_SHOT
    assert result.tempo is None


def test_loop_keyword_with_malformed_bracket_has_zero_tempo():
    assert detect_type("loop_[abc") == SampleType.loop(0)


def test_keyword_match_is_case_insensitive():
    assert detect_type("kit/Loop_[90]_clap.wav") == SampleType.loop(90)
    assert detect_type("Synths/140 BPM pad.wav") == SampleType.loop(0)
    assert detect_type("Pack/Construction Kit/bass.wav") == SampleType.loop(0)


def test_detect_type_is_deterministic():
    path = "Vocals/Loops/vox_chop_[128].mp3"
    assert detect_type(path) == detect_type(path)


def test_only_first_bracket_region_is_used():
    assert detect_type("x_[90]_[120].wav") == SampleType.loop(90)
    assert detect_type("x_[abc]_[120].wav") == SampleType.loop(0)


def test_injected_keywords_replace_defaults():
    assert detect_type("fx/riser_long.wav", keywords=["riser"]) == SampleType.loop(0)
    assert detect_type("fx/drum_loop.wav", keywords=[]) == SampleType.one_shot()
    assert detect_type("fx/drum_loop.wav", keywords=["RISER"]) == SampleType.one_shot()


# ============================================================================
# Tempo extraction
# ============================================================================

@pytest.mark.parametrize(
    "path, expected",
    [
        ("kit/[95].wav", 95),
        ("kit/[+90].wav", 90),
        ("kit/[-5].wav", -5),
        ("kit/][12].wav", 12),
        ("kit/no brackets.wav", None),
        ("kit/[12.wav", None),
        ("kit/a]b[1.wav", None),
        ("kit/[ 90].wav", None),
        ("kit/[].wav", None),
        ("kit/[9_0].wav", None),
        ("kit/[99999999999].wav", None),
    ],
)
def test_extract_tempo(path, expected):
    assert extract_tempo(path) == expected


def test_detect_tempo_falls_back_to_zero():
    assert detect_tempo("kit/[abc].wav") == 0
    assert detect_tempo("kit/[128].wav") == 128


# ============================================================================
# SampleType semantics
# ============================================================================

def test_variants_never_equal_even_at_zero_tempo():
    assert SampleType.loop(0) != SampleType.one_shot()


def test_same_variant_ignores_tempo():
    assert SampleType.loop(0).same_variant(SampleType.loop(174))
    assert not SampleType.loop(0).same_variant(SampleType.one_shot())


def test_loops_sort_before_one_shots():
    values = [SampleType.one_shot(), SampleType.loop(140), SampleType.loop(90)]
    assert sorted(values) == [SampleType.loop(90), SampleType.loop(140), SampleType.one_shot()]


def test_one_shot_cannot_carry_tempo():
    with pytest.raises(ValueError):
        SampleType(SampleKind.ONE_SHOT, 120)


def test_json_shape():
    assert SampleType.loop(90).to_json() == {"Loop": 90}
    assert SampleType.one_shot().to_json() == "OneShot"
    assert SampleType.from_json({"Loop": 90}) == SampleType.loop(90)
    assert SampleType.from_json("OneShot") == SampleType.one_shot()
    with pytest.raises(ValueError):
        SampleType.from_json({"Loop": "fast"})
    with pytest.raises(ValueError):
        SampleType.from_json("Chop")
