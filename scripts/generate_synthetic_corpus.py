from __future__ import annotations

import argparse
import json
import math
import sys
import wave
from pathlib import Path

SAMPLE_RATE = 22050


def _clamp(v: float) -> float:
    return max(-1.0, min(1.0, v))


def write_wav(path: Path, samples: list[float], sample_rate: int = SAMPLE_RATE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with wave.open(str(path), "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        pcm = bytearray()
        for s in samples:
            x = int(_clamp(s) * 32767)
            pcm += int(x).to_bytes(2, byteorder="little", signed=True)
        wf.writeframes(pcm)


def blip(freq: float = 220.0, duration_s: float = 0.05) -> list[float]:
    n = int(duration_s * SAMPLE_RATE)
    return [0.5 * math.exp(-30.0 * i / SAMPLE_RATE) * math.sin(2.0 * math.pi * freq * i / SAMPLE_RATE) for i in range(n)]


def _expected_type(rel: str) -> object:
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))
    from sample_finder.classifier import detect_type

    return detect_type(rel).to_json()


def build_corpus(root: Path) -> list[dict[str, object]]:
    cases: list[dict[str, object]] = []

    def add(rel: str, note: str) -> None:
        write_wav(root / rel, blip())
        cases.append(
            {
                "path": rel.replace("\\", "/"),
                "expected_sampletype": _expected_type("/" + rel),
                "note": note,
            }
        )

    add("Drums/kick_punchy.wav", "Plain one-shot.")
    add("Drums/808_kick_long.wav", "One-shot excluded by a '-808' query.")
    add("Drums/Loops/Loop_[90]_clap.wav", "Loop folder with bracketed tempo.")
    add("Drums/clap_oneshot.wav", "One-shot tying with the clap loop on 'clap'.")
    add("Synths/140 BPM pad.wav", "Loop via 'bpm' keyword, no bracket: tempo 0.")
    add("Synths/lead_[abc].wav", "Loop via '[' keyword with an unparseable tempo.")
    add("Synths/Construction Kit/bass_[128].wav", "Loop via construction-kit folder.")
    add("stray_hit.wav", "Loose file; indexed as a pack named after the root.")

    return cases


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate a tiny deterministic sample tree for demos/tests.")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("examples") / "synthetic_corpus",
        help="Output folder (default: examples/synthetic_corpus)",
    )
    args = parser.parse_args()

    output_root = args.output.resolve()
    output_root.mkdir(parents=True, exist_ok=True)
    cases = build_corpus(output_root)

    manifest = {
        "version": 1,
        "description": "Deterministic sample tree for Sample Finder demos and bug reports.",
        "generator": "scripts/generate_synthetic_corpus.py",
        "cases": cases,
    }
    (output_root / "manifest.json").write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    print(f"Generated {len(cases)} WAV files under {output_root}")
    print(f"Wrote manifest: {output_root / 'manifest.json'}")
    print(f"Index it with: python -m sample_finder index {output_root}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
