from __future__ import annotations

import argparse
import cProfile
import pstats
import sys
import time
from pathlib import Path


def _load(library_path: Path):
    repo_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(repo_root / "src"))

    from sample_finder.persistence import load_library_json

    return load_library_json(library_path)


def main() -> int:
    parser = argparse.ArgumentParser(description="Time and profile sample_finder.search over a saved library.")
    parser.add_argument("--library", type=Path, required=True, help="Library JSON file to search")
    parser.add_argument("--query", default="kick", help="Query text")
    parser.add_argument("--repeat", type=int, default=200, help="Number of searches to run")
    parser.add_argument("--profile", action="store_true", help="Enable cProfile and print top cumulative functions")
    parser.add_argument("--stats", type=int, default=30, help="Number of cProfile rows to print")
    parser.add_argument("--sort", default="cumulative", help="cProfile sort key (default: cumulative)")
    args = parser.parse_args()

    library_path = args.library.resolve()
    if not library_path.exists():
        print(f"error: library not found: {library_path}", file=sys.stderr)
        return 2

    library = _load(library_path)
    from sample_finder.models import SearchParams
    from sample_finder.search import search

    total = sum(len(p.samples) for p in library.packs)
    print(f"library={library.name}")
    print(f"packs={len(library.packs)} samples={total}")
    print(f"profile={args.profile}")

    params = SearchParams(query=args.query)
    prof = cProfile.Profile() if args.profile else None
    start = time.perf_counter()
    if prof is not None:
        prof.enable()

    hits = 0
    for _ in range(max(1, args.repeat)):
        hits = len(search(library, params))

    if prof is not None:
        prof.disable()

    elapsed = time.perf_counter() - start
    runs = max(1, args.repeat)
    print(f"hits={hits}")
    print(f"elapsed_seconds={elapsed:.3f}")
    print(f"ms_per_search={(elapsed * 1000.0) / runs:.3f}")

    if prof is not None:
        stats = pstats.Stats(prof)
        stats.sort_stats(args.sort).print_stats(args.stats)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
