"""Command-line interface for Sample Finder.

Subcommands:

* ``index`` – scan a sample folder into a library JSON file
* ``search`` – run a free-text query against a library
* ``packs`` – list the packs of a library

Run ``python -m sample_finder --help`` for usage.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import tuning
from .classifier import SampleType
from .config_service import ConfigService, apply_config
from .library import count_types, get_packs_metadata
from .models import SearchParams
from .persistence import LibraryFormatError, load_library_json, save_library_json
from .scanner import load_library
from .search import search

SAMPLE_TYPE_CHOICES = ("loop", "oneshot")


def _parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Sample Finder – index and search audio sample packs",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_portable(subparser: argparse.ArgumentParser) -> None:
        subparser.add_argument(
            "--portable",
            "-p",
            action="store_true",
            help="Force portable mode (ignored if portable.flag is present)",
        )

    # index
    sp = subparsers.add_parser("index", help="Scan a sample folder and save it as a library")
    sp.add_argument("root", help="Folder containing sample packs")
    sp.add_argument("--name", help="Library name (defaults to the folder name)")
    sp.add_argument("--output", "-o", help="Folder to write <name>.json into (defaults to config library_dir or cwd)")
    sp.add_argument("--description", default="", help="Description stored on every pack")
    sp.add_argument("--single-pack", action="store_true", help="Treat the whole folder as one pack")
    sp.add_argument("--verbose", action="store_true", help="Print every sample as it is classified")
    add_portable(sp)

    # search
    sp = subparsers.add_parser("search", help="Search a library for samples")
    sp.add_argument("library", help="Path to a library JSON file")
    sp.add_argument("query", nargs="*", help="Search terms; prefix a term with '-' to exclude it (quote the whole query when it holds '-' terms)")
    sp.add_argument("--type", choices=SAMPLE_TYPE_CHOICES, dest="sample_type", help="Restrict to loops or one-shots")
    sp.add_argument("--tempo", type=int, default=0, help="Tempo of the loop filter (with --type loop)")
    sp.add_argument("--min-tempo", type=int, help="Lower tempo bound (with --type loop)")
    sp.add_argument("--max-tempo", type=int, help="Upper tempo bound (with --type loop)")
    sp.add_argument("--pack", dest="pack_id", help="Only search the pack with this exact name")
    sp.add_argument("--max-results", "-n", type=int, help="Maximum number of results")
    sp.add_argument(
        "--tempo-gate",
        choices=tuning.TEMPO_GATE_MODES,
        help="Compare tempo bounds against the filter tempo or each sample's tempo",
    )
    add_portable(sp)

    # packs
    sp = subparsers.add_parser("packs", help="List pack metadata of a library")
    sp.add_argument("library", help="Path to a library JSON file")
    add_portable(sp)

    return parser.parse_args(argv)


def _config_service() -> ConfigService:
    return ConfigService(app_dir=Path.cwd())


def build_search_params(args: argparse.Namespace) -> SearchParams:
    sample_type: Optional[SampleType] = None
    if args.sample_type == "loop":
        sample_type = SampleType.loop(args.tempo)
    elif args.sample_type == "oneshot":
        sample_type = SampleType.one_shot()
    return SearchParams(
        query=" ".join(args.query),
        sample_type=sample_type,
        min_tempo=args.min_tempo,
        max_tempo=args.max_tempo,
        pack_id=args.pack_id,
        max_results=args.max_results,
    )


def _sample_row(sample) -> Dict[str, Any]:
    row = sample.to_dict()
    row["type"] = str(sample.sampletype)
    return row


def _run_index(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    root = Path(args.root).expanduser().resolve()
    output = args.output or config.get("library_dir") or str(Path.cwd())
    try:
        library = load_library(
            root,
            args.name,
            single_pack=args.single_pack,
            description=args.description,
            log_to_console=args.verbose,
        )
    except FileNotFoundError as exc:
        print(f"Error: {exc}")
        return 1
    library_path = save_library_json(library, Path(output).expanduser())
    report = {
        "library": library.name,
        "library_path": str(library_path),
        "packs": [
            {"pack": pack.meta.name, "num_samples": pack.meta.num_samples, "counts": count_types(pack)}
            for pack in library.packs
        ],
        "total_samples": sum(len(pack.samples) for pack in library.packs),
    }
    print(json.dumps(report, indent=2))
    return 0


def _run_search(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    library = load_library_json(Path(args.library).expanduser())
    params = build_search_params(args)
    tempo_gate = args.tempo_gate or config.get("tempo_gate")
    result = search(
        library,
        params,
        tempo_gate=tempo_gate,
        default_max_results=config.get("default_max_results"),
    )
    report = {
        "library": library.name,
        "params": params.to_dict(),
        "count": len(result),
        "samples": [_sample_row(s) for s in result.samples],
    }
    print(json.dumps(report, indent=2))
    return 0


def _run_packs(args: argparse.Namespace, config: Dict[str, Any]) -> int:
    library = load_library_json(Path(args.library).expanduser())
    print(json.dumps([info.to_dict() for info in get_packs_metadata(library)], indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_arguments(argv)
    config_service = _config_service()
    config = config_service.load_config(cli_portable=bool(getattr(args, "portable", False)))
    apply_config(config)

    handlers = {
        "index": _run_index,
        "search": _run_search,
        "packs": _run_packs,
    }
    handler = handlers.get(args.command)
    if handler is None:
        print(f"Error: unrecognized command {args.command}")
        return 1
    try:
        return handler(args, config)
    except (FileNotFoundError, LibraryFormatError) as exc:
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
