#!/usr/bin/env python3
"""
Treatment Network CLI

Network meta-analysis geometry and ranking from the command line.

Commands:
    geometry  - Assess connectivity and structure of a comparison network
    rank      - Rank treatments by Monte-Carlo simulation (SUCRA, P-score)

Input files may be JSON, YAML or CSV. See LocalFileStore for layouts.

Usage:
    nma-cli geometry comparisons.csv
    nma-cli geometry comparisons.json --json
    nma-cli rank effects.yaml --simulations 20000 --seed 1
    nma-cli rank effects.csv --lower-is-better -o output/ranking.json
"""
import argparse
import json
import logging
import sys
from typing import List, Optional

from treatment_network.core.config import EngineConfig
from treatment_network.core.exceptions import InvalidInput
from treatment_network.adapters.file_store import LocalFileStore
from treatment_network.application.network_service import NetworkService
from treatment_network.cli import display


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nma-cli",
        description="Network meta-analysis geometry and treatment ranking.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s geometry comparisons.csv            Assess network structure
  %(prog)s geometry data.json --json           Print the assessment as JSON
  %(prog)s rank effects.yaml --seed 7          Reproducible ranking
  %(prog)s rank effects.csv --lower-is-better  Lower effect sizes are better
""",
    )
    parser.add_argument("--config", "-c", metavar="FILE", help="Engine configuration (YAML)")

    commands = parser.add_subparsers(dest="command", required=True)

    geometry = commands.add_parser("geometry", help="Assess network geometry")
    geometry.add_argument("input", help="File of treatment comparisons")
    _add_output_arguments(geometry)

    rank = commands.add_parser("rank", help="Rank treatments")
    rank.add_argument("input", help="File of treatment effects")
    rank.add_argument("--simulations", "-n", type=int, metavar="N",
                      help="Number of Monte-Carlo draws (default: 10000)")
    rank.add_argument("--lower-is-better", action="store_true",
                      help="Treat lower effect sizes as better")
    rank.add_argument("--seed", type=int, help="Random seed for reproducibility")
    _add_output_arguments(rank)

    return parser


def _add_output_arguments(parser: argparse.ArgumentParser) -> None:
    output = parser.add_argument_group("Output")
    output.add_argument("--output", "-o", metavar="FILE", help="Export result to JSON file")
    output.add_argument("--json", action="store_true", help="Print result as JSON to stdout")
    output.add_argument("--quiet", "-q", action="store_true", help="Suppress console display")
    output.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def run_command(args: argparse.Namespace, store: LocalFileStore):
    config = EngineConfig.from_yaml(args.config) if args.config else EngineConfig()
    service = NetworkService(config)

    if args.command == "geometry":
        return service.assess_geometry(store.read_comparisons(args.input))

    return service.rank(
        store.read_effects(args.input),
        n_simulations=args.simulations,
        higher_is_better=False if args.lower_is_better else None,
        seed=args.seed,
    )


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    log_level = (
        logging.DEBUG if args.verbose
        else logging.WARNING if args.quiet or args.json
        else logging.INFO
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    store = LocalFileStore()
    try:
        result = run_command(args, store)
    except (InvalidInput, FileNotFoundError) as exc:
        print(display.colored(f"Error: {exc}", display.Colors.RED), file=sys.stderr)
        if args.verbose:
            logging.exception("Command failed")
        return 1

    if args.output:
        store.write_json(args.output, result.to_dict())
        if not (args.quiet or args.json):
            print(display.colored(f"✓ Results exported to: {args.output}", display.Colors.GREEN))

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    elif not args.quiet:
        if args.command == "geometry":
            display.display_geometry(result)
        else:
            display.display_ranking(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
