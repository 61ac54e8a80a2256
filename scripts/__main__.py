"""Command-line entry point: python -m scripts {seed,coverage}."""

import argparse
import asyncio

from scripts.coverage import _run_coverage
from scripts.seed import _run_seed


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="python -m scripts",
        description="gearbom maintenance commands",
    )
    commands = parser.add_subparsers(dest="command")
    commands.add_parser("seed", help="Load the sample NORD FLEXBLOC catalog (idempotent)")
    coverage = commands.add_parser("coverage", help="Regenerate coverage cases")
    coverage.add_argument(
        "--failed", action="store_true",
        help="List unresolved and invalid cases after the summary",
    )
    args = parser.parse_args()

    if args.command == "coverage":
        asyncio.run(_run_coverage(show_failed=args.failed))
    else:
        asyncio.run(_run_seed())


if __name__ == "__main__":
    main()
