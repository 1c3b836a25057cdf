"""Command-line interface for transfer-audit."""

import argparse
import json
import logging
import sys

from pydantic import ValidationError

from transfer_audit.app.build import build
from transfer_audit.config.models import load_config

VERSION = "0.1.0"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def cmd_run(args: argparse.Namespace) -> int:
    """Execute run command."""
    setup_logging(args.verbose)

    try:
        model = load_config(args.config)
        overrides = {}
        if args.radius_m is not None:
            overrides["radius_m"] = args.radius_m
        if args.jobs is not None:
            overrides["jobs"] = args.jobs
        if overrides:
            analyzer = model.analyzer.model_validate(
                {**model.analyzer.model_dump(), **overrides}
            )
            model = model.model_copy(update={"analyzer": analyzer})
    except (OSError, ValidationError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    try:
        report = build(model).run()
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Transfer analysis failed")
        return 1

    print(json.dumps(report.as_dict()), file=sys.stderr)
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="transfer-audit",
        description="Report nearby transit stops whose street routing is missing or too long",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    run_parser = subparsers.add_parser("run", help="Analyze transfers of a graph")
    run_parser.add_argument("--config", required=True, help="Path to JSON config file")
    run_parser.add_argument(
        "--radius-m",
        type=float,
        default=None,
        help="Override the direct search radius in meters",
    )
    run_parser.add_argument(
        "--jobs",
        type=int,
        default=None,
        help="Override the number of worker threads",
    )
    run_parser.set_defaults(func=cmd_run)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
