"""BlueJacket CLI — inspect and exercise a dispatcher from the shell.

Entry point registered as ``bluejacket`` in ``pyproject.toml``::

    [project.scripts]
    bluejacket = "bluejacket.cli:main"
"""

import argparse
import logging
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``bluejacket`` command."""
    parser = argparse.ArgumentParser(
        prog="bluejacket",
        description="BlueJacket — fan-out path dispatcher.",
    )
    parser.add_argument(
        "--log-level",
        default="warning",
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: warning)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- bluejacket rules -------------------------------------------------
    rules_parser = subparsers.add_parser("rules", help="List registered rules")
    rules_parser.add_argument(
        "dispatcher",
        help="Dispatcher target: module, module:attr or module@key",
    )

    # -- bluejacket resolve -----------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Resolve a path and print the context")
    resolve_parser.add_argument(
        "dispatcher",
        help="Dispatcher target: module, module:attr or module@key",
    )
    resolve_parser.add_argument("path", help="Path to resolve (e.g. /users/42?tab=posts)")
    resolve_parser.add_argument(
        "--data",
        default=None,
        help="JSON object passed to handlers as context.data",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "rules":
        from bluejacket.cli._rules import run_rules

        run_rules(args)
    elif args.command == "resolve":
        from bluejacket.cli._dispatch import run_resolve

        run_resolve(args)
