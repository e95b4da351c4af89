"""``bluejacket resolve`` — run one path through a dispatcher.

Prints the rules that matched, then the resulting context as JSON
(``router`` omitted, unserializable values shown via ``repr``).
"""

import argparse
import functools
import json
import sys
from typing import Any

import anyio

from bluejacket.cli._resolve import load_or_exit


def _parse_data(raw: str | None) -> dict[str, Any]:
    if raw is None:
        return {}
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        print(f"Error: --data is not valid JSON: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    if not isinstance(data, dict):
        print("Error: --data must be a JSON object", file=sys.stderr)
        raise SystemExit(2)
    return data


def run_resolve(args: argparse.Namespace) -> None:
    """Resolve ``args.path`` and print matched rules plus the context."""
    dispatcher = load_or_exit(args.dispatcher)
    data = _parse_data(args.data)

    matches = dispatcher.match(args.path)
    if not matches:
        print(f"No rules match {args.path!r}.")
    for match in matches:
        print(f"match: {match.rule.describe()}")

    context = anyio.run(functools.partial(dispatcher.resolve, args.path, data))

    output = {key: value for key, value in context.items() if key != "router"}
    print(json.dumps(output, indent=2, default=repr, sort_keys=True))
