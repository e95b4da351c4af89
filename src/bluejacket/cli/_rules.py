"""``bluejacket rules`` — list registered rules in execution order."""

import argparse

from bluejacket.cli._resolve import load_or_exit


def run_rules(args: argparse.Namespace) -> None:
    """Print one numbered ``Rule.describe()`` line per rule.

    Rules run in this order for every path they match, so the numbers
    are also the order in which a resolve visits them.
    """
    dispatcher = load_or_exit(args.dispatcher)
    print(repr(dispatcher))

    if not len(dispatcher):
        print("No rules registered.")
        return

    width = len(str(len(dispatcher)))
    for position, rule in enumerate(dispatcher, start=1):
        print(f"{position:>{width}}. {rule.describe()}")
