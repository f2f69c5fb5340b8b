#!/usr/bin/env python
# Copyright 2017-present Kensho Technologies, LLC.
"""Utility modeled after json.tool, pretty-prints a compiled query read from stdin to stdout.

Used as: python -m cayley_client.tool
"""
import sys

from .debugging_utils import pretty_print_gremlin


def main() -> None:
    """Read a compiled query from standard input, and write it pretty-printed to standard output."""
    query = " ".join(line.strip() for line in sys.stdin.readlines())

    sys.stdout.write(pretty_print_gremlin(query) + "\n")


if __name__ == "__main__":
    main()
