# Copyright 2017-present Kensho Technologies, LLC.
from typing import List


INDENTATION = " " * 4


def _split_top_level(query: str, separator: str) -> List[str]:
    """Split the query at each separator that is neither nested in parentheses nor quoted."""
    parts = []
    current: List[str] = []
    depth = 0
    in_string = False
    escaped = False
    for char in query:
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
        elif char == '"':
            in_string = True
        elif char in "([":
            depth += 1
        elif char in ")]":
            depth -= 1
            if depth < 0:
                raise AssertionError("Unbalanced parentheses in query: {}".format(query))
        elif char == separator and depth == 0:
            parts.append("".join(current))
            current = []
            continue
        current.append(char)

    parts.append("".join(current))
    return parts


def _pretty_print_statement(statement: str) -> str:
    """Return the statement with each chained step on its own, indented line."""
    parts = [part.strip() for part in _split_top_level(statement, ".")]
    if len(parts) < 2:
        return statement.strip()

    # Keep the graph object together with its first call, i.e. g.V("foo").
    head = parts[0] + "." + parts[1]
    return "\n".join([head] + [INDENTATION + "." + part for part in parts[2:]])


def pretty_print_gremlin(gremlin: str) -> str:
    """Return a human-readable representation of a compiled query string.

    Every declaration is printed as its own statement ahead of the query, and every
    step after the first call of a statement is printed on its own, indented line.
    """
    statements = [
        statement for statement in _split_top_level(gremlin.strip(), ";") if statement.strip()
    ]
    output = [_pretty_print_statement(statement) + ";" for statement in statements[:-1]]
    if statements:
        output.append(_pretty_print_statement(statements[-1]))
    return "\n".join(output)
