# Copyright 2017-present Kensho Technologies, LLC.
"""Common helper objects and methods for rendering path arguments."""
import json
import string
from typing import Any, Iterable, Optional, Sequence, Tuple

from ..exceptions import CayleyInvalidArgumentError, CayleyInvalidSelectorError


# The name of the graph object exposed by the query endpoint.
# Every anchored route and every morphism is reached through it: g.V(...), g.M().
GRAPH_OBJECT_NAME = "g"

# Placeholder for an omitted first argument when the second argument is constrained.
NULL_ARGUMENT = "null"

VARIABLE_ALLOWED_CHARS = frozenset(string.ascii_letters + string.digits + "_")


def qualify(body: str) -> str:
    """Return the expression prefixed with the graph object, i.e. V() becomes g.V()."""
    return "{}.{}".format(GRAPH_OBJECT_NAME, body)


def quoted_string(value: str) -> str:
    """Return the provided string as a double-quoted literal, with special chars escaped."""
    if not isinstance(value, str):
        raise TypeError("Expected string value, got: {} {}".format(type(value).__name__, value))

    # JSON string literals are valid JavaScript string literals, and all quotes, backslashes
    # and control characters inside the value are replaced by escape sequences.
    return json.dumps(value)


def validate_identifier(value: Any, value_description: str = "identifier") -> None:
    """Ensure that the value is usable as a node, predicate or tag identifier."""
    if not isinstance(value, str):
        raise CayleyInvalidSelectorError(
            "Expected string {}, got: {} {}".format(value_description, type(value).__name__, value)
        )
    if not value:
        raise CayleyInvalidSelectorError("Empty {}s are not allowed!".format(value_description))


def validate_identifier_list(values: Any, value_description: str = "identifier") -> Tuple[str, ...]:
    """Ensure that the values form a non-empty list of identifiers, and return them as a tuple."""
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise CayleyInvalidSelectorError(
            "Expected a list of {}s, got: {} {}".format(
                value_description, type(values).__name__, values
            )
        )

    values = tuple(values)
    if not values:
        raise CayleyInvalidSelectorError(
            "Expected at least one {}, got an empty list.".format(value_description)
        )

    for value in values:
        validate_identifier(value, value_description=value_description)
    return values


def validate_safe_name(value: Any, value_description: str = "name") -> None:
    """Ensure that the provided string can be used as a variable name in the query."""
    if not isinstance(value, str):
        raise TypeError(
            "Expected string {}, got: {} {}".format(value_description, type(value).__name__, value)
        )

    if not value:
        raise CayleyInvalidArgumentError("Empty {}s are not allowed!".format(value_description))

    if value[0] in string.digits:
        raise CayleyInvalidArgumentError(
            "Encountered invalid {}: {}. It cannot start with a "
            "digit.".format(value_description, value)
        )

    # set(value) is used instead of frozenset(value) to avoid printing 'frozenset' in error message.
    disallowed_chars = set(value) - VARIABLE_ALLOWED_CHARS
    if disallowed_chars:
        raise CayleyInvalidArgumentError(
            "Encountered illegal characters {} in {}: {}. It is only "
            "allowed to have upper and lower case letters, "
            "digits and underscores.".format(disallowed_chars, value_description, value)
        )


def join_quoted(values: Sequence[str]) -> str:
    """Return the values quoted and comma-joined, with no spaces: "a","b"."""
    return ",".join(quoted_string(value) for value in values)


def bracketed_list(values: Sequence[str]) -> str:
    """Return the values as a list literal: ["a","b"]."""
    return "[{}]".format(join_quoted(values))


def join_arguments(first: Optional[str], second: Optional[str]) -> str:
    """Join a pair of rendered arguments, where None stands for an unconstrained argument.

    An unconstrained trailing argument is dropped entirely, while an unconstrained
    leading argument followed by a constrained one is rendered as null.
    """
    if second is None:
        return first if first is not None else ""
    return "{},{}".format(first if first is not None else NULL_ARGUMENT, second)
