# Copyright 2017-present Kensho Technologies, LLC.
"""Definitions of the finals that terminate a route and turn it into a query."""
from enum import Enum, unique

from ..exceptions import CayleyInvalidArgumentError
from .compiler_entities import PathEntity


@unique
class Expectation(Enum):
    """The shape of the data a query is expected to return from the server."""

    # No final was applied, so the route cannot be executed.
    UNKNOWN = "Unknown"
    SINGLE_NODE = "SingleNode"
    NODE_SEQUENCE = "NodeSequence"
    NAME_SEQUENCE = "NameSequence"
    TAG_SEQUENCE = "TagSequence"
    SINGLE_TAG = "SingleTag"

    def __str__(self) -> str:
        """Return the name of the expectation."""
        return self.value


class Final(PathEntity):
    """A terminal operation of a query, with a fixed expectation of its result shape."""

    __slots__ = ()

    expectation = Expectation.UNKNOWN
    operation = ""

    def validate(self) -> None:
        """Ensure that the Final is valid."""

    def to_gremlin(self) -> str:
        """Return the Gremlin representation of this final."""
        self.validate()
        return "{}()".format(self.operation)


class All(Final):
    """Return every node the route arrives at."""

    __slots__ = ()

    expectation = Expectation.NODE_SEQUENCE
    operation = "All"


class GetLimit(Final):
    """Return at most the given number of nodes the route arrives at."""

    __slots__ = ("limit",)

    expectation = Expectation.NODE_SEQUENCE
    operation = "GetLimit"

    def __init__(self, limit: int) -> None:
        """Create a new GetLimit final returning at most "limit" nodes.

        Args:
            limit: int, always greater than or equal to 1.

        Returns:
            new GetLimit object
        """
        super(GetLimit, self).__init__(limit)
        self.limit = limit
        self.validate()

    def validate(self) -> None:
        """Ensure that the GetLimit final is valid."""
        # bool is a subclass of int, but GetLimit(True) is certainly a bug.
        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            raise CayleyInvalidArgumentError(
                "Expected int limit, got: {} {}".format(type(self.limit).__name__, self.limit)
            )

        if not (self.limit >= 1):
            raise CayleyInvalidArgumentError("limit ({}) >= 1 does not hold!".format(self.limit))

    def to_gremlin(self) -> str:
        """Return the Gremlin representation of this final."""
        self.validate()
        return "{}({})".format(self.operation, self.limit)


class ToArray(Final):
    """Return the names of all nodes the route arrives at."""

    __slots__ = ()

    expectation = Expectation.NAME_SEQUENCE
    operation = "ToArray"


class ToValue(Final):
    """Return a single node the route arrives at."""

    __slots__ = ()

    expectation = Expectation.SINGLE_NODE
    operation = "ToValue"


class TagArray(Final):
    """Return the tag maps of all results."""

    __slots__ = ()

    expectation = Expectation.TAG_SEQUENCE
    operation = "TagArray"


class TagValue(Final):
    """Return the tag map of a single result."""

    __slots__ = ()

    expectation = Expectation.SINGLE_TAG
    operation = "TagValue"
