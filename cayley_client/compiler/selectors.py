# Copyright 2017-present Kensho Technologies, LLC.
"""Selectors of nodes, predicates and tags, used as arguments of path steps.

Each kind of selector comes in the same three variants: unconstrained (AnyNode),
a single identifier (Node("foo")) and a non-empty list of identifiers (Nodes(["foo", "bar"])).
The variants are implemented once, and the kind is mixed in as a marker base class.
"""
from typing import Iterable, Optional, Tuple

from .common import CompiledRoute, Declaration, ensure_joinable_route
from .compiler_entities import PathEntity
from .helpers import (
    bracketed_list,
    join_quoted,
    quoted_string,
    validate_identifier,
    validate_identifier_list,
)


class Selector(PathEntity):
    """An abstract selector of identifiers of some kind."""

    __slots__ = ()

    kind = "identifier"

    def is_unconstrained(self) -> bool:
        """Return True if the selector matches everything, and False otherwise."""
        return False

    def to_gremlin(self) -> str:
        """Return the selector as a bare comma-separated argument list, i.e. "a","b"."""
        raise NotImplementedError()

    def to_gremlin_argument(self) -> Optional[str]:
        """Return the selector as a single argument, or None if it is unconstrained.

        Multiple identifiers are rendered as one list argument, i.e. ["a","b"].
        """
        raise NotImplementedError()


class NodeSelector(Selector):
    """A selector of graph nodes."""

    __slots__ = ()

    kind = "node"


class PredicateSelector(Selector):
    """A selector of predicates, i.e. the labels of the edges to follow."""

    __slots__ = ()

    kind = "predicate"


class TagSelector(Selector):
    """A selector of tags, i.e. the names under which results are saved."""

    __slots__ = ()

    kind = "tag"


class AnySelector(Selector):
    """A selector without any constraint."""

    __slots__ = ()

    def __init__(self) -> None:
        """Create a new unconstrained selector."""
        super(AnySelector, self).__init__()
        self.validate()

    def validate(self) -> None:
        """Ensure that the selector is valid."""

    def is_unconstrained(self) -> bool:
        """Return True, since the selector matches everything."""
        return True

    def to_gremlin(self) -> str:
        """Return an empty argument list."""
        return ""

    def to_gremlin_argument(self) -> Optional[str]:
        """Return None, since there is no constraint to pass."""
        return None


class SingleSelector(Selector):
    """A selector of exactly one identifier."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        """Create a new selector of the given identifier.

        Args:
            name: non-empty string, the identifier to select.

        Returns:
            new selector object
        """
        super(SingleSelector, self).__init__(name)
        self.name = name
        self.validate()

    def validate(self) -> None:
        """Ensure that the selector is valid."""
        validate_identifier(self.name, value_description="{} name".format(self.kind))

    def to_gremlin(self) -> str:
        """Return the quoted identifier."""
        self.validate()
        return quoted_string(self.name)

    def to_gremlin_argument(self) -> Optional[str]:
        """Return the quoted identifier."""
        return self.to_gremlin()


class MultipleSelector(Selector):
    """A selector of any of a non-empty list of identifiers."""

    __slots__ = ("names",)

    def __init__(self, names: Iterable[str]) -> None:
        """Create a new selector of the given identifiers.

        Args:
            names: non-empty iterable of non-empty strings, in the order they are rendered.
                   An empty list raises CayleyInvalidSelectorError: use the unconstrained
                   selector of the same kind to select everything.

        Returns:
            new selector object
        """
        names = validate_identifier_list(names, value_description="{} name".format(self.kind))
        super(MultipleSelector, self).__init__(names)
        self.names: Tuple[str, ...] = names
        self.validate()

    def validate(self) -> None:
        """Ensure that the selector is valid."""
        validate_identifier_list(self.names, value_description="{} name".format(self.kind))

    def to_gremlin(self) -> str:
        """Return the quoted identifiers, comma-separated."""
        self.validate()
        return join_quoted(self.names)

    def to_gremlin_argument(self) -> Optional[str]:
        """Return the quoted identifiers as a list literal."""
        self.validate()
        return bracketed_list(self.names)


class AnyNode(AnySelector, NodeSelector):
    """Select every node."""

    __slots__ = ()


class Node(SingleSelector, NodeSelector):
    """Select the node with the given name."""

    __slots__ = ()


class Nodes(MultipleSelector, NodeSelector):
    """Select the nodes with any of the given names."""

    __slots__ = ()


class AnyPredicate(AnySelector, PredicateSelector):
    """Select every predicate."""

    __slots__ = ()


class Predicate(SingleSelector, PredicateSelector):
    """Select the predicate with the given name."""

    __slots__ = ()


class Predicates(MultipleSelector, PredicateSelector):
    """Select the predicates with any of the given names."""

    __slots__ = ()


class FromSubpath(PredicateSelector):
    """Select as predicates the nodes another route arrives at."""

    __slots__ = ("route",)

    def __init__(self, route) -> None:
        """Create a new selector of predicates found by the given route.

        Args:
            route: unfinalized Vertex or CompiledRoute. A Vertex is compiled immediately,
                   so later changes to it do not affect this selector.

        Returns:
            new FromSubpath object
        """
        route = ensure_joinable_route(route)
        super(FromSubpath, self).__init__(route)
        self.route: CompiledRoute = route
        self.validate()

    def validate(self) -> None:
        """Ensure that the FromSubpath selector is valid."""
        if not isinstance(self.route, CompiledRoute):
            raise TypeError(
                "Expected CompiledRoute route, got: {} {}".format(
                    type(self.route).__name__, self.route
                )
            )

    def to_gremlin(self) -> str:
        """Return the embedded route."""
        self.validate()
        return self.route.qualified_body

    def to_gremlin_argument(self) -> Optional[str]:
        """Return the embedded route, unquoted."""
        return self.to_gremlin()

    def get_declarations(self) -> Tuple[Declaration, ...]:
        """Return the declarations the embedded route depends on."""
        return self.route.prefix


class AnyTag(AnySelector, TagSelector):
    """Do not constrain or assign any tag."""

    __slots__ = ()


class Tag(SingleSelector, TagSelector):
    """Select the tag with the given name."""

    __slots__ = ()


class Tags(MultipleSelector, TagSelector):
    """Select all of the given tags."""

    __slots__ = ()
