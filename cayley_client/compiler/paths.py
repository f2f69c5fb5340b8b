# Copyright 2017-present Kensho Technologies, LLC.
"""Builders of paths, routes and morphisms.

A Vertex is a route anchored at some starting nodes. It can be extended step by step,
finalized with one of the finals, compiled and executed on a Graph:

    Vertex.start(Node("C")).out(Predicate("follows")).has(Predicate("status")).all()

A Morphism is a named route without starting nodes. It cannot be executed by itself,
only followed from other routes, which then declare it ahead of their own text:

    friend_of_friend = Morphism.start("friendOfFriend").out(Predicate("follows"))
    Vertex.start(Node("C")).follow(friend_of_friend).all()

A Trail is a bare sequence of steps, which can be appended to routes and morphisms.

Builders are mutable and not thread-safe: each one must be used by one caller at a time.
Compiled routes are immutable, and can be shared freely.
"""
from typing import Iterable, List, Optional, Tuple, TypeVar

from ..exceptions import CayleyPathFinalizedError
from .common import CompiledPath, CompiledReuse, CompiledRoute
from .emit_gremlin import collect_declarations, emit_path, emit_reuse, emit_route
from .finals import All, Expectation, Final, GetLimit, TagArray, TagValue, ToArray, ToValue
from .helpers import validate_safe_name
from .selectors import AnyNode, NodeSelector, PredicateSelector, TagSelector
from .steps import (
    And,
    Back,
    Both,
    Follow,
    FollowR,
    Has,
    In,
    Is,
    Or,
    Out,
    Save,
    Step,
    TagWith,
    validate_selector_kind,
)


PathT = TypeVar("PathT", bound="BasePath")


class BasePath(object):
    """A mutable sequence of traversal steps, with chainable methods to extend it."""

    def __init__(self) -> None:
        """Construct an empty path."""
        self._steps: List[Step] = []

    @property
    def steps(self) -> Tuple[Step, ...]:
        """Return the steps of the path, in order."""
        return tuple(self._steps)

    def _ensure_extensible(self) -> None:
        """Ensure that more steps may be appended to the path."""
        # Only routes can be finalized, and they override this method.

    def append(self: PathT, step: Step) -> PathT:
        """Append a traversal step to the path, and return the path itself.

        Raises:
            CayleyPathFinalizedError: if the path is a finalized route
            CayleyCompilationError: if the step declares a morphism under a name that the
                                    path already declares with a different body
        """
        if not isinstance(step, Step):
            raise TypeError("Expected Step, got: {} {}".format(type(step).__name__, step))
        self._ensure_extensible()
        collect_declarations(self._steps + [step])
        self._steps.append(step)
        return self

    def extend(self: PathT, trail: "Trail") -> PathT:
        """Append all the steps of a trail to the path, and return the path itself."""
        if not isinstance(trail, Trail):
            raise TypeError("Expected Trail, got: {} {}".format(type(trail).__name__, trail))
        self._ensure_extensible()
        collect_declarations(self._steps + list(trail.steps))
        self._steps.extend(trail.steps)
        return self

    # Basic traversals

    def out(
        self: PathT,
        predicate: Optional[PredicateSelector] = None,
        tag: Optional[TagSelector] = None,
    ) -> PathT:
        """Follow outbound edges with the given predicates, tagging the predicates if asked."""
        return self.append(Out(predicate, tag))

    def in_(
        self: PathT,
        predicate: Optional[PredicateSelector] = None,
        tag: Optional[TagSelector] = None,
    ) -> PathT:
        """Follow inbound edges with the given predicates, tagging the predicates if asked."""
        return self.append(In(predicate, tag))

    def both(
        self: PathT,
        predicate: Optional[PredicateSelector] = None,
        tag: Optional[TagSelector] = None,
    ) -> PathT:
        """Follow edges in both directions with the given predicates."""
        return self.append(Both(predicate, tag))

    def is_(self: PathT, nodes: NodeSelector) -> PathT:
        """Keep only the current nodes that are among the given ones."""
        return self.append(Is(nodes))

    def has(
        self: PathT, predicate: PredicateSelector, nodes: Optional[NodeSelector] = None
    ) -> PathT:
        """Keep only the current nodes that have the given predicates to the given nodes."""
        return self.append(Has(predicate, nodes))

    # Tagging

    def tag(self: PathT, tags: TagSelector) -> PathT:
        """Tag the current nodes, to return to them or output them later."""
        return self.append(TagWith(tags))

    as_ = tag

    def back(self: PathT, tags: TagSelector) -> PathT:
        """Return to the nodes previously tagged with the given tags."""
        return self.append(Back(tags))

    def save(self: PathT, predicate: PredicateSelector, tag: TagSelector) -> PathT:
        """Save the object of the given predicate under the given tag, without moving."""
        return self.append(Save(predicate, tag))

    # Joining

    def and_(self: PathT, route) -> PathT:
        """Keep only the nodes also found by the given unfinalized route."""
        return self.append(And(route))

    intersect = and_

    def or_(self: PathT, route) -> PathT:
        """Add the nodes found by the given unfinalized route."""
        return self.append(Or(route))

    union = or_

    # Morphisms

    def follow(self: PathT, morphism) -> PathT:
        """Follow the given morphism from the current nodes."""
        return self.append(Follow(morphism))

    def follow_r(self: PathT, morphism) -> PathT:
        """Follow the given morphism in reverse from the current nodes."""
        return self.append(FollowR(morphism))


class Trail(BasePath):
    """A sequence of steps without starting nodes or name, for appending to other paths."""

    def __init__(self, steps: Iterable[Step] = ()) -> None:
        """Construct a trail, optionally pre-populated with the given steps."""
        super(Trail, self).__init__()
        for step in steps:
            self.append(step)

    def compile(self) -> CompiledPath:
        """Return the compiled form of the trail."""
        return emit_path(self._steps)

    def __str__(self) -> str:
        """Return the compiled text of the trail."""
        return self.compile().body


class Vertex(BasePath):
    """A route starting at the given nodes, which becomes executable once finalized."""

    def __init__(self, anchor: Optional[NodeSelector] = None) -> None:
        """Construct a route starting at the given nodes.

        Args:
            anchor: NodeSelector, the nodes to start from; every node if omitted.
        """
        super(Vertex, self).__init__()
        if anchor is None:
            anchor = AnyNode()
        validate_selector_kind(anchor, NodeSelector)
        self.anchor = anchor
        self._final: Optional[Final] = None

    @classmethod
    def start(cls, anchor: Optional[NodeSelector] = None) -> "Vertex":
        """Return a new route starting at the given nodes."""
        return cls(anchor)

    @property
    def final(self) -> Optional[Final]:
        """Return the final of the route, or None if it is not finalized."""
        return self._final

    @property
    def is_finalized(self) -> bool:
        """Return True if a final has been applied to the route, and False otherwise."""
        return self._final is not None

    @property
    def expectation(self) -> Expectation:
        """Return the shape of the data the route will return once executed."""
        if self._final is None:
            return Expectation.UNKNOWN
        return self._final.expectation

    def _ensure_extensible(self) -> None:
        """Ensure that the route has not been finalized yet."""
        if self._final is not None:
            raise CayleyPathFinalizedError(
                "Cannot extend a route that was already finalized with {}".format(
                    self._final.to_gremlin()
                )
            )

    def finalize(self, final: Final) -> "Vertex":
        """Terminate the route with the given final, and return the route itself."""
        if not isinstance(final, Final):
            raise TypeError("Expected Final, got: {} {}".format(type(final).__name__, final))
        self._ensure_extensible()
        self._final = final
        return self

    # Finals

    def all(self) -> "Vertex":
        """Finalize the route to return every node it arrives at."""
        return self.finalize(All())

    def get_limit(self, limit: int) -> "Vertex":
        """Finalize the route to return at most "limit" of the nodes it arrives at."""
        return self.finalize(GetLimit(limit))

    def to_array(self) -> "Vertex":
        """Finalize the route to return the names of the nodes it arrives at."""
        return self.finalize(ToArray())

    def to_value(self) -> "Vertex":
        """Finalize the route to return a single node it arrives at."""
        return self.finalize(ToValue())

    def tag_array(self) -> "Vertex":
        """Finalize the route to return the tag maps of all results."""
        return self.finalize(TagArray())

    def tag_value(self) -> "Vertex":
        """Finalize the route to return the tag map of a single result."""
        return self.finalize(TagValue())

    def compile(self) -> CompiledRoute:
        """Return the compiled form of the route. May be called any number of times."""
        return emit_route(self.anchor, self._steps, self._final)

    def __str__(self) -> str:
        """Return the complete query text of the route."""
        return self.compile().query


class Morphism(BasePath):
    """A named route without starting nodes, for following from other routes."""

    def __init__(self, name: str) -> None:
        """Construct a morphism with the given name.

        Args:
            name: string, the variable name the morphism is declared under. It may only
                  contain letters, digits and underscores, and may not start with a digit.
        """
        super(Morphism, self).__init__()
        validate_safe_name(name, value_description="morphism name")
        self.name = name

    @classmethod
    def start(cls, name: str) -> "Morphism":
        """Return a new morphism with the given name."""
        return cls(name)

    def compile(self) -> CompiledReuse:
        """Return the compiled form of the morphism. May be called any number of times."""
        return emit_reuse(self.name, self._steps)

    def __str__(self) -> str:
        """Return the declarations of the morphism."""
        return str(self.compile())
