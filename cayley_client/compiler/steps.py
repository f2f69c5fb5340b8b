# Copyright 2017-present Kensho Technologies, LLC.
"""Definitions of the traversal steps of a path."""
from typing import Optional, Tuple, Type

from ..exceptions import CayleyInvalidSelectorError
from .common import (
    CompiledReuse,
    CompiledRoute,
    Declaration,
    ensure_joinable_route,
    ensure_reusable,
)
from .compiler_entities import PathEntity
from .helpers import join_arguments
from .selectors import (
    AnyNode,
    AnyPredicate,
    AnyTag,
    NodeSelector,
    Predicate,
    PredicateSelector,
    Selector,
    Tag,
    TagSelector,
)


def validate_selector_kind(selector: Selector, expected_type: Type[Selector]) -> None:
    """Ensure that the selector is of the kind the step expects."""
    if not isinstance(selector, expected_type):
        raise CayleyInvalidSelectorError(
            "Expected {} selector, got: {} {}".format(
                expected_type.kind, type(selector).__name__, selector
            )
        )


class Step(PathEntity):
    """A single traversal step of a path."""

    __slots__ = ()

    operation = ""

    def get_gremlin_arguments(self) -> str:
        """Return the rendered arguments of the step."""
        raise NotImplementedError()

    def to_gremlin(self) -> str:
        """Return the Gremlin representation of this step, i.e. Out("follows")."""
        self.validate()
        return "{}({})".format(self.operation, self.get_gremlin_arguments())


class _PredicateAndTagStep(Step):
    """A step taking a predicate selector and a tag selector."""

    __slots__ = ("predicate", "tag")

    def __init__(
        self, predicate: Optional[PredicateSelector] = None, tag: Optional[TagSelector] = None
    ) -> None:
        """Create a new step with the given predicate and tag selectors.

        Args:
            predicate: PredicateSelector, the predicates to use; unconstrained if omitted.
            tag: TagSelector, the tags to use; unconstrained if omitted.

        Returns:
            new step object
        """
        if predicate is None:
            predicate = AnyPredicate()
        if tag is None:
            tag = AnyTag()
        super(_PredicateAndTagStep, self).__init__(predicate, tag)
        self.predicate = predicate
        self.tag = tag
        self.validate()

    def validate(self) -> None:
        """Ensure that the step is valid."""
        validate_selector_kind(self.predicate, PredicateSelector)
        validate_selector_kind(self.tag, TagSelector)

    def get_gremlin_arguments(self) -> str:
        """Return the predicate argument followed by the tag argument, if any."""
        return join_arguments(
            self.predicate.to_gremlin_argument(), self.tag.to_gremlin_argument()
        )

    def get_declarations(self) -> Tuple[Declaration, ...]:
        """Return the declarations the predicate selector depends on."""
        return self.predicate.get_declarations()


class Out(_PredicateAndTagStep):
    """Follow outbound edges with the given predicates, tagging the predicates if asked."""

    __slots__ = ()

    operation = "Out"


class In(_PredicateAndTagStep):
    """Follow inbound edges with the given predicates, tagging the predicates if asked."""

    __slots__ = ()

    operation = "In"


class Both(_PredicateAndTagStep):
    """Follow edges in both directions with the given predicates."""

    __slots__ = ()

    operation = "Both"


class Save(_PredicateAndTagStep):
    """Save the object of the given predicate under the given tag, without moving."""

    __slots__ = ()

    operation = "Save"

    def validate(self) -> None:
        """Ensure that the Save step is valid: it needs exactly one predicate and one tag."""
        if not isinstance(self.predicate, Predicate):
            raise CayleyInvalidSelectorError(
                "Save requires a single Predicate, got: {}".format(self.predicate)
            )
        if not isinstance(self.tag, Tag):
            raise CayleyInvalidSelectorError("Save requires a single Tag, got: {}".format(self.tag))


class Is(Step):
    """Keep only the current nodes that are among the given ones."""

    __slots__ = ("nodes",)

    operation = "Is"

    def __init__(self, nodes: NodeSelector) -> None:
        """Create a new Is step filtering by the given node selector."""
        super(Is, self).__init__(nodes)
        self.nodes = nodes
        self.validate()

    def validate(self) -> None:
        """Ensure that the Is step is valid."""
        validate_selector_kind(self.nodes, NodeSelector)

    def get_gremlin_arguments(self) -> str:
        """Return the node names, comma-separated."""
        return self.nodes.to_gremlin()


class Has(Step):
    """Keep only the current nodes that have the given predicates pointing to the given nodes."""

    __slots__ = ("predicate", "nodes")

    operation = "Has"

    def __init__(self, predicate: PredicateSelector, nodes: Optional[NodeSelector] = None) -> None:
        """Create a new Has step.

        Args:
            predicate: PredicateSelector, the predicates the current nodes must have.
            nodes: NodeSelector, the objects these predicates must point to;
                   unconstrained if omitted.

        Returns:
            new Has object
        """
        if nodes is None:
            nodes = AnyNode()
        super(Has, self).__init__(predicate, nodes)
        self.predicate = predicate
        self.nodes = nodes
        self.validate()

    def validate(self) -> None:
        """Ensure that the Has step is valid."""
        validate_selector_kind(self.predicate, PredicateSelector)
        validate_selector_kind(self.nodes, NodeSelector)

    def get_gremlin_arguments(self) -> str:
        """Return the predicate argument followed by the node argument, if any."""
        return join_arguments(
            self.predicate.to_gremlin_argument(), self.nodes.to_gremlin_argument()
        )

    def get_declarations(self) -> Tuple[Declaration, ...]:
        """Return the declarations the predicate selector depends on."""
        return self.predicate.get_declarations()


class _TagsStep(Step):
    """A step taking only a tag selector."""

    __slots__ = ("tags",)

    def __init__(self, tags: TagSelector) -> None:
        """Create a new step with the given tag selector."""
        super(_TagsStep, self).__init__(tags)
        self.tags = tags
        self.validate()

    def validate(self) -> None:
        """Ensure that the step is valid."""
        validate_selector_kind(self.tags, TagSelector)

    def get_gremlin_arguments(self) -> str:
        """Return the tag names, comma-separated."""
        return self.tags.to_gremlin()


class TagWith(_TagsStep):
    """Tag the current nodes with the given tags, to return to them or output them later."""

    __slots__ = ()

    operation = "As"


class Back(_TagsStep):
    """Return to the nodes previously tagged with the given tags."""

    __slots__ = ()

    operation = "Back"


class _JoinStep(Step):
    """A step combining the current nodes with the nodes of another anchored route."""

    __slots__ = ("route",)

    def __init__(self, route) -> None:
        """Create a new join with the given route.

        Args:
            route: unfinalized Vertex or CompiledRoute. A Vertex is compiled immediately,
                   so later changes to it do not affect this step.

        Returns:
            new step object
        """
        route = ensure_joinable_route(route)
        super(_JoinStep, self).__init__(route)
        self.route: CompiledRoute = route
        self.validate()

    def validate(self) -> None:
        """Ensure that the join step is valid."""
        if not isinstance(self.route, CompiledRoute):
            raise TypeError(
                "Expected CompiledRoute route, got: {} {}".format(
                    type(self.route).__name__, self.route
                )
            )

    def get_gremlin_arguments(self) -> str:
        """Return the joined route."""
        return self.route.qualified_body

    def get_declarations(self) -> Tuple[Declaration, ...]:
        """Return the declarations the joined route depends on."""
        return self.route.prefix


class And(_JoinStep):
    """Keep only the nodes also found by the given route."""

    __slots__ = ()

    operation = "And"


class Or(_JoinStep):
    """Add the nodes found by the given route."""

    __slots__ = ()

    operation = "Or"


class _FollowStep(Step):
    """A step splicing a named morphism into the path."""

    __slots__ = ("morphism",)

    def __init__(self, morphism) -> None:
        """Create a new step following the given morphism.

        Args:
            morphism: Morphism or CompiledReuse. A Morphism is compiled immediately,
                      so later changes to it do not affect this step.

        Returns:
            new step object
        """
        morphism = ensure_reusable(morphism)
        super(_FollowStep, self).__init__(morphism)
        self.morphism: CompiledReuse = morphism
        self.validate()

    def validate(self) -> None:
        """Ensure that the follow step is valid."""
        if not isinstance(self.morphism, CompiledReuse):
            raise TypeError(
                "Expected CompiledReuse morphism, got: {} {}".format(
                    type(self.morphism).__name__, self.morphism
                )
            )

    def get_gremlin_arguments(self) -> str:
        """Return the name of the morphism."""
        return self.morphism.name

    def get_declarations(self) -> Tuple[Declaration, ...]:
        """Return the morphism's own declarations, followed by its declaration."""
        return self.morphism.prefix + (self.morphism.declaration,)


class Follow(_FollowStep):
    """Follow the named morphism from the current nodes."""

    __slots__ = ()

    operation = "Follow"


class FollowR(_FollowStep):
    """Follow the named morphism in reverse from the current nodes."""

    __slots__ = ()

    operation = "FollowR"


# Synonyms, as in the query language itself.
As = TagWith
Intersect = And
Union = Or
