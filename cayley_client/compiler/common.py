# Copyright 2017-present Kensho Technologies, LLC.
"""Compiled forms of paths, routes and morphisms."""
from dataclasses import dataclass
from typing import Any, NamedTuple, Tuple

from ..exceptions import CayleyInvalidArgumentError
from .finals import Expectation
from .helpers import qualify


class Declaration(NamedTuple):
    """A named morphism that has to be declared before any query step refers to it."""

    name: str
    body: str

    def to_gremlin(self) -> str:
        """Return the declaration statement, i.e. name = g.M().Out("foo");"""
        return "{} = {};".format(self.name, qualify(self.body))


def get_prefix_text(prefix: Tuple[Declaration, ...]) -> str:
    """Return the concatenated statements of all declarations, in order."""
    return "".join(declaration.to_gremlin() for declaration in prefix)


@dataclass(frozen=True)
class CompiledPath:
    """A compiled anchorless sequence of steps, i.e. Out("foo").Has("bar")."""

    prefix: Tuple[Declaration, ...]
    body: str


@dataclass(frozen=True)
class CompiledRoute:
    """A compiled anchored route, i.e. V("foo").Out("bar").All().

    The body does not include the graph object; use the query property for the full text
    that is sent to the server, declarations included.
    """

    prefix: Tuple[Declaration, ...]
    body: str
    expectation: Expectation = Expectation.UNKNOWN

    @property
    def is_finalized(self) -> bool:
        """Return True if the route ends with a final, and False otherwise."""
        return self.expectation != Expectation.UNKNOWN

    @property
    def qualified_body(self) -> str:
        """Return the body prefixed with the graph object, as used when embedded elsewhere."""
        return qualify(self.body)

    @property
    def query(self) -> str:
        """Return the complete query text: all declarations followed by the route itself."""
        return get_prefix_text(self.prefix) + self.qualified_body

    def __str__(self) -> str:
        """Return the complete query text."""
        return self.query


@dataclass(frozen=True)
class CompiledReuse:
    """A compiled morphism: a named, anchorless route, i.e. M().Out("foo")."""

    name: str
    prefix: Tuple[Declaration, ...]
    body: str

    @property
    def declaration(self) -> Declaration:
        """Return the declaration that makes this morphism available under its name."""
        return Declaration(self.name, self.body)

    def __str__(self) -> str:
        """Return the morphism's own declarations followed by its declaration."""
        return get_prefix_text(self.prefix) + self.declaration.to_gremlin()


def ensure_joinable_route(value: Any) -> CompiledRoute:
    """Return the compiled form of an unfinalized anchored route, compiling it if needed."""
    if not isinstance(value, (CompiledRoute, CompiledReuse)):
        compile_fn = getattr(value, "compile", None)
        if not callable(compile_fn):
            raise TypeError(
                "Expected an anchored route, got: {} {}".format(type(value).__name__, value)
            )
        value = compile_fn()

    if not isinstance(value, CompiledRoute):
        raise TypeError(
            "Expected an anchored route, but got a {}. Morphisms can only be "
            "followed, not joined.".format(type(value).__name__)
        )

    if value.is_finalized:
        raise CayleyInvalidArgumentError(
            "Cannot embed a finalized route into another path: {}".format(value.query)
        )
    return value


def ensure_reusable(value: Any) -> CompiledReuse:
    """Return the compiled form of a morphism, compiling it if needed."""
    if not isinstance(value, (CompiledRoute, CompiledReuse)):
        compile_fn = getattr(value, "compile", None)
        if not callable(compile_fn):
            raise TypeError("Expected a morphism, got: {} {}".format(type(value).__name__, value))
        value = compile_fn()

    if not isinstance(value, CompiledReuse):
        raise TypeError(
            "Expected a morphism, but got a {}. Only named morphisms can be "
            "followed.".format(type(value).__name__)
        )
    return value
