# Copyright 2017-present Kensho Technologies, LLC.
"""Convert anchors, traversal steps and finals to Gremlin query strings."""
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import funcy

from ..exceptions import CayleyCompilationError
from .common import CompiledPath, CompiledReuse, CompiledRoute, Declaration
from .compiler_entities import PathEntity
from .finals import Expectation, Final
from .selectors import NodeSelector
from .steps import Step


VERTEX_OPERATION = "V"
MORPHISM_OPERATION = "M"


def _emit_chain(head: Optional[str], entities: Iterable[PathEntity]) -> str:
    """Return the head expression followed by every entity, joined with dots."""
    parts = [entity.to_gremlin() for entity in entities]
    if head is not None:
        parts.insert(0, head)
    return ".".join(parts)


def collect_declarations(entities: Iterable[PathEntity]) -> Tuple[Declaration, ...]:
    """Return the declarations required by the entities, in the order they are first needed.

    Each entity reports its dependencies before the declarations that use them, so keeping
    the traversal order guarantees that every name is declared before it is referenced.
    A name declared more than once is kept only at its first occurrence.

    Raises:
        CayleyCompilationError: if two different morphisms are declared under the same name
    """
    declared: Dict[str, Declaration] = {}
    result: List[Declaration] = []
    for declaration in funcy.lcat(entity.get_declarations() for entity in entities):
        previous = declared.get(declaration.name)
        if previous is None:
            declared[declaration.name] = declaration
            result.append(declaration)
        elif previous != declaration:
            raise CayleyCompilationError(
                "Found two different morphisms named {}: {} and {}".format(
                    declaration.name, previous.to_gremlin(), declaration.to_gremlin()
                )
            )
    return tuple(result)


##############
# Public API #
##############


def emit_path(steps: Sequence[Step]) -> CompiledPath:
    """Compile an anchorless sequence of steps, i.e. Out("foo").In("bar")."""
    return CompiledPath(prefix=collect_declarations(steps), body=_emit_chain(None, steps))


def emit_route(
    anchor: NodeSelector, steps: Sequence[Step], final: Optional[Final]
) -> CompiledRoute:
    """Compile a route starting at the anchor nodes, optionally terminated with a final."""
    head = "{}({})".format(VERTEX_OPERATION, anchor.to_gremlin())
    entities: List[PathEntity] = list(steps)
    expectation = Expectation.UNKNOWN
    if final is not None:
        entities.append(final)
        expectation = final.expectation

    return CompiledRoute(
        prefix=collect_declarations(entities),
        body=_emit_chain(head, entities),
        expectation=expectation,
    )


def emit_reuse(name: str, steps: Sequence[Step]) -> CompiledReuse:
    """Compile a morphism: a named route without starting nodes, i.e. M().Out("foo")."""
    head = "{}()".format(MORPHISM_OPERATION)
    return CompiledReuse(
        name=name, prefix=collect_declarations(steps), body=_emit_chain(head, steps)
    )
