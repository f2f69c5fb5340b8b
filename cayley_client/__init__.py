# Copyright 2017-present Kensho Technologies, LLC.
"""Commonly-used functions and data types from this package."""
from .compiler import (  # noqa
    All,
    CompiledPath,
    CompiledReuse,
    CompiledRoute,
    Declaration,
    Expectation,
    GetLimit,
    Morphism,
    TagArray,
    TagValue,
    ToArray,
    ToValue,
    Trail,
    Vertex,
)
from .compiler.selectors import (  # noqa
    AnyNode,
    AnyPredicate,
    AnyTag,
    FromSubpath,
    Node,
    Nodes,
    Predicate,
    Predicates,
    Tag,
    Tags,
)
from .debugging_utils import pretty_print_gremlin  # noqa
from .exceptions import (  # noqa
    CayleyCompilationError,
    CayleyError,
    CayleyInvalidAddressError,
    CayleyInvalidArgumentError,
    CayleyInvalidSelectorError,
    CayleyPathFinalizedError,
    CayleyQueryNotFinalizedError,
    CayleyRemoteError,
    CayleyResponseDecodingError,
    CayleyTransportError,
    CayleyUnsupportedExpectationError,
    CayleyVagueExpectationError,
)
from .graph import APIVersion, Graph  # noqa
from .results import GraphNode, GraphNodeList  # noqa
from .transport import RequestsTransport  # noqa


__package_name__ = "cayley-client"
__version__ = "1.0.0"
