# Copyright 2017-present Kensho Technologies, LLC.
"""Execution of compiled queries against a running Cayley server."""
from enum import Enum, unique
import logging
import string
from typing import Any, Callable, Dict, Optional, Union
from urllib.parse import urlsplit

from .compiler import CompiledPath, CompiledReuse, CompiledRoute, Expectation
from .exceptions import (
    CayleyInvalidAddressError,
    CayleyQueryNotFinalizedError,
    CayleyUnsupportedExpectationError,
    CayleyVagueExpectationError,
)
from .results import GraphNodeList, decode_node_sequence
from .transport import RequestsTransport, Transport


logger = logging.getLogger(__name__)


@unique
class APIVersion(Enum):
    """Versions of the HTTP API of the server."""

    V1 = "v1"


DEFAULT_HOST = "localhost"
DEFAULT_PORT = 64210
DEFAULT_API_VERSION = APIVersion.V1

QUERY_URL_TEMPLATE = "http://{host}:{port}/api/{version}/query/gremlin"

MIN_PORT = 1
MAX_PORT = 65535

# Characters that would change the meaning of the URL if they appeared in the host or version.
URL_RESERVED_CHARS = frozenset("/?#@[]:" + string.whitespace)

# Only these result shapes can be decoded from the HTTP response envelope.
RESPONSE_DECODERS: Dict[Expectation, Callable[[bytes], Any]] = {
    Expectation.NODE_SEQUENCE: decode_node_sequence,
}


def _validate_url_segment(value: Any, value_description: str) -> None:
    """Ensure the value can be placed in the query URL without changing its structure."""
    if not isinstance(value, str) or not value:
        raise CayleyInvalidAddressError(
            "Expected non-empty string {}, got: {!r}".format(value_description, value)
        )

    reserved_chars = set(value) & URL_RESERVED_CHARS
    if reserved_chars:
        raise CayleyInvalidAddressError(
            "Encountered illegal characters {} in {}: {!r}".format(
                reserved_chars, value_description, value
            )
        )


def make_query_url(host: str, port: int, api_version: Union[APIVersion, str]) -> str:
    """Return the URL of the query endpoint, validating each of its parts.

    Args:
        host: string, the host name or IPv4 address of the server
        port: int, between 1 and 65535 inclusive
        api_version: APIVersion, or the raw version segment of the URL path as a string

    Returns:
        string, the URL to post queries to

    Raises:
        CayleyInvalidAddressError: if the parts do not form a well-formed endpoint
    """
    _validate_url_segment(host, "host")

    # bool is a subclass of int, but Graph(port=True) is certainly a bug.
    if isinstance(port, bool) or not isinstance(port, int):
        raise CayleyInvalidAddressError(
            "Expected int port, got: {} {!r}".format(type(port).__name__, port)
        )
    if not (MIN_PORT <= port <= MAX_PORT):
        raise CayleyInvalidAddressError(
            "Port {} is not between {} and {}".format(port, MIN_PORT, MAX_PORT)
        )

    version = api_version.value if isinstance(api_version, APIVersion) else api_version
    _validate_url_segment(version, "API version")

    url = QUERY_URL_TEMPLATE.format(host=host, port=port, version=version)

    # Make sure the URL parses back to the same endpoint.
    try:
        parsed_url = urlsplit(url)
        parsed_port = parsed_url.port
    except ValueError as e:
        raise CayleyInvalidAddressError("Invalid URL {}: {}".format(url, e)) from e
    if parsed_url.hostname != host.lower() or parsed_port != port:
        raise CayleyInvalidAddressError("Invalid URL {} for host {}".format(url, host))

    return url


class Graph(object):
    """A Cayley server, able to run queries built with Vertex and Morphism.

    Creating a Graph does not connect to anything: every query is sent with its own
    request, and any declared morphisms are sent along with the query that follows them.

        graph = Graph("localhost", 64210)
        nodes = graph.execute(Vertex.start(Node("foo")).in_(Predicate("bar")).all())

    Queries block the calling thread until the whole response is read. There are no retries,
    and no timeout unless one is set on the transport.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        api_version: Union[APIVersion, str] = DEFAULT_API_VERSION,
        transport: Optional[Transport] = None,
    ) -> None:
        """Construct a Graph for the server at the given location.

        Args:
            host: string, the host name or IPv4 address of the server
            port: int, the port the server's HTTP API listens on
            api_version: APIVersion to use, or a raw version segment string
            transport: optional Transport to send queries with; by default, queries are
                       posted with the requests library and no timeout

        Raises:
            CayleyInvalidAddressError: if host, port and API version do not form a valid URL
        """
        self.url = make_query_url(host, port, api_version)
        self.transport = transport if transport is not None else RequestsTransport()

    @classmethod
    def default(cls, transport: Optional[Transport] = None) -> "Graph":
        """Return a Graph for the latest API of a server at localhost:64210."""
        return cls(transport=transport)

    def execute(self, query: Any) -> GraphNodeList:
        """Run a finalized route and return the nodes it found.

        Args:
            query: finalized Vertex or CompiledRoute. A Vertex is compiled right away.

        Returns:
            GraphNodeList with the nodes returned by the server

        Raises:
            CayleyQueryNotFinalizedError: if the route has no final, or the query is a
                                          morphism or trail without starting nodes
            TypeError: if the query cannot be compiled at all
            CayleyUnsupportedExpectationError: if the route ends with anything but All()
                                               or GetLimit(n); no request is made then
            CayleyTransportError: if the request fails
            CayleyResponseDecodingError: if the response cannot be decoded, or reports an error
        """
        if not isinstance(query, (CompiledRoute, CompiledReuse, CompiledPath)):
            compile_fn = getattr(query, "compile", None)
            if not callable(compile_fn):
                raise TypeError(
                    "Expected a finalized route, got: {} {}".format(type(query).__name__, query)
                )
            query = compile_fn()

        if isinstance(query, (CompiledReuse, CompiledPath)):
            # Morphisms and trails have no starting nodes, let alone a final.
            raise CayleyQueryNotFinalizedError(
                "Only anchored, finalized routes can be executed, got a {}: {}".format(
                    type(query).__name__, query
                )
            )
        if not isinstance(query, CompiledRoute):
            raise TypeError(
                "Expected a finalized route, got: {} {}".format(type(query).__name__, query)
            )

        if query.expectation == Expectation.UNKNOWN:
            raise CayleyQueryNotFinalizedError(
                "The query has no final, so it cannot be executed: {}".format(query.query)
            )

        return self._run(query.query, query.expectation)

    def execute_raw(
        self, query_text: str, expectation: Expectation = Expectation.NODE_SEQUENCE
    ) -> GraphNodeList:
        """Run a query given as a prepared string, bypassing the path builders.

        Args:
            query_text: string, the complete query, i.e. 'g.V("foo").In("bar").All()'
            expectation: Expectation, the shape of data the query returns

        Returns:
            GraphNodeList with the nodes returned by the server

        Raises:
            CayleyVagueExpectationError: if the expectation is Expectation.UNKNOWN
            the same errors as execute() otherwise
        """
        if not isinstance(query_text, str):
            raise TypeError(
                "Expected string query_text, got: {} {}".format(
                    type(query_text).__name__, query_text
                )
            )

        if expectation == Expectation.UNKNOWN:
            raise CayleyVagueExpectationError(
                "Cannot tell what to expect in response to the query: {}".format(query_text)
            )

        return self._run(query_text, expectation)

    def _run(self, query_text: str, expectation: Expectation) -> GraphNodeList:
        """Send the query and decode its response, if the expectation can be decoded."""
        decoder = RESPONSE_DECODERS.get(expectation)
        if decoder is None:
            raise CayleyUnsupportedExpectationError(expectation)

        logger.debug("Executing query on %s: %s", self.url, query_text)
        raw_response = self.transport.send(self.url, query_text.encode("utf-8"))
        logger.debug("Decoding response as %s: %r", expectation, raw_response)
        return decoder(raw_response)
