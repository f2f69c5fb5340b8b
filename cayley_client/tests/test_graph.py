# Copyright 2017-present Kensho Technologies, LLC.
import unittest

from ..compiler import Expectation, Trail, Vertex
from ..compiler.selectors import Node, Predicate
from ..exceptions import (
    CayleyInvalidAddressError,
    CayleyQueryNotFinalizedError,
    CayleyRemoteError,
    CayleyResponseDecodingError,
    CayleyTransportError,
    CayleyUnsupportedExpectationError,
    CayleyVagueExpectationError,
)
from ..graph import RESPONSE_DECODERS, APIVersion, Graph, make_query_url
from ..results import GraphNodeList, decode_node_sequence
from ..transport import RequestsTransport
from .test_helpers import (
    FailingTransport,
    RecordingTransport,
    get_follows_route,
    get_friend_of_friend_morphism,
    make_response_body,
)


DEFAULT_QUERY_URL = "http://localhost:64210/api/v1/query/gremlin"


class QueryUrlTests(unittest.TestCase):
    def test_default_url(self) -> None:
        self.assertEqual(DEFAULT_QUERY_URL, Graph().url)
        self.assertEqual(DEFAULT_QUERY_URL, Graph.default().url)
        self.assertEqual(DEFAULT_QUERY_URL, make_query_url("localhost", 64210, APIVersion.V1))

    def test_custom_url(self) -> None:
        graph = Graph("cayley.example.com", 8080, "v2")
        self.assertEqual("http://cayley.example.com:8080/api/v2/query/gremlin", graph.url)
        self.assertEqual(
            "http://10.0.0.1:1/api/v1/query/gremlin", make_query_url("10.0.0.1", 1, "v1")
        )

    def test_default_transport(self) -> None:
        self.assertIsInstance(Graph().transport, RequestsTransport)

    def test_invalid_hosts(self) -> None:
        for host in ("", "local host", "host/path", "user@host", "host:80", "::1", None, 12):
            with self.assertRaises(CayleyInvalidAddressError):
                Graph(host=host)

    def test_invalid_ports(self) -> None:
        for port in (0, -1, 65536, "64210", 64210.0, True):
            with self.assertRaises(CayleyInvalidAddressError):
                Graph(port=port)

    def test_boundary_ports(self) -> None:
        self.assertEqual("http://localhost:65535/api/v1/query/gremlin", Graph(port=65535).url)
        self.assertEqual("http://localhost:1/api/v1/query/gremlin", Graph(port=1).url)

    def test_invalid_api_versions(self) -> None:
        for api_version in ("", "v1/../v2", "v1?x=y", None):
            with self.assertRaises(CayleyInvalidAddressError):
                Graph(api_version=api_version)


class ExecuteTests(unittest.TestCase):
    def test_execute_route(self) -> None:
        transport = RecordingTransport(b'{"result":[{"id":"A"},{"id":"B"}]}')
        graph = Graph(transport=transport)

        nodes = graph.execute(Vertex.start(Node("C")).out(Predicate("follows")).all())

        self.assertIsInstance(nodes, GraphNodeList)
        self.assertEqual(["A", "B"], [node.id for node in nodes])
        self.assertEqual(
            [(DEFAULT_QUERY_URL, b'g.V("C").Out("follows").All()')], transport.requests
        )

    def test_execute_compiled_route(self) -> None:
        transport = RecordingTransport(make_response_body(result=[{"id": "A"}]))
        compiled = get_follows_route("C").get_limit(1).compile()

        nodes = Graph(transport=transport).execute(compiled)

        self.assertEqual(["A"], [node.id for node in nodes])
        self.assertEqual(b'g.V("C").Out("follows").GetLimit(1)', transport.requests[0][1])

    def test_execute_sends_declarations(self) -> None:
        transport = RecordingTransport()
        route = Vertex.start(Node("C")).follow(get_friend_of_friend_morphism()).all()

        nodes = Graph(transport=transport).execute(route)

        self.assertEqual(GraphNodeList(), nodes)
        expected_payload = (
            b'friendOfFriend = g.M().Out("follows").Out("follows");'
            b'g.V("C").Follow(friendOfFriend).All()'
        )
        self.assertEqual(expected_payload, transport.requests[0][1])

    def test_non_ascii_names_are_escaped(self) -> None:
        transport = RecordingTransport()
        Graph(transport=transport).execute(Vertex.start(Node("café")).all())
        self.assertEqual(b'g.V("caf\\u00e9").All()', transport.requests[0][1])

    def test_unfinalized_route(self) -> None:
        transport = RecordingTransport()
        graph = Graph(transport=transport)
        with self.assertRaises(CayleyQueryNotFinalizedError):
            graph.execute(get_follows_route("C"))
        with self.assertRaises(CayleyQueryNotFinalizedError):
            graph.execute(get_follows_route("C").compile())
        self.assertEqual([], transport.requests)

    def test_unsupported_expectations(self) -> None:
        transport = RecordingTransport()
        graph = Graph(transport=transport)
        for finalizer_name in ("to_array", "to_value", "tag_array", "tag_value"):
            route = getattr(get_follows_route("C"), finalizer_name)()
            with self.assertRaises(CayleyUnsupportedExpectationError) as context:
                graph.execute(route)
            self.assertEqual(route.expectation, context.exception.expectation)
        self.assertEqual([], transport.requests)

    def test_only_node_sequences_are_decoded(self) -> None:
        self.assertEqual({Expectation.NODE_SEQUENCE: decode_node_sequence}, RESPONSE_DECODERS)

    def test_unanchored_paths_are_not_finalized(self) -> None:
        transport = RecordingTransport()
        graph = Graph(transport=transport)
        morphism = get_friend_of_friend_morphism()
        for query in (morphism, morphism.compile(), Trail().out(), Trail().out().compile()):
            with self.assertRaises(CayleyQueryNotFinalizedError):
                graph.execute(query)
        self.assertEqual([], transport.requests)

    def test_query_must_be_compilable(self) -> None:
        with self.assertRaises(TypeError):
            Graph(transport=RecordingTransport()).execute('g.V("C").All()')
        with self.assertRaises(TypeError):
            Graph(transport=RecordingTransport()).execute(None)

    def test_remote_error(self) -> None:
        transport = RecordingTransport(make_response_body(error="Unknown predicate"))
        with self.assertRaises(CayleyRemoteError) as context:
            Graph(transport=transport).execute(get_follows_route().all())
        self.assertEqual("Unknown predicate", context.exception.message)

    def test_undecodable_response(self) -> None:
        for body in (b"\xff\xfe\xfd", b"not json", b"[1, 2]"):
            transport = RecordingTransport(body)
            with self.assertRaises(CayleyResponseDecodingError):
                Graph(transport=transport).execute(get_follows_route().all())

    def test_transport_error_propagates(self) -> None:
        transport = FailingTransport(CayleyTransportError("Connection refused"))
        with self.assertRaises(CayleyTransportError):
            Graph(transport=transport).execute(get_follows_route().all())
        self.assertEqual(1, transport.call_count)


class ExecuteRawTests(unittest.TestCase):
    def test_execute_raw(self) -> None:
        transport = RecordingTransport(make_response_body(result=[{"id": "B"}]))
        nodes = Graph(transport=transport).execute_raw('g.V("A").Out("follows").All()')

        self.assertEqual(["B"], [node.id for node in nodes])
        self.assertEqual(
            [(DEFAULT_QUERY_URL, b'g.V("A").Out("follows").All()')], transport.requests
        )

    def test_vague_expectation(self) -> None:
        transport = RecordingTransport()
        with self.assertRaises(CayleyVagueExpectationError):
            Graph(transport=transport).execute_raw("g.V().All()", Expectation.UNKNOWN)
        self.assertEqual([], transport.requests)

    def test_unsupported_expectation(self) -> None:
        transport = RecordingTransport()
        with self.assertRaises(CayleyUnsupportedExpectationError):
            Graph(transport=transport).execute_raw("g.V().ToArray()", Expectation.NAME_SEQUENCE)
        self.assertEqual([], transport.requests)

    def test_query_text_must_be_string(self) -> None:
        with self.assertRaises(TypeError):
            Graph(transport=RecordingTransport()).execute_raw(b"g.V().All()")
