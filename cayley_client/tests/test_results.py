# Copyright 2017-present Kensho Technologies, LLC.
import unittest

from ..exceptions import CayleyRemoteError, CayleyResponseDecodingError
from ..results import (
    MAX_REPORTED_BODY_LENGTH,
    GraphNode,
    GraphNodeList,
    decode_node_sequence,
    truncate_body,
)
from .test_helpers import make_response_body


class GraphNodeTests(unittest.TestCase):
    def test_graph_node_is_read_only_mapping(self) -> None:
        fields = {"id": "A", "name": "alice"}
        node = GraphNode(fields)
        fields["id"] = "changed"

        self.assertEqual("A", node.id)
        self.assertEqual("alice", node["name"])
        self.assertEqual({"id": "A", "name": "alice"}, dict(node))
        self.assertEqual(2, len(node))
        with self.assertRaises(TypeError):
            node["id"] = "B"  # type: ignore

    def test_graph_node_without_id(self) -> None:
        self.assertIsNone(GraphNode({"name": "alice"}).id)

    def test_graph_node_list(self) -> None:
        nodes = GraphNodeList([GraphNode({"id": "A"}), GraphNode({"id": "B"})])
        self.assertEqual(["A", "B"], [node.id for node in nodes])
        self.assertEqual(GraphNodeList(), ())
        self.assertIn("GraphNodeList", repr(nodes))


class DecodeNodeSequenceTests(unittest.TestCase):
    def test_nodes(self) -> None:
        nodes = decode_node_sequence(b'{"result":[{"id":"A"},{"id":"B","source":"x"}]}')
        self.assertIsInstance(nodes, GraphNodeList)
        self.assertEqual([{"id": "A"}, {"id": "B", "source": "x"}], [dict(node) for node in nodes])

    def test_null_or_missing_result_is_empty(self) -> None:
        self.assertEqual(GraphNodeList(), decode_node_sequence(b'{"result": null}'))
        self.assertEqual(GraphNodeList(), decode_node_sequence(b"{}"))
        self.assertEqual(GraphNodeList(), decode_node_sequence(b'{"result": null, "error": null}'))

    def test_empty_result(self) -> None:
        self.assertEqual(GraphNodeList(), decode_node_sequence(make_response_body(result=[])))

    def test_non_ascii_values(self) -> None:
        body = make_response_body(result=[{"id": "café"}])
        self.assertEqual("café", decode_node_sequence(body)[0].id)

    def test_remote_error(self) -> None:
        body = make_response_body(error="Unknown predicate")
        with self.assertRaises(CayleyRemoteError) as context:
            decode_node_sequence(body)
        self.assertEqual("Unknown predicate", context.exception.message)
        self.assertIn("Unknown predicate", str(context.exception))

    def test_remote_error_is_decoding_error(self) -> None:
        body = make_response_body(result=[{"id": "A"}], error="failed")
        with self.assertRaises(CayleyResponseDecodingError):
            decode_node_sequence(body)

    def test_invalid_utf8(self) -> None:
        with self.assertRaises(CayleyResponseDecodingError):
            decode_node_sequence(b'{"result": [{"id": "\xff\xfe"}]}')

    def test_invalid_json(self) -> None:
        with self.assertRaises(CayleyResponseDecodingError) as context:
            decode_node_sequence(b"<html>Bad Gateway</html>")
        self.assertEqual("<html>Bad Gateway</html>", context.exception.truncated_body)

    def test_unexpected_shapes(self) -> None:
        bad_bodies = (
            b"[]",
            b'"result"',
            b'{"result": {"id": "A"}}',
            b'{"result": ["A"]}',
            b'{"result": [{"id": 1}]}',
            b'{"result": [{"id": null}]}',
        )
        for body in bad_bodies:
            with self.assertRaises(CayleyResponseDecodingError):
                decode_node_sequence(body)

    def test_offending_body_is_truncated(self) -> None:
        body = b"x" * (MAX_REPORTED_BODY_LENGTH * 3)
        with self.assertRaises(CayleyResponseDecodingError) as context:
            decode_node_sequence(body)
        truncated_body = context.exception.truncated_body
        self.assertTrue(truncated_body.startswith("x" * MAX_REPORTED_BODY_LENGTH))
        self.assertLessEqual(len(truncated_body), MAX_REPORTED_BODY_LENGTH + len("..."))


class TruncateBodyTests(unittest.TestCase):
    def test_short_body_is_kept(self) -> None:
        self.assertEqual("short", truncate_body("short"))
        self.assertEqual("short", truncate_body(b"short"))

    def test_long_body_is_cut(self) -> None:
        body = "y" * (MAX_REPORTED_BODY_LENGTH + 1)
        self.assertEqual("y" * MAX_REPORTED_BODY_LENGTH + "...", truncate_body(body))

    def test_bytes_are_decoded_leniently(self) -> None:
        self.assertEqual("a�b", truncate_body(b"a\xffb"))
