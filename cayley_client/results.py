# Copyright 2017-present Kensho Technologies, LLC.
"""Typed results of queries, and decoding of the server's JSON response envelope."""
import json
from typing import Any, Iterable, Iterator, Mapping, Optional

from .exceptions import CayleyRemoteError, CayleyResponseDecodingError


# Offending response bodies are cut to this many characters before being put into errors.
MAX_REPORTED_BODY_LENGTH = 200

RESULT_FIELD_NAME = "result"
ERROR_FIELD_NAME = "error"


class GraphNode(Mapping[str, str]):
    """A single result row: a read-only mapping of field name to field value."""

    __slots__ = ("_fields",)

    def __init__(self, fields: Mapping[str, str]) -> None:
        """Construct a GraphNode holding a copy of the given fields."""
        self._fields = dict(fields)

    @property
    def id(self) -> Optional[str]:
        """Return the identifier of the node, if the server reported one."""
        return self._fields.get("id")

    def __getitem__(self, key: str) -> str:
        """Return the value of the given field."""
        return self._fields[key]

    def __iter__(self) -> Iterator[str]:
        """Iterate over the field names."""
        return iter(self._fields)

    def __len__(self) -> int:
        """Return the number of fields."""
        return len(self._fields)

    def __repr__(self) -> str:
        """Return a human-readable representation of the node."""
        return "GraphNode({!r})".format(self._fields)


class GraphNodeList(tuple):
    """The nodes returned by a query finalized with All() or GetLimit(n)."""

    __slots__ = ()

    def __new__(cls, nodes: Iterable[GraphNode] = ()) -> "GraphNodeList":
        """Construct a GraphNodeList from the given nodes."""
        return super(GraphNodeList, cls).__new__(cls, nodes)

    def __repr__(self) -> str:
        """Return a human-readable representation of the list."""
        return "GraphNodeList({!r})".format(list(self))


def truncate_body(body: Any) -> str:
    """Return the body as text, cut to a size that fits in an error message."""
    if isinstance(body, bytes):
        text = body[:MAX_REPORTED_BODY_LENGTH].decode("utf-8", errors="replace")
        is_cut = len(body) > MAX_REPORTED_BODY_LENGTH
    else:
        text = str(body)[:MAX_REPORTED_BODY_LENGTH]
        is_cut = len(str(body)) > MAX_REPORTED_BODY_LENGTH
    return text + "..." if is_cut else text


def _decode_node(raw_node: Any, response_text: str) -> GraphNode:
    """Return a GraphNode for one element of the result array."""
    if not isinstance(raw_node, dict):
        raise CayleyResponseDecodingError(
            "Expected each result to be an object, got: {}".format(type(raw_node).__name__),
            truncate_body(response_text),
        )

    for key, value in raw_node.items():
        if not isinstance(value, str):
            raise CayleyResponseDecodingError(
                "Expected string value for result field {}, got: {}".format(
                    key, type(value).__name__
                ),
                truncate_body(response_text),
            )
    return GraphNode(raw_node)


def decode_node_sequence(raw_response: bytes) -> GraphNodeList:
    """Decode the response envelope of an All() or GetLimit(n) query.

    Args:
        raw_response: bytes, the body of the response, expected to be UTF-8 encoded JSON
                      of the form {"result": [{field: value, ...}, ...] or null, "error": str}

    Returns:
        GraphNodeList with one GraphNode per element of the result array, in order.
        An absent or null result decodes to an empty GraphNodeList.

    Raises:
        CayleyRemoteError: if the envelope contains a non-null error
        CayleyResponseDecodingError: if the body is not UTF-8, not JSON or not an envelope
    """
    try:
        response_text = raw_response.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CayleyResponseDecodingError(
            "Response is not valid UTF-8 ({})".format(e), truncate_body(raw_response)
        ) from e

    try:
        envelope = json.loads(response_text)
    except ValueError as e:
        raise CayleyResponseDecodingError(
            "Response is not valid JSON ({})".format(e), truncate_body(response_text)
        ) from e

    if not isinstance(envelope, dict):
        raise CayleyResponseDecodingError(
            "Expected a JSON object, got: {}".format(type(envelope).__name__),
            truncate_body(response_text),
        )

    error = envelope.get(ERROR_FIELD_NAME)
    if error is not None:
        raise CayleyRemoteError(error, truncate_body(response_text))

    raw_nodes = envelope.get(RESULT_FIELD_NAME)
    if raw_nodes is None:
        return GraphNodeList()

    if not isinstance(raw_nodes, list):
        raise CayleyResponseDecodingError(
            "Expected the result to be an array, got: {}".format(type(raw_nodes).__name__),
            truncate_body(response_text),
        )

    return GraphNodeList(_decode_node(raw_node, response_text) for raw_node in raw_nodes)
