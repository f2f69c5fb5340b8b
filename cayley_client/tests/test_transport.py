# Copyright 2017-present Kensho Technologies, LLC.
import unittest
from unittest import mock

import requests

from ..exceptions import CayleyTransportError
from ..transport import RequestsTransport


QUERY_URL = "http://localhost:64210/api/v1/query/gremlin"


def _make_response(content: bytes, status_code: int = 200) -> mock.Mock:
    """Return a stand-in for a requests.Response with the given body and status."""
    response = mock.Mock(spec=requests.Response)
    response.content = content
    response.status_code = status_code
    response.ok = status_code < 400
    response.reason = "OK" if response.ok else "Bad Request"
    return response


class RequestsTransportTests(unittest.TestCase):
    def test_post_without_session(self) -> None:
        with mock.patch.object(requests, "post", return_value=_make_response(b"{}")) as post:
            body = RequestsTransport().send(QUERY_URL, b'g.V("A").All()')

        self.assertEqual(b"{}", body)
        post.assert_called_once_with(
            QUERY_URL,
            data=b'g.V("A").All()',
            headers={"Content-Type": "text/plain; charset=utf-8"},
            timeout=None,
        )

    def test_post_with_session_and_timeout(self) -> None:
        session = mock.Mock(spec=requests.Session)
        session.post.return_value = _make_response(b'{"result": null}')

        with mock.patch.object(requests, "post") as post:
            body = RequestsTransport(session=session, timeout=2.5).send(QUERY_URL, b"g.V()")

        self.assertEqual(b'{"result": null}', body)
        post.assert_not_called()
        session.post.assert_called_once_with(
            QUERY_URL,
            data=b"g.V()",
            headers={"Content-Type": "text/plain; charset=utf-8"},
            timeout=2.5,
        )

    def test_body_is_returned_on_error_status(self) -> None:
        response = _make_response(b'{"error": "syntax error"}', status_code=400)
        with mock.patch.object(requests, "post", return_value=response):
            with self.assertLogs("cayley_client.transport", level="WARNING") as logs:
                body = RequestsTransport().send(QUERY_URL, b"g.V(")

        self.assertEqual(b'{"error": "syntax error"}', body)
        self.assertIn("400", logs.output[0])

    def test_request_failure(self) -> None:
        error = requests.ConnectionError("Connection refused")
        with mock.patch.object(requests, "post", side_effect=error):
            with self.assertRaises(CayleyTransportError) as context:
                RequestsTransport().send(QUERY_URL, b"g.V()")

        self.assertIs(error, context.exception.__cause__)
        self.assertIn(QUERY_URL, str(context.exception))

    def test_timeout(self) -> None:
        with mock.patch.object(requests, "post", side_effect=requests.Timeout("timed out")):
            with self.assertRaises(CayleyTransportError):
                RequestsTransport(timeout=0.1).send(QUERY_URL, b"g.V()")
