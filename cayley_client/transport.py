# Copyright 2017-present Kensho Technologies, LLC.
"""Blocking request/response transport used to send compiled queries to the server."""
import logging
from typing import Optional, Protocol, Tuple, Union

import requests

from .exceptions import CayleyTransportError


logger = logging.getLogger(__name__)

TimeoutT = Union[None, float, Tuple[float, float]]


class Transport(Protocol):
    """Anything that can post a payload to a URL and return the body of the response."""

    def send(self, url: str, payload: bytes) -> bytes:
        """Send the payload, wait for the response and return its body.

        Raises:
            CayleyTransportError: if the request could not be sent or the response not read
        """
        ...


class RequestsTransport(object):
    """Transport performing one HTTP POST request per query, using the requests library."""

    def __init__(self, session: Optional[requests.Session] = None, timeout: TimeoutT = None):
        """Construct a new transport.

        Args:
            session: optional requests.Session to reuse connections and settings across
                     queries. By default, every query is sent with a one-off request.
            timeout: passed through to requests as-is. None, the default, waits forever;
                     callers needing bounded latency should set it.
        """
        self.session = session
        self.timeout = timeout

    def send(self, url: str, payload: bytes) -> bytes:
        """Post the payload to the URL and return the body of the response.

        The body is returned regardless of the HTTP status, since the server reports
        query errors inside the JSON body, which the caller decodes.
        """
        post = self.session.post if self.session is not None else requests.post
        try:
            response = post(
                url,
                data=payload,
                headers={"Content-Type": "text/plain; charset=utf-8"},
                timeout=self.timeout,
            )
            body = response.content
        except requests.RequestException as e:
            raise CayleyTransportError("Request to {} failed: {}".format(url, e)) from e

        if not response.ok:
            logger.warning(
                "Request to %s returned HTTP status %s %s",
                url,
                response.status_code,
                response.reason,
            )
        else:
            logger.debug("Request to %s succeeded", url)
        return body
