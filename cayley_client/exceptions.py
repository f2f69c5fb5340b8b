# Copyright 2017-present Kensho Technologies, LLC.
class CayleyError(Exception):
    """Generic error when building or running a Cayley path query."""


class CayleyInvalidAddressError(CayleyError):
    """Exception raised when the host, port or API version do not form a valid endpoint."""


class CayleyInvalidArgumentError(CayleyError):
    """Exception raised when a path operation is called with an invalid argument.

    For example:
    - a limit that is zero or negative;
    - a finalized route passed where a joinable route is expected;
    - an empty or malformed morphism name.
    """


class CayleyInvalidSelectorError(CayleyInvalidArgumentError):
    """Exception raised when a node, predicate or tag selector is malformed.

    For example:
    - a multi-value selector constructed with an empty list;
    - an identifier that is not a non-empty string;
    - a selector kind not accepted by the step it was passed to.
    """


class CayleyPathFinalizedError(CayleyError):
    """Exception raised when a step or final is appended to an already finalized route."""


class CayleyQueryNotFinalizedError(CayleyError):
    """Exception raised when a route without a final is passed for execution."""


class CayleyVagueExpectationError(CayleyError):
    """Exception raised when a raw query is executed without declaring what it returns."""


class CayleyCompilationError(CayleyError):
    """Exception raised when a path cannot be compiled.

    This happens when two different morphisms are hoisted under the same name
    into a single query.
    """


class CayleyUnsupportedExpectationError(CayleyError):
    """Exception raised when a query's result shape cannot be decoded over HTTP."""

    def __init__(self, expectation):
        """Record the expectation that the bridge refused to execute."""
        super(CayleyUnsupportedExpectationError, self).__init__(
            "Finals like ToValue(), ToArray(), TagValue(), TagArray() are not supported "
            "for HTTP queries, got expectation: {}".format(expectation)
        )
        self.expectation = expectation


class CayleyTransportError(CayleyError):
    """Exception raised when the request could not be sent or its response could not be read."""


class CayleyResponseDecodingError(CayleyError):
    """Exception raised when the response body is not a decodable result envelope."""

    def __init__(self, message, truncated_body):
        """Record a description of the failure and the (truncated) offending body."""
        super(CayleyResponseDecodingError, self).__init__(
            "{}. Response body: {}".format(message, truncated_body)
        )
        self.truncated_body = truncated_body


class CayleyRemoteError(CayleyResponseDecodingError):
    """Exception raised when the service reports an error in the response envelope."""

    def __init__(self, message, truncated_body):
        """Record the error message reported by the service."""
        super(CayleyRemoteError, self).__init__(
            "Query failed on the server: {}".format(message), truncated_body
        )
        self.message = message
