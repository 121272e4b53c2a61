"""Errors raised while bridging a chat request to the inference server."""


class BridgeError(Exception):
    """Base class for failures on the chat path."""


class TransportError(BridgeError):
    """The inference server could not be reached or the reply could not be read."""


class UpstreamStatusError(TransportError):
    """The inference server answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"upstream returned HTTP {status_code}")


class ParseError(BridgeError):
    """The reply body is not JSON or does not have the expected shape."""
