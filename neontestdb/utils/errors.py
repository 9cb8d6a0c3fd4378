"""Error types raised by the branch client.

None of these are recoverable inside a call: a failed provisioning step means
the test environment itself is unusable, so they propagate to the test (or to
the CLI, which exits with status 1).
"""


class NeonTestDBError(Exception):
    """Base class for all neontestdb failures."""


class ConfigurationError(NeonTestDBError):
    """A required configuration value is missing."""


class TransportError(NeonTestDBError):
    """The HTTP request could not be completed."""

    def __init__(self, caller, error):
        self.caller = caller
        self.error = error
        super().__init__(f"{caller}: http client error {error}")


class ResponseError(NeonTestDBError):
    """Base class for errors about a response that did arrive."""

    def __init__(self, caller, message, url, body):
        self.caller = caller
        self.url = url
        self.body = body
        super().__init__(f"{caller}: {message} Url: {url} Body: {body}")


class ResponseDecodeError(ResponseError):
    """The response body could not be decoded into the expected model."""

    def __init__(self, caller, type_name, url, body):
        self.type_name = type_name
        super().__init__(caller, f"error decoding {type_name}", url, body)


class UnexpectedStatusError(ResponseError):
    """The response status code was not one of the accepted codes."""

    def __init__(self, caller, status_code, url, body):
        self.status_code = status_code
        super().__init__(caller, f"unexpected status code Status: {status_code}", url, body)


class BranchLockedError(NeonTestDBError):
    """Branch creation stayed locked for the whole retry window."""

    def __init__(self, name, elapsed):
        self.name = name
        self.elapsed = elapsed
        super().__init__(f"failed to create branch {name} after: {elapsed:.3f}s")


class ParentBranchNotFoundError(NeonTestDBError):
    """The configured parent branch does not exist in the project."""

    def __init__(self, name, parent):
        self.name = name
        self.parent = parent
        super().__init__(f"error creating branch {name}, parent branch '{parent}' not found")


class MissingConnectionURIError(NeonTestDBError):
    """A created branch came back without any connection URI."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Branch {name} was created without a connection URI")
