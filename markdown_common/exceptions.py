"""Custom exception classes for the markdown CLI and its transports."""


class MarkdownCliError(Exception):
    """
    Base exception class for all markdown-cli errors.
    """
    pass


class UsageError(MarkdownCliError):
    """
    Raised for invalid user input (missing argument, bad local path).
    """
    pass


class RemoteFileNotFoundError(UsageError):
    """
    Raised when a file name does not exist on the server.
    """

    def __init__(self, name: str):
        super().__init__(f"File not found: {name}")
        self.name = name


class TransportError(MarkdownCliError):
    """
    Raised when the server cannot be reached or answers with a failure.
    """
    pass


class HttpError(TransportError):
    """
    Raised when the REST API answers with status >= 400.
    """

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ProtocolError(TransportError):
    """
    Raised when a response body does not have the expected shape.
    """
    pass


class RpcCallError(TransportError):
    """
    Raised when a URL protocol RPC call fails.
    """
    pass


class ResolverError(MarkdownCliError):
    """
    Raised by the URL resolver for addressing and lifecycle failures.
    """
    pass


class ServiceUnavailableError(ResolverError):
    """
    Raised when no bootstrap peer could deliver a service RPC.
    """
    pass


class ServiceRpcError(ResolverError):
    """
    Raised when the remote service reports an error for an RPC.
    """
    pass


class EditorError(MarkdownCliError):
    """
    Raised when the external editor cannot be started or exits non-zero.
    """
    pass
