"""Failure types raised by the catalog client, git introspection and tool handlers."""


class CatalogError(Exception):
    """Base class for failures talking to the remote component catalog."""


class NetworkError(CatalogError):
    """The catalog host could not be reached (DNS, timeout, refused connection)."""


class RemoteUnavailable(CatalogError):
    """The catalog host answered the index request with a non-success status."""

    def __init__(self, status: int, reason: str = ""):
        self.status = status
        self.reason = reason
        super().__init__(f"{status} {reason}".strip())


class ComponentNotFound(CatalogError):
    """No spec document is served for the requested component."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Component "{name}" not found')


class InvalidArguments(Exception):
    def __init__(self, tool: str, message: str):
        super().__init__(f"Invalid arguments for {tool}: {message}")


class GitCommandError(Exception):
    """A git invocation failed: missing binary, non-zero exit or timeout."""

    def __init__(self, args: list[str], message: str):
        self.message = message
        super().__init__(f"git {' '.join(args)}: {message}")
