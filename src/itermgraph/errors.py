"""Exceptions raised by itermgraph.

PUBLIC API:
  - ItermGraphError: Base exception for every failure in this package
  - PreconditionError: A required external signal is missing
  - TransportError: The round trip to iTerm2 failed
  - ProtocolError: A response is missing its sub-message or carries a non-OK status
  - CountMismatchError: A repeated field has the wrong length
  - SessionNotFoundError: Resolution finished without a matching session
  - WindowNotFoundError: A window id is not present in the snapshot
  - RemoteInvocationError: A remote function reported an error
"""


class ItermGraphError(Exception):
    """Base exception for all itermgraph operations."""

    pass


class PreconditionError(ItermGraphError):
    """Raised before any call when a required signal is absent."""

    pass


class TransportError(ItermGraphError):
    """Raised when the round trip itself fails."""

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"call {operation} failed: {reason}")


class ProtocolError(ItermGraphError):
    """Raised when a response does not have the expected shape or status."""

    def __init__(self, operation: str, detail: str):
        self.operation = operation
        self.detail = detail
        super().__init__(f"{operation}: {detail}")


class CountMismatchError(ProtocolError):
    """Raised when a repeated field does not have the length the request implies."""

    def __init__(self, operation: str, field: str, expected: int, actual: list):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(operation, f"{field} count is not {expected}: {actual!r}")


class SessionNotFoundError(ItermGraphError):
    """Raised when a resolution completes but no session matches."""

    def __init__(self, message: str, policy: str | None = None):
        self.policy = policy
        super().__init__(message)


class WindowNotFoundError(ItermGraphError):
    """Raised when a window id is not present in a fresh snapshot."""

    def __init__(self, window_id: str):
        self.window_id = window_id
        super().__init__(f"window not found: {window_id}")


class RemoteInvocationError(ItermGraphError):
    """Raised when unwrapping a failed remote function invocation."""

    def __init__(self, invocation: str, reason: str):
        self.invocation = invocation
        self.reason = reason
        super().__init__(f"invoke_function_response error for {invocation!r}: {reason}")
