"""itermgraph - iTerm2 object graph and session resolution"""

from itermgraph.app import App
from itermgraph.errors import (
    CountMismatchError,
    ItermGraphError,
    PreconditionError,
    ProtocolError,
    RemoteInvocationError,
    SessionNotFoundError,
    TransportError,
    WindowNotFoundError,
)
from itermgraph.focus import FocusSignal
from itermgraph.invocation import InvocationResult
from itermgraph.layout import Leaf, Snapshot, Split, collect_leaves, find_leaf
from itermgraph.resolver import IdentityResolver
from itermgraph.session import Session
from itermgraph.tab import Tab
from itermgraph.transport import ITerm2Transport, Transport
from itermgraph.window import Window

__all__ = [
    # Objects
    "App",
    "Window",
    "Tab",
    "Session",
    "InvocationResult",
    # Resolution
    "IdentityResolver",
    "FocusSignal",
    # Layout
    "Leaf",
    "Split",
    "Snapshot",
    "find_leaf",
    "collect_leaves",
    # Transport
    "Transport",
    "ITerm2Transport",
    # Errors
    "ItermGraphError",
    "PreconditionError",
    "TransportError",
    "ProtocolError",
    "CountMismatchError",
    "SessionNotFoundError",
    "WindowNotFoundError",
    "RemoteInvocationError",
]
