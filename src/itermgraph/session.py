"""Session handle - one pane of a tab."""

import json
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from iterm2 import api_pb2

from . import config
from .errors import CountMismatchError, ProtocolError
from .invocation import InvocationResult, invoke, quote
from .rpc import (
    call_checked,
    expect_submessage,
    get_session_variables,
    new_request,
    send_activate,
    set_session_variable,
    status_name,
)
from .telemetry import format_pane_log, get_logger
from .transport.base import Transport

if TYPE_CHECKING:
    from .app import App
    from .tab import Tab
    from .window import Window

logger = get_logger(__name__)


@dataclass(frozen=True)
class Session:
    """An addressable session (pane).

    Only the window, tab and session ids take part in equality. A handle never
    changes once built; operations on a session that no longer exists raise
    ProtocolError with a SESSION_NOT_FOUND status.
    """

    app: "App" = field(compare=False, repr=False)
    window_id: str
    tab_id: str
    session_id: str

    @property
    def transport(self) -> Transport:
        return self.app.transport

    def get_app(self) -> "App":
        return self.app

    def get_window(self) -> "Window":
        from .window import Window

        return Window(self.app, self.window_id)

    def get_tab(self) -> "Tab":
        from .tab import Tab

        return Tab(self.app, self.window_id, self.tab_id)

    async def inject(self, data: bytes) -> None:
        """Inject data as though it were program output."""
        request = new_request()
        request.inject_request.session_id.append(self.session_id)
        request.inject_request.data = data
        response = await self.transport.call(request)
        message = expect_submessage(response, "inject_response")

        statuses = list(message.status)
        if len(statuses) != 1:
            raise CountMismatchError("inject_response", "status", 1, statuses)
        if statuses[0] != api_pb2.InjectResponse.OK:
            name = status_name(message, statuses[0])
            raise ProtocolError("inject_response", f"status is not ok: {name}")

    async def send_text(self, text: str, suppress_broadcast: bool = False) -> None:
        """Send text as though the user had typed it."""
        request = new_request()
        request.send_text_request.session = self.session_id
        request.send_text_request.text = text
        request.send_text_request.suppress_broadcast = suppress_broadcast
        await call_checked(self.transport, request)

    async def activate(self, select_tab: bool = True, order_window_front: bool = True) -> None:
        """Make this the active session in its tab.

        Args:
            select_tab: Also select the tab containing this session
            order_window_front: Bring the window to the front and give it keyboard focus
        """
        await send_activate(
            self.transport,
            session_id=self.session_id,
            select_tab=select_tab,
            order_window_front=order_window_front,
        )

    async def split_pane(self, vertical: bool = False, before: bool = False) -> "Session":
        """Split this pane, returning the new session.

        Args:
            vertical: If True the divider is vertical, else horizontal
            before: Place the new session left of/above this one
        """
        request = new_request()
        request.split_pane_request.session = self.session_id
        request.split_pane_request.split_direction = (
            api_pb2.SplitPaneRequest.VERTICAL if vertical else api_pb2.SplitPaneRequest.HORIZONTAL
        )
        request.split_pane_request.before = before
        message = await call_checked(self.transport, request)

        session_ids = list(message.session_id)
        if len(session_ids) != 1:
            raise CountMismatchError("split_pane_response", "session_id", 1, session_ids)
        logger.debug(format_pane_log("Session", self.session_id, f"split into {session_ids[0]}"))
        return Session(self.app, self.window_id, self.tab_id, session_ids[0])

    async def get_variables(self, *names: str) -> list[str]:
        """Fetch session variables as raw JSON-encoded strings, one per name."""
        return await get_session_variables(self.transport, self.session_id, list(names))

    async def get_variable(self, name: str) -> Any:
        """Fetch one session variable and decode it. Unset variables are None."""
        (raw,) = await self.get_variables(name)
        try:
            return json.loads(raw)
        except ValueError:
            return raw

    async def set_variable(self, name: str, value: Any) -> None:
        """Set a session variable. User-defined names must start with ``user.``."""
        await set_session_variable(self.transport, self.session_id, name, value)

    async def is_tmux_integration_session(self) -> bool:
        """Report whether this session owns a tmux integration connection."""
        request = new_request()
        request.tmux_request.list_connections.SetInParent()
        message = await call_checked(self.transport, request)

        payload = message.WhichOneof("payload")
        if payload is None:
            return False
        if payload != "list_connections":
            raise ProtocolError("tmux_response", f"payload is not list_connections: {payload}")

        return any(
            connection.owning_session_id == self.session_id
            for connection in message.list_connections.connections
        )

    async def invoke_function(
        self, invocation: str, timeout: float = config.DEFAULT_INVOKE_TIMEOUT
    ) -> InvocationResult:
        """Invoke a remote function with this session as the receiver."""
        return await invoke(self.transport, self.session_id, invocation, timeout)

    async def run_tmux_command(
        self, command: str, timeout: float = config.DEFAULT_INVOKE_TIMEOUT
    ) -> InvocationResult:
        """Run a tmux command through the integration connection of this session."""
        return await self.invoke_function(
            f"iterm2.run_tmux_command(command: {quote(command)})", timeout
        )
