"""App - entry point to the iTerm2 object graph.

使用示例:
    app = await App.async_create()
    session = await app.get_current_session()
    await session.send_text("echo hello\\n")
    await app.close()
"""

import os

from . import config
from .layout.snapshot import Snapshot, fetch_snapshot
from .resolver import IdentityResolver
from .rpc import call_checked, new_request
from .session import Session
from .telemetry import get_logger
from .transport.base import Transport
from .transport.connection import ITerm2Transport
from .window import Window

logger = get_logger(__name__)


class App:
    """An open iTerm2 application.

    Holds the transport; every handle it returns refers back to it.
    """

    def __init__(self, transport: Transport):
        self._transport = transport
        self._resolver = IdentityResolver(self)

    @classmethod
    async def async_create(cls, timeout: float | None = None) -> "App":
        """Connect to iTerm2 over a new websocket connection."""
        transport = await ITerm2Transport.async_create(timeout=timeout)
        return cls(transport)

    @property
    def transport(self) -> Transport:
        return self._transport

    async def close(self) -> None:
        await self._transport.close()

    async def fetch_snapshot(self) -> Snapshot:
        """Fetch the current window/tab/pane hierarchy."""
        return await fetch_snapshot(self._transport)

    async def create_window(self, profile: str | None = None) -> Window:
        """Create a new window with one tab and one session."""
        request = new_request()
        request.create_tab_request.SetInParent()
        if profile:
            request.create_tab_request.profile_name = profile
        message = await call_checked(self._transport, request)
        logger.debug(f"[App] created window {message.window_id}")
        return Window(self, message.window_id)

    async def list_windows(self) -> list[Window]:
        snapshot = await fetch_snapshot(self._transport)
        return [Window(self, window.window_id) for window in snapshot.windows]

    async def select_menu_item(self, identifier: str) -> None:
        """Select a menu item by its identifier."""
        request = new_request()
        request.menu_item_request.identifier = identifier
        await call_checked(self._transport, request)

    async def get_current_session(self, host_identity: str | None = None) -> Session:
        """Return the session this process runs in.

        Args:
            host_identity: Identity to match; defaults to $ITERM_SESSION_ID
        """
        if host_identity is None:
            host_identity = os.environ.get(config.SESSION_ID_ENV, "")
        return await self._resolver.resolve_host_identity(host_identity)

    async def get_current_window_session(
        self, host_identity: str | None = None
    ) -> tuple[Window, Session]:
        session = await self.get_current_session(host_identity)
        return session.get_window(), session

    async def get_active_session(self) -> Session:
        """Return the session that currently has keyboard focus."""
        return await self._resolver.resolve_active_focus()

    async def get_tmux_session(self, process_id: int | None = None) -> Session:
        """Return the tmux integration session whose foreground job is ``process_id``.

        Args:
            process_id: Defaults to the pid of this process
        """
        if process_id is None:
            process_id = os.getpid()
        return await self._resolver.resolve_multiplexer(process_id)
