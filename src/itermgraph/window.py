"""Window handle."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from . import config
from .errors import WindowNotFoundError
from .invocation import invoke, quote
from .layout.snapshot import fetch_snapshot
from .rpc import call_checked, new_request, send_activate
from .tab import Tab
from .transport.base import Transport

if TYPE_CHECKING:
    from .app import App
    from .session import Session


@dataclass(frozen=True)
class Window:
    """An addressable window."""

    app: "App" = field(compare=False, repr=False)
    window_id: str

    @property
    def transport(self) -> Transport:
        return self.app.transport

    def get_app(self) -> "App":
        return self.app

    async def set_title(self, title: str) -> None:
        """Change the window's title."""
        result = await invoke(
            self.transport,
            self.window_id,
            f"iterm2.set_title(title: {quote(title)})",
            config.DEFAULT_INVOKE_TIMEOUT,
        )
        result.unwrap()

    async def activate(self) -> None:
        """Bring this window to the front."""
        await send_activate(self.transport, window_id=self.window_id)

    async def create_tab(self, profile: str | None = None) -> tuple[Tab, "Session"]:
        """Create a new tab in this window.

        Returns:
            (tab, session) for the new tab and its only session
        """
        from .session import Session

        request = new_request()
        request.create_tab_request.window_id = self.window_id
        if profile:
            request.create_tab_request.profile_name = profile
        message = await call_checked(self.transport, request)

        session = Session(self.app, message.window_id, str(message.tab_id), message.session_id)
        return session.get_tab(), session

    async def list_tabs(self) -> list[Tab]:
        """List the tabs of this window from a fresh snapshot."""
        snapshot = await fetch_snapshot(self.transport)
        window = snapshot.get_window(self.window_id)
        if window is None:
            raise WindowNotFoundError(self.window_id)
        return [Tab(self.app, self.window_id, tab.tab_id) for tab in window.tabs]
