"""Tab handle - one tab of a window."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from . import config
from .invocation import invoke, quote
from .layout.snapshot import fetch_snapshot
from .layout.tree import collect_leaves
from .rpc import send_activate
from .transport.base import Transport

if TYPE_CHECKING:
    from .app import App
    from .session import Session
    from .window import Window


@dataclass(frozen=True)
class Tab:
    """An addressable tab."""

    app: "App" = field(compare=False, repr=False)
    window_id: str
    tab_id: str

    @property
    def transport(self) -> Transport:
        return self.app.transport

    def get_window(self) -> "Window":
        from .window import Window

        return Window(self.app, self.window_id)

    async def set_title(self, title: str) -> None:
        """Change the tab's title."""
        result = await invoke(
            self.transport,
            self.tab_id,
            f"iterm2.set_title(title: {quote(title)})",
            config.DEFAULT_INVOKE_TIMEOUT,
        )
        result.unwrap()

    async def activate(self, order_window_front: bool = True) -> None:
        """Select this tab."""
        await send_activate(self.transport, tab_id=self.tab_id, order_window_front=order_window_front)

    async def list_sessions(self) -> list["Session"]:
        """List the sessions of this tab from a fresh snapshot.

        A tab that has disappeared, or has no root, yields an empty list.
        """
        from .session import Session

        snapshot = await fetch_snapshot(self.transport)
        window = snapshot.get_window(self.window_id)
        tab = window.get_tab(self.tab_id) if window else None
        if tab is None:
            return []
        return [
            Session(self.app, self.window_id, self.tab_id, pane_id)
            for pane_id in collect_leaves(tab.root)
            if pane_id
        ]
