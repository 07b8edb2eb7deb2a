"""Snapshot of the window/tab/pane hierarchy.

A Snapshot is fetched fresh by every resolution and list operation; nothing
here is cached.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import NamedTuple

from iterm2 import api_pb2

from ..rpc import list_sessions
from ..telemetry import get_logger, metrics
from ..transport.base import Transport
from .tree import Node, collect_leaves, find_leaf, iter_leaves, split_tree_from_proto

logger = get_logger(__name__)


class PaneLocation(NamedTuple):
    """A pane together with the window and tab that own it."""

    window_id: str
    tab_id: str
    pane_id: str


@dataclass(frozen=True)
class TabSnapshot:
    """Tab 信息"""

    tab_id: str
    root: Node | None = None

    def pane_ids(self) -> list[str]:
        return collect_leaves(self.root)


@dataclass(frozen=True)
class WindowSnapshot:
    """Window 信息"""

    window_id: str
    tabs: tuple[TabSnapshot, ...] = field(default_factory=tuple)

    def get_tab(self, tab_id: str) -> TabSnapshot | None:
        for tab in self.tabs:
            if tab.tab_id == tab_id:
                return tab
        return None


@dataclass(frozen=True)
class Snapshot:
    """完整布局快照"""

    windows: tuple[WindowSnapshot, ...] = field(default_factory=tuple)

    def get_window(self, window_id: str) -> WindowSnapshot | None:
        for window in self.windows:
            if window.window_id == window_id:
                return window
        return None

    def iter_panes(self) -> Iterator[PaneLocation]:
        """Yield every pane in window, then tab, then leaf order."""
        for window in self.windows:
            for tab in window.tabs:
                for pane_id in iter_leaves(tab.root):
                    yield PaneLocation(window.window_id, tab.tab_id, pane_id)

    def find_pane(self, match: Callable[[PaneLocation], bool]) -> PaneLocation | None:
        """Return the first pane, in iter_panes order, for which ``match`` is true."""
        for window in self.windows:
            for tab in window.tabs:
                pane_id = find_leaf(
                    tab.root,
                    lambda pane_id: match(PaneLocation(window.window_id, tab.tab_id, pane_id)),
                )
                if pane_id is not None:
                    return PaneLocation(window.window_id, tab.tab_id, pane_id)
        return None

    def get_all_pane_ids(self) -> set[str]:
        """获取所有 pane ID"""
        return {location.pane_id for location in self.iter_panes()}

    @classmethod
    def from_proto(cls, response: api_pb2.ListSessionsResponse) -> "Snapshot":
        windows = []
        for window in response.windows:
            tabs = []
            for tab in window.tabs:
                root = split_tree_from_proto(tab.root) if tab.HasField("root") else None
                tabs.append(TabSnapshot(tab_id=tab.tab_id, root=root))
            windows.append(WindowSnapshot(window_id=window.window_id, tabs=tuple(tabs)))
        return cls(windows=tuple(windows))


async def fetch_snapshot(transport: Transport) -> Snapshot:
    """Issue one list_sessions_request and build the Snapshot."""
    response = await list_sessions(transport)
    snapshot = Snapshot.from_proto(response)
    pane_count = sum(1 for _ in snapshot.iter_panes())
    metrics.gauge("snapshot.windows", len(snapshot.windows))
    metrics.gauge("snapshot.panes", pane_count)
    logger.debug(f"[Snapshot] {len(snapshot.windows)} windows, {pane_count} panes fetched")
    return snapshot
