"""Focus signal - which window, tab and session iTerm2 reports as focused.

A single focus_request returns a batch of notifications: one window
notification per window plus any number of selected-tab and selected-session
notifications, interleaved. Window statuses are ordered so that a smaller value
means "more in front":

    TERMINAL_WINDOW_BECAME_KEY (0) < TERMINAL_WINDOW_IS_CURRENT (1) < TERMINAL_WINDOW_RESIGNED_KEY (2)
"""

from collections.abc import Iterable
from dataclasses import dataclass

from iterm2 import api_pb2

from .errors import SessionNotFoundError
from .layout.snapshot import PaneLocation
from .rpc import expect_submessage, new_request
from .telemetry import get_logger
from .transport.base import Transport

logger = get_logger(__name__)


@dataclass(frozen=True)
class WindowFocus:
    """One window-focus notification."""

    window_id: str
    status: int


@dataclass(frozen=True)
class FocusSignal:
    """Focus reported at window, tab and session granularity."""

    focused_window_id: str
    tab_ids: frozenset[str] = frozenset()
    session_ids: frozenset[str] = frozenset()

    def matches(self, location: PaneLocation) -> bool:
        """True when window, tab and session are all reported as focused."""
        return (
            location.window_id == self.focused_window_id
            and location.tab_id in self.tab_ids
            and location.pane_id in self.session_ids
        )


def pick_focused_window(windows: list[WindowFocus]) -> WindowFocus:
    """Return the window with the lowest status; ties keep stream order."""
    if not windows:
        raise SessionNotFoundError("no active window", policy="active")
    return sorted(windows, key=lambda w: w.status)[0]


def parse_focus_notifications(
    notifications: Iterable[api_pb2.FocusChangedNotification],
) -> FocusSignal:
    """Fold a batch of focus notifications into a FocusSignal.

    Raises:
        SessionNotFoundError: no window notification is present
    """
    windows: list[WindowFocus] = []
    tab_ids: set[str] = set()
    session_ids: set[str] = set()

    for notification in notifications:
        event = notification.WhichOneof("event")
        if event == "window":
            windows.append(
                WindowFocus(
                    window_id=notification.window.window_id,
                    status=notification.window.window_status,
                )
            )
        elif event == "selected_tab":
            tab_ids.add(notification.selected_tab)
        elif event == "session":
            session_ids.add(notification.session)

    focused = pick_focused_window(windows)
    return FocusSignal(
        focused_window_id=focused.window_id,
        tab_ids=frozenset(tab_ids),
        session_ids=frozenset(session_ids),
    )


async def fetch_focus_signal(transport: Transport) -> FocusSignal:
    """Issue one focus_request and parse the notifications it returns."""
    request = new_request()
    request.focus_request.SetInParent()
    response = await transport.call(request)
    focus_response = expect_submessage(response, "focus_response")

    signal = parse_focus_notifications(focus_response.notifications)
    logger.debug(
        f"[Focus] window={signal.focused_window_id} "
        f"tabs={sorted(signal.tab_ids)} sessions={sorted(signal.session_ids)}"
    )
    return signal
