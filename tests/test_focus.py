"""Tests for focus signal parsing"""

import pytest

from fakes import focus_response
from itermgraph.errors import ProtocolError, SessionNotFoundError
from itermgraph.focus import (
    FocusSignal,
    WindowFocus,
    fetch_focus_signal,
    parse_focus_notifications,
    pick_focused_window,
)
from itermgraph.layout.snapshot import PaneLocation

BECAME_KEY = 0
IS_CURRENT = 1
RESIGNED_KEY = 2


def _parse(**kwargs) -> FocusSignal:
    return parse_focus_notifications(focus_response(**kwargs).focus_response.notifications)


class TestPickFocusedWindow:
    """Lower window status wins"""

    def test_lower_status_wins(self):
        windows = [WindowFocus("w1", RESIGNED_KEY), WindowFocus("w2", BECAME_KEY)]
        assert pick_focused_window(windows).window_id == "w2"

    def test_ties_keep_stream_order(self):
        windows = [WindowFocus("w1", IS_CURRENT), WindowFocus("w2", IS_CURRENT)]
        assert pick_focused_window(windows).window_id == "w1"

    def test_no_window_is_error(self):
        with pytest.raises(SessionNotFoundError, match="no active window"):
            pick_focused_window([])


class TestParseFocusNotifications:
    """parse_focus_notifications"""

    def test_collects_all_granularities(self):
        signal = _parse(windows=[("w1", RESIGNED_KEY), ("w2", BECAME_KEY)], tabs=["1", "2"], sessions=["s1"])
        assert signal.focused_window_id == "w2"
        assert signal.tab_ids == frozenset({"1", "2"})
        assert signal.session_ids == frozenset({"s1"})

    def test_without_window_notification(self):
        with pytest.raises(SessionNotFoundError):
            _parse(tabs=["1"], sessions=["s1"])

    def test_application_active_ignored(self):
        response = focus_response(windows=[("w1", BECAME_KEY)])
        response.focus_response.notifications.add().application_active = True
        signal = parse_focus_notifications(response.focus_response.notifications)
        assert signal.focused_window_id == "w1"


class TestFocusSignalMatches:
    """All three levels must agree"""

    signal = FocusSignal("w1", frozenset({"1", "2"}), frozenset({"s1"}))

    def test_full_match(self):
        assert self.signal.matches(PaneLocation("w1", "2", "s1"))

    def test_wrong_session(self):
        assert not self.signal.matches(PaneLocation("w1", "1", "s2"))

    def test_wrong_tab(self):
        assert not self.signal.matches(PaneLocation("w1", "3", "s1"))

    def test_wrong_window(self):
        assert not self.signal.matches(PaneLocation("w2", "1", "s1"))


class TestFetchFocusSignal:
    """fetch_focus_signal"""

    @pytest.mark.asyncio
    async def test_single_focus_request(self, transport):
        transport.on("focus_request", focus_response(windows=[("w1", BECAME_KEY)], sessions=["s1"]))
        signal = await fetch_focus_signal(transport)
        assert signal.focused_window_id == "w1"
        assert len(transport.calls("focus_request")) == 1

    @pytest.mark.asyncio
    async def test_missing_focus_response(self, transport):
        from fakes import variable_response

        transport.on("focus_request", variable_response([]))
        with pytest.raises(ProtocolError):
            await fetch_focus_signal(transport)
