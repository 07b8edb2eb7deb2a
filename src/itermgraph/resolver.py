"""IdentityResolver - pick one session out of a fresh snapshot.

Three policies, each a predicate over PaneLocation driven through the split
tree walker:

- host identity: the session this process was launched in (ITERM_SESSION_ID)
- active focus: the session iTerm2 reports as focused at window, tab and
  session level
- tmux bridge: a tmux integration session whose foreground job is this
  process. Costs one extra variable read per pane.

Every policy re-fetches the snapshot; nothing is cached between calls.
"""

import asyncio
import re
from typing import TYPE_CHECKING

from . import config
from .errors import PreconditionError, SessionNotFoundError
from .focus import FocusSignal, fetch_focus_signal
from .layout.snapshot import PaneLocation, fetch_snapshot
from .rpc import get_session_variables
from .session import Session
from .telemetry import format_pane_log, get_logger, metrics

if TYPE_CHECKING:
    from .app import App

logger = get_logger(__name__)

_INT_RE = re.compile(r"[+-]?\d+")

VariableResult = list[str] | BaseException


def parse_int(value: str) -> int | None:
    """Parse a decimal integer, returning None when ``value`` is not one."""
    if not _INT_RE.fullmatch(value):
        return None
    return int(value)


def is_bridge_candidate(values: list[str], process_id: int) -> bool:
    """Check the (jobPid, tmuxWindowPane) values of one session.

    The pane marker must be present, not null, and a non-negative integer.
    The job pid must equal ``process_id``.
    """
    job_pid, pane_marker = values
    if not pane_marker or pane_marker == config.NULL_SENTINEL:
        return False
    pane_number = parse_int(pane_marker)
    if pane_number is None or pane_number < 0:
        return False
    return parse_int(job_pid) == process_id


class IdentityResolver:
    """Resolves a Session handle for an App under one of three policies."""

    def __init__(self, app: "App", fanout_limit: int | None = None):
        """Initialize IdentityResolver.

        Args:
            app: Application whose transport is used and whose handles are returned
            fanout_limit: Max concurrent variable reads in the tmux bridge policy,
                at least 1
        """
        self._app = app
        self._fanout_limit = max(fanout_limit or config.VARIABLE_FANOUT_LIMIT, 1)

    def _session(self, location: PaneLocation) -> Session:
        return Session(self._app, location.window_id, location.tab_id, location.pane_id)

    def _found(self, policy: str, location: PaneLocation) -> Session:
        metrics.inc("resolve.ok", {"policy": policy})
        logger.debug(format_pane_log("Resolver", location.pane_id, f"{policy} matched"))
        return self._session(location)

    def _not_found(self, policy: str, message: str) -> SessionNotFoundError:
        metrics.inc("resolve.not_found", {"policy": policy})
        return SessionNotFoundError(message, policy=policy)

    async def resolve_host_identity(self, host_identity: str | None) -> Session:
        """Find the session whose id is contained in ``host_identity``.

        ``host_identity`` is a composite such as ``w0t1p7:<uuid>``; a pane matches
        when its non-empty id is a substring of it.

        Raises:
            PreconditionError: host_identity is empty; no call is made
            SessionNotFoundError: no pane matched
        """
        if not host_identity:
            raise PreconditionError(f"{config.SESSION_ID_ENV} environment variable is not set")

        snapshot = await fetch_snapshot(self._app.transport)
        location = snapshot.find_pane(lambda loc: bool(loc.pane_id) and loc.pane_id in host_identity)
        if location is not None:
            return self._found("host", location)

        raise self._not_found("host", f"no session found for session ID: {host_identity}")

    async def resolve_active_focus(self) -> Session:
        """Find the session focused at window, tab and session level.

        Raises:
            SessionNotFoundError: no window reported focus, or no pane matched
        """
        signal = await fetch_focus_signal(self._app.transport)
        snapshot = await fetch_snapshot(self._app.transport)
        location = snapshot.find_pane(signal.matches)
        if location is not None:
            return self._found("active", location)

        raise self._not_found("active", "active session not found")

    async def resolve_multiplexer(self, process_id: int) -> Session:
        """Find the tmux integration session running ``process_id``.

        Candidates are sessions whose tmuxWindowPane is set and whose jobPid
        equals ``process_id``. Preference order: a fully focused candidate, then
        a candidate in the focused session set, then the first in traversal
        order.

        Raises:
            SessionNotFoundError: no candidate
        """
        signal = await fetch_focus_signal(self._app.transport)
        snapshot = await fetch_snapshot(self._app.transport)
        locations = [location for location in snapshot.iter_panes() if location.pane_id]
        results = await self._read_bridge_variables(locations)

        candidates: list[PaneLocation] = []
        for location, result in zip(locations, results):
            if isinstance(result, BaseException):
                raise result
            if not is_bridge_candidate(result, process_id):
                continue
            if signal.matches(location):
                return self._found("tmux", location)
            candidates.append(location)

        return self._pick_candidate(candidates, signal)

    def _pick_candidate(self, candidates: list[PaneLocation], signal: FocusSignal) -> Session:
        if not candidates:
            raise self._not_found("tmux", "tmux session not found")
        for location in candidates:
            if location.pane_id in signal.session_ids:
                return self._found("tmux", location)
        return self._found("tmux", candidates[0])

    async def _read_bridge_variables(self, locations: list[PaneLocation]) -> list[VariableResult]:
        """Read jobPid and tmuxWindowPane for every pane, concurrently.

        Results keep the order of ``locations``; failures are returned in place.
        """
        semaphore = asyncio.Semaphore(self._fanout_limit)
        names = [config.JOB_PID_VAR, config.TMUX_PANE_VAR]

        async def read(location: PaneLocation) -> list[str]:
            async with semaphore:
                return await get_session_variables(self._app.transport, location.pane_id, names)

        logger.debug(f"[Resolver] reading tmux variables for {len(locations)} panes")
        metrics.inc("resolve.variable_reads", value=len(locations))
        metrics.gauge("resolve.panes_read", len(locations))
        return await asyncio.gather(*(read(location) for location in locations), return_exceptions=True)
