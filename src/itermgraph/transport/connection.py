"""Transport backed by an iterm2.Connection websocket."""

import asyncio

import iterm2
from iterm2 import api_pb2, rpc

from .. import config
from ..errors import TransportError
from ..telemetry import get_logger, metrics
from .base import Transport

logger = get_logger(__name__)


class ITerm2Transport(Transport):
    """Sends protobuf requests over an existing iterm2.Connection.

    Request ids come from the iterm2 library allocator, so calls made through
    this transport never collide with library calls sharing the connection.
    Each call sends the message and waits until the response carrying the same
    id is dispatched. A server ``error`` reply is raised as TransportError. No
    retries are performed.
    """

    def __init__(self, connection: iterm2.Connection, timeout: float | None = None):
        """Initialize ITerm2Transport.

        Args:
            connection: Open iTerm2 connection.
            timeout: Per-call timeout in seconds. Defaults to config.TRANSPORT_TIMEOUT.
        """
        self._connection = connection
        self._timeout = config.TRANSPORT_TIMEOUT if timeout is None else timeout

    @property
    def connection(self) -> iterm2.Connection:
        return self._connection

    @classmethod
    async def async_create(cls, timeout: float | None = None) -> "ITerm2Transport":
        """Open a new connection to iTerm2 and wrap it."""
        connection = await iterm2.Connection.async_create()
        return cls(connection, timeout=timeout)

    async def call(
        self, request: api_pb2.ClientOriginatedMessage
    ) -> api_pb2.ServerOriginatedMessage:
        operation = request.WhichOneof("submessage") or "unknown"
        request.id = rpc._alloc_id()
        metrics.inc("transport.calls", {"op": operation})

        try:
            response = await asyncio.wait_for(self._round_trip(request), self._timeout)
        except asyncio.TimeoutError as e:
            metrics.inc("transport.errors", {"op": operation})
            raise TransportError(operation, f"timed out after {self._timeout}s") from e
        except asyncio.CancelledError:
            raise
        except Exception as e:
            metrics.inc("transport.errors", {"op": operation})
            logger.debug(f"[Transport] {operation} failed: {e}")
            raise TransportError(operation, str(e)) from e

        if response.WhichOneof("submessage") == "error":
            metrics.inc("transport.errors", {"op": operation})
            raise TransportError(operation, response.error)
        return response

    async def _round_trip(
        self, request: api_pb2.ClientOriginatedMessage
    ) -> api_pb2.ServerOriginatedMessage:
        await self._connection.async_send_message(request)
        return await self._connection.async_dispatch_until_id(request.id)
