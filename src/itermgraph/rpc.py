"""Request builders and response checks shared by the object handles.

Every helper here performs at most one Transport call. Response checks raise
ProtocolError naming the operation, so callers never inspect raw messages.
"""

import json

from iterm2 import api_pb2

from .errors import CountMismatchError, ProtocolError
from .transport.base import Transport


def new_request() -> api_pb2.ClientOriginatedMessage:
    """Allocate an empty client message."""
    return api_pb2.ClientOriginatedMessage()


def expect_submessage(response: api_pb2.ServerOriginatedMessage, field: str):
    """Return the ``field`` sub-message of a response or raise ProtocolError."""
    actual = response.WhichOneof("submessage")
    if actual != field:
        raise ProtocolError(field, f"response is nil (got {actual})")
    return getattr(response, field)


def status_name(message, status: int | None = None) -> str:
    """Render a response status enum value by name."""
    field = message.DESCRIPTOR.fields_by_name["status"]
    if status is None:
        status = message.status
    value = field.enum_type.values_by_number.get(status)
    return value.name if value is not None else str(status)


def check_status(message, operation: str) -> None:
    """Raise ProtocolError unless ``message.status`` is OK (enum value 0)."""
    if message.status != 0:
        raise ProtocolError(operation, f"status is not ok: {status_name(message)}")


async def call_checked(transport: Transport, request: api_pb2.ClientOriginatedMessage):
    """Send ``request`` and return its response sub-message with an OK status."""
    field = request.WhichOneof("submessage").replace("_request", "_response")
    response = await transport.call(request)
    message = expect_submessage(response, field)
    check_status(message, field)
    return message


async def list_sessions(transport: Transport) -> api_pb2.ListSessionsResponse:
    request = new_request()
    request.list_sessions_request.SetInParent()
    response = await transport.call(request)
    return expect_submessage(response, "list_sessions_response")


async def get_session_variables(
    transport: Transport, session_id: str, names: list[str]
) -> list[str]:
    """Read session variables.

    Returns the raw JSON-encoded values, positionally matching ``names``.
    """
    request = new_request()
    request.variable_request.session_id = session_id
    request.variable_request.get.extend(names)
    message = await call_checked(transport, request)

    values = list(message.values)
    if len(values) != len(names):
        raise CountMismatchError("variable_response", "values", len(names), values)
    return values


async def set_session_variable(transport: Transport, session_id: str, name: str, value) -> None:
    """Set one session variable; ``value`` is JSON-encoded before sending."""
    request = new_request()
    request.variable_request.session_id = session_id
    item = request.variable_request.set.add()
    item.name = name
    item.value = json.dumps(value)
    await call_checked(transport, request)


async def send_activate(
    transport: Transport,
    *,
    window_id: str | None = None,
    tab_id: str | None = None,
    session_id: str | None = None,
    select_tab: bool = True,
    order_window_front: bool = True,
) -> None:
    """Activate a window, tab or session. Exactly one identifier is set."""
    request = new_request()
    activate_request = request.activate_request
    if session_id is not None:
        activate_request.session_id = session_id
    elif tab_id is not None:
        activate_request.tab_id = tab_id
    elif window_id is not None:
        activate_request.window_id = window_id
    else:
        raise ValueError("activate requires a window, tab or session id")
    activate_request.select_tab = select_tab
    activate_request.order_window_front = order_window_front
    await call_checked(transport, request)
