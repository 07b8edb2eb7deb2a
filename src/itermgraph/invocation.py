"""Remote function invocation.

iTerm2 answers an invoke_function_request with either a JSON result or an
error reason. Both are expected outcomes, so they are returned as an
InvocationResult instead of being raised.
"""

import json
from dataclasses import dataclass
from typing import Any

from .errors import ProtocolError, RemoteInvocationError
from .rpc import expect_submessage, new_request
from .transport.base import Transport


@dataclass(frozen=True)
class InvocationResult:
    """Ok(json_result) or Err(error_reason)."""

    invocation: str
    json_result: str | None = None
    error_reason: str | None = None

    @classmethod
    def success(cls, invocation: str, json_result: str) -> "InvocationResult":
        return cls(invocation=invocation, json_result=json_result)

    @classmethod
    def failure(cls, invocation: str, error_reason: str) -> "InvocationResult":
        return cls(invocation=invocation, error_reason=error_reason)

    @property
    def ok(self) -> bool:
        return self.error_reason is None

    def unwrap(self) -> str:
        """Return the raw JSON result or raise RemoteInvocationError."""
        if self.error_reason is not None:
            raise RemoteInvocationError(self.invocation, self.error_reason)
        return self.json_result or ""

    def value(self) -> Any:
        """Return the decoded JSON result; an empty result decodes to None."""
        raw = self.unwrap()
        return json.loads(raw) if raw else None


async def invoke(
    transport: Transport, receiver: str, invocation: str, timeout: float
) -> InvocationResult:
    """Invoke ``invocation`` as a method of ``receiver`` (a window, tab or session id).

    Args:
        transport: Transport to send the request on
        receiver: Object the function is invoked on
        invocation: Function call expression, e.g. ``iterm2.set_title(title: "x")``
        timeout: Seconds the emulator waits for the function; -1 uses its default
    """
    request = new_request()
    request.invoke_function_request.invocation = invocation
    request.invoke_function_request.method.receiver = receiver
    request.invoke_function_request.timeout = timeout
    response = await transport.call(request)
    message = expect_submessage(response, "invoke_function_response")

    if message.HasField("success"):
        return InvocationResult.success(invocation, message.success.json_result)
    if message.HasField("error"):
        return InvocationResult.failure(invocation, message.error.error_reason)
    raise ProtocolError("invoke_function_response", f"unknown response: {message}")


def quote(value: str) -> str:
    """Quote a string argument for an invocation expression."""
    return json.dumps(value)
