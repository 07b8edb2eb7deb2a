"""Session handle 测试"""

import json

import pytest
from iterm2 import api_pb2

from fakes import status_response, variable_response
from itermgraph.errors import CountMismatchError, ProtocolError
from itermgraph.session import Session
from itermgraph.tab import Tab
from itermgraph.window import Window


@pytest.fixture
def session(app):
    return Session(app, "w1", "3", "s1")


class TestSessionIdentity:
    """Equality ignores the app reference"""

    def test_equal_by_ids(self, app, transport):
        from itermgraph.app import App

        other_app = App(transport)
        assert Session(app, "w1", "3", "s1") == Session(other_app, "w1", "3", "s1")
        assert hash(Session(app, "w1", "3", "s1")) == hash(Session(other_app, "w1", "3", "s1"))

    def test_not_equal_when_tab_differs(self, app):
        assert Session(app, "w1", "3", "s1") != Session(app, "w1", "4", "s1")

    def test_frozen(self, session):
        with pytest.raises(AttributeError):
            session.session_id = "s2"

    def test_parents(self, session, app):
        assert session.get_window() == Window(app, "w1")
        assert session.get_tab() == Tab(app, "w1", "3")
        assert session.get_app() is app


class TestInject:
    """inject"""

    @pytest.mark.asyncio
    async def test_ok(self, session, transport):
        response = api_pb2.ServerOriginatedMessage()
        response.inject_response.status.append(api_pb2.InjectResponse.OK)
        transport.on("inject_request", response)

        await session.inject(b"\x1b[0m")

        request = transport.requests[0].inject_request
        assert list(request.session_id) == ["s1"]
        assert request.data == b"\x1b[0m"

    @pytest.mark.asyncio
    async def test_status_count_mismatch(self, session, transport):
        response = api_pb2.ServerOriginatedMessage()
        response.inject_response.status.extend([api_pb2.InjectResponse.OK] * 2)
        transport.on("inject_request", response)

        with pytest.raises(CountMismatchError):
            await session.inject(b"x")

    @pytest.mark.asyncio
    async def test_status_not_ok(self, session, transport):
        response = api_pb2.ServerOriginatedMessage()
        response.inject_response.status.append(1)
        transport.on("inject_request", response)

        with pytest.raises(ProtocolError, match="status is not ok"):
            await session.inject(b"x")


class TestSendText:
    """send_text"""

    @pytest.mark.asyncio
    async def test_ok(self, session, transport):
        transport.on("send_text_request", status_response("send_text_response"))
        await session.send_text("ls\n")

        request = transport.requests[0].send_text_request
        assert request.session == "s1"
        assert request.text == "ls\n"

    @pytest.mark.asyncio
    async def test_stale_session(self, session, transport):
        transport.on("send_text_request", status_response("send_text_response", status=1))
        with pytest.raises(ProtocolError) as exc_info:
            await session.send_text("ls\n")
        assert exc_info.value.operation == "send_text_response"

    @pytest.mark.asyncio
    async def test_missing_response(self, session, transport):
        transport.on("send_text_request", status_response("activate_response"))
        with pytest.raises(ProtocolError, match="response is nil"):
            await session.send_text("ls\n")


class TestActivate:
    """activate"""

    @pytest.mark.asyncio
    async def test_flags(self, session, transport):
        transport.on("activate_request", status_response("activate_response"))
        await session.activate(select_tab=False, order_window_front=True)

        request = transport.requests[0].activate_request
        assert request.session_id == "s1"
        assert request.select_tab is False
        assert request.order_window_front is True


class TestSplitPane:
    """split_pane"""

    @pytest.mark.asyncio
    async def test_returns_new_session_in_same_tab(self, session, transport):
        response = status_response("split_pane_response")
        response.split_pane_response.session_id.append("s2")
        transport.on("split_pane_request", response)

        new_session = await session.split_pane(vertical=True)

        assert (new_session.window_id, new_session.tab_id, new_session.session_id) == ("w1", "3", "s2")
        request = transport.requests[0].split_pane_request
        assert request.session == "s1"
        assert request.split_direction == api_pb2.SplitPaneRequest.VERTICAL

    @pytest.mark.asyncio
    async def test_horizontal_by_default(self, session, transport):
        response = status_response("split_pane_response")
        response.split_pane_response.session_id.append("s2")
        transport.on("split_pane_request", response)

        await session.split_pane()
        assert transport.requests[0].split_pane_request.split_direction == api_pb2.SplitPaneRequest.HORIZONTAL

    @pytest.mark.asyncio
    async def test_session_id_count(self, session, transport):
        transport.on("split_pane_request", status_response("split_pane_response"))
        with pytest.raises(CountMismatchError):
            await session.split_pane()


class TestVariables:
    """get/set variables"""

    @pytest.mark.asyncio
    async def test_get_variables_raw(self, session, transport):
        transport.on("variable_request", variable_response(['"zsh"', "123"]))
        values = await session.get_variables("jobName", "jobPid")

        assert values == ['"zsh"', "123"]
        request = transport.requests[0].variable_request
        assert request.session_id == "s1"
        assert list(request.get) == ["jobName", "jobPid"]

    @pytest.mark.asyncio
    async def test_count_mismatch(self, session, transport):
        transport.on("variable_request", variable_response(["1"]))
        with pytest.raises(CountMismatchError) as exc_info:
            await session.get_variables("a", "b")
        assert exc_info.value.expected == 2
        assert exc_info.value.actual == ["1"]

    @pytest.mark.asyncio
    async def test_get_variable_decodes(self, session, transport):
        transport.on("variable_request", variable_response(['"zsh"']))
        assert await session.get_variable("jobName") == "zsh"

    @pytest.mark.asyncio
    async def test_get_variable_null(self, session, transport):
        transport.on("variable_request", variable_response(["null"]))
        assert await session.get_variable("user.missing") is None

    @pytest.mark.asyncio
    async def test_set_variable_json_encodes(self, session, transport):
        transport.on("variable_request", variable_response([]))
        await session.set_variable("user.count", {"n": 1})

        request = transport.requests[0].variable_request
        assert request.set[0].name == "user.count"
        assert json.loads(request.set[0].value) == {"n": 1}

    @pytest.mark.asyncio
    async def test_status_not_ok(self, session, transport):
        transport.on("variable_request", variable_response([], status=1))
        with pytest.raises(ProtocolError):
            await session.get_variables("x")


class TestTmuxIntegration:
    """is_tmux_integration_session"""

    def _response(self, owners):
        response = status_response("tmux_response")
        response.tmux_response.list_connections.SetInParent()
        for owner in owners:
            response.tmux_response.list_connections.connections.add().owning_session_id = owner
        return response

    @pytest.mark.asyncio
    async def test_owner(self, session, transport):
        transport.on("tmux_request", self._response(["s0", "s1"]))
        assert await session.is_tmux_integration_session() is True
        assert transport.requests[0].tmux_request.HasField("list_connections")

    @pytest.mark.asyncio
    async def test_not_owner(self, session, transport):
        transport.on("tmux_request", self._response(["s0"]))
        assert await session.is_tmux_integration_session() is False

    @pytest.mark.asyncio
    async def test_no_payload(self, session, transport):
        transport.on("tmux_request", status_response("tmux_response"))
        assert await session.is_tmux_integration_session() is False


class TestInvokeFunction:
    """invoke_function / run_tmux_command"""

    @pytest.mark.asyncio
    async def test_success(self, session, transport):
        response = api_pb2.ServerOriginatedMessage()
        response.invoke_function_response.success.json_result = '"ok"'
        transport.on("invoke_function_request", response)

        result = await session.invoke_function("iterm2.get_string()", timeout=5)

        assert result.ok
        assert result.value() == "ok"
        request = transport.requests[0].invoke_function_request
        assert request.method.receiver == "s1"
        assert request.timeout == 5

    @pytest.mark.asyncio
    async def test_remote_error_is_a_result(self, session, transport):
        response = api_pb2.ServerOriginatedMessage()
        response.invoke_function_response.error.error_reason = "no such function"
        transport.on("invoke_function_request", response)

        result = await session.invoke_function("iterm2.nope()")

        assert not result.ok
        assert result.error_reason == "no such function"

    @pytest.mark.asyncio
    async def test_run_tmux_command_quotes(self, session, transport):
        response = api_pb2.ServerOriginatedMessage()
        response.invoke_function_response.success.json_result = '"%1"'
        transport.on("invoke_function_request", response)

        await session.run_tmux_command('display -p "#{pane_id}" \\ end')

        invocation = transport.requests[0].invoke_function_request.invocation
        assert invocation == 'iterm2.run_tmux_command(command: "display -p \\"#{pane_id}\\" \\\\ end")'
