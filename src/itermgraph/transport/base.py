"""Transport 抽象接口

定义与 iTerm2 通信的最小接口：一次请求，一次响应。

设计原则：
1. 最小接口：只定义 call
2. 编码无关：请求/响应使用 iTerm2 的 protobuf 消息
3. 异步优先：所有 IO 操作都是 async
"""

from abc import ABC, abstractmethod

from iterm2 import api_pb2


class Transport(ABC):
    """Transport 抽象接口

    使用示例:
        transport = ITerm2Transport(connection)
        request = api_pb2.ClientOriginatedMessage()
        request.list_sessions_request.SetInParent()
        response = await transport.call(request)
    """

    @abstractmethod
    async def call(
        self, request: api_pb2.ClientOriginatedMessage
    ) -> api_pb2.ServerOriginatedMessage:
        """发送请求并等待对应的响应

        Args:
            request: 客户端请求消息

        Returns:
            服务端响应消息

        Raises:
            TransportError: 往返失败
        """
        pass

    async def close(self) -> None:
        """释放连接（默认无操作）"""
        return None
