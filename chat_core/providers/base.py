"""Provider 抽象接口。

ChatBot 不直接依赖具体的 HTTP 实现，而是依赖此协议：
负责把有序的对话历史发给远端，并返回回复消息与 token 总数。
测试中可以用任意实现了 send 的对象替代真实客户端。
"""

from typing import Protocol, Sequence, Tuple

from chat_core.domain.models import ChatMessage


class ProviderClient(Protocol):
    """LLM Provider 客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - send(messages): 执行一次非流式调用，返回 (回复消息, token 总数)。
    """

    name: str

    def send(self, messages: Sequence[ChatMessage]) -> Tuple[ChatMessage, int]:
        ...
