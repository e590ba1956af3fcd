"""对话管理器。

ChatBot 持有对话历史与 Provider 客户端：每轮把用户输入追加到历史，
把完整历史交给 Provider，再把回复原样追加回历史。
"""

import logging
from typing import Any, List, Optional, Tuple

from chat_core.config.settings import settings
from chat_core.domain.conversation import Conversation
from chat_core.domain.exceptions import MissingContentError
from chat_core.domain.models import ChatMessage
from chat_core.infrastructure.logging.logger import logger
from chat_core.providers import create_provider
from chat_core.providers.base import ProviderClient


class ChatBot:
    def __init__(self, provider_client: ProviderClient, conversation: Optional[Conversation] = None):
        self._provider_client = provider_client
        self._conversation = conversation if conversation is not None else Conversation()

    @classmethod
    def from_api_key(cls, api_key: str, cfg=settings) -> "ChatBot":
        return cls(create_provider(api_key, cfg))

    @property
    def history(self) -> List[ChatMessage]:
        """当前对话历史的快照（最早的消息在前）。"""

        return self._conversation.messages

    def __len__(self) -> int:
        return len(self._conversation)

    def submit(self, user_text: str) -> Tuple[str, int]:
        """发送一轮用户输入，返回 (回复文本, token 总数)。

        Provider 失败时已追加的用户消息保留在历史中，不回滚，
        下一次成功调用会把它作为上下文一并发送。

        Raises:
            MissingContentError: 回复消息没有文本内容（回复仍会被追加到历史）。
            以及 Provider 抛出的 domain.exceptions 中的各类异常。
        """
        self._conversation.add_user_text(user_text)
        self._log(logging.DEBUG, "Submitting user turn", history_len=len(self._conversation))

        reply, tokens = self._provider_client.send(self._conversation.messages)

        self._conversation.add_message(reply)
        self._log(logging.DEBUG, "Stored assistant message", history_len=len(self._conversation), tokens=tokens)

        if reply.content is None:
            raise MissingContentError(code="NO_CONTENT", message="no content received")
        return reply.content, tokens

    def reset(self) -> None:
        """清空对话历史，幂等。"""

        self._conversation.clear()
        self._log(logging.DEBUG, "Cleared conversation")

    def close(self) -> None:
        close = getattr(self._provider_client, "close", None)
        if callable(close):
            close()

    def _log(self, level: int, message: str, **fields: Any) -> None:
        payload = {"provider": getattr(self._provider_client, "name", None)}
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
