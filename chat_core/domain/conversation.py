from typing import Iterator, List

from .models import ChatMessage


class Conversation:
    """按插入顺序（最早在前）保存的对话历史，仅存在于进程内存中。"""

    def __init__(self) -> None:
        self._messages: List[ChatMessage] = []

    @property
    def messages(self) -> List[ChatMessage]:
        return list(self._messages)

    def add_user_text(self, text: str) -> ChatMessage:
        message = ChatMessage(role="user", content=text)
        self._messages.append(message)
        return message

    def add_message(self, message: ChatMessage) -> None:
        self._messages.append(message)

    def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[ChatMessage]:
        return iter(list(self._messages))
