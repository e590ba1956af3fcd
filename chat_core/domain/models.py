"""统一的对话与结果数据模型。

本模块定义了与 chat/completions 接口交换的标准数据结构：

- ChatMessage: 一条对话消息（system/user/assistant）。
- ChatRequest: 发给远端服务的完整请求信封。
- ChatResult: 从响应 JSON 解析出的结果信封。

序列化约定：未设置的可选字段一律省略，不输出 null；
反序列化时忽略未知字段，缺少必需结构时抛出 DeserializationError。
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, List, Literal, Optional

from chat_core.domain.exceptions import DeserializationError


# LLM 消息角色类型（与 OpenAI 的 role 字段对应），运行时不做校验
Role = Literal["system", "user", "assistant"]


@dataclass(frozen=True)
class ChatMessage:
    """一条对话消息，既可用于请求，也可用于响应。

    - role: 消息角色，如 system/user/assistant。
    - content: 纯文本内容；模型回复不含文本时为 None。
    """

    role: Role
    content: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"role": self.role}
        if self.content is not None:
            payload["content"] = self.content
        return payload

    @classmethod
    def from_payload(cls, payload: Any) -> "ChatMessage":
        if not isinstance(payload, dict):
            raise DeserializationError(code="DESERIALIZATION_ERROR", message="message is not an object")
        role = payload.get("role")
        if not isinstance(role, str):
            raise DeserializationError(code="DESERIALIZATION_ERROR", message="message.role missing or not a string")
        content = payload.get("content")
        if content is not None and not isinstance(content, str):
            raise DeserializationError(code="DESERIALIZATION_ERROR", message="message.content is not a string")
        return cls(role=role, content=content)


@dataclass
class ChatRequest:
    """一次完整的聊天请求。

    除 model/messages 外的字段都是可选的，值为 None 时不会出现在请求体中。
    """

    model: str
    messages: List[ChatMessage]
    temperature: Optional[float] = 0.7
    top_p: Optional[float] = None
    n: Optional[int] = None
    stream: Optional[bool] = None
    stop: Optional[List[str]] = None
    max_tokens: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    logit_bias: Optional[Dict[str, float]] = None
    user: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [m.to_payload() for m in self.messages],
        }
        for f in fields(self):
            if f.name in payload:
                continue
            value = getattr(self, f.name)
            if value is not None:
                payload[f.name] = value
        return payload


@dataclass
class ChatUsage:
    """Provider 返回的 token 统计信息。"""

    total_tokens: int
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ChatUsage":
        if not isinstance(payload, dict):
            raise DeserializationError(code="DESERIALIZATION_ERROR", message="usage missing or not an object")
        total = payload.get("total_tokens")
        # bool 是 int 的子类，需要单独排除
        if not isinstance(total, int) or isinstance(total, bool):
            raise DeserializationError(
                code="DESERIALIZATION_ERROR", message="usage.total_tokens missing or not an integer"
            )
        return cls(
            total_tokens=total,
            prompt_tokens=payload.get("prompt_tokens"),
            completion_tokens=payload.get("completion_tokens"),
        )


@dataclass
class ChatChoice:
    """单个候选回答（只使用第一条）。"""

    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None


@dataclass
class ChatResult:
    """一次对话调用的响应信封。

    - choices: 一个或多个候选回答，可能为空。
    - usage: token 使用统计。
    """

    choices: List[ChatChoice]
    usage: ChatUsage
    id: Optional[str] = None
    model: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Any) -> "ChatResult":
        if not isinstance(data, dict):
            raise DeserializationError(code="DESERIALIZATION_ERROR", message="response is not a JSON object")
        choices_raw = data.get("choices")
        if not isinstance(choices_raw, list):
            raise DeserializationError(code="DESERIALIZATION_ERROR", message="choices missing or not an array")
        choices: List[ChatChoice] = []
        for i, ch in enumerate(choices_raw):
            if not isinstance(ch, dict) or "message" not in ch:
                raise DeserializationError(code="DESERIALIZATION_ERROR", message=f"choice {i} has no message")
            choices.append(
                ChatChoice(
                    index=ch.get("index", i),
                    message=ChatMessage.from_payload(ch["message"]),
                    finish_reason=ch.get("finish_reason"),
                )
            )
        return cls(
            choices=choices,
            usage=ChatUsage.from_payload(data.get("usage")),
            id=data.get("id"),
            model=data.get("model"),
        )
