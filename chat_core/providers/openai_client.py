"""OpenAI chat/completions 适配器。

本模块负责：

1. 接收有序的对话历史，构造 ChatRequest。
2. 发送一次同步 POST 请求并处理网络/状态码异常。
3. 将响应 JSON 解析为 ChatResult，取第一个候选消息与 token 总数。

不做重试、不做退避；任何失败都直接抛给调用方。
- URL: {base_url}/chat/completions
- 认证: Authorization: Bearer <api_key>
"""

import logging
from typing import Any, Dict, Optional, Sequence, Tuple

import httpx

from chat_core.config.settings import settings
from chat_core.domain.exceptions import (
    DeserializationError,
    NoChoiceError,
    RemoteStatusError,
    TransportError,
)
from chat_core.domain.models import ChatMessage, ChatRequest, ChatResult
from chat_core.infrastructure.logging.logger import logger


class OpenAIClient:
    """OpenAI Provider 客户端实现。

    - name: Provider 名称（供日志使用）。
    - send: 对外唯一调用入口，返回 (回复消息, token 总数)。
    """

    name = "openai"

    def __init__(self, api_key: str, cfg=settings, http_client: Optional[httpx.Client] = None):
        # 凭证只出现在请求头中，不进入日志
        self._api_key = api_key
        self._settings = cfg
        self._client = http_client or self._build_http_client()

    def _build_http_client(self) -> httpx.Client:
        timeout = getattr(self._settings, "http_timeout", None)
        if timeout is None:
            return httpx.Client()
        return httpx.Client(timeout=timeout)

    @property
    def url(self) -> str:
        return f"{self._settings.base_url.rstrip('/')}/chat/completions"

    def send(self, messages: Sequence[ChatMessage]) -> Tuple[ChatMessage, int]:
        """发送完整对话历史，返回第一个候选消息（原样）与 usage.total_tokens。"""

        req = ChatRequest(
            model=self._settings.chat_model,
            messages=list(messages),
            temperature=self._settings.temperature,
        )
        payload = req.to_payload()
        self._log(logging.INFO, "Request", request=payload)

        try:
            resp = self._client.post(
                self.url,
                json=payload,
                headers={
                    "Authorization": f"Bearer {self._api_key}",
                    "Content-Type": "application/json",
                },
            )
        except (httpx.RequestError, httpx.InvalidURL) as e:
            # 网络或 httpx 本身的错误，不是 API 的错误
            raise TransportError(code="TRANSPORT_ERROR", message=f"error sending request: {e}", cause=e) from e

        if not 200 <= resp.status_code < 300:
            body = resp.text
            self._log(logging.INFO, "Response", status=resp.status_code, body=body)
            raise RemoteStatusError(
                code="API_ERROR",
                message=f"unsuccessful API request (code: {resp.status_code})",
                http_status=resp.status_code,
                body=body,
            )

        result = self._parse_response(resp)
        if not result.choices:
            raise NoChoiceError(code="NO_CHOICE", message="no first choice")
        return result.choices[0].message, result.usage.total_tokens

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "OpenAIClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # ---- 辅助方法 ----

    def _parse_response(self, resp: httpx.Response) -> ChatResult:
        """解码 2xx 响应体并记录日志；非 JSON 时记录原始文本后抛出。"""

        try:
            data = resp.json()
        except ValueError as e:
            self._log(logging.INFO, "Response", status=resp.status_code, body=resp.text)
            raise DeserializationError(
                code="DESERIALIZATION_ERROR", message=f"response body is not valid JSON: {e}", cause=e
            ) from e
        self._log(logging.INFO, "Response", status=resp.status_code, response=data)
        return ChatResult.from_payload(data)

    def _log(self, level: int, message: str, **fields: Any) -> None:
        payload: Dict[str, Any] = {"provider": self.name}
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})
