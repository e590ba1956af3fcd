"""统一业务异常模型。

所有跨模块抛出的业务级错误都继承自 BusinessError，
便于在 CLI 层做统一捕获与用户提示。底层原因通过 ``cause`` 字段
以及 ``raise ... from`` 链保留。
"""

from typing import Optional


class BusinessError(Exception):
    """业务异常基类。

    Attributes:
        code: 机器可读错误码（如 "TRANSPORT_ERROR"）。
        message: 用户可读错误信息。
        http_status: 映射到 HTTP 时可用的状态码，默认 400。
        cause: 触发该错误的底层异常（可选）。
        extra: 其他补充字段（例如 body、provider 等）。
    """

    def __init__(
        self,
        code: str,
        message: str,
        http_status: int = 400,
        cause: Optional[BaseException] = None,
        **extra,
    ):
        self.code = code
        self.message = message
        self.http_status = http_status
        self.cause = cause
        self.extra = extra
        super().__init__(message)


class CredentialError(BusinessError):
    """环境变量与密钥文件中都找不到可用的 API 密钥，启动阶段即致命。"""


class TransportError(BusinessError):
    """HTTP 调用本身未完成，例如 DNS、连接被拒、TLS 失败。"""


class RemoteStatusError(BusinessError):
    """服务端返回了非 2xx 状态码。"""

    @property
    def status_code(self) -> int:
        return self.http_status

    @property
    def body(self) -> str:
        return self.extra.get("body", "")


class DeserializationError(BusinessError):
    """响应体不是合法 JSON，或结构与预期的响应信封不符。"""


class NoChoiceError(BusinessError):
    """响应信封中的 choices 为空。"""


class MissingContentError(BusinessError):
    """选中的 assistant 消息没有文本内容。"""
