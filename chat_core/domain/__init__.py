"""领域层模型与协议。

包含：
- models: ChatMessage / ChatRequest / ChatResult 及其 JSON 转换。
- conversation: 进程内的有序对话历史。
- exceptions: 业务异常类型定义。
"""
