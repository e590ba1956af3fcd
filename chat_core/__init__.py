"""Chat Core 顶层包。

一个交互式命令行聊天客户端：在内存中维护对话上下文，
每轮把完整历史发送给 OpenAI chat/completions 接口，
并输出模型回复与 token 用量。
"""

from chat_core.agents.chat_bot import ChatBot

__all__ = ["ChatBot"]
