"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 提供 OpenAI chat/completions 的具体实现 (openai_client)。
"""

from chat_core.config.settings import settings
from chat_core.providers.base import ProviderClient
from chat_core.providers.openai_client import OpenAIClient


def create_provider(api_key: str, cfg=settings) -> ProviderClient:
    """根据凭证与配置创建 Provider 实例。"""

    return OpenAIClient(api_key, cfg)


__all__ = ["ProviderClient", "OpenAIClient", "create_provider"]
