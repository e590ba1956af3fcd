"""配置管理模块。

支持从环境变量、.env 以及 config.yaml 加载配置，优先级依次降低。
"""

import os
import warnings
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_config_from_yaml() -> Dict[str, Any]:
    """读取 CHAT_CONFIG_FILE 指定的 YAML 文件，未设置时读取 ./config.yaml。"""
    explicit = os.getenv("CHAT_CONFIG_FILE")
    path = Path(explicit).expanduser() if explicit else Path.cwd() / "config.yaml"
    if not path.exists():
        return {}
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        warnings.warn(f"Failed to read config file {path}: {exc}")
        return {}
    if not isinstance(data, dict):
        warnings.warn(f"Config file {path} is not a mapping, ignored")
        return {}
    return data


class Settings(BaseSettings):
    """配置设置（使用 Pydantic）。"""

    # ---- 凭证 ----
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API 密钥，对应 OPENAI_API_KEY")
    api_key_file: str = Field(
        default="open_ai_auth_key.txt",
        description="环境变量缺失时读取密钥的文件（相对当前工作目录）",
    )

    # ---- 远端服务 ----
    base_url: str = Field(default="https://api.openai.com/v1", description="OpenAI API 基础URL")
    chat_model: str = Field(default="gpt-3.5-turbo", description="请求中使用的模型 ID")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="采样温度")
    http_timeout: Optional[float] = Field(
        default=None,
        gt=0.0,
        description="HTTP 超时时间（秒），未设置时沿用 httpx 默认值",
    )

    # ---- 日志 ----
    log_level: str = Field(default="WARNING", description="日志级别，INFO 时记录完整请求与响应")
    log_dir: Optional[str] = Field(default=None, description="日志目录，设置后额外写入 chat.log")
    log_redact_content: bool = Field(default=False, description="是否截断日志内容")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @staticmethod
    def _config_source() -> Dict[str, Any]:
        return _load_config_from_yaml()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            cls._config_source,
            file_secret_settings,
        )


settings = Settings()
