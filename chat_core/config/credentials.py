"""Resolve the OpenAI bearer token used by the transport."""

from __future__ import annotations

from pathlib import Path

from chat_core.config.settings import settings
from chat_core.domain.exceptions import CredentialError


def _read_key_file(path: Path) -> str:
    """Return the first non-empty line of ``path``, trimmed ("" if none)."""

    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if line:
            return line
    return ""


def load_api_key(cfg=settings) -> str:
    """Return the API key from ``OPENAI_API_KEY`` or, failing that, the key file.

    Raises:
        CredentialError: neither source yields a usable key.
    """

    key = (getattr(cfg, "openai_api_key", None) or "").strip()
    if key:
        return key

    path = Path(cfg.api_key_file).expanduser()
    try:
        key = _read_key_file(path)
    except OSError as e:
        raise CredentialError(
            code="MISSING_API_KEY",
            message=(
                "couldn't find OpenAI authentication key in environment variable "
                f"($OPENAI_API_KEY) or file: {path}"
            ),
            cause=e,
        ) from e
    if not key:
        raise CredentialError(code="MISSING_API_KEY", message=f"auth token file is empty: {path}")
    return key
