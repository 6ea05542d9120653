"""chatwire.config.env
===================

Environment variable mapping for client configuration.

Purpose
-------
- Single source of truth for which environment variables configure the
  client (``ENV_MAP``) and how their raw string values are parsed.
- Helpers return plain dicts keyed by configuration field names so the
  caller decides how to merge them with other sources.

Failure Modes
-------------
- Unset or empty variables are skipped.
- Values that cannot be parsed as the field's type raise ``ConfigError``
  naming the variable, rather than silently falling back.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from ..base.errors import ConfigError

# Config field -> environment variable
ENV_MAP: Dict[str, str] = {
    "api_key": "OPENAI_API_KEY",
    "base_url": "OPENAI_BASE_URL",
    "timeout_seconds": "OPENAI_TIMEOUT",
    "connect_timeout_seconds": "OPENAI_CONNECT_TIMEOUT",
    "retry_count": "OPENAI_RETRY_COUNT",
    "proxy": "OPENAI_PROXY",
    "user_agent": "OPENAI_USER_AGENT",
}

# Optional JSON file with the same keys as ``ENV_MAP``.
CONFIG_FILE_ENV = "CHATWIRE_CONFIG_FILE"

_PARSERS: Dict[str, Callable[[str], Any]] = {
    "timeout_seconds": float,
    "connect_timeout_seconds": float,
    "retry_count": int,
}


def is_placeholder(val: Optional[str]) -> bool:
    """Return True if ``val`` looks like a placeholder credential.

    Matches 'placeholder', 'changeme', 'your-api-key' or a ``test_`` prefix,
    case-insensitively.
    """
    if val is None:
        return False
    v = str(val).strip().lower()
    return "placeholder" in v or "changeme" in v or "your-api-key" in v or v.startswith("test_")


def _parse(field_name: str, raw: Any, source: str) -> Any:
    parser = _PARSERS.get(field_name)
    if parser is None or not isinstance(raw, str):
        return raw
    try:
        return parser(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{source} must be a valid {parser.__name__}, got {raw!r}") from exc


def read_env_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Return configuration fields set in ``environ`` (default ``os.environ``)."""
    env = os.environ if environ is None else environ
    settings: Dict[str, Any] = {}
    for field_name, var in ENV_MAP.items():
        raw = env.get(var)
        if raw is None or not raw.strip():
            continue
        settings[field_name] = _parse(field_name, raw, var)
    return settings


def read_file_settings(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Load settings from the JSON file named by ``CHATWIRE_CONFIG_FILE``.

    Returns an empty dict when the variable is unset. Unknown keys are
    ignored; a missing file or invalid JSON raises ``ConfigError``.
    """
    env = os.environ if environ is None else environ
    path = env.get(CONFIG_FILE_ENV)
    if not path:
        return {}
    file_path = Path(path).expanduser()
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ConfigError(f"cannot read config file {file_path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"config file {file_path} must contain a JSON object")
    return {
        key: _parse(key, value, f"{file_path}:{key}")
        for key, value in data.items()
        if key in ENV_MAP and value is not None
    }


__all__ = [
    "ENV_MAP",
    "CONFIG_FILE_ENV",
    "is_placeholder",
    "read_env_settings",
    "read_file_settings",
]
