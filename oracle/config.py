"""
Oracle configuration.

This module centralizes tunables for the HTTP JSON-RPC service:
- host/port
- CORS policy
- logging level and access-log body sampling
- metrics toggle

Environment variables (examples):
  RPC_PORT=8095
  ORACLE_RPC_HOST=0.0.0.0
  ORACLE_CORS_ORIGINS=["http://localhost:5173"]
  ORACLE_LOG_LEVEL=INFO
  ORACLE_LOG_BODY_SAMPLE=256
  ORACLE_METRICS_ENABLED=true

Notes
- List-like env values accept either JSON or a comma-separated list.
- Unparseable numbers fall back to the default.
- This module has no external deps (no dotenv). Use your process manager to inject env.
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_PORT = 8095
DEFAULT_HOST = "0.0.0.0"


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name)
    return v if v is not None else default


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name)
    if v is None:
        return default
    return v.strip().lower() in ("1", "true", "yes", "y", "on")


def _env_int(name: str, default: int) -> int:
    v = _env(name)
    if v is None:
        return default
    try:
        return int(v.strip())
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    """
    Parse JSON array or comma-separated string into a list of strings.
    """
    v = _env(name)
    if v is None or v.strip() == "":
        return list(default)
    s = v.strip()
    if (s.startswith("[") and s.endswith("]")) or (s.startswith('"') and s.endswith('"')):
        try:
            parsed = json.loads(s)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return [str(x) for x in parsed]
        if parsed is not None:
            return [str(parsed)]
    return [item.strip() for item in s.split(",") if item.strip()]


@dataclass(frozen=True)
class OracleConfig:
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = "INFO"
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])
    log_body_sample: int = 0
    metrics_enabled: bool = True

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


def load() -> OracleConfig:
    """
    Build an OracleConfig from environment variables with sensible defaults.
    """
    port = _env_int("RPC_PORT", DEFAULT_PORT)
    if not 0 <= port <= 65535:
        port = DEFAULT_PORT

    return OracleConfig(
        host=_env("ORACLE_RPC_HOST", DEFAULT_HOST) or DEFAULT_HOST,
        port=port,
        log_level=(_env("ORACLE_LOG_LEVEL", "INFO") or "INFO").upper(),
        cors_allow_origins=_env_list("ORACLE_CORS_ORIGINS", ["*"]),
        log_body_sample=max(0, _env_int("ORACLE_LOG_BODY_SAMPLE", 0)),
        metrics_enabled=_env_bool("ORACLE_METRICS_ENABLED", True),
    )


__all__ = ["DEFAULT_PORT", "DEFAULT_HOST", "OracleConfig", "load"]
