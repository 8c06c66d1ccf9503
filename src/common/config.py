# src/common/config.py

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Self


def _get_env_str(name: str, default: str) -> str:
    value = os.getenv(name)
    return value if value is not None else default


def _get_env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    value_lower = value.lower()
    if value_lower in ("1", "true", "yes", "y", "on"):
        return True
    if value_lower in ("0", "false", "no", "n", "off"):
        return False
    return default


# Values the success path cannot do without. Absence is reported, not fatal.
REQUIRED_FIELDS = ("PROJECT", "REGION", "VERTEX_CF_AUTH_TOKEN", "MODEL_NAME", "RAG_CORPUS")


@dataclass(frozen=True)
class Config:
    """
    Process-wide configuration for the signed RAG gateway.

    Read once at startup from environment variables named exactly like the
    fields (e.g. PROJECT=my-gcp-project, RAG_CORPUS=projects/.../ragCorpora/123)
    and never mutated afterwards.
    """

    # --- Vertex AI backend ---
    PROJECT: str = ""
    REGION: str = ""
    MODEL_NAME: str = ""
    RAG_CORPUS: str = ""

    # --- Request signing (shared with the front-end) ---
    VERTEX_CF_AUTH_TOKEN: str = field(default="", repr=False)

    # --- Logging ---
    LOG_LEVEL: str = "INFO"
    STRICT_NO_LOGGING_MODE: bool = False

    # --- Local serving ---
    GATEWAY_HOST: str = "0.0.0.0"
    GATEWAY_PORT: int = 8080

    @classmethod
    def from_env(cls) -> Self:
        """
        Construct a Config object, overriding defaults with environment variables.
        """
        return cls(
            # --- Vertex AI backend ---
            PROJECT=_get_env_str("PROJECT", cls.PROJECT),
            REGION=_get_env_str("REGION", cls.REGION),
            MODEL_NAME=_get_env_str("MODEL_NAME", cls.MODEL_NAME),
            RAG_CORPUS=_get_env_str("RAG_CORPUS", cls.RAG_CORPUS),

            # --- Request signing ---
            VERTEX_CF_AUTH_TOKEN=_get_env_str("VERTEX_CF_AUTH_TOKEN", cls.VERTEX_CF_AUTH_TOKEN),

            # --- Logging ---
            LOG_LEVEL=_get_env_str("LOG_LEVEL", cls.LOG_LEVEL),
            STRICT_NO_LOGGING_MODE=_get_env_bool("STRICT_NO_LOGGING_MODE", cls.STRICT_NO_LOGGING_MODE),

            # --- Local serving ---
            GATEWAY_HOST=_get_env_str("GATEWAY_HOST", cls.GATEWAY_HOST),
            GATEWAY_PORT=_get_env_int("GATEWAY_PORT", cls.GATEWAY_PORT),
        )

    def missing_fields(self) -> List[str]:
        """Names of required settings that are empty. Values are never returned."""
        return [name for name in REQUIRED_FIELDS if not getattr(self, name)]


# Global config instance used by the deployed app and the logger
config = Config.from_env()
