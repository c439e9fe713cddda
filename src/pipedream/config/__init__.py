"""Application configuration helpers."""

from __future__ import annotations

from .engine import EngineConfig, get_engine_config
from .env import env_int, env_str
from .errors import ConfigurationError
from .logging import TRACE_LOGGER, configure_logging

__all__ = [
    "TRACE_LOGGER",
    "ConfigurationError",
    "EngineConfig",
    "configure_logging",
    "env_int",
    "env_str",
    "get_engine_config",
]
