"""Application configuration helpers."""

from __future__ import annotations

from .env import require_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .logging import configure_logging
from .relations import (
    CONFIG_ENV_VAR,
    ResolverConfig,
    get_resolver_config,
    load_resolver_config,
    parse_resolver_config,
)
from .storage import DATABASE_URI_ENV_VAR, DatabaseConfig, get_database_config

__all__ = [
    "CONFIG_ENV_VAR",
    "DATABASE_URI_ENV_VAR",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "ResolverConfig",
    "configure_logging",
    "get_database_config",
    "get_resolver_config",
    "load_resolver_config",
    "parse_resolver_config",
    "require_env_var",
    "require_env_vars",
]
