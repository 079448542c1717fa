# ============================================================================
# CONFIG PACKAGE INIT
# ============================================================================
# STATUS: Configuration package exports
# PURPOSE: get_config singleton and domain config exports
# EXPORTS: AppConfig, RouteConfig, RouteTable, OrchestratorConfig,
#          get_config, reset_config, debug_config
# DEPENDENCIES: pydantic
# ============================================================================

"""
Configuration Package - Domain-Specific Configuration Modules

Structure:
    config/
    ├── __init__.py              # This file - exports and singleton
    ├── app_config.py            # Main config (composes domain configs)
    ├── route_config.py          # Service Bus routes
    ├── orchestrator_config.py   # Orchestration service client
    ├── env_validation.py        # Startup env var validation
    └── defaults.py              # Default values

Usage:
    from config import get_config
    config = get_config()
    for route in config.routes:
        print(route.function_name, route.topic_name)

    from config import debug_config
    info = debug_config()  # Secrets never included
"""

from typing import Optional

from .route_config import RouteConfig, RouteTable
from .orchestrator_config import OrchestratorConfig
from .app_config import AppConfig


# ============================================================================
# SINGLETON PATTERN
# ============================================================================

_config_instance: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get global configuration singleton.

    Returns:
        AppConfig instance loaded from environment
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = AppConfig.from_environment()
    return _config_instance


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config_instance
    _config_instance = None


def debug_config() -> dict:
    """
    Get sanitized configuration for debugging.

    The API key is never part of AppConfig, so nothing needs masking
    beyond the connection setting, which is only a reference name.
    """
    config = get_config()
    return {
        'environment': config.environment,
        'debug_mode': config.debug_mode,
        'orchestrator': config.orchestrator.debug_dict(),
        'routes': [
            {
                'function_name': r.function_name,
                'topic_name': r.topic_name,
                'subscription_name': r.subscription_name,
                'connection_setting': r.connection_setting,
                'credential_key_name': r.credential_key_name,
            }
            for r in config.routes
        ],
    }


__all__ = [
    'AppConfig',
    'RouteConfig',
    'RouteTable',
    'OrchestratorConfig',
    'get_config',
    'reset_config',
    'debug_config',
]
