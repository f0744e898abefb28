"""
Configuration management: YAML loading, environment resolution, policy building.
"""

from retryloop.config.loader import Config, load_config
from retryloop.config.policies import policy_from_config
from retryloop.config.resolver import resolve_config

__all__ = [
    "load_config",
    "Config",
    "resolve_config",
    "policy_from_config",
]
