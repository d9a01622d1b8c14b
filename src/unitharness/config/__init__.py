"""Harness configuration loading."""

from .loader import CONFIG_SCHEMA, DEFAULT_CONFIG_NAME, find_config, load_config
from .models import REPORT_FORMATS, HarnessConfig

__all__ = [
    "CONFIG_SCHEMA",
    "DEFAULT_CONFIG_NAME",
    "HarnessConfig",
    "REPORT_FORMATS",
    "find_config",
    "load_config",
]
