"""Core infrastructure layer - no business logic dependencies.

This module provides foundation-level services:
- Configuration management (TOML)
- Logging and user-facing output (Loguru)
- Console management (Rich)

Clean architecture principle: The core layer has no dependencies on
domain or application layers.
"""

# Configuration
from .config import (
    Config,
    load_config,
    get_config_dir,
    get_config_path,
    get_data_dir,
    create_default_config,
)

# Output
from .output import setup_loguru, set_quiet_mode, log

# Console
from .console import get_console, safe_print

__all__ = [
    # Config
    "Config",
    "load_config",
    "get_config_dir",
    "get_config_path",
    "get_data_dir",
    "create_default_config",
    # Output
    "setup_loguru",
    "set_quiet_mode",
    "log",
    # Console
    "get_console",
    "safe_print",
]
