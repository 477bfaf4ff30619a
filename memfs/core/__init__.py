"""
memfs Core Module

Session-wide infrastructure:
- Configuration Loader
- Subsystem lifecycle base
"""

from .config_loader import (
    ConfigLoader,
    Config,
    FilesystemConfig,
    ShellConfig,
    LoggingConfig,
    get_config,
)
from .subsystem import Subsystem, SubsystemState

__all__ = [
    # Config
    'ConfigLoader',
    'Config',
    'FilesystemConfig',
    'ShellConfig',
    'LoggingConfig',
    'get_config',
    # Subsystem
    'Subsystem',
    'SubsystemState',
]
