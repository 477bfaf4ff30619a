"""
memfs Configuration Loader

Configuration management for the filesystem and the shell:
- JSON configuration file loading
- Configuration validation
- Default value handling
- Runtime configuration updates

Author: YSNRFD
Version: 1.0.0
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional
import threading

from memfs.exceptions import ConfigLoadError, ConfigValidationError


@dataclass
class FilesystemConfig:
    """Filesystem configuration settings."""
    home_path: str = "/home/user"
    file_mode: int = 0o644
    dir_mode: int = 0o755
    owner: str = "user"
    group: str = "user"
    # Append "\n" to text written without an explicit newline policy
    trailing_newline: bool = True
    # mkdir -p on an existing directory succeeds instead of "File exists"
    mkdir_parents_exist_ok: bool = True
    # cp/mv may replace an existing destination file
    overwrite_files: bool = False


@dataclass
class ShellConfig:
    """Shell configuration settings."""
    user: str = "user"
    hostname: str = "memfs"
    history_size: int = 1000
    welcome_message: str = "memfs virtual terminal. Type 'help' for a list of commands."


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds all configuration settings of a session.
    """
    filesystem: FilesystemConfig = field(default_factory=FilesystemConfig)
    shell: ShellConfig = field(default_factory=ShellConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _parse_mode(value: Any, key: str) -> int:
    """Accept permission bits as an int or an octal string such as "0755"."""
    if isinstance(value, bool):
        raise ConfigValidationError(f"Invalid permission mode for {key}: {value!r}", key=key)
    if isinstance(value, int):
        mode = value
    elif isinstance(value, str):
        try:
            mode = int(value, 8)
        except ValueError:
            raise ConfigValidationError(
                f"Invalid permission mode for {key}: {value!r}", key=key
            ) from None
    else:
        raise ConfigValidationError(f"Invalid permission mode for {key}: {value!r}", key=key)

    if not 0 <= mode <= 0o777:
        raise ConfigValidationError(f"Permission mode out of range for {key}: {oct(mode)}", key=key)
    return mode


def _check_type(value: Any, default: Any, key: str) -> Any:
    """Validate a value against the type of the field's default."""
    if default is None:
        if value is not None and not isinstance(value, str):
            raise ConfigValidationError(f"Expected a string for {key}", key=key)
        return value

    expected = type(default)
    # bool is a subclass of int; keep them apart
    if expected is bool and not isinstance(value, bool):
        raise ConfigValidationError(f"Expected a boolean for {key}", key=key)
    if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
        raise ConfigValidationError(f"Expected an integer for {key}", key=key)
    if expected is str and not isinstance(value, str):
        raise ConfigValidationError(f"Expected a string for {key}", key=key)
    return value


class ConfigLoader:
    """
    Configuration loader and manager.

    Handles loading configuration from JSON files, validating settings,
    and providing runtime configuration access.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('memfs.json')
        >>> print(config.filesystem.home_path)
        /home/user
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    _MODE_KEYS = {'file_mode', 'dir_mode'}

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigLoadError: If the file cannot be loaded or parsed
            ConfigValidationError: If a key or value is invalid
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigLoadError(
                f"Configuration file not found: {config_path}",
                path=config_path
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigLoadError(
                f"Invalid JSON in configuration file: {e}",
                path=config_path
            ) from e
        except OSError as e:
            raise ConfigLoadError(
                f"Cannot read configuration file: {e}",
                path=config_path
            ) from e

        self._config = self.parse(data)
        self._loaded = True
        return self._config

    def parse(self, data: Any) -> Config:
        """Parse configuration data into a Config object."""
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration root must be an object")

        config = Config()
        sections = {f.name for f in fields(Config)}

        for section_name, section_data in data.items():
            if section_name not in sections:
                raise ConfigValidationError(
                    f"Unknown configuration section: {section_name}",
                    key=section_name
                )
            if not isinstance(section_data, dict):
                raise ConfigValidationError(
                    f"Configuration section must be an object: {section_name}",
                    key=section_name
                )

            section = getattr(config, section_name)
            known = {f.name: f for f in fields(section)}

            for key, value in section_data.items():
                dotted = f"{section_name}.{key}"
                if key not in known:
                    raise ConfigValidationError(f"Unknown configuration key: {dotted}", key=dotted)
                if key in self._MODE_KEYS:
                    value = _parse_mode(value, dotted)
                else:
                    value = _check_type(value, getattr(section, key), dotted)
                setattr(section, key, value)

        self._validate(config)
        return config

    @staticmethod
    def _validate(config: Config) -> None:
        """Cross-field checks that a per-key type check cannot express."""
        home = config.filesystem.home_path
        if not home.startswith('/') or home.strip('/') == '':
            raise ConfigValidationError(
                f"home_path must be an absolute path below the root: {home!r}",
                key='filesystem.home_path'
            )
        # Stored without repeated or trailing slashes so it compares equal to
        # rendered paths
        config.filesystem.home_path = '/' + '/'.join(part for part in home.split('/') if part)
        if config.shell.history_size < 0:
            raise ConfigValidationError(
                "history_size must not be negative",
                key='shell.history_size'
            )

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        return self._config

    @property
    def loaded(self) -> bool:
        return self._loaded

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'filesystem.home_path')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        obj: Any = self._config

        for part in key.split('.'):
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Note:
            This modifies configuration at runtime but does not
            persist changes to disk.
        """
        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if len(parts) < 2 or not hasattr(obj, final_key):
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        if final_key in self._MODE_KEYS:
            value = _parse_mode(value, key)
        else:
            value = _check_type(value, getattr(obj, final_key), key)

        previous = getattr(obj, final_key)
        setattr(obj, final_key, value)
        try:
            self._validate(self._config)
        except ConfigValidationError:
            setattr(obj, final_key, previous)
            raise

    def reset(self) -> Config:
        """Restore the built-in defaults."""
        self._config = Config()
        self._loaded = False
        return self._config

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            f.name: dict(getattr(self._config, f.name).__dict__)
            for f in fields(Config)
        }


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    return ConfigLoader().config
