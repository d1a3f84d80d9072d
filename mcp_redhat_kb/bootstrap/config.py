"""Configuration management for the mcp-redhat-kb launcher."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from mcp_redhat_kb.bootstrap.exceptions import ConfigurationError

CONFIG_PATH_ENV_VAR = "MCP_REDHAT_KB_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".config" / "mcp-redhat-kb" / "config.toml"


@dataclass
class LoggingConfig:
    """Logging configuration settings."""

    level: str = "WARNING"
    file_path: Optional[str] = None
    format_string: str = "%(asctime)s | %(levelname)-8s | %(name)-25s | %(message)s"


@dataclass
class ReleaseConfig:
    """Release feed settings."""

    repository: str = "jeanlopezxyz/mcp-redhat-kb"
    api_url: str = "https://api.github.com"
    asset_suffix: str = ".jar"
    user_agent: str = "mcp-redhat-kb"
    timeout: int = 30  # seconds
    chunk_size: int = 64 * 1024

    @property
    def latest_release_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/repos/{self.repository}/releases/latest"


@dataclass
class CacheConfig:
    """Artifact cache settings."""

    directory: str = str(Path.home() / ".cache" / "mcp-redhat-kb")
    artifact_name: str = "mcp-redhat-kb.jar"
    version_file: str = "version"

    @property
    def artifact_path(self) -> Path:
        return Path(self.directory) / self.artifact_name

    @property
    def version_path(self) -> Path:
        return Path(self.directory) / self.version_file


@dataclass
class RuntimeConfig:
    """Java runtime settings."""

    java_executable: str = "java"
    min_java_version: int = 21
    credential_env_var: str = "REDHAT_TOKEN"
    probe_timeout: int = 30  # seconds


@dataclass
class LauncherConfig:
    """Complete configuration for the launcher."""

    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigManager:
    """Manages configuration loading and environment variable overrides."""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_path: Path to an optional TOML configuration file. Defaults to
                ``$MCP_REDHAT_KB_CONFIG`` or ``~/.config/mcp-redhat-kb/config.toml``.
        """
        if config_path is None:
            config_path = os.getenv(CONFIG_PATH_ENV_VAR) or DEFAULT_CONFIG_PATH
        self.config_path = Path(config_path).expanduser()
        self._config: Optional[LauncherConfig] = None

    def load_config(self) -> LauncherConfig:
        """Load configuration from defaults, file and environment variables.

        Returns:
            Complete configuration object

        Raises:
            ConfigurationError: If the file exists but cannot be parsed
        """
        if self._config is not None:
            return self._config

        config_data: Dict = {}
        if self.config_path.is_file():
            config_data = self._load_toml_config()

        config_data = self._apply_env_overrides(config_data)
        self._config = self._create_config_from_dict(config_data)
        return self._config

    def _load_toml_config(self) -> Dict:
        try:
            with open(self.config_path, "rb") as f:
                return tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load config file {self.config_path}: {e}",
                context={"config_path": str(self.config_path)},
            ) from e

    def _apply_env_overrides(self, config_data: Dict) -> Dict:
        """Apply environment variable overrides to configuration.

        Args:
            config_data: Base configuration dictionary

        Returns:
            Configuration with environment overrides applied
        """
        env_mappings = {
            "MCP_REDHAT_KB_CACHE_DIR": ("cache", "directory"),
            "MCP_REDHAT_KB_REPOSITORY": ("release", "repository"),
            "MCP_REDHAT_KB_API_URL": ("release", "api_url"),
            "MCP_REDHAT_KB_TIMEOUT": ("release", "timeout"),
            "MCP_REDHAT_KB_JAVA": ("runtime", "java_executable"),
            "MCP_REDHAT_KB_LOG_LEVEL": ("logging", "level"),
            "MCP_REDHAT_KB_LOG_FILE": ("logging", "file_path"),
        }

        for env_var, (section, key) in env_mappings.items():
            value = os.getenv(env_var)
            if value is not None:
                config_data.setdefault(section, {})
                config_data[section][key] = self._convert_env_value(
                    env_var, value, key
                )

        return config_data

    def _convert_env_value(self, env_var: str, value: str, key: str) -> Union[str, int]:
        if key in ["timeout"]:
            try:
                return int(value)
            except ValueError as e:
                raise ConfigurationError(
                    f"{env_var} must be an integer, got {value!r}", config_key=key
                ) from e
        return value

    def _create_config_from_dict(self, config_data: Dict) -> LauncherConfig:
        """Create configuration object from dictionary, ignoring unknown keys."""
        sections = {
            "release": ReleaseConfig,
            "cache": CacheConfig,
            "runtime": RuntimeConfig,
            "logging": LoggingConfig,
        }

        kwargs = {}
        for name, section_cls in sections.items():
            section_data = config_data.get(name, {})
            if not isinstance(section_data, dict):
                raise ConfigurationError(
                    f"Configuration section [{name}] must be a table", config_key=name
                )
            try:
                kwargs[name] = section_cls(
                    **{
                        k: v
                        for k, v in section_data.items()
                        if k in section_cls.__dataclass_fields__
                    }
                )
            except TypeError as e:
                raise ConfigurationError(
                    f"Invalid [{name}] configuration: {e}", config_key=name
                ) from e

        config = LauncherConfig(**kwargs)
        config.cache.directory = str(Path(config.cache.directory).expanduser())
        return config


def get_config(config_path: Optional[Union[str, Path]] = None) -> LauncherConfig:
    """Load the launcher configuration.

    Args:
        config_path: Optional explicit configuration file path

    Returns:
        Configuration object
    """
    return ConfigManager(config_path).load_config()
