"""
Configuration Management System for Vetria

This module provides a centralized configuration system that supports a 4-tier
precedence hierarchy: environment → project → user → system defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class StorageConfig(BaseModel):
    """Local record storage"""
    model_config = ConfigDict(extra='forbid')

    db_path: str = Field(default="data/db/vetria.duckdb", description="Key-value database file path")


class AccessGateConfig(BaseModel):
    """Launch-time remote content check"""
    model_config = ConfigDict(extra='forbid')

    enabled: bool = Field(default=False, description="Run the remote check at launch")
    endpoint_url: Optional[str] = Field(default=None, description="Validation endpoint")
    timeout_seconds: float = Field(default=10.0, ge=0.5, le=120.0, description="HTTP client timeout")


class UIConfig(BaseModel):
    """UI Configuration"""
    model_config = ConfigDict(extra='forbid')

    flet_web_mode: bool = Field(default=False, description="Enable web mode")
    flet_port: int = Field(default=8550, ge=1024, le=65535, description="Web server port")

    theme_mode: str = Field(default="dark", description="UI theme mode")
    seed_color: str = Field(default="#48b0f7", description="Theme seed color")
    app_title: str = Field(default="Stylish Glass", description="Dashboard header")


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="DEBUG", description="File log level")
    log_dir: str = Field(default="data/logs", description="Directory for vetria.log")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024)
    backup_count: int = Field(default=5, ge=0, le=50)


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    storage: StorageConfig = Field(default_factory=StorageConfig)
    access_gate: AccessGateConfig = Field(default_factory=AccessGateConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Metadata
    schema_version: int = Field(default=1, description="Configuration schema version")


# env var -> (section, key, converter)
_ENV_MAP = {
    'VETRIA_DB_PATH': ('storage', 'db_path', str),
    'ACCESS_GATE_ENABLED': ('access_gate', 'enabled', 'bool'),
    'ACCESS_GATE_URL': ('access_gate', 'endpoint_url', str),
    'ACCESS_GATE_TIMEOUT': ('access_gate', 'timeout_seconds', float),
    'FLET_WEB_MODE': ('ui', 'flet_web_mode', 'bool'),
    'FLET_PORT': ('ui', 'flet_port', int),
    'LOG_LEVEL': ('logging', 'level', str),
}


class ConfigManager:
    """Centralized configuration manager with 4-tier precedence hierarchy"""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_SETTINGS_DIR
        self._system_config: Optional[SystemConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None
        self._project_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

    def _load_system_defaults(self) -> SystemConfig:
        """Load system default configuration"""
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.config_dir / "defaults.yaml")

            try:
                self._system_config = SystemConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed: {e}")
                self._system_config = SystemConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _load_project_config(self) -> Dict[str, Any]:
        if self._project_config is None:
            self._project_config = self._load_yaml_file(self.config_dir / "project.yaml")
        return self._project_config

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → project → user → system"""
        merged = self._load_system_defaults().model_dump()
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._load_project_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key, convert) in _ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue

            if convert == 'bool':
                converted: Any = value.lower() in ('true', '1', 'yes', 'on')
            else:
                try:
                    converted = convert(value)
                except ValueError:
                    logger.warning(f"Ignoring invalid value for {env_key}: {value!r}")
                    continue

            overrides.setdefault(section, {})[config_key] = converted

        return overrides

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}")
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get global configuration manager instance"""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config(validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
    """Get current system configuration"""
    return get_config_manager().get_config(validation_level)
