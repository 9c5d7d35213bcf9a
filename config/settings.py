"""Service Settings Module.

Environment variable based configuration management using Pydantic Settings.
Supports a YAML config file for user-modifiable defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

CONFIG_FILE_NAMES = ("native-service.yaml", ".native-service.yaml")


def _get_config_paths() -> list[Path]:
    """Get possible config file paths in priority order.

    Returns:
        List of possible config file paths.
    """
    return [Path.cwd() / name for name in CONFIG_FILE_NAMES]


def _load_yaml_config() -> dict[str, Any]:
    """Load YAML config file.

    Searches for the config file in the working directory and loads the
    first one found.

    Returns:
        Loaded config dictionary or empty dict if not found.
    """
    for config_path in _get_config_paths():
        if config_path.is_file():
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
            # 어떤 config 파일이 로드되었는지 표시
            config["_config_path"] = str(config_path)
            return config
    return {}


def _flatten_yaml_config(config: dict[str, Any]) -> dict[str, Any]:
    """Flatten nested YAML config to flat dict for Pydantic.

    Args:
        config: Nested YAML config.

    Returns:
        Flattened config dict.
    """
    flat = {}

    # service section
    service = config.get("service") or {}
    for yaml_key, field_name in (
        ("rootDir", "root_dir"),
        ("clearMocks", "clear_mocks"),
        ("resetMocks", "reset_mocks"),
        ("restoreMocks", "restore_mocks"),
    ):
        if yaml_key in service:
            flat[field_name] = service[yaml_key]

    # logging section (separate handling for LogSettings)
    logging_cfg = config.get("logging") or {}
    if "level" in logging_cfg:
        flat["log_level"] = logging_cfg["level"]
    if "format" in logging_cfg:
        flat["log_format"] = logging_cfg["format"]

    if "_config_path" in config:
        flat["_config_path"] = config["_config_path"]

    return flat


@lru_cache
def _yaml_config() -> dict[str, Any]:
    """Return the flattened YAML config, loaded once."""
    return _flatten_yaml_config(_load_yaml_config())


class ServiceOptions(BaseModel):
    """Global options handed to launchers and worker services.

    Framework adapters pass additional keys through; they are kept as
    extra fields and readable with ``get``.

    Attributes:
        root_dir: Project root directory (``rootDir``).
        clear_mocks: Clear mock call history before each test.
        reset_mocks: Reset mock implementations before each test.
        restore_mocks: Restore original implementations before each test.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    root_dir: Optional[str] = Field(default=None, alias="rootDir")
    clear_mocks: bool = Field(default=False, alias="clearMocks")
    reset_mocks: bool = Field(default=False, alias="resetMocks")
    restore_mocks: bool = Field(default=False, alias="restoreMocks")

    @classmethod
    def from_value(
        cls, value: Union["ServiceOptions", Mapping[str, Any], None]
    ) -> "ServiceOptions":
        """Build options from an instance, a mapping or None.

        Keys missing from a mapping (or everything, for None) fall back to
        the service settings (env vars > YAML config > defaults).
        """
        if isinstance(value, cls):
            return value
        return get_settings().to_service_options(**dict(value or {}))

    def get(self, key: str, default: Any = None) -> Any:
        """Read a framework-specific extra option."""
        extra = self.model_extra or {}
        return extra.get(key, default)


class NativeServiceSettings(BaseSettings):
    """Service settings.

    Loads settings from environment variables or .env file.
    All environment variables use the NATIVE_SERVICE_ prefix.

    Attributes:
        root_dir: Project root directory override.
        clear_mocks: Default for ServiceOptions.clear_mocks.
        reset_mocks: Default for ServiceOptions.reset_mocks.
        restore_mocks: Default for ServiceOptions.restore_mocks.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NATIVE_SERVICE_",
        case_sensitive=False,
        extra="ignore",
    )

    root_dir: Optional[str] = Field(
        default=None,
        description="Project root directory",
    )
    clear_mocks: bool = Field(default=False, description="Clear mocks before each test")
    reset_mocks: bool = Field(default=False, description="Reset mocks before each test")
    restore_mocks: bool = Field(
        default=False,
        description="Restore mocks before each test",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Environment variables win over values passed from the YAML file."""
        return env_settings, dotenv_settings, init_settings, file_secret_settings

    def to_service_options(self, **overrides: Any) -> ServiceOptions:
        """Convert settings into ServiceOptions.

        Args:
            **overrides: Values that take precedence over the settings
                (either field names or camelCase aliases).

        Returns:
            ServiceOptions instance.
        """
        data: dict[str, Any] = {
            "rootDir": self.root_dir,
            "clearMocks": self.clear_mocks,
            "resetMocks": self.reset_mocks,
            "restoreMocks": self.restore_mocks,
        }
        for key, value in overrides.items():
            # 필드명으로 전달된 값은 alias 키로 정규화
            field_info = ServiceOptions.model_fields.get(key)
            data[field_info.alias if field_info and field_info.alias else key] = value
        return ServiceOptions.model_validate(data)


class LogSettings(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Log level",
    )
    format: str = Field(
        default="text",
        alias="LOG_FORMAT",
        description="Log format (json/text)",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Environment variables win over values passed from the YAML file."""
        return env_settings, dotenv_settings, init_settings, file_secret_settings


@lru_cache
def get_settings() -> NativeServiceSettings:
    """Return NativeServiceSettings singleton instance.

    Priority: Environment Variables > YAML Config > Defaults

    Returns:
        NativeServiceSettings instance.
    """
    # YAML 설정을 기본값으로 사용
    yaml_overrides = {
        k: v for k, v in _yaml_config().items()
        if k in NativeServiceSettings.model_fields and not k.startswith("_")
    }

    # env vars가 YAML보다 우선
    return NativeServiceSettings(**yaml_overrides)


@lru_cache
def get_log_settings() -> LogSettings:
    """Return LogSettings singleton instance.

    Priority: Environment Variables > YAML Config > Defaults

    Returns:
        LogSettings instance.
    """
    yaml_config = _yaml_config()
    yaml_overrides = {}
    if "log_level" in yaml_config:
        yaml_overrides["LOG_LEVEL"] = yaml_config["log_level"]
    if "log_format" in yaml_config:
        yaml_overrides["LOG_FORMAT"] = yaml_config["log_format"]

    return LogSettings(**yaml_overrides)


def get_config_path() -> Optional[str]:
    """Return the path to the loaded config file.

    Returns:
        Config file path or None if not loaded.
    """
    return _yaml_config().get("_config_path")


def reset_settings() -> None:
    """Drop cached settings so the next call reloads them."""
    _yaml_config.cache_clear()
    get_settings.cache_clear()
    get_log_settings.cache_clear()
