"""Configuration Reader.

Finds a configuration file from an ordered list of candidate names,
parses it by extension, resolves ``extends`` inheritance and validates
the result.

Supported formats:
    .json / .json5          JSON5 (comments, trailing commas)
    .yaml / .yml            YAML
    .toml                   TOML
    .js/.cjs/.mjs/.ts/...   Evaluated by an IScriptLoader
"""

import asyncio
import os
import tomllib
from collections.abc import Mapping
from typing import Any, Callable, Generic, Optional, Sequence, TypeVar, Union

import json5
import yaml
from pydantic import BaseModel, TypeAdapter

from config.constants import EXTENDS_KEY, LogArea
from core.exceptions import (
    ConfigExtendsCycleError,
    ConfigNotFoundError,
    ConfigParseError,
    ConfigurationError,
    ConfigValidationError,
    ScriptLoaderError,
    UnsupportedConfigFormatError,
)
from core.protocols import ILogger, ISchema, IScriptLoader
from domain.enums import ConfigFormat
from domain.models.config_result import ConfigReadResult
from utils.logging import create_logger

T = TypeVar("T")

SchemaType = Union[type[BaseModel], TypeAdapter, ISchema, Callable[[Any], Any]]


def _is_readable_file(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.R_OK)


def _read_text(path: str) -> str:
    with open(path, encoding="utf-8") as f:
        return f.read()


def _parse_yaml(text: str) -> Any:
    data = yaml.safe_load(text)
    # 빈 문서는 빈 설정으로 취급
    return {} if data is None else data


_TEXT_PARSERS: dict[ConfigFormat, Callable[[str], Any]] = {
    ConfigFormat.JSON: json5.loads,
    ConfigFormat.YAML: _parse_yaml,
    ConfigFormat.TOML: tomllib.loads,
}


class ConfigReader(Generic[T]):
    """Framework-agnostic configuration file reader.

    Attributes:
        file_patterns: Candidate file names, checked in order.
        extends_enabled: Whether ``extends`` inheritance is resolved.

    Example:
        ```python
        reader = ConfigReader(
            ["app.config.json", "app.config.yaml"],
            schema=AppConfig,
            extends=True,
        )
        result = await reader.read("/work/app")
        print(result.config_file, result.config)
        ```
    """

    def __init__(
        self,
        file_patterns: Sequence[str],
        schema: Optional[SchemaType] = None,
        extends: bool = False,
        script_loader: Optional[IScriptLoader] = None,
        logger: Optional[ILogger] = None,
    ) -> None:
        """Initialize config reader.

        Args:
            file_patterns: Candidate file names relative to the project root.
            schema: Optional validation schema. A pydantic model class, a
                TypeAdapter, an object with ``parse`` or a callable.
            extends: Resolve ``extends`` inheritance.
            script_loader: Loader for executable config scripts.
            logger: Logger (default: config area logger).

        Raises:
            ValueError: If no file pattern is given.
            TypeError: If schema is not a supported schema type.
        """
        if not file_patterns:
            raise ValueError("At least one config file pattern is required")
        if schema is not None and not (
            isinstance(schema, TypeAdapter)
            or callable(getattr(schema, "parse", None))
            or callable(schema)
        ):
            raise TypeError(f"Unsupported schema type: {type(schema).__name__}")

        self.file_patterns = list(file_patterns)
        self.extends_enabled = extends
        self._schema = schema
        self._script_loader = script_loader
        self._logger = logger or create_logger(area=LogArea.CONFIG)

    async def read(self, project_root: str) -> ConfigReadResult[T]:
        """Find, parse, merge and validate the configuration.

        Args:
            project_root: Directory to search for config files.

        Returns:
            Config and the path of the file read, relative to project_root.

        Raises:
            ConfigNotFoundError: No candidate file exists.
            ConfigurationError: Parsing, inheritance or validation failed.
        """
        config_path = await self.find_config_file(project_root)
        config = await self._parse_file(config_path)

        if self.extends_enabled and isinstance(config, Mapping) and EXTENDS_KEY in config:
            config = await self._merge_with_parent(
                config,
                project_root,
                chain=[os.path.realpath(config_path)],
            )

        if self._schema is not None:
            config = self._validate(config, config_path)

        config_file = os.path.relpath(config_path, project_root)
        self._logger.debug("Config loaded", config_file=config_file)
        return ConfigReadResult(config=config, config_file=config_file)

    async def find_config_file(self, project_root: str) -> str:
        """Return the first readable candidate file.

        Args:
            project_root: Directory to search.

        Returns:
            Full path of the config file.

        Raises:
            ConfigNotFoundError: No candidate is a readable file.
        """
        for pattern in self.file_patterns:
            full_path = os.path.join(project_root, pattern)
            if await asyncio.to_thread(_is_readable_file, full_path):
                return full_path

        raise ConfigNotFoundError(self.file_patterns, project_root)

    async def _parse_file(self, path: str) -> Any:
        """Parse a config file by its extension."""
        config_format = ConfigFormat.from_path(os.path.basename(path))

        if config_format is None:
            raise UnsupportedConfigFormatError(
                f"Unsupported config file format: {os.path.basename(path)}",
                extension=os.path.splitext(path)[1],
                config_file=path,
            )

        if config_format == ConfigFormat.SCRIPT:
            if self._script_loader is None:
                raise ScriptLoaderError(
                    "No script loader configured for executable config files",
                    config_file=path,
                )
            return await self._script_loader.load(path)

        try:
            text = await asyncio.to_thread(_read_text, path)
            return _TEXT_PARSERS[config_format](text)
        except (ValueError, yaml.YAMLError) as e:
            raise ConfigParseError(
                f"Failed to parse {config_format} config file",
                config_file=path,
                cause=e,
            ) from e

    async def _merge_with_parent(
        self,
        config: Mapping[str, Any],
        project_root: str,
        chain: list[str],
    ) -> dict[str, Any]:
        """Merge a config with its ``extends`` ancestors (child wins).

        Parent paths resolve against the project root, not against the
        extending file.
        """
        extends_value = config[EXTENDS_KEY]
        if not isinstance(extends_value, str):
            raise ConfigurationError(
                f"'{EXTENDS_KEY}' must be a file path string",
                config_file=chain[-1],
            )

        parent_path = os.path.realpath(os.path.join(project_root, extends_value))
        if parent_path in chain:
            raise ConfigExtendsCycleError([*chain, parent_path])

        if not await asyncio.to_thread(_is_readable_file, parent_path):
            raise ConfigNotFoundError(
                [extends_value],
                project_root,
                message=f"Extended config file not found: {extends_value}",
            )

        parent = await self._parse_file(parent_path)
        if not isinstance(parent, Mapping):
            raise ConfigurationError(
                "Extended config must be a mapping",
                config_file=parent_path,
            )

        if EXTENDS_KEY in parent:
            parent = await self._merge_with_parent(
                parent,
                project_root,
                chain=[*chain, parent_path],
            )

        self._logger.debug(
            "Config extends resolved",
            parent=extends_value,
            depth=len(chain),
        )
        return {**parent, **config}

    def _validate(self, config: Any, config_path: str) -> Any:
        """Validate config against the schema."""
        schema = self._schema
        try:
            if isinstance(schema, type) and issubclass(schema, BaseModel):
                return schema.model_validate(config)
            if isinstance(schema, TypeAdapter):
                return schema.validate_python(config)
            if callable(getattr(schema, "parse", None)):
                return schema.parse(config)
            return schema(config)
        except Exception as e:
            raise ConfigValidationError(
                f"Config validation failed: {e}",
                config_file=config_path,
                cause=e,
            ) from e
