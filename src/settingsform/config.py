from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from settingsform.exceptions import ConfigError
from settingsform.logging import get_logger

__all__ = [
    "SettingsFormConfig",
    "StorageConfig",
    "RenderConfig",
    "TransferConfig",
    "YamlConfigSource",
    "PROJECT_CONFIG_FILENAME",
    "load_config",
    "get_user_config_path",
]

logger = get_logger(__name__)

PROJECT_CONFIG_FILENAME = "settingsform.yaml"

# Project config file used by the next SettingsFormConfig() in this context.
_project_config_path: ContextVar[Path | None] = ContextVar(
    "settingsform_project_config_path", default=None
)


class StorageConfig(BaseModel):
    """Where settings blobs are persisted.

    Attributes:
        backend: "memory" keeps values for the process lifetime only;
            "file" writes one JSON file per option into ``directory``.
        directory: Directory of the file backend.
    """

    backend: Literal["memory", "file"] = "file"
    directory: Path = Field(default_factory=lambda: Path(".settingsform"))


class RenderConfig(BaseModel):
    """Form rendering options."""

    show_tab_links: bool = True
    show_save_button: bool = True
    save_label: str = "Save Changes"
    export_url: str = "?action=export_settings"


class TransferConfig(BaseModel):
    """Import/export options.

    Attributes:
        filename_prefix: Prefix of the export file name; the file is named
            ``{filename_prefix}{group_id}.json``.
    """

    filename_prefix: str = "wpsf-settings-"

    @field_validator("filename_prefix")
    @classmethod
    def check_no_path_separator(cls, v: str) -> str:
        if "/" in v or "\\" in v:
            raise ValueError("filename_prefix must not contain path separators")
        return v


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = {}
        if yaml_file and yaml_file.exists():
            try:
                with open(yaml_file, encoding="utf-8") as f:
                    loaded = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(
                    message=f"Invalid YAML in {yaml_file}: {e}",
                    field=None,
                    value=None,
                ) from e
            if loaded is None:
                logger.warning("config_file_empty", path=str(yaml_file))
            elif not isinstance(loaded, dict):
                raise ConfigError(
                    message=f"Config file {yaml_file} must contain a mapping",
                    field=None,
                    value=type(loaded).__name__,
                )
            else:
                self._config_data = loaded

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class SettingsFormConfig(BaseSettings):
    """Root configuration of the settingsform tooling."""

    model_config = SettingsConfigDict(
        env_prefix="SETTINGSFORM_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    storage: StorageConfig = Field(default_factory=StorageConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    transfer: TransferConfig = Field(default_factory=TransferConfig)
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Init arguments
        2. Environment variables (SETTINGSFORM_*)
        3. Project YAML config (./settingsform.yaml or the load_config path)
        4. User YAML config (~/.config/settingsform/config.yaml)
        5. Model defaults
        """
        project_config_path = (
            _project_config_path.get() or Path.cwd() / PROJECT_CONFIG_FILENAME
        )
        return (
            init_settings,
            env_settings,
            YamlConfigSource(settings_cls, project_config_path),
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/settingsform/config.yaml
    """
    return Path.home() / ".config" / "settingsform" / "config.yaml"


@contextmanager
def _project_config(path: Path) -> Iterator[None]:
    token = _project_config_path.set(path)
    try:
        yield
    finally:
        _project_config_path.reset(token)


def load_config(config_path: Path | None = None) -> SettingsFormConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to the project config file. Defaults to
            ./settingsform.yaml

    Returns:
        SettingsFormConfig instance with merged configuration

    Raises:
        ConfigError: If configuration is invalid
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME

    if not config_path.exists():
        logger.info("project_config_missing", path=str(config_path))

    try:
        with _project_config(config_path):
            return SettingsFormConfig()
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
