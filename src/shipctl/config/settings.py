"""ShipSettings: one frozen object for flags, environment and shipctl.toml.

Sources, highest priority first:

1. keyword arguments (the global CLI flags)
2. ``SHIPCTL_*`` environment variables, ``__`` between section and key
   (``SHIPCTL_DATABASE__BUSY_TIMEOUT=5``)
3. the ``shipctl.toml`` named by ``config_path``
4. defaults baked into :mod:`shipctl.config.models`

Sections merge key by key, so a flag that sets ``database.path`` keeps
the file's ``busy_timeout``.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
    TomlConfigSettingsSource,
)

from shipctl.config.discovery import find_config
from shipctl.config.models import DatabaseConfig, PricingSeedConfig, ReportsConfig


class ShipSettings(BaseSettings):
    """Settings shared by the CLI, the Store and the services.

    Attributes:
        project_root: Base for a relative ``[database] path``: the
            directory holding ``shipctl.toml``, else the working directory.
        config_path: The TOML file that was read, or None.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="SHIPCTL_",
        env_nested_delimiter="__",
    )

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    pricing: PricingSeedConfig = Field(default_factory=PricingSeedConfig)
    reports: ReportsConfig = Field(default_factory=ReportsConfig)

    @property
    def db_path(self) -> Path:
        """Absolute path of the SQLite file."""
        path = Path(self.database.path)
        return path if path.is_absolute() else self.project_root / path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources = [init_settings, env_settings]
        toml_path = getattr(init_settings, "init_kwargs", {}).get("config_path")
        if toml_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        project_root: Path | None = None,
        **cli_flags: Any,
    ) -> ShipSettings:
        """Build settings for one CLI invocation.

        An explicit *config_path* that does not exist is ignored. Without
        one, ``shipctl.toml`` is looked up from *project_root* (or the
        working directory) upwards.
        """
        toml_path: Path | None
        if config_path:
            toml_path = Path(config_path) if Path(config_path).is_file() else None
        else:
            toml_path = find_config(project_root)

        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        try:
            return cls(project_root=project_root, config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        except SettingsError as exc:
            if isinstance(exc.__cause__, tomllib.TOMLDecodeError):
                msg = f"Invalid TOML in {toml_path}: {exc.__cause__}"
            else:
                msg = f"Invalid settings: {exc}"
            raise click.ClickException(msg) from exc
