"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. CLI flags passed by Click as init kwargs
  2. Env vars with the ``VIDCTL_*`` prefix, ``__`` for nested sections
  3. The ``vidctl.toml`` found by :func:`resolve_workspace`
  4. Defaults baked into the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from vidctl.config.discovery import resolve_workspace
from vidctl.config.models import CatalogConfig, PluginsConfig

# The TOML file for the settings object under construction.
_active_config: ContextVar[Path | None] = ContextVar("_active_config", default=None)


class VidSettings(BaseSettings):
    """Unified settings for the vidctl CLI.

    Attributes:
        workspace_root: Directory holding ``vidctl.toml`` (or CWD if none).
        config_path: The TOML file in effect, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="VIDCTL_",
        env_nested_delimiter="__",
    )

    workspace_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """CLI flags, env vars, then the active TOML file. No dotenv or secrets."""
        sources: list[PydanticBaseSettingsSource] = [init_settings, env_settings]
        toml_path = _active_config.get()
        if toml_path is not None:
            sources.append(TomlConfigSettingsSource(settings_cls, toml_file=toml_path))
        return tuple(sources)

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        workspace_root: Path | None = None,
        **cli_flags: Any,
    ) -> VidSettings:
        """Construct settings from a CLI invocation.

        A missing ``--config`` file or unparsable TOML is reported as a
        :class:`click.ClickException` so the CLI exits with a clean message.
        """
        import click

        try:
            toml_path, root = resolve_workspace(
                config_path=config_path, workspace_root=workspace_root
            )
        except FileNotFoundError as exc:
            raise click.ClickException(str(exc)) from exc

        token = _active_config.set(toml_path)
        try:
            return cls(workspace_root=root, config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _active_config.reset(token)
