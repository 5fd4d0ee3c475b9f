"""RoomSettings — the merged view of CLI flags, environment, and roomctl.toml.

Sources, first match wins:

1. keyword arguments (the global CLI flags)
2. ``ROOMCTL_*`` environment variables, nested with ``__``
   (``ROOMCTL_STORE__URL``)
3. ``roomctl.toml``
4. defaults of the section models
"""

from __future__ import annotations

from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from roomctl.config.discovery import find_config, read_config
from roomctl.config.models import ConnectionParams, InterchangeConfig, StoreConfig

_SQLITE_SCHEME = "sqlite:///"

# Parsed roomctl.toml for the RoomSettings being built by from_cli.
_file_values: ContextVar[dict[str, Any] | None] = ContextVar("_file_values", default=None)


class _ConfigFileSource(PydanticBaseSettingsSource):
    def __init__(self, settings_cls: type[BaseSettings], values: dict[str, Any]) -> None:
        super().__init__(settings_cls)
        self._values = values

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._values.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._values)


class RoomSettings(BaseSettings):
    """Settings for one roomctl invocation.

    Attributes:
        base_dir: Where relative SQLite paths and the default interchange
            file are resolved: the directory holding ``roomctl.toml``, or
            the CWD when there is none.
        config_path: The ``roomctl.toml`` that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "ROOMCTL_",
        "env_nested_delimiter": "__",
    }

    base_dir: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    store: StoreConfig = Field(default_factory=StoreConfig)
    interchange: InterchangeConfig = Field(default_factory=InterchangeConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        file_source = _ConfigFileSource(settings_cls, _file_values.get() or {})
        return init_settings, env_settings, file_source

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        base_dir: Path | None = None,
        **flags: Any,
    ) -> RoomSettings:
        """Read ``roomctl.toml`` (explicit *config_path*, or found by walking
        up from *base_dir*/CWD) and merge *flags* over everything else.
        """
        if config_path:
            toml_path: Path | None = Path(config_path)
            if not toml_path.is_file():
                raise click.ClickException(f"Config file not found: {config_path}")
        else:
            toml_path = find_config(base_dir)

        if base_dir is None:
            base_dir = toml_path.parent if toml_path else Path.cwd()

        token = _file_values.set(read_config(toml_path) if toml_path else {})
        try:
            return cls(base_dir=base_dir, config_path=toml_path, **flags)
        finally:
            _file_values.reset(token)

    def connection_params(self) -> ConnectionParams:
        """Store connection parameters with relative SQLite paths resolved.

        ``sqlite:///roomctl.db`` points at ``{base_dir}/roomctl.db``;
        absolute paths and in-memory databases pass through unchanged.
        """
        params = self.store.connection_params()
        url = params.url
        if url.startswith(_SQLITE_SCHEME):
            db_path = url[len(_SQLITE_SCHEME) :]
            if db_path and db_path != ":memory:" and not Path(db_path).is_absolute():
                url = f"{_SQLITE_SCHEME}{self.base_dir / db_path}"
        return params.model_copy(update={"url": url})
