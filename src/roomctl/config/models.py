"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, roomctl.toml only contains overrides.
A fresh installation needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

STATEMENT_TIMEOUT_SECONDS = 5


class ConnectionParams(BaseModel):
    """Resolved store location, principal, and credential."""

    model_config = {"frozen": True}

    url: str
    user: str = ""
    password: str = ""
    timeout: int = STATEMENT_TIMEOUT_SECONDS


# --- roomctl.toml sections ---


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    url: str = "sqlite:///roomctl.db"
    user: str = ""
    password: str = ""
    timeout: int = Field(default=STATEMENT_TIMEOUT_SECONDS, gt=0)
    replace_existing: bool = False

    def connection_params(self) -> ConnectionParams:
        return ConnectionParams(
            url=self.url,
            user=self.user,
            password=self.password,
            timeout=self.timeout,
        )


class InterchangeConfig(BaseModel):
    """[interchange] section."""

    model_config = {"frozen": True}

    default_file: str = "inventory.txt"
