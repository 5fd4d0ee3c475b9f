"""Tests for configuration models."""

import pytest
from pydantic import ValidationError

from roomctl.config.models import (
    STATEMENT_TIMEOUT_SECONDS,
    ConnectionParams,
    StoreConfig,
)


class TestStoreConfig:
    def test_defaults(self) -> None:
        cfg = StoreConfig()
        assert cfg.url == "sqlite:///roomctl.db"
        assert cfg.user == ""
        assert cfg.password == ""
        assert cfg.timeout == STATEMENT_TIMEOUT_SECONDS == 5
        assert cfg.replace_existing is False

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            StoreConfig(timeout=0)

    def test_connection_params(self) -> None:
        cfg = StoreConfig(url="mysql+pymysql://db/rooms", user="ana", password="s3cret")
        assert cfg.connection_params() == ConnectionParams(
            url="mysql+pymysql://db/rooms", user="ana", password="s3cret", timeout=5
        )

    def test_frozen(self) -> None:
        cfg = StoreConfig()
        with pytest.raises(ValidationError):
            cfg.url = "sqlite://"  # type: ignore[misc]
