"""Tests for perch.config — AppConfig frozen dataclass."""

from pathlib import Path

import pytest

from perch.config import AppConfig
from perch.errors import ConfigurationError


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()

        assert cfg.host == "0.0.0.0"
        assert cfg.port == 3000
        assert cfg.routes == "full"
        assert cfg.asset_dir is None
        assert cfg.log_level == "info"
        assert cfg.access_log is False
        assert cfg.graceful_timeout is None

    def test_override(self) -> None:
        cfg = AppConfig(host="127.0.0.1", port=8080, routes="minimal", asset_dir=Path("/srv"))

        assert cfg.host == "127.0.0.1"
        assert cfg.port == 8080
        assert cfg.routes == "minimal"
        assert cfg.asset_dir == Path("/srv")

    def test_frozen(self) -> None:
        cfg = AppConfig()

        with pytest.raises(AttributeError):
            cfg.port = 80  # type: ignore[misc]

    def test_address(self) -> None:
        assert AppConfig().address == "0.0.0.0:3000"


class TestValidate:
    def test_defaults_are_valid(self) -> None:
        AppConfig().validate()

    def test_port_zero_is_valid(self) -> None:
        AppConfig(port=0).validate()

    @pytest.mark.parametrize("port", [-1, 65536])
    def test_port_out_of_range(self, port: int) -> None:
        with pytest.raises(ConfigurationError, match="Port"):
            AppConfig(port=port).validate()

    def test_backlog_must_be_positive(self) -> None:
        with pytest.raises(ConfigurationError, match="Backlog"):
            AppConfig(backlog=0).validate()

    def test_negative_graceful_timeout(self) -> None:
        with pytest.raises(ConfigurationError, match="Graceful timeout"):
            AppConfig(graceful_timeout=-1.0).validate()
