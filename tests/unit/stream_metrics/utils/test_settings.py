"""Tests for environment driven settings."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from stream_metrics.utils.settings import (
    MetricsSettings,
    get_settings,
    load_settings,
    reset_settings,
)

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture(autouse=True)
def fresh_settings() -> Iterator[None]:
    """Drop cached settings around every test."""
    reset_settings()
    yield
    reset_settings()


class TestMetricsSettings:
    """Validate defaults and environment overrides."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without overrides the documented defaults apply."""
        for variable in (
            "STREAM_METRICS_LOG_LEVEL",
            "STREAM_METRICS_LOG_FORMAT",
            "STREAM_METRICS_DEFAULT_THRESHOLD",
            "STREAM_METRICS_DEFAULT_BINS",
        ):
            monkeypatch.delenv(variable, raising=False)

        settings = MetricsSettings()

        assert settings.log_level == "INFO"
        assert settings.log_format == "json"
        assert settings.log_file_path is None
        assert settings.default_threshold == 0.5
        assert settings.default_bins == 0

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Prefixed variables override the defaults and are normalised."""
        monkeypatch.setenv("STREAM_METRICS_LOG_LEVEL", "debug")
        monkeypatch.setenv("STREAM_METRICS_LOG_FORMAT", "Console")
        monkeypatch.setenv("STREAM_METRICS_DEFAULT_THRESHOLD", "0.3")
        monkeypatch.setenv("STREAM_METRICS_DEFAULT_BINS", "256")

        settings = get_settings()

        assert settings.log_level == "DEBUG"
        assert settings.log_format == "console"
        assert settings.default_threshold == pytest.approx(0.3)
        assert settings.default_bins == 256

    def test_get_settings_is_cached(self) -> None:
        """The same instance is returned until the cache is reset."""
        first = get_settings()
        assert get_settings() is first

        reset_settings()
        assert get_settings() is not first

    @pytest.mark.parametrize(
        ("variable", "value"),
        [
            ("STREAM_METRICS_LOG_FORMAT", "xml"),
            ("STREAM_METRICS_DEFAULT_THRESHOLD", "1.5"),
            ("STREAM_METRICS_DEFAULT_BINS", "1"),
            ("STREAM_METRICS_DEFAULT_BINS", "-4"),
        ],
    )
    def test_invalid_values_raise(
        self,
        monkeypatch: pytest.MonkeyPatch,
        variable: str,
        value: str,
    ) -> None:
        """Out-of-domain settings are rejected at load time."""
        monkeypatch.setenv(variable, value)

        with pytest.raises(ValidationError):
            MetricsSettings()

    def test_load_settings_reads_dotenv(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Values from a ``.env`` file take effect after loading."""
        # registered so monkeypatch restores the value the file overrides
        monkeypatch.setenv("STREAM_METRICS_DEFAULT_THRESHOLD", "0.5")
        env_file = tmp_path / ".env"
        env_file.write_text(
            "STREAM_METRICS_DEFAULT_THRESHOLD=0.7\n",
            encoding="utf-8",
        )

        settings = load_settings(env_file)

        assert settings.default_threshold == pytest.approx(0.7)
        assert get_settings() is settings

    def test_default_dotenv_overrides_environment(
        self,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Without a path the ``.env`` found from the working directory wins."""
        monkeypatch.setenv("STREAM_METRICS_DEFAULT_BINS", "16")
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text(
            "STREAM_METRICS_DEFAULT_BINS=64\n",
            encoding="utf-8",
        )

        settings = load_settings()

        assert settings.default_bins == 64
