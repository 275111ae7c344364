"""Tests for configuration and cache helpers."""

import logging

from elpris.config import ApplicationConfig, is_valid_region, is_valid_theme
from elpris.utils import CacheStats, memoize


class TestApplicationConfig:
    """Tests for defaults and environment overrides."""

    def test_defaults(self) -> None:
        config = ApplicationConfig()

        assert config.cache.cache_duration_seconds == 3600
        assert config.cache.update_interval_seconds == 600
        assert config.window.box_size == 8
        assert config.window.chart_size == 16
        assert config.window.midnight_prep_hour == 22
        assert config.preferences.default_region == "SE3"
        assert config.spot_price_api.base_url == "https://www.elprisetjustnu.se/api/v1/prices"

    def test_environment_overrides(self, monkeypatch, tmp_path) -> None:
        monkeypatch.setenv("ELPRIS_CACHE_DURATION", "120")
        monkeypatch.setenv("ELPRIS_DEFAULT_REGION", "se4")
        monkeypatch.setenv("ELPRIS_API_DEBUG", "true")
        monkeypatch.setenv("ELPRIS_STORAGE_DIR", str(tmp_path))

        config = ApplicationConfig.from_environment(tmp_path / ".env")

        assert config.cache.cache_duration_seconds == 120
        assert config.preferences.default_region == "SE4"
        assert config.is_debug is True
        assert config.storage_path == str(tmp_path)

    def test_dotenv_file(self, monkeypatch, tmp_path) -> None:
        monkeypatch.delenv("ELPRIS_UPDATE_INTERVAL", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("ELPRIS_UPDATE_INTERVAL=30\n")

        config = ApplicationConfig.from_environment(env_file)

        assert config.cache.update_interval_seconds == 30
        monkeypatch.delenv("ELPRIS_UPDATE_INTERVAL", raising=False)

    def test_region_and_theme_checks(self) -> None:
        assert is_valid_region("SE1")
        assert not is_valid_region("se1")
        assert not is_valid_region(None)
        assert is_valid_theme("dark")
        assert not is_valid_theme("auto")


class TestCacheStats:
    """Tests for the hit/miss counters."""

    def test_hit_rate(self) -> None:
        stats = CacheStats()
        assert stats.hit_rate == 0.0

        stats.hits, stats.misses = 2, 1

        assert stats.total_requests == 3
        assert stats.hit_rate == 66.67

    def test_memoize_counts_hits(self) -> None:
        stats = CacheStats()
        calls = []

        @memoize(stats)
        def square(x):
            calls.append(x)
            return x * x

        assert square(3) == 9
        assert square(3) == 9
        assert calls == [3]
        assert (stats.hits, stats.misses) == (1, 1)

        square.cache_clear()

        assert square.cache == {}
        assert stats.snapshot()["last_cleared"] is not None

    def test_log(self, caplog) -> None:
        stats = CacheStats()
        stats.hits = 1

        with caplog.at_level(logging.INFO):
            stats.log(logging.getLogger("elpris.test"))

        assert "hit rate 100.00%" in caplog.text
