"""
Tests for settings loading, component wiring and helpers.

Run with: pytest tests/test_config.py -v
"""

from loguru import logger

from keyword_scout.config import Settings, load_settings
from keyword_scout.logging_config import configure_logging
from keyword_scout.seo.factory import build_orchestrator
from keyword_scout.utils.formatting import format_number


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults_without_file(self, temp_dir):
        settings = load_settings(temp_dir / "missing.yaml")

        assert settings.remote_enabled is True
        assert settings.suggest_timeout == 3.0
        assert settings.batch_size == 5
        assert settings.max_related is None

    def test_yaml_overrides(self, temp_dir):
        path = temp_dir / "settings.yaml"
        path.write_text(
            "search:\n"
            "  lightweight: true\n"
            "  max_related: 12\n"
            "trends:\n"
            "  enabled: false\n"
            "  geo: GB\n"
            "random:\n"
            "  seed: 42\n"
        )

        settings = load_settings(path)

        assert settings.lightweight is True
        assert settings.max_related == 12
        assert settings.trends_enabled is False
        assert settings.trends_geo == "GB"
        assert settings.random_seed == 42

    def test_env_overrides_yaml(self, temp_dir, monkeypatch):
        path = temp_dir / "settings.yaml"
        path.write_text("search:\n  batch_size: 7\n")
        monkeypatch.setenv("KEYWORD_SCOUT_BATCH_SIZE", "3")
        monkeypatch.setenv("KEYWORD_SCOUT_REMOTE_ENABLED", "false")
        monkeypatch.setenv("KEYWORD_SCOUT_CORS_ORIGINS", "http://a.test, http://b.test")
        monkeypatch.setenv("KEYWORD_SCOUT_RANDOM_SEED", "9")

        settings = load_settings(path)

        assert settings.batch_size == 3
        assert settings.remote_enabled is False
        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.random_seed == 9

    def test_invalid_env_value_ignored(self, temp_dir, monkeypatch):
        monkeypatch.setenv("KEYWORD_SCOUT_API_PORT", "not-a-port")

        settings = load_settings(temp_dir / "missing.yaml")

        assert settings.api_port == 8000

    def test_malformed_section_ignored(self, temp_dir):
        path = temp_dir / "settings.yaml"
        path.write_text("search: nope\nlogging:\n  level: DEBUG\n")

        settings = load_settings(path)

        assert settings.batch_size == 5
        assert settings.log_level == "DEBUG"


class TestFactory:
    """Tests for component wiring."""

    def test_build_orchestrator(self):
        settings = Settings(trends_enabled=False, remote_enabled=False, lightweight=True, random_seed=1)

        orchestrator = build_orchestrator(settings)

        assert orchestrator.lightweight
        assert orchestrator.max_related == 8
        assert orchestrator.synthesizer.trend_source is None
        assert orchestrator.fetcher.remote_enabled is False
        assert orchestrator.fetcher.expander is orchestrator.expander
        assert orchestrator.expander.rng is orchestrator.synthesizer.rng

    def test_seeded_orchestrators_agree(self):
        settings = Settings(trends_enabled=False, remote_enabled=False, random_seed=3)

        first = build_orchestrator(settings).expander.expand_alphabet("seo")
        second = build_orchestrator(settings).expander.expand_alphabet("seo")

        assert first == second


class TestLogging:
    """Tests for configure_logging."""

    def test_file_sink_created(self, temp_dir):
        try:
            configure_logging("WARNING", str(temp_dir / "logs"))
            logger.debug("written to file only")
        finally:
            logger.remove()

        assert list((temp_dir / "logs").glob("keyword_scout_*.log"))


class TestFormatNumber:
    """Tests for format_number."""

    def test_millions(self):
        assert format_number(1234567) == "1.2M"

    def test_thousands(self):
        assert format_number(61000) == "61.0K"
        assert format_number(1000) == "1.0K"

    def test_small(self):
        assert format_number(999) == "999"
