"""Tests for environment-driven settings."""

from momentum.core.settings import Settings


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "from-env")
    monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")
    monkeypatch.setenv("MESSAGE_LIST_LIMIT", "25")

    settings = Settings()

    assert settings.secret_key == "from-env"
    assert settings.message_list_limit == 25
    assert settings.effective_database_url == "sqlite:///./other.db"
    assert settings.is_sqlite is True


def test_test_database_override(monkeypatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "x")
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://db/momentum")
    monkeypatch.setenv("TEST_DATABASE_URL", "sqlite://")
    monkeypatch.setenv("USE_TEST_DATABASE", "true")

    settings = Settings()

    assert settings.effective_database_url == "sqlite://"


def test_test_database_ignored_unless_enabled(monkeypatch) -> None:
    monkeypatch.setenv("SECRET_KEY", "x")
    monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://db/momentum")
    monkeypatch.setenv("TEST_DATABASE_URL", "sqlite://")
    monkeypatch.setenv("USE_TEST_DATABASE", "false")

    settings = Settings()

    assert settings.effective_database_url == "postgresql+psycopg://db/momentum"
    assert settings.is_sqlite is False
