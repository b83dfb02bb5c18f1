import pytest

from core.domain.errors import ConfigurationError
from infrastructure.config import Settings, load_settings


def test_defaults_when_environment_is_empty():
    assert load_settings({}) == Settings()


def test_reads_values_from_environment():
    settings = load_settings(
        {
            "DATABASE_URL": "postgres+pool://user:pw@db:5432/tasks",
            "DB_MAX_CONNECTIONS": "20",
            "DB_STALE_TIMEOUT": "60",
            "LOG_LEVEL": "DEBUG",
        }
    )

    assert settings.database_url == "postgres+pool://user:pw@db:5432/tasks"
    assert settings.max_connections == 20
    assert settings.stale_timeout == 60.0
    assert settings.log_level == "debug"


@pytest.mark.parametrize(
    "env",
    [
        {"DB_MAX_CONNECTIONS": "many"},
        {"DB_MAX_CONNECTIONS": "0"},
        {"DB_STALE_TIMEOUT": "soon"},
        {"DATABASE_URL": "  "},
        {"LOG_LEVEL": "trace"},
        {"LOG_LEVEL": "verbose"},
    ],
)
def test_invalid_values_raise_configuration_error(env):
    with pytest.raises(ConfigurationError):
        load_settings(env)


def test_log_level_is_case_insensitive():
    assert load_settings({"LOG_LEVEL": " WARNING "}).log_level == "warning"
