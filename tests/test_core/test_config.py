"""
Тесты конфигурации: pydantic схема и загрузчик config.yaml.
"""

import io
import json
import logging

import pytest

from azure_network.config import Config, ConfigSection, ENV_MAP, get_defaults, load_config
from azure_network.core.config_schema import AppConfig, validate_config
from azure_network.core.exceptions import ConfigError


@pytest.fixture
def clean_env(monkeypatch):
    """Убирает переменные окружения Azure."""
    for env_name in ENV_MAP:
        monkeypatch.delenv(env_name, raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "azure:\n"
        "  tenant_id: tenant-from-file\n"
        "  subscription_id: sub-from-file\n"
        "  timeout: 60\n"
        "logging:\n"
        "  level: DEBUG\n",
        encoding="utf-8",
    )
    return str(path)


@pytest.mark.unit
class TestConfigSchema:
    """Тесты validate_config."""

    def test_defaults(self):
        config = AppConfig()

        assert config.azure.resource_url == "https://management.azure.com"
        assert config.azure.authority_url == "https://login.microsoftonline.com"
        assert config.azure.timeout == 30
        assert config.logging.level == "INFO"
        assert config.debug is False

    def test_valid(self):
        config = validate_config({"azure": {"subscription_id": "S", "timeout": 10}})

        assert isinstance(config, AppConfig)
        assert config.azure.subscription_id == "S"
        assert config.azure.timeout == 10

    def test_url_trailing_slash_stripped(self):
        config = validate_config({"azure": {"resource_url": "https://management.azure.com/"}})
        assert config.azure.resource_url == "https://management.azure.com"

    def test_invalid_url(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_config({"azure": {"resource_url": "management.azure.com"}})

        assert exc_info.value.key == "azure.resource_url"

    def test_timeout_out_of_range(self):
        with pytest.raises(ConfigError) as exc_info:
            validate_config({"azure": {"timeout": 0}}, config_file="my.yaml")

        assert exc_info.value.key == "azure.timeout"
        assert exc_info.value.config_file == "my.yaml"

    def test_invalid_log_level(self):
        with pytest.raises(ConfigError):
            validate_config({"logging": {"level": "VERBOSE"}})


@pytest.mark.unit
class TestConfigLoader:
    """Тесты Config: defaults → YAML → env."""

    def test_yaml_overrides_defaults(self, config_file, clean_env):
        config = Config(config_file)

        assert config.azure.tenant_id == "tenant-from-file"
        assert config.azure.timeout == 60
        assert config.azure.resource_url == "https://management.azure.com"
        assert config.logging.level == "DEBUG"

    def test_env_overrides_yaml(self, config_file, clean_env, monkeypatch):
        monkeypatch.setenv("AZURE_SUBSCRIPTION_ID", "sub-from-env")
        monkeypatch.setenv("AZURE_CLIENT_SECRET", "secret")

        config = Config(config_file)

        assert config.azure.subscription_id == "sub-from-env"
        assert config.azure.client_secret == "secret"
        assert config.azure.tenant_id == "tenant-from-file"

    def test_missing_file(self, tmp_path, clean_env):
        config = Config(str(tmp_path / "absent.yaml"))
        assert config.azure.timeout == get_defaults()["azure"]["timeout"]

    def test_validated(self, config_file, clean_env):
        app_config = load_config(config_file).validated()

        assert isinstance(app_config, AppConfig)
        assert app_config.azure.timeout == 60

    def test_validated_error_has_file(self, tmp_path, clean_env):
        path = tmp_path / "bad.yaml"
        path.write_text("azure:\n  timeout: 1000\n", encoding="utf-8")

        with pytest.raises(ConfigError) as exc_info:
            Config(str(path)).validated()

        assert exc_info.value.config_file == str(path)

    def test_reload(self, config_file, tmp_path, clean_env):
        config = Config(config_file)
        other = tmp_path / "other.yaml"
        other.write_text("azure:\n  timeout: 5\n", encoding="utf-8")

        config.reload(str(other))

        assert config.azure.timeout == 5
        assert config.azure.tenant_id == ""

    def test_setup_logging(self, tmp_path, clean_env, restore_root_logger):
        """Секция logging применяется к root logger."""
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: DEBUG\n  json_format: true\n", encoding="utf-8")
        stream = io.StringIO()

        Config(str(path)).setup_logging(stream=stream)
        logging.getLogger("azure_network.config_test").debug("Отладка")

        assert logging.getLogger().level == logging.DEBUG
        data = json.loads(stream.getvalue().strip())
        assert data["level"] == "DEBUG"
        assert data["message"] == "Отладка"

    def test_setup_logging_invalid(self, tmp_path, clean_env):
        path = tmp_path / "config.yaml"
        path.write_text("logging:\n  level: VERBOSE\n", encoding="utf-8")

        with pytest.raises(ConfigError):
            Config(str(path)).setup_logging()

    def test_section(self):
        section = ConfigSection({"a": {"b": 1}, "c": 2})

        assert section.a.b == 1
        assert section.c == 2
        assert section.missing is None
        assert section.get("missing", 7) == 7
