"""
Загрузчик конфигурации из config.yaml.

Предоставляет доступ к настройкам через точку:
    config.azure.subscription_id
    config.azure.timeout
    config.logging.level
"""

import os
import logging
from typing import Any, Optional

import yaml

from .core.config_schema import AppConfig, validate_config
from .core.logging import LogConfig, setup_logging_from_config

logger = logging.getLogger(__name__)

# Путь к файлу конфигурации
CONFIG_FILE = os.path.join(os.path.dirname(__file__), "config.yaml")

# Переменные окружения → ключи секции azure
ENV_MAP = {
    "AZURE_TENANT_ID": "tenant_id",
    "AZURE_CLIENT_ID": "client_id",
    "AZURE_CLIENT_SECRET": "client_secret",
    "AZURE_SUBSCRIPTION_ID": "subscription_id",
}


class ConfigSection:
    """Секция конфигурации с доступом через точку."""

    def __init__(self, data: Optional[dict] = None):
        self._data = data or {}

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Получить значение с дефолтом."""
        return self._data.get(key, default)

    def to_dict(self) -> dict:
        return dict(self._data)

    def __repr__(self) -> str:
        return f"ConfigSection({self._data})"


class Config:
    """
    Главный класс конфигурации.

    Порядок: значения по умолчанию → config.yaml → переменные окружения.

    Пример:
        config.azure.resource_url  # "https://management.azure.com"
        config.logging.level       # "INFO"
    """

    def __init__(self, config_file: Optional[str] = None):
        self._config_file: Optional[str] = None
        self._data = get_defaults()
        self._load_yaml(config_file)
        self._load_env()

    def _load_yaml(self, config_file: Optional[str] = None) -> None:
        """Загружает настройки из YAML файла."""
        if not config_file:
            search_paths = [
                CONFIG_FILE,
                "config.yaml",
                "config.yml",
                ".azure_network.yaml",
            ]
            for path in search_paths:
                if os.path.exists(path):
                    config_file = path
                    break

        if not config_file or not os.path.exists(config_file):
            return

        try:
            with open(config_file, "r", encoding="utf-8") as f:
                yaml_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Ошибка чтения {config_file}: {e}")
            return

        self._merge_dict(self._data, yaml_data)
        self._config_file = config_file
        logger.debug(f"Конфигурация загружена из {config_file}")

    def _load_env(self) -> None:
        """Загружает настройки из переменных окружения."""
        for env_name, key in ENV_MAP.items():
            value = os.getenv(env_name)
            if value:
                self._data["azure"][key] = value

    def _merge_dict(self, base: dict, override: dict) -> None:
        """Рекурсивно мержит словари."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_dict(base[key], value)
            else:
                base[key] = value

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            return super().__getattribute__(name)
        value = self._data.get(name)
        if isinstance(value, dict):
            return ConfigSection(value)
        return value

    def validated(self) -> AppConfig:
        """
        Возвращает валидированную pydantic-модель конфигурации.

        Raises:
            ConfigError: При ошибке валидации
        """
        return validate_config(self._data, config_file=self._config_file or "config.yaml")

    def setup_logging(self, stream: Any = None) -> None:
        """
        Настраивает логирование по секции logging.

        Args:
            stream: Поток для консоли (по умолчанию sys.stderr)

        Raises:
            ConfigError: При ошибке валидации
        """
        log_config = LogConfig.from_dict(self.validated().logging.model_dump())
        setup_logging_from_config(log_config, stream=stream)

    def reload(self, config_file: Optional[str] = None) -> None:
        """Перезагружает конфигурацию."""
        self._config_file = None
        self._data = get_defaults()
        self._load_yaml(config_file)
        self._load_env()


def get_defaults() -> dict:
    """Значения по умолчанию (совпадают с AppConfig)."""
    return AppConfig().model_dump()


def load_config(config_file: Optional[str] = None) -> Config:
    """
    Загружает конфигурацию из файла.

    Args:
        config_file: Путь к YAML файлу (опционально)

    Returns:
        Config: Объект конфигурации
    """
    return Config(config_file)
