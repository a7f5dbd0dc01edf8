"""
Типизированные исключения для Azure Network.

Иерархия:
    AzureNetworkError (базовый)
    ├── PreconditionError (не заданы name/location/resource_group)
    ├── StructuralError (коллекция не список, пустая, элементы не записи)
    ├── ValidationError (у записи нет обязательных полей)
    ├── BoundaryError (ошибка Azure Resource Manager API)
    │   └── AuthenticationError (получение токена)
    └── ConfigError (конфигурация)

Пример использования:
    from azure_network.core.exceptions import ValidationError, BoundaryError

    try:
        lifecycle.save(load_balancer)
    except ValidationError as e:
        logger.error(f"Не хватает полей: {e.missing}")
    except BoundaryError as e:
        logger.error(f"Azure API: {e.resource_group}/{e.name} - {e.message}")
"""

from typing import Optional, List


class AzureNetworkError(Exception):
    """
    Базовое исключение для всех ошибок Azure Network.

    Attributes:
        message: Описание ошибки
        details: Дополнительные детали (dict)
    """

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict:
        """Сериализация для логов/отчётов."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# === Validation Errors ===

class PreconditionError(AzureNetworkError):
    """
    Не заданы обязательные атрибуты балансировщика перед save/destroy.

    Ошибка возникает до любого обращения к Azure API.

    Attributes:
        missing: Список отсутствующих атрибутов

    Пример:
        raise PreconditionError("resource_group is required for this operation",
                                missing=["resource_group"])
    """

    def __init__(
        self,
        message: str,
        missing: Optional[List[str]] = None,
        details: Optional[dict] = None,
    ):
        self.missing = list(missing or [])
        details = details or {}
        if self.missing:
            details["missing"] = self.missing
        super().__init__(message, details)


class StructuralError(AzureNetworkError):
    """
    Коллекция под-ресурсов имеет неверную форму.

    Коллекция не является списком, пустая, или содержит не записи.

    Attributes:
        collection: Имя коллекции (probes, load_balancing_rules, ...)
        index: Индекс элемента (если ошибка в конкретном элементе)
    """

    def __init__(
        self,
        message: str,
        collection: Optional[str] = None,
        index: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        self.collection = collection
        self.index = index
        details = details or {}
        if collection:
            details["collection"] = collection
        if index is not None:
            details["index"] = index
        super().__init__(message, details)


class ValidationError(AzureNetworkError):
    """
    У записи под-ресурса отсутствуют обязательные поля.

    Сообщение перечисляет все отсутствующие поля, а не только первое.

    Attributes:
        missing: Список отсутствующих полей (в порядке объявления)
        collection: Имя коллекции
        index: Индекс записи в коллекции

    Пример:
        raise ValidationError(
            "frontend_port and backend_port are required for this operation",
            missing=["frontend_port", "backend_port"],
            collection="load_balancing_rules",
        )
    """

    def __init__(
        self,
        message: str,
        missing: Optional[List[str]] = None,
        collection: Optional[str] = None,
        index: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        self.missing = list(missing or [])
        self.collection = collection
        self.index = index
        details = details or {}
        if collection:
            details["collection"] = collection
        if index is not None:
            details["index"] = index
        super().__init__(message, details)


# === Azure API Errors ===

class BoundaryError(AzureNetworkError):
    """
    Ошибка при вызове Azure Resource Manager API.

    Сеть, авторизация или отказ удалённой стороны.

    Attributes:
        resource: Тип ресурса (load_balancer, dns_zone)
        name: Имя ресурса
        resource_group: Resource group
        status_code: HTTP код ответа
        url: URL запроса

    Пример:
        raise BoundaryError("Conflict", resource="load_balancer", name="lb1",
                            resource_group="rg1", status_code=409)
    """

    def __init__(
        self,
        message: str,
        resource: Optional[str] = None,
        name: Optional[str] = None,
        resource_group: Optional[str] = None,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.resource = resource
        self.name = name
        self.resource_group = resource_group
        self.status_code = status_code
        self.url = url
        details = details or {}
        if resource:
            details["resource"] = resource
        if name:
            details["name"] = name
        if resource_group:
            details["resource_group"] = resource_group
        if status_code:
            details["status_code"] = status_code
        if url:
            details["url"] = url
        super().__init__(message, details)

    def with_context(
        self,
        resource: Optional[str] = None,
        name: Optional[str] = None,
        resource_group: Optional[str] = None,
    ) -> "BoundaryError":
        """Дополняет ошибку контекстом ресурса (не перезаписывая уже заданный)."""
        if resource and not self.resource:
            self.resource = resource
            self.details["resource"] = resource
        if name and not self.name:
            self.name = name
            self.details["name"] = name
        if resource_group and not self.resource_group:
            self.resource_group = resource_group
            self.details["resource_group"] = resource_group
        return self


class AuthenticationError(BoundaryError):
    """
    Ошибка получения токена Azure AD.

    Пример:
        raise AuthenticationError("invalid_client", status_code=401)
    """
    pass


# === Config Errors ===

class ConfigError(AzureNetworkError):
    """
    Ошибка конфигурации.

    Attributes:
        config_file: Путь к файлу конфигурации
        key: Ключ конфигурации с ошибкой

    Пример:
        raise ConfigError("Missing required field", config_file="config.yaml", key="azure.tenant_id")
    """

    def __init__(
        self,
        message: str,
        config_file: Optional[str] = None,
        key: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        self.config_file = config_file
        self.key = key
        details = details or {}
        if config_file:
            details["config_file"] = config_file
        if key:
            details["key"] = key
        super().__init__(message, details)


# === Utility Functions ===

def format_error_for_log(error: Exception) -> str:
    """
    Форматирует ошибку для вывода в лог.

    Args:
        error: Исключение

    Returns:
        str: Отформатированная строка ошибки
    """
    if isinstance(error, AzureNetworkError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"
