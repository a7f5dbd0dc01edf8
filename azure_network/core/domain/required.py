"""
Проверка обязательных полей.

Один параметризуемый checker для всех типов под-ресурсов: список
обязательных полей задаётся типом записи, сообщение перечисляет
все отсутствующие поля сразу.

Результат проверки возвращается значением (ValidationResult), а не
исключением: вызывающий код видит список отсутствующих полей без
разбора текста ошибки. raise_for_error() превращает неуспех в исключение.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from ..exceptions import AzureNetworkError, ValidationError


def is_present(record: Any, name: str) -> bool:
    """
    Проверяет наличие поля в записи.

    Для dict: ключ есть и значение не None.
    Для объекта: атрибут не None.
    """
    if isinstance(record, Mapping):
        return record.get(name) is not None
    return getattr(record, name, None) is not None


def find_missing(record: Any, required: Iterable[str]) -> List[str]:
    """
    Возвращает отсутствующие обязательные поля в порядке required.

    Examples:
        >>> find_missing({"name": "r1", "protocol": "tcp"},
        ...              ["name", "protocol", "frontend_port", "backend_port"])
        ['frontend_port', 'backend_port']
    """
    return [name for name in required if not is_present(record, name)]


def join_names(names: List[str]) -> str:
    """
    Natural-language список: "a", "a and b", "a, b and c".
    """
    if not names:
        return ""
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} and {names[-1]}"


def format_required_message(missing: List[str]) -> str:
    """
    Формирует сообщение об отсутствующих полях.

    Examples:
        >>> format_required_message(["name"])
        'name is required for this operation'
        >>> format_required_message(["frontend_port", "backend_port"])
        'frontend_port and backend_port are required for this operation'
        >>> format_required_message(["a", "b", "c"])
        'a, b and c are required for this operation'
    """
    if not missing:
        return ""
    verb = "is" if len(missing) == 1 else "are"
    return f"{join_names(missing)} {verb} required for this operation"


@dataclass
class ValidationResult:
    """
    Результат проверки.

    Attributes:
        error: Исключение (None при успехе)
        missing: Отсутствующие поля
        collection: Коллекция, в которой найдена ошибка
        index: Индекс записи в коллекции
    """
    error: Optional[AzureNetworkError] = None
    missing: List[str] = field(default_factory=list)
    collection: Optional[str] = None
    index: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.ok

    @property
    def message(self) -> str:
        return self.error.message if self.error else ""

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def failure(cls, error: AzureNetworkError) -> "ValidationResult":
        """Создаёт неуспешный результат, перенося атрибуты из исключения."""
        return cls(
            error=error,
            missing=list(getattr(error, "missing", []) or []),
            collection=getattr(error, "collection", None),
            index=getattr(error, "index", None),
        )

    def raise_for_error(self) -> None:
        """Бросает сохранённое исключение, если проверка не прошла."""
        if self.error is not None:
            raise self.error


def check_required(
    record: Any,
    required: Iterable[str],
    collection: Optional[str] = None,
    index: Optional[int] = None,
) -> ValidationResult:
    """
    Проверяет наличие всех обязательных полей записи.

    Args:
        record: Запись (dataclass) или dict
        required: Обязательные поля
        collection: Имя коллекции (для контекста ошибки)
        index: Индекс записи

    Returns:
        ValidationResult: Один результат со всеми отсутствующими полями
    """
    missing = find_missing(record, required)
    if not missing:
        return ValidationResult.success()
    return ValidationResult.failure(
        ValidationError(
            format_required_message(missing),
            missing=missing,
            collection=collection,
            index=index,
        )
    )
