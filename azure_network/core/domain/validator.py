"""
Валидация агрегата LoadBalancer перед сохранением.

Порядок проверок:
1. name, location, resource_group (PreconditionError)
2. Коллекции в фиксированном порядке: frontend IP конфигурации,
   правила балансировки, probes, NAT правила, NAT пулы.
   Отсутствующая коллекция (None) пропускается.
   Проверка останавливается на первой ошибке.

Валидатор один и тот же для агрегатов из from_dict() и из парсера.
"""

import logging
from typing import Any

from ..exceptions import PreconditionError, StructuralError
from ..models import LoadBalancer
from .codecs import CODECS, SubResourceCodec
from .required import ValidationResult, find_missing, format_required_message

logger = logging.getLogger(__name__)


class LoadBalancerValidator:
    """
    Валидатор агрегата балансировщика.

    Example:
        validator = LoadBalancerValidator()
        result = validator.validate(lb)
        if not result.ok:
            print(result.collection, result.missing, result.message)
    """

    def __init__(self, codecs=CODECS):
        self.codecs = tuple(codecs)

    def check_required_attributes(self, lb: LoadBalancer) -> ValidationResult:
        """Проверяет name, location, resource_group (все отсутствующие сразу)."""
        missing = find_missing(lb, LoadBalancer.REQUIRED_ATTRIBUTES)
        if not missing:
            return ValidationResult.success()
        return ValidationResult.failure(
            PreconditionError(format_required_message(missing), missing=missing)
        )

    def validate_collection(self, codec: SubResourceCodec, value: Any) -> ValidationResult:
        """
        Проверяет одну заданную коллекцию.

        Args:
            codec: Кодек типа записей
            value: Значение поля агрегата (не None)

        Returns:
            ValidationResult для первой найденной ошибки
        """
        collection = codec.collection
        if not isinstance(value, (list, tuple)):
            return ValidationResult.failure(
                StructuralError(f"{collection} must be a list", collection=collection)
            )
        if not value:
            return ValidationResult.failure(
                StructuralError(f"{collection} must not be empty", collection=collection)
            )

        for index, record in enumerate(value):
            result = codec.validate(record, index=index)
            if not result.ok:
                return result
        return ValidationResult.success()

    def validate_collections(self, lb: LoadBalancer) -> ValidationResult:
        """Проверяет все заданные коллекции в фиксированном порядке."""
        for codec in self.codecs:
            value = getattr(lb, codec.collection)
            if value is None:
                continue
            result = self.validate_collection(codec, value)
            if not result.ok:
                logger.debug(f"Ошибка валидации {codec.collection}: {result.message}")
                return result
        return ValidationResult.success()

    def validate(self, lb: LoadBalancer) -> ValidationResult:
        """
        Полная проверка агрегата перед save.

        Returns:
            ValidationResult: первая найденная ошибка или успех
        """
        result = self.check_required_attributes(lb)
        if not result.ok:
            return result
        return self.validate_collections(lb)


def validate_load_balancer(lb: LoadBalancer) -> None:
    """
    Проверяет агрегат и бросает исключение при ошибке.

    Raises:
        PreconditionError: Не заданы name / location / resource_group
        StructuralError: Коллекция не список, пустая или содержит не записи
        ValidationError: У записи нет обязательных полей
    """
    LoadBalancerValidator().validate(lb).raise_for_error()
