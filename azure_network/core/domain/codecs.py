"""
Кодеки под-ресурсов балансировщика.

Каждый кодек умеет:
- parse(): фрагмент ответа Azure API → типизированная запись
- validate(): проверка наличия обязательных полей одной записи

Пять экземпляров SubResourceCodec отличаются только типом записи.
CODECS перечисляет их в фиксированном порядке валидации.

Использование:
    from azure_network.core.domain.codecs import PROBE_CODEC

    probe = PROBE_CODEC.parse(fragment)
    result = PROBE_CODEC.validate(probe)
    if not result.ok:
        print(result.missing)
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Tuple

from ..exceptions import StructuralError, ValidationError
from ..models import (
    SubResource,
    FrontendIPConfiguration,
    LoadBalancingRule,
    Probe,
    InboundNatRule,
    InboundNatPool,
)
from .required import ValidationResult, check_required, find_missing, join_names

logger = logging.getLogger(__name__)


class SubResourceCodec:
    """
    Кодек одного типа под-ресурса.

    Attributes:
        record_cls: Класс записи (подкласс SubResource)
        collection: Имя коллекции в LoadBalancer (probes, ...)
        wire_key: Ключ массива в properties ответа Azure (probes, ...)
        required: Обязательные поля
    """

    def __init__(self, record_cls: type):
        self.record_cls = record_cls
        self.collection: str = record_cls.COLLECTION
        self.wire_key: str = record_cls.WIRE_KEY
        self.required: Tuple[str, ...] = record_cls.REQUIRED_FIELDS

    def __repr__(self) -> str:
        return f"SubResourceCodec({self.record_cls.KIND})"

    def parse(self, fragment: Dict[str, Any]) -> SubResource:
        """
        Парсит фрагмент ответа Azure в запись.

        Отсутствующие ключи дают None, исключений не бросает.
        """
        return self.record_cls.from_wire(fragment or {})

    def is_record(self, record: Any) -> bool:
        """Запись нужного типа или dict вызывающего кода."""
        return isinstance(record, (self.record_cls, Mapping))

    def validate(self, record: Any, index: Optional[int] = None) -> ValidationResult:
        """
        Проверяет одну запись.

        Только наличие обязательных полей, без проверки значений
        (диапазон портов, написание протокола).

        Args:
            record: Запись или dict
            index: Индекс записи в коллекции (для контекста ошибки)

        Returns:
            ValidationResult
        """
        if not self.is_record(record):
            return ValidationResult.failure(
                StructuralError(
                    f"{self.collection} must be a list of {self.record_cls.KIND} records or dicts",
                    collection=self.collection,
                    index=index,
                )
            )
        return check_required(record, self.required, collection=self.collection, index=index)


class FrontendIPConfigurationCodec(SubResourceCodec):
    """
    Кодек frontend IP конфигурации.

    Дополнительно: subnet_id и public_ip_address_id не могут
    отсутствовать одновременно.
    """

    def __init__(self):
        super().__init__(FrontendIPConfiguration)
        self.address_sources: Tuple[str, ...] = FrontendIPConfiguration.ADDRESS_SOURCES

    def validate(self, record: Any, index: Optional[int] = None) -> ValidationResult:
        result = super().validate(record, index=index)
        if not result.ok:
            return result

        missing_sources = find_missing(record, self.address_sources)
        if len(missing_sources) == len(self.address_sources):
            return ValidationResult.failure(
                ValidationError(
                    f"{join_names(missing_sources)} can not be empty at the same time",
                    missing=missing_sources,
                    collection=self.collection,
                    index=index,
                )
            )
        return result


FRONTEND_IP_CONFIGURATION_CODEC = FrontendIPConfigurationCodec()
LOAD_BALANCING_RULE_CODEC = SubResourceCodec(LoadBalancingRule)
PROBE_CODEC = SubResourceCodec(Probe)
INBOUND_NAT_RULE_CODEC = SubResourceCodec(InboundNatRule)
INBOUND_NAT_POOL_CODEC = SubResourceCodec(InboundNatPool)

# Фиксированный порядок валидации при save
CODECS: Tuple[SubResourceCodec, ...] = (
    FRONTEND_IP_CONFIGURATION_CODEC,
    LOAD_BALANCING_RULE_CODEC,
    PROBE_CODEC,
    INBOUND_NAT_RULE_CODEC,
    INBOUND_NAT_POOL_CODEC,
)

_CODECS_BY_COLLECTION: Dict[str, SubResourceCodec] = {c.collection: c for c in CODECS}


def get_codec(collection: str) -> SubResourceCodec:
    """
    Возвращает кодек по имени коллекции.

    Raises:
        KeyError: Неизвестная коллекция
    """
    return _CODECS_BY_COLLECTION[collection]
