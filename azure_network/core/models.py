"""
Data Models для Azure Network.

Типизированные dataclasses вместо Dict[str, Any]:
- LoadBalancer: агрегат балансировщика нагрузки
- FrontendIPConfiguration, LoadBalancingRule, Probe,
  InboundNatRule, InboundNatPool: вложенные под-ресурсы
- DnsZone: DNS зона

Поле со значением None считается отсутствующим. Проверка наличия поля
выполняется через is_set() / present_fields(), а не через поиск ключа в dict.

Использование:
    from azure_network.core.models import LoadBalancer, Probe

    # Из ответа Azure API
    probe = Probe.from_wire(fragment)

    # Из dict вызывающего кода (snake_case)
    lb = LoadBalancer.from_dict({
        "name": "lb-web",
        "location": "westeurope",
        "resource_group": "rg-prod",
        "probes": [{"name": "http", "port": 80, ...}],
    })

    # Обратно в dict / в формат Azure API
    data = probe.to_dict()
    wire = probe.to_wire()
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional, Set, Tuple, Type
from enum import Enum

logger = logging.getLogger(__name__)


class IPAllocationMethod(str, Enum):
    """Способ назначения приватного IP."""
    STATIC = "static"
    DYNAMIC = "dynamic"


class TransportProtocol(str, Enum):
    """Протокол правила балансировки / NAT."""
    TCP = "tcp"
    UDP = "udp"
    ALL = "all"


class ProbeProtocol(str, Enum):
    """Протокол health probe."""
    HTTP = "http"
    TCP = "tcp"


class LoadBalancerState(str, Enum):
    """Состояние агрегата относительно Azure."""
    UNPERSISTED = "unpersisted"  # id ещё не назначен
    PERSISTED = "persisted"      # сохранён, id назначен сервером
    DELETED = "deleted"          # удалён, локальный объект устарел


def _enum_value(value: Any) -> Any:
    """Enum → строковое значение."""
    if isinstance(value, Enum):
        return value.value
    return value


def _to_wire_enum(value: Any) -> Any:
    """"tcp" → "Tcp", "dynamic" → "Dynamic" (регистр Azure API)."""
    value = _enum_value(value)
    if isinstance(value, str) and value:
        return value[0].upper() + value[1:]
    return value


def _from_wire_enum(value: Any, enum_cls: Type[Enum]) -> Any:
    """"Tcp" → TransportProtocol.TCP. Незнакомое значение остаётся строкой."""
    if isinstance(value, Enum) or not isinstance(value, str):
        return value
    try:
        return enum_cls(value.lower())
    except ValueError:
        return value.lower()


class SubResource:
    """
    Базовый класс под-ресурса балансировщика.

    Подклассы описывают отображение полей декларативно:
        WIRE_FIELDS: атрибут → ключ в properties (скаляры)
        WIRE_REFS: атрибут → ключ в properties вида {"id": ...}
        ENUM_FIELDS: атрибут → Enum (в Azure API значение пишется с заглавной)
        READ_ONLY: атрибуты, которые сервер возвращает, но не принимает

    Attributes:
        KIND: Человекочитаемое имя типа
        COLLECTION: Имя коллекции в LoadBalancer
        WIRE_KEY: Ключ массива в properties балансировщика
        REQUIRED_FIELDS: Обязательные поля (в порядке вывода в ошибке)
    """

    KIND: ClassVar[str] = ""
    COLLECTION: ClassVar[str] = ""
    WIRE_KEY: ClassVar[str] = ""
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ()
    WIRE_FIELDS: ClassVar[Dict[str, str]] = {}
    WIRE_REFS: ClassVar[Dict[str, str]] = {}
    ENUM_FIELDS: ClassVar[Dict[str, Type[Enum]]] = {}
    READ_ONLY: ClassVar[FrozenSet[str]] = frozenset()

    def is_set(self, name: str) -> bool:
        """Проверяет, задано ли поле."""
        return getattr(self, name, None) is not None

    def present_fields(self) -> List[str]:
        """Имена заданных полей в порядке объявления."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """
        Создаёт запись из dict вызывающего кода (snake_case ключи).

        Неизвестные ключи игнорируются, отсутствующие остаются None.
        Известные значения перечислений приводятся к Enum.
        """
        known = set(cls.field_names())
        unknown = [key for key in data if key not in known]
        if unknown:
            logger.debug(f"{cls.KIND}: неизвестные поля проигнорированы: {unknown}")
        values = {key: value for key, value in data.items() if key in known}
        for attr, enum_cls in cls.ENUM_FIELDS.items():
            if attr in values:
                values[attr] = _from_wire_enum(values[attr], enum_cls)
        return cls(**values)

    @classmethod
    def from_wire(cls, fragment: Dict[str, Any]):
        """
        Создаёт запись из фрагмента ответа Azure API.

        Отсутствующие ключи дают None, исключений не бросает.
        """
        properties = fragment.get("properties") or {}
        values: Dict[str, Any] = {
            "id": fragment.get("id"),
            "name": fragment.get("name"),
        }
        for attr, key in cls.WIRE_FIELDS.items():
            value = properties.get(key)
            if attr in cls.ENUM_FIELDS:
                value = _from_wire_enum(value, cls.ENUM_FIELDS[attr])
            values[attr] = value
        for attr, key in cls.WIRE_REFS.items():
            ref = properties.get(key)
            values[attr] = ref.get("id") if isinstance(ref, Mapping) else None
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь (только заданные поля)."""
        return {
            name: _enum_value(getattr(self, name))
            for name in self.present_fields()
        }

    def to_wire(self) -> Dict[str, Any]:
        """Конвертирует во фрагмент тела запроса Azure API."""
        result: Dict[str, Any] = {}
        if self.is_set("id"):
            result["id"] = self.id
        if self.is_set("name"):
            result["name"] = self.name

        properties: Dict[str, Any] = {}
        for attr, key in self.WIRE_FIELDS.items():
            if attr in self.READ_ONLY or not self.is_set(attr):
                continue
            value = getattr(self, attr)
            properties[key] = _to_wire_enum(value) if attr in self.ENUM_FIELDS else value
        for attr, key in self.WIRE_REFS.items():
            if attr not in self.READ_ONLY and self.is_set(attr):
                properties[key] = {"id": getattr(self, attr)}

        result["properties"] = properties
        return result


@dataclass
class FrontendIPConfiguration(SubResource):
    """
    Frontend IP конфигурация балансировщика.

    Должен быть задан хотя бы один источник адреса: subnet_id или
    public_ip_address_id (оба одновременно допустимы).

    Attributes:
        name: Имя конфигурации (уникально в пределах балансировщика)
        private_ip_allocation_method: static / dynamic
        private_ip_address: Приватный IP (для static)
        subnet_id: ID подсети (внутренний балансировщик)
        public_ip_address_id: ID публичного IP (внешний балансировщик)
        provisioning_state: Состояние (только чтение)
    """
    name: Optional[str] = None
    id: Optional[str] = None
    private_ip_allocation_method: Optional[IPAllocationMethod] = None
    private_ip_address: Optional[str] = None
    subnet_id: Optional[str] = None
    public_ip_address_id: Optional[str] = None
    provisioning_state: Optional[str] = None

    KIND: ClassVar[str] = "FrontendIPConfiguration"
    COLLECTION: ClassVar[str] = "frontend_ip_configurations"
    WIRE_KEY: ClassVar[str] = "frontendIPConfigurations"
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "private_ip_allocation_method")
    ADDRESS_SOURCES: ClassVar[Tuple[str, ...]] = ("subnet_id", "public_ip_address_id")
    WIRE_FIELDS: ClassVar[Dict[str, str]] = {
        "private_ip_allocation_method": "privateIPAllocationMethod",
        "private_ip_address": "privateIPAddress",
        "provisioning_state": "provisioningState",
    }
    WIRE_REFS: ClassVar[Dict[str, str]] = {
        "subnet_id": "subnet",
        "public_ip_address_id": "publicIPAddress",
    }
    ENUM_FIELDS: ClassVar[Dict[str, Type[Enum]]] = {
        "private_ip_allocation_method": IPAllocationMethod,
    }
    READ_ONLY: ClassVar[FrozenSet[str]] = frozenset({"provisioning_state"})


@dataclass
class LoadBalancingRule(SubResource):
    """
    Правило балансировки нагрузки.

    Attributes:
        name: Имя правила
        protocol: tcp / udp
        frontend_port: Порт на frontend (0-65535)
        backend_port: Порт на backend (0-65535)
        frontend_ip_configuration_id: ID frontend конфигурации
        backend_address_pool_id: ID backend пула
        probe_id: ID health probe
        idle_timeout_in_minutes: Таймаут простоя TCP
        enable_floating_ip: Floating IP (Direct Server Return)
        load_distribution: Default / SourceIP / SourceIPProtocol
    """
    name: Optional[str] = None
    id: Optional[str] = None
    protocol: Optional[TransportProtocol] = None
    frontend_port: Optional[int] = None
    backend_port: Optional[int] = None
    frontend_ip_configuration_id: Optional[str] = None
    backend_address_pool_id: Optional[str] = None
    probe_id: Optional[str] = None
    idle_timeout_in_minutes: Optional[int] = None
    enable_floating_ip: Optional[bool] = None
    load_distribution: Optional[str] = None

    KIND: ClassVar[str] = "LoadBalancingRule"
    COLLECTION: ClassVar[str] = "load_balancing_rules"
    WIRE_KEY: ClassVar[str] = "loadBalancingRules"
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "protocol", "frontend_port", "backend_port")
    WIRE_FIELDS: ClassVar[Dict[str, str]] = {
        "protocol": "protocol",
        "frontend_port": "frontendPort",
        "backend_port": "backendPort",
        "idle_timeout_in_minutes": "idleTimeoutInMinutes",
        "enable_floating_ip": "enableFloatingIP",
        "load_distribution": "loadDistribution",
    }
    WIRE_REFS: ClassVar[Dict[str, str]] = {
        "frontend_ip_configuration_id": "frontendIPConfiguration",
        "backend_address_pool_id": "backendAddressPool",
        "probe_id": "probe",
    }
    ENUM_FIELDS: ClassVar[Dict[str, Type[Enum]]] = {"protocol": TransportProtocol}


@dataclass
class Probe(SubResource):
    """
    Health probe балансировщика.

    Attributes:
        name: Имя probe
        protocol: http / tcp
        port: Порт проверки
        request_path: URI для http probe
        interval_in_seconds: Интервал проверок
        number_of_probes: Количество неудачных проверок до исключения
    """
    name: Optional[str] = None
    id: Optional[str] = None
    protocol: Optional[ProbeProtocol] = None
    port: Optional[int] = None
    request_path: Optional[str] = None
    interval_in_seconds: Optional[int] = None
    number_of_probes: Optional[int] = None

    KIND: ClassVar[str] = "Probe"
    COLLECTION: ClassVar[str] = "probes"
    WIRE_KEY: ClassVar[str] = "probes"
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = (
        "name",
        "port",
        "request_path",
        "interval_in_seconds",
        "number_of_probes",
    )
    WIRE_FIELDS: ClassVar[Dict[str, str]] = {
        "protocol": "protocol",
        "port": "port",
        "request_path": "requestPath",
        "interval_in_seconds": "intervalInSeconds",
        "number_of_probes": "numberOfProbes",
    }
    ENUM_FIELDS: ClassVar[Dict[str, Type[Enum]]] = {"protocol": ProbeProtocol}


@dataclass
class InboundNatRule(SubResource):
    """
    Входящее NAT правило (один frontend порт → одна backend IP конфигурация).

    Attributes:
        name: Имя правила
        protocol: tcp / udp
        frontend_port: Внешний порт
        backend_port: Внутренний порт
        frontend_ip_configuration_id: ID frontend конфигурации
        backend_ip_configuration_id: ID IP конфигурации сетевого интерфейса
    """
    name: Optional[str] = None
    id: Optional[str] = None
    protocol: Optional[TransportProtocol] = None
    frontend_port: Optional[int] = None
    backend_port: Optional[int] = None
    frontend_ip_configuration_id: Optional[str] = None
    backend_ip_configuration_id: Optional[str] = None
    idle_timeout_in_minutes: Optional[int] = None
    enable_floating_ip: Optional[bool] = None

    KIND: ClassVar[str] = "InboundNatRule"
    COLLECTION: ClassVar[str] = "inbound_nat_rules"
    WIRE_KEY: ClassVar[str] = "inboundNatRules"
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "protocol", "frontend_port", "backend_port")
    WIRE_FIELDS: ClassVar[Dict[str, str]] = {
        "protocol": "protocol",
        "frontend_port": "frontendPort",
        "backend_port": "backendPort",
        "idle_timeout_in_minutes": "idleTimeoutInMinutes",
        "enable_floating_ip": "enableFloatingIP",
    }
    WIRE_REFS: ClassVar[Dict[str, str]] = {
        "frontend_ip_configuration_id": "frontendIPConfiguration",
        "backend_ip_configuration_id": "backendIPConfiguration",
    }
    ENUM_FIELDS: ClassVar[Dict[str, Type[Enum]]] = {"protocol": TransportProtocol}
    # backendIPConfiguration назначается со стороны сетевого интерфейса
    READ_ONLY: ClassVar[FrozenSet[str]] = frozenset({"backend_ip_configuration_id"})


@dataclass
class InboundNatPool(SubResource):
    """
    Пул входящего NAT (диапазон frontend портов для scale set).

    Attributes:
        name: Имя пула
        protocol: tcp / udp
        frontend_port_range_start: Начало диапазона внешних портов
        frontend_port_range_end: Конец диапазона внешних портов
        backend_port: Внутренний порт
        frontend_ip_configuration_id: ID frontend конфигурации
    """
    name: Optional[str] = None
    id: Optional[str] = None
    protocol: Optional[TransportProtocol] = None
    frontend_port_range_start: Optional[int] = None
    frontend_port_range_end: Optional[int] = None
    backend_port: Optional[int] = None
    frontend_ip_configuration_id: Optional[str] = None

    KIND: ClassVar[str] = "InboundNatPool"
    COLLECTION: ClassVar[str] = "inbound_nat_pools"
    WIRE_KEY: ClassVar[str] = "inboundNatPools"
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = (
        "name",
        "protocol",
        "frontend_port_range_start",
        "frontend_port_range_end",
        "backend_port",
    )
    WIRE_FIELDS: ClassVar[Dict[str, str]] = {
        "protocol": "protocol",
        "frontend_port_range_start": "frontendPortRangeStart",
        "frontend_port_range_end": "frontendPortRangeEnd",
        "backend_port": "backendPort",
    }
    WIRE_REFS: ClassVar[Dict[str, str]] = {
        "frontend_ip_configuration_id": "frontendIPConfiguration",
    }
    ENUM_FIELDS: ClassVar[Dict[str, Type[Enum]]] = {"protocol": TransportProtocol}


# Порядок коллекций фиксирован: в этом порядке идёт валидация при save
SUB_RESOURCE_TYPES: Tuple[type, ...] = (
    FrontendIPConfiguration,
    LoadBalancingRule,
    Probe,
    InboundNatRule,
    InboundNatPool,
)

COLLECTION_TYPES: Dict[str, type] = {cls.COLLECTION: cls for cls in SUB_RESOURCE_TYPES}


@dataclass
class LoadBalancer:
    """
    Балансировщик нагрузки Azure (агрегат).

    Владеет всеми коллекциями под-ресурсов. Коллекция со значением None
    отсутствует; пустой список означает "задана, но пустая".

    Attributes:
        name: Имя (identity в пределах resource group)
        id: ID ресурса (назначается сервером)
        location: Регион
        resource_group: Resource group (из id при парсинге)
        backend_address_pool_names: Имена backend пулов (порядок не важен)
        frontend_ip_configurations: Frontend IP конфигурации
        load_balancing_rules: Правила балансировки
        probes: Health probes
        inbound_nat_rules: Входящие NAT правила
        inbound_nat_pools: Пулы входящего NAT
        deleted: Объект удалён в Azure (локальная копия устарела)
    """
    name: Optional[str] = None
    id: Optional[str] = None
    location: Optional[str] = None
    resource_group: Optional[str] = None
    backend_address_pool_names: Optional[Set[str]] = None
    frontend_ip_configurations: Optional[List[FrontendIPConfiguration]] = None
    load_balancing_rules: Optional[List[LoadBalancingRule]] = None
    probes: Optional[List[Probe]] = None
    inbound_nat_rules: Optional[List[InboundNatRule]] = None
    inbound_nat_pools: Optional[List[InboundNatPool]] = None
    deleted: bool = field(default=False, compare=False)

    REQUIRED_ATTRIBUTES: ClassVar[Tuple[str, ...]] = ("name", "location", "resource_group")
    COLLECTIONS: ClassVar[Tuple[str, ...]] = tuple(COLLECTION_TYPES)

    @property
    def state(self) -> LoadBalancerState:
        """Текущее состояние жизненного цикла."""
        if self.deleted:
            return LoadBalancerState.DELETED
        if self.id:
            return LoadBalancerState.PERSISTED
        return LoadBalancerState.UNPERSISTED

    def is_set(self, name: str) -> bool:
        """Проверяет, задан ли атрибут (None = отсутствует)."""
        return getattr(self, name, None) is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoadBalancer":
        """
        Создаёт агрегат из dict вызывающего кода.

        Элементы-словари коллекций превращаются в записи нужного типа.
        Всё остальное сохраняется как есть, чтобы валидатор мог сообщить
        о неверной форме (не список, не запись).
        """
        values: Dict[str, Any] = {}
        for name in ("name", "id", "location", "resource_group"):
            if name in data:
                values[name] = data[name]

        pools = data.get("backend_address_pool_names")
        if isinstance(pools, (list, tuple, set, frozenset)):
            pools = set(pools)
        values["backend_address_pool_names"] = pools

        for collection, record_cls in COLLECTION_TYPES.items():
            value = data.get(collection)
            if isinstance(value, (list, tuple)):
                value = [
                    record_cls.from_dict(item) if isinstance(item, Mapping) else item
                    for item in value
                ]
            values[collection] = value

        return cls(**values)

    def merge(self, other: "LoadBalancer") -> "LoadBalancer":
        """
        Переносит в себя заданные поля другого агрегата.

        Поля, отсутствующие у other, не трогаются. Возвращает self.
        """
        for f in fields(self):
            if f.name == "deleted":
                continue
            value = getattr(other, f.name)
            if value is not None:
                setattr(self, f.name, value)
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь (только заданные поля, без deleted)."""
        result: Dict[str, Any] = {}
        for name in ("name", "id", "location", "resource_group"):
            if self.is_set(name):
                result[name] = getattr(self, name)
        if self.backend_address_pool_names is not None:
            result["backend_address_pool_names"] = sorted(self.backend_address_pool_names)
        for collection in self.COLLECTIONS:
            records = getattr(self, collection)
            if records is not None:
                result[collection] = [
                    r.to_dict() if isinstance(r, SubResource) else r for r in records
                ]
        return result


@dataclass
class DnsZone:
    """
    DNS зона Azure.

    Attributes:
        name: Имя зоны (example.com)
        id: ID ресурса
        resource_group: Resource group
        location: Всегда "global"
        number_of_record_sets: Количество record sets
        max_number_of_record_sets: Лимит record sets
        name_servers: Список NS серверов Azure
    """
    name: str
    id: Optional[str] = None
    resource_group: Optional[str] = None
    location: str = "global"
    number_of_record_sets: Optional[int] = None
    max_number_of_record_sets: Optional[int] = None
    name_servers: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Конвертирует в словарь."""
        return {
            "name": self.name,
            "id": self.id,
            "resource_group": self.resource_group,
            "location": self.location,
            "number_of_record_sets": self.number_of_record_sets,
            "max_number_of_record_sets": self.max_number_of_record_sets,
            "name_servers": list(self.name_servers),
        }
