"""
Mixin для работы с балансировщиками нагрузки Azure.
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List, Optional

from ...core.exceptions import BoundaryError
from ...core.models import (
    SubResource,
    FrontendIPConfiguration,
    LoadBalancingRule,
    Probe,
    InboundNatRule,
    InboundNatPool,
)

logger = logging.getLogger(__name__)

LOAD_BALANCER_API_VERSION = "2016-06-01"
NETWORK_PROVIDER = "Microsoft.Network"


def _records_to_wire(records: Optional[Iterable[Any]], record_cls: type) -> Optional[List[Dict[str, Any]]]:
    """Записи (или dict вызывающего кода) → фрагменты тела запроса."""
    if records is None:
        return None
    result = []
    for record in records:
        if isinstance(record, Mapping):
            record = record_cls.from_dict(record)
        if not isinstance(record, SubResource):
            raise TypeError(f"Ожидалась запись {record_cls.KIND}, получено {type(record).__name__}")
        result.append(record.to_wire())
    return result


def build_load_balancer_body(
    location: str,
    frontend_ip_configurations: Optional[Iterable[Any]] = None,
    backend_address_pool_names: Optional[Iterable[str]] = None,
    load_balancing_rules: Optional[Iterable[Any]] = None,
    probes: Optional[Iterable[Any]] = None,
    inbound_nat_rules: Optional[Iterable[Any]] = None,
    inbound_nat_pools: Optional[Iterable[Any]] = None,
) -> Dict[str, Any]:
    """
    Формирует тело PUT запроса балансировщика.

    Отсутствующие (None) коллекции в тело не попадают.

    Returns:
        Dict: {"location": ..., "tags": {}, "properties": {...}}
    """
    properties: Dict[str, Any] = {}

    collections = (
        (FrontendIPConfiguration, frontend_ip_configurations),
        (LoadBalancingRule, load_balancing_rules),
        (Probe, probes),
        (InboundNatRule, inbound_nat_rules),
        (InboundNatPool, inbound_nat_pools),
    )
    for record_cls, records in collections:
        fragments = _records_to_wire(records, record_cls)
        if fragments is not None:
            properties[record_cls.WIRE_KEY] = fragments

    if backend_address_pool_names is not None:
        properties["backendAddressPools"] = [
            {"name": name} for name in sorted(backend_address_pool_names)
        ]

    return {
        "location": location,
        "tags": {},
        "properties": properties,
    }


class LoadBalancersMixin:
    """Методы для работы с балансировщиками."""

    def _load_balancer_url(self, resource_group: str, name: Optional[str] = None) -> str:
        return self._resource_url(
            resource_group,
            NETWORK_PROVIDER,
            "loadBalancers",
            name,
            api_version=LOAD_BALANCER_API_VERSION,
        )

    def create_load_balancer(
        self,
        name: str,
        location: str,
        resource_group: str,
        frontend_ip_configurations: Optional[List[Any]] = None,
        backend_address_pool_names: Optional[Iterable[str]] = None,
        load_balancing_rules: Optional[List[Any]] = None,
        probes: Optional[List[Any]] = None,
        inbound_nat_rules: Optional[List[Any]] = None,
        inbound_nat_pools: Optional[List[Any]] = None,
    ) -> Dict[str, Any]:
        """
        Создаёт или обновляет балансировщик (PUT).

        Args:
            name: Имя балансировщика
            location: Регион
            resource_group: Resource group
            frontend_ip_configurations: Frontend IP конфигурации
            backend_address_pool_names: Имена backend пулов
            load_balancing_rules: Правила балансировки
            probes: Health probes
            inbound_nat_rules: Входящие NAT правила
            inbound_nat_pools: Пулы входящего NAT

        Returns:
            Dict: JSON ответа Azure

        Raises:
            BoundaryError: Ошибка Azure API
        """
        logger.debug(f"Создание балансировщика {name} в {resource_group} ...")
        body = build_load_balancer_body(
            location,
            frontend_ip_configurations=frontend_ip_configurations,
            backend_address_pool_names=backend_address_pool_names,
            load_balancing_rules=load_balancing_rules,
            probes=probes,
            inbound_nat_rules=inbound_nat_rules,
            inbound_nat_pools=inbound_nat_pools,
        )
        try:
            response = self._request("PUT", self._load_balancer_url(resource_group, name), body)
        except BoundaryError as e:
            logger.warning(f"Ошибка создания балансировщика {name} в resource group {resource_group}")
            e.with_context(resource="load_balancer", name=name, resource_group=resource_group)
            raise

        logger.debug(f"Балансировщик {name} создан")
        return response

    def delete_load_balancer(self, resource_group: str, name: str) -> None:
        """
        Удаляет балансировщик (DELETE).

        Raises:
            BoundaryError: Ошибка Azure API
        """
        logger.debug(f"Удаление балансировщика {name} из {resource_group} ...")
        try:
            self._request("DELETE", self._load_balancer_url(resource_group, name))
        except BoundaryError as e:
            logger.warning(f"Ошибка удаления балансировщика {name} из resource group {resource_group}")
            e.with_context(resource="load_balancer", name=name, resource_group=resource_group)
            raise
        logger.debug(f"Балансировщик {name} удалён")

    def get_load_balancer(self, resource_group: str, name: str) -> Dict[str, Any]:
        """
        Получает балансировщик.

        Returns:
            Dict: JSON балансировщика
        """
        try:
            return self._request("GET", self._load_balancer_url(resource_group, name))
        except BoundaryError as e:
            e.with_context(resource="load_balancer", name=name, resource_group=resource_group)
            raise

    def list_load_balancers(self, resource_group: str) -> List[Dict[str, Any]]:
        """
        Получает балансировщики resource group.

        Returns:
            List: JSON балансировщиков (массив value)
        """
        try:
            response = self._request("GET", self._load_balancer_url(resource_group))
        except BoundaryError as e:
            e.with_context(resource="load_balancer", resource_group=resource_group)
            raise
        load_balancers = response.get("value", [])
        logger.debug(f"Получено балансировщиков: {len(load_balancers)}")
        return load_balancers
