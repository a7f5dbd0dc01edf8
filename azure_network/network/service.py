"""
Интерфейс сервиса балансировщиков (граница с Azure API).

Структурная типизация (PEP 544): AzureNetworkClient и тестовые
двойники подходят без явного наследования.
"""

from typing import Any, Dict, Iterable, List, Optional, Protocol


class LoadBalancerService(Protocol):
    """Операции над балансировщиком, которые вызывает LoadBalancerLifecycle."""

    def create_load_balancer(
        self,
        name: str,
        location: str,
        resource_group: str,
        frontend_ip_configurations: Optional[List[Any]],
        backend_address_pool_names: Optional[Iterable[str]],
        load_balancing_rules: Optional[List[Any]],
        probes: Optional[List[Any]],
        inbound_nat_rules: Optional[List[Any]],
        inbound_nat_pools: Optional[List[Any]],
    ) -> Dict[str, Any]:
        """Создаёт или обновляет балансировщик.

        Returns:
            JSON ответа Azure (dict)
        """
        ...

    def delete_load_balancer(self, resource_group: str, name: str) -> None:
        """Удаляет балансировщик."""
        ...
