"""
Azure Network - модель сетевых ресурсов Azure поверх Resource Manager API.

Модуль предоставляет:
- Типизированную модель балансировщика нагрузки и его под-ресурсов
- Парсинг ответов Azure API в доменные объекты
- Проверку агрегата перед сохранением (все отсутствующие поля в одной ошибке)
- Сохранение и удаление балансировщика через REST клиент
- Создание DNS зон

Примеры использования:
    from azure_network import AzureNetworkClient, LoadBalancer, LoadBalancerLifecycle
    from azure_network.config import load_config

    client = AzureNetworkClient.from_config(load_config().validated())
    lifecycle = LoadBalancerLifecycle(client)

    lb = LoadBalancer.from_dict({
        "name": "lb-web",
        "location": "westeurope",
        "resource_group": "rg-prod",
        "frontend_ip_configurations": [
            {"name": "fe", "private_ip_allocation_method": "dynamic",
             "public_ip_address_id": "/subscriptions/.../publicIPAddresses/pip-web"},
        ],
        "backend_address_pool_names": ["pool-web"],
    })
    lifecycle.save(lb)
"""

__version__ = "1.0.0"

from .core.models import (
    LoadBalancer,
    FrontendIPConfiguration,
    LoadBalancingRule,
    Probe,
    InboundNatRule,
    InboundNatPool,
    DnsZone,
)
from .core.domain import parse_load_balancer, LoadBalancerValidator, ValidationResult
from .network import AzureNetworkClient, LoadBalancerLifecycle

__all__ = [
    "__version__",
    # Models
    "LoadBalancer",
    "FrontendIPConfiguration",
    "LoadBalancingRule",
    "Probe",
    "InboundNatRule",
    "InboundNatPool",
    "DnsZone",
    # Domain
    "parse_load_balancer",
    "LoadBalancerValidator",
    "ValidationResult",
    # Azure
    "AzureNetworkClient",
    "LoadBalancerLifecycle",
]
