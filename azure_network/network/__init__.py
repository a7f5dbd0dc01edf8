"""
Интеграция с Azure Resource Manager.

- service: интерфейс сервиса балансировщиков
- load_balancer: жизненный цикл (save / destroy)
- client: REST клиент Azure (requests)
"""

from .load_balancer import LoadBalancerLifecycle
from .service import LoadBalancerService
from .client import AzureNetworkClient

__all__ = [
    "LoadBalancerLifecycle",
    "LoadBalancerService",
    "AzureNetworkClient",
]
