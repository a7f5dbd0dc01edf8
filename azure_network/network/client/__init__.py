"""
Azure Resource Manager клиент.

Разбит на модули по типам ресурсов:
- base.py: сессия, авторизация, обработка ошибок
- load_balancers.py: балансировщики нагрузки
- dns.py: DNS зоны
- main.py: AzureNetworkClient (объединяет mixins)
"""

from .main import AzureNetworkClient
from .base import AzureClientBase
from .load_balancers import build_load_balancer_body

__all__ = [
    "AzureNetworkClient",
    "AzureClientBase",
    "build_load_balancer_body",
]
