"""
Azure Network Client - объединяет все mixins.
"""

from .base import AzureClientBase
from .load_balancers import LoadBalancersMixin
from .dns import DnsZonesMixin
from ...core.config_schema import AppConfig
from ...core.credentials import AzureCredentials, TokenCache


class AzureNetworkClient(
    LoadBalancersMixin,
    DnsZonesMixin,
    AzureClientBase,
):
    """
    Клиент Azure Resource Manager для сетевых ресурсов.

    Предоставляет методы для:
    - Балансировщиков нагрузки (create/delete/get/list)
    - DNS зон (create/delete/get/list)

    Example:
        client = AzureNetworkClient(
            subscription_id="00000000-0000-0000-0000-000000000000",
            credentials=AzureCredentials.from_env(),
        )

        response = client.create_load_balancer("lb-web", "westeurope", "rg-prod", ...)
        zone = client.create_zone("rg-prod", "example.com")
    """

    @classmethod
    def from_config(cls, config: AppConfig) -> "AzureNetworkClient":
        """
        Создаёт клиент из валидированной конфигурации.

        Токен запрашивается у azure.authority_url для azure.resource_url.

        Example:
            client = AzureNetworkClient.from_config(load_config().validated())
        """
        azure = config.azure
        credentials = AzureCredentials(
            tenant_id=azure.tenant_id,
            client_id=azure.client_id,
            client_secret=azure.client_secret,
        )
        return cls(
            subscription_id=azure.subscription_id,
            credentials=credentials,
            resource_url=azure.resource_url,
            timeout=azure.timeout,
            verify_ssl=azure.verify_ssl,
            token_cache=TokenCache(
                authority_url=azure.authority_url,
                resource_url=azure.resource_url,
            ),
        )
