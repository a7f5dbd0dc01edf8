"""
Mixin для работы с DNS зонами Azure.
"""

import logging
from typing import List, Optional

from ...core.domain.parser import parse_zone
from ...core.exceptions import BoundaryError
from ...core.models import DnsZone

logger = logging.getLogger(__name__)

DNS_API_VERSION = "2015-05-04-preview"
DNS_PROVIDER = "Microsoft.Network"


class DnsZonesMixin:
    """Методы для работы с DNS зонами."""

    def _zone_url(self, resource_group: str, name: Optional[str] = None) -> str:
        return self._resource_url(
            resource_group,
            DNS_PROVIDER,
            "dnsZones",
            name,
            api_version=DNS_API_VERSION,
        )

    def create_zone(self, resource_group: str, name: str) -> DnsZone:
        """
        Создаёт DNS зону.

        Args:
            resource_group: Resource group
            name: Имя зоны (example.com)

        Returns:
            DnsZone: Созданная зона

        Raises:
            BoundaryError: Ошибка Azure API
        """
        logger.debug(f"Создание зоны {name} ...")
        body = {
            "location": "global",
            "tags": {},
            "properties": {},
        }
        try:
            response = self._request("PUT", self._zone_url(resource_group, name), body)
        except BoundaryError as e:
            logger.warning(f"Ошибка создания зоны {name} в resource group {resource_group}")
            e.with_context(resource="dns_zone", name=name, resource_group=resource_group)
            raise

        logger.debug(f"Зона {name} создана")
        return parse_zone(response)

    def delete_zone(self, resource_group: str, name: str) -> None:
        """Удаляет DNS зону."""
        try:
            self._request("DELETE", self._zone_url(resource_group, name))
        except BoundaryError as e:
            e.with_context(resource="dns_zone", name=name, resource_group=resource_group)
            raise
        logger.debug(f"Зона {name} удалена")

    def list_zones(self, resource_group: str) -> List[DnsZone]:
        """
        Получает DNS зоны resource group.

        Returns:
            List[DnsZone]
        """
        try:
            response = self._request("GET", self._zone_url(resource_group))
        except BoundaryError as e:
            e.with_context(resource="dns_zone", resource_group=resource_group)
            raise
        zones = [parse_zone(item) for item in response.get("value", [])]
        logger.debug(f"Получено зон: {len(zones)}")
        return zones

    def get_zone(self, resource_group: str, name: str) -> DnsZone:
        """Получает DNS зону по имени."""
        try:
            response = self._request("GET", self._zone_url(resource_group, name))
        except BoundaryError as e:
            e.with_context(resource="dns_zone", name=name, resource_group=resource_group)
            raise
        return parse_zone(response)
