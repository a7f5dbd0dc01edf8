"""
Парсинг ответов Azure API в доменные объекты.

ID ресурса Azure имеет фиксированный формат:
    /subscriptions/{sub}/resourceGroups/{rg}/providers/{ns}/{type}/{name}
resource group всегда пятый сегмент (индекс 4 после split("/")).
"""

import logging
from typing import Any, Dict, List, Optional

from ..models import LoadBalancer, DnsZone
from .codecs import CODECS

logger = logging.getLogger(__name__)

RESOURCE_GROUP_SEGMENT = 4


def resource_group_from_id(resource_id: Optional[str]) -> Optional[str]:
    """
    Извлекает resource group из ID ресурса.

    Examples:
        >>> resource_group_from_id(
        ...     "/subscriptions/S/resourceGroups/RG/providers/Microsoft.Network/loadBalancers/LB")
        'RG'
        >>> resource_group_from_id(None) is None
        True
    """
    if not resource_id:
        return None
    segments = resource_id.split("/")
    if len(segments) <= RESOURCE_GROUP_SEGMENT:
        logger.debug(f"Не удалось извлечь resource group из id: {resource_id}")
        return None
    return segments[RESOURCE_GROUP_SEGMENT] or None


def _backend_pool_names(pools: List[Dict[str, Any]]) -> set:
    return {pool.get("name") for pool in pools if pool.get("name")}


def parse_load_balancer(wire: Dict[str, Any]) -> LoadBalancer:
    """
    Собирает агрегат LoadBalancer из ответа Azure API.

    Отсутствующий в properties массив оставляет поле None,
    присутствующий (даже пустой) даёт список в порядке ответа.

    Args:
        wire: JSON ответа (dict)

    Returns:
        LoadBalancer
    """
    properties = wire.get("properties") or {}
    resource_id = wire.get("id")

    lb = LoadBalancer(
        id=resource_id,
        name=wire.get("name"),
        location=wire.get("location"),
        resource_group=resource_group_from_id(resource_id),
    )

    pools = properties.get("backendAddressPools")
    if pools is not None:
        lb.backend_address_pool_names = _backend_pool_names(pools)

    for codec in CODECS:
        fragments = properties.get(codec.wire_key)
        if fragments is None:
            continue
        setattr(lb, codec.collection, [codec.parse(fragment) for fragment in fragments])

    logger.debug(f"Распарсен балансировщик {lb.name} (resource_group={lb.resource_group})")
    return lb


def parse_zone(wire: Dict[str, Any]) -> DnsZone:
    """
    Парсит DNS зону из ответа Azure API.

    Args:
        wire: JSON ответа (dict)

    Returns:
        DnsZone
    """
    properties = wire.get("properties") or {}
    resource_id = wire.get("id")
    return DnsZone(
        name=wire.get("name", ""),
        id=resource_id,
        resource_group=resource_group_from_id(resource_id),
        location=wire.get("location") or "global",
        number_of_record_sets=properties.get("numberOfRecordSets"),
        max_number_of_record_sets=properties.get("maxNumberOfRecordSets"),
        name_servers=list(properties.get("nameServers") or []),
    )
