"""
Domain Layer для Azure Network.

Чистая логика без сетевых вызовов:
- codecs: разбор и проверка под-ресурсов балансировщика
- parser: ответ Azure API → LoadBalancer / DnsZone
- validator: проверка агрегата перед сохранением
- required: общий checker обязательных полей

Использование:
    from azure_network.core.domain import parse_load_balancer, LoadBalancerValidator

    lb = parse_load_balancer(response)
    result = LoadBalancerValidator().validate(lb)
"""

from .required import (
    ValidationResult,
    check_required,
    find_missing,
    format_required_message,
)
from .codecs import (
    SubResourceCodec,
    CODECS,
    FRONTEND_IP_CONFIGURATION_CODEC,
    LOAD_BALANCING_RULE_CODEC,
    PROBE_CODEC,
    INBOUND_NAT_RULE_CODEC,
    INBOUND_NAT_POOL_CODEC,
    get_codec,
)
from .parser import parse_load_balancer, parse_zone, resource_group_from_id
from .validator import LoadBalancerValidator, validate_load_balancer

__all__ = [
    "ValidationResult",
    "check_required",
    "find_missing",
    "format_required_message",
    "SubResourceCodec",
    "CODECS",
    "FRONTEND_IP_CONFIGURATION_CODEC",
    "LOAD_BALANCING_RULE_CODEC",
    "PROBE_CODEC",
    "INBOUND_NAT_RULE_CODEC",
    "INBOUND_NAT_POOL_CODEC",
    "get_codec",
    "parse_load_balancer",
    "parse_zone",
    "resource_group_from_id",
    "LoadBalancerValidator",
    "validate_load_balancer",
]
