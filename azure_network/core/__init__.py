"""
Core модули Azure Network.

Содержит:
- models: LoadBalancer и его под-ресурсы, DnsZone
- domain: парсинг, проверка обязательных полей, валидация агрегата
- exceptions: типизированные исключения
- credentials: получение токена Azure AD
- config_schema: валидация config.yaml
- Structured Logging: JSON/Human-readable логирование
"""

from .logging import (
    get_logger,
    setup_logging,
    setup_logging_from_config,
    StructuredLogger,
    JSONFormatter,
    HumanFormatter,
    LogConfig,
    RotationType,
)
from .exceptions import (
    AzureNetworkError,
    PreconditionError,
    StructuralError,
    ValidationError,
    BoundaryError,
    AuthenticationError,
    ConfigError,
    format_error_for_log,
)
from .models import (
    IPAllocationMethod,
    TransportProtocol,
    ProbeProtocol,
    LoadBalancerState,
    FrontendIPConfiguration,
    LoadBalancingRule,
    Probe,
    InboundNatRule,
    InboundNatPool,
    LoadBalancer,
    DnsZone,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "setup_logging_from_config",
    "StructuredLogger",
    "JSONFormatter",
    "HumanFormatter",
    "LogConfig",
    "RotationType",
    # Exceptions
    "AzureNetworkError",
    "PreconditionError",
    "StructuralError",
    "ValidationError",
    "BoundaryError",
    "AuthenticationError",
    "ConfigError",
    "format_error_for_log",
    # Models
    "IPAllocationMethod",
    "TransportProtocol",
    "ProbeProtocol",
    "LoadBalancerState",
    "FrontendIPConfiguration",
    "LoadBalancingRule",
    "Probe",
    "InboundNatRule",
    "InboundNatPool",
    "LoadBalancer",
    "DnsZone",
]
