"""
Pytest configuration и общие fixtures для тестов.

Предоставляет переиспользуемые fixtures:
- load_fixture: Загрузка JSON ответов Azure из tests/fixtures
- lb_wire: Полный ответ Azure с балансировщиком
- lb_data: Данные балансировщика от вызывающего кода (snake_case)
- mock_service: Mock сервиса балансировщиков
"""

import copy
import json
import logging
import pytest
from pathlib import Path
from typing import Dict, Any
from unittest.mock import MagicMock


SUBSCRIPTION = "00000000-0000-0000-0000-000000000000"
LB_ID = (
    f"/subscriptions/{SUBSCRIPTION}/resourceGroups/rg-prod"
    "/providers/Microsoft.Network/loadBalancers/lb-web"
)


@pytest.fixture
def fixtures_dir() -> Path:
    """Возвращает путь к директории fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def load_fixture(fixtures_dir):
    """
    Fixture для загрузки JSON ответов Azure.

    Usage:
        wire = load_fixture("load_balancer.json")
    """
    def _load(filename: str) -> Dict[str, Any]:
        fixture_path = fixtures_dir / filename
        if not fixture_path.exists():
            pytest.skip(f"Fixture не найден: {fixture_path}")
        return json.loads(fixture_path.read_text(encoding="utf-8"))
    return _load


@pytest.fixture
def lb_wire(load_fixture) -> Dict[str, Any]:
    """Полный ответ Azure: 2 frontend, 2 пула, по одному правилу/probe/NAT."""
    return load_fixture("load_balancer.json")


@pytest.fixture
def lb_data() -> Dict[str, Any]:
    """
    Валидные данные балансировщика от вызывающего кода.

    Returns:
        Dict: snake_case словарь для LoadBalancer.from_dict
    """
    return {
        "name": "lb-web",
        "location": "westeurope",
        "resource_group": "rg-prod",
        "backend_address_pool_names": ["pool-web"],
        "frontend_ip_configurations": [
            {
                "name": "fe-public",
                "private_ip_allocation_method": "dynamic",
                "public_ip_address_id": (
                    f"/subscriptions/{SUBSCRIPTION}/resourceGroups/rg-prod"
                    "/providers/Microsoft.Network/publicIPAddresses/pip-web"
                ),
            },
        ],
        "load_balancing_rules": [
            {
                "name": "http",
                "protocol": "tcp",
                "frontend_port": 80,
                "backend_port": 8080,
                "frontend_ip_configuration_id": f"{LB_ID}/frontendIPConfigurations/fe-public",
                "backend_address_pool_id": f"{LB_ID}/backendAddressPools/pool-web",
                "probe_id": f"{LB_ID}/probes/probe-http",
            },
        ],
        "probes": [
            {
                "name": "probe-http",
                "protocol": "http",
                "port": 8080,
                "request_path": "/healthz",
                "interval_in_seconds": 15,
                "number_of_probes": 2,
            },
        ],
        "inbound_nat_rules": [
            {
                "name": "ssh-vm1",
                "protocol": "tcp",
                "frontend_port": 50001,
                "backend_port": 22,
                "frontend_ip_configuration_id": f"{LB_ID}/frontendIPConfigurations/fe-public",
            },
        ],
        "inbound_nat_pools": [
            {
                "name": "rdp-pool",
                "protocol": "tcp",
                "frontend_port_range_start": 50100,
                "frontend_port_range_end": 50199,
                "backend_port": 3389,
                "frontend_ip_configuration_id": f"{LB_ID}/frontendIPConfigurations/fe-public",
            },
        ],
    }


@pytest.fixture
def echo_response():
    """
    Ответ Azure на PUT: тело запроса + id, name и provisioningState.

    Usage:
        response = echo_response(body, "lb-web", "rg-prod")
    """
    def _echo(body: Dict[str, Any], name: str, resource_group: str) -> Dict[str, Any]:
        response = copy.deepcopy(body)
        response["id"] = (
            f"/subscriptions/{SUBSCRIPTION}/resourceGroups/{resource_group}"
            f"/providers/Microsoft.Network/loadBalancers/{name}"
        )
        response["name"] = name
        response["type"] = "Microsoft.Network/loadBalancers"
        response["properties"]["provisioningState"] = "Succeeded"
        return response
    return _echo


@pytest.fixture
def mock_service(lb_wire):
    """
    Mock сервиса балансировщиков.

    Returns:
        MagicMock: create_load_balancer возвращает lb_wire
    """
    service = MagicMock()
    service.create_load_balancer.return_value = lb_wire
    service.delete_load_balancer.return_value = None
    return service


@pytest.fixture
def restore_root_logger():
    """Восстанавливает handlers и уровень root logger после теста."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
