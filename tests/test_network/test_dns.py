"""
Тесты AzureNetworkClient: DNS зоны.
"""

import json
from unittest.mock import MagicMock

import pytest

from azure_network.core.exceptions import BoundaryError
from azure_network.core.models import DnsZone
from azure_network.network import AzureNetworkClient
from azure_network.network.client.dns import DNS_API_VERSION

SUBSCRIPTION = "00000000-0000-0000-0000-000000000000"
ZONE_URL = (
    f"https://management.azure.com/subscriptions/{SUBSCRIPTION}/resourceGroups/rg-dns"
    f"/providers/Microsoft.Network/dnsZones/example.com?api-version={DNS_API_VERSION}"
)


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    response.content = json.dumps(payload).encode() if payload is not None else b""
    response.json.return_value = payload
    response.text = json.dumps(payload) if payload is not None else ""
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return AzureNetworkClient(subscription_id=SUBSCRIPTION, token="Bearer test-token", session=session)


@pytest.fixture
def zone_wire(load_fixture):
    return load_fixture("dns_zone.json")


@pytest.mark.unit
class TestDnsZones:

    def test_create_zone(self, client, session, zone_wire):
        session.request.return_value = _response(payload=zone_wire)

        zone = client.create_zone("rg-dns", "example.com")

        args, kwargs = session.request.call_args
        assert args == ("PUT", ZONE_URL)
        assert kwargs["json"] == {"location": "global", "tags": {}, "properties": {}}

        assert isinstance(zone, DnsZone)
        assert zone.name == "example.com"
        assert zone.resource_group == "rg-dns"
        assert len(zone.name_servers) == 4

    def test_create_zone_error(self, client, session):
        session.request.return_value = _response(
            status_code=400,
            payload={"error": {"code": "BadRequest", "message": "Invalid zone name"}},
        )

        with pytest.raises(BoundaryError) as exc_info:
            client.create_zone("rg-dns", "bad..name")

        assert exc_info.value.resource == "dns_zone"
        assert exc_info.value.name == "bad..name"
        assert exc_info.value.message == "BadRequest: Invalid zone name"

    def test_get_zone(self, client, session, zone_wire):
        session.request.return_value = _response(payload=zone_wire)

        zone = client.get_zone("rg-dns", "example.com")

        assert session.request.call_args[0] == ("GET", ZONE_URL)
        assert zone.max_number_of_record_sets == 5000

    def test_list_zones(self, client, session, zone_wire):
        session.request.return_value = _response(payload={"value": [zone_wire, zone_wire]})

        zones = client.list_zones("rg-dns")

        assert [zone.name for zone in zones] == ["example.com", "example.com"]

    def test_list_zones_empty(self, client, session):
        session.request.return_value = _response(payload={})
        assert client.list_zones("rg-dns") == []

    def test_delete_zone(self, client, session):
        session.request.return_value = _response(status_code=200)

        client.delete_zone("rg-dns", "example.com")

        assert session.request.call_args[0] == ("DELETE", ZONE_URL)
