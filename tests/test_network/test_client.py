"""
Тесты AzureNetworkClient: балансировщики.

HTTP сессия заменена MagicMock, проверяются URL, тело запроса,
заголовок авторизации и обработка ошибок Azure API.
"""

import json
import time
from unittest.mock import MagicMock, patch

import pytest
import requests

from azure_network.core.config_schema import validate_config
from azure_network.core.credentials import AzureCredentials
from azure_network.core.exceptions import BoundaryError, PreconditionError
from azure_network.core.models import LoadBalancer, LoadBalancerState, Probe
from azure_network.network import AzureNetworkClient, LoadBalancerLifecycle
from azure_network.network.client.load_balancers import (
    LOAD_BALANCER_API_VERSION,
    build_load_balancer_body,
)

SUBSCRIPTION = "00000000-0000-0000-0000-000000000000"
LB_URL = (
    f"https://management.azure.com/subscriptions/{SUBSCRIPTION}/resourceGroups/rg-prod"
    f"/providers/Microsoft.Network/loadBalancers/lb-web?api-version={LOAD_BALANCER_API_VERSION}"
)


def _response(status_code=200, payload=None):
    response = MagicMock()
    response.status_code = status_code
    if payload is None:
        response.content = b""
        response.json.side_effect = ValueError("No JSON")
        response.text = ""
    else:
        response.content = json.dumps(payload).encode()
        response.json.return_value = payload
        response.text = json.dumps(payload)
    return response


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session):
    return AzureNetworkClient(subscription_id=SUBSCRIPTION, token="Bearer test-token", session=session)


@pytest.mark.unit
class TestClientInit:

    def test_requires_subscription(self):
        with pytest.raises(ValueError):
            AzureNetworkClient(subscription_id="", token="Bearer t", session=MagicMock())

    def test_requires_auth(self):
        with pytest.raises(ValueError):
            AzureNetworkClient(subscription_id=SUBSCRIPTION, session=MagicMock())

    def test_session_settings(self, session):
        AzureNetworkClient(subscription_id=SUBSCRIPTION, token="Bearer t", verify_ssl=False, session=session)

        assert session.verify is False
        session.headers.update.assert_called_once_with(
            {"Accept": "application/json", "Content-Type": "application/json"}
        )

    def test_from_config(self):
        config = validate_config({
            "azure": {
                "tenant_id": "tenant",
                "client_id": "client",
                "client_secret": "secret",
                "subscription_id": SUBSCRIPTION,
                "resource_url": "https://management.example.com/",
                "timeout": 45,
            }
        })
        client = AzureNetworkClient.from_config(config)

        assert client.subscription_id == SUBSCRIPTION
        assert client.resource_url == "https://management.example.com"
        assert client.timeout == 45
        assert client._credentials == AzureCredentials("tenant", "client", "secret")

    def test_from_config_token_authority(self):
        """Токен запрашивается у authority и для resource из конфигурации."""
        config = validate_config({
            "azure": {
                "tenant_id": "t",
                "client_id": "c",
                "client_secret": "s",
                "subscription_id": SUBSCRIPTION,
                "authority_url": "https://login.microsoftonline.us",
                "resource_url": "https://management.usgovcloudapi.net",
            }
        })
        client = AzureNetworkClient.from_config(config)
        token_response = MagicMock()
        token_response.status_code = 200
        token_response.json.return_value = {"access_token": "gov", "expires_on": str(int(time.time()) + 3600)}

        with patch("azure_network.core.credentials.requests.Session") as session_cls:
            session_cls.return_value.post.return_value = token_response
            token = client._authorization()

        assert token == "Bearer gov"
        args, kwargs = session_cls.return_value.post.call_args
        assert args[0] == "https://login.microsoftonline.us/t/oauth2/token"
        assert kwargs["data"]["resource"] == "https://management.usgovcloudapi.net/"

    def test_token_from_credentials(self, session):
        session.request.return_value = _response(payload={"value": []})
        creds = AzureCredentials("tenant", "client", "secret")
        client = AzureNetworkClient(subscription_id=SUBSCRIPTION, credentials=creds, session=session)

        with patch("azure_network.network.client.base.get_token", return_value="Bearer from-ad") as get_token:
            client.list_load_balancers("rg-prod")

        get_token.assert_called_once_with(creds)
        assert session.request.call_args[1]["headers"] == {"Authorization": "Bearer from-ad"}


@pytest.mark.unit
class TestBuildBody:

    def test_absent_collections_omitted(self):
        body = build_load_balancer_body("westeurope", probes=[])

        assert body == {"location": "westeurope", "tags": {}, "properties": {"probes": []}}

    def test_pools_sorted(self):
        body = build_load_balancer_body("westeurope", backend_address_pool_names={"b", "a"})
        assert body["properties"]["backendAddressPools"] == [{"name": "a"}, {"name": "b"}]

    def test_records_and_dicts(self):
        body = build_load_balancer_body(
            "westeurope",
            probes=[
                Probe(name="p1", protocol="http", port=80),
                {"name": "p2", "protocol": "tcp", "port": 22},
            ],
        )
        probes = body["properties"]["probes"]

        assert probes[0] == {"name": "p1", "properties": {"protocol": "Http", "port": 80}}
        assert probes[1] == {"name": "p2", "properties": {"protocol": "Tcp", "port": 22}}

    def test_nat_pools_key(self):
        body = build_load_balancer_body("westeurope", inbound_nat_pools=[{"name": "rdp"}])

        assert "inboundNatPools" in body["properties"]
        assert "inboundNatRules" not in body["properties"]

    def test_bad_record(self):
        with pytest.raises(TypeError):
            build_load_balancer_body("westeurope", probes=["probe-http"])


@pytest.mark.unit
class TestLoadBalancers:

    def test_create(self, client, session, lb_wire):
        session.request.return_value = _response(payload=lb_wire)

        response = client.create_load_balancer(
            "lb-web",
            "westeurope",
            "rg-prod",
            probes=[Probe(name="probe-http", protocol="http", port=8080)],
            backend_address_pool_names={"pool-web"},
        )

        assert response == lb_wire
        args, kwargs = session.request.call_args
        assert args == ("PUT", LB_URL)
        assert kwargs["headers"] == {"Authorization": "Bearer test-token"}
        assert kwargs["timeout"] == 30
        assert kwargs["json"]["location"] == "westeurope"
        assert kwargs["json"]["properties"]["backendAddressPools"] == [{"name": "pool-web"}]
        assert "loadBalancingRules" not in kwargs["json"]["properties"]

    def test_create_conflict(self, client, session):
        session.request.return_value = _response(
            status_code=409,
            payload={"error": {"code": "InUseSubnetCannotBeDeleted", "message": "Subnet is in use"}},
        )

        with pytest.raises(BoundaryError) as exc_info:
            client.create_load_balancer("lb-web", "westeurope", "rg-prod")

        error = exc_info.value
        assert error.message == "InUseSubnetCannotBeDeleted: Subnet is in use"
        assert error.status_code == 409
        assert error.url == LB_URL
        assert error.resource == "load_balancer"
        assert error.name == "lb-web"
        assert error.resource_group == "rg-prod"

    def test_network_error(self, client, session):
        session.request.side_effect = requests.ConnectionError("refused")

        with pytest.raises(BoundaryError) as exc_info:
            client.create_load_balancer("lb-web", "westeurope", "rg-prod")

        assert isinstance(exc_info.value.__cause__, requests.ConnectionError)
        assert exc_info.value.name == "lb-web"

    def test_non_json_response(self, client, session):
        response = _response(payload={})
        response.content = b"<html>"
        response.json.side_effect = ValueError("No JSON")
        session.request.return_value = response

        with pytest.raises(BoundaryError):
            client.get_load_balancer("rg-prod", "lb-web")

    def test_delete(self, client, session):
        session.request.return_value = _response(status_code=202)

        assert client.delete_load_balancer("rg-prod", "lb-web") is None
        args, kwargs = session.request.call_args
        assert args == ("DELETE", LB_URL)
        assert kwargs["json"] is None

    def test_get(self, client, session, lb_wire):
        session.request.return_value = _response(payload=lb_wire)

        assert client.get_load_balancer("rg-prod", "lb-web") == lb_wire
        assert session.request.call_args[0] == ("GET", LB_URL)

    def test_list(self, client, session, lb_wire):
        session.request.return_value = _response(payload={"value": [lb_wire]})

        result = client.list_load_balancers("rg-prod")

        assert result == [lb_wire]
        url = session.request.call_args[0][1]
        assert url.endswith(f"/loadBalancers?api-version={LOAD_BALANCER_API_VERSION}")

    def test_list_error_context(self, client, session):
        session.request.return_value = _response(status_code=404, payload={"error": {"code": "ResourceGroupNotFound", "message": "x"}})

        with pytest.raises(BoundaryError) as exc_info:
            client.list_load_balancers("rg-absent")

        assert exc_info.value.resource_group == "rg-absent"
        assert exc_info.value.name is None


@pytest.mark.integration
class TestLifecycleWithClient:
    """LoadBalancerLifecycle поверх настоящего клиента с mock сессией."""

    def test_save_and_destroy(self, client, session, lb_data, lb_wire):
        session.request.return_value = _response(payload=lb_wire)
        lifecycle = LoadBalancerLifecycle(client)

        lb = LoadBalancer.from_dict(lb_data)
        lifecycle.save(lb)

        method, url = session.request.call_args[0]
        body = session.request.call_args[1]["json"]
        assert (method, url) == ("PUT", LB_URL)
        assert [fe["name"] for fe in body["properties"]["frontendIPConfigurations"]] == ["fe-public"]
        assert body["properties"]["inboundNatPools"][0]["properties"]["frontendPortRangeStart"] == 50100
        assert lb.state == LoadBalancerState.PERSISTED

        session.request.return_value = _response(status_code=200)
        lifecycle.destroy(lb)

        assert session.request.call_args[0] == ("DELETE", LB_URL)
        assert lb.state == LoadBalancerState.DELETED

    def test_save_invalid_makes_no_request(self, client, session):
        lifecycle = LoadBalancerLifecycle(client)

        with pytest.raises(PreconditionError):
            lifecycle.save(LoadBalancer(name="lb-web", location="westeurope"))

        session.request.assert_not_called()
