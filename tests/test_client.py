"""Tests for FabulousClient: configuration, transport and error mapping."""

import logging

import httpx
import pytest

from conftest import BASE_URL, xml_response
from fabulous_client import Configuration, FabulousClient
from fabulous_client.client import RATE_LIMIT_MESSAGE
from fabulous_client.exceptions import (
    FabulousAuthenticationError,
    FabulousConfigurationError,
    FabulousError,
    FabulousRateLimitError,
    FabulousRequestError,
    FabulousResponseError,
    FabulousTimeoutError,
    FabulousXMLError,
)
from fabulous_client.resources import DNSResource, DomainResource


def client_raising(exc_factory):
    def handler(request):
        raise exc_factory(request)
    config = Configuration(username="u", password="p", base_url=BASE_URL)
    return FabulousClient(config, transport=httpx.MockTransport(handler))


class TestConfiguration:

    def test_stores_configuration(self, client):
        assert client.configuration.username == "test_user"
        assert client.configuration.password == "test_pass"

    def test_missing_username(self):
        with pytest.raises(FabulousConfigurationError, match="Username and password are required"):
            FabulousClient(Configuration(password="pass"))

    def test_missing_password(self):
        with pytest.raises(FabulousConfigurationError, match="Username and password are required"):
            FabulousClient(Configuration(username="user"))

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("FABULOUS_USERNAME", "env_user")
        monkeypatch.setenv("FABULOUS_PASSWORD", "env_pass")
        monkeypatch.delenv("FABULOUS_BASE_URL", raising=False)

        config = Configuration.from_env()

        assert config.username == "env_user"
        assert config.password == "env_pass"
        assert config.base_url == "https://api.fabulous.com"
        assert config.is_valid()

    def test_defaults(self):
        config = Configuration()
        assert config.timeout == 30.0
        assert config.open_timeout == 10.0
        assert not config.is_valid()

    def test_clients_do_not_share_state(self, configuration):
        other = Configuration(username="other", password="secret", base_url=BASE_URL)
        first = FabulousClient(configuration)
        second = FabulousClient(other)
        assert first.configuration is not second.configuration
        assert first.domains is not second.domains
        first.close()
        second.close()


class TestResources:

    def test_domains_resource(self, client):
        assert isinstance(client.domains, DomainResource)
        assert client.domains is client.domains

    def test_dns_resource(self, client):
        assert isinstance(client.dns, DNSResource)
        assert client.dns is client.dns


class TestRequest:

    def test_successful_request(self, client, api):
        api.add("testAction", xml_response(200, "Success"))

        response = client.request("testAction")

        assert response.success is True
        request = api.requests[0]
        assert request.method == "GET"
        assert str(request.url).startswith(f"{BASE_URL}/testAction?")
        assert request.url.params["username"] == "test_user"
        assert request.url.params["password"] == "test_pass"

    def test_params_encoded(self, client, api):
        api.add("registerDomain", xml_response(200, "Success"))

        client.request("registerDomain", {"domain": "x.com", "years": 2, "autoRenew": True})

        params = api.params[0]
        assert params["domain"] == "x.com"
        assert params["years"] == "2"
        assert params["autoRenew"] == "true"
        assert "action" not in params

    def test_password_not_logged(self, client, api, caplog):
        api.add("testAction", xml_response(200, "Success"))

        with caplog.at_level(logging.DEBUG, logger="fabulous.client"):
            client.request("testAction")

        assert "test_pass" not in caplog.text
        assert "testAction" in caplog.text


class TestErrorMapping:

    @pytest.mark.parametrize("code,exc,message", [
        (301, FabulousAuthenticationError, "Invalid credentials"),
        (399, FabulousAuthenticationError, "Expired"),
        (400, FabulousRequestError, "Bad request"),
        (404, FabulousRequestError, "Not found"),
        (500, FabulousResponseError, "Internal server error"),
        (503, FabulousResponseError, "Unavailable"),
    ])
    def test_status_ranges(self, client, api, code, exc, message):
        api.add("testAction", xml_response(code, message))

        with pytest.raises(exc, match=message) as info:
            client.request("testAction")
        assert info.value.code == code

    def test_default_messages(self, client, api):
        api.add("testAction", "<response><statusCode>301</statusCode></response>")

        with pytest.raises(FabulousAuthenticationError, match="Authentication failed"):
            client.request("testAction")

    def test_rate_limit(self, client, api):
        api.add("testAction", xml_response(689, "whatever the server says"))

        with pytest.raises(FabulousRateLimitError) as info:
            client.request("testAction")
        assert str(info.value) == RATE_LIMIT_MESSAGE

    def test_unknown_code(self, client, api):
        api.add("testAction", xml_response(999, "Strange"))

        with pytest.raises(FabulousError, match=r"Unknown error: Strange \(code: 999\)") as info:
            client.request("testAction")
        assert type(info.value) is FabulousError
        assert info.value.code == 999

    def test_missing_status_is_error(self, client, api):
        api.add("testAction", "<response><availability>true</availability></response>")

        with pytest.raises(FabulousError, match="Unknown error") as info:
            client.request("testAction")
        assert info.value.code is None

    def test_non_200_success_range_is_error(self, client, api):
        api.add("testAction", xml_response(201, "Created"))

        with pytest.raises(FabulousError):
            client.request("testAction")

    def test_malformed_body(self, client, api):
        api.add("testAction", "<response><statusCode>200")

        with pytest.raises(FabulousXMLError):
            client.request("testAction")


class TestTransportErrors:

    def test_timeout(self):
        client = client_raising(lambda request: httpx.ReadTimeout("read timed out", request=request))

        with pytest.raises(FabulousTimeoutError, match="Request timed out"):
            client.request("listDomains")

    def test_connect_timeout(self):
        client = client_raising(lambda request: httpx.ConnectTimeout("connect", request=request))

        with pytest.raises(FabulousTimeoutError):
            client.request("listDomains")

    def test_timeout_shaped_message(self):
        client = client_raising(lambda request: httpx.RemoteProtocolError("session expired", request=request))

        with pytest.raises(FabulousTimeoutError):
            client.request("listDomains")

    def test_connection_failure(self):
        client = client_raising(lambda request: httpx.ConnectError("Connection refused", request=request))

        with pytest.raises(FabulousRequestError, match="Request failed: Connection refused") as info:
            client.request("listDomains")
        assert isinstance(info.value.__cause__, httpx.ConnectError)
