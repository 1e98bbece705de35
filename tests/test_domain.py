"""Tests for DomainResource."""

import pytest

from conftest import xml_response
from fabulous_client.exceptions import FabulousRequestError


DOMAINS_XML = """
<domains>
  <domain>
    <name>example1.com</name>
    <status>Active</status>
    <expiryDate>2024-12-31</expiryDate>
    <autoRenew>true</autoRenew>
    <locked>false</locked>
  </domain>
  <domain>
    <name>example2.com</name>
    <status>Active</status>
    <expiryDate>2025-01-15</expiryDate>
    <autoRenew>false</autoRenew>
    <locked>true</locked>
  </domain>
</domains>
"""

DOMAIN_INFO_XML = """
<domainInfo>
  <name>example.com</name>
  <status>Active</status>
  <creationDate>2020-01-01</creationDate>
  <expiryDate>2025-01-01</expiryDate>
  <nameservers>
    <nameserver>ns1.example.com</nameserver>
    <nameserver>ns2.example.com</nameserver>
  </nameservers>
  <autoRenew>true</autoRenew>
  <locked>false</locked>
  <whoisPrivacy>true</whoisPrivacy>
</domainInfo>
"""


class TestList:

    def test_single_page(self, client, api):
        api.add("listDomains", xml_response(200, "Success", DOMAINS_XML))

        domains = client.domains.list(page=1)

        assert [d.name for d in domains] == ["example1.com", "example2.com"]
        assert api.params[0]["page"] == "1"
        assert len(api.requests) == 1

    def test_single_page_does_not_follow(self, client, api):
        api.add("listDomains", xml_response(
            200, "Success", DOMAINS_XML + "<pagecount>4</pagecount><page>2</page>",
        ))

        domains = client.domains.list(page=2)

        assert len(domains) == 2
        assert len(api.requests) == 1

    def test_without_page_fetches_all(self, client, api):
        def responder(params):
            page = params["page"]
            return xml_response(
                200, "Success",
                f"<domains><domain><name>domain{page}.com</name></domain></domains>"
                f"<pagecount>2</pagecount><page>{page}</page>",
            )
        api.add("listDomains", responder)

        domains = client.domains.list()

        assert [d.name for d in domains] == ["domain1.com", "domain2.com"]

    def test_empty_listing(self, client, api):
        api.add("listDomains", xml_response(200, "Success"))

        assert client.domains.list(page=1) == []


class TestCheck:

    @pytest.mark.parametrize("text,expected", [("true", True), ("false", False)])
    def test_availability(self, client, api, text, expected):
        api.add("checkDomain", xml_response(200, "Success", f"<availability>{text}</availability>"))

        assert client.domains.check("some.com") is expected
        assert api.params[0]["domain"] == "some.com"

    def test_no_availability_flag(self, client, api):
        api.add("checkDomain", xml_response(200, "Success"))

        assert client.domains.check("some.com") is None


class TestInfo:

    def test_info(self, client, api):
        api.add("domainInfo", xml_response(200, "Success", DOMAIN_INFO_XML))

        info = client.domains.info("example.com")

        assert info.name == "example.com"
        assert info.status == "Active"
        assert info.nameservers == ("ns1.example.com", "ns2.example.com")
        assert info.auto_renew is True
        assert info.locked is False

    def test_info_missing(self, client, api):
        api.add("domainInfo", xml_response(200, "Success"))

        assert client.domains.info("example.com") is None

    def test_get_nameservers(self, client, api):
        api.add("domainInfo", xml_response(200, "Success", DOMAIN_INFO_XML))

        assert client.domains.get_nameservers("example.com") == ["ns1.example.com", "ns2.example.com"]

    def test_get_nameservers_without_info(self, client, api):
        api.add("domainInfo", xml_response(200, "Success"))

        assert client.domains.get_nameservers("example.com") is None


class TestChanges:

    def test_register(self, client, api):
        api.add("registerDomain", xml_response(200, "Success"))

        result = client.domains.register(
            "newdomain.com",
            years=2,
            nameservers=["ns1.example.com", "ns2.example.com"],
            whois_privacy=True,
            auto_renew=False,
        )

        assert result is True
        params = api.params[0]
        assert params["domain"] == "newdomain.com"
        assert params["years"] == "2"
        assert params["ns1"] == "ns1.example.com"
        assert params["ns2"] == "ns2.example.com"
        assert params["whoisPrivacy"] == "true"
        assert params["autoRenew"] == "false"

    def test_register_defaults(self, client, api):
        api.add("registerDomain", xml_response(200, "Success"))

        client.domains.register("newdomain.com")

        params = api.params[0]
        assert params["years"] == "1"
        assert "ns1" not in params

    def test_register_rejected(self, client, api):
        api.add("registerDomain", xml_response(409, "Domain not available"))

        with pytest.raises(FabulousRequestError, match="Domain not available"):
            client.domains.register("taken.com")

    def test_set_nameservers(self, client, api):
        api.add("setNameServers", xml_response(200, "Success"))

        result = client.domains.set_nameservers("example.com", ["ns1.new.com", "ns2.new.com", "ns3.new.com"])

        assert result is True
        params = api.params[0]
        assert [params["ns1"], params["ns2"], params["ns3"]] == ["ns1.new.com", "ns2.new.com", "ns3.new.com"]

    @pytest.mark.parametrize("method,action", [
        ("lock", "lockDomain"),
        ("unlock", "unlockDomain"),
        ("enable_whois_privacy", "enableWhoisPrivacy"),
        ("disable_whois_privacy", "disableWhoisPrivacy"),
    ])
    def test_simple_actions(self, client, api, method, action):
        api.add(action, xml_response(200, "Success"))

        assert getattr(client.domains, method)("example.com") is True
        assert api.requests[0].url.path == f"/{action}"
        assert api.params[0]["domain"] == "example.com"

    def test_renew(self, client, api):
        api.add("renewDomain", xml_response(200, "Success"))

        assert client.domains.renew("example.com", years=3) is True
        assert api.params[0]["years"] == "3"

    def test_transfer_in(self, client, api):
        api.add("transferIn", xml_response(200, "Success"))

        assert client.domains.transfer_in("example.com", "EPP-CODE") is True
        assert api.params[0]["authCode"] == "EPP-CODE"

    @pytest.mark.parametrize("enabled,sent", [(True, "true"), (False, "false")])
    def test_set_auto_renew(self, client, api, enabled, sent):
        api.add("setAutoRenew", xml_response(200, "Success"))

        assert client.domains.set_auto_renew("example.com", enabled=enabled) is True
        assert api.params[0]["autoRenew"] == sent
