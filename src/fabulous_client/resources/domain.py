"""
Domain Resource

Domain listing, availability, registration and settings.
"""

from typing import Any, Dict, List, Optional

from fabulous_client.models import DomainInfo, DomainSummary, ParsedResponse
from fabulous_client.resources.base import BaseResource, PageHandler


def _nameserver_params(nameservers: List[str]) -> Dict[str, str]:
    """Nameservers as ns1, ns2, ... parameters."""
    return {f"ns{index}": ns for index, ns in enumerate(nameservers, start=1)}


class DomainResource(BaseResource):
    """Domain operations."""

    def list(self, page: Optional[int] = None) -> List[DomainSummary]:
        """
        List domains in the account.

        Args:
            page: Fetch only this page; all pages when omitted

        Returns:
            Domain summaries
        """
        if page is not None:
            response = self.request("listDomains", {"page": page})
            return self.extract_items(response)
        return self.all()

    def all(self) -> List[DomainSummary]:
        """List domains across all pages."""
        return self.paginate("listDomains")

    def each_page(self, handler: PageHandler, page: int = 1) -> None:
        """Stream domain list pages to handler(response, page_number)."""
        self.paginate_each("listDomains", handler, page=page)

    def check(self, domain_name: str) -> Optional[bool]:
        """
        Check domain availability.

        Returns:
            True if available, False if taken, None if the response
            carried no availability flag
        """
        response = self.request("checkDomain", {"domain": domain_name})
        return response.data.available

    def info(self, domain_name: str) -> Optional[DomainInfo]:
        """Get domain information."""
        response = self.request("domainInfo", {"domain": domain_name})
        return response.data.domain_info

    def register(
        self,
        domain_name: str,
        years: int = 1,
        nameservers: Optional[List[str]] = None,
        whois_privacy: bool = False,
        auto_renew: bool = False,
    ) -> bool:
        """
        Register a domain.

        Args:
            domain_name: Domain to register
            years: Registration period in years
            nameservers: Nameserver hostnames
            whois_privacy: Enable WHOIS privacy
            auto_renew: Enable automatic renewal
        """
        params: Dict[str, Any] = {
            "domain": domain_name,
            "years": years,
            "whoisPrivacy": whois_privacy,
            "autoRenew": auto_renew,
        }
        params.update(_nameserver_params(nameservers or []))

        return self.request("registerDomain", params).success

    def renew(self, domain_name: str, years: int = 1) -> bool:
        """Renew a domain."""
        return self.request("renewDomain", {"domain": domain_name, "years": years}).success

    def transfer_in(self, domain_name: str, auth_code: str) -> bool:
        """Request an incoming transfer."""
        response = self.request("transferIn", {"domain": domain_name, "authCode": auth_code})
        return response.success

    def set_nameservers(self, domain_name: str, nameservers: List[str]) -> bool:
        """Replace the nameservers of a domain."""
        params: Dict[str, Any] = {"domain": domain_name}
        params.update(_nameserver_params(nameservers))
        return self.request("setNameServers", params).success

    def get_nameservers(self, domain_name: str) -> Optional[List[str]]:
        """Nameservers from domain info."""
        info = self.info(domain_name)
        if info is None:
            return None
        return list(info.nameservers or ())

    def lock(self, domain_name: str) -> bool:
        return self.request("lockDomain", {"domain": domain_name}).success

    def unlock(self, domain_name: str) -> bool:
        return self.request("unlockDomain", {"domain": domain_name}).success

    def set_auto_renew(self, domain_name: str, enabled: bool = True) -> bool:
        response = self.request("setAutoRenew", {"domain": domain_name, "autoRenew": enabled})
        return response.success

    def enable_whois_privacy(self, domain_name: str) -> bool:
        return self.request("enableWhoisPrivacy", {"domain": domain_name}).success

    def disable_whois_privacy(self, domain_name: str) -> bool:
        return self.request("disableWhoisPrivacy", {"domain": domain_name}).success

    def extract_items(self, response: ParsedResponse) -> List[DomainSummary]:
        return list(response.data.domains or ())
