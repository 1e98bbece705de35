"""
DNS Resource

DNS record management for A, AAAA, CNAME, MX and TXT records.
"""

from typing import Any, Dict, List, Optional

from fabulous_client.models import (
    AAAARecord,
    ARecord,
    CNAMERecord,
    DNSRecord,
    MXRecord,
    TXTRecord,
)
from fabulous_client.resources.base import BaseResource

DEFAULT_TTL = 3600

RECORD_TYPES = ("A", "AAAA", "CNAME", "MX", "TXT")


def _update_params(domain_name: str, record_id: str, **fields: Any) -> Dict[str, Any]:
    """Parameters for an update action; only supplied fields are sent."""
    params: Dict[str, Any] = {"domain": domain_name, "recordId": record_id}
    for key, value in fields.items():
        if value is not None:
            params[key] = value
    return params


class DNSResource(BaseResource):
    """DNS record operations."""

    def list_records(self, domain_name: str, type: Optional[str] = None) -> List[DNSRecord]:
        """
        List all DNS records of a domain.

        Args:
            domain_name: Domain name
            type: Restrict to one record type (A, AAAA, CNAME, MX, TXT)
        """
        params: Dict[str, Any] = {"domain": domain_name}
        if type:
            params["type"] = type

        response = self.request("listDNSrecords", params)
        return list(response.data.dns_records or ())

    # -------------------------------------------------------------------------
    # MX Records
    # -------------------------------------------------------------------------

    def mx_records(self, domain_name: str) -> List[MXRecord]:
        response = self.request("getMXRecords", {"domain": domain_name})
        return list(response.data.mx_records or ())

    def add_mx_record(self, domain_name: str, hostname: str, priority: int, ttl: int = DEFAULT_TTL) -> bool:
        response = self.request("addMXRecord", {
            "domain": domain_name,
            "hostname": hostname,
            "priority": priority,
            "ttl": ttl,
        })
        return response.success

    def update_mx_record(
        self,
        domain_name: str,
        record_id: str,
        hostname: Optional[str] = None,
        priority: Optional[int] = None,
        ttl: Optional[int] = None,
    ) -> bool:
        params = _update_params(domain_name, record_id, hostname=hostname, priority=priority, ttl=ttl)
        return self.request("updateMXRecord", params).success

    def delete_mx_record(self, domain_name: str, record_id: str) -> bool:
        response = self.request("deleteMXRecord", {"domain": domain_name, "recordId": record_id})
        return response.success

    # -------------------------------------------------------------------------
    # CNAME Records
    # -------------------------------------------------------------------------

    def cname_records(self, domain_name: str) -> List[CNAMERecord]:
        response = self.request("getCNAMERecords", {"domain": domain_name})
        return list(response.data.cname_records or ())

    def add_cname_record(self, domain_name: str, alias_name: str, target: str, ttl: int = DEFAULT_TTL) -> bool:
        response = self.request("addCNAMERecord", {
            "domain": domain_name,
            "alias": alias_name,
            "target": target,
            "ttl": ttl,
        })
        return response.success

    def update_cname_record(
        self,
        domain_name: str,
        record_id: str,
        alias_name: Optional[str] = None,
        target: Optional[str] = None,
        ttl: Optional[int] = None,
    ) -> bool:
        params = _update_params(domain_name, record_id, alias=alias_name, target=target, ttl=ttl)
        return self.request("updateCNAMERecord", params).success

    def delete_cname_record(self, domain_name: str, record_id: str) -> bool:
        response = self.request("deleteCNAMERecord", {"domain": domain_name, "recordId": record_id})
        return response.success

    # -------------------------------------------------------------------------
    # A Records
    # -------------------------------------------------------------------------

    def a_records(self, domain_name: str) -> List[ARecord]:
        response = self.request("getARecords", {"domain": domain_name})
        return list(response.data.a_records or ())

    def add_a_record(self, domain_name: str, hostname: str, ip_address: str, ttl: int = DEFAULT_TTL) -> bool:
        response = self.request("addARecord", {
            "domain": domain_name,
            "hostname": hostname,
            "ipAddress": ip_address,
            "ttl": ttl,
        })
        return response.success

    def update_a_record(
        self,
        domain_name: str,
        record_id: str,
        hostname: Optional[str] = None,
        ip_address: Optional[str] = None,
        ttl: Optional[int] = None,
    ) -> bool:
        params = _update_params(domain_name, record_id, hostname=hostname, ipAddress=ip_address, ttl=ttl)
        return self.request("updateARecord", params).success

    def delete_a_record(self, domain_name: str, record_id: str) -> bool:
        response = self.request("deleteARecord", {"domain": domain_name, "recordId": record_id})
        return response.success

    # -------------------------------------------------------------------------
    # TXT Records
    # -------------------------------------------------------------------------

    def txt_records(self, domain_name: str) -> List[TXTRecord]:
        response = self.request("getTXTRecords", {"domain": domain_name})
        return list(response.data.txt_records or ())

    def add_txt_record(self, domain_name: str, hostname: str, text: str, ttl: int = DEFAULT_TTL) -> bool:
        response = self.request("addTXTRecord", {
            "domain": domain_name,
            "hostname": hostname,
            "text": text,
            "ttl": ttl,
        })
        return response.success

    def update_txt_record(
        self,
        domain_name: str,
        record_id: str,
        hostname: Optional[str] = None,
        text: Optional[str] = None,
        ttl: Optional[int] = None,
    ) -> bool:
        params = _update_params(domain_name, record_id, hostname=hostname, text=text, ttl=ttl)
        return self.request("updateTXTRecord", params).success

    def delete_txt_record(self, domain_name: str, record_id: str) -> bool:
        response = self.request("deleteTXTRecord", {"domain": domain_name, "recordId": record_id})
        return response.success

    # -------------------------------------------------------------------------
    # AAAA Records (IPv6)
    # -------------------------------------------------------------------------

    def aaaa_records(self, domain_name: str) -> List[AAAARecord]:
        response = self.request("getAAAARecords", {"domain": domain_name})
        return list(response.data.aaaa_records or ())

    def add_aaaa_record(self, domain_name: str, hostname: str, ipv6_address: str, ttl: int = DEFAULT_TTL) -> bool:
        response = self.request("addAAAARecord", {
            "domain": domain_name,
            "hostname": hostname,
            "ipv6Address": ipv6_address,
            "ttl": ttl,
        })
        return response.success

    def update_aaaa_record(
        self,
        domain_name: str,
        record_id: str,
        hostname: Optional[str] = None,
        ipv6_address: Optional[str] = None,
        ttl: Optional[int] = None,
    ) -> bool:
        params = _update_params(domain_name, record_id, hostname=hostname, ipv6Address=ipv6_address, ttl=ttl)
        return self.request("updateAAAARecord", params).success

    def delete_aaaa_record(self, domain_name: str, record_id: str) -> bool:
        response = self.request("deleteAAAARecord", {"domain": domain_name, "recordId": record_id})
        return response.success
