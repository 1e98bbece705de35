"""
Fabulous Client Models

Data classes for parsed API responses.

Records are frozen and list-valued fields are tuples. Fields that are missing
from the source document are left as None and are dropped by ``to_dict()``;
a None field and an absent field mean the same thing.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Optional, Tuple, Union


def _compact(value: Any) -> Any:
    """Convert dataclasses to dicts, dropping None fields."""
    if hasattr(value, "__dataclass_fields__"):
        return {
            f.name: _compact(getattr(value, f.name))
            for f in fields(value)
            if getattr(value, f.name) is not None
        }
    if isinstance(value, (list, tuple)):
        return [_compact(v) for v in value]
    if isinstance(value, dict):
        return {k: _compact(v) for k, v in value.items()}
    return value


class _Record:
    """Mixin giving records a compact dict view."""

    def to_dict(self) -> Dict[str, Any]:
        return _compact(self)


# =============================================================================
# Domain Models
# =============================================================================

@dataclass(frozen=True)
class DomainSummary(_Record):
    """One row of a domain listing."""
    name: Optional[str] = None
    status: Optional[str] = None
    expiry_date: Optional[str] = None  # Not validated
    auto_renew: Optional[bool] = None
    locked: Optional[bool] = None


@dataclass(frozen=True)
class DomainInfo(_Record):
    """Detailed information about a single domain."""
    name: Optional[str] = None
    status: Optional[str] = None
    creation_date: Optional[str] = None
    expiry_date: Optional[str] = None
    nameservers: Optional[Tuple[str, ...]] = None
    auto_renew: Optional[bool] = None
    locked: Optional[bool] = None
    whois_privacy: Optional[bool] = None


# =============================================================================
# DNS Models
# =============================================================================

@dataclass(frozen=True)
class DNSRecord(_Record):
    """Generic DNS record as returned by listDNSrecords."""
    id: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None
    value: Optional[str] = None
    ttl: Optional[int] = None
    priority: Optional[int] = None


@dataclass(frozen=True)
class MXRecord(_Record):
    """MX record."""
    id: Optional[str] = None
    hostname: Optional[str] = None
    priority: Optional[int] = None
    ttl: Optional[int] = None


@dataclass(frozen=True)
class CNAMERecord(_Record):
    """CNAME record."""
    id: Optional[str] = None
    alias: Optional[str] = None
    target: Optional[str] = None
    ttl: Optional[int] = None


@dataclass(frozen=True)
class ARecord(_Record):
    """A (IPv4) record."""
    id: Optional[str] = None
    hostname: Optional[str] = None
    ip_address: Optional[str] = None
    ttl: Optional[int] = None


@dataclass(frozen=True)
class AAAARecord(_Record):
    """AAAA (IPv6) record."""
    id: Optional[str] = None
    hostname: Optional[str] = None
    ipv6_address: Optional[str] = None
    ttl: Optional[int] = None


@dataclass(frozen=True)
class TXTRecord(_Record):
    """TXT record."""
    id: Optional[str] = None
    hostname: Optional[str] = None
    text: Optional[str] = None
    ttl: Optional[int] = None


TypedRecord = Union[MXRecord, CNAMERecord, ARecord, AAAARecord, TXTRecord]

# Generic fallback values: text, nested mapping, or repeated children
GenericValue = Union[str, Dict[str, Any], List[Any]]


# =============================================================================
# Response Models
# =============================================================================

@dataclass(frozen=True)
class PaginationInfo(_Record):
    """Paging metadata for one response."""
    current_page: int
    page_count: int
    has_more: bool


@dataclass(frozen=True)
class ResponseData(_Record):
    """
    Payload extracted from one response document.

    Several fields may be populated at once: a document can carry a domain
    list, typed DNS records, domain info and an availability flag together.
    ``generic`` is only set when no other field was recognised.
    """
    domains: Optional[Tuple[DomainSummary, ...]] = None
    dns_records: Optional[Tuple[DNSRecord, ...]] = None
    mx_records: Optional[Tuple[MXRecord, ...]] = None
    cname_records: Optional[Tuple[CNAMERecord, ...]] = None
    a_records: Optional[Tuple[ARecord, ...]] = None
    aaaa_records: Optional[Tuple[AAAARecord, ...]] = None
    txt_records: Optional[Tuple[TXTRecord, ...]] = None
    domain_info: Optional[DomainInfo] = None
    available: Optional[bool] = None
    generic: Optional[Dict[str, GenericValue]] = None

    @property
    def kinds(self) -> List[str]:
        """Names of the populated payload fields, in declaration order."""
        return [f.name for f in fields(self) if getattr(self, f.name) is not None]

    @property
    def is_empty(self) -> bool:
        return not self.kinds


@dataclass(frozen=True)
class ParsedResponse:
    """Normalized API response."""
    success: bool
    status_code: Optional[int] = None
    status_message: Optional[str] = None
    data: ResponseData = field(default_factory=ResponseData)
    pagination: Optional[PaginationInfo] = None
    raw_xml: Optional[str] = None

    @property
    def paginated(self) -> bool:
        """True when the server reports further pages."""
        return self.pagination is not None and self.pagination.has_more

    @property
    def page_count(self) -> int:
        return self.pagination.page_count if self.pagination else 1

    @property
    def current_page(self) -> int:
        return self.pagination.current_page if self.pagination else 1
