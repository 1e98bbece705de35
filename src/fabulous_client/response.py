"""
Fabulous XML Response Parser

Normalizes the registrar's XML responses into ParsedResponse objects.

The API answers in two families of document shapes: an older flat format
(``<domains><domain>...``, ``<pagecount>``, ``<response><status>``) and a
newer nested one (``<results count="N"><result>...``, ``<statusCode>``).
Both are accepted everywhere and mapped onto the same models.
"""

import logging
import math
import re
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from lxml import etree

from fabulous_client.exceptions import FabulousXMLError
from fabulous_client.models import (
    AAAARecord,
    ARecord,
    CNAMERecord,
    DNSRecord,
    DomainInfo,
    DomainSummary,
    GenericValue,
    MXRecord,
    PaginationInfo,
    ParsedResponse,
    ResponseData,
    TXTRecord,
)

logger = logging.getLogger("fabulous.response")

SUCCESS_CODE = 200

# Secure parsers. Text input is re-encoded as UTF-8, so its own encoding
# declaration must be ignored.
_parser = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    remove_blank_text=True,
)
_text_parser = etree.XMLParser(
    encoding="utf-8",
    resolve_entities=False,
    no_network=True,
    remove_blank_text=True,
)

_STATUS_TAG = re.compile("status", re.IGNORECASE)


# =============================================================================
# Helpers
# =============================================================================

def _parse_xml(xml_data: Union[bytes, str]) -> etree._Element:
    """Parse XML with secure parser."""
    parser = _parser
    if isinstance(xml_data, str):
        xml_data = xml_data.encode("utf-8")
        parser = _text_parser
    if not xml_data or not xml_data.strip():
        raise FabulousXMLError("Empty response body")
    try:
        return etree.fromstring(xml_data, parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise FabulousXMLError(f"XML parse error: {e}") from e


def _text(elem: etree._Element) -> str:
    """Full text content of an element, descendants included."""
    return "".join(elem.itertext())


def _local_name(elem: etree._Element) -> str:
    return etree.QName(elem).localname


def _element_children(elem: etree._Element) -> List[etree._Element]:
    """Child elements, skipping comments and processing instructions."""
    return [c for c in elem if isinstance(c.tag, str)]


def _find_text(elem: etree._Element, path: str) -> Optional[str]:
    """Text of the first node matching an XPath, or None."""
    found = elem.xpath(path)
    if found:
        return _text(found[0])
    return None


def _find_all_text(elem: etree._Element, path: str) -> List[str]:
    """Text of every node matching an XPath."""
    return [_text(e) for e in elem.xpath(path)]


def _find_text_tuple(elem: etree._Element, path: str) -> Optional[Tuple[str, ...]]:
    """Text of every node matching an XPath; None when nothing matches."""
    found = _find_all_text(elem, path)
    return tuple(found) if found else None


def _find_int(elem: etree._Element, path: str) -> Optional[int]:
    text = _find_text(elem, path)
    if text is None:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


def _find_flag(elem: etree._Element, path: str, true_value: str = "true") -> Optional[bool]:
    """Boolean from an element's text; None when the element is missing."""
    text = _find_text(elem, path)
    if text is None:
        return None
    return text == true_value


def _first_present(root: etree._Element, paths: Tuple[str, ...]) -> Optional[str]:
    """Text of the first path whose node exists and has non-empty text."""
    for path in paths:
        text = _find_text(root, path)
        if text is not None and text.strip():
            return text
    return None


# =============================================================================
# Row Extractors
# =============================================================================

def _parse_result_row(result: etree._Element) -> DomainSummary:
    # Newer format carries no status, renewal or lock data per row
    return DomainSummary(
        name=_find_text(result, "domain"),
        status="Active",
        expiry_date=_find_text(result, "exdate"),
    )


def _parse_domain_element(domain: etree._Element) -> DomainSummary:
    return DomainSummary(
        name=_find_text(domain, "name"),
        status=_find_text(domain, "status"),
        expiry_date=_find_text(domain, "expiryDate"),
        auto_renew=_find_flag(domain, "autoRenew"),
        locked=_find_flag(domain, "locked"),
    )


def _parse_dns_record(record: etree._Element) -> DNSRecord:
    return DNSRecord(
        id=_find_text(record, "id"),
        type=_find_text(record, "type"),
        name=_find_text(record, "name"),
        value=_find_text(record, "value"),
        ttl=_find_int(record, "ttl"),
        priority=_find_int(record, "priority"),
    )


def _parse_mx_record(record: etree._Element) -> MXRecord:
    return MXRecord(
        id=_find_text(record, "id"),
        hostname=_find_text(record, "hostname"),
        priority=_find_int(record, "priority"),
        ttl=_find_int(record, "ttl"),
    )


def _parse_cname_record(record: etree._Element) -> CNAMERecord:
    return CNAMERecord(
        id=_find_text(record, "id"),
        alias=_find_text(record, "alias"),
        target=_find_text(record, "target"),
        ttl=_find_int(record, "ttl"),
    )


def _parse_a_record(record: etree._Element) -> ARecord:
    return ARecord(
        id=_find_text(record, "id"),
        hostname=_find_text(record, "hostname"),
        ip_address=_find_text(record, "ipAddress"),
        ttl=_find_int(record, "ttl"),
    )


def _parse_aaaa_record(record: etree._Element) -> AAAARecord:
    return AAAARecord(
        id=_find_text(record, "id"),
        hostname=_find_text(record, "hostname"),
        ipv6_address=_find_text(record, "ipv6Address"),
        ttl=_find_int(record, "ttl"),
    )


def _parse_txt_record(record: etree._Element) -> TXTRecord:
    return TXTRecord(
        id=_find_text(record, "id"),
        hostname=_find_text(record, "hostname"),
        text=_find_text(record, "text"),
        ttl=_find_int(record, "ttl"),
    )


def _parse_domain_info(info: etree._Element) -> DomainInfo:
    return DomainInfo(
        name=_find_text(info, "name"),
        status=_find_text(info, "status"),
        creation_date=_find_text(info, "creationDate"),
        expiry_date=_find_text(info, "expiryDate"),
        nameservers=_find_text_tuple(info, "nameservers/nameserver"),
        auto_renew=_find_flag(info, "autoRenew"),
        locked=_find_flag(info, "locked"),
        whois_privacy=_find_flag(info, "whoisPrivacy"),
    )


def _parse_result_info(result: etree._Element) -> DomainInfo:
    """domainInfo as a single <result> row of the newer format."""
    status = _find_text(result, "fabstatus")
    registry_statuses = _find_all_text(result, "registrystatuss/registrystatus")

    return DomainInfo(
        name=_find_text(result, "domain"),
        status=status.capitalize() if status else "Active",
        expiry_date=_find_text(result, "expiry"),
        nameservers=_find_text_tuple(result, "nameserverss/nameservers"),
        auto_renew=_find_flag(result, "autorenewstatus", "1"),
        locked=any("Prohibited" in s for s in registry_statuses) if registry_statuses else None,
        whois_privacy=_find_flag(result, "whoisprivacyenabled", "1"),
    )


def _parse_bare_domain(domain: etree._Element) -> DomainInfo:
    return DomainInfo(status=_find_text(domain, "status") or "Active")


# =============================================================================
# Classification Rules
# =============================================================================

# Domain list shapes; first XPath with matches wins.
_DOMAIN_LIST_RULES: List[Tuple[str, Callable[[etree._Element], DomainSummary]]] = [
    ("//results/result", _parse_result_row),
    ("//response/domains/domain", _parse_domain_element),
    ("//domains/domain", _parse_domain_element),
    ("//domain", _parse_domain_element),
]

# Typed record lists; each is checked independently.
_RECORD_RULES: List[Tuple[str, str, Callable[[etree._Element], Any]]] = [
    ("dns_records", "//dnsrecord", _parse_dns_record),
    ("mx_records", "//mxrecord", _parse_mx_record),
    ("cname_records", "//cnamerecord", _parse_cname_record),
    ("a_records", "//arecord", _parse_a_record),
    ("aaaa_records", "//aaaarecord", _parse_aaaa_record),
    ("txt_records", "//txtrecord", _parse_txt_record),
]

# Domain info shapes; first XPath with a match wins.
_DOMAIN_INFO_RULES: List[Tuple[str, Callable[[etree._Element], DomainInfo]]] = [
    ("//domainInfo", _parse_domain_info),
    ("//results/result[expiry]", _parse_result_info),
    ("//domain", _parse_bare_domain),
]


class ResponseParser:
    """
    Parses registrar XML responses.

    All methods are static; ``parse`` is the single entry point used by the
    client for every action.
    """

    @staticmethod
    def parse(xml_data: Union[bytes, str]) -> ParsedResponse:
        """
        Parse one response document.

        Args:
            xml_data: Raw response body

        Returns:
            ParsedResponse

        Raises:
            FabulousXMLError: If the body is not well-formed XML
        """
        root = _parse_xml(xml_data)

        status_code = ResponseParser.parse_status_code(root)
        data = ResponseParser.parse_data(root)

        if isinstance(xml_data, bytes):
            raw_xml = xml_data.decode("utf-8", errors="replace")
        else:
            raw_xml = xml_data

        logger.debug(f"Parsed response: code={status_code} data={data.kinds}")

        return ParsedResponse(
            success=status_code == SUCCESS_CODE,
            status_code=status_code,
            status_message=ResponseParser.parse_status_message(root),
            data=data,
            pagination=ResponseParser.parse_pagination(root),
            raw_xml=raw_xml,
        )

    @staticmethod
    def parse_status_code(root: etree._Element) -> Optional[int]:
        """Numeric status from <statusCode> or <response><status>."""
        text = _first_present(root, ("//statusCode", "//response/status"))
        if text is None:
            return None
        try:
            return int(text.strip())
        except ValueError:
            logger.warning(f"Invalid status code in response: {text!r}")
            return None

    @staticmethod
    def parse_status_message(root: etree._Element) -> Optional[str]:
        """Status text from <statusText> or <response><reason>."""
        return _first_present(root, ("//statusText", "//response/reason"))

    @staticmethod
    def parse_pagination(root: etree._Element) -> Optional[PaginationInfo]:
        """
        Extract paging metadata.

        Two formats are recognised, in this order:
        - <pagecount> with an optional <page> (current page, default 1)
        - <results count="TOTAL"> compared with the number of <result> rows
          actually present in the document

        Returns:
            PaginationInfo, or None for a single implicit page
        """
        pagecount = root.xpath("//pagecount")
        if pagecount:
            page_count = _find_int(root, "//pagecount") or 0
            current_page = _find_int(root, "//page") or 1
            return PaginationInfo(
                current_page=current_page,
                page_count=page_count,
                has_more=page_count > current_page,
            )

        results = root.xpath("//results[@count]")
        if not results:
            return None

        try:
            total = int(results[0].get("count").strip())
        except ValueError:
            total = 0
        shown = len(root.xpath("//results/result"))
        current_page = _find_int(root, "//request/params/param[@name='page']") or 1

        if shown == 0:
            return PaginationInfo(current_page=current_page, page_count=1, has_more=False)

        return PaginationInfo(
            current_page=current_page,
            page_count=math.ceil(total / shown),
            has_more=total > shown,
        )

    @staticmethod
    def parse_data(root: etree._Element) -> ResponseData:
        """
        Classify the document payload.

        Domain lists, typed DNS records, domain info and availability are
        detected independently and merged into one ResponseData. Only when
        none of them matched is the generic decoding used.
        """
        payload: Dict[str, Any] = {}

        for path, extract in _DOMAIN_LIST_RULES:
            matches = root.xpath(path)
            if matches:
                payload["domains"] = tuple(extract(m) for m in matches)
                break

        for attr, path, extract in _RECORD_RULES:
            matches = root.xpath(path)
            if matches:
                payload[attr] = tuple(extract(m) for m in matches)

        for path, extract in _DOMAIN_INFO_RULES:
            matches = root.xpath(path)
            if matches:
                payload["domain_info"] = extract(matches[0])
                break

        availability = _find_text(root, "//availability")
        if availability is not None:
            payload["available"] = availability == "true"

        if not payload:
            payload["generic"] = ResponseParser.parse_generic(root)

        return ResponseData(**payload)

    @staticmethod
    def parse_generic(root: etree._Element) -> Dict[str, GenericValue]:
        """
        Decode the root's children into a plain mapping.

        Elements whose name contains "status" are skipped. A child with
        several child elements is decoded recursively, anything else becomes
        its text.
        """
        result: Dict[str, GenericValue] = {}
        for child in root:
            if not isinstance(child.tag, str):
                continue
            name = _local_name(child)
            if _STATUS_TAG.search(name):
                continue

            if len(_element_children(child)) > 1:
                value = ResponseParser._parse_element(child)
            else:
                value = _text(child)
            _add_value(result, name, value)
        return result

    @staticmethod
    def _parse_element(elem: etree._Element) -> GenericValue:
        children = _element_children(elem)
        if not children:
            return _text(elem)

        result: Dict[str, GenericValue] = {}
        for child in children:
            _add_value(result, _local_name(child), ResponseParser._parse_element(child))
        return result


def _add_value(result: Dict[str, GenericValue], name: str, value: GenericValue) -> None:
    """Store value under name; repeated names collapse into a list."""
    if name not in result:
        result[name] = value
    elif isinstance(result[name], list):
        result[name].append(value)
    else:
        result[name] = [result[name], value]


def parse_response(xml_data: Union[bytes, str]) -> ParsedResponse:
    """Shortcut for ResponseParser.parse."""
    return ResponseParser.parse(xml_data)
