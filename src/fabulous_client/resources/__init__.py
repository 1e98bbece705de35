"""
API Resources

Groups of related registrar actions built on FabulousClient.request.
"""

from fabulous_client.resources.base import BaseResource
from fabulous_client.resources.dns import DNSResource
from fabulous_client.resources.domain import DomainResource

__all__ = ["BaseResource", "DNSResource", "DomainResource"]
