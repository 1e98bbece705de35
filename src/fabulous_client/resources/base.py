"""
Base Resource

Shared request and pagination helpers for API resources.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from fabulous_client.models import ParsedResponse

if TYPE_CHECKING:
    from fabulous_client.client import FabulousClient

logger = logging.getLogger("fabulous.resources")

PageHandler = Callable[[ParsedResponse, int], None]
ItemExtractor = Callable[[ParsedResponse], List[Any]]


class BaseResource:
    """
    Base class for API resources.

    Subclasses group related actions and override ``extract_items`` to pick
    the list that pagination accumulates.
    """

    def __init__(self, client: "FabulousClient"):
        self.client = client

    def request(self, action: str, params: Optional[Dict[str, Any]] = None) -> ParsedResponse:
        """Perform one action through the client."""
        return self.client.request(action, params or {})

    def paginate(
        self,
        action: str,
        params: Optional[Dict[str, Any]] = None,
        page: int = 1,
        extract: Optional[ItemExtractor] = None,
    ) -> List[Any]:
        """
        Fetch every page of an action and collect the items.

        Args:
            action: Remote action name
            params: Base parameters (not modified)
            page: First page to fetch
            extract: Item extractor (defaults to ``extract_items``)

        Returns:
            Items of all pages, in page order

        Raises:
            FabulousError: From any page; nothing is returned in that case
        """
        extract = extract or self.extract_items
        items: List[Any] = []

        def collect(response: ParsedResponse, current: int) -> None:
            items.extend(extract(response))

        self.paginate_each(action, collect, params=params, page=page)
        return items

    def paginate_each(
        self,
        action: str,
        handler: PageHandler,
        params: Optional[Dict[str, Any]] = None,
        page: int = 1,
    ) -> None:
        """
        Fetch every page of an action, passing each to a handler.

        Pages are requested one at a time. The loop ends on the first page
        that reports no further pages, or once the reported page count has
        been reached. There is no page cap.

        Args:
            action: Remote action name
            handler: Called as handler(response, page_number) for each page
            params: Base parameters (not modified)
            page: First page to fetch
        """
        base_params = dict(params or {})

        while True:
            logger.debug(f"Fetching {action} page {page}")
            response = self.request(action, {**base_params, "page": page})
            handler(response, page)

            if not response.paginated or page >= response.page_count:
                break
            page += 1

    def extract_items(self, response: ParsedResponse) -> List[Any]:
        """Default item extractor: the first populated payload list."""
        data = response.data
        for kind in data.kinds:
            value = getattr(data, kind)
            if isinstance(value, tuple):
                return list(value)
        return []
