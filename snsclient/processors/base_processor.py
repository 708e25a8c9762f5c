import logging
from typing import Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


class BaseProcessor:
    """Shared plumbing for processors issuing SNS actions through an SNSApi."""
    def __init__(self, api):
        self.api = api

    def paginate(self, action, list_path, params: Optional[Dict[str, str]] = None) -> Tuple[List[Dict[str, str]], Optional[str]]:
        """
        Follows NextToken until exhausted.
        Returns all members under list_path and the request id of the last page.
        """
        params = dict(params or {})
        members = []
        request_id = None
        page = 0
        while True:
            page += 1
            parsed = self.api.call(action, dict(params))
            request_id = parsed.request_id
            members.extend(parsed.members(list_path))
            next_token = parsed.text('NextToken')
            if not next_token:
                break
            logger.info(f"{action} page {page} returned a NextToken, fetching next page")
            params['NextToken'] = next_token
        return members, request_id
