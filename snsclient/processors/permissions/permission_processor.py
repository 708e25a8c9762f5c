import logging
from typing import List
from snsclient.processors.base_processor import BaseProcessor
from snsclient.models.params import build, AddPermissionParams, RemovePermissionParams
from snsclient.models.results import BooleanResult

logger = logging.getLogger(__name__)


class PermissionProcessor(BaseProcessor):
    """Grants and revokes cross-account access to a topic."""

    def add_permission(self, topic, label, account_ids: List[str], actions: List[str]) -> BooleanResult:
        if isinstance(account_ids, str):
            account_ids = [account_ids]
        if isinstance(actions, str):
            actions = [actions]
        params = build(
            AddPermissionParams,
            topic_arn=topic,
            label=label,
            account_ids=account_ids,
            actions=actions
        )
        logger.info(f"Adding permission '{label}' on {topic} for {len(params.account_ids)} accounts")
        parsed = self.api.call('AddPermission', params.to_query())
        return BooleanResult(request_id=parsed.request_id)

    def remove_permission(self, topic, label) -> BooleanResult:
        params = build(RemovePermissionParams, topic_arn=topic, label=label)
        logger.info(f"Removing permission '{label}' from {topic}")
        parsed = self.api.call('RemovePermission', params.to_query())
        return BooleanResult(request_id=parsed.request_id)
