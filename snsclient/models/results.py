"""Typed results returned by SNSClient operations.

Every result carries the service-issued ``request_id`` next to its payload, and a
``kind`` tag naming the result shape.
"""
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

from snsclient.utils.constants.constants import PENDING_CONFIRMATION, SUBSCRIPTION_COLUMNS


class SNSResult(BaseModel):
    request_id: Optional[str] = None


class BooleanResult(SNSResult):
    kind: Literal['boolean'] = 'boolean'
    success: bool = True

    def __bool__(self):
        return self.success


class TopicResult(SNSResult):
    kind: Literal['topic'] = 'topic'
    topic_arn: str


class TopicListResult(SNSResult):
    kind: Literal['topic_list'] = 'topic_list'
    topics: List[str] = Field(default_factory=list)


class AttributesResult(SNSResult):
    kind: Literal['attributes'] = 'attributes'
    attributes: Dict[str, str] = Field(default_factory=dict)


class SubscriptionResult(SNSResult):
    kind: Literal['subscription'] = 'subscription'
    subscription_arn: str

    @property
    def pending(self) -> bool:
        return self.subscription_arn.lower().replace(' ', '') == PENDING_CONFIRMATION.replace(' ', '')


class SubscriptionRow(BaseModel):
    endpoint: str = ''
    owner: str = ''
    protocol: str = ''
    subscription_arn: str = ''
    topic_arn: str = ''


class SubscriptionTable(SNSResult):
    """Row-oriented listing of subscriptions; empty when a topic has none."""

    kind: Literal['subscription_table'] = 'subscription_table'
    columns: List[str] = Field(default_factory=lambda: list(SUBSCRIPTION_COLUMNS))
    rows: List[SubscriptionRow] = Field(default_factory=list)

    def __len__(self):
        return len(self.rows)

    def as_records(self) -> List[Dict[str, str]]:
        return [row.model_dump() for row in self.rows]


class PublishResult(SNSResult):
    kind: Literal['publish'] = 'publish'
    message_id: str
    sequence_number: Optional[str] = None
