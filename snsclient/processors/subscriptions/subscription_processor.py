import logging
from typing import Optional
from snsclient.processors.base_processor import BaseProcessor
from snsclient.models.params import (
    build,
    SubscribeParams,
    ConfirmSubscriptionParams,
    SetSubscriptionAttributeParams
)
from snsclient.models.results import (
    SubscriptionResult,
    SubscriptionTable,
    SubscriptionRow,
    AttributesResult,
    BooleanResult
)

logger = logging.getLogger(__name__)

# ListSubscriptions member tags -> table columns
SUBSCRIPTION_FIELDS = {
    'Endpoint': 'endpoint',
    'Owner': 'owner',
    'Protocol': 'protocol',
    'SubscriptionArn': 'subscription_arn',
    'TopicArn': 'topic_arn'
}


class SubscriptionProcessor(BaseProcessor):
    """Manages subscriptions. Confirmation state is owned by the service."""

    def subscribe(self, topic, endpoint, protocol, return_subscription_arn=False, attributes=None) -> SubscriptionResult:
        """
        Subscribes an endpoint to a topic.
        Returns the subscription ARN, or 'pending confirmation' until the endpoint confirms.
        """
        params = build(
            SubscribeParams,
            topic_arn=topic,
            endpoint=endpoint,
            protocol=protocol,
            return_subscription_arn=return_subscription_arn,
            attributes=attributes or {}
        )
        logger.info(f"Subscribing {params.protocol} endpoint to {topic}")
        parsed = self.api.call('Subscribe', params.to_query())
        result = SubscriptionResult(subscription_arn=parsed.required_text('SubscriptionArn'), request_id=parsed.request_id)
        if result.pending:
            logger.info(f"Subscription to {topic} is pending confirmation")
        return result

    def confirm_subscription(self, topic, token, authenticate_on_unsubscribe=False) -> SubscriptionResult:
        params = build(
            ConfirmSubscriptionParams,
            topic_arn=topic,
            token=token,
            authenticate_on_unsubscribe=authenticate_on_unsubscribe
        )
        logger.info(f"Confirming subscription to {topic}")
        parsed = self.api.call('ConfirmSubscription', params.to_query())
        return SubscriptionResult(subscription_arn=parsed.required_text('SubscriptionArn'), request_id=parsed.request_id)

    def unsubscribe(self, subscription) -> BooleanResult:
        logger.info(f"Unsubscribing {subscription}")
        parsed = self.api.call('Unsubscribe', {'SubscriptionArn': subscription})
        return BooleanResult(request_id=parsed.request_id)

    def list_subscriptions(self, topic: Optional[str] = None) -> SubscriptionTable:
        """Lists subscriptions for one topic, or for the whole account when topic is None."""
        if topic:
            members, request_id = self.paginate('ListSubscriptionsByTopic', 'Subscriptions', {'TopicArn': topic})
        else:
            members, request_id = self.paginate('ListSubscriptions', 'Subscriptions')

        rows = [
            SubscriptionRow(**{column: member.get(tag, '') for tag, column in SUBSCRIPTION_FIELDS.items()})
            for member in members
        ]
        logger.info(f"Found {len(rows)} subscriptions")
        return SubscriptionTable(rows=rows, request_id=request_id)

    def get_subscription_attrs(self, subscription) -> AttributesResult:
        parsed = self.api.call('GetSubscriptionAttributes', {'SubscriptionArn': subscription})
        return AttributesResult(attributes=parsed.entries('Attributes'), request_id=parsed.request_id)

    def set_subscription_attrs(self, subscription, attribute_name, attribute_value) -> BooleanResult:
        params = build(
            SetSubscriptionAttributeParams,
            arn=subscription,
            attribute_name=attribute_name,
            attribute_value=attribute_value
        )
        logger.info(f"Setting subscription attribute {attribute_name} on {subscription}")
        parsed = self.api.call('SetSubscriptionAttributes', params.to_query())
        return BooleanResult(request_id=parsed.request_id)
