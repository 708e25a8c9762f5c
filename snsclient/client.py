import logging
from typing import Dict, List, Optional, Any, Union
from snsclient.utils.config.config_manager import Config, mask_key
from snsclient.utils.apis.sns_api import SNSApi
from snsclient.processors.topics.topic_processor import TopicProcessor
from snsclient.processors.subscriptions.subscription_processor import SubscriptionProcessor
from snsclient.processors.publishing.publish_processor import PublishProcessor
from snsclient.processors.permissions.permission_processor import PermissionProcessor
from snsclient.utils.constants.constants import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


class SNSClient:
    """
    Client for the SNS query API.

    Credentials are resolved once, when the client is built, and carried by the
    instance; nothing is written back to the process environment. Each method
    issues one signed request (list methods one per page) and returns a typed
    result holding the service's request id.
    """
    def __init__(self, config: Optional[Config] = None, session=None, **credentials):
        self.config = config or Config.resolve(**credentials)
        self.api = SNSApi(self.config, session=session)
        self.topics = TopicProcessor(self.api)
        self.subscriptions = SubscriptionProcessor(self.api)
        self.publisher = PublishProcessor(self.api)
        self.permissions = PermissionProcessor(self.api)
        logger.info(f"SNS client ready for {self.config.endpoint} using key {mask_key(self.config.access_key_id)}")

    @classmethod
    def from_profile(cls, profile, credentials_file=None, region=None, timeout=DEFAULT_TIMEOUT, session=None):
        """Builds a client from a named profile; explicit region and environment still win."""
        config = Config.resolve(profile=profile, credentials_file=credentials_file, region=region, timeout=timeout)
        return cls(config=config, session=session)

    def close(self):
        self.api.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def __repr__(self):
        return f"SNSClient(region={self.config.region!r}, key={mask_key(self.config.access_key_id)!r})"

    # Topics
    def create_topic(self, name, attributes=None, tags: Optional[Dict[str, str]] = None):
        return self.topics.create_topic(name, attributes=attributes, tags=tags)

    def delete_topic(self, topic):
        return self.topics.delete_topic(topic)

    def list_topics(self):
        return self.topics.list_topics()

    def get_topic_attrs(self, topic):
        return self.topics.get_topic_attrs(topic)

    def set_topic_attrs(self, topic, attributes):
        return self.topics.set_topic_attrs(topic, attributes)

    # Subscriptions
    def subscribe(self, topic, endpoint, protocol, return_subscription_arn=False, attributes=None):
        return self.subscriptions.subscribe(
            topic, endpoint, protocol,
            return_subscription_arn=return_subscription_arn,
            attributes=attributes
        )

    def confirm_subscription(self, topic, token, authenticate_on_unsubscribe=False):
        return self.subscriptions.confirm_subscription(topic, token, authenticate_on_unsubscribe)

    def unsubscribe(self, subscription):
        return self.subscriptions.unsubscribe(subscription)

    def list_subscriptions(self, topic=None):
        return self.subscriptions.list_subscriptions(topic)

    def get_subscription_attrs(self, subscription):
        return self.subscriptions.get_subscription_attrs(subscription)

    def set_subscription_attrs(self, subscription, attribute_name, attribute_value):
        return self.subscriptions.set_subscription_attrs(subscription, attribute_name, attribute_value)

    # Publishing
    def publish(self, topic=None, message: Union[str, Dict[str, str]] = None, subject=None, **kwargs):
        return self.publisher.publish(topic, message, subject, **kwargs)

    # Permissions
    def add_permission(self, topic, label, account_ids: List[str], actions: List[str]):
        return self.permissions.add_permission(topic, label, account_ids, actions)

    def remove_permission(self, topic, label):
        return self.permissions.remove_permission(topic, label)
