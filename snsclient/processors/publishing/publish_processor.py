import logging
from typing import Dict, Optional, Any, Union
from snsclient.processors.base_processor import BaseProcessor
from snsclient.models.params import build, PublishParams
from snsclient.models.results import PublishResult

logger = logging.getLogger(__name__)


class PublishProcessor(BaseProcessor):
    """Publishes messages to topics, endpoints and phone numbers."""

    def publish(self, topic=None, message: Union[str, Dict[str, str]] = None, subject=None,
                target_arn=None, phone_number=None, message_attributes: Optional[Dict[str, Any]] = None,
                message_group_id=None, message_deduplication_id=None) -> PublishResult:
        """
        Publishes a message.
        A plain string goes verbatim to every protocol; a mapping of protocol name
        to body must include a 'default' entry. Parameters are validated before
        anything is sent.
        """
        params = build(
            PublishParams,
            message=message,
            topic_arn=topic,
            target_arn=target_arn,
            phone_number=phone_number,
            subject=subject,
            message_attributes=message_attributes or {},
            message_group_id=message_group_id,
            message_deduplication_id=message_deduplication_id
        )
        destination = topic or target_arn or phone_number
        logger.info(f"Publishing message to {destination}")
        parsed = self.api.call('Publish', params.to_query())
        result = PublishResult(
            message_id=parsed.required_text('MessageId'),
            sequence_number=parsed.text('SequenceNumber'),
            request_id=parsed.request_id
        )
        logger.info(f"Message published. MessageId: {result.message_id}")
        return result
