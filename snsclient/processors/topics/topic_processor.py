import logging
from typing import Dict, Optional, Any, Union
from snsclient.processors.base_processor import BaseProcessor
from snsclient.utils.errors.exceptions import ParameterValidationError
from snsclient.models.params import (
    build,
    CreateTopicParams,
    SetTopicAttributeParams,
    TopicAttributes
)
from snsclient.models.results import (
    TopicResult,
    TopicListResult,
    AttributesResult,
    BooleanResult
)

logger = logging.getLogger(__name__)


class TopicProcessor(BaseProcessor):
    """Creates, lists, inspects and deletes topics."""

    def create_topic(self, name, attributes=None, tags=None) -> TopicResult:
        """Creates a topic (idempotent on the service side) and returns its ARN."""
        params = build(
            CreateTopicParams,
            name=name,
            attributes=attributes or {},
            tags=tags or {}
        )
        logger.info(f"Creating topic {name}")
        parsed = self.api.call('CreateTopic', params.to_query())
        return TopicResult(topic_arn=parsed.required_text('TopicArn'), request_id=parsed.request_id)

    def delete_topic(self, topic) -> BooleanResult:
        logger.info(f"Deleting topic {topic}")
        parsed = self.api.call('DeleteTopic', {'TopicArn': topic})
        return BooleanResult(request_id=parsed.request_id)

    def list_topics(self) -> TopicListResult:
        members, request_id = self.paginate('ListTopics', 'Topics')
        topics = [member.get('TopicArn', '') for member in members]
        logger.info(f"Found {len(topics)} topics")
        return TopicListResult(topics=topics, request_id=request_id)

    def get_topic_attrs(self, topic) -> AttributesResult:
        parsed = self.api.call('GetTopicAttributes', {'TopicArn': topic})
        return AttributesResult(attributes=parsed.entries('Attributes'), request_id=parsed.request_id)

    def set_topic_attrs(self, topic, attributes: Union[TopicAttributes, Dict[str, Any]]) -> BooleanResult:
        """
        Sets a single topic attribute, given as a one-entry mapping or a
        TopicAttributes with one field set. SetTopicAttributes takes exactly
        one attribute per request, and so does this method.
        """
        if not isinstance(attributes, TopicAttributes):
            attributes = build(TopicAttributes, **(attributes or {}))
        values = attributes.to_dict()
        if len(values) != 1:
            raise ParameterValidationError(
                f"Exactly one topic attribute per call is required, got {len(values)}"
            )
        (name, value), = values.items()
        params = build(SetTopicAttributeParams, arn=topic, attribute_name=name, attribute_value=value)
        logger.info(f"Setting topic attribute {name} on {topic}")
        parsed = self.api.call('SetTopicAttributes', params.to_query())
        return BooleanResult(request_id=parsed.request_id)
