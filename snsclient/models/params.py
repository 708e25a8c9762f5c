"""Pydantic parameter structs for each SNS operation."""
import re
from typing import ClassVar, Dict, List, Optional, Union, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from snsclient.utils.errors.exceptions import ParameterValidationError
from snsclient.utils.params.encoding import (
    flatten_map,
    flatten_list,
    flatten_tags,
    flatten_message_attributes,
    serialize_message,
    to_param_value
)
from snsclient.utils.constants.constants import (
    PROTOCOLS,
    TOPIC_ATTRIBUTES,
    SUBSCRIPTION_ATTRIBUTES,
    PERMISSION_ACTIONS,
    MAX_SUBJECT_LENGTH,
    TOPIC_NAME_PATTERN
)

AttributeValue = Union[bool, int, float, str, Dict[str, Any], List[Any]]


def build(model_cls, **kwargs):
    """Constructs a parameter struct, raising ParameterValidationError on bad input."""
    try:
        return model_cls(**kwargs)
    except ValidationError as e:
        raise ParameterValidationError(str(e)) from e


class StrictParams(BaseModel):
    model_config = ConfigDict(extra='forbid', populate_by_name=True)


class AttributeSet(StrictParams):
    """Base for attribute bags; only declared attribute names are accepted."""

    def to_dict(self) -> Dict[str, AttributeValue]:
        return self.model_dump(exclude_none=True)


class TopicAttributes(AttributeSet):
    """Writable topic attributes."""

    DeliveryPolicy: Optional[AttributeValue] = None
    DisplayName: Optional[str] = None
    Policy: Optional[AttributeValue] = None
    TracingConfig: Optional[str] = None
    KmsMasterKeyId: Optional[str] = None
    SignatureVersion: Optional[str] = None
    ContentBasedDeduplication: Optional[bool] = None
    ArchivePolicy: Optional[AttributeValue] = None
    DataProtectionPolicy: Optional[AttributeValue] = None
    FifoThroughputScope: Optional[str] = None
    HTTPSuccessFeedbackRoleArn: Optional[str] = None
    HTTPSuccessFeedbackSampleRate: Optional[int] = None
    HTTPFailureFeedbackRoleArn: Optional[str] = None
    ApplicationSuccessFeedbackRoleArn: Optional[str] = None
    ApplicationSuccessFeedbackSampleRate: Optional[int] = None
    ApplicationFailureFeedbackRoleArn: Optional[str] = None
    LambdaSuccessFeedbackRoleArn: Optional[str] = None
    LambdaSuccessFeedbackSampleRate: Optional[int] = None
    LambdaFailureFeedbackRoleArn: Optional[str] = None
    SQSSuccessFeedbackRoleArn: Optional[str] = None
    SQSSuccessFeedbackSampleRate: Optional[int] = None
    SQSFailureFeedbackRoleArn: Optional[str] = None
    FirehoseSuccessFeedbackRoleArn: Optional[str] = None
    FirehoseSuccessFeedbackSampleRate: Optional[int] = None
    FirehoseFailureFeedbackRoleArn: Optional[str] = None


class CreateTopicAttributes(TopicAttributes):
    """Topic attributes accepted at creation time."""

    FifoTopic: Optional[bool] = None


class SubscriptionAttributes(AttributeSet):
    """Writable subscription attributes."""

    DeliveryPolicy: Optional[AttributeValue] = None
    FilterPolicy: Optional[AttributeValue] = None
    FilterPolicyScope: Optional[str] = None
    RawMessageDelivery: Optional[bool] = None
    RedrivePolicy: Optional[AttributeValue] = None
    SubscriptionRoleArn: Optional[str] = None
    ReplayPolicy: Optional[AttributeValue] = None


class CreateTopicParams(StrictParams):
    name: str
    attributes: CreateTopicAttributes = Field(default_factory=CreateTopicAttributes)
    tags: Dict[str, str] = Field(default_factory=dict)

    @field_validator('name')
    @classmethod
    def check_name(cls, value):
        if not re.match(TOPIC_NAME_PATTERN, value):
            raise ValueError(f"Invalid topic name: {value!r}")
        return value

    @model_validator(mode='after')
    def check_fifo_suffix(self):
        if self.attributes.FifoTopic and not self.name.endswith('.fifo'):
            raise ValueError("FIFO topic names must end with '.fifo'")
        return self

    def to_query(self) -> Dict[str, str]:
        params = {'Name': self.name}
        params.update(flatten_map('Attributes', self.attributes.to_dict()))
        params.update(flatten_tags(self.tags))
        return params


class SetAttributeParams(StrictParams):
    """One Set*Attributes call: a single attribute name and value."""

    arn_key: ClassVar[str] = ''
    allowed: ClassVar[List[str]] = []

    arn: str = Field(min_length=1)
    attribute_name: str
    attribute_value: Optional[AttributeValue] = None

    @field_validator('attribute_name')
    @classmethod
    def check_attribute_name(cls, value):
        if value not in cls.allowed:
            raise ValueError(f"Unknown attribute {value!r}")
        return value

    def to_query(self) -> Dict[str, str]:
        params = {self.arn_key: self.arn, 'AttributeName': self.attribute_name}
        if self.attribute_value is not None:
            params['AttributeValue'] = to_param_value(self.attribute_value)
        return params


class SetTopicAttributeParams(SetAttributeParams):
    arn_key: ClassVar[str] = 'TopicArn'
    allowed: ClassVar[List[str]] = TOPIC_ATTRIBUTES


class SetSubscriptionAttributeParams(SetAttributeParams):
    arn_key: ClassVar[str] = 'SubscriptionArn'
    allowed: ClassVar[List[str]] = SUBSCRIPTION_ATTRIBUTES


class SubscribeParams(StrictParams):
    topic_arn: str = Field(min_length=1)
    endpoint: str = Field(min_length=1)
    protocol: str
    return_subscription_arn: bool = False
    attributes: SubscriptionAttributes = Field(default_factory=SubscriptionAttributes)

    @field_validator('protocol')
    @classmethod
    def check_protocol(cls, value):
        value = value.lower()
        if value not in PROTOCOLS:
            raise ValueError(f"Unknown protocol {value!r}; expected one of {', '.join(PROTOCOLS)}")
        return value

    def to_query(self) -> Dict[str, str]:
        params = {
            'TopicArn': self.topic_arn,
            'Endpoint': self.endpoint,
            'Protocol': self.protocol
        }
        if self.return_subscription_arn:
            params['ReturnSubscriptionArn'] = 'true'
        params.update(flatten_map('Attributes', self.attributes.to_dict()))
        return params


class PublishParams(StrictParams):
    message: Union[str, Dict[str, str]]
    topic_arn: Optional[str] = None
    target_arn: Optional[str] = None
    phone_number: Optional[str] = None
    subject: Optional[str] = None
    message_attributes: Dict[str, Any] = Field(default_factory=dict)
    message_group_id: Optional[str] = None
    message_deduplication_id: Optional[str] = None

    @field_validator('message')
    @classmethod
    def check_message(cls, value):
        serialize_message(value)
        return value

    @field_validator('message_attributes')
    @classmethod
    def check_message_attributes(cls, value):
        flatten_message_attributes(value)
        return value

    @field_validator('subject')
    @classmethod
    def check_subject(cls, value):
        if value is not None and len(value) > MAX_SUBJECT_LENGTH:
            raise ValueError(f"Subject must be at most {MAX_SUBJECT_LENGTH} characters")
        return value

    @model_validator(mode='after')
    def check_destination(self):
        destinations = [d for d in (self.topic_arn, self.target_arn, self.phone_number) if d]
        if len(destinations) != 1:
            raise ValueError("Exactly one of topic, target_arn or phone_number is required")
        return self

    def to_query(self) -> Dict[str, str]:
        params = serialize_message(self.message)
        if self.topic_arn:
            params['TopicArn'] = self.topic_arn
        if self.target_arn:
            params['TargetArn'] = self.target_arn
        if self.phone_number:
            params['PhoneNumber'] = self.phone_number
        if self.subject is not None:
            params['Subject'] = self.subject
        if self.message_group_id:
            params['MessageGroupId'] = self.message_group_id
        if self.message_deduplication_id:
            params['MessageDeduplicationId'] = self.message_deduplication_id
        params.update(flatten_message_attributes(self.message_attributes))
        return params


class AddPermissionParams(StrictParams):
    topic_arn: str = Field(min_length=1)
    label: str = Field(min_length=1)
    account_ids: List[str] = Field(min_length=1)
    actions: List[str] = Field(min_length=1)

    @field_validator('actions')
    @classmethod
    def check_actions(cls, value):
        unknown = [action for action in value if action not in PERMISSION_ACTIONS]
        if unknown:
            raise ValueError(f"Unknown permission actions: {', '.join(unknown)}")
        return value

    def to_query(self) -> Dict[str, str]:
        params = {'TopicArn': self.topic_arn, 'Label': self.label}
        params.update(flatten_list('AWSAccountId', self.account_ids))
        params.update(flatten_list('ActionName', self.actions))
        return params


class RemovePermissionParams(StrictParams):
    topic_arn: str = Field(min_length=1)
    label: str = Field(min_length=1)

    def to_query(self) -> Dict[str, str]:
        return {'TopicArn': self.topic_arn, 'Label': self.label}


class ConfirmSubscriptionParams(StrictParams):
    topic_arn: str = Field(min_length=1)
    token: str = Field(min_length=1)
    authenticate_on_unsubscribe: bool = False

    def to_query(self) -> Dict[str, str]:
        params = {'TopicArn': self.topic_arn, 'Token': self.token}
        if self.authenticate_on_unsubscribe:
            params['AuthenticateOnUnsubscribe'] = 'true'
        return params
