"""Constants used throughout the client."""

# SNS query API
API_VERSION = "2010-03-31"
SERVICE_NAME = "sns"
DEFAULT_REGION = "us-east-1"
ENDPOINT_TEMPLATE = "https://sns.{region}.amazonaws.com/"

# HTTP request defaults
DEFAULT_TIMEOUT = 30
CONTENT_TYPE = "application/x-www-form-urlencoded; charset=utf-8"

# Environment variables
ENV_VARS = {
    'access_key_id': 'AWS_ACCESS_KEY_ID',
    'secret_access_key': 'AWS_SECRET_ACCESS_KEY',
    'session_token': 'AWS_SESSION_TOKEN',
    'region': 'AWS_DEFAULT_REGION',
    'region_fallback': 'AWS_REGION',
    'profile': 'AWS_PROFILE',
    'credentials_file': 'AWS_SHARED_CREDENTIALS_FILE'
}

# Shared credentials file
DEFAULT_PROFILE = "default"
DEFAULT_CREDENTIALS_FILE = "~/.aws/credentials"
PROFILE_KEYS = {
    'access_key_id': 'aws_access_key_id',
    'secret_access_key': 'aws_secret_access_key',
    'session_token': 'aws_session_token',
    'region': 'region'
}

# Returned by Subscribe until the endpoint owner confirms
PENDING_CONFIRMATION = "pending confirmation"

# Delivery protocols accepted by Subscribe
PROTOCOLS = [
    'http', 'https', 'email', 'email-json', 'sms',
    'sqs', 'application', 'lambda', 'firehose'
]

# Keys accepted in a per-protocol message map
MESSAGE_PROTOCOL_KEYS = ['default'] + PROTOCOLS

MAX_SUBJECT_LENGTH = 100
TOPIC_NAME_PATTERN = r'^[A-Za-z0-9_-]{1,256}(\.fifo)?$'

# Writable topic attributes
TOPIC_ATTRIBUTES = [
    'DeliveryPolicy', 'DisplayName', 'Policy', 'TracingConfig',
    'KmsMasterKeyId', 'SignatureVersion', 'ContentBasedDeduplication',
    'ArchivePolicy', 'DataProtectionPolicy', 'FifoThroughputScope',
    'HTTPSuccessFeedbackRoleArn', 'HTTPSuccessFeedbackSampleRate', 'HTTPFailureFeedbackRoleArn',
    'ApplicationSuccessFeedbackRoleArn', 'ApplicationSuccessFeedbackSampleRate', 'ApplicationFailureFeedbackRoleArn',
    'LambdaSuccessFeedbackRoleArn', 'LambdaSuccessFeedbackSampleRate', 'LambdaFailureFeedbackRoleArn',
    'SQSSuccessFeedbackRoleArn', 'SQSSuccessFeedbackSampleRate', 'SQSFailureFeedbackRoleArn',
    'FirehoseSuccessFeedbackRoleArn', 'FirehoseSuccessFeedbackSampleRate', 'FirehoseFailureFeedbackRoleArn'
]

# Attributes only settable when the topic is created
TOPIC_CREATE_ONLY_ATTRIBUTES = ['FifoTopic']

# Writable subscription attributes
SUBSCRIPTION_ATTRIBUTES = [
    'DeliveryPolicy', 'FilterPolicy', 'FilterPolicyScope',
    'RawMessageDelivery', 'RedrivePolicy', 'SubscriptionRoleArn', 'ReplayPolicy'
]

# Actions that can be granted through AddPermission
PERMISSION_ACTIONS = [
    'AddPermission', 'ConfirmSubscription', 'DeleteTopic', 'GetTopicAttributes',
    'ListSubscriptionsByTopic', 'Publish', 'RemovePermission',
    'SetTopicAttributes', 'Subscribe'
]

# Columns returned by list_subscriptions
SUBSCRIPTION_COLUMNS = ['endpoint', 'owner', 'protocol', 'subscription_arn', 'topic_arn']

# Message attribute data types
MESSAGE_ATTRIBUTE_TYPES = ['String', 'String.Array', 'Number', 'Binary']
