import pytest
import requests
from urllib.parse import parse_qs
from snsclient.client import SNSClient
from snsclient.utils.errors.exceptions import ApiError, TransportError, MissingCredentialsError, ParameterValidationError
from tests.helpers import sns_response, sns_error, http_response, TEST_TOPIC_ARN


@pytest.fixture
def client(config, mock_session):
    return SNSClient(config=config, session=mock_session)


def sent_actions(session):
    actions = []
    for recorded in session.post.call_args_list:
        body = parse_qs(recorded.kwargs['data'].decode('utf-8'))
        actions.append(body['Action'][0])
    return actions


class TestSNSClient:
    """Test suite for the SNSClient facade against a mocked HTTP session."""

    def test_build_from_explicit_credentials(self, mock_session):
        client = SNSClient(access_key_id='AKIAEXPLICIT0001', secret_access_key='s3cr3t', region='eu-west-1',
                           session=mock_session)
        assert client.config.region == 'eu-west-1'
        assert client.config.endpoint == 'https://sns.eu-west-1.amazonaws.com/'
        assert 's3cr3t' not in repr(client)

    def test_missing_credentials(self):
        with pytest.raises(MissingCredentialsError):
            SNSClient()

    def test_from_profile(self, credentials_file, mock_session):
        client = SNSClient.from_profile('work', credentials_file=credentials_file, session=mock_session)
        assert client.config.access_key_id == 'AKIWORK00000002222'
        assert client.config.region == 'ap-southeast-2'

    def test_topic_handle_round_trip(self, client, mock_session):
        mock_session.post.side_effect = [
            http_response(sns_response('CreateTopic', f'<TopicArn>{TEST_TOPIC_ARN}</TopicArn>')),
            http_response(sns_response('Subscribe', '<SubscriptionArn>pending confirmation</SubscriptionArn>')),
            http_response(sns_response('SetTopicAttributes')),
            http_response(sns_response('Publish', '<MessageId>m-1</MessageId>')),
            http_response(sns_response('DeleteTopic'))
        ]
        topic = client.create_topic('test-topic').topic_arn

        assert client.subscribe(topic, 'ops@example.com', 'email').pending
        assert client.set_topic_attrs(topic, {'DisplayName': 'Ops'}).success
        assert client.publish(topic, 'hello').message_id == 'm-1'
        assert client.delete_topic(topic).success

        assert sent_actions(mock_session) == ['CreateTopic', 'Subscribe', 'SetTopicAttributes', 'Publish', 'DeleteTopic']
        for recorded in mock_session.post.call_args_list[1:]:
            body = parse_qs(recorded.kwargs['data'].decode('utf-8'))
            assert body['TopicArn'] == [TEST_TOPIC_ARN]

    def test_not_found_fault(self, client, mock_session):
        mock_session.post.return_value = http_response(
            sns_error('NotFound', 'Topic does not exist', 'b1e1c7a4-0000-4f00-8000-000000000001'), 404, 'Not Found'
        )
        with pytest.raises(ApiError) as exc_info:
            client.publish(TEST_TOPIC_ARN, 'hello')
        assert exc_info.value.code == 'NotFound'
        assert exc_info.value.message == 'Topic does not exist'
        assert exc_info.value.request_id == 'b1e1c7a4-0000-4f00-8000-000000000001'

    def test_service_unavailable_page(self, client, mock_session):
        mock_session.post.return_value = http_response(
            '<html><body>Service Unavailable</body></html>', 503, 'Service Unavailable'
        )
        with pytest.raises(ApiError) as exc_info:
            client.delete_topic(TEST_TOPIC_ARN)
        assert exc_info.value.code == 'Http503'
        assert exc_info.value.status_code == 503

    def test_set_topic_attrs_single_request(self, client, mock_session):
        mock_session.post.return_value = http_response(sns_response('SetTopicAttributes', request_id='req-one'))
        with pytest.raises(ParameterValidationError):
            client.set_topic_attrs(TEST_TOPIC_ARN, {'DisplayName': 'Ops', 'DeliveryPolicy': '{}'})
        mock_session.post.assert_not_called()
        assert client.set_topic_attrs(TEST_TOPIC_ARN, {'DisplayName': 'Ops'}).request_id == 'req-one'
        assert sent_actions(mock_session) == ['SetTopicAttributes']

    def test_connection_refused(self, client, mock_session):
        mock_session.post.side_effect = requests.exceptions.ConnectionError('[Errno 111] Connection refused')
        with pytest.raises(TransportError):
            client.list_topics()
        assert mock_session.post.call_count == 1

    def test_missing_default_no_network(self, client, mock_session):
        with pytest.raises(ParameterValidationError):
            client.publish(TEST_TOPIC_ARN, {'sms': 'hi'})
        mock_session.post.assert_not_called()

    def test_empty_subscription_table(self, client, mock_session):
        mock_session.post.return_value = http_response(
            sns_response('ListSubscriptionsByTopic', '<Subscriptions/>', 'req-empty')
        )
        table = client.list_subscriptions(TEST_TOPIC_ARN)
        assert table.rows == []
        assert table.columns == ['endpoint', 'owner', 'protocol', 'subscription_arn', 'topic_arn']
        assert table.request_id == 'req-empty'

    def test_permissions(self, client, mock_session):
        mock_session.post.side_effect = [
            http_response(sns_response('AddPermission', request_id='r-add')),
            http_response(sns_response('RemovePermission', request_id='r-rm'))
        ]
        assert client.add_permission(TEST_TOPIC_ARN, 'share', ['111122223333'], ['Publish']).request_id == 'r-add'
        assert client.remove_permission(TEST_TOPIC_ARN, 'share').request_id == 'r-rm'

    def test_context_manager_closes_session(self, config, mock_session):
        with SNSClient(config=config, session=mock_session):
            pass
        mock_session.close.assert_called_once()


class TestSNSClientAgainstMoto:
    """End-to-end calls against moto's SNS backend."""

    @pytest.fixture
    def moto_client(self, mock_sns_backend):
        client = SNSClient(access_key_id='testing', secret_access_key='testing', region='us-east-1')
        yield client
        client.close()

    def test_topic_lifecycle(self, moto_client, mock_sns_backend):
        created = moto_client.create_topic('moto-topic')
        topic = created.topic_arn
        assert topic.endswith(':moto-topic')
        assert created.request_id

        assert topic in moto_client.list_topics().topics

        moto_client.set_topic_attrs(topic, {'DisplayName': 'Moto Topic'})
        assert moto_client.get_topic_attrs(topic).attributes['DisplayName'] == 'Moto Topic'

        empty = moto_client.list_subscriptions(topic)
        assert empty.rows == []

        queue_url = mock_sns_backend.create_queue(QueueName='moto-queue')['QueueUrl']
        queue_arn = mock_sns_backend.get_queue_attributes(
            QueueUrl=queue_url, AttributeNames=['QueueArn']
        )['Attributes']['QueueArn']
        subscription = moto_client.subscribe(topic, queue_arn, 'sqs')
        assert subscription.subscription_arn.startswith(topic)

        table = moto_client.list_subscriptions(topic)
        assert len(table) == 1
        assert table.rows[0].endpoint == queue_arn
        assert table.rows[0].protocol == 'sqs'
        assert table.rows[0].topic_arn == topic

        published = moto_client.publish(topic, {'default': 'hello', 'sqs': 'hello queue'}, subject='greeting')
        assert published.message_id

        messages = mock_sns_backend.receive_message(QueueUrl=queue_url).get('Messages', [])
        assert len(messages) == 1

        assert moto_client.unsubscribe(subscription.subscription_arn).success
        assert moto_client.delete_topic(topic).success

    def test_publish_to_deleted_topic(self, moto_client):
        topic = moto_client.create_topic('short-lived').topic_arn
        moto_client.delete_topic(topic)
        with pytest.raises(ApiError) as exc_info:
            moto_client.publish(topic, 'anyone there?')
        assert exc_info.value.code == 'NotFound'
