import pytest
import boto3
from unittest.mock import MagicMock
from moto import mock_aws
from snsclient.utils.config.config_manager import Config
from tests.helpers import TEST_REGION, sns_response, http_response


@pytest.fixture(autouse=True)
def clean_aws_env(monkeypatch, tmp_path):
    """Removes ambient AWS settings and points the credentials file at an empty location."""
    for name in [
        'AWS_ACCESS_KEY_ID', 'AWS_SECRET_ACCESS_KEY', 'AWS_SESSION_TOKEN',
        'AWS_DEFAULT_REGION', 'AWS_REGION', 'AWS_PROFILE'
    ]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv('AWS_SHARED_CREDENTIALS_FILE', str(tmp_path / 'missing-credentials'))


@pytest.fixture
def credentials_file(tmp_path):
    """Writes a shared credentials file with two profiles."""
    path = tmp_path / 'credentials'
    path.write_text(
        '[default]\n'
        'aws_access_key_id = AKIDEFAULT0000001111\n'
        'aws_secret_access_key = default-secret\n'
        'region = eu-west-1\n'
        '\n'
        '[work]\n'
        'aws_access_key_id = AKIWORK00000002222\n'
        'aws_secret_access_key = work-secret\n'
        'aws_session_token = work-token\n'
        'region = ap-southeast-2\n'
    )
    return str(path)


@pytest.fixture
def config():
    return Config(
        access_key_id='AKIATESTKEY000012345',
        secret_access_key='test-secret-key',
        region=TEST_REGION
    )


@pytest.fixture
def mock_session():
    """A requests.Session stand-in; set post.return_value per test."""
    session = MagicMock()
    session.post.return_value = http_response(sns_response('DeleteTopic'))
    return session


@pytest.fixture
def mock_api():
    """An SNSApi stand-in for processor tests."""
    return MagicMock()


@pytest.fixture
def mock_sns_backend(monkeypatch):
    """Starts moto's SNS/SQS backends with dummy credentials."""
    monkeypatch.setenv('AWS_ACCESS_KEY_ID', 'testing')
    monkeypatch.setenv('AWS_SECRET_ACCESS_KEY', 'testing')
    monkeypatch.setenv('AWS_DEFAULT_REGION', TEST_REGION)
    with mock_aws():
        yield boto3.client('sqs', region_name=TEST_REGION)
