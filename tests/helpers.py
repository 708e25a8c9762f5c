from unittest.mock import MagicMock
from snsclient.utils.parsers.response_parser import ResponseParser

SNS_NS = 'http://sns.amazonaws.com/doc/2010-03-31/'
TEST_REGION = 'us-east-1'
TEST_TOPIC_ARN = 'arn:aws:sns:us-east-1:123456789012:test-topic'


def sns_response(action, result='', request_id='req-0001'):
    """Builds a successful SNS XML envelope."""
    return (
        f'<{action}Response xmlns="{SNS_NS}">'
        f'<{action}Result>{result}</{action}Result>'
        f'<ResponseMetadata><RequestId>{request_id}</RequestId></ResponseMetadata>'
        f'</{action}Response>'
    )


def sns_error(code, message, request_id='req-error', error_type='Sender'):
    """Builds an SNS fault envelope."""
    return (
        f'<ErrorResponse xmlns="{SNS_NS}">'
        f'<Error><Type>{error_type}</Type><Code>{code}</Code><Message>{message}</Message></Error>'
        f'<RequestId>{request_id}</RequestId>'
        f'</ErrorResponse>'
    )


def http_response(body, status_code=200, reason='OK', headers=None):
    response = MagicMock()
    response.status_code = status_code
    response.text = body
    response.reason = reason
    response.headers = headers or {}
    return response


def parsed(action, result='', request_id='req-0001'):
    """A ParsedResponse as SNSApi.call would return it."""
    return ResponseParser().parse(action, sns_response(action, result, request_id))
