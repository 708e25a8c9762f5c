import requests
import logging
from urllib.parse import urlencode
from typing import Dict, Optional
from snsclient.utils.aws.signer import RequestSigner
from snsclient.utils.parsers.response_parser import ResponseParser, ParsedResponse
from snsclient.utils.errors.exceptions import ApiError, TransportError
from snsclient.utils.constants.constants import API_VERSION

logger = logging.getLogger(__name__)


class SNSApi:
    """Handles signed calls to the SNS query API."""
    def __init__(self, config, session=None):
        self.config = config
        self.signer = RequestSigner(config)
        self.parser = ResponseParser()
        self.session = session or requests.Session()

    def build_body(self, action, params: Optional[Dict[str, str]] = None) -> str:
        """Form-encodes the action, API version and flattened parameters."""
        fields = {'Action': action, 'Version': API_VERSION}
        for key, value in (params or {}).items():
            if value is not None:
                fields[key] = value
        return urlencode(sorted(fields.items()))

    def call(self, action, params: Optional[Dict[str, str]] = None) -> ParsedResponse:
        """Issues one signed POST for an action. No retries."""
        url = self.config.endpoint
        payload = self.build_body(action, params).encode('utf-8')
        headers = self.signer.sign(url, payload)

        logger.info(f"Calling SNS {action} at {url}")
        try:
            response = self.session.post(url, data=payload, headers=headers, timeout=self.config.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"SNS {action} request failed: {str(e)}")
            raise TransportError(f"{action} request to {url} failed: {str(e)}") from e

        if response.status_code >= 400:
            document = self.parser.parse_xml(response.text)
            if document is not None and self.parser.is_fault(document):
                raise self.parser.parse_error(document, response.status_code)
            # Any other error status is a failure whatever the body holds
            request_id = (response.headers or {}).get('x-amzn-RequestId')
            logger.error(f"SNS {action} failed with HTTP {response.status_code}")
            raise ApiError(f"Http{response.status_code}", response.reason or '', request_id, response.status_code)

        parsed = self.parser.parse(action, response.text, response.status_code)
        logger.info(f"SNS {action} succeeded. RequestId: {parsed.request_id}")
        return parsed
