import logging
from botocore.auth import SigV4Auth
from botocore.awsrequest import AWSRequest
from botocore.credentials import Credentials
from botocore.exceptions import BotoCoreError
from snsclient.utils.errors.exceptions import SignatureError
from snsclient.utils.constants.constants import SERVICE_NAME, CONTENT_TYPE

logger = logging.getLogger(__name__)


class RequestSigner:
    """Signs SNS query requests with AWS Signature Version 4."""
    def __init__(self, config):
        self.config = config

    def _credentials(self):
        key_id = (self.config.access_key_id or '').strip()
        secret = self.config.secret_access_key.get_secret_value().strip() if self.config.secret_access_key else ''
        if not key_id or not secret:
            raise SignatureError("Cannot sign request: access key id or secret access key is empty")
        token = self.config.session_token.get_secret_value() if self.config.session_token else None
        return Credentials(key_id, secret, token)

    def sign(self, url, body):
        """Signs a form-encoded POST and returns the headers to send."""
        credentials = self._credentials()
        request = AWSRequest(method='POST', url=url, data=body, headers={'Content-Type': CONTENT_TYPE})
        try:
            SigV4Auth(credentials, SERVICE_NAME, self.config.region).add_auth(request)
        except (BotoCoreError, ValueError, TypeError) as e:
            logger.error(f"Failed to sign request for {url}: {type(e).__name__}")
            raise SignatureError(f"Failed to sign request: {type(e).__name__}") from e
        return dict(request.headers.items())
