"""Errors raised by the SNS client."""


class SNSClientError(Exception):
    """Base class for every error raised by the client."""


class MissingCredentialsError(SNSClientError):
    """No usable access key id / secret key pair could be resolved."""


class SignatureError(SNSClientError):
    """A request could not be signed."""


class TransportError(SNSClientError):
    """Network level failure: connection refused, DNS failure, timeout."""


class ParameterValidationError(SNSClientError, ValueError):
    """Invalid operation parameters, detected before any request is sent."""


class ApiError(SNSClientError):
    """Fault reported by the SNS service."""

    def __init__(self, code, message, request_id=None, status_code=None):
        self.code = code
        self.message = message
        self.request_id = request_id
        self.status_code = status_code
        super().__init__(f"{code}: {message} (RequestId: {request_id})")
