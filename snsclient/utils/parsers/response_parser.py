import logging
import xmltodict
from xml.parsers.expat import ExpatError
from typing import Any, Dict, List, Optional
from snsclient.utils.errors.exceptions import ApiError

logger = logging.getLogger(__name__)

FAULT_ROOTS = ('ErrorResponse', 'Error', 'Response')


def _as_list(value) -> List[Any]:
    """xmltodict returns a lone repeated element as a dict rather than a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def _node_text(value) -> str:
    if value is None:
        return ''
    if isinstance(value, dict):
        return value.get('#text') or ''
    return str(value)


def _lookup(node, path) -> Optional[Any]:
    """Walks a 'A/B/C' path through parsed dicts; None when any step is missing."""
    for part in path.split('/'):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
        if node is None:
            # Present but empty: <NextToken/>
            node = ''
    return node


def _text(node, path) -> Optional[str]:
    value = _lookup(node, path)
    if value is None:
        return None
    return _node_text(value)


class ParsedResponse:
    """The <Action>Result element of a response and its request id."""
    def __init__(self, action, result, request_id, status_code=200):
        self.action = action
        self.result = result if isinstance(result, dict) else {}
        self.request_id = request_id
        self.status_code = status_code

    def text(self, path) -> Optional[str]:
        return _text(self.result, path)

    def required_text(self, path) -> str:
        """Like text(), but a missing or empty element is a malformed response."""
        value = self.text(path)
        if not value:
            logger.error(f"SNS {self.action} response has no {path} (RequestId: {self.request_id})")
            raise ApiError(
                'MalformedResponse',
                f"{self.action} response is missing {path}",
                self.request_id,
                self.status_code
            )
        return value

    def entries(self, path) -> Dict[str, str]:
        """Reads an <entry><key/><value/></entry> map."""
        container = _lookup(self.result, path)
        if not isinstance(container, dict):
            return {}
        return {
            _text(entry, 'key'): _text(entry, 'value') or ''
            for entry in _as_list(container.get('entry'))
        }

    def members(self, path) -> List[Dict[str, str]]:
        """Reads a <member>...</member> list as one dict per member."""
        container = _lookup(self.result, path)
        if not isinstance(container, dict):
            return []
        return [
            {key: _node_text(value) for key, value in member.items() if not key.startswith('@')}
            for member in _as_list(container.get('member'))
            if isinstance(member, dict)
        ]


class ResponseParser:
    """Parses SNS query API XML envelopes."""

    @staticmethod
    def parse_xml(body) -> Optional[Dict[str, Any]]:
        try:
            document = xmltodict.parse(body)
        except (ExpatError, TypeError, ValueError) as e:
            logger.debug(f"Response body is not valid XML: {str(e)}")
            return None
        if not isinstance(document, dict) or not document:
            return None
        return document

    @staticmethod
    def root(document):
        tag, node = next(iter(document.items()))
        return tag, node if isinstance(node, dict) else {}

    def is_fault(self, document) -> bool:
        tag, node = self.root(document)
        return tag in FAULT_ROOTS or 'Error' in node or 'Errors' in node

    def parse(self, action, body, status_code=200) -> ParsedResponse:
        """Parses a response body, raising ApiError for fault envelopes."""
        document = self.parse_xml(body)
        if document is None:
            logger.error(f"SNS {action} returned a body that is not XML")
            raise ApiError('MalformedResponse', f"Unparseable response to {action}", None, status_code)

        if self.is_fault(document):
            raise self.parse_error(document, status_code)

        tag, node = self.root(document)
        request_id = _text(node, 'ResponseMetadata/RequestId')
        if tag != f"{action}Response":
            logger.error(f"SNS {action} returned unexpected <{tag}> envelope")
            raise ApiError('MalformedResponse', f"Unexpected <{tag}> response to {action}", request_id, status_code)
        return ParsedResponse(action, node.get(f"{action}Result"), request_id, status_code)

    def parse_error(self, document, status_code=None) -> ApiError:
        tag, node = self.root(document)
        if tag == 'Error':
            error = node
        else:
            error = _lookup(node, 'Error')
            if error is None:
                errors = _as_list(_lookup(node, 'Errors/Error'))
                error = errors[0] if errors else {}
        code = _text(error, 'Code') or 'Unknown'
        message = _text(error, 'Message') or ''
        request_id = (
            _text(node, 'RequestId')
            or _text(node, 'RequestID')
            or _text(node, 'ResponseMetadata/RequestId')
        )
        logger.error(f"SNS returned {code}: {message} (RequestId: {request_id})")
        return ApiError(code, message, request_id, status_code)
