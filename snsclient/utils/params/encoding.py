"""Flattening of structured parameters into the SNS query API naming scheme."""
import json
import base64
from typing import Dict, Any, List, Union
from snsclient.utils.errors.exceptions import ParameterValidationError
from snsclient.utils.constants.constants import MESSAGE_PROTOCOL_KEYS, MESSAGE_ATTRIBUTE_TYPES


def flatten_map(prefix, values: Dict[str, Any]) -> Dict[str, str]:
    """Attributes={'a': 1} -> Attributes.entry.1.key=a, Attributes.entry.1.value=1"""
    params = {}
    for index, key in enumerate(sorted(values), start=1):
        params[f"{prefix}.entry.{index}.key"] = key
        params[f"{prefix}.entry.{index}.value"] = to_param_value(values[key])
    return params


def flatten_list(prefix, values: List[Any]) -> Dict[str, str]:
    """ActionName=['Publish'] -> ActionName.member.1=Publish"""
    return {
        f"{prefix}.member.{index}": to_param_value(value)
        for index, value in enumerate(values, start=1)
    }


def flatten_tags(tags: Dict[str, str]) -> Dict[str, str]:
    params = {}
    for index, key in enumerate(sorted(tags), start=1):
        params[f"Tags.member.{index}.Key"] = key
        params[f"Tags.member.{index}.Value"] = to_param_value(tags[key])
    return params


def flatten_message_attributes(attributes: Dict[str, Any]) -> Dict[str, str]:
    """
    Flattens message attributes. Values may be given as plain str/int/float/bytes/list
    or as a {'DataType': ..., 'StringValue' | 'BinaryValue': ...} mapping.
    """
    params = {}
    for index, name in enumerate(sorted(attributes), start=1):
        data_type, value_key, value = _message_attribute_value(name, attributes[name])
        prefix = f"MessageAttributes.entry.{index}"
        params[f"{prefix}.Name"] = name
        params[f"{prefix}.Value.DataType"] = data_type
        params[f"{prefix}.Value.{value_key}"] = value
    return params


def _message_attribute_value(name, value):
    if isinstance(value, dict):
        data_type = value.get('DataType')
        if not data_type or data_type.split('.')[0] not in {t.split('.')[0] for t in MESSAGE_ATTRIBUTE_TYPES}:
            raise ParameterValidationError(f"Message attribute '{name}' has invalid DataType: {data_type}")
        if 'BinaryValue' in value:
            return data_type, 'BinaryValue', _binary(value['BinaryValue'])
        if 'StringValue' in value:
            return data_type, 'StringValue', to_param_value(value['StringValue'])
        raise ParameterValidationError(f"Message attribute '{name}' needs a StringValue or BinaryValue")
    if isinstance(value, bool):
        return 'String', 'StringValue', to_param_value(value)
    if isinstance(value, (int, float)):
        return 'Number', 'StringValue', str(value)
    if isinstance(value, (bytes, bytearray)):
        return 'Binary', 'BinaryValue', _binary(value)
    if isinstance(value, (list, tuple)):
        return 'String.Array', 'StringValue', json.dumps(list(value))
    if isinstance(value, str):
        return 'String', 'StringValue', value
    raise ParameterValidationError(f"Unsupported value for message attribute '{name}': {type(value).__name__}")


def _binary(value):
    if isinstance(value, str):
        return value
    return base64.b64encode(bytes(value)).decode('ascii')


def to_param_value(value):
    """Renders a parameter value the way the query API expects it."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def serialize_message(message: Union[str, Dict[str, str]]) -> Dict[str, str]:
    """
    Serializes a publish payload. A plain string is treated as {'default': message};
    every payload is sent as a JSON structure with MessageStructure=json.
    """
    if isinstance(message, str):
        message = {'default': message}
    elif not isinstance(message, dict):
        raise ParameterValidationError(f"Message must be a string or a mapping, got {type(message).__name__}")

    if 'default' not in message:
        raise ParameterValidationError("A per-protocol message map requires a 'default' key")

    unknown = [key for key in message if key not in MESSAGE_PROTOCOL_KEYS]
    if unknown:
        raise ParameterValidationError(f"Unknown message protocol keys: {', '.join(sorted(unknown))}")

    for key, body in message.items():
        if not isinstance(body, str):
            raise ParameterValidationError(f"Message body for '{key}' must be a string")

    return {
        'Message': json.dumps(message, sort_keys=True),
        'MessageStructure': 'json'
    }
