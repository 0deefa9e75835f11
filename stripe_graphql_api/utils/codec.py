"""
Conversion between plain records and DynamoDB attribute-value maps.

DynamoDB rejects writes that carry explicit "undefined" values, so every
attribute whose value is ``None`` is dropped before serialization, at any
nesting depth.
"""

from decimal import Decimal
from typing import Any, Dict, Mapping

from boto3.dynamodb.types import TypeDeserializer, TypeSerializer

_serializer = TypeSerializer()
_deserializer = TypeDeserializer()


def _prepare(value: Any) -> Any:
    """Strip None members and turn floats into Decimals for TypeSerializer."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        # str() keeps the shortest repr, so 49.98 stays 49.98
        return Decimal(str(value))
    if isinstance(value, Mapping):
        return {k: _prepare(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_prepare(v) for v in value if v is not None]
    return value


def _restore(value: Any) -> Any:
    """Turn Decimals back into int/float and sets into lists."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: _restore(v) for k, v in value.items()}
    if isinstance(value, (list, set, frozenset)):
        return [_restore(v) for v in value]
    return value


def compact(value: Any) -> Any:
    """Drop None members recursively, leaving every other value untouched."""
    if isinstance(value, Mapping):
        return {k: compact(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [compact(v) for v in value if v is not None]
    return value


def encode(record: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """
    Convert a plain record into a DynamoDB item.

    Args:
        record: Plain dictionary (may contain None values)

    Returns:
        Attribute-value map, e.g. ``{"id": {"S": "abc"}}``
    """
    prepared = _prepare(record)
    return {k: _serializer.serialize(v) for k, v in prepared.items()}


def encode_values(values: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Encode an ExpressionAttributeValues map (``{":status": "paid"}``)."""
    return encode(values)


def decode(item: Mapping[str, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convert a DynamoDB item back into a plain record.

    Numbers come back as ``int`` when integral and ``float`` otherwise.
    """
    return {k: _restore(_deserializer.deserialize(v)) for k, v in item.items()}
