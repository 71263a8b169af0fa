"""
Byte codec for values stored in the KV store.

Compact UTF-8 JSON. Readings keep their list order, so decoding an encoded
DataRecord yields an equal DataRecord.
"""

import json

from datanode_core.errors import DataNodeError, RecordDecodeError
from datanode_core.ids.address import AccountAddress
from datanode_core.models.node import DataNode
from datanode_core.models.record import DataRecord


def _dumps(obj: dict) -> bytes:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _loads(data: bytes, what: str) -> dict:
    try:
        obj = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise RecordDecodeError(f"Invalid {what} bytes: {e}") from e
    if not isinstance(obj, dict):
        raise RecordDecodeError(f"Invalid {what} bytes: expected an object, got {type(obj).__name__}")
    return obj


def encode_data_record(record: DataRecord) -> bytes:
    return _dumps(record.to_dict())


def decode_data_record(data: bytes) -> DataRecord:
    obj = _loads(data, "DataRecord")
    try:
        return DataRecord.from_dict(obj)
    except (AttributeError, KeyError, TypeError, ValueError, DataNodeError) as e:
        raise RecordDecodeError(f"Malformed DataRecord: {e}") from e


def encode_data_node(node: DataNode) -> bytes:
    return _dumps(node.to_dict())


def decode_data_node(data: bytes) -> DataNode:
    obj = _loads(data, "DataNode")
    try:
        return DataNode.from_dict(obj)
    except (AttributeError, KeyError, TypeError, ValueError, DataNodeError) as e:
        raise RecordDecodeError(f"Malformed DataNode: {e}") from e


def node_key(address: AccountAddress) -> bytes:
    """KV key under which a DataNode profile is stored."""
    return b"node:" + str(address).encode("utf-8")
