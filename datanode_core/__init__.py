"""
datanode-core — daily time-frame records for data node sensor readings.

Convenience re-exports for the most commonly used classes and functions.
"""

from datanode_core.clock import FixedClock, SystemClock
from datanode_core.errors import (
    DataNodeError,
    EmptyDataRecordError,
    InvalidChannelError,
    InvalidRecordError,
    InvalidTimeFrameError,
    OutOfTimeFrameError,
    RecordDecodeError,
    UnknownChannelError,
)
from datanode_core.ids.address import AccountAddress
from datanode_core.ids.channel import NodeChannel
from datanode_core.ids.record_hash import (
    DataRecordHash,
    current_hash,
    data_record_hash,
    hash_for_date,
    hash_for_timestamp,
)
from datanode_core.ids.time_frame import (
    TIME_FRAME_SECONDS,
    normalize_time_frame,
    time_frame_from_epoch,
    time_frame_from_number,
)
from datanode_core.logging.setup import setup_logging
from datanode_core.models.node import DataNode
from datanode_core.models.record import DataRecord, Record
from datanode_core.store.config import KeeperConfig
from datanode_core.store.disk_store import JSONDiskKVStore
from datanode_core.store.keeper import RecordKeeper
from datanode_core.store.memory import MemoryKVStore

__all__ = [
    "AccountAddress",
    "DataNode",
    "DataNodeError",
    "DataRecord",
    "DataRecordHash",
    "EmptyDataRecordError",
    "FixedClock",
    "InvalidChannelError",
    "InvalidRecordError",
    "InvalidTimeFrameError",
    "JSONDiskKVStore",
    "KeeperConfig",
    "MemoryKVStore",
    "NodeChannel",
    "OutOfTimeFrameError",
    "Record",
    "RecordDecodeError",
    "RecordKeeper",
    "SystemClock",
    "TIME_FRAME_SECONDS",
    "UnknownChannelError",
    "current_hash",
    "data_record_hash",
    "hash_for_date",
    "hash_for_timestamp",
    "normalize_time_frame",
    "setup_logging",
    "time_frame_from_epoch",
    "time_frame_from_number",
]
