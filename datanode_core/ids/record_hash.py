"""
Storage key derivation for daily DataRecords.

Produces a deterministic 128-bit key for each (data node, channel, time
frame) tuple. Any reader can re-derive the key from the tuple alone, so no
lookup table is needed to find a day's readings in the KV store.

The key is the MD5 digest of the UTF-8 string

    str(node) + channel.id + channel.variable + str(time_frame)

concatenated with no separators. This matches the keys already written by
existing ledgers; changing any part of the recipe orphans stored data.
"""

import hashlib
from dataclasses import dataclass
from typing import Optional

from datanode_core.clock import Clock, SystemClock
from datanode_core.ids.address import AccountAddress
from datanode_core.ids.channel import NodeChannel
from datanode_core.ids.time_frame import (
    normalize_time_frame,
    time_frame_from_epoch,
)

HASH_BYTES = 16


@dataclass(frozen=True)
class DataRecordHash:
    """16-byte storage key of one DataRecord."""

    digest: bytes

    def __post_init__(self):
        if len(self.digest) != HASH_BYTES:
            raise ValueError(
                f"DataRecordHash must be {HASH_BYTES} bytes, got {len(self.digest)}"
            )

    @classmethod
    def from_hex(cls, text: str) -> "DataRecordHash":
        return cls(bytes.fromhex(text))

    def hex(self) -> str:
        return self.digest.hex()

    def __bytes__(self) -> bytes:
        return self.digest

    def __str__(self) -> str:
        return self.hex()


def data_record_hash(
    node: AccountAddress,
    channel: NodeChannel,
    time_frame: int,
) -> DataRecordHash:
    """
    Derive the storage key for an explicit time-frame index.

    Args:
        node: Address of the data node that produced the readings.
        channel: Channel the readings belong to.
        time_frame: Day index since the Unix epoch.

    Returns:
        DataRecordHash wrapping the 16-byte MD5 digest.
    """
    content = f"{node}{channel.id}{channel.variable}{int(time_frame)}"
    return DataRecordHash(hashlib.md5(content.encode("utf-8")).digest())


def hash_for_timestamp(
    node: AccountAddress,
    channel: NodeChannel,
    seconds: int,
) -> DataRecordHash:
    """Key of the time frame containing the given epoch second."""
    return data_record_hash(node, channel, time_frame_from_epoch(seconds))


def hash_for_date(
    node: AccountAddress,
    channel: NodeChannel,
    date: int,
) -> DataRecordHash:
    """
    Key for a value that is either epoch seconds or a time-frame index.

    See normalize_time_frame() for how the two are told apart.
    """
    return data_record_hash(node, channel, normalize_time_frame(date))


def current_hash(
    node: AccountAddress,
    channel: NodeChannel,
    clock: Optional[Clock] = None,
) -> DataRecordHash:
    """Key of the time frame that is open right now according to `clock`."""
    clock = clock or SystemClock()
    return hash_for_timestamp(node, channel, clock.now())
