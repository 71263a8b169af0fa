"""
Record keeper: files readings into daily DataRecords in a KV store.

For each batch of readings the keeper derives the DataRecord key for the
target time frame, loads the existing DataRecord or starts an empty one,
appends the readings, writes it back, and registers the key on the data
node's profile.

Callers must serialise pushes for the same data node; the keeper does not
lock across the read-modify-write.

The default JSONDiskKVStore only saves every `save_interval` puts; call
flush() or use the keeper as a context manager before the process exits.
"""

import logging
import threading
from typing import Iterable, Iterator, Optional

from datanode_core.clock import Clock, SystemClock
from datanode_core.errors import UnknownChannelError
from datanode_core.ids.address import AccountAddress
from datanode_core.ids.channel import NodeChannel
from datanode_core.ids.record_hash import DataRecordHash, data_record_hash
from datanode_core.ids.time_frame import normalize_time_frame, time_frame_from_epoch
from datanode_core.models.node import DataNode
from datanode_core.models.record import DataRecord, Record
from datanode_core.models.serde import (
    decode_data_node,
    decode_data_record,
    encode_data_node,
    encode_data_record,
    node_key,
)
from datanode_core.store.config import KeeperConfig
from datanode_core.store.disk_store import JSONDiskKVStore
from datanode_core.store.memory import KVStore

logger = logging.getLogger(__name__)


class RecordKeeper:
    """Reads and writes DataRecords and DataNode profiles through a KV store."""

    def __init__(
        self,
        store: Optional[KVStore] = None,
        clock: Optional[Clock] = None,
        config: Optional[KeeperConfig] = None,
    ):
        """
        Args:
            store: KV store to use. Defaults to a JSONDiskKVStore at
                config.store_file.
            clock: Source of "now" for pushes without an explicit date.
            config: Keeper policy. Defaults to KeeperConfig.from_env().
        """
        self.config = config or KeeperConfig.from_env()
        if store is None:
            store = JSONDiskKVStore(self.config.store_file, save_interval=self.config.save_interval)
        self.store = store
        self.clock = clock or SystemClock()

        self._lock = threading.Lock()
        self._frames_created = 0
        self._records_written = 0

    def push_records(
        self,
        node: DataNode,
        channel: NodeChannel,
        records: Iterable[Record],
        date: Optional[int] = None,
    ) -> DataRecordHash:
        """
        Append readings to the DataRecord of the given time frame.

        Args:
            node: Profile of the producing data node. Its record keys are
                updated and the profile is saved when a new frame is touched.
            channel: Channel the readings belong to.
            records: Readings to append, in order.
            date: Epoch seconds or time-frame index. Defaults to the
                keeper's clock.

        Returns:
            Key of the DataRecord that was written.

        Raises:
            UnknownChannelError: if the node never declared `channel` and
                the config requires declared channels.
            OutOfTimeFrameError: if a reading falls outside the time frame
                and the config does not allow it. Nothing is written.
        """
        if self.config.require_declared_channel and not node.has_channel(channel):
            raise UnknownChannelError(f"{node.id} has no channel {channel}")

        if date is None:
            time_frame = time_frame_from_epoch(self.clock.now())
        else:
            time_frame = normalize_time_frame(date)

        key = data_record_hash(node.id, channel, time_frame)
        data_record = self._load_record(key)
        created = data_record is None
        if created:
            data_record = DataRecord(datanode=node.id, channel=channel, time_frame=time_frame)

        before = len(data_record)
        data_record.extend(records, allow_out_of_frame=self.config.allow_out_of_frame)
        added = len(data_record) - before

        self.store.put(bytes(key), encode_data_record(data_record))
        if node.add_record_key(key):
            self.save_node(node)

        with self._lock:
            self._records_written += added
            if created:
                self._frames_created += 1

        if created:
            logger.info(
                "Opened time frame %d for %s %s (%s)",
                time_frame, node.id, channel, key,
            )
        logger.debug("Stored %d readings under %s (%d total)", added, key, len(data_record))
        return key

    def get_data_record(
        self,
        node_id: AccountAddress,
        channel: NodeChannel,
        date: int,
    ) -> Optional[DataRecord]:
        """DataRecord for `date` (epoch seconds or time-frame index), or None."""
        key = data_record_hash(node_id, channel, normalize_time_frame(date))
        return self._load_record(key)

    def _load_record(self, key: DataRecordHash) -> Optional[DataRecord]:
        raw = self.store.get(bytes(key))
        if raw is None:
            return None
        return decode_data_record(raw)

    def records_for_node(self, node: DataNode) -> Iterator[DataRecord]:
        """Yield the node's stored DataRecords in first-touch order."""
        for key in node.records:
            data_record = self._load_record(key)
            if data_record is None:
                logger.warning("DataRecord %s of %s missing from store", key, node.id)
                continue
            yield data_record

    def save_node(self, node: DataNode) -> None:
        self.store.put(node_key(node.id), encode_data_node(node))

    def load_node(self, address: AccountAddress) -> Optional[DataNode]:
        raw = self.store.get(node_key(address))
        if raw is None:
            return None
        return decode_data_node(raw)

    def get_stats(self) -> dict[str, int]:
        """Return write statistics."""
        with self._lock:
            return {
                "frames_created": self._frames_created,
                "records_written": self._records_written,
            }

    def flush(self) -> None:
        """Persist buffered store writes, for stores that buffer them."""
        flush = getattr(self.store, "flush", None)
        if callable(flush):
            flush()

    def close(self) -> None:
        """Flush pending writes. The store itself stays usable."""
        self.flush()

    def __enter__(self) -> "RecordKeeper":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
