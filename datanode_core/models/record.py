"""
Readings and the daily DataRecord that aggregates them.

A DataRecord holds every reading of one (data node, channel) pair for one
time frame, in the order the caller appended them.
"""

import logging
from dataclasses import dataclass, field

from datanode_core.errors import (
    EmptyDataRecordError,
    InvalidRecordError,
    OutOfTimeFrameError,
)
from datanode_core.ids.address import AccountAddress
from datanode_core.ids.channel import NodeChannel
from datanode_core.ids.record_hash import DataRecordHash, data_record_hash
from datanode_core.ids.time_frame import (
    normalize_time_frame,
    time_frame_bounds,
    time_frame_from_epoch,
    timestamp_in_time_frame,
)
from datanode_core.logging.setup import OUT_OF_FRAME_LOGGER

out_of_frame_logger = logging.getLogger(OUT_OF_FRAME_LOGGER)

UINT32_MAX = 2**32 - 1


def _check_uint32(name: str, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRecordError(f"{name} must be an int, got {type(value).__name__}")
    if not 0 <= value <= UINT32_MAX:
        raise InvalidRecordError(f"{name} {value} does not fit in uint32")


@dataclass(frozen=True)
class Record:
    """A single reading: numeric `value`, or a textual payload in `misc`."""

    timestamp: int
    value: int = 0
    misc: str = ""

    def __post_init__(self):
        _check_uint32("timestamp", self.timestamp)
        _check_uint32("value", self.value)

    def to_dict(self) -> dict:
        return {"t": self.timestamp, "v": self.value, "m": self.misc}

    @classmethod
    def from_dict(cls, data: dict) -> "Record":
        return cls(timestamp=data["t"], value=data.get("v", 0), misc=data.get("m", ""))

    def __str__(self) -> str:
        return f"TimeStamp: {self.timestamp}, Value: {self.value}, Misc: {self.misc}"


@dataclass
class DataRecord:
    """
    One time frame of readings for one channel of one data node.

    Build with DataRecord.new() (legacy date contract) or
    DataRecord.for_timestamp(). append() refuses readings that fall outside
    the time frame unless the caller explicitly allows them, in which case
    they are kept and reported on the out-of-frame logger.
    """

    datanode: AccountAddress
    channel: NodeChannel
    time_frame: int
    records: list[Record] = field(default_factory=list)

    @classmethod
    def new(cls, datanode: AccountAddress, channel: NodeChannel, date: int) -> "DataRecord":
        """Empty DataRecord; `date` is epoch seconds or a time-frame index."""
        return cls(datanode=datanode, channel=channel, time_frame=normalize_time_frame(date))

    @classmethod
    def for_timestamp(
        cls, datanode: AccountAddress, channel: NodeChannel, seconds: int
    ) -> "DataRecord":
        """Empty DataRecord for the time frame containing `seconds`."""
        return cls(datanode=datanode, channel=channel, time_frame=time_frame_from_epoch(seconds))

    @property
    def hash(self) -> DataRecordHash:
        """Storage key of this DataRecord."""
        return data_record_hash(self.datanode, self.channel, self.time_frame)

    @property
    def bounds(self) -> tuple[int, int]:
        return time_frame_bounds(self.time_frame)

    def append(self, record: Record, allow_out_of_frame: bool = False) -> None:
        """
        Append a reading.

        Raises:
            OutOfTimeFrameError: if the reading's timestamp is outside this
                time frame and allow_out_of_frame is False.
        """
        if not timestamp_in_time_frame(record.timestamp, self.time_frame):
            if not allow_out_of_frame:
                raise OutOfTimeFrameError(
                    f"reading at {record.timestamp} is outside time frame "
                    f"{self.time_frame} {self.bounds} of {self.datanode} {self.channel}"
                )
            out_of_frame_logger.warning(
                "Filed reading at %d under time frame %d (%s %s)",
                record.timestamp, self.time_frame, self.datanode, self.channel,
            )
        self.records.append(record)

    def extend(self, records, allow_out_of_frame: bool = False) -> None:
        for record in records:
            self.append(record, allow_out_of_frame=allow_out_of_frame)

    def __len__(self) -> int:
        return len(self.records)

    @property
    def first_timestamp(self) -> int:
        if not self.records:
            raise EmptyDataRecordError(
                f"DataRecord {self.datanode} {self.channel} @{self.time_frame} has no readings"
            )
        return self.records[0].timestamp

    @property
    def last_timestamp(self) -> int:
        if not self.records:
            raise EmptyDataRecordError(
                f"DataRecord {self.datanode} {self.channel} @{self.time_frame} has no readings"
            )
        return self.records[-1].timestamp

    def summary(self) -> str:
        """
        Multi-line debug summary.

        Raises:
            EmptyDataRecordError: if no readings are stored.
        """
        return "\n".join([
            f"DataNode: {self.datanode}",
            f"Channel: {self.channel.id}:{self.channel.variable}",
            f"TimeFrame: {self.time_frame}",
            f"Records: {len(self.records)}",
            f"From: {self.first_timestamp}",
            f"To: {self.last_timestamp}",
        ])

    def __str__(self) -> str:
        return self.summary()

    def to_dict(self) -> dict:
        return {
            "datanode": str(self.datanode),
            "channel": self.channel.to_dict(),
            "timeframe": self.time_frame,
            "records": [r.to_dict() for r in self.records],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DataRecord":
        return cls(
            datanode=AccountAddress(data["datanode"]),
            channel=NodeChannel.from_dict(data["channel"]),
            time_frame=int(data["timeframe"]),
            records=[Record.from_dict(r) for r in data.get("records", [])],
        )
