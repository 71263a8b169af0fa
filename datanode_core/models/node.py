"""Data node profile: identity, owner, declared channels and stored time frames."""

from dataclasses import dataclass, field
from typing import Optional

from datanode_core.ids.address import AccountAddress
from datanode_core.ids.channel import NodeChannel
from datanode_core.ids.record_hash import DataRecordHash


@dataclass
class DataNode:
    """
    Profile of a data-producing device.

    `records` lists the keys of every DataRecord the node has written to,
    in the order each time frame was first touched. It behaves as an
    ordered set: re-registering a key is a no-op. `channels` accepts
    duplicates.
    """

    id: AccountAddress
    owner: AccountAddress
    name: str = ""
    channels: list[NodeChannel] = field(default_factory=list)
    records: list[DataRecordHash] = field(default_factory=list)

    @classmethod
    def new(cls, id: AccountAddress, owner: AccountAddress) -> "DataNode":
        """Fresh profile named after its own address."""
        return cls(id=id, owner=owner, name=str(id))

    def add_channel(self, channel: NodeChannel) -> None:
        self.channels.append(channel)

    def has_channel(self, channel: NodeChannel) -> bool:
        return channel in self.channels

    def find_channel(self, variable: str, id: str = "") -> Optional[NodeChannel]:
        for channel in self.channels:
            if channel.variable == variable and channel.id == id:
                return channel
        return None

    def add_record_key(self, key: DataRecordHash) -> bool:
        """Register a DataRecord key. Returns False if it was already known."""
        if key in self.records:
            return False
        self.records.append(key)
        return True

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "owner": str(self.owner),
            "name": self.name,
            "channels": [c.to_dict() for c in self.channels],
            "records": [k.hex() for k in self.records],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DataNode":
        return cls(
            id=AccountAddress(data["id"]),
            owner=AccountAddress(data["owner"]),
            name=data.get("name", ""),
            channels=[NodeChannel.from_dict(c) for c in data.get("channels") or []],
            records=[DataRecordHash.from_hex(k) for k in data.get("records") or []],
        )

    def __str__(self) -> str:
        return f"ID: {self.id}\nOwner: {self.owner}\nName: {self.name}"
