"""Data channel identity: one measurement stream on a data node."""

from dataclasses import dataclass

from datanode_core.errors import InvalidChannelError


@dataclass(frozen=True)
class NodeChannel:
    """
    A channel of a data node.

    Two channels are the same stream iff (id, variable) are equal.
    `id` is optional and may be empty; `variable` names the measurement
    (e.g. "temperature", "humidity") and is required.
    """

    variable: str
    id: str = ""

    def __post_init__(self):
        if not isinstance(self.variable, str) or not self.variable:
            raise InvalidChannelError("channel variable is required")
        if not isinstance(self.id, str):
            raise InvalidChannelError(f"channel id must be a string, got {type(self.id).__name__}")

    def to_dict(self) -> dict:
        data = {"variable": self.variable}
        if self.id:
            data["id"] = self.id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "NodeChannel":
        return cls(variable=data.get("variable", ""), id=data.get("id", ""))

    def __str__(self) -> str:
        return f"{self.id}:{self.variable}"
