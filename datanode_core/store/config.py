"""Configuration for the record keeper and its default disk store."""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class KeeperConfig:
    """RecordKeeper policy and storage settings."""

    allow_out_of_frame: bool = False
    require_declared_channel: bool = True
    store_file: str = "data/datanode_store.json"
    save_interval: int = 10

    @classmethod
    def from_env(cls) -> "KeeperConfig":
        """Create config from environment variables with sensible defaults."""
        return cls(
            allow_out_of_frame=_env_bool("DATANODE_ALLOW_OUT_OF_FRAME", "false"),
            require_declared_channel=_env_bool("DATANODE_REQUIRE_DECLARED_CHANNEL", "true"),
            store_file=os.getenv("DATANODE_STORE_FILE", "data/datanode_store.json"),
            save_interval=int(os.getenv("DATANODE_STORE_SAVE_INTERVAL", "10")),
        )
