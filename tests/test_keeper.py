"""Tests for the record keeper."""

import os
import tempfile

import pytest

from datanode_core.clock import FixedClock
from datanode_core.errors import OutOfTimeFrameError, UnknownChannelError
from datanode_core.ids.address import AccountAddress
from datanode_core.ids.channel import NodeChannel
from datanode_core.ids.record_hash import data_record_hash
from datanode_core.models.node import DataNode
from datanode_core.models.record import Record
from datanode_core.store.config import KeeperConfig
from datanode_core.store.disk_store import JSONDiskKVStore
from datanode_core.store.keeper import RecordKeeper
from datanode_core.store.memory import MemoryKVStore

ADDR1 = AccountAddress("addr1")
TEMPERATURE = NodeChannel(variable="temperature")
HUMIDITY = NodeChannel(variable="humidity")
JAN_1 = 1609459200


def _make_node():
    node = DataNode.new(ADDR1, AccountAddress("owner1"))
    node.add_channel(TEMPERATURE)
    node.add_channel(HUMIDITY)
    return node


def _make_keeper(now=JAN_1 + 3600, **config):
    store = MemoryKVStore()
    keeper = RecordKeeper(store=store, clock=FixedClock(now), config=KeeperConfig(**config))
    return keeper, store


def test_push_creates_record_for_current_frame():
    keeper, store = _make_keeper()
    node = _make_node()

    key = keeper.push_records(node, TEMPERATURE, [Record(JAN_1 + 3600, 21)])

    assert key == data_record_hash(ADDR1, TEMPERATURE, 18628)
    assert node.records == [key]
    dr = keeper.get_data_record(ADDR1, TEMPERATURE, JAN_1)
    assert dr is not None
    assert [r.value for r in dr.records] == [21]


def test_push_appends_to_existing_record():
    keeper, store = _make_keeper()
    node = _make_node()

    k1 = keeper.push_records(node, TEMPERATURE, [Record(JAN_1 + 10, 1)])
    k2 = keeper.push_records(node, TEMPERATURE, [Record(JAN_1 + 20, 2), Record(JAN_1 + 30, 3)])

    assert k1 == k2
    assert node.records == [k1]
    dr = keeper.get_data_record(ADDR1, TEMPERATURE, 18628)
    assert [r.timestamp for r in dr.records] == [JAN_1 + 10, JAN_1 + 20, JAN_1 + 30]
    assert keeper.get_stats() == {"frames_created": 1, "records_written": 3}


def test_push_with_explicit_date_and_next_day():
    keeper, store = _make_keeper()
    node = _make_node()

    k1 = keeper.push_records(node, TEMPERATURE, [Record(JAN_1 + 5, 1)], date=JAN_1 + 5)
    k2 = keeper.push_records(node, TEMPERATURE, [Record(JAN_1 + 86400, 2)], date=JAN_1 + 86400)

    assert k1 != k2
    assert node.records == [k1, k2]
    assert [dr.time_frame for dr in keeper.records_for_node(node)] == [18628, 18629]


def test_channels_have_separate_records():
    keeper, store = _make_keeper()
    node = _make_node()

    k1 = keeper.push_records(node, TEMPERATURE, [Record(JAN_1, 20)])
    k2 = keeper.push_records(node, HUMIDITY, [Record(JAN_1, 55)])

    assert k1 != k2
    assert keeper.get_data_record(ADDR1, HUMIDITY, JAN_1).records == [Record(JAN_1, 55)]


def test_node_profile_persisted():
    keeper, store = _make_keeper()
    node = _make_node()

    keeper.push_records(node, TEMPERATURE, [Record(JAN_1, 20)])

    loaded = keeper.load_node(ADDR1)
    assert loaded == node
    assert keeper.load_node(AccountAddress("nobody")) is None


def test_undeclared_channel_rejected():
    keeper, store = _make_keeper()
    node = _make_node()

    with pytest.raises(UnknownChannelError):
        keeper.push_records(node, NodeChannel(variable="pressure"), [Record(JAN_1, 1)])
    assert len(store) == 0


def test_undeclared_channel_allowed_by_config():
    keeper, store = _make_keeper(require_declared_channel=False)
    node = _make_node()

    keeper.push_records(node, NodeChannel(variable="pressure"), [Record(JAN_1, 1)])
    assert len(node.records) == 1


def test_out_of_frame_reading_writes_nothing():
    keeper, store = _make_keeper()
    node = _make_node()

    with pytest.raises(OutOfTimeFrameError):
        keeper.push_records(node, TEMPERATURE, [Record(JAN_1 + 1, 1), Record(JAN_1 - 1, 2)])

    assert len(store) == 0
    assert node.records == []


def test_late_reading_allowed_by_config():
    keeper, store = _make_keeper(allow_out_of_frame=True)
    node = _make_node()

    keeper.push_records(node, TEMPERATURE, [Record(JAN_1 - 60, 1)])
    dr = keeper.get_data_record(ADDR1, TEMPERATURE, JAN_1)
    assert dr.first_timestamp == JAN_1 - 60


def test_records_for_node_skips_missing():
    keeper, store = _make_keeper()
    node = _make_node()
    keeper.push_records(node, TEMPERATURE, [Record(JAN_1, 1)])
    node.add_record_key(data_record_hash(ADDR1, TEMPERATURE, 1))

    assert len(list(keeper.records_for_node(node))) == 1


def test_keeper_on_disk_store():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "store.json")
        config = KeeperConfig(store_file=path, save_interval=1)
        node = _make_node()

        keeper = RecordKeeper(clock=FixedClock(JAN_1), config=config)
        keeper.push_records(node, TEMPERATURE, [Record(JAN_1, 20)])

        reopened = RecordKeeper(store=JSONDiskKVStore(path), config=config)
        assert reopened.load_node(ADDR1).records == node.records
        assert reopened.get_data_record(ADDR1, TEMPERATURE, JAN_1).records == [Record(JAN_1, 20)]


def test_config_from_env(monkeypatch):
    monkeypatch.setenv("DATANODE_ALLOW_OUT_OF_FRAME", "yes")
    monkeypatch.setenv("DATANODE_REQUIRE_DECLARED_CHANNEL", "false")
    monkeypatch.setenv("DATANODE_STORE_FILE", "/tmp/x.json")
    monkeypatch.setenv("DATANODE_STORE_SAVE_INTERVAL", "3")

    config = KeeperConfig.from_env()
    assert config.allow_out_of_frame is True
    assert config.require_declared_channel is False
    assert config.store_file == "/tmp/x.json"
    assert config.save_interval == 3


def test_flush_persists_with_default_save_interval():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "store.json")
        node = _make_node()

        keeper = RecordKeeper(clock=FixedClock(JAN_1), config=KeeperConfig(store_file=path))
        keeper.push_records(node, TEMPERATURE, [Record(JAN_1, 20)])
        assert not os.path.exists(path)

        keeper.flush()

        reopened = JSONDiskKVStore(path)
        assert reopened.get(bytes(data_record_hash(ADDR1, TEMPERATURE, 18628))) is not None


def test_context_manager_flushes_on_exit():
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "store.json")
        node = _make_node()

        with RecordKeeper(clock=FixedClock(JAN_1), config=KeeperConfig(store_file=path)) as keeper:
            keeper.push_records(node, TEMPERATURE, [Record(JAN_1, 20)])

        reopened = RecordKeeper(store=JSONDiskKVStore(path), config=KeeperConfig(store_file=path))
        assert reopened.load_node(ADDR1) == node


def test_flush_on_store_without_flush_is_noop():
    keeper, store = _make_keeper()
    keeper.push_records(_make_node(), TEMPERATURE, [Record(JAN_1, 1)])
    keeper.flush()
    keeper.close()
    assert len(store) == 2
