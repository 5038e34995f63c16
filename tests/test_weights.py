"""Weight tables and their binary file format."""

import struct

import pytest
import torch

from threes.errors import ConfigurationError, WeightFileError
from threes.ntuple import NTupleSlider
from threes.weights import WeightStore, parse_sizes


def test_parse_sizes():
    assert parse_sizes("65536,65536") == [65536, 65536]
    assert parse_sizes("4 8") == [4, 8]
    assert parse_sizes("") == []
    with pytest.raises(ConfigurationError):
        parse_sizes("4,-8")


def test_init_allocates_zero_tables():
    store = WeightStore()
    store.init("4,8")
    assert store.sizes() == [4, 8]
    assert all(t.dtype == torch.float32 for t in store)
    assert all(float(t.abs().sum()) == 0.0 for t in store)


def test_save_load_round_trip(tmp_path):
    path = tmp_path / "weights.bin"
    store = WeightStore()
    store.init("4,8")
    store[0][1] = 1.5
    store[0][3] = -2.0
    store[1][7] = 0.1
    store.save(path)

    loaded = WeightStore()
    loaded.init("4,8")
    loaded.load(path)
    for a, b in zip(store, loaded):
        assert torch.equal(a, b)


def test_file_layout(tmp_path):
    path = tmp_path / "weights.bin"
    store = WeightStore()
    store.init("2,3")
    store[1][2] = 4.0
    store.save(path)

    data = path.read_bytes()
    assert len(data) == 4 + 4 * (2 + 3)
    assert struct.unpack("<I", data[:4]) == (2,)
    assert struct.unpack("<5f", data[4:]) == (0.0, 0.0, 0.0, 0.0, 4.0)


def test_load_drops_tables_missing_from_file(tmp_path):
    path = tmp_path / "weights.bin"
    one = WeightStore()
    one.init("4")
    one.save(path)

    store = WeightStore()
    store.init("4,8")
    store.load(path)
    assert store.sizes() == [4]


def test_load_errors(tmp_path):
    with pytest.raises(WeightFileError):
        WeightStore().load(tmp_path / "missing.bin")

    path = tmp_path / "weights.bin"
    store = WeightStore()
    store.init("4,8")
    store.save(path)

    # table sizes unknown
    with pytest.raises(WeightFileError):
        WeightStore().load(path)

    # truncated
    path.write_bytes(path.read_bytes()[:-4])
    with pytest.raises(WeightFileError) as info:
        store.load(path)
    assert isinstance(info.value, OSError)


def test_save_to_unwritable_path(tmp_path):
    store = WeightStore()
    store.init("1")
    with pytest.raises(WeightFileError):
        store.save(tmp_path / "no" / "such" / "dir" / "weights.bin")


def test_agent_saves_on_close_and_loads(tmp_path):
    path = tmp_path / "weights.bin"
    with NTupleSlider(f"init=4,8 save={path}", encodings=[[]]) as agent:
        agent.weights[0][2] = 3.0
        agent.weights[1][5] = -1.25

    fresh = NTupleSlider(f"init=4,8 load={path}", encodings=[[]])
    assert float(fresh.weights[0][2]) == 3.0
    assert float(fresh.weights[1][5]) == -1.25
