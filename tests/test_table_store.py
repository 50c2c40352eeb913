# tests/test_table_store.py

import json
import threading
import time

import numpy as np
import pytest

from klcal.core.errors import ResourceError, YearOutOfRange
from klcal.tables.store import LunarTableStore, default_store


def _write_table(path, data, start=2000, end=None):
    end = start + len(data) - 1 if end is None else end
    raw = {
        "metadata": {
            "version": "test",
            "source": "unit test",
            "year_range": {"start": start, "end": end},
            "lunar_range": {"start": f"{start}-01-01", "end": f"{end}-12-29"},
            "gregorian_range": {"start": f"{start}-02-01", "end": f"{end}-12-31"},
            "description": "",
        },
        "constants": {
            "lunar_big_month_days": 30,
            "lunar_small_month_days": 29,
            "solar_year_days": 365,
            "lunar_year_days": 354,
        },
        "data": data,
    }
    path.write_text(json.dumps(raw), encoding="utf-8")
    return path


def test_packaged_metadata(store):
    md = store.metadata
    assert (md.start_year, md.end_year) == (1000, 2050)
    assert md.n_years == 1051
    assert md.solar_start.isoformat() == "1000-02-13"
    assert md.lunar_end.isoformat() == "2050-11-18"
    assert store.constants.lunar_big_month_days == 30
    assert store.constants.lunar_small_month_days == 29
    assert store.constants.solar_leap_year_days == 366


def test_records_by_year(store):
    assert store.record_for(1000) == 0x82C60A57
    assert store.record_for(2017) == 0x83005557
    assert store.record_for(2050) == 0x830138B6


@pytest.mark.parametrize("year", [999, 2051, -1])
def test_out_of_range_year(store, year):
    with pytest.raises(YearOutOfRange):
        store.record_for(year)


def test_data_is_read_only_uint32(store):
    data = store.data
    assert data.dtype == np.uint32
    assert len(data) == 1051
    with pytest.raises(ValueError):
        data[0] = 0


def test_bulk_decoders(store):
    years = store.years()
    leaps = store.intercalation_months()
    totals = store.total_lunar_days()
    assert leaps[years == 2017][0] == 5
    assert leaps[years == 2020][0] == 4
    assert leaps[years == 2019][0] == 0
    assert totals[years == 2017][0] == 384
    # 12 or 13 months of 29/30 days
    assert totals.min() >= 12 * 29
    assert totals.max() <= 13 * 30
    assert np.all((leaps > 0) == (totals > 360))


def test_load_is_idempotent(tmp_path):
    store = LunarTableStore(_write_table(tmp_path / "t.json", [1, 2, 3]))
    assert not store.is_loaded
    assert store.load() is store
    first = store.data
    store.load()
    assert store.data is first
    assert store.record_for(2002) == 3


def test_concurrent_first_access_loads_once(tmp_path):
    store = LunarTableStore(_write_table(tmp_path / "t.json", list(range(2000, 2051)), start=2000))
    real_read = store._read_text
    reads = []

    def counting_read():
        reads.append(1)
        time.sleep(0.05)
        return real_read()

    store._read_text = counting_read
    gate = threading.Barrier(8)
    results = []

    def worker():
        gate.wait()
        results.append(store.record_for(2024))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(reads) == 1
    assert results == [2024] * 8


def test_default_store_is_shared():
    assert default_store() is default_store()


def test_missing_resource(tmp_path):
    store = LunarTableStore(tmp_path / "nope.json")
    with pytest.raises(ResourceError):
        store.record_for(2000)


def test_env_override(tmp_path, monkeypatch):
    path = _write_table(tmp_path / "env.json", [7, 8])
    monkeypatch.setenv("KLC_LUNAR_TABLE", str(path))
    store = LunarTableStore()
    assert store.record_for(2001) == 8


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        '{"metadata": {}}',
        '{"metadata": {"version": "x"}, "constants": {}, "data": []}',
    ],
)
def test_malformed_resource(tmp_path, text):
    path = tmp_path / "bad.json"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ResourceError):
        LunarTableStore(path).load()


def test_length_mismatch(tmp_path):
    path = _write_table(tmp_path / "short.json", [1, 2], start=2000, end=2005)
    with pytest.raises(ResourceError):
        LunarTableStore(path).load()


@pytest.mark.parametrize("bad", [-1, 1 << 32])
def test_values_outside_uint32(tmp_path, bad):
    path = _write_table(tmp_path / "wide.json", [1, bad])
    with pytest.raises(ResourceError):
        LunarTableStore(path).load()


def test_resource_error_is_not_year_error(tmp_path):
    store = LunarTableStore(tmp_path / "nope.json")
    with pytest.raises(ResourceError) as exc:
        store.load()
    assert not isinstance(exc.value, YearOutOfRange)
