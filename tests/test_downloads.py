"""Tests for scenario persistence and download helpers.

These tests ensure that parameter serialisation, the scenario store and
the results export work correctly.  They do not interact with
Streamlit's buttons but verify that the JSON and CSV are well-formed and
that corrupted records are reported.
"""

import json

import pytest

from core.aggregate import run_model
from core.params import ProjectParameters
from core.storage import (
    ScenarioCorrupted,
    ScenarioNotFound,
    ScenarioStore,
    ScenarioStoreError,
    ScenarioWriteFailed,
    parse_scenario,
)
from core.utils import scenario_hash


def test_scenario_json_roundtrip():
    params = ProjectParameters(capex_pv=120.5, years=10)
    data = json.loads(params.model_dump_json(by_alias=True))
    params2 = ProjectParameters.from_json(json.dumps(data))
    assert params == params2


def test_record_uses_flat_storage_keys():
    record = ProjectParameters().to_record()
    assert record == {
        "capGeo": 4314.0,
        "capInd": 2331.0,
        "capPv": 0.0,
        "benefitTax": 4818.0,
        "benefitEnergy": 337.0,
        "discountRatePct": 4.5,
        "years": 25,
        "baseYear": 2025,
    }


def test_results_csv_export():
    df = run_model(ProjectParameters(years=1)).table
    csv_str = df.to_csv(index=False)
    lines = csv_str.splitlines()
    assert lines[0] == "year,period,cashflow,cum_cashflow,discounted_cashflow,cum_discounted_cashflow"
    assert len(lines) == 3


def test_store_save_and_load(tmp_path):
    store = ScenarioStore(tmp_path / "nested", key="scn")
    params = ProjectParameters(tax_benefit=0.0, discount_rate_pct=7.25)
    path = store.save(params)
    assert path == tmp_path / "nested" / "scn.json"
    assert json.loads(path.read_text())["benefitTax"] == 0.0
    assert store.load() == params
    # no temp file left behind
    assert [p.name for p in path.parent.iterdir()] == ["scn.json"]


def test_store_load_missing(tmp_path):
    store = ScenarioStore(tmp_path)
    assert not store.exists()
    with pytest.raises(ScenarioNotFound):
        store.load()


@pytest.mark.parametrize(
    "raw",
    [
        "{not json",
        json.dumps({"capGeo": "lots", "years": 5}),
        json.dumps({"years": 0}),
        json.dumps({"years": 2.5}),
        b'{"capGeo": "\xff\xfe"}',  # not UTF-8
    ],
)
def test_store_load_corrupted(tmp_path, raw):
    store = ScenarioStore(tmp_path)
    if isinstance(raw, bytes):
        store.path.write_bytes(raw)
    else:
        store.path.write_text(raw)
    with pytest.raises(ScenarioCorrupted) as info:
        store.load()
    assert isinstance(info.value, ScenarioStoreError)
    assert info.value.__cause__ is not None


def test_scenario_hash_is_stable():
    assert scenario_hash(ProjectParameters()) == scenario_hash(ProjectParameters())
    assert scenario_hash(ProjectParameters()) != scenario_hash(ProjectParameters(years=24))


def test_store_save_into_unwritable_directory(tmp_path):
    blocker = tmp_path / "f"
    blocker.write_text("x")
    store = ScenarioStore(blocker / "sub")
    with pytest.raises(ScenarioStoreError) as info:
        store.save(ProjectParameters())
    assert isinstance(info.value, ScenarioWriteFailed)
    assert isinstance(info.value.__cause__, OSError)
    assert not store.path.exists()


def test_store_save_failure_removes_tmp_file(tmp_path):
    store = ScenarioStore(tmp_path)
    # a directory in place of the record makes the final rename fail
    store.path.mkdir()
    with pytest.raises(ScenarioWriteFailed):
        store.save(ProjectParameters())
    assert list(tmp_path.glob("*.tmp")) == []


def test_parse_scenario_accepts_text_and_bytes():
    record = json.dumps(ProjectParameters(years=12).to_record())
    assert parse_scenario(record).years == 12
    assert parse_scenario(record.encode("utf-8")).years == 12


@pytest.mark.parametrize("raw", [b"\xff\xfe", b"[]", "{\"years\": -1}"])
def test_parse_scenario_rejects_bad_input(raw):
    with pytest.raises(ScenarioCorrupted) as info:
        parse_scenario(raw, "a.json")
    assert str(info.value.path) == "a.json"
    assert info.value.__cause__ is not None
