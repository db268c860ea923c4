"""Tests for scenario configuration loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from treekit.scenario import (
    DEFAULT_SCENARIO,
    ScenarioConfigError,
    TreeScenario,
    load_scenario,
    parse_scenario,
)


def test_load_scenario_defaults() -> None:
    scenario = load_scenario(None)
    assert scenario is DEFAULT_SCENARIO
    assert scenario.keys[:3] == (50, 10, 30)
    assert scenario.probes == (75, 20, 60)
    assert scenario.deletions == ()
    assert scenario.invert is True


def test_load_scenario_from_json(tmp_path: Path) -> None:
    config_path = tmp_path / "scenario.json"
    payload = {"keys": [8, 3, 10], "probes": [3, 4], "deletions": [8], "invert": False}
    config_path.write_text(json.dumps(payload), encoding="utf-8")

    scenario = load_scenario(config_path)

    assert scenario == TreeScenario(
        keys=(8, 3, 10), probes=(3, 4), deletions=(8,), invert=False
    )
    assert scenario.build().traverse_in_order() == [3, 8, 10]


def test_load_scenario_from_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "scenario.yaml"
    config_path.write_text(
        """
        keys:
          - pear
          - apple
          - quince
        probes: [apple]
        """,
        encoding="utf-8",
    )

    scenario = load_scenario(str(config_path))

    assert scenario.keys == ("pear", "apple", "quince")
    assert scenario.probes == ("apple",)
    assert scenario.invert is True


def test_load_scenario_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_scenario(tmp_path / "absent.yaml")


def test_load_scenario_rejects_malformed_json(tmp_path: Path) -> None:
    config_path = tmp_path / "broken.json"
    config_path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ScenarioConfigError) as excinfo:
        load_scenario(config_path)
    assert "Failed to parse scenario" in str(excinfo.value)


def test_load_scenario_rejects_nan_from_json(tmp_path: Path) -> None:
    config_path = tmp_path / "nan.json"
    config_path.write_text('{"keys": [1, NaN, 3]}', encoding="utf-8")
    with pytest.raises(ScenarioConfigError) as excinfo:
        load_scenario(config_path)
    assert "must be finite" in str(excinfo.value)


def test_load_scenario_rejects_undecodable_file(tmp_path: Path) -> None:
    config_path = tmp_path / "latin1.yaml"
    config_path.write_bytes(b"keys: [caf\xe9]\n")
    with pytest.raises(ScenarioConfigError) as excinfo:
        load_scenario(config_path)
    assert "Failed to parse scenario" in str(excinfo.value)


@pytest.mark.parametrize(
    "payload, expected_message",
    [
        ([1, 2, 3], "must be a mapping"),
        ({}, "missing the 'keys' list"),
        ({"keys": []}, "At least one key"),
        ({"keys": "50"}, "'keys' must be a list"),
        ({"keys": [1], "probes": 2}, "'probes' must be a list"),
        ({"keys": [1, None]}, "Unsupported key"),
        ({"keys": [True]}, "booleans are not keys"),
        ({"keys": [1, "two"]}, "all be numbers or all be strings"),
        ({"keys": [1], "deletions": ["x"]}, "all be numbers or all be strings"),
        ({"keys": [1], "invert": "yes"}, "'invert' must be a boolean"),
        ({"keys": [1], "colour": "red"}, "Unknown scenario fields: colour"),
        ({"keys": [1, float("nan"), 3]}, "numeric keys must be finite"),
        ({"keys": [1], "probes": [float("inf")]}, "numeric keys must be finite"),
    ],
)
def test_parse_scenario_rejects_invalid(payload: object, expected_message: str) -> None:
    with pytest.raises(ScenarioConfigError) as excinfo:
        parse_scenario(payload)
    assert expected_message in str(excinfo.value)


def test_scenario_config_error_is_value_error() -> None:
    assert issubclass(ScenarioConfigError, ValueError)
