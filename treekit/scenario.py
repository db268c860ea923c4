"""Scenario configuration for the tree demonstration driver.

A scenario lists the keys to insert, the keys to probe with ``search``, keys
to delete afterwards and whether the tree should finally be mirrored. Files
ending in ``.yaml``/``.yml`` are parsed with PyYAML, anything else as JSON.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import math
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from .ordered_tree import OrderedTree

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_SCENARIO",
    "ScenarioConfigError",
    "TreeScenario",
    "load_scenario",
    "parse_scenario",
]

_FIELDS = frozenset({"keys", "probes", "deletions", "invert"})


class ScenarioConfigError(ValueError):
    """Raised when a scenario file is malformed."""


@dataclass(frozen=True)
class TreeScenario:
    """Inputs for a single demonstration run."""

    keys: Tuple[Any, ...]
    probes: Tuple[Any, ...] = ()
    deletions: Tuple[Any, ...] = ()
    invert: bool = True

    def build(self) -> OrderedTree[Any]:
        """Materialise the tree described by :attr:`keys`."""

        return OrderedTree(self.keys)


DEFAULT_SCENARIO = TreeScenario(
    keys=(50, 10, 30, 25, 75, 60, 90, 5, 15, 27, 35, 55, 65, 85, 95),
    probes=(75, 20, 60),
)


def load_scenario(path: Union[str, Path, None]) -> TreeScenario:
    """Load a scenario from *path*, or return :data:`DEFAULT_SCENARIO` for ``None``."""

    if path is None:
        return DEFAULT_SCENARIO

    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
        if config_path.suffix.lower() in {".yaml", ".yml"}:
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except (UnicodeDecodeError, yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ScenarioConfigError(
            f"Failed to parse scenario from {config_path}: {exc}"
        ) from exc

    scenario = parse_scenario(payload)
    logger.debug(
        "Loaded scenario from %s with %d keys", config_path, len(scenario.keys)
    )
    return scenario


def parse_scenario(payload: Any) -> TreeScenario:
    """Validate a decoded configuration payload and build a :class:`TreeScenario`."""

    if not isinstance(payload, Mapping):
        raise ScenarioConfigError("Scenario payload must be a mapping")

    unknown = sorted(str(name) for name in payload if name not in _FIELDS)
    if unknown:
        raise ScenarioConfigError(f"Unknown scenario fields: {', '.join(unknown)}")

    keys = _key_list(payload, "keys")
    if not keys:
        raise ScenarioConfigError("At least one key must be provided")
    probes = _key_list(payload, "probes")
    deletions = _key_list(payload, "deletions")

    invert = payload.get("invert", True)
    if not isinstance(invert, bool):
        raise ScenarioConfigError("'invert' must be a boolean")

    kinds = {_key_kind(key) for key in keys + probes + deletions}
    if len(kinds) > 1:
        raise ScenarioConfigError(
            "Scenario keys must all be numbers or all be strings"
        )

    return TreeScenario(keys=keys, probes=probes, deletions=deletions, invert=invert)


def _key_list(payload: Mapping[str, Any], name: str) -> Tuple[Any, ...]:
    values: Optional[Any] = payload.get(name)
    if values is None:
        if name == "keys":
            raise ScenarioConfigError("Scenario is missing the 'keys' list")
        return ()
    if not isinstance(values, list):
        raise ScenarioConfigError(f"'{name}' must be a list")
    for value in values:
        _key_kind(value)
    return tuple(values)


def _key_kind(value: Any) -> str:
    if isinstance(value, bool):
        raise ScenarioConfigError(f"Unsupported key {value!r}: booleans are not keys")
    if isinstance(value, float) and not math.isfinite(value):
        raise ScenarioConfigError(
            f"Unsupported key {value!r}: numeric keys must be finite"
        )
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    raise ScenarioConfigError(
        f"Unsupported key {value!r}: keys must be numbers or strings"
    )
