"""Command line demonstration of ``treekit.OrderedTree``.

The script builds a tree from a scenario (the built-in demo or a JSON/YAML
file passed via ``--config``), renders it, probes it with ``search``, prints
the traversal family and structural metrics, applies optional deletions and
finally mirrors the tree to show the inverted rendering and traversals.

Use ``--output-format json`` to emit the same facts as a single JSON object.
"""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from treekit import (
    EMPTY_TREE,
    OrderedTree,
    ScenarioConfigError,
    TreeScenario,
    load_scenario,
    render_lines,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraversalSnapshot:
    """Rendering and traversals captured at one point of the demo."""

    rendered: List[str]
    in_order: List[Any]
    pre_order: List[Any]
    post_order: List[Any]

    @classmethod
    def capture(cls, tree: OrderedTree[Any]) -> "TraversalSnapshot":
        return cls(
            rendered=render_lines(tree),
            in_order=tree.traverse_in_order(),
            pre_order=tree.traverse_pre_order(),
            post_order=tree.traverse_post_order(),
        )


@dataclass(frozen=True)
class DemoReport:
    """Everything the demonstration observed about the scenario tree."""

    inserted: int
    rejected: List[Any]
    initial: TraversalSnapshot
    level_order: List[Any]
    searches: List[Dict[str, Any]]
    minimum: Any
    maximum: Any
    height: int
    count: int
    balanced: bool
    deleted: List[Dict[str, Any]]
    after_deletions: Optional[TraversalSnapshot]
    inverted: Optional[TraversalSnapshot]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def run_scenario(scenario: TreeScenario) -> DemoReport:
    """Execute *scenario* against a fresh tree and collect the observations."""

    tree: OrderedTree[Any] = OrderedTree()
    rejected = [key for key in scenario.keys if not tree.insert(key)]
    if rejected:
        logger.info("Ignored %d duplicate keys: %s", len(rejected), rejected)

    initial = TraversalSnapshot.capture(tree)
    searches = [{"key": key, "found": tree.search(key)} for key in scenario.probes]
    minimum, maximum = tree.minimum(), tree.maximum()
    height, count = tree.height(), tree.count()
    balanced = tree.is_balanced()
    level_order = tree.traverse_level_order()

    deleted = [{"key": key, "removed": tree.delete(key)} for key in scenario.deletions]
    after_deletions = TraversalSnapshot.capture(tree) if deleted else None

    inverted = None
    if scenario.invert:
        tree.invert()
        inverted = TraversalSnapshot.capture(tree)

    return DemoReport(
        inserted=len(scenario.keys) - len(rejected),
        rejected=rejected,
        initial=initial,
        level_order=level_order,
        searches=searches,
        minimum=minimum,
        maximum=maximum,
        height=height,
        count=count,
        balanced=balanced,
        deleted=deleted,
        after_deletions=after_deletions,
        inverted=inverted,
    )


def _format_snapshot(snapshot: TraversalSnapshot) -> List[str]:
    return [
        *(snapshot.rendered or [EMPTY_TREE]),
        "",
        f"In-order: {snapshot.in_order}",
        f"Pre-order: {snapshot.pre_order}",
        f"Post-order: {snapshot.post_order}",
    ]


def _format_report(report: DemoReport) -> List[str]:
    """Return human-readable output lines for *report*."""

    lines = [f"Inserted {report.inserted} keys", ""]
    lines.extend(_format_snapshot(report.initial))
    lines.append("")
    for probe in report.searches:
        lines.append(f"Search {probe['key']}: {probe['found']}")
    if report.searches:
        lines.append("")

    balanced = "Yes" if report.balanced else "No"
    lines.extend(
        [
            f"Minimum: {report.minimum}",
            f"Maximum: {report.maximum}",
            f"Height: {report.height}",
            f"Total nodes: {report.count}",
            f"Balanced: {balanced}",
        ]
    )

    if report.after_deletions is not None:
        lines.append("")
        for entry in report.deleted:
            lines.append(f"Delete {entry['key']}: {entry['removed']}")
        lines.append("")
        lines.extend(_format_snapshot(report.after_deletions))

    if report.inverted is not None:
        lines.extend(["", "Inverted tree:"])
        lines.extend(_format_snapshot(report.inverted))
    return lines


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build, query and mirror an ordered binary search tree.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON or YAML scenario file. Defaults to the built-in demo keys.",
    )
    parser.add_argument(
        "--output-format",
        choices=["text", "json"],
        default="text",
        help="Print the report as human-readable text or as JSON.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the demonstration flow and print the report."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        scenario = load_scenario(args.config)
        report = run_scenario(scenario)
    except (ScenarioConfigError, FileNotFoundError) as exc:
        logger.error("Invalid scenario: %s", exc)
        return 2
    except Exception:  # noqa: BLE001
        logger.exception("Tree demonstration failed")
        return 1

    if args.output_format == "json":
        print(json.dumps(report.to_dict()))
    else:
        for line in _format_report(report):
            print(line)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
