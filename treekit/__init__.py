"""Ordered binary search tree with traversal, mirroring and text rendering."""

from .concurrency import ReadWriteLock, SynchronizedOrderedTree
from .ordered_tree import Comparator, OrderedTree, TreeNode, natural_compare
from .render import EMPTY_TREE, render_levels, render_lines, render_tree
from .scenario import (
    DEFAULT_SCENARIO,
    ScenarioConfigError,
    TreeScenario,
    load_scenario,
    parse_scenario,
)

__version__ = "0.1.0"

__all__ = [
    "Comparator",
    "DEFAULT_SCENARIO",
    "EMPTY_TREE",
    "OrderedTree",
    "ReadWriteLock",
    "ScenarioConfigError",
    "SynchronizedOrderedTree",
    "TreeNode",
    "TreeScenario",
    "load_scenario",
    "natural_compare",
    "parse_scenario",
    "render_levels",
    "render_lines",
    "render_tree",
]
