"""Generic ordered binary search tree.

``OrderedTree`` stores unique keys under a caller-supplied total order and
exposes the classic binary search tree toolbox:

* ``insert`` / ``search`` / ``delete`` – O(height) walks from the root.
  Duplicate inserts are rejected and reported with ``False``; the tree never
  rebalances, so adversarial insertion orders degrade to a linked list.
* ``minimum`` / ``maximum`` / ``height`` / ``count`` – structural queries
  computed on demand; nothing is cached on the nodes.
* ``traverse_in_order`` and friends – each call returns a fresh list so callers
  can mutate the tree while holding a previous traversal.
* ``invert`` – mirrors a subtree in place. The result intentionally violates
  the ordering invariant (in-order becomes descending) until inverted again.

Every subtree query accepts an explicit ``node`` argument. Omitting it targets
the tree's root; passing ``None`` targets the empty subtree. All walks use an
explicit stack so skewed trees are not limited by the interpreter recursion
depth.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import logging
from typing import (
    Any,
    Callable,
    Deque,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    TypeVar,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
Comparator = Callable[[Any, Any], int]

__all__ = [
    "Comparator",
    "OrderedTree",
    "TreeNode",
    "natural_compare",
]


@dataclass(slots=True, eq=False, repr=False)
class TreeNode(Generic[T]):
    """Node holding a single key and its optional children."""

    key: T
    left: Optional["TreeNode[T]"] = None
    right: Optional["TreeNode[T]"] = None

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self) -> str:
        return f"TreeNode(key={self.key!r})"


class _TreeRoot:
    __slots__ = ()

    def __repr__(self) -> str:  # pragma: no cover - debugging aid
        return "<tree root>"


# Default for the ``node`` parameter of subtree queries; resolved per call.
_ROOT: Any = _TreeRoot()


def natural_compare(left: Any, right: Any) -> int:
    """Three-way comparison based on the keys' own ``<`` operator."""

    if left < right:
        return -1
    if right < left:
        return 1
    return 0


class OrderedTree(Generic[T]):
    """Unbalanced binary search tree keyed by a total order over ``T``."""

    __slots__ = ("root", "_compare")

    def __init__(
        self,
        keys: Optional[Iterable[T]] = None,
        *,
        compare: Optional[Comparator] = None,
    ) -> None:
        if compare is None:
            compare = natural_compare
        elif not callable(compare):
            raise TypeError("compare must be a callable returning an integer")
        self.root: Optional[TreeNode[T]] = None
        self._compare = compare
        if keys is not None:
            self.bulk_insert(keys)

    @property
    def compare(self) -> Comparator:
        """The three-way comparator ordering the keys."""

        return self._compare

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def insert(self, key: T) -> bool:
        """Insert *key* as a new leaf.

        Returns ``False`` without touching the tree when an equal key is
        already stored.
        """

        node, _ = self._attach(key)
        return node is not None

    def bulk_insert(self, keys: Iterable[T]) -> int:
        """Insert every key from *keys* and return how many were new.

        All or nothing: when the comparator raises part way through, the
        leaves attached so far are detached again before the error propagates.
        """

        attached: List[Tuple[TreeNode[T], Optional[TreeNode[T]]]] = []
        try:
            for key in list(keys):
                node, parent = self._attach(key)
                if node is not None:
                    attached.append((node, parent))
        except Exception:
            # Newest first: each node is still a leaf when it is detached.
            for node, parent in reversed(attached):
                self._detach_leaf(node, parent)
            logger.debug("Rolled back %d keys after a failed bulk insert", len(attached))
            raise
        return len(attached)

    def delete(self, key: T) -> bool:
        """Remove *key*, returning ``False`` when it is not stored."""

        node, parent = self._find(key)
        if node is None:
            logger.debug("Delete miss for key %r", key)
            return False
        self._unlink(node, parent)
        return True

    def invert(self, node: Optional[TreeNode[T]] = _ROOT) -> Optional[TreeNode[T]]:
        """Mirror the subtree rooted at *node* and return that subtree root.

        The ordering invariant no longer holds afterwards: in-order traversal
        yields descending keys and lookups may miss until the subtree is
        inverted back.
        """

        start = self._resolve(node)
        if start is None:
            return None
        stack: List[TreeNode[T]] = [start]
        while stack:
            current = stack.pop()
            current.left, current.right = current.right, current.left
            if current.left is not None:
                stack.append(current.left)
            if current.right is not None:
                stack.append(current.right)
        logger.debug("Inverted subtree rooted at %r", start.key)
        return start

    def clear(self) -> None:
        """Drop every node."""

        self.root = None

    # ------------------------------------------------------------------
    # Lookup and structural queries
    # ------------------------------------------------------------------
    def search(self, key: T) -> bool:
        """Return ``True`` if *key* is stored in the tree."""

        node, _ = self._find(key)
        return node is not None

    def minimum(self, node: Optional[TreeNode[T]] = _ROOT) -> Optional[T]:
        current = self._resolve(node)
        if current is None:
            return None
        while current.left is not None:
            current = current.left
        return current.key

    def maximum(self, node: Optional[TreeNode[T]] = _ROOT) -> Optional[T]:
        current = self._resolve(node)
        if current is None:
            return None
        while current.right is not None:
            current = current.right
        return current.key

    def height(self, node: Optional[TreeNode[T]] = _ROOT) -> int:
        """Edge count of the longest downward path; ``-1`` for an empty subtree."""

        start = self._resolve(node)
        height = -1
        level: List[TreeNode[T]] = [start] if start is not None else []
        while level:
            height += 1
            level = [
                child
                for current in level
                for child in (current.left, current.right)
                if child is not None
            ]
        return height

    def count(self, node: Optional[TreeNode[T]] = _ROOT) -> int:
        """Number of nodes in the subtree rooted at *node*."""

        start = self._resolve(node)
        if start is None:
            return 0
        total = 0
        stack: List[TreeNode[T]] = [start]
        while stack:
            current = stack.pop()
            total += 1
            if current.left is not None:
                stack.append(current.left)
            if current.right is not None:
                stack.append(current.right)
        return total

    def is_balanced(self, node: Optional[TreeNode[T]] = _ROOT) -> bool:
        """Return ``True`` when no node's subtrees differ in height by more than one.

        Heights are folded bottom-up over a post-order walk and the check stops
        at the first imbalance.
        """

        heights: Dict[int, int] = {}
        for current in self._post_order_nodes(self._resolve(node)):
            left = heights.pop(id(current.left)) if current.left is not None else -1
            right = heights.pop(id(current.right)) if current.right is not None else -1
            if abs(left - right) > 1:
                return False
            heights[id(current)] = max(left, right) + 1
        return True

    def is_ordered(self) -> bool:
        """Return ``True`` when the current shape satisfies the ordering invariant."""

        keys = self.traverse_in_order()
        return all(self._compare(a, b) < 0 for a, b in zip(keys, keys[1:]))

    # ------------------------------------------------------------------
    # Traversals
    # ------------------------------------------------------------------
    def traverse_in_order(self, node: Optional[TreeNode[T]] = _ROOT) -> List[T]:
        """Keys in (left, node, right) order; ascending for an ordered tree."""

        result: List[T] = []
        stack: List[TreeNode[T]] = []
        current = self._resolve(node)
        while stack or current is not None:
            while current is not None:
                stack.append(current)
                current = current.left
            current = stack.pop()
            result.append(current.key)
            current = current.right
        return result

    def traverse_pre_order(self, node: Optional[TreeNode[T]] = _ROOT) -> List[T]:
        """Keys in (node, left, right) order."""

        start = self._resolve(node)
        if start is None:
            return []
        result: List[T] = []
        stack: List[TreeNode[T]] = [start]
        while stack:
            current = stack.pop()
            result.append(current.key)
            if current.right is not None:
                stack.append(current.right)
            if current.left is not None:
                stack.append(current.left)
        return result

    def traverse_post_order(self, node: Optional[TreeNode[T]] = _ROOT) -> List[T]:
        """Keys in (left, right, node) order."""

        return [current.key for current in self._post_order_nodes(self._resolve(node))]

    def traverse_level_order(self, node: Optional[TreeNode[T]] = _ROOT) -> List[T]:
        """Keys breadth-first, left to right within each level."""

        start = self._resolve(node)
        if start is None:
            return []
        result: List[T] = []
        queue: Deque[TreeNode[T]] = deque([start])
        while queue:
            current = queue.popleft()
            result.append(current.key)
            if current.left is not None:
                queue.append(current.left)
            if current.right is not None:
                queue.append(current.right)
        return result

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return self.count()

    def __bool__(self) -> bool:
        return self.root is not None

    def __contains__(self, key: object) -> bool:
        return self.search(key)  # type: ignore[arg-type]

    def __iter__(self) -> Iterator[T]:
        return iter(self.traverse_in_order())

    def __repr__(self) -> str:
        return f"{type(self).__name__}(count={self.count()}, height={self.height()})"

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _resolve(self, node: Optional[TreeNode[T]]) -> Optional[TreeNode[T]]:
        return self.root if node is _ROOT else node

    def _find(self, key: T) -> Tuple[Optional[TreeNode[T]], Optional[TreeNode[T]]]:
        """Return the node holding *key* and its parent, or ``(None, None)``."""

        parent: Optional[TreeNode[T]] = None
        current = self.root
        while current is not None:
            order = self._compare(key, current.key)
            if order == 0:
                return current, parent
            parent = current
            current = current.left if order < 0 else current.right
        return None, None

    def _unlink(self, node: TreeNode[T], parent: Optional[TreeNode[T]]) -> None:
        if node.left is not None and node.right is not None:
            # The in-order successor has no left child, so the second pass
            # always takes the single-child branch below.
            successor_parent = node
            successor = node.right
            while successor.left is not None:
                successor_parent = successor
                successor = successor.left
            node.key = successor.key
            self._unlink(successor, successor_parent)
            return

        child = node.left if node.left is not None else node.right
        if parent is None:
            self.root = child
        elif parent.left is node:
            parent.left = child
        else:
            parent.right = child

    def _attach(self, key: T) -> Tuple[Optional[TreeNode[T]], Optional[TreeNode[T]]]:
        """Attach *key* as a new leaf; return it and its parent, or ``(None, None)``."""

        if self.root is None:
            self.root = TreeNode(key)
            return self.root, None

        current = self.root
        while True:
            order = self._compare(key, current.key)
            if order == 0:
                logger.debug("Rejected duplicate key %r", key)
                return None, None
            if order < 0:
                if current.left is None:
                    current.left = TreeNode(key)
                    return current.left, current
                current = current.left
            else:
                if current.right is None:
                    current.right = TreeNode(key)
                    return current.right, current
                current = current.right

    def _detach_leaf(self, node: TreeNode[T], parent: Optional[TreeNode[T]]) -> None:
        if parent is None:
            self.root = None
        elif parent.left is node:
            parent.left = None
        else:
            parent.right = None

    @staticmethod
    def _post_order_nodes(start: Optional[TreeNode[T]]) -> List[TreeNode[T]]:
        if start is None:
            return []
        ordered: List[TreeNode[T]] = []
        stack: List[TreeNode[T]] = [start]
        while stack:
            current = stack.pop()
            ordered.append(current)
            if current.left is not None:
                stack.append(current.left)
            if current.right is not None:
                stack.append(current.right)
        ordered.reverse()
        return ordered
