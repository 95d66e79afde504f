"""Display tree traversal strategies.

Traversers walk a display tree and yield (node, depth) tuples. Root is
depth 0. EmptyNode placeholders are yielded too; callers that only care
about members filter with ``include_empty=False``.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Deque, Dict, Iterator, Optional, Tuple

from .node import DisplayNode, OccupiedNode


class DisplayTreeTraverser(ABC):
    """Abstract base class for display tree traversal strategies."""

    def __init__(self, include_empty: bool = True):
        """Initialize traverser.

        Args:
            include_empty: Whether EmptyNode placeholders are yielded
        """
        self.include_empty = include_empty

    @abstractmethod
    def traverse(
        self,
        root: DisplayNode,
        max_depth: Optional[int] = None
    ) -> Iterator[Tuple[DisplayNode, int]]:
        """Traverse the tree starting from root.

        Args:
            root: Starting node
            max_depth: Deepest level to visit (None = unlimited)

        Yields:
            Tuples of (node, depth)
        """
        pass

    def _should_yield(self, node: DisplayNode) -> bool:
        return self.include_empty or not node.is_empty

    def _should_explore(self, depth: int, max_depth: Optional[int]) -> bool:
        if max_depth is None:
            return True
        return depth < max_depth


class PreOrderTraverser(DisplayTreeTraverser):
    """Depth-first pre-order: node, then first child slot, then second.

    This is the order search and name lookup rely on for first-match-wins.
    """

    def traverse(
        self,
        root: DisplayNode,
        max_depth: Optional[int] = None
    ) -> Iterator[Tuple[DisplayNode, int]]:
        # Explicit stack; children pushed right first so left pops first
        stack = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            if self._should_yield(node):
                yield (node, depth)
            if node.is_empty or node.children is None:
                continue
            if self._should_explore(depth, max_depth):
                left, right = node.children
                stack.append((right, depth + 1))
                stack.append((left, depth + 1))


class BreadthFirstTraverser(DisplayTreeTraverser):
    """Level-order traversal, all of depth N before depth N+1."""

    def traverse(
        self,
        root: DisplayNode,
        max_depth: Optional[int] = None
    ) -> Iterator[Tuple[DisplayNode, int]]:
        queue: Deque[Tuple[DisplayNode, int]] = deque([(root, 0)])
        while queue:
            node, depth = queue.popleft()
            if self._should_yield(node):
                yield (node, depth)
            if node.is_empty or node.children is None:
                continue
            if self._should_explore(depth, max_depth):
                queue.extend((child, depth + 1) for child in node.children)


def iter_members(root: Optional[DisplayNode]) -> Iterator[OccupiedNode]:
    """Yield occupied nodes in pre-order."""
    if root is None:
        return
    for node, _ in PreOrderTraverser(include_empty=False).traverse(root):
        yield node


def find_first(
    root: Optional[DisplayNode],
    predicate: Callable[[OccupiedNode], bool]
) -> Optional[OccupiedNode]:
    """Return the first occupied node in pre-order matching predicate."""
    for node in iter_members(root):
        if predicate(node):
            return node
    return None


def find_member(root: Optional[DisplayNode], member_id: str) -> Optional[OccupiedNode]:
    """Look up a member by exact id within the loaded tree."""
    return find_first(root, lambda node: node.member_id == member_id)


def get_tree_stats(root: Optional[DisplayNode]) -> Dict[str, int]:
    """Summarize a display tree.

    Returns:
        Dictionary with member, empty-slot, active and depth counts
    """
    stats = {
        'members': 0,
        'empty_slots': 0,
        'active_members': 0,
        'inactive_members': 0,
        'max_depth': 0,
    }
    if root is None:
        return stats

    for node, depth in BreadthFirstTraverser().traverse(root):
        stats['max_depth'] = max(stats['max_depth'], depth)
        if node.is_empty:
            stats['empty_slots'] += 1
        elif node.is_active:
            stats['members'] += 1
            stats['active_members'] += 1
        else:
            stats['members'] += 1
            stats['inactive_members'] += 1
    return stats
