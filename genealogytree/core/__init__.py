"""Core tree model, transformation, traversal and search.

Everything in this package is synchronous and free of I/O.
"""

from .node import (
    DisplayNode,
    DomainNode,
    EmptyNode,
    LegMetrics,
    MemberProfile,
    OccupiedNode,
)
from .transformer import TreeTransformer, transform_tree
from .traverser import (
    BreadthFirstTraverser,
    DisplayTreeTraverser,
    PreOrderTraverser,
    find_first,
    find_member,
    get_tree_stats,
    iter_members,
)
from .search import SearchEngine, SearchOutcome, SearchStatus, search_tree

__all__ = [
    # Nodes
    'DisplayNode',
    'DomainNode',
    'EmptyNode',
    'LegMetrics',
    'MemberProfile',
    'OccupiedNode',
    # Transformation
    'TreeTransformer',
    'transform_tree',
    # Traversal
    'BreadthFirstTraverser',
    'DisplayTreeTraverser',
    'PreOrderTraverser',
    'find_first',
    'find_member',
    'get_tree_stats',
    'iter_members',
    # Search
    'SearchEngine',
    'SearchOutcome',
    'SearchStatus',
    'search_tree',
]
