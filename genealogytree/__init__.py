"""genealogytree - Binary downline tree navigation.

Turns depth-bounded binary member trees fetched from a backend into
display trees, keeps drill-down breadcrumbs, and searches what is loaded.

Pure core (no I/O):
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from genealogytree import transform_tree, search_tree, NavigationController

Async fetching and sessions:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from genealogytree.aio import HttpTreeGateway, CachingTreeGateway, GenealogySession
"""

__version__ = "0.1.0"

from .config import (
    CacheConfig,
    DepthConfig,
    GatewayConfig,
    LoadStatus,
    NavigationPhase,
    Position,
    RankTier,
)
from .exceptions import FetchFailure, GenealogyTreeError, MalformedPayload
from .core import (
    DisplayNode,
    DomainNode,
    EmptyNode,
    OccupiedNode,
    SearchEngine,
    SearchOutcome,
    SearchStatus,
    TreeTransformer,
    find_member,
    get_tree_stats,
    search_tree,
    transform_tree,
)
from .navigation import BreadcrumbEntry, FetchKey, NavigationController, NavigationState
from .depth import DepthController
from . import aio

__all__ = [
    "__version__",
    # Configuration
    "CacheConfig",
    "DepthConfig",
    "GatewayConfig",
    "LoadStatus",
    "NavigationPhase",
    "Position",
    "RankTier",
    # Errors
    "FetchFailure",
    "GenealogyTreeError",
    "MalformedPayload",
    # Core
    "DisplayNode",
    "DomainNode",
    "EmptyNode",
    "OccupiedNode",
    "SearchEngine",
    "SearchOutcome",
    "SearchStatus",
    "TreeTransformer",
    "find_member",
    "get_tree_stats",
    "search_tree",
    "transform_tree",
    # Navigation
    "BreadcrumbEntry",
    "FetchKey",
    "NavigationController",
    "NavigationState",
    "DepthController",
    "aio",
]
