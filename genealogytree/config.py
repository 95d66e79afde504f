"""Configuration system for genealogytree.

This module defines the enums shared by the tree model and the dataclasses
users pass in to tune fetching, caching and depth handling.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class Position(Enum):
    """Binary slot a member occupies under its parent."""
    ROOT = "root"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def parse(cls, value: Optional[str], default: "Position") -> "Position":
        """Parse a backend position string, falling back to default.

        Args:
            value: Raw value such as 'left' (case-insensitive) or None
            default: Position used when value is missing or unknown

        Returns:
            Matching Position
        """
        if not value:
            return default
        try:
            return cls(str(value).lower())
        except ValueError:
            return default


class RankTier(Enum):
    """Coarse rank classification used by consumers to group members.

    Order matters: classification checks tiers top to bottom, so
    'Crown Diamond' lands in CROWN rather than DIAMOND.
    """
    CROWN = "crown"
    DIAMOND = "diamond"
    PLATINUM = "platinum"
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"
    ASSOCIATE = "associate"       # Fallback for anything unrecognised

    @classmethod
    def classify(cls, rank: Optional[str]) -> "RankTier":
        """Classify a free-form rank label.

        Args:
            rank: Rank text from the backend, e.g. 'Gold Star'

        Returns:
            First tier whose keyword appears in the rank
        """
        rank_lower = (rank or "").lower()
        for tier in cls:
            if tier is cls.ASSOCIATE:
                break
            if tier.value in rank_lower:
                return tier
        return cls.ASSOCIATE


class NavigationPhase(Enum):
    """Logical state of the navigation state machine."""
    AT_ROOT = "at_root"       # Viewing the viewer's own tree
    DRILLED = "drilled"       # Re-rooted at a descendant


class LoadStatus(Enum):
    """Where the session is in its fetch cycle."""
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass
class GatewayConfig:
    """Configuration for the HTTP tree gateway."""

    base_url: str = "http://localhost:8000"
    own_tree_path: str = "/api/v1/user/tree_view"        # root_id is None
    member_tree_path: str = "/api/v1/user/tree/{member_id}"
    token: Optional[str] = None                          # Bearer token
    timeout: float = 10.0                                # Seconds
    headers: Dict[str, str] = field(default_factory=dict)

    def path_for(self, root_id: Optional[str]) -> str:
        """Return the endpoint path for a root identifier.

        Args:
            root_id: Member to root the tree at, or None for the viewer

        Returns:
            Path relative to base_url
        """
        if root_id is None:
            return self.own_tree_path
        return self.member_tree_path.format(member_id=root_id)

    def request_headers(self) -> Dict[str, str]:
        """Build the headers sent with every request."""
        headers = {"Content-Type": "application/json"}
        headers.update(self.headers)
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers


@dataclass
class CacheConfig:
    """Configuration for the freshness cache in front of a gateway."""

    max_size: int = 256          # Maximum number of cached fetch keys
    ttl: float = 300.0           # 5 minutes

    def __post_init__(self):
        if self.max_size < 1:
            raise ValueError(f"max_size must be positive, got {self.max_size}")
        if self.ttl <= 0:
            raise ValueError(f"ttl must be positive, got {self.ttl}")


@dataclass
class DepthConfig:
    """Configuration for depth input handling.

    There is no hard upper bound; advisory_threshold only drives a
    warning message.
    """

    default_depth: int = 3
    min_depth: int = 1
    advisory_threshold: int = 50
    quick_presets: Tuple[int, ...] = (3, 5, 10, 20, 50, 100)

    def __post_init__(self):
        if self.min_depth < 1:
            raise ValueError(f"min_depth must be at least 1, got {self.min_depth}")
        if self.default_depth < self.min_depth:
            raise ValueError(
                f"default_depth {self.default_depth} is below min_depth {self.min_depth}"
            )
