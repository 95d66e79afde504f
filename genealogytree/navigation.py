"""Drill-down navigation state and controller.

NavigationState is an immutable value: every transition builds a new
one, so current_root_id and history always change together. The
controller returns the FetchKey the caller has to load after each
transition; it never performs I/O itself.

State machine::

    AT_ROOT --drill_into--> DRILLED --drill_into / breadcrumb--> DRILLED
       ^                       |
       +------reset_to_root----+
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple

from .config import DepthConfig, NavigationPhase
from .core.node import DisplayNode
from .core.traverser import find_member


@dataclass(frozen=True)
class FetchKey:
    """Identifies one tree fetch: depth plus root (None = viewer's own)."""

    depth: int
    root_id: Optional[str] = None

    def __post_init__(self):
        if self.depth < 1:
            raise ValueError(f"depth must be a positive integer, got {self.depth}")


@dataclass(frozen=True)
class BreadcrumbEntry:
    """One visited root in the drill path."""

    id: str
    name: str


@dataclass(frozen=True)
class NavigationState:
    """Current root plus the breadcrumb trail that led there."""

    current_root_id: Optional[str] = None
    history: Tuple[BreadcrumbEntry, ...] = field(default_factory=tuple)

    def __post_init__(self):
        if self.history:
            if self.current_root_id != self.history[-1].id:
                raise ValueError(
                    f"current_root_id {self.current_root_id!r} must be the last "
                    f"breadcrumb ({self.history[-1].id!r})"
                )
        elif self.current_root_id is not None:
            raise ValueError(
                f"current_root_id {self.current_root_id!r} given without history"
            )

    @property
    def is_drilled_down(self) -> bool:
        return self.current_root_id is not None

    @property
    def phase(self) -> NavigationPhase:
        if self.is_drilled_down:
            return NavigationPhase.DRILLED
        return NavigationPhase.AT_ROOT

    def index_of(self, member_id: str) -> int:
        """Index of member_id in history, or -1."""
        for index, entry in enumerate(self.history):
            if entry.id == member_id:
                return index
        return -1


class NavigationController:
    """Sole owner and writer of NavigationState.

    Example:
        nav = NavigationController()
        key = nav.drill_into('M002', tree)   # FetchKey(depth=3, root_id='M002')
        key = nav.navigate_to_breadcrumb('M002')
        key = nav.reset_to_root()            # FetchKey(depth=3, root_id=None)
    """

    def __init__(self, depth: Optional[int] = None, depth_config: Optional[DepthConfig] = None):
        """Initialize in the AT_ROOT state.

        Args:
            depth: Initial fetch depth (defaults to depth_config.default_depth)
            depth_config: Depth settings
        """
        self.depth_config = depth_config or DepthConfig()
        self._depth = depth if depth is not None else self.depth_config.default_depth
        self._state = NavigationState()

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def current_root_id(self) -> Optional[str]:
        return self._state.current_root_id

    @property
    def history(self) -> Tuple[BreadcrumbEntry, ...]:
        return self._state.history

    @property
    def fetch_key(self) -> FetchKey:
        return FetchKey(self._depth, self._state.current_root_id)

    def drill_into(self, member_id: str, tree: Optional[DisplayNode] = None) -> Optional[FetchKey]:
        """Re-root the view at a clicked member.

        The breadcrumb name comes from the currently loaded tree; when
        the member is not in it, the id itself is used.

        Args:
            member_id: Clicked member
            tree: Display tree currently shown

        Returns:
            New FetchKey, or None when already rooted at member_id
        """
        if not member_id or member_id == self._state.current_root_id:
            return None

        node = find_member(tree, member_id)
        name = node.full_name if node is not None and node.full_name else member_id

        self._state = NavigationState(
            current_root_id=member_id,
            history=self._state.history + (BreadcrumbEntry(member_id, name),),
        )
        return self.fetch_key

    def navigate_to_breadcrumb(self, member_id: str) -> Optional[FetchKey]:
        """Jump back to a visited root, dropping everything after it.

        Returns:
            New FetchKey, or None when member_id is not in history
        """
        index = self._state.index_of(member_id)
        if index == -1:
            return None

        self._state = NavigationState(
            current_root_id=member_id,
            history=self._state.history[:index + 1],
        )
        return self.fetch_key

    def reset_to_root(self) -> FetchKey:
        """Return to the viewer's own tree and clear the trail."""
        self._state = NavigationState()
        return self.fetch_key

    def apply_depth(self, depth: int) -> FetchKey:
        """Change the fetch depth without touching root or history."""
        self._depth = FetchKey(depth, self._state.current_root_id).depth
        return self.fetch_key

    def refresh(self) -> FetchKey:
        """Key for reloading what is shown now."""
        return self.fetch_key

    def restore(self, state: NavigationState) -> None:
        """Replace the whole state at once, e.g. when resuming a session.

        NavigationState validates itself on construction, so only AT_ROOT
        or DRILLED states can reach here.
        """
        self._state = replace(state)

    def __repr__(self) -> str:
        return (f"NavigationController(depth={self._depth}, "
                f"root={self._state.current_root_id!r}, "
                f"history={len(self._state.history)})")
