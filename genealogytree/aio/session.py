"""Async genealogy viewing session.

GenealogySession is the glue between UI events and the pure core:

    event -> NavigationController / DepthController -> FetchKey
          -> gateway.fetch (await) -> transform_tree -> self.tree

Fetch results are applied with last-key-wins semantics: a result whose
key no longer equals the controller's current key is discarded, even if
it resolves after the current one. Navigation is committed before the
fetch and is never rolled back on failure.
"""

import sys
from typing import Callable, Optional

from ..config import LoadStatus
from ..core.node import DisplayNode
from ..core.search import SearchEngine, SearchOutcome, SearchStatus
from ..core.transformer import TreeTransformer
from ..depth import DepthController, DepthInput
from ..exceptions import FetchFailure
from ..navigation import FetchKey, NavigationController, NavigationState
from .error_policies import as_fetch_failure
from .gateway import TreeFetchGateway

Notifier = Callable[[SearchOutcome], None]


class GenealogySession:
    """Holds what the tree view shows and reacts to its events.

    Example:
        gateway = CachingTreeGateway(HttpTreeGateway(config))
        session = GenealogySession(gateway)
        await session.start()
        await session.on_node_click('M002')
        outcome = session.on_search_submit('priya')
    """

    def __init__(
        self,
        gateway: TreeFetchGateway,
        navigation: Optional[NavigationController] = None,
        depth_controller: Optional[DepthController] = None,
        transformer: Optional[TreeTransformer] = None,
        search_engine: Optional[SearchEngine] = None,
        notifier: Optional[Notifier] = None,
        verbose: bool = False
    ):
        """Initialize session.

        Args:
            gateway: Where trees are fetched from
            navigation: Navigation controller (a fresh one by default)
            depth_controller: Depth input handling bound to navigation
            transformer: Domain-to-display transformer
            search_engine: Search with user-facing messages
            notifier: Called with every non-silent search outcome
            verbose: Print discarded/failed fetches to stderr
        """
        self.gateway = gateway
        self.navigation = navigation or NavigationController()
        self.depth_controller = depth_controller or DepthController(self.navigation)
        self.transformer = transformer or TreeTransformer()
        self.search_engine = search_engine or SearchEngine()
        self.notifier = notifier
        self.verbose = verbose

        self._tree: Optional[DisplayNode] = None
        self.loaded_key: Optional[FetchKey] = None
        self.status = LoadStatus.IDLE
        self.last_error: Optional[FetchFailure] = None
        self.highlighted_id: Optional[str] = None
        self.search_query = ''
        self.discarded_results = 0

    # Read-only views for the rendering layer

    @property
    def state(self) -> NavigationState:
        return self.navigation.state

    @property
    def tree(self) -> Optional[DisplayNode]:
        """Display tree for the current key, or None until it has loaded.

        A tree loaded for an earlier root or depth is never exposed, so
        search and name lookups only see what belongs to the current view.
        """
        if self.loaded_key != self.navigation.fetch_key:
            return None
        return self._tree

    @property
    def depth(self) -> int:
        return self.navigation.depth

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    # Fetching

    async def load(self, key: Optional[FetchKey] = None, refresh: bool = False) -> Optional[DisplayNode]:
        """Fetch key (the current key by default) and show it if still current.

        Args:
            key: Key to fetch
            refresh: Bypass gateway caches

        Returns:
            The display tree if the result was applied, else None
        """
        key = key or self.navigation.fetch_key
        self.status = LoadStatus.LOADING

        try:
            root = await self.gateway.fetch(key, refresh=refresh)
        except Exception as e:
            failure = as_fetch_failure(e, key)
            if key != self.navigation.fetch_key:
                self._discard(key, f"failure for stale key: {failure}")
                return None
            self._tree = None
            self.loaded_key = None
            self.status = LoadStatus.ERROR
            self.last_error = failure
            if self.verbose:
                print(f"\nWARNING: Failed to load tree for {key}: {failure}", file=sys.stderr)
            return None

        if key != self.navigation.fetch_key:
            self._discard(key, "result for stale key")
            return None

        self._tree = self.transformer.transform(root) if root is not None else None
        self.loaded_key = key
        self.status = LoadStatus.READY
        self.last_error = None
        return self._tree

    def _discard(self, key: FetchKey, reason: str) -> None:
        self.discarded_results += 1
        if self.verbose:
            print(f"\nDiscarded {reason} ({key})", file=sys.stderr)

    async def start(self) -> Optional[DisplayNode]:
        """Initial load of the viewer's own tree."""
        return await self.load()

    async def refresh(self) -> Optional[DisplayNode]:
        """Reload the current key, bypassing caches."""
        return await self.load(self.navigation.refresh(), refresh=True)

    async def retry(self) -> Optional[DisplayNode]:
        """Retry after a FetchFailure."""
        return await self.refresh()

    # Navigation events

    async def on_node_click(self, member_id: str) -> Optional[DisplayNode]:
        key = self.navigation.drill_into(member_id, self.tree)
        if key is None:
            return None
        return await self.load(key)

    async def on_breadcrumb_click(self, member_id: str) -> Optional[DisplayNode]:
        key = self.navigation.navigate_to_breadcrumb(member_id)
        if key is None:
            return None
        return await self.load(key)

    async def on_reset(self) -> Optional[DisplayNode]:
        """Back to the viewer's own tree; also clears search and highlight."""
        key = self.navigation.reset_to_root()
        self.on_clear_search()
        return await self.load(key)

    async def on_depth_apply(self, raw: DepthInput) -> Optional[DisplayNode]:
        key = self.depth_controller.apply(raw)
        return await self.load(key)

    def depth_advice(self, raw: DepthInput) -> Optional[str]:
        return self.depth_controller.advise(raw)

    # Search events

    def on_search_submit(self, query: str) -> SearchOutcome:
        """Search the loaded tree and update the highlight.

        A miss clears any previous highlight; a submit while nothing is
        loaded leaves it alone.
        """
        self.search_query = query
        outcome = self.search_engine.submit(self.tree, query)

        if outcome.status is SearchStatus.FOUND:
            self.highlighted_id = outcome.highlighted_id
        elif outcome.status is not SearchStatus.NO_DATA:
            self.highlighted_id = None

        if self.notifier is not None and outcome.status is not SearchStatus.CLEARED:
            self.notifier(outcome)
        return outcome

    def on_clear_search(self) -> None:
        self.search_query = ''
        self.highlighted_id = None

    async def close(self):
        await self.gateway.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
