"""In-memory member search over a loaded display tree.

Search never fetches: it only sees what the current depth brought in,
which is why a miss suggests increasing the depth.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .node import DisplayNode, OccupiedNode
from .traverser import find_first


class SearchStatus(Enum):
    """Outcome kinds of a submitted search."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    CLEARED = "cleared"       # Blank query: clear the highlight
    NO_DATA = "no_data"       # Nothing loaded yet


@dataclass(frozen=True)
class SearchOutcome:
    """Result of a search submit, ready for the notification layer."""

    status: SearchStatus
    highlighted_id: Optional[str] = None
    node: Optional[OccupiedNode] = None
    title: str = ''
    message: str = ''

    @property
    def found(self) -> bool:
        return self.status is SearchStatus.FOUND


def matches(node: OccupiedNode, term: str) -> bool:
    """Case-insensitive substring match on name or member id.

    Args:
        node: Member to test
        term: Already stripped and lower-cased query
    """
    return term in node.full_name.lower() or term in node.member_id.lower()


def search_tree(tree: Optional[DisplayNode], query: str) -> Optional[OccupiedNode]:
    """Find the first member matching query in pre-order.

    Args:
        tree: Loaded display tree (None when nothing is loaded)
        query: Raw user text

    Returns:
        Matching node, or None for a blank query or no match
    """
    term = (query or '').strip().lower()
    if not term:
        return None
    return find_first(tree, lambda node: matches(node, term))


class SearchEngine:
    """Wraps search_tree with the messages shown to the user."""

    def submit(self, tree: Optional[DisplayNode], query: str) -> SearchOutcome:
        if not (query or '').strip():
            return SearchOutcome(status=SearchStatus.CLEARED)

        if tree is None:
            return SearchOutcome(
                status=SearchStatus.NO_DATA,
                title='No data',
                message='Tree data is not loaded yet.',
            )

        node = search_tree(tree, query)
        if node is None:
            return SearchOutcome(
                status=SearchStatus.NOT_FOUND,
                title='Not found',
                message='Member not found in current tree view. Try increasing tree depth.',
            )

        return SearchOutcome(
            status=SearchStatus.FOUND,
            highlighted_id=node.member_id,
            node=node,
            title='Member found!',
            message=f'Highlighting {node.full_name} ({node.member_id})',
        )
