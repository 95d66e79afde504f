"""Domain-to-display tree transformation.

Turns the nullable backend tree into a display tree that always keeps
its binary shape: a member with at least one child gets exactly two
display children, the missing side becoming an EmptyNode. A member with
no children at all gets none.
"""

from typing import Any, Dict, Optional

from ..config import Position
from .node import DisplayNode, DomainNode, EmptyNode, OccupiedNode


def transform_tree(
    node: Optional[DomainNode],
    position: Position = Position.ROOT
) -> DisplayNode:
    """Transform a domain tree into a display tree.

    Pure and deterministic: identical input gives structurally equal
    output, and the input is never modified.

    Args:
        node: Domain node to transform, or None for an empty slot
        position: Slot the node occupies under its parent

    Returns:
        EmptyNode for None, otherwise an OccupiedNode whose children are
        either None or a (left, right) pair
    """
    if node is None:
        return EmptyNode(position)

    children = None
    if node.left is not None or node.right is not None:
        children = (
            transform_tree(node.left, Position.LEFT),
            transform_tree(node.right, Position.RIGHT),
        )

    return OccupiedNode(
        member_id=node.member_id,
        full_name=node.full_name,
        rank=node.rank,
        position=node.position or position,
        is_active=node.is_active,
        metrics=node.metrics,
        profile=node.profile,
        children=children,
    )


class TreeTransformer:
    """Stateless object wrapper around transform_tree.

    Useful where a collaborator is injected rather than imported.
    """

    def transform(
        self,
        node: Optional[DomainNode],
        position: Position = Position.ROOT
    ) -> DisplayNode:
        return transform_tree(node, position)

    def transform_payload(self, payload: Optional[Dict[str, Any]]) -> DisplayNode:
        """Parse backend JSON and transform it in one step.

        Args:
            payload: Decoded node object (the 'data' member of the
                response envelope), or None

        Returns:
            Display tree rooted at the payload
        """
        return transform_tree(DomainNode.from_dict(payload))
