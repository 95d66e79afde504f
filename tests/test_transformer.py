"""
Tests for the domain-to-display tree transformation.

Covers the two structural rules:
1. children is either absent or exactly two entries
2. children is present only if the member has at least one real child
"""

from genealogytree import (
    DomainNode,
    EmptyNode,
    OccupiedNode,
    Position,
    TreeTransformer,
    transform_tree,
)
from genealogytree.core.traverser import PreOrderTraverser
from genealogytree.testing import member


def _domain(payload):
    return DomainNode.from_dict(payload)


def _assert_binary_shape(tree, source):
    """Walk display and domain trees together checking both rules."""
    if source is None:
        assert isinstance(tree, EmptyNode)
        return
    assert isinstance(tree, OccupiedNode)
    if source.left is None and source.right is None:
        assert tree.children is None
        return
    assert tree.children is not None
    assert len(tree.children) == 2
    _assert_binary_shape(tree.children[0], source.left)
    _assert_binary_shape(tree.children[1], source.right)


class TestTransformScenarios:
    """Concrete shapes from the product behavior."""

    def test_left_leaf_only(self):
        tree = transform_tree(_domain(member('A', 'Anil', left=member('B', 'Bob'))))

        assert isinstance(tree, OccupiedNode)
        assert tree.member_id == 'A'
        left, right = tree.children
        assert isinstance(left, OccupiedNode)
        assert left.member_id == 'B'
        assert left.children is None
        assert right == EmptyNode(Position.RIGHT)

    def test_lone_root_has_no_children(self):
        tree = transform_tree(_domain(member('A', 'Anil')))

        assert isinstance(tree, OccupiedNode)
        assert tree.children is None
        assert not tree.has_children
        assert 'children' not in tree.to_dict()

    def test_none_becomes_empty_placeholder(self):
        assert transform_tree(None) == EmptyNode(Position.ROOT)
        assert transform_tree(None, Position.LEFT) == EmptyNode(Position.LEFT)


class TestTransformInvariants:
    """Structural rules over a larger tree."""

    def test_binary_shape(self, sample_payload):
        source = _domain(sample_payload)
        _assert_binary_shape(transform_tree(source), source)

    def test_every_children_tuple_has_two_entries(self, sample_tree):
        for node, _ in PreOrderTraverser().traverse(sample_tree):
            if not node.is_empty and node.children is not None:
                assert len(node.children) == 2

    def test_fields_copied_verbatim(self, sample_payload):
        source = _domain(sample_payload)
        tree = transform_tree(source)

        assert tree.full_name == source.full_name
        assert tree.rank == source.rank
        assert tree.is_active == source.is_active
        assert tree.metrics == source.metrics
        assert tree.children[1].children[1].is_active is False

    def test_transform_is_pure(self, sample_payload):
        source = _domain(sample_payload)
        snapshot = _domain(sample_payload)

        first = transform_tree(source)
        second = transform_tree(source)

        assert first == second
        assert first is not second
        assert source == snapshot

    def test_transformer_wrapper(self, sample_payload):
        transformer = TreeTransformer()

        assert transformer.transform_payload(sample_payload) == transform_tree(_domain(sample_payload))
        assert transformer.transform_payload(None) == EmptyNode(Position.ROOT)
