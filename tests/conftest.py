"""Shared fixtures for the genealogytree test suite."""

import pytest

from genealogytree import transform_tree, DomainNode
from genealogytree.testing import member


def build_sample_payload():
    """Five-member downline used across tests.

    Structure:
    M001 Asha Rao
    ├── L: M002 Priya Nair
    │   ├── L: M004 Ravi Kumar
    │   └── R: (empty)
    └── R: M003 Bob Singh
        ├── L: (empty)
        └── R: M005 Priyanka Das (inactive)
    """
    return member(
        'M001', 'Asha Rao', rank='Crown Diamond', position='root',
        leftTeamCount=2, rightTeamCount=2, leftLegBV=1500, rightLegBV='820.50',
        left=member(
            'M002', 'Priya Nair', rank='Gold', position='left',
            left=member('M004', 'Ravi Kumar', rank='Silver', position='left'),
        ),
        right=member(
            'M003', 'Bob Singh', rank='Platinum', position='right',
            right=member('M005', 'Priyanka Das', position='right', status='inactive'),
        ),
    )


@pytest.fixture
def sample_payload():
    return build_sample_payload()


@pytest.fixture
def sample_tree(sample_payload):
    return transform_tree(DomainNode.from_dict(sample_payload))
