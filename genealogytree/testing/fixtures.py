"""Test fixtures for genealogytree consumers.

These helpers let test suites build backend-shaped payloads and serve
them through a gateway without any network.
"""

import asyncio
from typing import Any, Dict, List, Optional

from ..aio.gateway import TreeFetchGateway, parse_envelope
from ..core.node import DomainNode
from ..exceptions import FetchFailure
from ..navigation import FetchKey


def member(
    member_id: str,
    full_name: str,
    left: Optional[Dict[str, Any]] = None,
    right: Optional[Dict[str, Any]] = None,
    **fields: Any
) -> Dict[str, Any]:
    """Build one node of a backend tree payload.

    Extra keyword arguments are merged in verbatim, so use backend key
    names: member('M1', 'Asha', rank='Gold', leftLegBV=1200).

    Example:
        tree = member('M001', 'Asha Rao',
                      left=member('M002', 'Priya Nair'),
                      right=member('M003', 'Bob Singh'))
    """
    node: Dict[str, Any] = {
        'memberId': member_id,
        'fullName': full_name,
        'rank': fields.pop('rank', 'Associate'),
        'status': fields.pop('status', 'active'),
        'left': left,
        'right': right,
    }
    node.update(fields)
    return node


def prune(payload: Optional[Dict[str, Any]], depth: int) -> Optional[Dict[str, Any]]:
    """Copy payload keeping the root plus depth levels of descendants."""
    if payload is None:
        return None
    pruned = dict(payload)
    if depth <= 0:
        pruned['left'] = None
        pruned['right'] = None
    else:
        pruned['left'] = prune(payload.get('left'), depth - 1)
        pruned['right'] = prune(payload.get('right'), depth - 1)
    return pruned


def find_payload(payload: Optional[Dict[str, Any]], member_id: str) -> Optional[Dict[str, Any]]:
    """Pre-order search of a raw payload by memberId."""
    if payload is None:
        return None
    if payload.get('memberId') == member_id:
        return payload
    return (find_payload(payload.get('left'), member_id)
            or find_payload(payload.get('right'), member_id))


class InMemoryTreeGateway(TreeFetchGateway):
    """Gateway serving one full payload, pruned per request like the backend.

    Attributes:
        calls: Every FetchKey requested, in order
    """

    def __init__(
        self,
        payload: Optional[Dict[str, Any]],
        delay: float = 0.0,
        fail_times: int = 0,
        delays: Optional[Dict[Optional[str], float]] = None
    ):
        """Initialize gateway.

        Args:
            payload: Complete tree as the viewer's own root
            delay: Seconds to sleep before answering
            fail_times: Number of initial fetches that raise FetchFailure
            delays: Per-root delay overrides, keyed by root_id
        """
        super().__init__()
        self.payload = payload
        self.delay = delay
        self.delays = delays or {}
        self.fail_times = fail_times
        self.calls: List[FetchKey] = []

    async def fetch(self, key: FetchKey, refresh: bool = False) -> Optional[DomainNode]:
        self.calls.append(key)
        delay = self.delays.get(key.root_id, self.delay)
        if delay:
            await asyncio.sleep(delay)

        if self.fail_times > 0:
            self.fail_times -= 1
            raise FetchFailure(key, "Simulated backend outage")

        if key.root_id is None:
            subject = self.payload
        else:
            subject = find_payload(self.payload, key.root_id)
        return parse_envelope(key, {'data': prune(subject, key.depth)})

    @property
    def fetch_count(self) -> int:
        return len(self.calls)
