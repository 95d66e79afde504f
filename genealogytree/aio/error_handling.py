"""
Error handling gateway for genealogytree.

This module provides the ErrorHandlingGateway that wraps another gateway
and delegates fetch errors to pluggable policies.
"""

from typing import Any, List, Optional

from ..core.node import DomainNode
from ..navigation import FetchKey
from .error_policies import CollectErrorsPolicy, ErrorPolicy, FailFastPolicy, RetryPolicy
from .gateway import TreeFetchGateway


class ErrorHandlingGateway(TreeFetchGateway):
    """
    Gateway that wraps another gateway and handles fetch errors through policies.

    fetch() is retried for as long as the policy asks for it; any other
    attribute is proxied to the wrapped gateway, so stats and cache
    controls of inner layers stay reachable.
    """

    def __init__(self, base_gateway: TreeFetchGateway, policy: Optional[ErrorPolicy] = None):
        """
        Initialize the error handling gateway.

        Args:
            base_gateway: The gateway to wrap (e.g., CachingTreeGateway)
            policy: Error handling policy (defaults to FailFastPolicy)
        """
        super().__init__(max_concurrent=base_gateway.max_concurrent)
        self._base_gateway = base_gateway
        self._policy = policy or FailFastPolicy()
        self.attempts = 0

    async def fetch(self, key: FetchKey, refresh: bool = False) -> Optional[DomainNode]:
        attempt = 0
        while True:
            self.attempts += 1
            try:
                return await self._base_gateway.fetch(key, refresh=refresh)
            except Exception as e:
                # Policy raises FetchFailure to stop
                await self._policy.handle(e, key, attempt)
                attempt += 1

    def __getattr__(self, name: str) -> Any:
        """Proxy unknown attributes to the wrapped gateway."""
        if name == '_base_gateway':
            raise AttributeError(name)
        return getattr(self._base_gateway, name)

    def get_policy(self) -> ErrorPolicy:
        return self._policy

    def set_policy(self, policy: ErrorPolicy) -> None:
        self._policy = policy

    def get_base_gateway(self) -> TreeFetchGateway:
        return self._base_gateway

    def get_gateway_chain(self) -> List[str]:
        """
        Return a list of gateway class names in the chain.

        Returns:
            List of class names from this gateway down through the chain
        """
        chain = []
        gateway = self
        while gateway is not None:
            chain.append(gateway.__class__.__name__)
            if isinstance(gateway, ErrorHandlingGateway):
                gateway = gateway.get_base_gateway()
            else:
                gateway = getattr(gateway, 'base_gateway', None)
        return chain

    async def get_stats(self) -> dict:
        stats = await self._base_gateway.get_stats()
        stats['attempts'] = self.attempts
        stats['policy'] = self._policy.__class__.__name__
        return stats

    async def close(self):
        await self._base_gateway.close()

    def __repr__(self) -> str:
        return (f"ErrorHandlingGateway({self._base_gateway!r}, "
                f"policy={self._policy.__class__.__name__})")


def create_resilient_gateway(
    base_gateway: TreeFetchGateway,
    strict: bool = False,
    max_retries: int = 2,
    verbose: bool = False
) -> ErrorHandlingGateway:
    """
    Convenience function to create an error-handling gateway.

    Args:
        base_gateway: The gateway to wrap
        strict: If True, use CollectErrorsPolicy (no retries); else RetryPolicy
        max_retries: Retries for RetryPolicy
        verbose: If True, print warnings for errors

    Returns:
        An ErrorHandlingGateway configured appropriately
    """
    if strict:
        policy = CollectErrorsPolicy(verbose=verbose)
    else:
        policy = RetryPolicy(max_retries=max_retries, verbose=verbose)
    return ErrorHandlingGateway(base_gateway, policy)
