"""Async tree fetch gateways.

A gateway turns a FetchKey into the depth-pruned DomainNode tree rooted
at key.root_id (or at the viewer when root_id is None). Gateways can be
stacked: caching and error handling wrap any base gateway.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Set

import httpx

from ..config import GatewayConfig
from ..core.node import DomainNode
from ..exceptions import FetchFailure, MalformedPayload
from ..navigation import FetchKey


class TreeFetchGateway(ABC):
    """Abstract base class for tree fetch gateways.

    Subclasses implement fetch(); everything else has a usable default.
    """

    def __init__(self, max_concurrent: int = 10):
        """Initialize gateway with concurrency control.

        Args:
            max_concurrent: Maximum requests in flight at once
        """
        self.max_concurrent = max_concurrent
        self.semaphore = asyncio.Semaphore(max_concurrent)
        self._capabilities = self._define_capabilities()

    @abstractmethod
    async def fetch(self, key: FetchKey, refresh: bool = False) -> Optional[DomainNode]:
        """Fetch the tree identified by key.

        Args:
            key: Depth and root to fetch
            refresh: Ask stacked caches to bypass stored results

        Returns:
            Root DomainNode, or None when the subject has no team

        Raises:
            FetchFailure: On network or backend errors
        """
        pass

    def supports_capability(self, capability: str) -> bool:
        return capability in self._capabilities

    def _define_capabilities(self) -> Set[str]:
        """Define gateway capabilities.

        Override in subclasses to declare supported features.
        """
        return {'fetch'}

    async def get_stats(self) -> dict:
        return {
            'max_concurrent': self.max_concurrent,
        }

    async def close(self):
        """Release resources such as HTTP connections."""
        pass

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()


def parse_envelope(key: FetchKey, payload: Any) -> Optional[DomainNode]:
    """Unwrap a {"data": ...} response body into a DomainNode tree.

    Raises:
        MalformedPayload: If the envelope or the node data has the wrong shape
    """
    if not isinstance(payload, dict) or 'data' not in payload:
        raise MalformedPayload(key, "Response is not a {'data': ...} envelope")
    try:
        return DomainNode.from_dict(payload['data'])
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise MalformedPayload(key, f"Malformed tree data: {e}", cause=e) from e


class HttpTreeGateway(TreeFetchGateway):
    """Fetches trees from the genealogy backend over HTTP.

    Example:
        config = GatewayConfig(base_url="https://api.example.com", token=token)
        async with HttpTreeGateway(config) as gateway:
            root = await gateway.fetch(FetchKey(depth=3))
    """

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        max_concurrent: int = 10
    ):
        """Initialize HTTP gateway.

        Args:
            config: Endpoint, token and timeout settings
            client: Existing client to use; it is not closed by this gateway
            transport: Transport for a gateway-owned client (tests use
                httpx.MockTransport)
            max_concurrent: Maximum requests in flight at once
        """
        super().__init__(max_concurrent=max_concurrent)
        self.config = config or GatewayConfig()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            headers=self.config.request_headers(),
            timeout=self.config.timeout,
            transport=transport,
        )
        self.request_count = 0
        self.failure_count = 0

    def _define_capabilities(self) -> Set[str]:
        return super()._define_capabilities() | {'http'}

    def build_request(self, key: FetchKey) -> Dict[str, Any]:
        """Path and query parameters for a key."""
        return {
            'url': self.config.path_for(key.root_id),
            'params': {'depth': key.depth},
        }

    async def fetch(self, key: FetchKey, refresh: bool = False) -> Optional[DomainNode]:
        request = self.build_request(key)
        async with self.semaphore:
            self.request_count += 1
            try:
                response = await self._client.get(request['url'], params=request['params'])
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPStatusError as e:
                self.failure_count += 1
                raise FetchFailure(
                    key, f"Backend returned {e.response.status_code}", cause=e
                ) from e
            except httpx.HTTPError as e:
                self.failure_count += 1
                raise FetchFailure(key, f"Request failed: {e}", cause=e) from e
            except ValueError as e:
                self.failure_count += 1
                raise MalformedPayload(key, "Response body is not JSON", cause=e) from e

        return parse_envelope(key, payload)

    async def get_stats(self) -> dict:
        stats = await super().get_stats()
        stats.update({
            'base_url': self.config.base_url,
            'request_count': self.request_count,
            'failure_count': self.failure_count,
        })
        return stats

    async def close(self):
        if self._owns_client:
            await self._client.aclose()
