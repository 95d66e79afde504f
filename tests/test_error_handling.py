"""
Tests for fetch error policies and the error handling gateway.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from genealogytree import FetchFailure, FetchKey
from genealogytree.aio import (
    CachingTreeGateway,
    CollectErrorsPolicy,
    ErrorHandlingGateway,
    FailFastPolicy,
    RetryPolicy,
    create_resilient_gateway,
)
from genealogytree.testing import InMemoryTreeGateway

KEY = FetchKey(depth=3)


class TestErrorPolicies:
    """Test individual error policy behaviors."""

    @pytest.mark.asyncio
    async def test_fail_fast_wraps_error(self):
        policy = FailFastPolicy()

        with pytest.raises(FetchFailure) as exc_info:
            await policy.handle(ConnectionError("reset"), KEY, 0)

        assert isinstance(exc_info.value.cause, ConnectionError)
        assert exc_info.value.key == KEY

    @pytest.mark.asyncio
    async def test_fail_fast_passes_fetch_failure_through(self):
        original = FetchFailure(KEY, "down")

        with pytest.raises(FetchFailure) as exc_info:
            await FailFastPolicy().handle(original, KEY, 0)

        assert exc_info.value is original

    @pytest.mark.asyncio
    async def test_retry_policy_retries_then_gives_up(self):
        policy = RetryPolicy(max_retries=2, base_delay=0)

        assert await policy.handle(OSError("blip"), KEY, 0) is True
        assert await policy.handle(OSError("blip"), KEY, 1) is True
        with pytest.raises(FetchFailure):
            await policy.handle(OSError("blip"), KEY, 2)

        assert policy.retry_counts[KEY] == 2

    def test_retry_backoff(self):
        policy = RetryPolicy(base_delay=0.5, backoff_factor=2.0)
        assert [policy.delay_for(n) for n in range(3)] == [0.5, 1.0, 2.0]

    @pytest.mark.asyncio
    async def test_collect_errors_policy(self):
        policy = CollectErrorsPolicy()

        with pytest.raises(FetchFailure):
            await policy.handle(FetchFailure(KEY, "down"), KEY, 0)

        stats = policy.get_statistics()
        assert stats['total_errors'] == 1
        assert stats['fetch_failures'] == 1

    @pytest.mark.asyncio
    async def test_verbose_retry_prints_warning(self, capsys):
        policy = RetryPolicy(base_delay=0, verbose=True)

        await policy.handle(OSError("blip"), KEY, 0)

        assert 'WARNING' in capsys.readouterr().err


class TestErrorHandlingGateway:
    """Test the ErrorHandlingGateway wrapper."""

    @pytest.mark.asyncio
    async def test_successful_fetch_passes_through(self, sample_payload):
        base = InMemoryTreeGateway(sample_payload)
        gateway = ErrorHandlingGateway(base)

        root = await gateway.fetch(KEY)

        assert root.member_id == 'M001'
        assert gateway.attempts == 1

    @pytest.mark.asyncio
    async def test_retry_recovers(self, sample_payload):
        base = InMemoryTreeGateway(sample_payload, fail_times=2)
        gateway = ErrorHandlingGateway(base, RetryPolicy(max_retries=2, base_delay=0))

        root = await gateway.fetch(KEY)

        assert root.member_id == 'M001'
        assert base.fetch_count == 3

    @pytest.mark.asyncio
    async def test_retry_exhausted(self, sample_payload):
        base = InMemoryTreeGateway(sample_payload, fail_times=5)
        gateway = ErrorHandlingGateway(base, RetryPolicy(max_retries=2, base_delay=0))

        with pytest.raises(FetchFailure):
            await gateway.fetch(KEY)

        assert base.fetch_count == 3

    @pytest.mark.asyncio
    async def test_fail_fast_default(self):
        base = Mock(max_concurrent=10)
        base.fetch = AsyncMock(side_effect=RuntimeError("boom"))
        gateway = ErrorHandlingGateway(base)

        with pytest.raises(FetchFailure):
            await gateway.fetch(KEY)

        base.fetch.assert_called_once_with(KEY, refresh=False)

    @pytest.mark.asyncio
    async def test_proxies_inner_attributes(self, sample_payload):
        caching = CachingTreeGateway(InMemoryTreeGateway(sample_payload))
        gateway = ErrorHandlingGateway(caching)

        await gateway.fetch(KEY)
        await gateway.fetch(KEY)

        assert gateway.get_cache_stats()['cache_hits'] == 1
        assert gateway.get_gateway_chain() == [
            'ErrorHandlingGateway', 'CachingTreeGateway', 'InMemoryTreeGateway'
        ]

    def test_policy_swap(self, sample_payload):
        gateway = create_resilient_gateway(InMemoryTreeGateway(sample_payload), strict=True)
        assert isinstance(gateway.get_policy(), CollectErrorsPolicy)

        gateway.set_policy(FailFastPolicy())
        assert isinstance(gateway.get_policy(), FailFastPolicy)

    def test_default_is_retrying(self, sample_payload):
        gateway = create_resilient_gateway(InMemoryTreeGateway(sample_payload))
        assert isinstance(gateway.get_policy(), RetryPolicy)
        assert gateway.get_policy().max_retries == 2
