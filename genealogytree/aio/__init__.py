"""Asynchronous side of genealogytree.

Gateways fetch trees from the backend; the session routes UI events
through the synchronous core and applies fetch results.
"""

# Gateways
from .gateway import TreeFetchGateway, HttpTreeGateway, parse_envelope
from .caching import CachingTreeGateway

# Error handling
from .error_policies import (
    ErrorPolicy,
    FailFastPolicy,
    RetryPolicy,
    CollectErrorsPolicy,
)
from .error_handling import ErrorHandlingGateway, create_resilient_gateway

# Session
from .session import GenealogySession

__all__ = [
    # Gateways
    'TreeFetchGateway',
    'HttpTreeGateway',
    'CachingTreeGateway',
    'parse_envelope',
    # Error handling
    'ErrorPolicy',
    'FailFastPolicy',
    'RetryPolicy',
    'CollectErrorsPolicy',
    'ErrorHandlingGateway',
    'create_resilient_gateway',
    # Session
    'GenealogySession',
]
