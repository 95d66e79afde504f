"""Testing utilities for genealogytree consumers."""

from .fixtures import InMemoryTreeGateway, find_payload, member, prune

__all__ = ['InMemoryTreeGateway', 'find_payload', 'member', 'prune']
