"""Adapters exposing the bank use cases to operators and clients."""

__all__ = []
