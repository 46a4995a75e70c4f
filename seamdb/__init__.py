"""Hybrid timestamps, key layout, service URIs and node identity for a distributed database."""

__version__ = "0.1.0"
__all__ = ["clock", "endpoint", "keys", "node", "uri"]