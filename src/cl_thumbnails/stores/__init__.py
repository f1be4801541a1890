"""Media store implementations."""

from .local_store import LocalMediaStore

__all__ = ["LocalMediaStore"]
