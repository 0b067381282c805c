"""Infrastructure layer implementations."""

from purchasing.infrastructure import storage

__all__ = ["storage"]
