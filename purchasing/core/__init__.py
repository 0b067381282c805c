"""Core domain layer - entities, interfaces, services and exceptions."""

from purchasing.core import entities, exceptions, interfaces

__all__ = ["entities", "interfaces", "exceptions"]
