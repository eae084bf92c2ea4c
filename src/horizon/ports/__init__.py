"""Ports - interfaces/protocols for external dependencies."""

from .store import TaskStore

__all__ = [
    "TaskStore",
]
