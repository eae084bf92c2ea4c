"""Task store interface."""

from pathlib import Path
from typing import Protocol

from horizon.core.contexts import ContextManager


class TaskStore(Protocol):
    """Interface for persisting contexts and tasks."""

    def load(self) -> ContextManager:
        """Load saved state. A missing store yields a fresh default manager."""
        ...

    def save(self, manager: ContextManager) -> None:
        """Persist state so the store is never left half-written."""
        ...

    def export(self, manager: ContextManager, path: Path | str) -> None:
        """Write state to an arbitrary file."""
        ...

    def import_from(self, path: Path | str) -> ContextManager:
        """Read and validate state from an arbitrary file. Missing file is an error."""
        ...
