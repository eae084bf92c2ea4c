"""JSON file storage adapter."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from horizon.core.contexts import Context, ContextManager
from horizon.errors import DataParseError, InvalidDataFormat, StorageError

logger = logging.getLogger(__name__)

STORAGE_VERSION = "1.0.0"
TEMP_SUFFIX = ".tmp"


@dataclass
class StorageData:
    """On-disk projection of a ContextManager plus a schema version."""

    contexts: dict[str, Context]
    active_context: str
    version: str = STORAGE_VERSION

    @classmethod
    def from_manager(cls, manager: ContextManager) -> "StorageData":
        return cls(contexts=dict(manager.contexts), active_context=manager.active_context)

    def to_manager(self) -> ContextManager:
        return ContextManager.restore(self.contexts, self.active_context)

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "active_context": self.active_context,
            "contexts": {name: ctx.to_dict() for name, ctx in self.contexts.items()},
        }

    @classmethod
    def from_dict(cls, data) -> "StorageData":
        """Validate the whole document before building anything from it."""
        if not isinstance(data, dict):
            raise InvalidDataFormat("top-level value must be an object")

        version = data.get("version")
        if not isinstance(version, str):
            raise InvalidDataFormat("'version' missing or not a string")

        active = data.get("active_context")
        if not isinstance(active, str):
            raise InvalidDataFormat("'active_context' missing or not a string")

        raw_contexts = data.get("contexts")
        if not isinstance(raw_contexts, dict):
            raise InvalidDataFormat("'contexts' missing or not an object")

        contexts = {}
        for key, raw in raw_contexts.items():
            context = Context.from_dict(raw)
            if context.name != key:
                raise InvalidDataFormat(f"context key '{key}' does not match its name '{context.name}'")
            contexts[key] = context

        if active not in contexts:
            raise InvalidDataFormat(f"Active context '{active}' does not exist in contexts")

        return cls(contexts=contexts, active_context=active, version=version)


def serialize(manager: ContextManager) -> str:
    """Pretty JSON for a manager, stamped with the current storage version."""
    return json.dumps(StorageData.from_manager(manager).to_dict(), indent=2, ensure_ascii=False)


def parse(text: str, source: Path | str = "<string>") -> ContextManager:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DataParseError(source, str(e)) from e
    except RecursionError as e:
        raise DataParseError(source, "document is nested too deeply") from e
    return StorageData.from_dict(data).to_manager()


class JsonStore:
    """
    JSON file store.

    Implements TaskStore protocol. Saves go through a temp file in the same
    directory followed by os.replace, so the target is always either the old
    complete file or the new complete file.

    No locking: concurrent writers are last-writer-wins at the rename.
    """

    def __init__(self, file_path: Path | str):
        self.file_path = Path(file_path).expanduser()

    @property
    def temp_path(self) -> Path:
        return self.file_path.with_name(self.file_path.name + TEMP_SUFFIX)

    def load(self) -> ContextManager:
        """Load saved state. First run (no file) gives a default manager."""
        if not self.file_path.exists():
            logger.debug("No store at %s, starting fresh", self.file_path)
            return ContextManager()
        manager = self._read(self.file_path)
        logger.debug(
            "Loaded %d contexts, %d tasks from %s",
            len(manager.contexts),
            manager.task_count(),
            self.file_path,
        )
        return manager

    def save(self, manager: ContextManager) -> None:
        """Atomically replace the store with the manager's state."""
        payload = serialize(manager)
        temp_path = self.temp_path
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, self.file_path)
        except (OSError, UnicodeError) as e:
            self._discard_temp(temp_path)
            raise StorageError(self.file_path, str(e)) from e
        logger.debug("Saved %d contexts to %s", len(manager.contexts), self.file_path)

    def export(self, manager: ContextManager, path: Path | str) -> None:
        """Write state directly to `path`. Not atomic."""
        path = Path(path).expanduser()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(serialize(manager), encoding="utf-8")
        except (OSError, UnicodeError) as e:
            raise StorageError(path, str(e)) from e
        logger.debug("Exported %d contexts to %s", len(manager.contexts), path)

    def import_from(self, path: Path | str) -> ContextManager:
        """Read and validate another data file. Caller state is never touched."""
        path = Path(path).expanduser()
        manager = self._read(path)
        logger.debug("Imported %d contexts from %s", len(manager.contexts), path)
        return manager

    def _read(self, path: Path) -> ContextManager:
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(path, str(e)) from e
        except UnicodeDecodeError as e:
            raise DataParseError(path, str(e)) from e
        return parse(text, path)

    @staticmethod
    def _discard_temp(temp_path: Path) -> None:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("Could not remove temp file %s: %s", temp_path, e)
        else:
            logger.warning("Discarded partial write %s", temp_path)
