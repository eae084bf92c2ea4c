"""Error taxonomy for Horizon.

Every user-facing failure derives from HorizonError so the CLI can render it
and pick an exit code. InvariantViolation is not a HorizonError: it means a
bug, and the CLI lets it propagate.
"""


class HorizonError(Exception):
    """Base class for failures the user can act on."""

    pass


class TaskNotFound(HorizonError):
    """Raised when no task matches an id or id prefix."""

    def __init__(self, identifier: str, message: str | None = None):
        self.identifier = identifier
        super().__init__(message or f"Task not found: {identifier}")


class AmbiguousTaskId(TaskNotFound):
    """Raised when an id prefix matches more than one task."""

    def __init__(self, prefix: str, matches: list[str]):
        self.matches = list(matches)
        super().__init__(
            prefix,
            f"Task not found: ambiguous id '{prefix}' matches: {', '.join(self.matches)}",
        )


class ContextNotFound(HorizonError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Context not found: {name}")


class ContextAlreadyExists(HorizonError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Context already exists: {name}")


class CannotDeleteLastContext(HorizonError):
    def __init__(self):
        super().__init__("Cannot delete the last context")


class ContextInUse(HorizonError):
    """Raised when deleting the active context."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Cannot delete active context '{name}'. Switch to another context first."
        )


class InvalidTimeHorizon(HorizonError):
    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Invalid time horizon: {raw} (expected short, mid or long)")


class InvalidPriority(HorizonError):
    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Invalid priority: {raw} (expected low, medium or high)")


class InvalidDataFormat(HorizonError):
    def __init__(self, description: str):
        self.description = description
        super().__init__(f"Invalid data format: {description}")


class DataParseError(HorizonError):
    """Raised when a data file is not valid JSON."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Could not parse {path}: {reason}")


class StorageError(HorizonError):
    """Raised when reading or writing a data file fails."""

    def __init__(self, path, reason: str):
        self.path = path
        super().__init__(f"Storage error for {path}: {reason}")


class InvariantViolation(RuntimeError):
    """Internal state broke a guaranteed invariant. Indicates a bug."""

    pass
