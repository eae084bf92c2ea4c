"""Pure task domain logic - no I/O dependencies."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from horizon.errors import InvalidDataFormat, InvalidPriority, InvalidTimeHorizon


class TimeHorizon(Enum):
    """When a task should be done. Values are the on-disk names."""

    SHORT_TERM = "ShortTerm"  # day-to-day
    MID_TERM = "MidTerm"  # within a month
    LONG_TERM = "LongTerm"  # within a year

    @property
    def rank(self) -> int:
        return _HORIZON_RANK[self]

    @classmethod
    def parse(cls, raw: str) -> "TimeHorizon":
        """Parse user input such as 'short', 'Mid-Term' or 'longterm'."""
        try:
            return _HORIZON_ALIASES[raw.strip().lower()]
        except KeyError:
            raise InvalidTimeHorizon(raw) from None


class Priority(Enum):
    """Task importance. Values are the on-disk names."""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    @classmethod
    def parse(cls, raw: str) -> "Priority":
        """Parse user input such as 'h', 'med' or 'LOW'."""
        try:
            return _PRIORITY_ALIASES[raw.strip().lower()]
        except KeyError:
            raise InvalidPriority(raw) from None


# Explicit orderings: ShortTerm < MidTerm < LongTerm, Low < Medium < High
_HORIZON_RANK = {
    TimeHorizon.SHORT_TERM: 0,
    TimeHorizon.MID_TERM: 1,
    TimeHorizon.LONG_TERM: 2,
}

_PRIORITY_RANK = {
    Priority.LOW: 0,
    Priority.MEDIUM: 1,
    Priority.HIGH: 2,
}

_HORIZON_ALIASES = {
    "short": TimeHorizon.SHORT_TERM,
    "shortterm": TimeHorizon.SHORT_TERM,
    "short-term": TimeHorizon.SHORT_TERM,
    "mid": TimeHorizon.MID_TERM,
    "midterm": TimeHorizon.MID_TERM,
    "mid-term": TimeHorizon.MID_TERM,
    "long": TimeHorizon.LONG_TERM,
    "longterm": TimeHorizon.LONG_TERM,
    "long-term": TimeHorizon.LONG_TERM,
}

_PRIORITY_ALIASES = {
    "low": Priority.LOW,
    "l": Priority.LOW,
    "medium": Priority.MEDIUM,
    "med": Priority.MEDIUM,
    "m": Priority.MEDIUM,
    "high": Priority.HIGH,
    "hi": Priority.HIGH,
    "h": Priority.HIGH,
}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Task:
    """A single to-do item.

    `id` and `created_at` are fixed at construction; use Task.new() to get
    fresh values for both.
    """

    id: str
    description: str
    time_horizon: TimeHorizon
    priority: Priority
    completed: bool = False
    created_at: str = field(default_factory=_utc_now)

    @classmethod
    def new(
        cls,
        description: str,
        time_horizon: TimeHorizon = TimeHorizon.SHORT_TERM,
        priority: Priority = Priority.MEDIUM,
    ) -> "Task":
        """Create an incomplete task with a new UUID-v4 id."""
        return cls(
            id=str(uuid.uuid4()),
            description=description,
            time_horizon=time_horizon,
            priority=priority,
        )

    def mark_complete(self) -> None:
        """Mark as done. Calling it again is a no-op."""
        self.completed = True

    def update(
        self,
        description: str | None = None,
        time_horizon: TimeHorizon | None = None,
        priority: Priority | None = None,
    ) -> None:
        """Replace the given fields, leaving the others untouched."""
        if description is not None:
            self.description = description
        if time_horizon is not None:
            self.time_horizon = time_horizon
        if priority is not None:
            self.priority = priority

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "time_horizon": self.time_horizon.value,
            "priority": self.priority.value,
            "completed": self.completed,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Task":
        """Create Task from its stored JSON form."""
        if not isinstance(data, dict):
            raise InvalidDataFormat(f"task entry must be an object, got {type(data).__name__}")

        for key in ("id", "description", "created_at"):
            if not isinstance(data.get(key), str):
                raise InvalidDataFormat(f"task field '{key}' missing or not a string")

        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise InvalidDataFormat(f"task {data['id']}: 'completed' must be a boolean")

        try:
            horizon = TimeHorizon(data.get("time_horizon"))
        except ValueError:
            raise InvalidDataFormat(
                f"task {data['id']}: unknown time_horizon {data.get('time_horizon')!r}"
            ) from None
        try:
            priority = Priority(data.get("priority"))
        except ValueError:
            raise InvalidDataFormat(
                f"task {data['id']}: unknown priority {data.get('priority')!r}"
            ) from None

        return cls(
            id=data["id"],
            description=data["description"],
            time_horizon=horizon,
            priority=priority,
            completed=completed,
            created_at=data["created_at"],
        )


def sort_key(task: Task) -> tuple[int, int]:
    """Canonical display order: horizon ascending, then priority descending."""
    return (task.time_horizon.rank, -task.priority.rank)


def sort_tasks(tasks: list[Task]) -> list[Task]:
    """Stable sort into canonical display order. Pure function - no I/O."""
    return sorted(tasks, key=sort_key)


def filter_by_horizon(tasks: list[Task], horizon: TimeHorizon) -> list[Task]:
    """Tasks with exactly this horizon, original order kept."""
    return [t for t in tasks if t.time_horizon == horizon]


def filter_incomplete(tasks: list[Task]) -> list[Task]:
    return [t for t in tasks if not t.completed]
