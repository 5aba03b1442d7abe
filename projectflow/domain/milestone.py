from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..utils.dates import format_date, parse_date, parse_timestamp
from .task import Task, TaskError


class MilestoneStatus(Enum):
    """
    Enum representing the possible status values of a milestone.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class MilestoneError(Exception):
    """Exception raised for errors in the Milestone class."""

    pass


class Milestone:
    """
    A milestone owns an ordered list of tasks.

    Task order is the display order; it carries no priority.
    """

    def __init__(
        self,
        id: str,
        title: str,
        status: str = "pending",
        due_date: Optional[Union[date, str]] = None,
        completed_at: Optional[Union[datetime, str]] = None,
        assignee_id: Optional[str] = None,
        tasks: Optional[List[Task]] = None,
        created_at: Optional[Union[datetime, str]] = None,
        priority: Optional[str] = None,
        description: str = "",
    ):
        if id is None or id == "":
            raise MilestoneError("Milestone ID cannot be None or empty")
        self.id = id

        if not title or not isinstance(title, str):
            raise MilestoneError("Milestone title must be a non-empty string")
        self.title = title

        self.status = status

        try:
            self.due_date = parse_date(due_date)
            self.completed_at = parse_timestamp(completed_at)
            self.created_at = parse_timestamp(created_at)
        except ValueError as e:
            raise MilestoneError(f"Invalid date on milestone {id}: {e}") from e

        self.assignee_id = assignee_id or None
        self.priority = priority or None
        self.description = description or ""

        self.tasks = []
        for task in tasks or []:
            self.add_task(task)

    @property
    def status(self) -> str:
        """Get the current status of the milestone."""
        return self._status.value

    @status.setter
    def status(self, value: str):
        try:
            self._status = MilestoneStatus(value)
        except ValueError:
            valid_statuses = [s.value for s in MilestoneStatus]
            raise MilestoneError(
                f"Invalid status: {value}. Must be one of {valid_statuses}"
            )

    @property
    def is_completed(self) -> bool:
        return self._status == MilestoneStatus.COMPLETED

    def add_task(self, task: Task) -> "Milestone":
        """
        Append a task to the milestone.

        Raises:
            MilestoneError: If the object is not a Task or its ID is already used
        """
        if not isinstance(task, Task):
            raise MilestoneError("Only Task objects can be added to a milestone")
        if any(t.id == task.id for t in self.tasks):
            raise MilestoneError(f"Task {task.id} already exists in milestone {self.id}")
        self.tasks.append(task)
        return self

    def get_task(self, task_id: str) -> Optional[Task]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "description": self.description,
            "tasks": [task.to_dict() for task in self.tasks],
        }
        for key, value in [
            ("dueDate", self.due_date),
            ("completedAt", self.completed_at),
            ("createdAt", self.created_at),
        ]:
            if value is not None:
                result[key] = format_date(value)
        if self.assignee_id is not None:
            result["assigneeId"] = self.assignee_id
        if self.priority is not None:
            result["priority"] = self.priority
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Milestone":
        """
        Create a milestone, and its tasks, from the store's representation.

        Raises:
            MilestoneError: If the milestone or one of its tasks is invalid
        """
        try:
            tasks = [Task.from_dict(t) for t in data.get("tasks") or []]
        except TaskError as e:
            raise MilestoneError(
                f"Invalid task in milestone {data.get('id')}: {e}"
            ) from e

        return cls(
            id=data.get("id"),
            title=data.get("title"),
            status=data.get("status", "pending"),
            due_date=data.get("dueDate"),
            completed_at=data.get("completedAt"),
            assignee_id=data.get("assigneeId"),
            tasks=tasks,
            created_at=data.get("createdAt"),
            priority=data.get("priority"),
            description=data.get("description", ""),
        )

    def __repr__(self) -> str:
        due_str = f", due={self.due_date}" if self.due_date else ""
        return (
            f"Milestone(id={self.id}, title={self.title}, status={self.status}"
            f"{due_str}, tasks={len(self.tasks)})"
        )
