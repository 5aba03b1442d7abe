import math
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from ..utils.dates import format_date, parse_date, parse_timestamp


class TaskStatus(Enum):
    """
    Enum representing the possible status values of a task.
    """

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class TaskError(Exception):
    """Exception raised for errors in the Task class."""

    pass


def _parse_hours(value) -> Optional[float]:
    """Read estimated hours; blanks, zero, negatives and NaN/inf count as not estimated."""
    if value is None:
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise TaskError(f"Estimated hours must be a number, got {value!r}")
    if not math.isfinite(hours) or hours <= 0:
        return None
    return hours


class Task:
    """
    A unit of work inside a milestone.

    ``end_date`` is the planned finish date used for schedule variance;
    ``start_date``/``end_date`` together, or ``estimated_hours``, give the
    task its effort weight.
    """

    def __init__(
        self,
        id: str,
        title: str,
        status: str = "pending",
        start_date: Optional[Union[date, str]] = None,
        end_date: Optional[Union[date, str]] = None,
        estimated_hours: Optional[Union[float, str]] = None,
        completed_at: Optional[Union[datetime, str]] = None,
        assignee_id: Optional[str] = None,
        description: str = "",
    ):
        """
        Initialize a new Task.

        Args:
            id: Unique identifier for the task
            title: Short title of the task
            status: One of pending, in-progress, completed
            start_date: Planned start date
            end_date: Planned end date
            estimated_hours: Estimated effort in hours
            completed_at: Timestamp of completion (only meaningful when completed)
            assignee_id: Team member the task is assigned to
            description: Free-form notes

        Raises:
            TaskError: If any input validation fails
        """
        if id is None or id == "":
            raise TaskError("Task ID cannot be None or empty")
        self.id = id

        if not title or not isinstance(title, str):
            raise TaskError("Task title must be a non-empty string")
        self.title = title

        self.status = status

        try:
            self.start_date = parse_date(start_date)
            self.end_date = parse_date(end_date)
            self.completed_at = parse_timestamp(completed_at)
        except ValueError as e:
            raise TaskError(f"Invalid date on task {id}: {e}") from e

        self.estimated_hours = _parse_hours(estimated_hours)
        self.assignee_id = assignee_id or None
        self.description = description or ""

    @property
    def status(self) -> str:
        """Get the current status of the task."""
        return self._status.value

    @status.setter
    def status(self, value: str):
        """Set the status of the task."""
        try:
            self._status = TaskStatus(value)
        except ValueError:
            valid_statuses = [s.value for s in TaskStatus]
            raise TaskError(f"Invalid status: {value}. Must be one of {valid_statuses}")

    @property
    def is_completed(self) -> bool:
        return self._status == TaskStatus.COMPLETED

    @property
    def has_date_range(self) -> bool:
        """True when both planned start and end dates are set."""
        return self.start_date is not None and self.end_date is not None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert task to the store's dictionary representation.

        Returns:
            dict: Dictionary with camelCase keys
        """
        result = {
            "id": self.id,
            "title": self.title,
            "status": self.status,
            "description": self.description,
        }
        if self.start_date is not None:
            result["startDate"] = format_date(self.start_date)
        if self.end_date is not None:
            result["endDate"] = format_date(self.end_date)
        if self.estimated_hours is not None:
            result["estimatedHours"] = self.estimated_hours
        if self.completed_at is not None:
            result["completedAt"] = format_date(self.completed_at)
        if self.assignee_id is not None:
            result["assigneeId"] = self.assignee_id
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """
        Create a task from the store's dictionary representation.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            Task: New task instance
        """
        return cls(
            id=data.get("id"),
            title=data.get("title"),
            status=data.get("status", "pending"),
            start_date=data.get("startDate"),
            end_date=data.get("endDate"),
            estimated_hours=data.get("estimatedHours"),
            completed_at=data.get("completedAt"),
            assignee_id=data.get("assigneeId"),
            description=data.get("description", ""),
        )

    def __repr__(self) -> str:
        dates_str = ""
        if self.has_date_range:
            dates_str = f", {self.start_date}..{self.end_date}"
        elif self.end_date:
            dates_str = f", due={self.end_date}"
        return f"Task(id={self.id}, title={self.title}, status={self.status}{dates_str})"
