from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..utils.dates import format_date, parse_date, parse_timestamp
from .milestone import Milestone, MilestoneError


class ProjectStatus(Enum):
    ACTIVE = "active"
    ON_HOLD = "on-hold"
    COMPLETED = "completed"


class PortfolioIntake(Enum):
    """Where a project sits in the intake pipeline; approved projects form the portfolio."""

    NEW = "new"
    IN_REVIEW = "in-review"
    APPROVED = "approved"


class Priority(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class Size(Enum):
    XS = "xs"
    S = "s"
    M = "m"
    L = "l"
    XL = "xl"


class ProjectError(Exception):
    """Exception raised for errors in the Project class."""

    pass


def _enum_value(enum_cls, value, field):
    try:
        return enum_cls(value)
    except ValueError:
        valid = [e.value for e in enum_cls]
        raise ProjectError(f"Invalid {field}: {value}. Must be one of {valid}")


class Project:
    """
    Root of the project -> milestone -> task tree.

    Milestones keep insertion order, which is the display order.
    """

    def __init__(
        self,
        id: str,
        name: str,
        status: str = "active",
        portfolio_intake: str = "new",
        priority: str = "medium",
        size: str = "m",
        due_date: Optional[Union[date, str]] = None,
        created_at: Optional[Union[datetime, str]] = None,
        team_id: Optional[str] = None,
        milestones: Optional[List[Milestone]] = None,
        description: str = "",
        status_updates: Optional[List[Dict[str, Any]]] = None,
    ):
        """
        Initialize a new Project.

        Args:
            id: Unique identifier for the project
            name: Display name
            status: One of active, on-hold, completed
            portfolio_intake: One of new, in-review, approved
            priority: One of low, medium, high, critical
            size: T-shirt size, one of xs, s, m, l, xl
            due_date: Target completion date
            created_at: Creation timestamp
            team_id: Owning team
            milestones: Ordered milestones
            description: Free-form description
            status_updates: Weekly status update records, newest first

        Raises:
            ProjectError: If any input validation fails
        """
        if id is None or id == "":
            raise ProjectError("Project ID cannot be None or empty")
        self.id = id

        if not name or not isinstance(name, str):
            raise ProjectError("Project name must be a non-empty string")
        self.name = name

        self._status = _enum_value(ProjectStatus, status, "status")
        self._intake = _enum_value(PortfolioIntake, portfolio_intake, "portfolio intake")
        self._priority = _enum_value(Priority, priority, "priority")
        self._size = _enum_value(Size, size, "size")

        try:
            self.due_date = parse_date(due_date)
            self.created_at = parse_timestamp(created_at)
        except ValueError as e:
            raise ProjectError(f"Invalid date on project {id}: {e}") from e

        self.team_id = team_id or None
        self.description = description or ""
        self.status_updates = list(status_updates or [])

        self.milestones = []
        for milestone in milestones or []:
            self.add_milestone(milestone)

    @property
    def status(self) -> str:
        return self._status.value

    @status.setter
    def status(self, value: str):
        self._status = _enum_value(ProjectStatus, value, "status")

    @property
    def portfolio_intake(self) -> str:
        return self._intake.value

    @portfolio_intake.setter
    def portfolio_intake(self, value: str):
        self._intake = _enum_value(PortfolioIntake, value, "portfolio intake")

    @property
    def priority(self) -> str:
        return self._priority.value

    @priority.setter
    def priority(self, value: str):
        self._priority = _enum_value(Priority, value, "priority")

    @property
    def size(self) -> str:
        return self._size.value

    @size.setter
    def size(self, value: str):
        self._size = _enum_value(Size, value, "size")

    @property
    def is_completed(self) -> bool:
        return self._status == ProjectStatus.COMPLETED

    def add_milestone(self, milestone: Milestone) -> "Project":
        """
        Append a milestone to the project.

        Raises:
            ProjectError: If the object is not a Milestone or its ID is already used
        """
        if not isinstance(milestone, Milestone):
            raise ProjectError("Only Milestone objects can be added to a project")
        if any(m.id == milestone.id for m in self.milestones):
            raise ProjectError(
                f"Milestone {milestone.id} already exists in project {self.id}"
            )
        self.milestones.append(milestone)
        return self

    def get_milestone(self, milestone_id: str) -> Optional[Milestone]:
        for milestone in self.milestones:
            if milestone.id == milestone_id:
                return milestone
        return None

    def iter_tasks(self):
        """Yield ``(milestone, task)`` pairs in display order."""
        for milestone in self.milestones:
            for task in milestone.tasks:
                yield milestone, task

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the project tree to the store's dictionary representation.

        Returns:
            dict: Dictionary with camelCase keys
        """
        result = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "status": self.status,
            "portfolioIntake": self.portfolio_intake,
            "priority": self.priority,
            "size": self.size,
            "milestones": [m.to_dict() for m in self.milestones],
            "statusUpdates": [dict(u) for u in self.status_updates],
        }
        if self.due_date is not None:
            result["dueDate"] = format_date(self.due_date)
        if self.created_at is not None:
            result["createdAt"] = format_date(self.created_at)
        if self.team_id is not None:
            result["teamId"] = self.team_id
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        """
        Create a project tree from the store's dictionary representation.

        Args:
            data: Dictionary with camelCase keys

        Returns:
            Project: New project instance

        Raises:
            ProjectError: If the project or anything below it is invalid
        """
        try:
            milestones = [Milestone.from_dict(m) for m in data.get("milestones") or []]
        except MilestoneError as e:
            raise ProjectError(f"Invalid milestone in project {data.get('id')}: {e}") from e

        return cls(
            id=data.get("id"),
            name=data.get("name"),
            status=data.get("status") or "active",
            portfolio_intake=data.get("portfolioIntake") or "new",
            priority=data.get("priority") or "medium",
            size=data.get("size") or "m",
            due_date=data.get("dueDate"),
            created_at=data.get("createdAt"),
            team_id=data.get("teamId"),
            milestones=milestones,
            description=data.get("description", ""),
            status_updates=data.get("statusUpdates"),
        )

    def __repr__(self) -> str:
        return (
            f"Project(id={self.id}, name={self.name}, status={self.status}, "
            f"priority={self.priority}, milestones={len(self.milestones)})"
        )
