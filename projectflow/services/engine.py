import logging
import math
from typing import Any, Dict

from .completion_strategies import CompletionDateStrategy, TodayFallback, get_strategy
from .effort import HOURS_PER_DAY, task_effort
from .portfolio import (
    UPCOMING_LIMIT,
    UPCOMING_WINDOW_DAYS,
    latest_health,
    portfolio_summary,
    team_workload,
    upcoming_deadlines,
)
from .progress import milestone_progress, project_progress
from .risk import (
    AMBER_WINDOW_DAYS,
    REASON_LIMIT,
    is_project_overdue,
    project_rag_status,
    projects_at_risk,
)
from .variance import OFF_SCHEDULE_LIMIT, off_schedule_tasks, task_schedule_variance

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Exception raised for invalid engine configuration."""

    pass


class MetricsEngine:
    """
    Derives progress, schedule and risk metrics from a portfolio snapshot.

    The engine holds configuration only. Every method is a pure function of
    its arguments and the injected ``now``; nothing is cached between calls
    and the entity tree is never modified.
    """

    CONFIG_KEYS = (
        "hours_per_day",
        "upcoming_window_days",
        "upcoming_limit",
        "amber_window_days",
        "off_schedule_limit",
        "reason_limit",
        "completion_strategy",
    )

    def __init__(
        self,
        hours_per_day: float = HOURS_PER_DAY,
        upcoming_window_days: int = UPCOMING_WINDOW_DAYS,
        upcoming_limit: int = UPCOMING_LIMIT,
        amber_window_days: int = AMBER_WINDOW_DAYS,
        off_schedule_limit: int = OFF_SCHEDULE_LIMIT,
        reason_limit: int = REASON_LIMIT,
        completion_strategy: CompletionDateStrategy = None,
    ):
        """
        Initialize the engine.

        Args:
            hours_per_day: Working day length used to turn hours into days
            upcoming_window_days: Look-ahead window for upcoming deadlines
            upcoming_limit: Maximum number of upcoming deadlines reported
            amber_window_days: Look-ahead window for amber RAG status
            off_schedule_limit: Maximum number of off-schedule tasks reported
            reason_limit: Example reasons kept per at-risk project
            completion_strategy: Actual-date rule for completed tasks without
                a completion timestamp (default: today)

        Raises:
            ConfigError: If any setting is out of range
        """
        if (
            not isinstance(hours_per_day, (int, float))
            or isinstance(hours_per_day, bool)
            or not math.isfinite(hours_per_day)
            or hours_per_day <= 0
        ):
            raise ConfigError("hours_per_day must be a positive finite number")
        self.hours_per_day = hours_per_day

        for name, value in [
            ("upcoming_window_days", upcoming_window_days),
            ("upcoming_limit", upcoming_limit),
            ("amber_window_days", amber_window_days),
            ("off_schedule_limit", off_schedule_limit),
            ("reason_limit", reason_limit),
        ]:
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigError(f"{name} must be a non-negative integer")

        self.upcoming_window_days = upcoming_window_days
        self.upcoming_limit = upcoming_limit
        self.amber_window_days = amber_window_days
        self.off_schedule_limit = off_schedule_limit
        self.reason_limit = reason_limit

        if completion_strategy is None:
            completion_strategy = TodayFallback()
        elif not isinstance(completion_strategy, CompletionDateStrategy):
            raise ConfigError("completion_strategy must be a CompletionDateStrategy")
        self.completion_strategy = completion_strategy

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "MetricsEngine":
        """
        Build an engine from a plain mapping, e.g. a parsed JSON file.

        ``completion_strategy`` is given by short name ("today", "planned",
        "exclude").

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        if not isinstance(config, dict):
            raise ConfigError("Configuration must be a mapping of settings")

        unknown = set(config) - set(cls.CONFIG_KEYS)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {sorted(unknown)}")

        kwargs = dict(config)
        if "completion_strategy" in kwargs:
            if not isinstance(kwargs["completion_strategy"], str):
                raise ConfigError("completion_strategy must be a strategy name")
            try:
                kwargs["completion_strategy"] = get_strategy(kwargs["completion_strategy"])
            except KeyError as e:
                raise ConfigError(str(e.args[0])) from e

        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hours_per_day": self.hours_per_day,
            "upcoming_window_days": self.upcoming_window_days,
            "upcoming_limit": self.upcoming_limit,
            "amber_window_days": self.amber_window_days,
            "off_schedule_limit": self.off_schedule_limit,
            "reason_limit": self.reason_limit,
            "completion_strategy": self.completion_strategy.get_name(),
        }

    def task_effort(self, task):
        return task_effort(task, self.hours_per_day)

    def milestone_progress(self, milestone, now):
        return milestone_progress(milestone, now, self.hours_per_day)

    def project_progress(self, project, now):
        return project_progress(project, now, self.hours_per_day)

    def task_schedule_variance(self, task, now):
        return task_schedule_variance(task, now, self.completion_strategy)

    def project_rag_status(self, project, now):
        return project_rag_status(project, now, self.amber_window_days)

    def upcoming_deadlines(self, projects, now):
        return upcoming_deadlines(
            projects, now, self.upcoming_window_days, self.upcoming_limit
        )

    def projects_at_risk(self, projects, now):
        return projects_at_risk(projects, now, self.reason_limit)

    def team_workload(self, projects):
        return team_workload(projects)

    def off_schedule_tasks(self, projects, now):
        return off_schedule_tasks(
            projects, now, self.off_schedule_limit, self.completion_strategy
        )

    def project_view(self, project, now):
        """Derived values for a single project and each of its milestones."""
        return {
            "project": project,
            "progress": self.project_progress(project, now),
            "rag_status": self.project_rag_status(project, now),
            "health": latest_health(project),
            "is_overdue": is_project_overdue(project, now),
            "milestones": [
                {"milestone": m, "progress": self.milestone_progress(m, now)}
                for m in project.milestones
            ],
        }

    def build_view(self, portfolio, now):
        """
        Compute the full derived view model for a portfolio snapshot.

        Args:
            portfolio: Portfolio snapshot
            now: Current date or datetime, used for every derivation

        Returns:
            dict: ``projects``, ``summary``, ``at_risk``, ``workload`` and
            ``off_schedule`` entries
        """
        projects = portfolio.projects
        logger.debug("Building view for %d projects as of %s", len(projects), now)

        summary = portfolio_summary(
            projects, now, self.upcoming_window_days, self.upcoming_limit
        )

        return {
            "as_of": now,
            "projects": [self.project_view(p, now) for p in projects],
            "summary": summary,
            "at_risk": self.projects_at_risk(projects, now),
            "workload": self.team_workload(projects),
            "off_schedule": self.off_schedule_tasks(projects, now),
        }

    def __repr__(self) -> str:
        return (
            f"MetricsEngine(hours_per_day={self.hours_per_day}, "
            f"strategy={self.completion_strategy.get_name()})"
        )
