"""
Metrics services: pure derivations over a project -> milestone -> task tree.

Every function that depends on the date takes ``now`` explicitly.
"""

from projectflow.services.effort import task_effort
from projectflow.services.progress import (
    milestone_completion_rate,
    milestone_progress,
    project_progress,
)
from projectflow.services.variance import off_schedule_tasks, task_schedule_variance
from projectflow.services.risk import project_rag_status, projects_at_risk
from projectflow.services.portfolio import (
    portfolio_summary,
    team_workload,
    upcoming_deadlines,
)
from projectflow.services.engine import ConfigError, MetricsEngine

__all__ = [
    "task_effort",
    "milestone_progress",
    "project_progress",
    "milestone_completion_rate",
    "task_schedule_variance",
    "off_schedule_tasks",
    "project_rag_status",
    "projects_at_risk",
    "upcoming_deadlines",
    "team_workload",
    "portfolio_summary",
    "MetricsEngine",
    "ConfigError",
]
