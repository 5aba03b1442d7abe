"""
ProjectFlow Metrics
===================

Progress, schedule-variance and risk metrics for a portfolio of
projects, milestones and tasks.
"""

from projectflow.domain.task import Task, TaskError
from projectflow.domain.milestone import Milestone, MilestoneError
from projectflow.domain.project import Project, ProjectError
from projectflow.domain.portfolio import Portfolio
from projectflow.services import (
    ConfigError,
    MetricsEngine,
    milestone_progress,
    off_schedule_tasks,
    project_progress,
    project_rag_status,
    projects_at_risk,
    task_effort,
    task_schedule_variance,
    team_workload,
    upcoming_deadlines,
)

__version__ = "0.1.0"

__all__ = [
    "Task",
    "TaskError",
    "Milestone",
    "MilestoneError",
    "Project",
    "ProjectError",
    "Portfolio",
    "MetricsEngine",
    "ConfigError",
    "task_effort",
    "milestone_progress",
    "project_progress",
    "task_schedule_variance",
    "off_schedule_tasks",
    "project_rag_status",
    "projects_at_risk",
    "upcoming_deadlines",
    "team_workload",
]
