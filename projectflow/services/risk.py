from enum import Enum

from ..utils.dates import days_between, to_day

AMBER_WINDOW_DAYS = 7
REASON_LIMIT = 3


class RAGStatus(Enum):
    """
    Red/Amber/Green risk classification of a project.
    """

    RED = "red"
    AMBER = "amber"
    GREEN = "green"


def is_milestone_overdue(milestone, now):
    """An open milestone whose due date is strictly before today."""
    if milestone.is_completed or milestone.due_date is None:
        return False
    return milestone.due_date < to_day(now)


def is_task_overdue(task, now):
    """An open task whose planned end date is strictly before today."""
    if task.is_completed or task.end_date is None:
        return False
    return task.end_date < to_day(now)


def is_project_overdue(project, now):
    """An unfinished project past its own due date."""
    if project.is_completed or project.due_date is None:
        return False
    return project.due_date < to_day(now)


def _open_due_dates(project):
    """Due dates of every open, dated milestone and task in the project."""
    for milestone in project.milestones:
        if not milestone.is_completed and milestone.due_date is not None:
            yield milestone.due_date
        for task in milestone.tasks:
            if not task.is_completed and task.end_date is not None:
                yield task.end_date


def project_rag_status(project, now, window_days=AMBER_WINDOW_DAYS):
    """
    Classify a project as red, amber or green.

    Red when any open milestone or task is past due; amber when any is due
    within the next ``window_days`` days (inclusive); green otherwise. Red
    always wins over amber.

    Args:
        project: Project to classify
        now: Current date or datetime
        window_days: Size of the amber look-ahead window in days

    Returns:
        str: "red", "amber" or "green"
    """
    today = to_day(now)
    amber = False

    for due_date in _open_due_dates(project):
        days_until = days_between(today, due_date)
        if days_until < 0:
            return RAGStatus.RED.value
        if days_until <= window_days:
            amber = True

    return RAGStatus.AMBER.value if amber else RAGStatus.GREEN.value


def projects_at_risk(projects, now, reason_limit=REASON_LIMIT):
    """
    Projects with at least one overdue milestone or task.

    Args:
        projects: Iterable of Project objects
        now: Current date or datetime
        reason_limit: How many example reasons to keep per project

    Returns:
        list: Dicts with ``project``, ``overdue_milestones_count``,
        ``overdue_tasks_count`` and ``reasons``, sorted by total overdue
        count, largest first
    """
    at_risk = []

    for project in projects:
        overdue_milestones = [
            m for m in project.milestones if is_milestone_overdue(m, now)
        ]
        overdue_tasks = [t for _, t in project.iter_tasks() if is_task_overdue(t, now)]

        if not overdue_milestones and not overdue_tasks:
            continue

        reasons = [f"Milestone: {m.title}" for m in overdue_milestones]
        reasons += [f"Task: {t.title}" for t in overdue_tasks]

        at_risk.append(
            {
                "project": project,
                "overdue_milestones_count": len(overdue_milestones),
                "overdue_tasks_count": len(overdue_tasks),
                "reasons": reasons[:reason_limit],
            }
        )

    return sorted(
        at_risk,
        key=lambda r: r["overdue_milestones_count"] + r["overdue_tasks_count"],
        reverse=True,
    )
