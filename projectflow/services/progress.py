import math

from ..utils.dates import days_between, to_day
from .effort import HOURS_PER_DAY, task_effort

# Credit for a milestone without tasks, by status
MILESTONE_STATUS_CREDIT = {
    "completed": 1.0,
    "in-progress": 0.5,
    "pending": 0.0,
}


def round_percent(completed, total):
    """
    Percentage of ``completed`` over ``total`` rounded half up to an int.

    Returns 0 when ``total`` is not positive.
    """
    if total <= 0:
        return 0
    return int(math.floor(completed / total * 100 + 0.5))


def task_credit(task, now, hours_per_day=HOURS_PER_DAY):
    """
    Completed effort credited to a single task.

    Completed tasks earn their full effort. In-progress tasks with a planned
    date range earn a share proportional to the elapsed days while today is
    inside the range (both ends inclusive); outside the range they earn
    nothing. Everything else earns nothing.

    Args:
        task: Task to credit
        now: Current date or datetime
        hours_per_day: Length of a working day in hours

    Returns:
        tuple: (effort, credited effort)
    """
    effort = task_effort(task, hours_per_day)

    if task.status == "completed":
        return effort, effort

    if task.status == "in-progress" and task.has_date_range:
        today = to_day(now)
        if task.start_date <= today <= task.end_date:
            elapsed = days_between(task.start_date, today) + 1
            span = days_between(task.start_date, task.end_date) + 1
            return effort, effort * elapsed / span

    return effort, 0.0


def milestone_progress(milestone, now, hours_per_day=HOURS_PER_DAY):
    """
    Effort-weighted completion percentage of a milestone.

    A milestone with no tasks falls back to its own status
    (completed 100, in-progress 50, pending 0).

    Returns:
        int: Percentage between 0 and 100
    """
    if not milestone.tasks:
        return round_percent(MILESTONE_STATUS_CREDIT.get(milestone.status, 0.0), 1.0)

    total_effort = 0.0
    completed_effort = 0.0
    for task in milestone.tasks:
        effort, credit = task_credit(task, now, hours_per_day)
        total_effort += effort
        completed_effort += credit

    return round_percent(completed_effort, total_effort)


def project_progress(project, now, hours_per_day=HOURS_PER_DAY):
    """
    Effort-weighted completion percentage of a whole project.

    Task effort is summed across every milestone so that large milestones
    weigh more than small ones; milestone percentages are never averaged.
    A milestone without tasks counts as a one-day pseudo-task credited by
    its status.

    Returns:
        int: Percentage between 0 and 100, 0 for a project without milestones
    """
    total_effort = 0.0
    completed_effort = 0.0

    for milestone in project.milestones:
        if not milestone.tasks:
            total_effort += 1.0
            completed_effort += MILESTONE_STATUS_CREDIT.get(milestone.status, 0.0)
            continue

        for task in milestone.tasks:
            effort, credit = task_credit(task, now, hours_per_day)
            total_effort += effort
            completed_effort += credit

    return round_percent(completed_effort, total_effort)


def milestone_completion_rate(projects):
    """Share of milestones across all projects that are completed, as an int percentage."""
    milestones = [m for p in projects for m in p.milestones]
    completed = sum(1 for m in milestones if m.is_completed)
    return round_percent(completed, len(milestones))
