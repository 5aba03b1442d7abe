from enum import Enum

from ..utils.dates import days_between, to_day
from .completion_strategies import TodayFallback

OFF_SCHEDULE_LIMIT = 10


class VarianceClass(Enum):
    """
    Schedule position of a task relative to its planned end date.
    """

    OVERDUE = "overdue"
    LATE = "late"
    ON_TIME = "on-time"
    EARLY = "early"


OFF_SCHEDULE = (VarianceClass.OVERDUE.value, VarianceClass.LATE.value)


def task_schedule_variance(task, now, completion_strategy=None):
    """
    Classify a task against its planned end date.

    Completed tasks compare their actual completion date to the plan and
    are late, early or on-time. Open tasks compare today to the plan and
    are overdue once the end date has passed, on-time otherwise.

    Args:
        task: Task to classify
        now: Current date or datetime
        completion_strategy: Decides the actual date of completed tasks
            lacking a completion timestamp (default: today)

    Returns:
        dict: ``{"classification": str, "days_difference": int}`` with a
        non-negative day count, or None when the task has no planned end
        date (or the strategy excludes it)
    """
    if task.end_date is None:
        return None

    today = to_day(now)

    if task.status == "completed":
        strategy = completion_strategy or TodayFallback()
        actual_date = strategy.actual_date(task, now)
        if actual_date is None:
            return None
        diff = days_between(task.end_date, actual_date)
        if diff > 0:
            classification = VarianceClass.LATE
        elif diff < 0:
            classification = VarianceClass.EARLY
        else:
            classification = VarianceClass.ON_TIME
    else:
        diff = days_between(task.end_date, today)
        if diff > 0:
            classification = VarianceClass.OVERDUE
        else:
            classification = VarianceClass.ON_TIME
            # Not yet due
            diff = 0

    return {"classification": classification.value, "days_difference": abs(diff)}


def off_schedule_sort_key(item):
    """Overdue first, then the largest day difference first."""
    is_overdue = item["classification"] == VarianceClass.OVERDUE.value
    return (0 if is_overdue else 1, -item["days_difference"])


def off_schedule_tasks(projects, now, limit=OFF_SCHEDULE_LIMIT, completion_strategy=None):
    """
    Collect every overdue or late task across the portfolio.

    Args:
        projects: Iterable of Project objects
        now: Current date or datetime
        limit: Maximum number of entries returned (None for all)
        completion_strategy: Passed through to task_schedule_variance

    Returns:
        list: Dicts with ``project``, ``milestone``, ``task``,
        ``classification`` and ``days_difference``, most urgent first
    """
    items = []
    for project in projects:
        for milestone, task in project.iter_tasks():
            variance = task_schedule_variance(task, now, completion_strategy)
            if variance is None or variance["classification"] not in OFF_SCHEDULE:
                continue
            items.append(
                {
                    "project": project,
                    "milestone": milestone,
                    "task": task,
                    "classification": variance["classification"],
                    "days_difference": variance["days_difference"],
                }
            )

    # sorted() is stable, so ties keep portfolio order
    items = sorted(items, key=off_schedule_sort_key)
    if limit is not None:
        items = items[:limit]
    return items
