import logging
import math

from ..utils.dates import days_between

logger = logging.getLogger(__name__)

HOURS_PER_DAY = 8
DEFAULT_EFFORT = 1.0


def task_effort(task, hours_per_day=HOURS_PER_DAY):
    """
    Estimate a task's effort in day-equivalents.

    Priority order:
    1. Planned date range: inclusive day count (a single-day task is 1).
    2. Estimated hours divided by the working day length.
    3. One day.

    A date range whose end precedes its start would give a non-positive
    weight; such tasks are clamped to the one-day default.

    Args:
        task: Task to estimate
        hours_per_day: Length of a working day in hours

    Returns:
        float: Effort in days, always > 0
    """
    if task.start_date is not None and task.end_date is not None:
        effort = float(days_between(task.start_date, task.end_date) + 1)
    elif task.estimated_hours is not None:
        effort = task.estimated_hours / hours_per_day
    else:
        effort = DEFAULT_EFFORT

    if not (effort > 0 and math.isfinite(effort)):
        logger.debug(
            "Task %s has invalid effort %r, clamping to %.1f",
            task.id,
            effort,
            DEFAULT_EFFORT,
        )
        effort = DEFAULT_EFFORT

    return effort
