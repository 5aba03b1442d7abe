from abc import ABC, abstractmethod

from ..utils.dates import to_day


class CompletionDateStrategy(ABC):
    @abstractmethod
    def actual_date(self, task, now):
        """Return the date a completed task is considered finished on, or None to skip it"""
        pass

    def get_name(self):
        """Get the name of this strategy"""
        return self.__class__.__name__


# Recorded completion date, else today
class TodayFallback(CompletionDateStrategy):
    def actual_date(self, task, now):
        """
        Completed tasks with no recorded completion timestamp are treated as
        finished today. This understates lateness for tasks finished in the
        past whose timestamp was never backfilled.
        """
        if task.completed_at is not None:
            return to_day(task.completed_at)
        return to_day(now)

    def get_name(self):
        return "Today Fallback"


# Recorded completion date, else the planned end date
class PlannedDateFallback(CompletionDateStrategy):
    def actual_date(self, task, now):
        """Unknown completion dates are assumed to match the plan (on-time)."""
        if task.completed_at is not None:
            return to_day(task.completed_at)
        return task.end_date

    def get_name(self):
        return "Planned Date Fallback"


# Recorded completion date only
class ExcludeUnknown(CompletionDateStrategy):
    def actual_date(self, task, now):
        """Completed tasks without a timestamp are left out of variance reporting."""
        if task.completed_at is not None:
            return to_day(task.completed_at)
        return None

    def get_name(self):
        return "Exclude Unknown"


STRATEGIES = {
    "today": TodayFallback,
    "planned": PlannedDateFallback,
    "exclude": ExcludeUnknown,
}


def get_strategy(name):
    """
    Look up a completion-date strategy by its short name.

    Raises:
        KeyError: If no strategy has that name
    """
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise KeyError(
            f"Unknown completion strategy: {name}. Must be one of {sorted(STRATEGIES)}"
        )
