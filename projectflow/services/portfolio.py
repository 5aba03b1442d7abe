from collections import Counter
from datetime import datetime

from ..utils.dates import days_between, to_day
from .progress import milestone_completion_rate
from .risk import is_milestone_overdue

UPCOMING_WINDOW_DAYS = 7
UPCOMING_LIMIT = 5
RECENT_LIMIT = 5
DEFAULT_HEALTH = "on-track"

PRIORITY_ORDER = {"critical": 0, "high": 1, "medium": 2, "low": 3}
SIZE_ORDER = {"xs": 0, "s": 1, "m": 2, "l": 3, "xl": 4}
INTAKE_ORDER = {"new": 0, "in-review": 1, "approved": 2}
UNKNOWN_ORDER = 99

SORT_FIELDS = ("name", "priority", "size", "dueDate", "status", "portfolioIntake", "progress")


def upcoming_deadlines(
    projects, now, window_days=UPCOMING_WINDOW_DAYS, limit=UPCOMING_LIMIT
):
    """
    Open milestones due within the next ``window_days`` days, soonest first.

    Args:
        projects: Iterable of Project objects
        now: Current date or datetime
        window_days: Look-ahead window in days (inclusive)
        limit: Maximum number of entries returned

    Returns:
        list: Dicts with ``milestone`` and ``project``
    """
    today = to_day(now)
    upcoming = []
    for project in projects:
        for milestone in project.milestones:
            if milestone.is_completed or milestone.due_date is None:
                continue
            days_until = days_between(today, milestone.due_date)
            if 0 <= days_until <= window_days:
                upcoming.append({"milestone": milestone, "project": project})

    upcoming.sort(key=lambda u: u["milestone"].due_date)
    return upcoming[:limit]


def team_workload(projects):
    """
    Open milestones plus open tasks per assignee across the portfolio.

    Returns:
        dict: assignee ID -> count; unassigned work is not counted
    """
    workload = Counter()
    for project in projects:
        for milestone in project.milestones:
            if milestone.assignee_id and not milestone.is_completed:
                workload[milestone.assignee_id] += 1
            for task in milestone.tasks:
                if task.assignee_id and not task.is_completed:
                    workload[task.assignee_id] += 1
    return dict(workload)


def latest_health(project):
    """Health of the newest status update, ``on-track`` when there is none."""
    if not project.status_updates:
        return DEFAULT_HEALTH
    return project.status_updates[0].get("health") or DEFAULT_HEALTH


def pipeline_projects(projects):
    """Projects still going through intake (not yet approved)."""
    return [p for p in projects if p.portfolio_intake != "approved"]


def approved_projects(projects):
    """Projects accepted into the portfolio."""
    return [p for p in projects if p.portfolio_intake == "approved"]


def filter_projects(
    projects, query=None, priority=None, status=None, intake=None, team_id=None
):
    """
    Filter projects the way the portfolio and pipeline tables do.

    ``query`` is matched case-insensitively against name and description;
    every other filter is an exact match and None means "all".
    """
    needle = query.lower() if query else None
    result = []
    for project in projects:
        if needle and not (
            needle in project.name.lower() or needle in project.description.lower()
        ):
            continue
        if priority is not None and project.priority != priority:
            continue
        if status is not None and project.status != status:
            continue
        if intake is not None and project.portfolio_intake != intake:
            continue
        if team_id is not None and project.team_id != team_id:
            continue
        result.append(project)
    return result


def _milestone_share(project):
    if not project.milestones:
        return 0.0
    completed = sum(1 for m in project.milestones if m.is_completed)
    return completed / len(project.milestones)


def sort_projects(projects, field="name", descending=False):
    """
    Sort projects by a table column.

    Args:
        projects: Iterable of Project objects
        field: One of ``SORT_FIELDS``
        descending: Reverse the order

    Returns:
        list: Sorted projects. Projects without a due date sort last when
        ascending; unknown enum values sort after known ones.

    Raises:
        ValueError: If ``field`` is not a sortable column
    """
    projects = list(projects)

    if field == "name":
        key = lambda p: p.name.lower()
    elif field == "priority":
        key = lambda p: PRIORITY_ORDER.get(p.priority, UNKNOWN_ORDER)
    elif field == "size":
        key = lambda p: SIZE_ORDER.get(p.size, UNKNOWN_ORDER)
    elif field == "status":
        key = lambda p: p.status
    elif field == "portfolioIntake":
        key = lambda p: INTAKE_ORDER.get(p.portfolio_intake, UNKNOWN_ORDER)
    elif field == "progress":
        key = _milestone_share
    elif field == "dueDate":
        # (has no date, date) keeps undated projects together at the end
        key = lambda p: (p.due_date is None, p.due_date or datetime.min.date())
    else:
        raise ValueError(f"Cannot sort by {field}. Must be one of {list(SORT_FIELDS)}")

    return sorted(projects, key=key, reverse=descending)


def recent_projects(projects, limit=RECENT_LIMIT):
    """Most recently created projects first; projects without a timestamp go last."""
    dated = [p for p in projects if p.created_at is not None]
    undated = [p for p in projects if p.created_at is None]
    dated.sort(key=lambda p: p.created_at.timestamp(), reverse=True)
    return (dated + undated)[:limit]


def portfolio_summary(
    projects, now, window_days=UPCOMING_WINDOW_DAYS, limit=UPCOMING_LIMIT
):
    """
    Headline numbers for the dashboard.

    Returns:
        dict: Project and milestone totals, overdue milestone count,
        completion rate, upcoming deadlines and recent projects
    """
    projects = list(projects)
    milestones = [m for p in projects for m in p.milestones]
    by_status = Counter(m.status for m in milestones)

    return {
        "total_projects": len(projects),
        "active_projects": sum(1 for p in projects if p.status == "active"),
        "completed_projects": sum(1 for p in projects if p.status == "completed"),
        "total_milestones": len(milestones),
        "completed_milestones": by_status.get("completed", 0),
        "in_progress_milestones": by_status.get("in-progress", 0),
        "pending_milestones": by_status.get("pending", 0),
        "overdue_milestones": sum(1 for m in milestones if is_milestone_overdue(m, now)),
        "completion_rate": milestone_completion_rate(projects),
        "upcoming_deadlines": upcoming_deadlines(projects, now, window_days, limit),
        "recent_projects": recent_projects(projects),
    }
