import matplotlib.pyplot as plt
from matplotlib.patches import Patch
from datetime import timedelta

from ..services.risk import is_milestone_overdue
from ..utils.dates import days_between, to_day
from .styles import OVERDUE_COLOR, STATUS_COLORS, color_for


def milestone_bars(project, now):
    """
    Bar geometry for each milestone, in display order.

    A bar runs from the milestone's creation date (or today) to its due
    date (or one week after the start) and is at least one day wide.

    Returns:
        list: Dicts with ``milestone``, ``start``, ``end``, ``duration`` and ``is_overdue``
    """
    today = to_day(now)
    bars = []
    for milestone in project.milestones:
        start = to_day(milestone.created_at) if milestone.created_at else today
        end = milestone.due_date if milestone.due_date else start + timedelta(days=7)
        duration = max(1, days_between(start, end) + 1)
        bars.append(
            {
                "milestone": milestone,
                "start": start,
                "end": end,
                "duration": duration,
                "is_overdue": is_milestone_overdue(milestone, now),
            }
        )
    return bars


def create_milestone_gantt(project, now, filename=None, show=True):
    """
    Create a Gantt chart of a project's milestones.

    Args:
        project: The Project to chart
        now: Current date or datetime, drawn as the status line
        filename: Optional filename to save the chart
        show: Whether to display the chart (default: True)

    Returns:
        The matplotlib figure, or None if the project has no milestones
    """
    bars = milestone_bars(project, now)
    if not bars:
        print(f"Project {project.id} has no milestones to chart.")
        return None

    today = to_day(now)
    chart_start = min(min(b["start"] for b in bars), today)

    fig, ax = plt.subplots(figsize=(14, max(3, len(bars) * 0.6 + 2)))

    for i, bar in enumerate(bars):
        milestone = bar["milestone"]
        left = days_between(chart_start, bar["start"])

        if bar["is_overdue"]:
            ax.barh(
                i,
                bar["duration"],
                left=left,
                color=color_for(STATUS_COLORS, milestone.status),
                edgecolor=OVERDUE_COLOR,
                hatch="///",
                alpha=0.8,
            )
        else:
            ax.barh(
                i,
                bar["duration"],
                left=left,
                color=color_for(STATUS_COLORS, milestone.status),
                alpha=0.8,
            )

        ax.text(
            left + bar["duration"] / 2,
            i,
            milestone.title,
            ha="center",
            va="center",
            color="black",
            fontsize=8,
        )

    # Status date line
    today_offset = days_between(chart_start, today)
    ax.axvline(x=today_offset, color="black", linestyle="--", linewidth=1)
    ax.text(today_offset, len(bars) - 0.4, "Today", ha="center", fontsize=8)

    ax.set_yticks(range(len(bars)))
    ax.set_yticklabels([b["milestone"].title for b in bars])
    ax.invert_yaxis()
    ax.set_xlabel(f"Days from {chart_start.isoformat()}")
    ax.set_title(f"{project.name} - Milestones")
    ax.grid(axis="x", alpha=0.3)

    legend_elements = [
        Patch(facecolor=STATUS_COLORS["pending"], label="Pending"),
        Patch(facecolor=STATUS_COLORS["in-progress"], label="In Progress"),
        Patch(facecolor=STATUS_COLORS["completed"], label="Completed"),
        Patch(facecolor="white", edgecolor=OVERDUE_COLOR, hatch="///", label="Overdue"),
    ]
    ax.legend(handles=legend_elements, loc="upper right")

    plt.tight_layout()

    if filename:
        plt.savefig(filename, dpi=300, bbox_inches="tight")
        print(f"Gantt chart saved to {filename}")

    if show:
        plt.show()

    return fig
