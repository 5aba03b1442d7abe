from .visualization.styles import HEALTH_OPTIONS, PRIORITY_CONFIG, SIZE_CONFIG, label_for


def format_report(view, portfolio):
    """
    Render a derived view model as plain-text report lines.

    Args:
        view: Result of MetricsEngine.build_view
        portfolio: The Portfolio the view was built from (for member names)

    Returns:
        list: Lines of text, without trailing newlines
    """
    summary = view["summary"]
    as_of = view["as_of"]
    lines = [
        "ProjectFlow Portfolio Report",
        "============================",
        f"As of: {as_of:%Y-%m-%d}",
        f"Projects: {summary['total_projects']} "
        f"({summary['active_projects']} active, {summary['completed_projects']} completed)",
        f"Milestones: {summary['total_milestones']} "
        f"({summary['completed_milestones']} done, "
        f"{summary['in_progress_milestones']} in progress, "
        f"{summary['pending_milestones']} pending, "
        f"{summary['overdue_milestones']} overdue)",
        f"Completion rate: {summary['completion_rate']}%",
        "",
        "Projects:",
    ]

    for entry in view["projects"]:
        project = entry["project"]
        overdue = " OVERDUE" if entry["is_overdue"] else ""
        lines.append(
            f"  [{entry['rag_status'].upper():5}] {project.name} - {entry['progress']}%"
            f" | {label_for(PRIORITY_CONFIG, project.priority)}"
            f" | {label_for(SIZE_CONFIG, project.size)}"
            f" | {label_for(HEALTH_OPTIONS, entry['health'])}{overdue}"
        )
        for m in entry["milestones"]:
            lines.append(f"      {m['milestone'].title}: {m['progress']}%")

    lines += ["", "Upcoming deadlines:"]
    if not summary["upcoming_deadlines"]:
        lines.append("  none")
    for item in summary["upcoming_deadlines"]:
        lines.append(
            f"  {item['milestone'].due_date.isoformat()}  "
            f"{item['milestone'].title} ({item['project'].name})"
        )

    lines += ["", "Projects at risk:"]
    if not view["at_risk"]:
        lines.append("  none")
    for risk in view["at_risk"]:
        lines.append(
            f"  {risk['project'].name}: {risk['overdue_milestones_count']} milestones, "
            f"{risk['overdue_tasks_count']} tasks overdue"
        )
        for reason in risk["reasons"]:
            lines.append(f"    - {reason}")

    lines += ["", "Off-schedule tasks:"]
    if not view["off_schedule"]:
        lines.append("  none")
    for item in view["off_schedule"]:
        lines.append(
            f"  {item['classification']:8} {item['days_difference']:>3}d  "
            f"{item['task'].title} ({item['project'].name} / {item['milestone'].title})"
        )

    lines += ["", "Team workload:"]
    if not view["workload"]:
        lines.append("  none")
    for member_id, count in sorted(view["workload"].items(), key=lambda kv: -kv[1]):
        lines.append(f"  {portfolio.member_name(member_id)}: {count}")

    return lines


def print_report(view, portfolio):
    for line in format_report(view, portfolio):
        print(line)
