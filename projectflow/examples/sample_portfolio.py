from datetime import date, datetime, timedelta

from projectflow.domain.milestone import Milestone
from projectflow.domain.portfolio import Portfolio
from projectflow.domain.project import Project
from projectflow.domain.task import Task

TEAMS = [
    {"id": "team-a", "name": "Team A", "color": "#6366f1"},
    {"id": "team-b", "name": "Team B", "color": "#22c55e"},
    {"id": "team-c", "name": "Team C", "color": "#f59e0b"},
]

TEAM_MEMBERS = [
    {"id": "1", "name": "Alex Chen", "role": "Developer", "teamId": "team-a"},
    {"id": "2", "name": "Sarah Kim", "role": "Designer", "teamId": "team-a"},
    {"id": "3", "name": "Mike Johnson", "role": "Project Manager", "teamId": "team-b"},
    {"id": "4", "name": "Emily Davis", "role": "QA Engineer", "teamId": "team-b"},
    {"id": "5", "name": "Chris Wilson", "role": "DevOps", "teamId": "team-c"},
]


def create_sample_portfolio(today=None):
    """
    Build a small portfolio whose dates are laid out around ``today``.

    The result has one red project (an overdue milestone and task), one
    amber project (a milestone due in a few days), a green one, and one
    project still in the intake pipeline.
    """
    if today is None:
        today = date.today()
    if isinstance(today, datetime):
        today = today.date()

    def d(offset):
        return today + timedelta(days=offset)

    def ts(offset):
        return datetime.combine(d(offset), datetime.min.time())

    website = Project(
        id="p-web",
        name="Website Redesign",
        status="active",
        portfolio_intake="approved",
        priority="high",
        size="l",
        due_date=d(30),
        created_at=ts(-40),
        team_id="team-a",
        description="New marketing site and design system",
        status_updates=[
            {"health": "at-risk", "summary": "Design review slipped", "weekOf": d(-3).isoformat()},
        ],
        milestones=[
            Milestone(
                id="m-discovery",
                title="Discovery",
                status="completed",
                due_date=d(-25),
                completed_at=ts(-26),
                created_at=ts(-40),
                assignee_id="3",
                tasks=[
                    Task("t-interviews", "Stakeholder interviews", "completed",
                         start_date=d(-40), end_date=d(-35), completed_at=ts(-35), assignee_id="3"),
                    Task("t-audit", "Content audit", "completed",
                         start_date=d(-34), end_date=d(-30), completed_at=ts(-28), assignee_id="2"),
                ],
            ),
            Milestone(
                id="m-design",
                title="Design System",
                status="in-progress",
                due_date=d(-2),
                created_at=ts(-25),
                assignee_id="2",
                tasks=[
                    Task("t-tokens", "Design tokens", "completed",
                         start_date=d(-25), end_date=d(-20), completed_at=ts(-21), assignee_id="2"),
                    Task("t-components", "Component library", "in-progress",
                         start_date=d(-10), end_date=d(5), assignee_id="2"),
                    Task("t-review", "Design review", "pending",
                         end_date=d(-4), estimated_hours=4, assignee_id="3"),
                ],
            ),
            Milestone(
                id="m-build",
                title="Build",
                status="pending",
                due_date=d(25),
                created_at=ts(-20),
                assignee_id="1",
                tasks=[
                    Task("t-pages", "Page templates", "pending",
                         start_date=d(6), end_date=d(20), assignee_id="1"),
                    Task("t-cms", "CMS integration", "pending",
                         estimated_hours=40, assignee_id="1"),
                ],
            ),
        ],
    )

    platform = Project(
        id="p-platform",
        name="Platform Upgrade",
        status="active",
        portfolio_intake="approved",
        priority="critical",
        size="m",
        due_date=d(14),
        created_at=ts(-15),
        team_id="team-c",
        milestones=[
            Milestone(
                id="m-staging",
                title="Staging cutover",
                status="in-progress",
                due_date=d(4),
                created_at=ts(-15),
                assignee_id="5",
                tasks=[
                    Task("t-upgrade", "Upgrade runtime", "completed",
                         start_date=d(-14), end_date=d(-10), assignee_id="5"),
                    Task("t-smoke", "Smoke tests", "in-progress",
                         start_date=d(-2), end_date=d(3), assignee_id="4"),
                ],
            ),
            Milestone(
                id="m-prod",
                title="Production cutover",
                status="pending",
                due_date=d(14),
                created_at=ts(-15),
                assignee_id="5",
            ),
        ],
    )

    reporting = Project(
        id="p-reporting",
        name="Quarterly Reporting",
        status="active",
        portfolio_intake="approved",
        priority="medium",
        size="s",
        due_date=d(60),
        created_at=ts(-5),
        team_id="team-b",
        milestones=[
            Milestone(
                id="m-requirements",
                title="Report requirements",
                status="completed",
                created_at=ts(-5),
                tasks=[
                    Task("t-metrics", "Agree metrics", "completed",
                         start_date=d(-5), end_date=d(-2), completed_at=ts(-3), assignee_id="4"),
                ],
            ),
            Milestone(
                id="m-dash",
                title="Dashboards",
                status="pending",
                due_date=d(45),
                created_at=ts(-5),
            ),
        ],
    )

    mobile = Project(
        id="p-mobile",
        name="Mobile App",
        status="on-hold",
        portfolio_intake="in-review",
        priority="low",
        size="xl",
        created_at=ts(-1),
        team_id="team-a",
    )

    return Portfolio(
        projects=[website, platform, reporting, mobile],
        teams=TEAMS,
        team_members=TEAM_MEMBERS,
    )
