from typing import Any, Dict, List, Optional

from .project import Project, ProjectError


class Portfolio:
    """
    A consistent snapshot of the store: projects plus teams and team members.

    Teams and members are kept as the plain records the store holds; the
    metrics only ever reference them by ID.
    """

    def __init__(
        self,
        projects: Optional[List[Project]] = None,
        teams: Optional[List[Dict[str, Any]]] = None,
        team_members: Optional[List[Dict[str, Any]]] = None,
    ):
        self.projects = list(projects or [])
        self.teams = list(teams or [])
        self.team_members = list(team_members or [])

    def get_project(self, project_id: str) -> Optional[Project]:
        for project in self.projects:
            if project.id == project_id:
                return project
        return None

    def get_member(self, member_id: str) -> Optional[Dict[str, Any]]:
        for member in self.team_members:
            if member.get("id") == member_id:
                return member
        return None

    def member_name(self, member_id: str) -> str:
        """Display name of a team member, falling back to the raw ID."""
        member = self.get_member(member_id)
        if member and member.get("name"):
            return member["name"]
        return str(member_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "projects": [p.to_dict() for p in self.projects],
            "teams": [dict(t) for t in self.teams],
            "teamMembers": [dict(m) for m in self.team_members],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Portfolio":
        """
        Build a portfolio from the store's state document.

        Raises:
            ProjectError: If any project in the document is invalid
        """
        if not isinstance(data, dict):
            raise ProjectError("State document must be a JSON object")
        projects = data.get("projects") or []
        if not isinstance(projects, list):
            raise ProjectError("State document projects must be a list")
        for p in projects:
            if not isinstance(p, dict):
                raise ProjectError(f"Invalid project record: {p!r}")

        return cls(
            projects=[Project.from_dict(p) for p in projects],
            teams=data.get("teams"),
            team_members=data.get("teamMembers"),
        )

    def __repr__(self) -> str:
        return (
            f"Portfolio(projects={len(self.projects)}, teams={len(self.teams)}, "
            f"members={len(self.team_members)})"
        )
