# File: comes_app/modules/competition_team/interface.py
from .logics.membership import resolve_team_status
from .services.team_service import TeamService


def get_team_by_id(team_id: int):
    """Public API to load a team with its member entries; raises NotFoundError."""
    return TeamService.get_team(team_id)


__all__ = ['resolve_team_status', 'get_team_by_id']
