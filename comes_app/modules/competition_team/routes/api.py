# File: comes_app/modules/competition_team/routes/api.py
from flask import jsonify, request
from flask_login import current_user, login_required

from ....core.error_handlers import success_response
from ....utils.validation import load_payload
from .. import blueprint
from ..schemas import InvitationResponse, TeamCreate
from ..services.team_service import TeamService


@blueprint.route('/', methods=['POST'], strict_slashes=False)
@login_required
def create_team():
    payload = load_payload(TeamCreate, request.get_json(silent=True))
    team = TeamService.create_team(current_user, payload.name, payload.member_ids)
    return jsonify(success_response({'team': team.to_dict()}, 'Team created successfully')), 201


@blueprint.route('/my-teams', methods=['GET'])
@login_required
def my_teams():
    teams = TeamService.list_my_teams(current_user.student_id)
    return jsonify(success_response({'teams': [team.to_dict() for team in teams]}))


@blueprint.route('/invitations', methods=['GET'])
@login_required
def pending_invitations():
    teams = TeamService.list_pending_invitations(current_user.student_id)
    return jsonify(success_response({'teams': [team.to_dict() for team in teams]}))


@blueprint.route('/<id:team_id>', methods=['GET'])
@login_required
def get_team(team_id: int):
    team = TeamService.get_team(team_id)
    return jsonify(success_response({'team': team.to_dict()}))


@blueprint.route('/<id:team_id>/respond', methods=['POST'])
@login_required
def respond_to_invitation(team_id: int):
    payload = load_payload(InvitationResponse, request.get_json(silent=True))
    team = TeamService.respond_to_invitation(team_id, current_user.student_id, payload.status)
    return jsonify(success_response({'team': team.to_dict()}, f'Invitation {payload.status} successfully'))


@blueprint.route('/<id:team_id>/leave', methods=['POST'])
@login_required
def leave_team(team_id: int):
    TeamService.leave_team(team_id, current_user.student_id)
    return jsonify({'success': True, 'message': 'You have left the team', 'data': None})


@blueprint.route('/<id:team_id>', methods=['DELETE'])
@login_required
def disband_team(team_id: int):
    team = TeamService.disband_team(team_id, current_user.student_id)
    return jsonify(success_response({'team': team.to_dict()}, 'Team disbanded successfully'))


@blueprint.route('/<id:team_id>/members/<id:member_id>', methods=['DELETE'])
@login_required
def remove_member(team_id: int, member_id: int):
    team = TeamService.remove_member(team_id, current_user.student_id, member_id)
    return jsonify(success_response({'team': team.to_dict()}, 'Member removed successfully'))
