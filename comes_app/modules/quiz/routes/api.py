# File: comes_app/modules/quiz/routes/api.py
from flask import jsonify, request

from ....core.error_handlers import success_response
from ....utils.pagination import get_page_args, pagination_meta
from ....utils.validation import load_payload
from .. import blueprint
from ..schemas import AttemptSubmit, QuizCreate, QuizUpdate, VisibilityUpdate
from ..services.quiz_service import QuizService


def _paginated_response(key: str, pagination, items: list):
    response = jsonify(success_response({key: items, 'pagination': pagination_meta(pagination)}))
    response.headers['X-Total-Count'] = str(pagination.total)
    return response


@blueprint.route('/', methods=['GET'], strict_slashes=False)
def list_quizzes():
    page, limit = get_page_args()
    pagination = QuizService.list_quizzes(
        page,
        limit,
        include_hidden=request.args.get('include_hidden') == 'true',
        search=request.args.get('search'),
        sort=request.args.get('sort'),
    )
    # Correctness flags never leave the server through listings
    return _paginated_response('quizzes', pagination, [quiz.to_dict() for quiz in pagination.items])


@blueprint.route('/<id:quiz_id>', methods=['GET'])
def get_quiz(quiz_id: int):
    quiz = QuizService.get_quiz(quiz_id)
    return jsonify(success_response({'quiz': quiz.to_dict()}))


@blueprint.route('/', methods=['POST'], strict_slashes=False)
def create_quiz():
    payload = load_payload(QuizCreate, request.get_json(silent=True))
    quiz = QuizService.create_quiz(payload)
    return jsonify(success_response({'quiz': quiz.to_dict(include_correct=True)}, 'Quiz created successfully')), 201


@blueprint.route('/<id:quiz_id>', methods=['PATCH'])
def update_quiz(quiz_id: int):
    payload = load_payload(QuizUpdate, request.get_json(silent=True))
    quiz = QuizService.update_quiz(quiz_id, payload)
    return jsonify(success_response({'quiz': quiz.to_dict(include_correct=True)}, 'Quiz updated successfully'))


@blueprint.route('/<id:quiz_id>', methods=['DELETE'])
def delete_quiz(quiz_id: int):
    QuizService.delete_quiz(quiz_id)
    return jsonify({'success': True, 'message': 'Quiz deleted successfully', 'data': None})


@blueprint.route('/<id:quiz_id>/visibility', methods=['PATCH'])
def toggle_visibility(quiz_id: int):
    payload = load_payload(VisibilityUpdate, request.get_json(silent=True))
    quiz = QuizService.set_visibility(quiz_id, payload.is_visible)
    state = 'visible' if quiz.is_visible else 'hidden'
    return jsonify(success_response({'quiz': quiz.to_dict()}, f'Quiz is now {state}'))


@blueprint.route('/<id:quiz_id>/attempt', methods=['POST'])
def submit_attempt(quiz_id: int):
    payload = load_payload(AttemptSubmit, request.get_json(silent=True))
    attempt = QuizService.submit_attempt(quiz_id, payload.participant_name, payload.responses)
    return jsonify(success_response({'attempt': attempt.to_dict()}, 'Quiz attempt submitted successfully')), 201


@blueprint.route('/<id:quiz_id>/attempts', methods=['GET'])
def list_attempts(quiz_id: int):
    page, limit = get_page_args()
    pagination = QuizService.list_attempts(quiz_id, page, limit, sort=request.args.get('sort'))
    return _paginated_response('attempts', pagination, [attempt.to_dict() for attempt in pagination.items])
