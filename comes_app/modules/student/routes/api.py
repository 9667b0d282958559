# File: comes_app/modules/student/routes/api.py
from flask import jsonify, request

from ....core.error_handlers import success_response
from ....utils.validation import load_payload
from .. import blueprint
from ..schemas import StudentCreate
from ..services.student_service import StudentService


@blueprint.route('/', methods=['POST'], strict_slashes=False)
def create_student():
    payload = load_payload(StudentCreate, request.get_json(silent=True))
    student = StudentService.create_student(payload)
    return jsonify(success_response({'student': student.to_dict()}, 'Student registered successfully')), 201


@blueprint.route('/search', methods=['GET'])
def search_students():
    students = StudentService.search_students(request.args.get('query'))
    return jsonify(success_response({'students': [s.to_summary() for s in students]}))


@blueprint.route('/<id:student_id>', methods=['GET'])
def get_student(student_id: int):
    student = StudentService.get_student(student_id)
    return jsonify(success_response({'student': student.to_dict()}))
