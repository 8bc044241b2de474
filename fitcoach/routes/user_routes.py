# fitcoach/routes/user_routes.py
# Trainee read path: any authenticated caller, filtered by assignment.

from flask import Blueprint, current_app, jsonify, request
from flask_jwt_extended import jwt_required

from ..guard import current_caller
from ..services import assignment
from ..validation import parse_page_args

users_bp = Blueprint("users", __name__)


# ------------------------------
# GET /users/programs?page=1&limit=10
# ------------------------------
@users_bp.route("/programs", methods=["GET"])
@jwt_required()
def assigned_programs():
    caller = current_caller()
    page, limit = parse_page_args(request.args, current_app.config.get("DEFAULT_PAGE_SIZE", 10))

    result = assignment.list_assigned_programs(caller.id, page, limit)

    return jsonify({
        "programs": [p.to_dict(include_assignments=False) for p in result.items],
        "currentPage": result.page,
        "totalPages": result.pages,
        "totalPrograms": result.total,
    }), 200


@users_bp.route("/programs/<int:program_id>", methods=["GET"])
@jwt_required()
def assigned_program(program_id):
    program = assignment.get_assigned_program(current_caller(), program_id)
    return jsonify({"program": program.to_dict(include_assignments=False)}), 200
