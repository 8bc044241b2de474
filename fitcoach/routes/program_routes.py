# fitcoach/routes/program_routes.py

from flask import Blueprint, jsonify, request

from ..guard import current_caller, roles_required
from ..models.user import ROLE_TRAINER
from ..services import assignment, hierarchy
from ..validation import clean_user_id

programs_bp = Blueprint("programs", __name__)


# ------------------------------
# POST /programs
# ------------------------------
@programs_bp.route("", methods=["POST"])
@roles_required(ROLE_TRAINER)
def create_program():
    data = request.get_json(silent=True) or {}
    program = hierarchy.create_program(current_caller(), data)
    return jsonify({"message": "Program created successfully", "program": program.to_dict()}), 201


# ------------------------------
# GET /programs  (caller's own programs)
# ------------------------------
@programs_bp.route("", methods=["GET"])
@roles_required(ROLE_TRAINER)
def list_programs():
    programs = hierarchy.list_programs(current_caller())
    return jsonify({"programs": [p.to_dict() for p in programs]}), 200


@programs_bp.route("/<int:program_id>", methods=["GET"])
@roles_required(ROLE_TRAINER)
def get_program(program_id):
    program = hierarchy.get_program(current_caller(), program_id)
    return jsonify({"program": program.to_dict()}), 200


@programs_bp.route("/<int:program_id>", methods=["PUT"])
@roles_required(ROLE_TRAINER)
def update_program(program_id):
    data = request.get_json(silent=True) or {}
    program = hierarchy.update_program(current_caller(), program_id, data)
    return jsonify({"message": "Program updated successfully", "program": program.to_dict()}), 200


@programs_bp.route("/<int:program_id>", methods=["DELETE"])
@roles_required(ROLE_TRAINER)
def delete_program(program_id):
    hierarchy.delete_program(current_caller(), program_id)
    return jsonify({"message": "Program deleted successfully"}), 200


# ------------------------------
# Assignment
# ------------------------------
@programs_bp.route("/<int:program_id>/assign", methods=["POST"])
@roles_required(ROLE_TRAINER)
def assign_program(program_id):
    """
    Body: ``{"userId": 7}``. Assigning an already-assigned user is a no-op.
    """
    data = request.get_json(silent=True) or {}
    user_id = clean_user_id(data)
    program = assignment.assign(current_caller(), program_id, user_id)
    return jsonify({"message": "Program assigned to user", "program": program.to_dict()}), 200


@programs_bp.route("/<int:program_id>/assign/<int:user_id>", methods=["DELETE"])
@roles_required(ROLE_TRAINER)
def unassign_program(program_id, user_id):
    program = assignment.unassign(current_caller(), program_id, user_id)
    return jsonify({"message": "Program unassigned from user", "program": program.to_dict()}), 200
