# fitcoach/routes/set_routes.py
# Mounted under .../trainingDays/<training_day_id>/exercises/<exercise_id>/sets

from flask import Blueprint, jsonify, request

from ..guard import current_caller, roles_required
from ..models.user import ROLE_TRAINER
from ..services import hierarchy

sets_bp = Blueprint("sets", __name__)


@sets_bp.route("", methods=["POST"])
@roles_required(ROLE_TRAINER)
def create_set(program_id, training_day_id, exercise_id):
    """
    Body: ``{"reps": 5, "weight": 100}`` (reps >= 1, weight >= 0).
    """
    data = request.get_json(silent=True) or {}
    workout_set = hierarchy.create_set(
        current_caller(), program_id, training_day_id, exercise_id, data
    )
    return jsonify({"message": "Set added to exercise", "set": workout_set.to_dict()}), 201


@sets_bp.route("", methods=["GET"])
@roles_required(ROLE_TRAINER)
def list_sets(program_id, training_day_id, exercise_id):
    sets = hierarchy.list_sets(current_caller(), program_id, training_day_id, exercise_id)
    return jsonify({"sets": [s.to_dict() for s in sets]}), 200


@sets_bp.route("/<int:set_id>", methods=["GET"])
@roles_required(ROLE_TRAINER)
def get_set(program_id, training_day_id, exercise_id, set_id):
    workout_set = hierarchy.get_set(
        current_caller(), program_id, training_day_id, exercise_id, set_id
    )
    return jsonify({"set": workout_set.to_dict()}), 200


@sets_bp.route("/<int:set_id>", methods=["PUT"])
@roles_required(ROLE_TRAINER)
def update_set(program_id, training_day_id, exercise_id, set_id):
    data = request.get_json(silent=True) or {}
    workout_set = hierarchy.update_set(
        current_caller(), program_id, training_day_id, exercise_id, set_id, data
    )
    return jsonify({"message": "Set updated successfully", "set": workout_set.to_dict()}), 200


@sets_bp.route("/<int:set_id>", methods=["DELETE"])
@roles_required(ROLE_TRAINER)
def delete_set(program_id, training_day_id, exercise_id, set_id):
    hierarchy.delete_workout_set(
        current_caller(), program_id, training_day_id, exercise_id, set_id
    )
    return jsonify({"message": "Set deleted successfully"}), 200
