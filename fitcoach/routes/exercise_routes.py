# fitcoach/routes/exercise_routes.py
# Mounted under /programs/<program_id>/trainingDays/<training_day_id>/exercises

from flask import Blueprint, jsonify, request

from ..guard import current_caller, roles_required
from ..models.user import ROLE_TRAINER
from ..services import hierarchy

exercises_bp = Blueprint("exercises", __name__)


@exercises_bp.route("", methods=["POST"])
@roles_required(ROLE_TRAINER)
def create_exercise(program_id, training_day_id):
    """
    Body: ``{"name": "Squat"}``. Names are unique within a training day.
    """
    data = request.get_json(silent=True) or {}
    exercise = hierarchy.create_exercise(current_caller(), program_id, training_day_id, data)
    return jsonify({"message": "Exercise added to training day", "exercise": exercise.to_dict()}), 201


@exercises_bp.route("", methods=["GET"])
@roles_required(ROLE_TRAINER)
def list_exercises(program_id, training_day_id):
    exercises = hierarchy.list_exercises(current_caller(), program_id, training_day_id)
    return jsonify({"exercises": [e.to_dict() for e in exercises]}), 200


@exercises_bp.route("/<int:exercise_id>", methods=["GET"])
@roles_required(ROLE_TRAINER)
def get_exercise(program_id, training_day_id, exercise_id):
    exercise = hierarchy.get_exercise(current_caller(), program_id, training_day_id, exercise_id)
    return jsonify({"exercise": exercise.to_dict()}), 200


@exercises_bp.route("/<int:exercise_id>", methods=["PUT"])
@roles_required(ROLE_TRAINER)
def update_exercise(program_id, training_day_id, exercise_id):
    data = request.get_json(silent=True) or {}
    exercise = hierarchy.update_exercise(
        current_caller(), program_id, training_day_id, exercise_id, data
    )
    return jsonify({"message": "Exercise updated successfully", "exercise": exercise.to_dict()}), 200


@exercises_bp.route("/<int:exercise_id>", methods=["DELETE"])
@roles_required(ROLE_TRAINER)
def delete_exercise(program_id, training_day_id, exercise_id):
    hierarchy.delete_exercise(current_caller(), program_id, training_day_id, exercise_id)
    return jsonify({"message": "Exercise and associated sets deleted successfully"}), 200
