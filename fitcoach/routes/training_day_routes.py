# fitcoach/routes/training_day_routes.py
# Mounted under /programs/<program_id>/trainingDays

from flask import Blueprint, jsonify, request

from ..guard import current_caller, roles_required
from ..models.user import ROLE_TRAINER
from ..services import hierarchy

training_days_bp = Blueprint("training_days", __name__)


@training_days_bp.route("", methods=["POST"])
@roles_required(ROLE_TRAINER)
def create_training_day(program_id):
    data = request.get_json(silent=True) or {}
    training_day = hierarchy.create_training_day(current_caller(), program_id, data)
    return jsonify({
        "message": "Training day added to program",
        "trainingDay": training_day.to_dict(),
    }), 201


@training_days_bp.route("", methods=["GET"])
@roles_required(ROLE_TRAINER)
def list_training_days(program_id):
    days = hierarchy.list_training_days(current_caller(), program_id)
    return jsonify({"trainingDays": [d.to_dict() for d in days]}), 200


@training_days_bp.route("/<int:training_day_id>", methods=["GET"])
@roles_required(ROLE_TRAINER)
def get_training_day(program_id, training_day_id):
    training_day = hierarchy.get_training_day(current_caller(), program_id, training_day_id)
    return jsonify({"trainingDay": training_day.to_dict()}), 200


@training_days_bp.route("/<int:training_day_id>", methods=["PUT"])
@roles_required(ROLE_TRAINER)
def update_training_day(program_id, training_day_id):
    data = request.get_json(silent=True) or {}
    training_day = hierarchy.update_training_day(
        current_caller(), program_id, training_day_id, data
    )
    return jsonify({
        "message": "Training day updated successfully",
        "trainingDay": training_day.to_dict(),
    }), 200


@training_days_bp.route("/<int:training_day_id>", methods=["DELETE"])
@roles_required(ROLE_TRAINER)
def delete_training_day(program_id, training_day_id):
    hierarchy.delete_training_day(current_caller(), program_id, training_day_id)
    return jsonify({"message": "Training day and associated data deleted successfully"}), 200
