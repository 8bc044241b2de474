# fitcoach/routes/auth_routes.py

from flask import Blueprint, jsonify, request
from flask_jwt_extended import jwt_required

from .. import db
from ..errors import NotFound
from ..guard import current_caller
from ..models.user import User
from ..services import identity

auth_bp = Blueprint("auth", __name__)


# -----------------------------
# Routes
# -----------------------------
@auth_bp.route("/register", methods=["POST"])
def register():
    data = request.get_json(silent=True) or {}
    user = identity.register(data)
    return jsonify({"message": "User registered successfully", "user": user.to_dict()}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    """
    Accepts ``{"email": "...", "password": "..."}``.
    Returns ``{"token", "role", "user"}``; the token is sent back as
    ``Authorization: Bearer <token>``.
    """
    data = request.get_json(silent=True) or {}
    token, user = identity.authenticate(data)
    return jsonify({"token": token, "role": user.role, "user": user.to_dict()}), 200


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def me():
    user = db.session.get(User, current_caller().id)
    if not user:
        raise NotFound("User")
    return jsonify({"user": user.to_dict()}), 200
