# fitcoach/__init__.py

from flask import Flask, jsonify
from flask_cors import CORS
from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager

from config import Config

db = SQLAlchemy()
jwt = JWTManager()


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Init extensions
    db.init_app(app)
    jwt.init_app(app)

    CORS(app, resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}})

    # -----------------------------
    # JWT error handlers
    # -----------------------------
    @jwt.unauthorized_loader
    def unauthorized_callback(reason):
        # a present but malformed header is a bad token, not a missing one
        if reason == f"Missing {app.config['JWT_HEADER_NAME']} Header":
            return jsonify({"error": "No token provided"}), 401
        app.logger.info(f"[jwt] rejected header: {reason}")
        return jsonify({"error": "Invalid token"}), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(reason):
        app.logger.info(f"[jwt] rejected token: {reason}")
        return jsonify({"error": "Invalid token"}), 401

    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify({"error": "Invalid token"}), 401

    from .errors import register_error_handlers

    register_error_handlers(app)

    # -----------------------------
    # IMPORT BLUEPRINTS (all routes)
    # -----------------------------
    from .routes.auth_routes import auth_bp
    from .routes.program_routes import programs_bp
    from .routes.training_day_routes import training_days_bp
    from .routes.exercise_routes import exercises_bp
    from .routes.set_routes import sets_bp
    from .routes.user_routes import users_bp

    # -----------------------------
    # REGISTER BLUEPRINTS
    # -----------------------------
    day_prefix = "/programs/<int:program_id>/trainingDays"
    exercise_prefix = f"{day_prefix}/<int:training_day_id>/exercises"

    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(programs_bp, url_prefix="/programs")
    app.register_blueprint(training_days_bp, url_prefix=day_prefix)
    app.register_blueprint(exercises_bp, url_prefix=exercise_prefix)
    app.register_blueprint(sets_bp, url_prefix=f"{exercise_prefix}/<int:exercise_id>/sets")
    app.register_blueprint(users_bp, url_prefix="/users")

    @app.route("/health")
    def health():
        return {"status": "ok"}

    # -----------------------------
    # DB init
    # -----------------------------
    from . import models  # noqa: F401  (register tables)

    with app.app_context():
        db.create_all()

    return app
