import logging
import os
from logging.handlers import RotatingFileHandler

from flask import Flask, jsonify
from flask_cors import CORS

from app.config import config
from app.errors import error_body, register_error_handlers
from app.extensions import db, ma, jwt, migrate, limiter


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    formatter = logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s")

    app.logger.setLevel(level)
    package_logger = logging.getLogger("app")
    package_logger.setLevel(level)
    if not package_logger.handlers:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        package_logger.addHandler(stream_handler)

    log_file = app.config.get("LOG_FILE")
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        file_handler = RotatingFileHandler(log_file, maxBytes=5 * 1024 * 1024, backupCount=5)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        app.logger.addHandler(file_handler)
        package_logger.addHandler(file_handler)


def configure_jwt_callbacks():
    @jwt.expired_token_loader
    def expired_token_callback(jwt_header, jwt_payload):
        return jsonify(error_body("Token has expired")), 401

    @jwt.invalid_token_loader
    def invalid_token_callback(error):
        return jsonify(error_body("Invalid or expired token")), 401

    @jwt.unauthorized_loader
    def unauthorized_callback(error):
        return jsonify(error_body("Access token is required")), 401


def create_app(config_name=None):
    app = Flask(__name__)
    config_name = config_name or os.getenv("FLASK_CONFIG", "default")
    app.config.from_object(config[config_name])

    configure_logging(app)

    # Extensions
    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    migrate.init_app(app, db)
    limiter.init_app(app)
    CORS(app, resources={r"/api/*": {
        "origins": app.config["CORS_ORIGINS"],
        "allow_headers": ["Content-Type", "Authorization"],
        "methods": ["GET", "POST", "PATCH", "DELETE", "OPTIONS"]
    }})

    configure_jwt_callbacks()
    register_error_handlers(app)

    # Blueprints
    from app.routes.home import home_bp
    from app.routes.auth import auth_bp
    from app.routes.user import user_bp
    from app.routes.gyms import gym_bp
    from app.routes.exercises import exercise_bp
    from app.routes.challenges import challenge_bp
    from app.routes.workouts import workout_bp
    from app.routes.notifications import notification_bp

    app.register_blueprint(home_bp)
    app.register_blueprint(auth_bp, url_prefix="/api/auth")
    app.register_blueprint(user_bp, url_prefix="/api/users")
    app.register_blueprint(gym_bp, url_prefix="/api/gyms")
    app.register_blueprint(exercise_bp, url_prefix="/api/exercises")
    app.register_blueprint(challenge_bp, url_prefix="/api/challenges")
    app.register_blueprint(workout_bp, url_prefix="/api/workouts")
    app.register_blueprint(notification_bp, url_prefix="/api/notifications")

    from app.commands import register_commands
    register_commands(app)

    app.logger.info("TSPark API started with '%s' config", config_name)
    return app
