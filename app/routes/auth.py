from flask import Blueprint, current_app, request
from flask_jwt_extended import get_jwt_identity, jwt_required

from app.extensions import db, limiter
from app.schemas.user import UserSchema
from app.services.auth_service import AuthService
from app.services.stores import UserStore
from app.utils.response import created, success

auth_bp = Blueprint("auth", __name__)
user_schema = UserSchema()


def auth_service():
    return AuthService(db.session, UserStore(db.session))


@auth_bp.route("/register", methods=["POST"])
@limiter.limit(lambda: current_app.config["REGISTER_RATE_LIMIT"])
def register():
    user = auth_service().register(request.get_json(silent=True))
    return created("User registered successfully", user_schema.dump(user))


@auth_bp.route("/login", methods=["POST"])
@limiter.limit(lambda: current_app.config["LOGIN_RATE_LIMIT"])
def login():
    user, token = auth_service().login(request.get_json(silent=True))
    return success("Login successful", {"user": user_schema.dump(user), "token": token})


@auth_bp.route("/me", methods=["GET"])
@jwt_required()
def get_me():
    user = auth_service().current_user(int(get_jwt_identity()))
    return success("User profile retrieved successfully", user_schema.dump(user))
