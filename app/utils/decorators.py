# app/utils/decorators.py
from functools import wraps

from flask_jwt_extended import get_jwt_identity, jwt_required

from app.errors import AuthenticationError, AuthorizationError
from app.extensions import db
from app.models.user import User


def load_current_user():
    user = db.session.get(User, int(get_jwt_identity()))
    if not user or not user.is_active:
        raise AuthenticationError("User not authenticated")
    return user


def inject_current_user(view_func):
    """
    Requires a valid JWT and passes the authenticated user to the view
    as the ``current_user`` keyword argument.
    """
    @wraps(view_func)
    @jwt_required()
    def wrapper(*args, **kwargs):
        kwargs['current_user'] = load_current_user()
        return view_func(*args, **kwargs)
    return wrapper


def role_required(*roles):
    """Like ``inject_current_user`` but also checks the user's role."""
    def decorator(view_func):
        @wraps(view_func)
        @jwt_required()
        def wrapper(*args, **kwargs):
            user = load_current_user()
            if user.role not in roles:
                raise AuthorizationError("Insufficient permissions", required=list(roles))
            kwargs['current_user'] = user
            return view_func(*args, **kwargs)
        return wrapper
    return decorator
