import logging

from flask_jwt_extended import create_access_token
from sqlalchemy.exc import IntegrityError

from app.errors import AuthenticationError, ConflictError, NotFoundError
from app.models import User
from app.models.enums import UserStatus
from app.schemas import load_or_raise
from app.schemas.user import LoginSchema, RegisterSchema

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, session, users):
        self.session = session
        self.users = users

    def register(self, data):
        payload = load_or_raise(RegisterSchema(), data)
        email = payload["email"].strip().lower()

        if self.users.find_by_email(email):
            raise ConflictError("User with this email already exists", reason="email_taken")

        user = User(
            email=email,
            first_name=payload["first_name"].strip(),
            last_name=payload["last_name"].strip(),
            role=payload["role"],
            status=UserStatus.ACTIVE.value,
        )
        user.set_password(payload["password"])
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ConflictError("User with this email already exists", reason="email_taken") from exc
        logger.info("Registered user %s (%s)", user.id, user.role)
        return user

    def login(self, data):
        payload = load_or_raise(LoginSchema(), data)
        user = self.users.find_by_email(payload["email"])

        # same message for unknown email and wrong password
        if not user or not user.check_password(payload["password"]):
            logger.info("Login failed for %s", payload["email"])
            raise AuthenticationError("Invalid email or password")
        if not user.is_active:
            raise AuthenticationError("Account is not active", status=user.status)

        token = create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "email": user.email},
        )
        return user, token

    def current_user(self, user_id):
        user = self.users.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)
        return user
