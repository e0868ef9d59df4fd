from app.utils.dates import utcnow
from werkzeug.security import generate_password_hash, check_password_hash
from app.extensions import db
from app.models.columns import check_in
from app.models.enums import UserRole, UserStatus

USERS_TABLE = "users"

class User(db.Model):
    __tablename__ = USERS_TABLE

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=False)
    last_name = db.Column(db.String(100), nullable=False)
    role = db.Column(
        db.String(20),
        check_in("role", UserRole),
        nullable=False,
        default=UserRole.CLIENT.value,
        index=True,
    )
    status = db.Column(
        db.String(20),
        check_in("status", UserStatus),
        nullable=False,
        default=UserStatus.ACTIVE.value,
        index=True,
    )
    email_verified = db.Column(db.Boolean, nullable=False, default=False)
    total_points = db.Column(db.Integer, nullable=False, default=0)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    gyms = db.relationship("Gym", back_populates="owner", lazy="dynamic")
    participations = db.relationship("Participation", back_populates="user", lazy="dynamic")
    workouts = db.relationship("Workout", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    notifications = db.relationship("Notification", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")
    points_logs = db.relationship("PointsLog", back_populates="user", lazy="dynamic", cascade="all, delete-orphan")

    # Helpers
    def set_password(self, password: str):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password: str) -> bool:
        return check_password_hash(self.password_hash, password)

    # ------- helper properties -------
    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}"

    @property
    def is_super_admin(self):
        return self.role == UserRole.SUPER_ADMIN

    @property
    def is_gym_owner(self):
        return self.role == UserRole.GYM_OWNER

    @property
    def is_active(self):
        return self.status == UserStatus.ACTIVE

    def __repr__(self):
        return f"<User {self.email}>"
