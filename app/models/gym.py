from app.utils.dates import utcnow
from app.extensions import db
from app.models.columns import JSONDocument, check_in
from app.models.enums import GymStatus

class Gym(db.Model):
    __tablename__ = "gyms"

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)

    name = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=False)
    address = db.Column(db.String(255), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    phone = db.Column(db.String(30), nullable=False)
    email = db.Column(db.String(120), nullable=False)
    capacity = db.Column(db.Integer, nullable=False)
    equipment = db.Column(JSONDocument, default=list)  # ["treadmill", "rack"]
    specialized_exercise_types = db.Column(JSONDocument, default=list)  # ["cardio", "yoga"]

    status = db.Column(
        db.String(20),
        check_in("status", GymStatus),
        nullable=False,
        default=GymStatus.PENDING.value,
        index=True,
    )
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    owner = db.relationship("User", back_populates="gyms")
    challenges = db.relationship("Challenge", back_populates="gym", lazy="dynamic")

    @property
    def is_approved(self):
        return self.status == GymStatus.APPROVED

    def __repr__(self):
        return f"<Gym {self.name} ({self.status})>"
