from app.extensions import db
from app.models.columns import JSONDocument, check_in
from app.models.enums import ParticipationStatus
from app.utils.dates import utcnow


ACTIVE_STATUSES = (ParticipationStatus.JOINED.value, ParticipationStatus.IN_PROGRESS.value)


def empty_progress():
    return {
        "currentWorkouts": 0,
        "currentCalories": 0,
        "currentDuration": 0,
        "completionPercentage": 0,
    }


class Participation(db.Model):
    __tablename__ = "participations"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    challenge_id = db.Column(db.Integer, db.ForeignKey("challenges.id"), nullable=False, index=True)

    status = db.Column(
        db.String(20),
        check_in("status", ParticipationStatus),
        nullable=False,
        default=ParticipationStatus.JOINED.value,
        index=True,
    )
    progress = db.Column(JSONDocument, nullable=False, default=empty_progress)
    joined_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    completed_at = db.Column(db.DateTime, nullable=True)
    points_earned = db.Column(db.Integer, nullable=False, default=0)

    user = db.relationship("User", back_populates="participations")
    challenge = db.relationship("Challenge", back_populates="participations")
    workouts = db.relationship("Workout", back_populates="participation", lazy="dynamic")

    __table_args__ = (
        # one row per (user, challenge); re-joining reactivates it
        db.UniqueConstraint("user_id", "challenge_id", name="uq_participations_user_challenge"),
        db.Index("idx_participations_challenge_status", "challenge_id", "status"),
    )

    @property
    def is_active(self):
        return self.status in ACTIVE_STATUSES

    def __repr__(self):
        return f"<Participation user={self.user_id} challenge={self.challenge_id} {self.status}>"
