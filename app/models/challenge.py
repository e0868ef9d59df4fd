from app.extensions import db
from app.models.columns import JSONDocument, check_in
from app.models.enums import ChallengeDifficulty, ChallengeStatus, ChallengeType
from app.utils.dates import utcnow

challenge_exercises = db.Table(
    "challenge_exercises",
    db.Column("challenge_id", db.Integer, db.ForeignKey("challenges.id", ondelete="CASCADE"), primary_key=True),
    db.Column("exercise_id", db.Integer, db.ForeignKey("exercises.id", ondelete="CASCADE"), primary_key=True),
)


class Challenge(db.Model):
    __tablename__ = "challenges"

    id = db.Column(db.Integer, primary_key=True)
    creator_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    gym_id = db.Column(db.Integer, db.ForeignKey("gyms.id"), nullable=True, index=True)

    title = db.Column(db.String(150), nullable=False)
    description = db.Column(db.Text, nullable=False)
    type = db.Column(db.String(20), check_in("type", ChallengeType), nullable=False)
    difficulty = db.Column(db.String(20), check_in("difficulty", ChallengeDifficulty), nullable=False)
    status = db.Column(
        db.String(20),
        check_in("status", ChallengeStatus),
        nullable=False,
        default=ChallengeStatus.ACTIVE.value,
        index=True,
    )
    # {"targetDuration": minutes, "targetCalories": kcal, "targetWorkouts": count}
    objectives = db.Column(JSONDocument, nullable=False, default=dict)

    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=False)
    max_participants = db.Column(db.Integer, nullable=True)
    points_reward = db.Column(db.Integer, nullable=False, default=0)
    is_public = db.Column(db.Boolean, nullable=False, default=True)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    creator = db.relationship("User", foreign_keys=[creator_id])
    gym = db.relationship("Gym", back_populates="challenges")
    participations = db.relationship("Participation", back_populates="challenge", lazy="dynamic")
    recommended_exercises = db.relationship("Exercise", secondary=challenge_exercises, lazy="selectin")

    __table_args__ = (
        db.CheckConstraint("points_reward >= 0", name="ck_challenges_points_reward"),
        db.CheckConstraint("max_participants IS NULL OR max_participants > 0", name="ck_challenges_max_participants"),
        db.CheckConstraint("start_date < end_date", name="ck_challenges_window"),
    )

    def has_ended(self, now):
        return self.end_date < now

    def __repr__(self):
        return f"<Challenge {self.title}>"
