from app.extensions import db
from app.utils.dates import utcnow

class Workout(db.Model):
    __tablename__ = "workouts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    participation_id = db.Column(db.Integer, db.ForeignKey("participations.id"), nullable=True, index=True)

    name = db.Column(db.String(150), nullable=False)  # running, cycling, ...
    difficulty = db.Column(db.String(20), nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    calories_burned = db.Column(db.Integer, nullable=False, default=0)
    completion_date = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow, index=True)

    user = db.relationship("User", back_populates="workouts")
    participation = db.relationship("Participation", back_populates="workouts")

    __table_args__ = (
        db.Index("idx_workouts_user_created", "user_id", "created_at"),
    )
