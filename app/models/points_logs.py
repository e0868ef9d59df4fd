from app.extensions import db
from app.utils.dates import utcnow

class PointsLog(db.Model):
    __tablename__ = "points_logs"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    participation_id = db.Column(db.Integer, db.ForeignKey("participations.id"), nullable=True)
    points = db.Column(db.Integer, nullable=False)
    reason = db.Column(db.String(255), nullable=False)  # e.g., "Completed challenge: 30 day plank"
    awarded_at = db.Column(db.DateTime, default=utcnow)

    user = db.relationship("User", back_populates="points_logs")

    __table_args__ = (
        db.Index("idx_points_logs_user", "user_id"),
    )
