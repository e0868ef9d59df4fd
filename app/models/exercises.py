from app.extensions import db
from app.models.columns import JSONDocument, check_in
from app.models.enums import ExerciseDifficulty
from app.utils.dates import utcnow

class Exercise(db.Model):
    __tablename__ = "exercises"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False, index=True)
    description = db.Column(db.Text, nullable=False)

    # Exercise categorization
    muscle_groups = db.Column(JSONDocument, default=list)   # ["chest", "shoulders", "triceps"]
    difficulty = db.Column(
        db.String(20),
        check_in("difficulty", ExerciseDifficulty),
        nullable=False,
        default=ExerciseDifficulty.BEGINNER.value,
    )
    calories_per_minute = db.Column(db.Numeric(5, 2), nullable=False, default=5.0)

    instructions = db.Column(db.Text)  # step-by-step instructions
    video_url = db.Column(db.String(255))
    image_url = db.Column(db.String(255))

    # Metadata
    created_by_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    created_by = db.relationship("User", foreign_keys=[created_by_id])

    __table_args__ = (
        db.Index("idx_exercises_difficulty", "difficulty"),
    )

    def __repr__(self):
        return f"<Exercise {self.name}>"
