import logging

from sqlalchemy import select

from app.models import Workout
from app.schemas import load_or_raise
from app.schemas.workout import WorkoutCreateSchema
from app.utils.dates import to_naive_utc

logger = logging.getLogger(__name__)


class WorkoutService:
    """Logs workouts and feeds the ones tied to a participation into challenge progress."""

    def __init__(self, session, challenges):
        self.session = session
        self.challenges = challenges

    def log_workout(self, data, user_id):
        payload = load_or_raise(WorkoutCreateSchema(), data)
        workout = Workout(
            user_id=user_id,
            name=payload["name"],
            difficulty=payload["difficulty"],
            duration=payload["duration"],
            calories_burned=payload["calories_burned"],
            completion_date=to_naive_utc(payload.get("completion_date")),
            participation_id=payload.get("participation_id"),
        )
        participation = None
        try:
            if workout.participation_id is not None:
                participation = self.challenges.record_progress(
                    workout.participation_id,
                    {"calories": workout.calories_burned, "duration": workout.duration},
                    user_id=user_id,
                    commit=False,
                )
            self.session.add(workout)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info("Workout %s logged for user %s", workout.id, user_id)
        return workout, participation

    def list_for_user(self, user_id):
        return self.session.execute(
            select(Workout).filter_by(user_id=user_id).order_by(Workout.created_at.desc(), Workout.id.desc())
        ).scalars().all()
