from sqlalchemy import or_, select

from app.errors import NotFoundError
from app.models import Exercise
from app.schemas import load_or_raise
from app.schemas.exercise import ExerciseInputSchema


class ExerciseService:
    def __init__(self, session):
        self.session = session

    def _get(self, exercise_id):
        exercise = self.session.get(Exercise, exercise_id)
        if not exercise:
            raise NotFoundError("Exercise", exercise_id)
        return exercise

    def create_exercise(self, data, created_by_id):
        payload = load_or_raise(ExerciseInputSchema(), data)
        exercise = Exercise(created_by_id=created_by_id, **payload)
        self.session.add(exercise)
        self.session.commit()
        return exercise

    def list_exercises(self, difficulty=None, muscle_group=None, search=None):
        query = select(Exercise)
        if difficulty:
            query = query.filter_by(difficulty=difficulty)
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(Exercise.name.ilike(pattern), Exercise.description.ilike(pattern)))
        exercises = self.session.execute(query.order_by(Exercise.name.asc())).scalars().all()
        # muscle_groups is a JSON list; filtered here to stay portable across backends
        if muscle_group:
            wanted = muscle_group.lower()
            exercises = [e for e in exercises if wanted in [m.lower() for m in (e.muscle_groups or [])]]
        return exercises

    def search(self, term):
        return self.list_exercises(search=term)

    def get_exercise(self, exercise_id):
        return self._get(exercise_id)

    def update_exercise(self, exercise_id, data):
        exercise = self._get(exercise_id)
        payload = load_or_raise(ExerciseInputSchema(), data, partial=True)
        for field, value in payload.items():
            setattr(exercise, field, value)
        self.session.commit()
        return exercise

    def delete_exercise(self, exercise_id):
        exercise = self._get(exercise_id)
        self.session.delete(exercise)
        self.session.commit()
