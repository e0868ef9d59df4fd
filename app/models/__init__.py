from .user import User
from .gym import Gym
from .exercises import Exercise
from .challenge import Challenge, challenge_exercises
from .participation import Participation
from .workout_log import Workout
from .notifications import Notification
from .points_logs import PointsLog

__all__ = [
    "User", "Gym", "Exercise",
    "Challenge", "challenge_exercises", "Participation",
    "Workout", "Notification", "PointsLog",
]
