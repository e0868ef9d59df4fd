"""Challenge lifecycle: creation, listing, join/leave and progress/points.

``ChallengeService`` is built per request with the session and the identity
and gym collaborators it reads from (see ``app.services.challenge_service_for``).
Every operation is a few reads followed by a single commit; failures are
raised as ``app.errors`` types before anything is written.
"""
import logging

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from app.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from app.models import Challenge, Exercise, Participation, PointsLog, User
from app.models.enums import ChallengeStatus, NotificationType, ParticipationStatus
from app.models.participation import ACTIVE_STATUSES, empty_progress
from app.schemas import load_or_raise
from app.schemas.challenge import ChallengeCreateSchema, ProgressSchema
from app.utils.dates import to_naive_utc, utcnow

logger = logging.getLogger(__name__)

# (objective key, progress key)
OBJECTIVE_TARGETS = (
    ("targetWorkouts", "currentWorkouts"),
    ("targetCalories", "currentCalories"),
    ("targetDuration", "currentDuration"),
)


def compute_completion(objectives, progress):
    """Mean coverage of the targets a challenge sets, as a 0-100 percentage.

    Each target contributes ``min(1, current / target)``. A challenge without
    any target is fully covered by a single recorded workout.
    """
    objectives = objectives or {}
    ratios = [
        min(1.0, progress.get(current, 0) / objectives[target])
        for target, current in OBJECTIVE_TARGETS
        if objectives.get(target)
    ]
    if not ratios:
        return 100.0 if progress.get("currentWorkouts", 0) > 0 else 0.0
    return round(min(100.0, 100.0 * sum(ratios) / len(ratios)), 2)


class ChallengeService:
    def __init__(self, session, users, gyms, notifications, clock=utcnow):
        self.session = session
        self.users = users
        self.gyms = gyms
        self.notifications = notifications
        self.clock = clock

    # ------------------------------------------------------------------
    # Challenges
    # ------------------------------------------------------------------
    def create_challenge(self, data, creator_id):
        payload = load_or_raise(ChallengeCreateSchema(), data)
        start_date = to_naive_utc(payload["start_date"])
        end_date = to_naive_utc(payload["end_date"])

        if start_date >= end_date:
            raise ValidationError("Start date must be before end date", field="startDate")
        if start_date < self.clock():
            raise ValidationError("Start date cannot be in the past", field="startDate")

        creator = self.users.find_by_id(creator_id)
        if not creator:
            raise NotFoundError("Creator", creator_id)

        gym_id = payload.get("gym_id")
        if gym_id is not None:
            gym = self.gyms.find_by_id(gym_id)
            if not gym:
                raise NotFoundError("Gym", gym_id)
            if not self.gyms.is_approved(gym):
                raise ConflictError(
                    "Gym must be approved to create challenges",
                    reason="gym_not_approved",
                    gym_id=gym_id,
                )

        exercises = self._resolve_exercises(payload["exercise_ids"])

        challenge = Challenge(
            title=payload["title"],
            description=payload["description"],
            type=payload["type"],
            difficulty=payload["difficulty"],
            objectives=payload["objectives"],
            start_date=start_date,
            end_date=end_date,
            points_reward=payload["points_reward"],
            max_participants=payload.get("max_participants"),
            is_public=payload["is_public"],
            creator_id=creator.id,
            gym_id=gym_id,
            recommended_exercises=exercises,
        )
        self.session.add(challenge)
        self.session.commit()
        logger.info("Challenge %s created by user %s", challenge.id, creator.id)
        return challenge

    def _resolve_exercises(self, exercise_ids):
        if not exercise_ids:
            return []
        wanted = list(dict.fromkeys(exercise_ids))
        found = self.session.execute(
            select(Exercise).where(Exercise.id.in_(wanted))
        ).scalars().all()
        by_id = {exercise.id: exercise for exercise in found}
        missing = [exercise_id for exercise_id in wanted if exercise_id not in by_id]
        if missing:
            raise NotFoundError("Exercise", missing[0])
        return [by_id[exercise_id] for exercise_id in wanted]

    def list_challenges(self, filters=None):
        """Active challenges, newest first. No pagination."""
        filters = filters or {}
        query = (
            select(Challenge)
            .options(selectinload(Challenge.creator), selectinload(Challenge.gym))
            .where(Challenge.status == ChallengeStatus.ACTIVE.value)
        )
        if filters.get("type"):
            query = query.where(Challenge.type == filters["type"])
        if filters.get("difficulty"):
            query = query.where(Challenge.difficulty == filters["difficulty"])
        if filters.get("gym_id") is not None:
            query = query.where(Challenge.gym_id == filters["gym_id"])
        if filters.get("is_public") is not None:
            query = query.where(Challenge.is_public == filters["is_public"])
        query = query.order_by(Challenge.created_at.desc(), Challenge.id.desc())
        return self.session.execute(query).scalars().all()

    def get_challenge_by_id(self, challenge_id):
        challenge = self.session.get(
            Challenge,
            challenge_id,
            options=[
                selectinload(Challenge.creator),
                selectinload(Challenge.gym),
                selectinload(Challenge.recommended_exercises),
            ],
        )
        if not challenge:
            raise NotFoundError("Challenge", challenge_id)
        return challenge

    # ------------------------------------------------------------------
    # Participations
    # ------------------------------------------------------------------
    def _find_participation(self, challenge_id, user_id):
        return self.session.execute(
            select(Participation).filter_by(challenge_id=challenge_id, user_id=user_id)
        ).scalar_one_or_none()

    def count_active(self, challenge_id):
        """Seats taken: participations that are joined or in progress."""
        return self.session.execute(
            select(func.count(Participation.id))
            .filter_by(challenge_id=challenge_id)
            .where(Participation.status.in_(ACTIVE_STATUSES))
        ).scalar_one()

    def join_challenge(self, challenge_id, user_id):
        challenge = self.session.get(Challenge, challenge_id)
        if not challenge:
            raise NotFoundError("Challenge", challenge_id)

        user = self.users.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)

        now = self.clock()
        existing = self._find_participation(challenge_id, user_id)
        if existing:
            if existing.status == ParticipationStatus.ABANDONED:
                existing.status = ParticipationStatus.JOINED.value
                existing.joined_at = now
                self.session.commit()
                logger.info("User %s rejoined challenge %s", user_id, challenge_id)
                return existing
            raise ConflictError(
                "User is already participating in this challenge",
                reason="already_participating",
                challenge_id=challenge_id,
            )

        if challenge.max_participants:
            if self.count_active(challenge_id) >= challenge.max_participants:
                raise ConflictError(
                    "Challenge has reached maximum participants",
                    reason="max_participants",
                    challenge_id=challenge_id,
                )

        # joining before start_date is allowed (pre-registration)
        if challenge.has_ended(now):
            raise ConflictError(
                "Challenge has already ended",
                reason="challenge_ended",
                challenge_id=challenge_id,
            )

        participation = Participation(
            challenge_id=challenge_id,
            user_id=user_id,
            status=ParticipationStatus.JOINED.value,
            progress=empty_progress(),
            points_earned=0,
            joined_at=now,
        )
        self.session.add(participation)
        try:
            self.session.commit()
        except IntegrityError as exc:
            # a concurrent join for the same pair won the insert
            self.session.rollback()
            raise ConflictError(
                "User is already participating in this challenge",
                reason="already_participating",
                challenge_id=challenge_id,
            ) from exc
        logger.info("User %s joined challenge %s", user_id, challenge_id)
        return participation

    def leave_challenge(self, challenge_id, user_id):
        participation = self._find_participation(challenge_id, user_id)
        if not participation:
            raise NotFoundError(
                "Participation",
                message="User is not participating in this challenge",
            )
        if participation.status == ParticipationStatus.COMPLETED:
            raise ConflictError(
                "Cannot leave a completed challenge",
                reason="challenge_completed",
                challenge_id=challenge_id,
            )
        participation.status = ParticipationStatus.ABANDONED.value
        self.session.commit()
        logger.info("User %s left challenge %s", user_id, challenge_id)

    def get_user_participations(self, user_id):
        query = (
            select(Participation)
            .options(selectinload(Participation.challenge).selectinload(Challenge.gym))
            .filter_by(user_id=user_id)
            .order_by(Participation.joined_at.desc(), Participation.id.desc())
        )
        return self.session.execute(query).scalars().all()

    def get_challenge_participants(self, challenge_id):
        query = (
            select(Participation)
            .options(selectinload(Participation.user))
            .filter_by(challenge_id=challenge_id)
            .order_by(Participation.joined_at.asc(), Participation.id.asc())
        )
        return self.session.execute(query).scalars().all()

    # ------------------------------------------------------------------
    # Progress & points
    # ------------------------------------------------------------------
    def participation_for(self, challenge_id, user_id):
        participation = self._find_participation(challenge_id, user_id)
        if not participation:
            raise NotFoundError(
                "Participation",
                message="User is not participating in this challenge",
            )
        return participation

    def record_progress(self, participation_id, data, user_id=None, commit=True):
        """Add one completed workout's calories/duration to a participation.

        Recomputes ``completionPercentage`` against the challenge objectives
        and completes the participation (stamping ``completedAt`` and
        awarding the challenge's points) once it reaches 100.

        The write is a compare-and-set on the participation still being
        active, so two requests racing on the same participation complete
        it (and award its points) at most once.
        """
        payload = load_or_raise(ProgressSchema(), data)

        participation = self.session.get(
            Participation, participation_id, with_for_update=True, populate_existing=True,
        )
        if not participation:
            raise NotFoundError("Participation", participation_id)
        if user_id is not None and participation.user_id != user_id:
            raise AuthorizationError("Access denied", participation_id=participation_id)
        if not participation.is_active:
            raise ConflictError(
                "Participation is not active",
                reason="participation_inactive",
                participation_id=participation_id,
                status=participation.status,
            )

        challenge = participation.challenge
        now = self.clock()
        if challenge.has_ended(now):
            raise ConflictError(
                "Challenge has already ended",
                reason="challenge_ended",
                challenge_id=challenge.id,
            )

        progress = {**empty_progress(), **(participation.progress or {})}
        progress["currentWorkouts"] += 1
        progress["currentCalories"] += payload["calories"]
        progress["currentDuration"] += payload["duration"]
        progress["completionPercentage"] = compute_completion(challenge.objectives, progress)
        completed = progress["completionPercentage"] >= 100

        values = {"progress": progress, "status": ParticipationStatus.IN_PROGRESS.value}
        if completed:
            values.update(
                status=ParticipationStatus.COMPLETED.value,
                completed_at=now,
                points_earned=challenge.points_reward,
            )
        claimed = self.session.execute(
            update(Participation)
            .where(Participation.id == participation.id, Participation.status.in_(ACTIVE_STATUSES))
            .values(**values)
            .execution_options(synchronize_session=False)
        ).rowcount
        if not claimed:
            raise ConflictError(
                "Participation is not active",
                reason="participation_inactive",
                participation_id=participation_id,
            )
        self.session.expire(participation)

        if completed:
            self._award(participation, challenge, now)

        if commit:
            self.session.commit()
        return participation

    def _award(self, participation, challenge, now):
        user = participation.user
        self.session.execute(
            update(User)
            .where(User.id == user.id)
            .values(total_points=User.total_points + challenge.points_reward)
            .execution_options(synchronize_session=False)
        )
        self.session.expire(user, ["total_points"])
        if challenge.points_reward:
            self.session.add(PointsLog(
                user_id=user.id,
                participation_id=participation.id,
                points=challenge.points_reward,
                reason=f"Completed challenge: {challenge.title}",
                awarded_at=now,
            ))
        self.notifications.notify(
            user.id,
            NotificationType.CHALLENGE_COMPLETED,
            "Challenge completed",
            f"You completed '{challenge.title}' and earned {challenge.points_reward} points.",
            challenge_id=challenge.id,
            points=challenge.points_reward,
        )
        logger.info(
            "User %s completed challenge %s (+%s points)",
            user.id, challenge.id, challenge.points_reward,
        )
