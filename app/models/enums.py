import enum


class UserRole(str, enum.Enum):
    SUPER_ADMIN = "super_admin"
    GYM_OWNER = "gym_owner"
    CLIENT = "client"


class UserStatus(str, enum.Enum):
    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"


class GymStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ChallengeType(str, enum.Enum):
    INDIVIDUAL = "individual"
    TEAM = "team"
    SOCIAL = "social"


class ChallengeDifficulty(str, enum.Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXTREME = "extreme"


class ChallengeStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ParticipationStatus(str, enum.Enum):
    JOINED = "joined"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class ExerciseDifficulty(str, enum.Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class NotificationType(str, enum.Enum):
    FRIEND_REQUEST = "friend_request"
    CHALLENGE_INVITE = "challenge_invite"
    BADGE_AWARDED = "badge_awarded"
    CHALLENGE_COMPLETED = "challenge_completed"
    GYM_APPROVED = "gym_approved"
    GYM_REJECTED = "gym_rejected"
