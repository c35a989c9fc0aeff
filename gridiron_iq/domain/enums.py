from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    COACH = "COACH"
    ATHLETE = "ATHLETE"


class IqLevel(str, Enum):
    # Declared lowest to highest; rank follows declaration order.
    ROOKIE = "rookie"
    DEVELOPING = "developing"
    PROFICIENT = "proficient"
    VETERAN = "veteran"
    ELITE = "elite"

    @property
    def rank(self) -> int:
        return list(IqLevel).index(self)


class QuizDifficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class QuizCategory(str, Enum):
    RULES = "rules"
    STRATEGY = "strategy"
    POSITION_FUNDAMENTALS = "position_fundamentals"
    SITUATIONAL_AWARENESS = "situational_awareness"
    PLAY_RECOGNITION = "play_recognition"
    TERMINOLOGY = "terminology"
    GAME_MANAGEMENT = "game_management"


class QuestionType(str, Enum):
    MULTIPLE_CHOICE = "multiple_choice"
    TRUE_FALSE = "true_false"
    SCENARIO_BASED = "scenario_based"
    DIAGRAM = "diagram"


class AttemptStatus(str, Enum):
    STARTED = "started"
    COMPLETED = "completed"
    ABANDONED = "abandoned"


class FootballPosition(str, Enum):
    QUARTERBACK = "Quarterback (QB)"
    RUNNING_BACK = "Running Back (RB)"
    WIDE_RECEIVER = "Wide Receiver (WR)"
    TIGHT_END = "Tight End (TE)"
    OFFENSIVE_LINE = "Offensive Line (OL)"
    DEFENSIVE_LINE = "Defensive Line (DL)"
    LINEBACKER = "Linebacker (LB)"
    CORNERBACK = "Cornerback (CB)"
    SAFETY = "Safety (S)"
    SPECIAL_TEAMS = "Special Teams"


# Progress key for quizzes that apply to every position.
GENERAL_POSITION = "General"
UNKNOWN_QUIZ_TITLE = "Unknown Quiz"
