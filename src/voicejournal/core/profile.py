"""User profile domain model - no I/O dependencies."""

import time
import uuid
from dataclasses import dataclass, field, fields, replace


@dataclass(frozen=True)
class OnboardingGoal:
    """A goal a user can pick during onboarding."""

    id: str
    title: str
    emoji: str


ONBOARDING_GOALS = [
    OnboardingGoal("clear_head", "Clear head", "🧘"),
    OnboardingGoal("understand_self", "Understand self", "🪞"),
    OnboardingGoal("vent", "Vent", "💨"),
    OnboardingGoal("remember_moments", "Remember moments", "✨"),
    OnboardingGoal("grow", "Grow", "🌱"),
    OnboardingGoal("stay_on_track", "Stay on track", "🎯"),
]


def find_goal(goal_id: str) -> OnboardingGoal | None:
    """Look up an onboarding goal by id."""
    for goal in ONBOARDING_GOALS:
        if goal.id == goal_id:
            return goal
    return None


# Persisted key -> attribute name
_FIELD_KEYS = {
    "id": "id",
    "email": "email",
    "firstName": "first_name",
    "lastName": "last_name",
    "hasCompletedOnboarding": "has_completed_onboarding",
    "onboardingGoals": "onboarding_goals",
    "attribution": "attribution",
    "ageRange": "age_range",
    "lifeStage": "life_stage",
    "currentStruggles": "current_struggles",
    "createdAt": "created_at",
}

_IMMUTABLE_FIELDS = {"id", "created_at"}
_LIST_FIELDS = ("onboarding_goals", "current_struggles")
_TEXT_FIELDS = ("email", "first_name", "last_name", "attribution", "age_range", "life_stage")


@dataclass(frozen=True)
class UserProfile:
    """The signed-in user. At most one is resident at a time."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    has_completed_onboarding: bool = False
    onboarding_goals: list[str] = field(default_factory=list)
    attribution: str = ""
    age_range: str = ""
    life_stage: str = ""
    current_struggles: list[str] = field(default_factory=list)
    created_at: int = 0

    def __post_init__(self):
        for name in _LIST_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ValueError(f"Profile field {name} must be a list of strings")
        for name in _TEXT_FIELDS:
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"Profile field {name} must be a string")
        if not isinstance(self.has_completed_onboarding, bool):
            raise ValueError("Profile field has_completed_onboarding must be a bool")

    @classmethod
    def new(
        cls,
        email: str,
        id: str | None = None,
        created_at: int | None = None,
    ) -> "UserProfile":
        """Fresh profile with every optional field empty."""
        return cls(
            id=id or uuid.uuid4().hex,
            email=email,
            created_at=created_at if created_at is not None else int(time.time() * 1000),
        )

    def merged(self, updates: dict) -> "UserProfile":
        """
        Return a copy with the given fields overwritten.

        Fields not named in updates are preserved. Raises ValueError for
        unknown or immutable fields, and for values of the wrong type.
        """
        known = {f.name for f in fields(self)}
        unknown = set(updates) - known
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
        frozen = set(updates) & _IMMUTABLE_FIELDS
        if frozen:
            raise ValueError(f"Profile fields cannot be changed: {', '.join(sorted(frozen))}")
        return replace(self, **updates)

    def to_dict(self) -> dict:
        return {key: _copy(getattr(self, attr)) for key, attr in _FIELD_KEYS.items()}

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        """Create UserProfile from a persisted document.

        Raises KeyError or ValueError on malformed input.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")
        kwargs = {attr: data[key] for key, attr in _FIELD_KEYS.items() if key in data}
        if "id" not in kwargs or "email" not in kwargs:
            raise KeyError("Profile is missing id or email")
        for attr in _LIST_FIELDS:
            value = kwargs.get(attr) or []
            if not isinstance(value, list):
                raise ValueError(f"Profile field {attr} must be a list")
            kwargs[attr] = [str(v) for v in value]
        for attr in _TEXT_FIELDS[1:]:
            if kwargs.get(attr) is None:
                kwargs.pop(attr, None)
        kwargs["id"] = str(kwargs["id"])
        kwargs["created_at"] = int(kwargs.get("created_at", 0) or 0)
        kwargs["has_completed_onboarding"] = bool(kwargs.get("has_completed_onboarding", False))
        return cls(**kwargs)


def _copy(value):
    return list(value) if isinstance(value, list) else value
