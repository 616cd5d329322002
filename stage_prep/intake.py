"""Assessment validation.

Everything that can go wrong with an assessment is caught here, so the
calculator and meal builder only ever see well-formed input.
"""

import math
import re
from dataclasses import fields
from datetime import date
from typing import Mapping

from stage_prep.config import AGE_RANGE, MAX_HEIGHT_CM, MAX_SESSIONS_PER_WEEK, MAX_WEIGHT_KG
from stage_prep.models import AssessmentInput, BudgetLevel, DietType, ExperienceLevel, Phase

ENUM_FIELDS = {
    "experience_level": ExperienceLevel,
    "phase": Phase,
    "diet_type": DietType,
    "budget_level": BudgetLevel,
}

PRIORITY_FIELDS = (
    "fullness_priority",
    "fat_loss_priority",
    "dryness_priority",
    "strength_priority",
)

OPTIONAL_FIELDS = PRIORITY_FIELDS + ("competition_date",)


class InvalidInput(ValueError):
    """An assessment field is missing or violates its constraint."""

    def __init__(self, field: str, constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(f"{field}: {constraint}")


def _number(name: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(name, "must be a number")
    if not math.isfinite(value):
        raise InvalidInput(name, "must be finite")
    return value


def _integer(name: str, value, low: int, high: int) -> int:
    value = _number(name, value)
    if value != int(value):
        raise InvalidInput(name, "must be a whole number")
    value = int(value)
    if not low <= value <= high:
        raise InvalidInput(name, f"must be between {low} and {high}")
    return value


def _positive(name: str, value, high: float) -> float:
    value = _number(name, value)
    if not 0 < value <= high:
        raise InvalidInput(name, f"must be greater than 0 and at most {high}")
    return value


def _percent(name: str, value) -> float:
    value = _number(name, value)
    if not 0 <= value <= 100:
        raise InvalidInput(name, "must be between 0 and 100")
    return value


def _enum_key(text: str) -> str:
    return re.sub(r"[\s_-]", "", text).lower()


def _enum(name: str, value):
    enum_cls = ENUM_FIELDS[name]
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        wanted = _enum_key(value)
        for member in enum_cls:
            if wanted in (_enum_key(member.value), _enum_key(member.name)):
                return member
    choices = ", ".join(member.value for member in enum_cls)
    raise InvalidInput(name, f"must be one of: {choices}")


def _competition_date(value):
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            pass
    raise InvalidInput("competition_date", "must be an ISO date (YYYY-MM-DD)")


def _clamp_priority(name: str, value) -> float:
    value = _number(name, value)
    return min(100, max(0, value))


def validate_assessment(value) -> AssessmentInput:
    """Validate and normalize an assessment.

    Accepts an AssessmentInput or a mapping keyed by its field names.
    Returns a new AssessmentInput with enums resolved and priority sliders
    clamped to [0, 100]. Raises InvalidInput naming the first bad field.
    """
    if isinstance(value, AssessmentInput):
        data = {f.name: getattr(value, f.name) for f in fields(AssessmentInput)}
    elif isinstance(value, Mapping):
        data = dict(value)
    else:
        raise InvalidInput("assessment", "must be an AssessmentInput or a mapping")

    for f in fields(AssessmentInput):
        if f.name not in OPTIONAL_FIELDS and data.get(f.name) is None:
            raise InvalidInput(f.name, "is required")

    priorities = {
        name: _clamp_priority(name, data[name])
        for name in PRIORITY_FIELDS
        if data.get(name) is not None
    }

    return AssessmentInput(
        age=_integer("age", data["age"], *AGE_RANGE),
        height_cm=_positive("height_cm", data["height_cm"], MAX_HEIGHT_CM),
        current_weight_kg=_positive(
            "current_weight_kg", data["current_weight_kg"], MAX_WEIGHT_KG
        ),
        target_stage_weight_kg=_positive(
            "target_stage_weight_kg", data["target_stage_weight_kg"], MAX_WEIGHT_KG
        ),
        body_fat_percent=_percent("body_fat_percent", data["body_fat_percent"]),
        experience_level=_enum("experience_level", data["experience_level"]),
        phase=_enum("phase", data["phase"]),
        training_sessions_per_week=_integer(
            "training_sessions_per_week",
            data["training_sessions_per_week"], 0, MAX_SESSIONS_PER_WEEK,
        ),
        cardio_sessions_per_week=_integer(
            "cardio_sessions_per_week",
            data["cardio_sessions_per_week"], 0, MAX_SESSIONS_PER_WEEK,
        ),
        diet_type=_enum("diet_type", data["diet_type"]),
        budget_level=_enum("budget_level", data["budget_level"]),
        competition_date=_competition_date(data.get("competition_date")),
        **priorities,
    )
