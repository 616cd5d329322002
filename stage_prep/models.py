"""Data models for the stage prep engine."""

import math
from dataclasses import asdict, dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Optional


class ExperienceLevel(str, Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


class Phase(str, Enum):
    BULKING = "Bulking"
    CUTTING = "Cutting"
    PEAK_WEEK = "Peak Week"


class DietType(str, Enum):
    VEGETARIAN = "Vegetarian"
    NON_VEGETARIAN = "Non-veg"


class BudgetLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class MealSlot(str, Enum):
    """Daily meal times, declared in display order."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 always rounding up."""
    return int(math.floor(value + 0.5))


def round_nutrition(value: float) -> int:
    """Round to the nearest integer, floored at zero."""
    return max(0, round_half_up(value))


@dataclass(frozen=True)
class AssessmentInput:
    """One athlete's assessment snapshot.

    Only weight, height, age, phase, session counts, diet type, budget level
    and fat-loss priority feed the formulae; the remaining fields are carried
    through for display.
    """
    age: int
    height_cm: float
    current_weight_kg: float
    target_stage_weight_kg: float
    body_fat_percent: float
    experience_level: ExperienceLevel
    phase: Phase
    training_sessions_per_week: int
    cardio_sessions_per_week: int
    diet_type: DietType
    budget_level: BudgetLevel
    fullness_priority: float = 50
    fat_loss_priority: float = 50
    dryness_priority: float = 50
    strength_priority: float = 50
    competition_date: Optional[date] = None

    @property
    def total_sessions(self) -> int:
        return self.training_sessions_per_week + self.cardio_sessions_per_week

    def with_weight(self, current_weight_kg: float) -> "AssessmentInput":
        """Return a copy with a new working weight."""
        return replace(self, current_weight_kg=current_weight_kg)

    def to_dict(self) -> dict:
        data = asdict(self)
        for key in ("experience_level", "phase", "diet_type", "budget_level"):
            data[key] = data[key].value
        data["competition_date"] = (
            self.competition_date.isoformat() if self.competition_date else None
        )
        return data

    @staticmethod
    def from_dict(data: dict) -> "AssessmentInput":
        raw_date = data.get("competition_date")
        return AssessmentInput(
            age=data["age"],
            height_cm=data["height_cm"],
            current_weight_kg=data["current_weight_kg"],
            target_stage_weight_kg=data["target_stage_weight_kg"],
            body_fat_percent=data["body_fat_percent"],
            experience_level=ExperienceLevel(data["experience_level"]),
            phase=Phase(data["phase"]),
            training_sessions_per_week=data["training_sessions_per_week"],
            cardio_sessions_per_week=data["cardio_sessions_per_week"],
            diet_type=DietType(data["diet_type"]),
            budget_level=BudgetLevel(data["budget_level"]),
            fullness_priority=data["fullness_priority"],
            fat_loss_priority=data["fat_loss_priority"],
            dryness_priority=data["dryness_priority"],
            strength_priority=data["strength_priority"],
            competition_date=date.fromisoformat(raw_date) if raw_date else None,
        )


@dataclass(frozen=True)
class EnergyMacroTargets:
    """Daily energy and macro targets derived from an assessment."""
    bmr: int
    tdee: int
    daily_calories: int
    protein_g: int
    carbs_g: int
    fat_g: int
    confidence_score: int
    muscle_retention_score: int
    fat_loss_rate_per_week_kg: float
    carb_load_guidance: str
    water_guidance: str

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "EnergyMacroTargets":
        return EnergyMacroTargets(**data)


@dataclass(frozen=True)
class FoodCatalogEntry:
    """Nutrition facts per 100g of a catalog food."""
    name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass
class Nutrition:
    """Nutrition totals for a meal slot."""
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    fiber_g: float = 0.0
    estimated_weight_g: float = 0.0

    def __add__(self, other: "Nutrition") -> "Nutrition":
        return Nutrition(
            calories=self.calories + other.calories,
            protein_g=self.protein_g + other.protein_g,
            carbs_g=self.carbs_g + other.carbs_g,
            fat_g=self.fat_g + other.fat_g,
            fiber_g=self.fiber_g + other.fiber_g,
            estimated_weight_g=self.estimated_weight_g + other.estimated_weight_g,
        )

    @staticmethod
    def zero() -> "Nutrition":
        return Nutrition(0, 0, 0, 0, 0, 0)

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "Nutrition":
        return Nutrition(**data)


@dataclass(frozen=True)
class MealItem:
    """A catalog food at a given portion, with scaled nutrition."""
    food_id: str
    name: str
    grams: int
    calories: int
    protein_g: int
    carbs_g: int
    fat_g: int

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict) -> "MealItem":
        return MealItem(**data)


@dataclass
class GeneratedMeal:
    """One time-slotted meal of a stage prep plan."""
    slot: MealSlot
    title: str
    items: list = field(default_factory=list)  # List[MealItem]
    totals: Nutrition = field(default_factory=Nutrition.zero)
    budget_alternative: str = ""

    def to_dict(self) -> dict:
        return {
            "slot": self.slot.value,
            "title": self.title,
            "items": [item.to_dict() for item in self.items],
            "totals": self.totals.to_dict(),
            "budget_alternative": self.budget_alternative,
        }

    @staticmethod
    def from_dict(data: dict) -> "GeneratedMeal":
        return GeneratedMeal(
            slot=MealSlot(data["slot"]),
            title=data["title"],
            items=[MealItem.from_dict(item) for item in data["items"]],
            totals=Nutrition.from_dict(data["totals"]),
            budget_alternative=data["budget_alternative"],
        )


@dataclass
class StagePrepPlan:
    """The full result of one engine run."""
    assessment: AssessmentInput
    targets: EnergyMacroTargets
    meals: dict  # Dict[MealSlot, GeneratedMeal]

    def meal_targets(self) -> dict:
        """Calorie budget per slot."""
        return {slot: self.meals[slot].totals.calories for slot in MealSlot}

    def meal_base_nutrition(self) -> dict:
        """Per-slot totals, copied so the caller can accumulate into them."""
        return {slot: replace(self.meals[slot].totals) for slot in MealSlot}

    def to_dict(self) -> dict:
        return {
            "assessment": self.assessment.to_dict(),
            "targets": self.targets.to_dict(),
            "meals": {slot.value: self.meals[slot].to_dict() for slot in MealSlot},
        }

    @staticmethod
    def from_dict(data: dict) -> "StagePrepPlan":
        return StagePrepPlan(
            assessment=AssessmentInput.from_dict(data["assessment"]),
            targets=EnergyMacroTargets.from_dict(data["targets"]),
            meals={
                slot: GeneratedMeal.from_dict(data["meals"][slot.value])
                for slot in MealSlot
            },
        )
