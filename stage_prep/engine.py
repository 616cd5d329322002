"""Stage prep pipeline: validate, calculate targets, build meals."""

import logging

from stage_prep.intake import validate_assessment
from stage_prep.macro_calculator import compute_targets
from stage_prep.meal_builder import build_meal_plan
from stage_prep.models import StagePrepPlan

logger = logging.getLogger(__name__)


def analyze(assessment) -> StagePrepPlan:
    """Run the full pipeline on an assessment.

    Validation happens once up front; an invalid assessment raises
    InvalidInput before any calculation.
    """
    assessment = validate_assessment(assessment)
    targets = compute_targets(assessment)
    meals = build_meal_plan(assessment, targets)
    logger.info(
        "Stage prep analysis: phase=%s weight=%.1fkg -> %d kcal (P%d C%d F%d)",
        assessment.phase.value,
        assessment.current_weight_kg,
        targets.daily_calories,
        targets.protein_g,
        targets.carbs_g,
        targets.fat_g,
    )
    return StagePrepPlan(assessment=assessment, targets=targets, meals=meals)


def recalculate(plan: StagePrepPlan, current_weight_kg: float) -> StagePrepPlan:
    """Rerun the pipeline for an existing plan with a new working weight."""
    return analyze(plan.assessment.with_weight(current_weight_kg))
