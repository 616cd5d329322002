"""Energy and macro target calculation for stage prep phases.

Uses:
- Mifflin-St Jeor equation for Basal Metabolic Rate (BMR), male
  coefficients only (the assessment has no sex field)
- Session-count activity tiers for Total Daily Energy Expenditure (TDEE)
- Phase-specific calorie adjustments and bodyweight-based macro factors

References:
- Mifflin MD, St Jeor ST, et al. (1990). "A new predictive equation for
  resting energy expenditure in healthy individuals." Am J Clin Nutr.
- Helms ER, et al. (2014). "Evidence-based recommendations for natural
  bodybuilding contest preparation." J Int Soc Sports Nutr.
"""

from stage_prep.config import (
    ACTIVITY_MULTIPLIER_MAX,
    ACTIVITY_MULTIPLIER_TIERS,
    CALORIES_PER_GRAM,
    CARB_LOAD_GUIDANCE,
    CONFIDENCE_SCORE,
    CUTTING_BASE_DEFICIT,
    CUTTING_PRIORITY_DEFICIT,
    KCAL_PER_KG_FAT,
    PHASE_CALORIE_ADJUSTMENTS,
    PHASE_MACRO_FACTORS,
    WATER_GUIDANCE,
)
from stage_prep.intake import validate_assessment
from stage_prep.models import (
    AssessmentInput,
    EnergyMacroTargets,
    Phase,
    round_half_up,
    round_nutrition,
)


def calculate_bmr(assessment: AssessmentInput) -> float:
    """Calculate Basal Metabolic Rate using the Mifflin-St Jeor equation.

    BMR = 10 × weight(kg) + 6.25 × height(cm) − 5 × age(y) + 5
    """
    return (
        10 * assessment.current_weight_kg
        + 6.25 * assessment.height_cm
        - 5 * assessment.age
        + 5
    )


def activity_multiplier(total_sessions: int) -> float:
    """Map weekly training + cardio sessions to an activity multiplier."""
    for upper_bound, multiplier in ACTIVITY_MULTIPLIER_TIERS:
        if total_sessions <= upper_bound:
            return multiplier
    return ACTIVITY_MULTIPLIER_MAX


def calculate_tdee(bmr: float, total_sessions: int) -> float:
    """TDEE = BMR × activity multiplier"""
    return bmr * activity_multiplier(total_sessions)


def phase_calorie_adjustment(phase: Phase, fat_loss_priority: float) -> int:
    """Daily calorie adjustment applied on top of TDEE.

    Cutting deficit grows with the fat-loss priority slider, from -250 kcal
    at 0 to -550 kcal at 100.
    """
    if phase == Phase.CUTTING:
        return -CUTTING_BASE_DEFICIT - round_half_up(
            fat_loss_priority / 100 * CUTTING_PRIORITY_DEFICIT
        )
    return PHASE_CALORIE_ADJUSTMENTS[phase]


def macro_factors(phase: Phase) -> dict:
    """Protein and fat grams per kg of bodyweight for a phase."""
    return PHASE_MACRO_FACTORS[phase]


def compute_targets(assessment) -> EnergyMacroTargets:
    """Calculate daily energy and macro targets for an athlete.

    Steps:
    1. Validate the assessment (raises InvalidInput)
    2. Calculate BMR via Mifflin-St Jeor
    3. Multiply by the session-based activity factor to get TDEE
    4. Apply the phase calorie adjustment
    5. Set protein and fat from bodyweight, fill the rest with carbs

    Carbs are floored at 0 when protein and fat alone exceed the budget.
    """
    assessment = validate_assessment(assessment)

    bmr = calculate_bmr(assessment)
    tdee = calculate_tdee(bmr, assessment.total_sessions)

    adjustment = phase_calorie_adjustment(assessment.phase, assessment.fat_loss_priority)
    daily_calories = round_nutrition(tdee + adjustment)

    weight = assessment.current_weight_kg
    factors = macro_factors(assessment.phase)
    protein_g = round_nutrition(weight * factors["protein"])
    fat_g = round_nutrition(weight * factors["fat"])
    carbs_g = round_nutrition(
        (daily_calories
         - protein_g * CALORIES_PER_GRAM["protein"]
         - fat_g * CALORIES_PER_GRAM["fat"]) / CALORIES_PER_GRAM["carbs"]
    )

    peak_week = assessment.phase == Phase.PEAK_WEEK

    return EnergyMacroTargets(
        bmr=round_nutrition(bmr),
        tdee=round_nutrition(tdee),
        daily_calories=daily_calories,
        protein_g=protein_g,
        carbs_g=carbs_g,
        fat_g=fat_g,
        confidence_score=CONFIDENCE_SCORE,
        muscle_retention_score=round_nutrition(protein_g / max(weight * 2.2, 1) * 100),
        fat_loss_rate_per_week_kg=round((tdee - daily_calories) / KCAL_PER_KG_FAT, 2),
        carb_load_guidance=CARB_LOAD_GUIDANCE[peak_week],
        water_guidance=WATER_GUIDANCE[peak_week],
    )


def format_targets(targets: EnergyMacroTargets) -> str:
    """Format energy and macro targets for display."""
    lines = [
        f"BMR:      {targets.bmr} kcal",
        f"TDEE:     {targets.tdee} kcal",
        f"Target:   {targets.daily_calories} kcal/day",
        f"Protein:  {targets.protein_g}g ({targets.protein_g * 4} kcal)",
        f"Carbs:    {targets.carbs_g}g ({targets.carbs_g * 4} kcal)",
        f"Fat:      {targets.fat_g}g ({targets.fat_g * 9} kcal)",
        "",
        f"Muscle retention score: {targets.muscle_retention_score}%",
        f"Fat loss rate:          {targets.fat_loss_rate_per_week_kg} kg/week",
        f"Confidence:             {targets.confidence_score}%",
        f"Carb loading:           {targets.carb_load_guidance}",
        f"Water:                  {targets.water_guidance}",
    ]
    return "\n".join(lines)
