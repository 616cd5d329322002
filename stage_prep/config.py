"""Application configuration and constants."""

import os

# Database
DB_DIR = os.path.join(os.path.expanduser("~"), ".stage_prep")
DB_PATH = os.environ.get("STAGE_PREP_DB_PATH", os.path.join(DB_DIR, "stage_prep.db"))

# Snapshot key for the most recent engine run
STORAGE_KEY = "nutrivision_stage_prep_engine_v1"

# Activity multiplier tiers on total weekly sessions (training + cardio).
# Evaluated in order, upper bound inclusive; anything above the last tier
# gets ACTIVITY_MULTIPLIER_MAX.
ACTIVITY_MULTIPLIER_TIERS = [
    (4, 1.45),
    (7, 1.60),
    (10, 1.72),
]
ACTIVITY_MULTIPLIER_MAX = 1.82

# Daily calorie adjustment on TDEE by phase (kcal)
PHASE_CALORIE_ADJUSTMENTS = {
    "Bulking": 250,
    "Peak Week": -100,
}
CUTTING_BASE_DEFICIT = 250
CUTTING_PRIORITY_DEFICIT = 300  # scaled by fat-loss priority / 100

# Macro factors by phase (grams per kg of current bodyweight)
PHASE_MACRO_FACTORS = {
    "Bulking": {"protein": 2.0, "fat": 0.9},
    "Peak Week": {"protein": 2.2, "fat": 0.7},
    "Cutting": {"protein": 2.4, "fat": 0.75},
}

# Macro calorie multipliers (calories per gram)
CALORIES_PER_GRAM = {
    "protein": 4,
    "carbs": 4,
    "fat": 9,
}

KCAL_PER_KG_FAT = 7700
CONFIDENCE_SCORE = 92

# Guidance text, keyed on whether the athlete is in peak week
CARB_LOAD_GUIDANCE = {
    True: "Front-load carbs 3 days out, then taper by 20% before show day.",
    False: "Use higher carbs on heavy training days and reduce 15% on rest days.",
}
WATER_GUIDANCE = {
    True: "Keep water stable first, then controlled taper in final 36 hours.",
    False: "Maintain 4-5L daily with sodium consistency for fullness.",
}

# Meal calorie distribution (fraction of daily calories)
MEAL_CALORIE_SPLITS = {
    "morning": 0.26,
    "afternoon": 0.34,
    "evening": 0.14,
    "night": 0.26,
}

# Rice portion multiplier by phase
CARB_BIAS = {
    "Peak Week": 1.12,
    "Bulking": 1.06,
}

FIBER_PER_GRAM = 0.03

BUDGET_ALTERNATIVES = {
    "morning": "Switch whey with milk + soy chunks for better value.",
    "afternoon": "Rice + dal + eggs delivers better protein per rupee.",
    "evening": "Roasted chana replaces expensive protein bars.",
    "night": "Roti + paneer/chicken keeps prep sustainable daily.",
}

# Meal planner status thresholds (consumed / target)
STATUS_LOW_BELOW = 0.85
STATUS_ON_TRACK_UP_TO = 1.05

# Meal planner values used before any stage prep plan has been applied
DEFAULT_MEAL_TARGETS = {
    "morning": 800,
    "afternoon": 900,
    "evening": 400,
    "night": 700,
}
DEFAULT_MEAL_BASE_NUTRITION = {
    "morning": {"calories": 650, "protein_g": 30, "carbs_g": 80, "fat_g": 15},
    "afternoon": {"calories": 750, "protein_g": 40, "carbs_g": 100, "fat_g": 20},
    "evening": {"calories": 280, "protein_g": 15, "carbs_g": 40, "fat_g": 8},
    "night": {"calories": 760, "protein_g": 48, "carbs_g": 70, "fat_g": 22},
}

# Intake bounds
AGE_RANGE = (1, 120)
MAX_HEIGHT_CM = 300
MAX_WEIGHT_KG = 500
MAX_SESSIONS_PER_WEEK = 50

# Initial assessment form
DEFAULT_ASSESSMENT = {
    "age": 24,
    "height_cm": 173,
    "current_weight_kg": 78,
    "target_stage_weight_kg": 72,
    "body_fat_percent": 14,
    "experience_level": "Intermediate",
    "competition_date": None,
    "phase": "Cutting",
    "training_sessions_per_week": 6,
    "cardio_sessions_per_week": 4,
    "diet_type": "Non-veg",
    "budget_level": "Medium",
    "fullness_priority": 70,
    "fat_loss_priority": 82,
    "dryness_priority": 75,
    "strength_priority": 68,
}
