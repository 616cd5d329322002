"""Streamlit frontend for the Stage Prep Engine.

Main entry point: the assessment wizard and the generated plan.
"""

import logging
import os
from datetime import date

import streamlit as st

from stage_prep.config import DEFAULT_ASSESSMENT
from stage_prep.db import init_db
from stage_prep.engine import analyze, recalculate
from stage_prep.intake import InvalidInput
from stage_prep.models import BudgetLevel, DietType, ExperienceLevel, MealSlot, Phase
from stage_prep.snapshot_store import load_snapshot, save_snapshot
from pages.components.charts import (
    create_macro_pie_chart,
    create_slot_calorie_chart,
    meal_items_frame,
    plan_summary_frame,
)
from pages.components.session import edit_assessment, reset_plan

logging.basicConfig(level=getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO))

st.set_page_config(
    page_title="Stage Prep Engine",
    page_icon="🏆",
    layout="wide",
    initial_sidebar_state="expanded"
)

WIZARD_STEPS = 3
PRIORITY_SLIDERS = [
    ("fullness_priority", "Muscle fullness priority"),
    ("fat_loss_priority", "Fat loss priority"),
    ("dryness_priority", "Stage dryness priority"),
    ("strength_priority", "Strength retention priority"),
]

# Initialize DB once per session
if 'db_initialized' not in st.session_state:
    init_db()
    st.session_state.db_initialized = True

# The form is edited incrementally across wizard steps; the engine only
# ever sees the complete form on submit.
if 'form' not in st.session_state:
    st.session_state.form = dict(DEFAULT_ASSESSMENT)
if 'step' not in st.session_state:
    st.session_state.step = 0
if 'plan' not in st.session_state:
    st.session_state.plan = load_snapshot()
    if st.session_state.plan:
        st.session_state.form = st.session_state.plan.assessment.to_dict()


def _choice_index(enum_cls, value) -> int:
    values = [member.value for member in enum_cls]
    return values.index(value) if value in values else 0


def _run_engine(form: dict) -> None:
    try:
        plan = analyze(form)
    except InvalidInput as exc:
        st.error(f"⚠️ Invalid input: {exc}")
        return
    save_snapshot(plan)
    st.session_state.plan = plan
    st.session_state.form = plan.assessment.to_dict()
    st.success(f"✅ AI Analysis Complete. {plan.targets.daily_calories} kcal plan synced to Meal Planner.")
    st.rerun()


def render_wizard() -> None:
    form = st.session_state.form
    step = st.session_state.step

    st.title("🏆 AI Stage Prep Engine")
    st.caption("Complete the assessment to unlock personalized prep targets.")
    st.progress((step + 1) / WIZARD_STEPS, text=f"Assessment progress: {round((step + 1) / WIZARD_STEPS * 100)}%")

    if step == 0:
        col1, col2 = st.columns(2)
        with col1:
            form["age"] = st.number_input("Age", min_value=1, max_value=120, value=int(form["age"]))
            form["height_cm"] = st.number_input("Height (cm)", min_value=1.0, max_value=300.0,
                                                value=float(form["height_cm"]))
            form["current_weight_kg"] = st.number_input("Current Weight (kg)", min_value=1.0, max_value=500.0,
                                                        value=float(form["current_weight_kg"]), step=0.5)
        with col2:
            form["target_stage_weight_kg"] = st.number_input("Target Stage Weight (kg)", min_value=1.0,
                                                             max_value=500.0,
                                                             value=float(form["target_stage_weight_kg"]),
                                                             step=0.5)
            form["body_fat_percent"] = st.number_input("Body Fat % (if known)", min_value=0.0, max_value=100.0,
                                                       value=float(form["body_fat_percent"]))
            form["experience_level"] = st.selectbox(
                "Experience Level",
                [member.value for member in ExperienceLevel],
                index=_choice_index(ExperienceLevel, form["experience_level"]),
            )

    elif step == 1:
        col1, col2 = st.columns(2)
        with col1:
            stored_date = form.get("competition_date")
            competition_date = st.date_input(
                "Competition Date",
                value=date.fromisoformat(stored_date) if stored_date else None,
            )
            form["competition_date"] = competition_date.isoformat() if competition_date else None
            form["phase"] = st.selectbox("Current Phase", [member.value for member in Phase],
                                         index=_choice_index(Phase, form["phase"]))
            form["training_sessions_per_week"] = st.number_input(
                "Training Frequency / Week", min_value=0, max_value=50,
                value=int(form["training_sessions_per_week"]),
            )
        with col2:
            form["cardio_sessions_per_week"] = st.number_input(
                "Cardio Frequency / Week", min_value=0, max_value=50,
                value=int(form["cardio_sessions_per_week"]),
            )
            form["diet_type"] = st.selectbox("Diet Type", [member.value for member in DietType],
                                             index=_choice_index(DietType, form["diet_type"]))
            form["budget_level"] = st.selectbox("Budget Level", [member.value for member in BudgetLevel],
                                                index=_choice_index(BudgetLevel, form["budget_level"]))

    else:
        col1, col2 = st.columns(2)
        for i, (key, label) in enumerate(PRIORITY_SLIDERS):
            with (col1 if i % 2 == 0 else col2):
                form[key] = st.slider(label, min_value=0, max_value=100, value=int(form[key]))

    st.markdown("---")
    col_back, col_next = st.columns(2)
    with col_back:
        if st.button("⬅️ Back", disabled=step == 0, use_container_width=True):
            st.session_state.step = max(0, step - 1)
            st.rerun()
    with col_next:
        if step < WIZARD_STEPS - 1:
            if st.button("Next ➡️", use_container_width=True):
                st.session_state.step = step + 1
                st.rerun()
        elif st.button("🧠 Analyze", type="primary", use_container_width=True):
            _run_engine(form)


def render_plan() -> None:
    plan = st.session_state.plan
    targets = plan.targets
    assessment = plan.assessment

    st.title("🏆 AI Analysis Complete")
    st.caption(f"Structured prep plan generated for {assessment.phase.value} phase.")

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Daily Calories", f"{targets.daily_calories} kcal")
    col2.metric("Protein", f"{targets.protein_g}g")
    col3.metric("Carbs", f"{targets.carbs_g}g")
    col4.metric("Fat", f"{targets.fat_g}g")

    col1, col2, col3 = st.columns(3)
    col1.write(f"**BMR:** {targets.bmr} | **TDEE:** {targets.tdee}")
    col2.write(f"**Confidence:** {targets.confidence_score}%")
    col3.write(f"**Competition:** "
               f"{assessment.competition_date.isoformat() if assessment.competition_date else 'Not set'}")

    st.markdown("### Meals")
    columns = st.columns(len(MealSlot))
    for column, slot in zip(columns, MealSlot):
        meal = plan.meals[slot]
        with column:
            st.markdown(f"#### {meal.title}")
            st.caption(f"{meal.totals.calories} kcal")
            st.dataframe(meal_items_frame(meal), hide_index=True, use_container_width=True)
            st.write(f"P {meal.totals.protein_g}g | C {meal.totals.carbs_g}g | F {meal.totals.fat_g}g")
            st.info(f"💰 {meal.budget_alternative}")

    col1, col2 = st.columns(2)
    with col1:
        st.plotly_chart(create_macro_pie_chart(targets), use_container_width=True)
    with col2:
        st.plotly_chart(create_slot_calorie_chart(plan), use_container_width=True)

    st.dataframe(plan_summary_frame(plan), use_container_width=True)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Muscle Retention", f"{targets.muscle_retention_score}%")
    col2.metric("Fat Loss Rate", f"{targets.fat_loss_rate_per_week_kg} kg/week")
    col3.markdown(f"**Carb loading**\n\n{targets.carb_load_guidance}")
    col4.markdown(f"**Water**\n\n{targets.water_guidance}")

    st.markdown("---")
    col1, col2 = st.columns([2, 1])
    with col1:
        working_weight = st.number_input("Working weight (kg)", min_value=1.0, max_value=500.0,
                                         value=float(assessment.current_weight_kg), step=0.5)
        if st.button("🔄 Recalculate", use_container_width=True):
            try:
                new_plan = recalculate(plan, working_weight)
            except InvalidInput as exc:
                st.error(f"⚠️ Invalid input: {exc}")
            else:
                save_snapshot(new_plan)
                st.session_state.plan = new_plan
                st.session_state.form = new_plan.assessment.to_dict()
                st.rerun()
    with col2:
        if st.button("📝 Edit Assessment", use_container_width=True):
            edit_assessment(st.session_state)
            st.rerun()
        if st.button("🗑️ Reset Plan", use_container_width=True):
            reset_plan(st.session_state)
            st.rerun()


with st.sidebar:
    st.markdown("## 🏆 Stage Prep")
    st.markdown("---")
    if st.session_state.plan:
        targets = st.session_state.plan.targets
        st.success(f"Phase: **{st.session_state.plan.assessment.phase.value}**")
        st.metric("Daily Target", f"{targets.daily_calories} kcal")
        col1, col2, col3 = st.columns(3)
        col1.metric("P", f"{targets.protein_g}g")
        col2.metric("C", f"{targets.carbs_g}g")
        col3.metric("F", f"{targets.fat_g}g")
    else:
        st.warning("⚠️ No plan yet")
        st.caption("Complete the assessment to generate one")

if st.session_state.plan:
    render_plan()
else:
    render_wizard()
