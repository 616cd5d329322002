"""Meal Planner Page.

Per-slot calorie targets from the stage prep plan, with scanned foods
added on top.
"""

import streamlit as st
from datetime import date, datetime

from stage_prep.db import init_db
from stage_prep.models import MealSlot, Nutrition
from stage_prep.snapshot_store import load_snapshot
from stage_prep.tracker import log_scan, state_for_day

st.set_page_config(page_title="Meal Planner | Stage Prep", page_icon="🍽️", layout="wide")
st.title("🍽️ Meal Performance Planner")

init_db()
plan = load_snapshot()
view_date = st.date_input("Day", value=date.today())
state = state_for_day(plan, view_date)

if state.phase_strategy:
    st.info(f"🔒 Stage Prep Strategy Locked: **{state.phase_strategy.phase.value}**")
else:
    st.warning("⚠️ No stage prep plan yet. Showing default meal targets.")

# Slot cards
columns = st.columns(len(MealSlot))
for column, slot in zip(columns, MealSlot):
    consumed = state.consumed(slot)
    target = state.get_meal_target(slot)
    with column:
        st.markdown(f"#### {slot.label}")
        st.metric("Calories", f"{consumed.calories:.0f} / {target:.0f}", state.status(slot),
                  delta_color="off")
        st.progress(min(consumed.calories / target, 1.0) if target else 0.0)
        st.caption(f"P {consumed.protein_g:.0f}g | C {consumed.carbs_g:.0f}g | F {consumed.fat_g:.0f}g")
        if state.additions[slot].calories > 0:
            st.caption(f"➕ {state.additions[slot].calories:.0f} kcal from scans")

st.divider()

# Scan Logging Section
st.markdown("### Add a Scanned Food")

with st.form("scan_form"):
    col1, col2 = st.columns([3, 2])
    with col1:
        food_name = st.text_input("Food*")
    with col2:
        meal_slot = st.selectbox("Meal", options=[slot.value for slot in MealSlot])

    col1, col2, col3, col4, col5 = st.columns(5)
    calories = col1.number_input("Calories", min_value=0.0, value=0.0, step=10.0)
    protein = col2.number_input("Protein (g)", min_value=0.0, value=0.0)
    carbs = col3.number_input("Carbs (g)", min_value=0.0, value=0.0)
    fat = col4.number_input("Fat (g)", min_value=0.0, value=0.0)
    fiber = col5.number_input("Fiber (g)", min_value=0.0, value=0.0)

    submitted = st.form_submit_button("➕ Add to Meal", use_container_width=True)

    if submitted:
        if not food_name.strip():
            st.error("⚠️ Food name is required")
        else:
            log_scan(
                MealSlot(meal_slot),
                food_name.strip(),
                Nutrition(calories, protein, carbs, fat, fiber),
                added_at=datetime.combine(view_date, datetime.now().time()),
            )
            st.rerun()

if state.scan_history:
    st.markdown("### Scan History")
    for entry in state.scan_history:
        st.write(f"{entry.added_at:%H:%M} · **{entry.food_name}** → {entry.meal_slot.label} "
                 f"({entry.nutrition.calories:.0f} kcal)")
