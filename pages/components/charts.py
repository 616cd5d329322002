"""Chart and table components for the stage prep result view."""

import plotly.graph_objects as go
import plotly.express as px
import pandas as pd

from stage_prep.config import CALORIES_PER_GRAM
from stage_prep.models import EnergyMacroTargets, GeneratedMeal, MealSlot, StagePrepPlan


def create_macro_pie_chart(targets: EnergyMacroTargets):
    """Create pie chart of macro calorie distribution.

    Args:
        targets: EnergyMacroTargets with protein, carbs, fat in grams

    Returns:
        Plotly figure
    """
    labels = ['Protein', 'Carbs', 'Fat']
    values = [
        targets.protein_g * CALORIES_PER_GRAM["protein"],
        targets.carbs_g * CALORIES_PER_GRAM["carbs"],
        targets.fat_g * CALORIES_PER_GRAM["fat"],
    ]

    fig = px.pie(
        names=labels,
        values=values,
        title="Macro Calorie Distribution",
        color_discrete_sequence=['#FF6B6B', '#4ECDC4', '#FFE66D']
    )

    fig.update_traces(textposition='inside', textinfo='percent+label')

    return fig


def create_slot_calorie_chart(plan: StagePrepPlan):
    """Create grouped bar chart of slot calorie budget vs selected items.

    The budget bar is the ratio split of daily calories; the items bar is
    the sum of the chosen foods, so the gap between them is visible.
    """
    slots = [slot.label for slot in MealSlot]
    budget = [plan.meals[slot].totals.calories for slot in MealSlot]
    from_items = [sum(item.calories for item in plan.meals[slot].items) for slot in MealSlot]

    fig = go.Figure(data=[
        go.Bar(name='Slot budget', x=slots, y=budget, marker_color='#0EA5E9'),
        go.Bar(name='Selected foods', x=slots, y=from_items, marker_color='#94A3B8'),
    ])
    fig.update_layout(
        barmode='group',
        title='Calories per Meal',
        yaxis_title='Calories (kcal)',
    )
    return fig


def meal_items_frame(meal: GeneratedMeal) -> pd.DataFrame:
    """Tabulate a meal's items."""
    return pd.DataFrame(
        [
            {
                'Food': item.name,
                'Grams': item.grams,
                'Calories': item.calories,
                'Protein (g)': item.protein_g,
                'Carbs (g)': item.carbs_g,
                'Fat (g)': item.fat_g,
            }
            for item in meal.items
        ],
        columns=['Food', 'Grams', 'Calories', 'Protein (g)', 'Carbs (g)', 'Fat (g)'],
    )


def plan_summary_frame(plan: StagePrepPlan) -> pd.DataFrame:
    """One row per slot with the slot totals."""
    rows = []
    for slot in MealSlot:
        t = plan.meals[slot].totals
        rows.append({
            'Meal': slot.label,
            'Calories': t.calories,
            'Protein (g)': t.protein_g,
            'Carbs (g)': t.carbs_g,
            'Fat (g)': t.fat_g,
            'Fiber (g)': t.fiber_g,
        })
    df = pd.DataFrame(rows)
    return df.set_index('Meal')
