"""Session-state transitions for the stage prep views."""

from stage_prep.db import DB_PATH
from stage_prep.snapshot_store import delete_snapshot


def edit_assessment(state) -> None:
    """Return to the wizard, keeping the stored plan and its form values."""
    if state.plan is not None:
        state.form = state.plan.assessment.to_dict()
    state.plan = None
    state.step = 0


def reset_plan(state, db_path: str = DB_PATH) -> bool:
    """Delete the stored plan and return to the wizard."""
    deleted = delete_snapshot(db_path=db_path)
    state.plan = None
    state.step = 0
    return deleted
