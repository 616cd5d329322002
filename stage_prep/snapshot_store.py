"""Persistence for the most recent stage prep plan.

Each save replaces the stored snapshot in full; a snapshot that can no
longer be parsed is dropped on load.
"""

import json
import logging
from typing import Optional

from stage_prep.config import STORAGE_KEY
from stage_prep.db import DB_PATH, get_connection
from stage_prep.intake import validate_assessment
from stage_prep.models import StagePrepPlan

logger = logging.getLogger(__name__)


def save_snapshot(plan: StagePrepPlan, key: str = STORAGE_KEY, db_path: str = DB_PATH) -> None:
    """Store a plan under the given key, replacing any previous one."""
    payload = json.dumps(plan.to_dict())
    with get_connection(db_path) as conn:
        conn.execute(
            """INSERT INTO snapshots (key, payload, updated_at)
               VALUES (?, ?, CURRENT_TIMESTAMP)
               ON CONFLICT(key) DO UPDATE SET
                   payload = excluded.payload,
                   updated_at = excluded.updated_at""",
            (key, payload),
        )
    logger.debug("Saved snapshot %s (%d bytes)", key, len(payload))


def load_snapshot(key: str = STORAGE_KEY, db_path: str = DB_PATH) -> Optional[StagePrepPlan]:
    """Load the plan stored under key, or None if absent or unreadable.

    A payload that does not parse, or whose assessment no longer validates,
    is deleted.
    """
    with get_connection(db_path) as conn:
        row = conn.execute("SELECT payload FROM snapshots WHERE key = ?", (key,)).fetchone()
    if not row:
        return None

    try:
        plan = StagePrepPlan.from_dict(json.loads(row["payload"]))
        validate_assessment(plan.assessment)
        return plan
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.warning("Discarding unreadable snapshot %s: %s", key, exc)
        delete_snapshot(key, db_path)
        return None


def delete_snapshot(key: str = STORAGE_KEY, db_path: str = DB_PATH) -> bool:
    """Delete the snapshot stored under key. Returns True if one existed."""
    with get_connection(db_path) as conn:
        cursor = conn.execute("DELETE FROM snapshots WHERE key = ?", (key,))
        return cursor.rowcount > 0
