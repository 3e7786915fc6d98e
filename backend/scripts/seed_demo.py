"""Seed demo platform data (users, pages, edits, log entries) for manual thanks testing.

Usage (from repository root):
    python backend/scripts/seed_demo.py

Usage (from backend directory):
    python scripts/seed_demo.py
    # or
    python -m scripts.seed_demo
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

from sqlalchemy import delete

# Make `thanks` imports work whether the script is run from repo root or backend/.
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from thanks.db.session import SessionLocal, engine
from thanks.models import LogEntry, Page, Revision, ThanksLogEntry, User, UserSession
from thanks.models.base import Base


DEFAULT_ACTOR_TOKEN = "demo-token-bob"


def reset_platform(db) -> None:
    """Remove existing demo platform rows and thanks records."""

    for model in (ThanksLogEntry, UserSession, LogEntry, Revision, Page, User):
        db.execute(delete(model))
    db.commit()


def seed_platform(db, actor_token: str) -> None:
    """Insert a deterministic set of accounts, pages, edits and log entries."""

    base = datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)
    db.add_all(
        [
            User(id=1, name="Alice"),
            User(id=2, name="Bob"),
            User(id=3, name="HelperBot", is_bot=True),
            User(id=4, name="Mallory", block_scope="sitewide"),
        ]
    )
    db.add_all([Page(id=10, title="Main Page"), Page(id=11, title="Sandbox")])
    db.flush()
    db.add_all(
        [
            Revision(id=455, page_id=10, user_id=2, parent_id=None, timestamp=base),
            Revision(id=456, page_id=10, user_id=1, parent_id=455, timestamp=base + timedelta(minutes=5)),
            Revision(id=500, page_id=11, user_id=1, parent_id=None, timestamp=base + timedelta(minutes=10)),
            Revision(id=501, page_id=11, user_id=3, parent_id=500, timestamp=base + timedelta(minutes=15)),
        ]
    )
    db.add_all(
        [
            LogEntry(id=789, log_type="move", log_action="move", performer_id=1, page_id=11),
            LogEntry(id=790, log_type="upload", log_action="upload", performer_id=3, page_id=10, associated_rev_id=456),
            LogEntry(id=791, log_type="delete", log_action="delete", performer_id=1, page_id=10),
        ]
    )
    db.add_all(
        [
            UserSession(token=actor_token, user_id=2),
            UserSession(token="demo-token-alice", user_id=1),
        ]
    )
    db.commit()


def parse_args() -> argparse.Namespace:
    """Parse script CLI arguments."""

    parser = argparse.ArgumentParser(description="Seed demo platform data for the thanks API.")
    parser.add_argument(
        "--actor-token",
        default=DEFAULT_ACTOR_TOKEN,
        help=f"Auth token to create for the demo actor Bob (default: {DEFAULT_ACTOR_TOKEN})",
    )
    parser.add_argument(
        "--no-reset",
        action="store_true",
        help="Do not delete existing platform rows before seeding.",
    )
    return parser.parse_args()


def main() -> None:
    """Seed demo data and print a short summary."""

    args = parse_args()
    Base.metadata.create_all(engine)

    with SessionLocal() as db:
        if not args.no_reset:
            reset_platform(db)
        seed_platform(db, args.actor_token)

    print("Seed complete")
    print(f"actor_token={args.actor_token}")
    print()
    print("Try (set THANKS_LOG_TYPE_ALLOWLIST='[\"move\",\"upload\"]' to thank log entries):")
    print(f'  POST /thank {{"edit_id": 456, "source": "diff", "auth_token": "{args.actor_token}"}}')
    print(f'  POST /thank {{"action_id": 789, "auth_token": "{args.actor_token}"}}')
    print("  GET /thanks/log")
    print("  GET /special/thanks/Log/789")


if __name__ == "__main__":
    main()
