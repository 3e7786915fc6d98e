"""Shared platform fixtures for thanks tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from thanks.config import Settings
from thanks.models import LogEntry, Page, Revision, ThanksLogEntry, User, UserSession
from thanks.platform.notifications import NotificationPayload, TransmissionError

SITE = "https://wiki.example.org"

ALICE_ID = 1
BOB_ID = 2
BOT_ID = 3
MALLORY_ID = 4
PAT_ID = 5

BOB_TOKEN = "token-bob"
ALICE_TOKEN = "token-alice"
MALLORY_TOKEN = "token-mallory"
PAT_TOKEN = "token-pat"


def make_engine() -> Engine:
    return create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def make_sessionmaker(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def make_settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "database_url": "sqlite+pysqlite:///:memory:",
        "site_base_url": SITE,
        "thanks_log_type_allowlist": ["move", "upload"],
        "thanks_send_to_bots": False,
        "thanks_logging": True,
        "thanks_rate_limit_count": 100,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def reset_tables(db: Session) -> None:
    for model in (ThanksLogEntry, UserSession, LogEntry, Revision, Page, User):
        db.query(model).delete()
    db.commit()


def seed_platform(db: Session) -> None:
    """Accounts, pages, edits and log entries shared by the thanks suites.

    Page "Main Page": 455 (Bob, creation) then 456 (Alice).
    Page "Sandbox": 500 (Alice, creation), 501 (HelperBot), 502 (Bob),
    503 (Alice, text hidden), 504 (authorship hidden).
    Page "Old Page": 1 (the sentinel id).
    Log: 789 move by Alice, 790 upload by HelperBot recording edit 456,
    791 delete by Alice, 792 move by Alice (hidden).
    """

    base = datetime(2026, 10, 1, 12, 0, 0, tzinfo=timezone.utc)
    db.add_all(
        [
            User(id=ALICE_ID, name="Alice"),
            User(id=BOB_ID, name="Bob"),
            User(id=BOT_ID, name="HelperBot", is_bot=True),
            User(id=MALLORY_ID, name="Mallory", block_scope="sitewide"),
            User(id=PAT_ID, name="Pat", block_scope="partial"),
        ]
    )
    db.add_all(
        [
            Page(id=10, title="Main Page"),
            Page(id=11, title="Sandbox"),
            Page(id=12, title="Old Page"),
        ]
    )
    db.flush()
    db.add_all(
        [
            Revision(id=1, page_id=12, user_id=ALICE_ID, timestamp=base - timedelta(days=30)),
            Revision(id=455, page_id=10, user_id=BOB_ID, timestamp=base),
            Revision(id=456, page_id=10, user_id=ALICE_ID, parent_id=455, timestamp=base + timedelta(minutes=5)),
            Revision(id=500, page_id=11, user_id=ALICE_ID, timestamp=base + timedelta(minutes=10)),
            Revision(id=501, page_id=11, user_id=BOT_ID, parent_id=500, timestamp=base + timedelta(minutes=15)),
            Revision(id=502, page_id=11, user_id=BOB_ID, parent_id=501, timestamp=base + timedelta(minutes=20)),
            Revision(
                id=503,
                page_id=11,
                user_id=ALICE_ID,
                parent_id=502,
                text_deleted=True,
                timestamp=base + timedelta(minutes=25),
            ),
            Revision(id=504, page_id=11, user_id=None, parent_id=503, timestamp=base + timedelta(minutes=30)),
        ]
    )
    db.add_all(
        [
            LogEntry(id=789, log_type="move", log_action="move", performer_id=ALICE_ID, page_id=11),
            LogEntry(
                id=790,
                log_type="upload",
                log_action="upload",
                performer_id=BOT_ID,
                page_id=10,
                associated_rev_id=456,
            ),
            LogEntry(id=791, log_type="delete", log_action="delete", performer_id=ALICE_ID, page_id=10),
            LogEntry(id=792, log_type="move", log_action="move", performer_id=ALICE_ID, page_id=10, deleted=1),
        ]
    )
    db.add_all(
        [
            UserSession(token=BOB_TOKEN, user_id=BOB_ID),
            UserSession(token=ALICE_TOKEN, user_id=ALICE_ID),
            UserSession(token=MALLORY_TOKEN, user_id=MALLORY_ID),
            UserSession(token=PAT_TOKEN, user_id=PAT_ID),
        ]
    )
    db.commit()


class RecordingChannel:
    def __init__(self) -> None:
        self.payloads: list[NotificationPayload] = []

    def transmit(self, payload: NotificationPayload) -> None:
        self.payloads.append(payload)


class FailingChannel:
    def __init__(self) -> None:
        self.attempts = 0

    def transmit(self, payload: NotificationPayload) -> None:
        self.attempts += 1
        raise TransmissionError("broadcast service unavailable")
