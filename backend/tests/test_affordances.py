"""Tests for the view listeners that place thank affordances."""

from __future__ import annotations

import unittest

from thanks.dispatch.context import RequestContext
from thanks.dispatch.errors import ThanksNotFoundError
from thanks.dispatch.keys import ThanksKey
from thanks.dispatch.session import InMemorySessionStore, mark_sent
from thanks.models.base import Base
from thanks.platform.rate_limit import SlidingWindowRateLimiter
from thanks.platform.types import ActionRecord, EditRecord, Identity, TargetRef, anonymous_identity
from thanks.services.affordances import (
    ThanksAffordanceListener,
    ViewEventBus,
    build_view_bus,
    confirmation_path,
    log_entry_affordances,
    revision_affordances,
)
from thanks.services.thanks import build_identity_service, build_request_context

from thanks_fixtures import (
    BOB_TOKEN,
    make_engine,
    make_sessionmaker,
    make_settings,
    reset_tables,
    seed_platform,
)

ALICE = Identity(id=1, name="Alice")
BOB = Identity(id=2, name="Bob")
HELPER_BOT = Identity(id=3, name="HelperBot", is_bot=True)
MAIN_PAGE = TargetRef(display_text="Main Page", url="https://wiki.example.org/wiki/Main_Page")


def _edit(edit_id: int, author: Identity | None = ALICE, parent_id: int | None = None, **flags: bool) -> EditRecord:
    return EditRecord(
        id=edit_id,
        page_id=10,
        target=MAIN_PAGE,
        author=author,
        parent_id=parent_id,
        text_hidden=flags.get("text_hidden", False),
    )


def _action(action_id: int, log_type: str = "move", performer: Identity | None = ALICE, **extra: object) -> ActionRecord:
    return ActionRecord(
        id=action_id,
        type=log_type,
        action=log_type,
        performer=performer,
        target=MAIN_PAGE,
        associated_edit_id=extra.get("associated_edit_id"),
        is_hidden=False,
    )


class ThanksAffordanceListenerTests(unittest.TestCase):
    def setUp(self) -> None:
        self.sessions = InMemorySessionStore()
        self.ctx = RequestContext(actor=BOB, session=self.sessions.flags_for("token-bob"))
        self.listener = ThanksAffordanceListener(log_type_allowlist=["move", "upload"])

    def test_history_row_offers_thanks_link(self) -> None:
        affordance = self.listener.on_history_view(self.ctx, _edit(456, parent_id=455), _edit(455))

        self.assertIsNotNone(affordance)
        self.assertEqual(affordance.recipient, "Alice")
        self.assertEqual(affordance.href, "/special/thanks/456")
        self.assertFalse(affordance.already_thanked)
        self.assertTrue(affordance.confirmation_required)

    def test_already_thanked_state_comes_from_session(self) -> None:
        mark_sent(self.ctx.session, ThanksKey(kind="rev", id=456))

        affordance = self.listener.on_diff_view(self.ctx, _edit(456), None)

        self.assertTrue(affordance.already_thanked)

    def test_no_affordance_for_ineligible_rows(self) -> None:
        cases = {
            "own edit": _edit(456, author=BOB),
            "bot author": _edit(456, author=HELPER_BOT),
            "hidden author": _edit(456, author=None),
            "hidden text": _edit(456, text_hidden=True),
        }
        for label, edit in cases.items():
            with self.subTest(label=label):
                self.assertIsNone(self.listener.on_history_view(self.ctx, edit, None))

    def test_multi_edit_diff_has_no_affordance(self) -> None:
        self.assertIsNone(self.listener.on_diff_view(self.ctx, _edit(456, parent_id=455), _edit(400)))

    def test_anonymous_or_blocked_viewer_sees_nothing(self) -> None:
        for actor in (anonymous_identity(), Identity(id=2, name="Bob", is_partially_blocked=True)):
            with self.subTest(actor=actor):
                ctx = RequestContext(actor=actor, session=self.sessions.flags_for("viewer"))
                self.assertIsNone(self.listener.on_history_view(ctx, _edit(456), None))

    def test_log_line_affordances(self) -> None:
        move = self.listener.on_log_line(self.ctx, _action(789))
        self.assertEqual(move.kind, "log")
        self.assertEqual(move.href, "/special/thanks/Log/789")

        upload = self.listener.on_log_line(self.ctx, _action(790, "upload", associated_edit_id=456))
        self.assertEqual(upload.kind, "rev")
        self.assertEqual(upload.id, 456)

        self.assertIsNone(self.listener.on_log_line(self.ctx, _action(791, "delete")))

    def test_bot_listener_setting(self) -> None:
        listener = ThanksAffordanceListener(send_to_bots=True)

        affordance = listener.on_history_view(self.ctx, _edit(501, author=HELPER_BOT), None)

        self.assertEqual(affordance.recipient, "HelperBot")

    def test_bus_fans_out_to_every_listener(self) -> None:
        bus = ViewEventBus([self.listener, ThanksAffordanceListener(confirmation_required=False)])

        results = bus.history_view(self.ctx, _edit(456))

        self.assertEqual([result.confirmation_required for result in results], [True, False])
        self.assertEqual(bus.log_line(self.ctx, _action(789))[0].id, 789)

    def test_confirmation_path(self) -> None:
        self.assertEqual(confirmation_path(ThanksKey(kind="rev", id=12)), "/special/thanks/12")
        self.assertEqual(confirmation_path(ThanksKey(kind="log", id=12)), "/special/thanks/Log/12")


class StoredAffordanceTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.engine = make_engine()
        Base.metadata.create_all(cls.engine)
        cls.SessionLocal = make_sessionmaker(cls.engine)

    @classmethod
    def tearDownClass(cls) -> None:
        Base.metadata.drop_all(cls.engine)
        cls.engine.dispose()

    def setUp(self) -> None:
        self.db = self.SessionLocal()
        reset_tables(self.db)
        seed_platform(self.db)
        self.settings = make_settings()
        self.bus = build_view_bus(self.settings)
        self.identities = build_identity_service(self.db, self.settings, SlidingWindowRateLimiter(100, 60))
        self.ctx = build_request_context(self.identities, InMemorySessionStore(), BOB_TOKEN)

    def tearDown(self) -> None:
        self.db.close()

    def test_revision_history_and_diff(self) -> None:
        history = revision_affordances(self.db, self.bus, self.ctx, self.identities, self.settings, revision_id=456)
        self.assertEqual([item.recipient for item in history], ["Alice"])

        diff = revision_affordances(
            self.db,
            self.bus,
            self.ctx,
            self.identities,
            self.settings,
            revision_id=456,
            previous_id=455,
            view="diff",
        )
        self.assertEqual(diff[0].id, 456)

    def test_log_line_is_gated_on_its_performer(self) -> None:
        move = log_entry_affordances(self.db, self.bus, self.ctx, self.identities, self.settings, log_id=789)
        self.assertEqual([(item.kind, item.recipient) for item in move], [("log", "Alice")])

        # Upload 790 records Alice's edit but was performed by a bot.
        upload = log_entry_affordances(self.db, self.bus, self.ctx, self.identities, self.settings, log_id=790)
        self.assertEqual(upload, [])

    def test_unknown_rows_raise_not_found(self) -> None:
        with self.assertRaises(ThanksNotFoundError):
            revision_affordances(self.db, self.bus, self.ctx, self.identities, self.settings, revision_id=9999)
        with self.assertRaises(ThanksNotFoundError):
            log_entry_affordances(self.db, self.bus, self.ctx, self.identities, self.settings, log_id=9999)


if __name__ == "__main__":
    unittest.main()
