"""Tests for thanks keys and session flag compatibility."""

import unittest

from thanks.dispatch.keys import ACTION_KIND, EDIT_KIND, ThanksKey, session_flag_keys
from thanks.dispatch.session import InMemorySessionStore, mark_sent


class ThanksKeyTests(unittest.TestCase):
    def test_key_value_is_kind_and_id(self) -> None:
        self.assertEqual(ThanksKey(kind=EDIT_KIND, id=456).value, "rev-456")
        self.assertEqual(str(ThanksKey(kind=ACTION_KIND, id=789)), "log-789")

    def test_edit_keys_include_legacy_flag(self) -> None:
        names = session_flag_keys(ThanksKey(kind=EDIT_KIND, id=456))

        self.assertEqual(names, ("thanks-thanked-rev-456", "thanks-thanked-456"))

    def test_action_keys_have_no_legacy_flag(self) -> None:
        names = session_flag_keys(ThanksKey(kind=ACTION_KIND, id=789))

        self.assertEqual(names, ("thanks-thanked-log-789",))

    def test_edit_and_action_with_same_id_do_not_collide(self) -> None:
        store = InMemorySessionStore()
        flags = store.flags_for("session-a")

        mark_sent(flags, ThanksKey(kind=ACTION_KIND, id=456))

        self.assertTrue(flags.has_thanked(ThanksKey(kind=ACTION_KIND, id=456)))
        self.assertFalse(flags.has_thanked(ThanksKey(kind=EDIT_KIND, id=456)))


class SessionFlagTests(unittest.TestCase):
    def test_legacy_flag_counts_as_thanked(self) -> None:
        store = InMemorySessionStore()
        store.set_flag("session-a", "thanks-thanked-456")

        flags = store.flags_for("session-a")

        self.assertTrue(flags.has_thanked(ThanksKey(kind=EDIT_KIND, id=456)))

    def test_mark_sent_writes_every_known_format(self) -> None:
        store = InMemorySessionStore()
        flags = store.flags_for("session-a")

        mark_sent(flags, ThanksKey(kind=EDIT_KIND, id=456))

        self.assertTrue(store.get_flag("session-a", "thanks-thanked-rev-456"))
        self.assertTrue(store.get_flag("session-a", "thanks-thanked-456"))

    def test_flags_are_scoped_to_one_session(self) -> None:
        store = InMemorySessionStore()
        mark_sent(store.flags_for("session-a"), ThanksKey(kind=EDIT_KIND, id=456))

        self.assertFalse(store.flags_for("session-b").has_thanked(ThanksKey(kind=EDIT_KIND, id=456)))

        store.clear()
        self.assertFalse(store.flags_for("session-a").has_thanked(ThanksKey(kind=EDIT_KIND, id=456)))


    def test_idle_session_flags_expire(self) -> None:
        now = [1000.0]
        store = InMemorySessionStore(60, clock=lambda: now[0])
        mark_sent(store.flags_for("session-a"), ThanksKey(kind=EDIT_KIND, id=456))

        now[0] += 30
        self.assertTrue(store.flags_for("session-a").has_thanked(ThanksKey(kind=EDIT_KIND, id=456)))

        now[0] += 61
        self.assertFalse(store.flags_for("session-a").has_thanked(ThanksKey(kind=EDIT_KIND, id=456)))
        self.assertEqual(store.session_count(), 0)

    def test_sweep_evicts_sessions_that_are_never_touched_again(self) -> None:
        now = [1000.0]
        store = InMemorySessionStore(60, clock=lambda: now[0])
        for session_id in ("session-a", "session-b", "session-c"):
            store.set_flag(session_id, "thanks-thanked-rev-456")
        self.assertEqual(store.session_count(), 3)

        now[0] += 120
        store.set_flag("session-d", "thanks-thanked-rev-456")

        self.assertEqual(store.session_count(), 1)

    def test_end_session_drops_its_flags(self) -> None:
        store = InMemorySessionStore()
        mark_sent(store.flags_for("session-a"), ThanksKey(kind=EDIT_KIND, id=456))
        mark_sent(store.flags_for("session-b"), ThanksKey(kind=EDIT_KIND, id=456))

        store.end_session("session-a")

        self.assertFalse(store.get_flag("session-a", "thanks-thanked-rev-456"))
        self.assertTrue(store.get_flag("session-b", "thanks-thanked-rev-456"))
        self.assertEqual(store.session_count(), 1)

    def test_zero_ttl_keeps_flags(self) -> None:
        now = [1000.0]
        store = InMemorySessionStore(0, clock=lambda: now[0])
        store.set_flag("session-a", "thanks-thanked-rev-456")

        now[0] += 10_000_000

        self.assertTrue(store.get_flag("session-a", "thanks-thanked-rev-456"))

if __name__ == "__main__":
    unittest.main()
