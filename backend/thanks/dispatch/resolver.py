"""Resolve raw edit/action references into contribution events."""

from __future__ import annotations

from collections.abc import Iterable

from thanks.dispatch.errors import (
    InvalidRecipientError,
    ThanksNotFoundError,
    ThanksPermissionError,
    ThanksValidationError,
)
from thanks.dispatch.events import ContributionEvent
from thanks.dispatch.keys import ACTION_KIND, EDIT_KIND
from thanks.platform.interfaces import ActionLogStore, ContentStore
from thanks.platform.types import ActionRecord

# Edit id 1 is what clients send when they could not determine a real id.
INVALID_EDIT_ID = 1


class ReferenceResolver:
    """Maps (kind, id) references to ``ContributionEvent`` values.

    Action references that carry an associated edit are redirected to that
    edit, so an action that records an edit is always thanked as the edit and
    its recipient is the edit's author rather than the action's performer.
    """

    def __init__(
        self,
        content_store: ContentStore,
        action_log: ActionLogStore,
        *,
        log_type_allowlist: Iterable[str] = (),
    ) -> None:
        self._content = content_store
        self._actions = action_log
        self._log_type_allowlist = frozenset(log_type_allowlist)

    def resolve_request(
        self,
        *,
        edit_id: int | None = None,
        action_id: int | None = None,
    ) -> ContributionEvent:
        """Resolve a request carrying exactly one of ``edit_id``/``action_id``."""

        if (edit_id is None) == (action_id is None):
            raise ThanksValidationError("thanks-error-api-params")
        if action_id is not None:
            return self.resolve(ACTION_KIND, action_id)
        return self.resolve(EDIT_KIND, edit_id)

    def resolve(self, kind: str | None, raw_id: int | str | None) -> ContributionEvent:
        """Resolve one reference; ``raw_id`` may be an int or a digit string."""

        if kind is None:
            raise ThanksValidationError("thanks-error-no-id-specified")
        if kind == ACTION_KIND:
            action_id = _coerce_id(raw_id)
            if action_id is None:
                raise ThanksNotFoundError("thanks-error-invalid-log-id")
            return self._resolve_action(action_id)
        if kind == EDIT_KIND:
            edit_id = _coerce_id(raw_id)
            if edit_id is None:
                raise ThanksNotFoundError("thanks-error-invalidrevision")
            return self._resolve_edit(edit_id)
        raise ThanksValidationError("thanks-error-api-params")

    def _resolve_action(self, action_id: int) -> ContributionEvent:
        action = self._load_action(action_id)
        if action.associated_edit_id:
            return self._resolve_edit(action.associated_edit_id)

        if action.performer is None:
            raise InvalidRecipientError()
        if action.target is None:
            raise ThanksNotFoundError("thanks-error-notitle")
        return ContributionEvent(
            kind=ACTION_KIND,
            id=action.id,
            recipient=action.performer,
            target=action.target,
        )

    def _load_action(self, action_id: int) -> ActionRecord:
        action = self._actions.get_action(action_id)
        if action is None:
            raise ThanksNotFoundError("thanks-error-invalid-log-id")
        if action.type not in self._log_type_allowlist:
            raise ThanksPermissionError("thanks-error-invalid-log-type", log_type=action.type)
        if action.is_hidden:
            raise ThanksNotFoundError("thanks-error-log-deleted")
        return action

    def _resolve_edit(self, edit_id: int) -> ContributionEvent:
        edit = self._content.get_edit(edit_id)
        if edit is None or edit.id is None or edit.id == INVALID_EDIT_ID:
            raise ThanksNotFoundError("thanks-error-invalidrevision")
        if edit.text_hidden:
            raise ThanksPermissionError("thanks-error-revdeleted")
        if edit.target is None:
            raise ThanksNotFoundError("thanks-error-notitle")
        if edit.author is None:
            raise InvalidRecipientError()

        return ContributionEvent(
            kind=EDIT_KIND,
            id=edit.id,
            recipient=edit.author,
            target=edit.target,
            is_creation=not self._content.has_predecessor(edit),
        )


def _coerce_id(raw_id: int | str | None) -> int | None:
    if isinstance(raw_id, bool):
        return None
    if isinstance(raw_id, int):
        return raw_id if raw_id > 0 else None
    if isinstance(raw_id, str):
        cleaned = raw_id.strip()
        if cleaned.isdigit() and int(cleaned) > 0:
            return int(cleaned)
    return None
