"""Resolved contribution events."""

from dataclasses import dataclass

from thanks.dispatch.keys import EDIT_KIND, EventKind, ThanksKey
from thanks.platform.types import Identity, TargetRef


@dataclass(frozen=True, slots=True)
class ContributionEvent:
    """A thankable edit or action with its canonical recipient and target."""

    kind: EventKind
    id: int
    recipient: Identity
    target: TargetRef
    is_creation: bool = False

    @property
    def thanks_key(self) -> ThanksKey:
        return ThanksKey(kind=self.kind, id=self.id)

    @property
    def subtype(self) -> str:
        """Notification subtype: ``creation``, ``edit`` or ``log``."""

        if self.kind == EDIT_KIND:
            return "creation" if self.is_creation else "edit"
        return "log"
