"""Request-scoped context passed through the thanks pipeline."""

from dataclasses import dataclass

from thanks.dispatch.session import SessionFlags
from thanks.platform.types import Identity


@dataclass(frozen=True, slots=True)
class RequestContext:
    """The acting identity and its session flags for one request."""

    actor: Identity
    session: SessionFlags
