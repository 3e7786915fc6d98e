"""Error taxonomy for thanks requests.

Every error carries a stable machine-readable code, a rendered message and the
HTTP status it maps to. ``TransmissionError`` lives with the notification
channels because it is absorbed by the dispatcher and never reaches callers.
"""

from __future__ import annotations

MESSAGES: dict[str, str] = {
    "thanks-error-api-params": "Exactly one of edit_id or action_id must be provided.",
    "thanks-error-invalid-request": "The request is malformed: {detail}",
    "thanks-error-no-id-specified": "You need to specify an edit or log entry ID to send thanks.",
    "thanks-error-invalidrevision": "Edit ID is not valid.",
    "thanks-error-revdeleted": "Unable to send thanks because the edit has been deleted.",
    "thanks-error-notitle": "The page for this contribution could not be found.",
    "thanks-error-invalid-log-id": "Log entry not found.",
    "thanks-error-invalid-log-type": "Log type '{log_type}' is not in the list of permitted log types.",
    "thanks-error-log-deleted": "The requested log entry has been deleted and thanks cannot be given for it.",
    "thanks-error-notloggedin": "Anonymous users cannot send thanks. Please log in.",
    "thanks-error-ratelimited": "{actor} has exceeded the rate limit. Please wait some time and try again.",
    "thanks-error-blocked": "{actor} is blocked and cannot send thanks.",
    "thanks-error-invalidrecipient-self": "You cannot thank yourself.",
    "thanks-error-invalidrecipient": "No valid recipient found.",
    "thanks-error-invalidrecipient-bot": "Bots cannot be thanked.",
}


class ThanksError(Exception):
    """Base class for terminal thanks request failures."""

    status_code = 400
    default_code = "thanks-error"

    def __init__(self, code: str | None = None, **params: object) -> None:
        self.code = code or self.default_code
        self.params = params
        template = MESSAGES.get(self.code, self.code)
        self.message = template.format(**params) if params else template
        super().__init__(self.message)

    def to_payload(self) -> dict[str, str]:
        return {"error_code": self.code, "message": self.message}


class ThanksValidationError(ThanksError):
    """Malformed or ambiguous request shape."""

    default_code = "thanks-error-api-params"


class ThanksNotFoundError(ThanksError):
    """Referenced edit or action does not exist."""

    status_code = 404


class ThanksPermissionError(ThanksError):
    """Content or action visibility forbids thanking it."""

    status_code = 403


class ThanksAuthorizationError(ThanksError):
    """Actor or recipient is not eligible."""


class NotLoggedInError(ThanksAuthorizationError):
    status_code = 401
    default_code = "thanks-error-notloggedin"


class RateLimitedError(ThanksAuthorizationError):
    status_code = 429
    default_code = "thanks-error-ratelimited"


class BlockedError(ThanksAuthorizationError):
    status_code = 403
    default_code = "thanks-error-blocked"


class SelfThanksError(ThanksAuthorizationError):
    default_code = "thanks-error-invalidrecipient-self"


class InvalidRecipientError(ThanksAuthorizationError):
    default_code = "thanks-error-invalidrecipient"


class BotRecipientError(ThanksAuthorizationError):
    default_code = "thanks-error-invalidrecipient-bot"
