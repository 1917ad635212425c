"""Domain errors raised by services and rendered as JSON by the app."""


class SiftError(Exception):
    """Base exception for all errors surfaced to API callers."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None, status_code=None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self):
        return {"error": self.message}


class Unauthenticated(SiftError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(SiftError):
    status_code = 403
    default_message = "Not authorized"


class NotFound(SiftError):
    status_code = 404
    default_message = "Not found"


class InvalidInput(SiftError):
    status_code = 400
    default_message = "Invalid request"


class InvalidVoteValue(InvalidInput):
    """Raised when a vote is outside the five-point scale."""

    def __init__(self, allowed):
        super().__init__(
            "Invalid vote_value. Must be one of: "
            + ", ".join(str(value) for value in allowed)
        )


class RoundMismatch(InvalidInput):
    default_message = (
        "Applicant round does not belong to this delibs session's recruitment round"
    )


class SessionLocked(SiftError):
    """Raised for any vote mutation against a locked session, whatever the role."""

    status_code = 403
    default_message = "Session is locked. Voting is closed."
