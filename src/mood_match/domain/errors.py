"""Errors raised by the matchmaking core and admission."""


class MatchmakingError(Exception):
    """Base class for rejected matchmaking requests."""

    code = "matchmaking_error"


class UnknownHandle(MatchmakingError):
    """The handle is not connected."""

    code = "unknown_handle"


class NotAdmitted(MatchmakingError):
    """The handle has not completed registration."""

    code = "join_error"


class AlreadyInSession(MatchmakingError):
    """The handle already belongs to an active room."""

    code = "already_in_session"


class DuplicateSessionId(MatchmakingError):
    """A generated room id collides with a live room."""

    code = "duplicate_session_id"


class AdmissionError(Exception):
    """Registration was rejected."""

    def __init__(self, code: str, message: str, details: dict | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
