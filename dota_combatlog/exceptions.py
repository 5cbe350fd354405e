"""Errors raised by the match service."""


class CombatLogError(Exception):
    """Base class for combat log analyzer errors."""


class ValidationError(CombatLogError):
    """The submitted combat log is blank or empty."""


class NotFoundError(CombatLogError):
    """No match is stored under the requested identifier."""

    def __init__(self, match_id: str):
        super().__init__(f"Match not found with id {match_id}")
        self.match_id = match_id
