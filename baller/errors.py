# baller/errors.py
from typing import Optional


class BallerError(RuntimeError):
    """Base class for every error the stats pipeline raises on purpose."""


class ConfigurationError(BallerError):
    """Required settings are missing or malformed."""


class NetworkError(BallerError):
    """Transport failure or a non-200 response from the stats API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(BallerError):
    """Response body is not JSON, or not the shape we expect."""


class AssociationError(BallerError):
    """A season-average record points at a player we never fetched."""

    def __init__(self, player_id: int):
        super().__init__(f"No cached player matches player_id={player_id}")
        self.player_id = player_id


class PaginationLimitError(BallerError):
    """The players endpoint kept reporting a next page past our bound."""
