"""Errors raised while pricing or registering a relocation order"""
from typing import Any, Dict, Optional


class EstimateError(Exception):

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        return self.message


class LookupNotFound(EstimateError):
    """A catalog record required by the request does not exist."""
    pass


class ConfigurationError(EstimateError):
    """The catalog itself is malformed (e.g. the truck table)."""
    pass


class InvalidInput(EstimateError):
    pass
