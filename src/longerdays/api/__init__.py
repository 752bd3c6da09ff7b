"""API components for the daylight service."""

from .rest import DaylightRestAPI

__all__ = [
    "DaylightRestAPI",
]
