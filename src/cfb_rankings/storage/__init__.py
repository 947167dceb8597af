"""Persistence for user-applied toggles."""

from cfb_rankings.storage.toggles import ToggleStore

__all__ = ["ToggleStore"]
