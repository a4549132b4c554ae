"""Headless soak testing for the gridsnake engine."""

from autoplay.policies import POLICIES
from autoplay.soak import EpisodeResult, InvariantViolation, SoakDriver, check_board, check_tick

__all__ = [
    "POLICIES",
    "EpisodeResult",
    "InvariantViolation",
    "SoakDriver",
    "check_board",
    "check_tick",
]
