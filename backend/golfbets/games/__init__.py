"""Calculators for the golf side games."""

from . import best_ball, match_play, nassau, skins, stableford, wolf

__all__ = [
    "best_ball",
    "match_play",
    "nassau",
    "skins",
    "stableford",
    "wolf",
]
