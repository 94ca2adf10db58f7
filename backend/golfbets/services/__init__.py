"""Internal application services (pure helpers, no I/O)."""

from .validation import ValidationError, validate_round_snapshot
from .rounds import RoundResults, RoundSnapshot, compute_game, compute_round
from .live_money import calculate_live_money, format_money
from .settlement import calculate_settlement, format_settlement_text, get_total_winnings

__all__ = [
    "validate_round_snapshot",
    "ValidationError",
    "RoundResults",
    "RoundSnapshot",
    "compute_game",
    "compute_round",
    "calculate_live_money",
    "format_money",
    "calculate_settlement",
    "format_settlement_text",
    "get_total_winnings",
]
