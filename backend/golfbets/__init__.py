"""Golf side-game wagering engine."""
