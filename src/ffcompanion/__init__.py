"""Fantasy football companion: league pruning, player resolution and AI analysis."""

__version__ = "0.1.0"
