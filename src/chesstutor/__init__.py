"""Chess rules engine with a heuristic hint advisor."""

__version__ = "0.1.0"
