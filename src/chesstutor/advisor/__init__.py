"""Hint advisor APIs."""

from chesstutor.advisor.models import Hint, HintKind, RecommendedMove
from chesstutor.advisor.service import HintAdvisor, generate_hint

__all__ = [
    "Hint",
    "HintAdvisor",
    "HintKind",
    "RecommendedMove",
    "generate_hint",
]
