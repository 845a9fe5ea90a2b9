"""Database model exports."""

from .judge import Judge
from .score import Score
from .team import Team

__all__ = [
    "Judge",
    "Score",
    "Team",
]
