"""Domain model for match candidates."""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .found_item import FoundItemRecord


@dataclass(frozen=True)
class MatchResult:
    """A found item paired with its relevance score for one lost item report.

    Derived and never persisted; recomputed on every query.
    """

    found_item: FoundItemRecord
    score: int
    matched_factors: Tuple[str, ...] = ()

    def __post_init__(self):
        """Validate the score range."""
        if not 0 <= self.score <= 100:
            raise ValueError("Score must be between 0 and 100")

    def to_dict(self) -> Dict[str, Any]:
        """Convert MatchResult to dictionary format for API responses."""
        return {
            'found_item': self.found_item.to_dict(),
            'score': self.score,
            'matched_factors': list(self.matched_factors),
        }
