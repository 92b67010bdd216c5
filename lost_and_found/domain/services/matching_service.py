"""Scoring and ranking of found items against a lost item report."""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple

from ..errors import InvalidArgumentError
from ..models.found_item import FoundItemRecord, FoundItemStatus
from ..models.lost_item import LostItemReport
from ..models.match_result import MatchResult

logger = logging.getLogger(__name__)

TYPE_WEIGHT = 50
COLOR_WEIGHT = 20
LOCATION_WEIGHT = 20
TIME_WEIGHT = 10

MATCH_THRESHOLD = 60


def normalize(value: Optional[str]) -> str:
    """Normalize free text for comparison: trimmed and case-insensitive."""
    return (value or "").strip().lower()


def _as_instant(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so any two values compare as instants."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _same(left: Optional[str], right: Optional[str]) -> bool:
    left, right = normalize(left), normalize(right)
    return bool(left and right and left == right)


def _location_overlaps(lost_location: Optional[str], found_location: Optional[str]) -> bool:
    lost, found = normalize(lost_location), normalize(found_location)
    if not lost or not found:
        return False
    return lost in found or found in lost


def _within_window(lost_item: LostItemReport, found_item: FoundItemRecord) -> bool:
    # Both bounds are required; a one-sided window never scores.
    if lost_item.lost_time_from is None or lost_item.lost_time_to is None:
        return False
    if found_item.found_time is None:
        return False

    found_time = _as_instant(found_item.found_time)
    return _as_instant(lost_item.lost_time_from) <= found_time <= _as_instant(lost_item.lost_time_to)


def score_match(lost_item: LostItemReport, found_item: FoundItemRecord) -> Tuple[int, List[str]]:
    """Score a single found item against a lost item report.

    Args:
        lost_item: The lost item report being matched
        found_item: Candidate found item

    Returns:
        Tuple of the additive score (0-100) and the names of the factors
        that contributed to it
    """
    score = 0
    factors = []

    if _same(lost_item.item_type, found_item.item_type):
        score += TYPE_WEIGHT
        factors.append("type")

    if _same(lost_item.color, found_item.color):
        score += COLOR_WEIGHT
        factors.append("color")

    if _location_overlaps(lost_item.lost_location, found_item.found_location):
        score += LOCATION_WEIGHT
        factors.append("location")

    if _within_window(lost_item, found_item):
        score += TIME_WEIGHT
        factors.append("time")

    return score, factors


def find_matches(
    lost_item: Optional[LostItemReport],
    found_items: Iterable[FoundItemRecord],
) -> List[MatchResult]:
    """Rank available found items against a lost item report.

    Items that are not available are skipped regardless of how well they
    would score. Only candidates scoring at least ``MATCH_THRESHOLD`` are
    returned, highest score first; equal scores keep their input order.

    Args:
        lost_item: The resolved lost item report
        found_items: Found item records, normally already filtered to available

    Returns:
        Ranked match candidates

    Raises:
        InvalidArgumentError: If no lost item report is supplied
    """
    if lost_item is None:
        raise InvalidArgumentError("find_matches requires a resolved lost item report")

    matches = []
    skipped = 0

    for found_item in found_items:
        if found_item.status != FoundItemStatus.AVAILABLE:
            skipped += 1
            continue

        score, factors = score_match(lost_item, found_item)
        if score >= MATCH_THRESHOLD:
            matches.append(MatchResult(found_item=found_item, score=score, matched_factors=tuple(factors)))

    if skipped:
        logger.debug(f"⏭️ Skipped {skipped} found items that are no longer available")

    # sorted() is stable, also with reverse=True
    return sorted(matches, key=lambda match: match.score, reverse=True)
