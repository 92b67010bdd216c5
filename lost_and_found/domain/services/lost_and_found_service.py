"""Service coordinating storage with matching and claim adjudication."""

import logging
from datetime import datetime, timezone
from typing import List

from ..errors import NotFoundError
from ..models.claim import Claim, ClaimStatus, ClaimSubmission
from ..models.found_item import FoundItemRecord
from ..models.lost_item import LostItemReport
from ..models.match_result import MatchResult
from ..ports.item_repository import ItemRepository
from .claim_service import adjudicate_claim
from .matching_service import find_matches

logger = logging.getLogger(__name__)

_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def _found_time_key(item: FoundItemRecord) -> datetime:
    if item.found_time is None:
        return _EARLIEST
    if item.found_time.tzinfo is None:
        return item.found_time.replace(tzinfo=timezone.utc)
    return item.found_time


class LostAndFoundService:
    """Domain service for lost item reports, found items and claims.

    Fetches what the core needs through the repository port, raises
    NotFoundError for missing references, and hands the resolved data to
    the pure matching and adjudication functions.
    """

    def __init__(self, repository: ItemRepository):
        """Initialize service with a repository.

        Args:
            repository: Item repository port implementation
        """
        self._repository = repository

    async def report_lost_item(self, report: LostItemReport) -> LostItemReport:
        """Store a new lost item report."""
        stored = await self._repository.add_lost_item(report)
        logger.info(f"📝 Lost item reported: id={stored.id}, type={stored.item_type!r}")
        return stored

    async def list_lost_items(self) -> List[LostItemReport]:
        """List all lost item reports, newest first."""
        return await self._repository.list_lost_items()

    async def list_lost_items_for_user(self, user_id: int) -> List[LostItemReport]:
        """List the lost item reports filed by one student, newest first."""
        return await self._repository.list_lost_items(reporter_id=user_id)

    async def log_found_item(self, record: FoundItemRecord) -> FoundItemRecord:
        """Store a found item logged by staff."""
        stored = await self._repository.add_found_item(record)
        logger.info(f"📦 Found item logged: id={stored.id}, type={stored.item_type!r}")
        return stored

    async def list_available_found_items(self) -> List[FoundItemRecord]:
        """List available found items, most recently found first."""
        items = await self._repository.list_available_found_items()
        return sorted(items, key=_found_time_key, reverse=True)

    async def find_matches_for(self, lost_item_id: int) -> List[MatchResult]:
        """Rank available found items for a lost item report.

        Args:
            lost_item_id: Id of the lost item report

        Returns:
            Ranked match candidates

        Raises:
            NotFoundError: If the lost item report does not exist
        """
        logger.info(f"🔍 Matching for lost_item_id={lost_item_id}")

        lost_item = await self._repository.get_lost_item(lost_item_id)
        if lost_item is None:
            raise NotFoundError("Lost item", lost_item_id)

        found_items = await self._repository.list_available_found_items()
        matches = find_matches(lost_item, found_items)

        logger.info(f"✅ Matches found: {len(matches)} of {len(found_items)} available items")
        return matches

    async def submit_claim(self, submission: ClaimSubmission) -> Claim:
        """Adjudicate and persist a claim.

        Args:
            submission: Claim payload with the submitted verification inputs

        Returns:
            The stored claim with its status

        Raises:
            NotFoundError: If the referenced lost item report does not exist
        """
        secrets = await self._repository.get_lost_item_secrets(submission.lost_item_id)
        if secrets is None:
            raise NotFoundError("Lost item", submission.lost_item_id)

        status = adjudicate_claim(secrets, submission.inputs)
        claim = await self._repository.add_claim(Claim.from_submission(submission, status))

        if status == ClaimStatus.VERIFIED:
            logger.info(f"✅ Claim {claim.id} auto-verified for found item {claim.found_item_id}")
        else:
            logger.info(f"🕵️ Claim {claim.id} pending manual review for found item {claim.found_item_id}")

        return claim

    @property
    def repository_name(self) -> str:
        """Get the backing repository name."""
        return self._repository.provider_name

    async def check_storage(self) -> bool:
        """Check that the backing store answers queries."""
        return await self._repository.ping()
