"""In-memory implementation of the item repository port."""

import itertools
from typing import Dict, List, Optional

from ...domain.models.claim import Claim
from ...domain.models.found_item import FoundItemRecord, FoundItemStatus
from ...domain.models.lost_item import LostItemReport, LostItemSecrets
from ...domain.ports.item_repository import ItemRepository


class InMemoryItemRepository(ItemRepository):
    """Dictionary-backed repository for development and tests.

    Ids are auto-incrementing integers per entity, starting at 1.
    """

    def __init__(self, provider_name: str = "memory"):
        """Initialize the repository."""
        self._name = provider_name
        self._lost_items: Dict[int, LostItemReport] = {}
        self._found_items: Dict[int, FoundItemRecord] = {}
        self._claims: Dict[int, Claim] = {}
        self._lost_ids = itertools.count(1)
        self._found_ids = itertools.count(1)
        self._claim_ids = itertools.count(1)
        self._initialized = False

    async def initialize(self) -> None:
        """Nothing to connect to."""
        self._initialized = True

    async def shutdown(self) -> None:
        """Drop all stored data."""
        self._lost_items.clear()
        self._found_items.clear()
        self._claims.clear()
        self._initialized = False

    async def ping(self) -> bool:
        return True

    async def add_lost_item(self, report: LostItemReport) -> LostItemReport:
        stored = report.model_copy(update={"id": next(self._lost_ids)})
        self._lost_items[stored.id] = stored
        return stored

    async def get_lost_item(self, lost_item_id: int) -> Optional[LostItemReport]:
        return self._lost_items.get(lost_item_id)

    async def get_lost_item_secrets(self, lost_item_id: int) -> Optional[LostItemSecrets]:
        report = self._lost_items.get(lost_item_id)
        return report.secrets if report else None

    async def list_lost_items(self, reporter_id: Optional[int] = None) -> List[LostItemReport]:
        reports = [
            report for report in self._lost_items.values()
            if reporter_id is None or report.reporter_id == reporter_id
        ]
        # Newest first; later ids win ties on identical timestamps
        reports.sort(key=lambda report: (report.created_at, report.id), reverse=True)
        # Listings never carry the secrets
        return [
            report.model_copy(update={"secret_info_1": None, "secret_info_2": None})
            for report in reports
        ]

    async def add_found_item(self, record: FoundItemRecord) -> FoundItemRecord:
        stored = record.model_copy(update={"id": next(self._found_ids)})
        self._found_items[stored.id] = stored
        return stored

    async def list_available_found_items(self) -> List[FoundItemRecord]:
        return [
            record for record in self._found_items.values()
            if record.status == FoundItemStatus.AVAILABLE
        ]

    async def add_claim(self, claim: Claim) -> Claim:
        stored = claim.model_copy(update={"id": next(self._claim_ids)})
        self._claims[stored.id] = stored
        return stored

    async def get_claim(self, claim_id: int) -> Optional[Claim]:
        """Fetch a stored claim by id."""
        return self._claims.get(claim_id)

    @property
    def provider_name(self) -> str:
        """Get the repository name."""
        return self._name

    @property
    def is_available(self) -> bool:
        """Check if the repository is ready."""
        return self._initialized
